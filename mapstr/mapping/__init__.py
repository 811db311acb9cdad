"""Nested map type, path resolution and merge utilities."""

from .event import EventMetadata
from .find import FindResult, map_find
from .m import AlterFunc, M, deep_update_map, union
from .merge import FIELDS_KEY, merge_fields, merge_fields_deep
from .tags import TAGS_KEY, add_tags, add_tags_with_key
from .traverse import TraversalMode, TraversalVisitor, traverse


__all__ = [
    "FIELDS_KEY",
    "TAGS_KEY",
    "AlterFunc",
    "EventMetadata",
    "FindResult",
    "M",
    "TraversalMode",
    "TraversalVisitor",
    "add_tags",
    "add_tags_with_key",
    "deep_update_map",
    "map_find",
    "merge_fields",
    "merge_fields_deep",
    "traverse",
    "union",
]
