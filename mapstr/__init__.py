"""mapstr - nested string-keyed maps with dotted-path access"""

from ._version import version as __version__
from .errors import (
    AlterKeyError,
    InvalidKeyError,
    KeyCollisionError,
    KeyNotFoundError,
    MapStrError,
    NotMapTypeError,
    TagsTypeError,
)
from .logobject import DictObjectEncoder, MapStrLoggerAdapter, MaskedMap
from .mapping import (
    FIELDS_KEY,
    TAGS_KEY,
    EventMetadata,
    M,
    TraversalMode,
    add_tags,
    add_tags_with_key,
    map_find,
    merge_fields,
    merge_fields_deep,
    traverse,
    union,
)
from .redaction import LoggingMask, MaskSettings
from .values import ValueKind, kind_of


__all__ = [
    "FIELDS_KEY",
    "TAGS_KEY",
    "AlterKeyError",
    "DictObjectEncoder",
    "EventMetadata",
    "InvalidKeyError",
    "KeyCollisionError",
    "KeyNotFoundError",
    "LoggingMask",
    "M",
    "MapStrError",
    "MapStrLoggerAdapter",
    "MaskSettings",
    "MaskedMap",
    "NotMapTypeError",
    "TagsTypeError",
    "TraversalMode",
    "ValueKind",
    "__version__",
    "add_tags",
    "add_tags_with_key",
    "kind_of",
    "map_find",
    "merge_fields",
    "merge_fields_deep",
    "traverse",
    "union",
]
