"""Fields and tags that configuration can attach to every event."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .m import M
from .merge import merge_fields, merge_fields_deep
from .tags import add_tags


@dataclass
class EventMetadata:
    """Custom fields and tags added to events.

    ``fields`` are merged under the event's ``fields`` key unless
    ``fields_under_root`` is set, in which case they land at the top level.
    """

    fields: M = field(default_factory=M)
    fields_under_root: bool = False
    tags: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, config: dict[str, Any]) -> EventMetadata:
        """Build metadata from a ``fields``/``fields_under_root``/``tags`` config section."""
        fields = config.get("fields") or {}
        tags = config.get("tags") or []
        if not isinstance(fields, dict):
            msg = f"fields must be a map, got {type(fields).__name__}"
            raise TypeError(msg)
        if isinstance(tags, str) or not all(isinstance(tag, str) for tag in tags):
            msg = "tags must be a list of strings"
            raise TypeError(msg)
        return cls(
            fields=M(fields),
            fields_under_root=bool(config.get("fields_under_root", False)),
            tags=list(tags),
        )

    def apply(self, event: dict[str, Any], *, deep: bool = False) -> None:
        """Merge the fields and append the tags to ``event`` in place."""
        if deep:
            merge_fields_deep(event, self.fields.clone(), under_root=self.fields_under_root)
        else:
            merge_fields(event, self.fields.clone(), under_root=self.fields_under_root)
        add_tags(event, self.tags)
