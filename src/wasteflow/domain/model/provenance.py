"""Per-field provenance for values the resolution engine may fill in."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class FieldSource(StrEnum):
    AUTO = "auto"
    MANUAL = "manual"


@dataclass(frozen=True, slots=True)
class TrackedValue:
    """A field value together with who set it.

    Auto values may be replaced by a later resolution run; manual values are only
    changed by another manual edit.
    """

    value: str | None = None
    source: FieldSource = FieldSource.AUTO

    @property
    def is_manual(self) -> bool:
        return self.source == FieldSource.MANUAL

    @property
    def is_set(self) -> bool:
        return bool(self.value)

    @classmethod
    def manual(cls, value: str | None) -> TrackedValue:
        return cls(value=value, source=FieldSource.MANUAL)

    @classmethod
    def auto(cls, value: str | None) -> TrackedValue:
        return cls(value=value, source=FieldSource.AUTO)

    def propose(self, value: str | None) -> TrackedValue:
        """Return the value a resolution run leaves behind for this field."""

        if self.is_manual:
            return self
        return TrackedValue.auto(value)
