"""Domain error taxonomy."""

from __future__ import annotations

from collections.abc import Mapping


class RecordNotFoundError(LookupError):
    """Raised when a record id does not resolve in its collection."""

    def __init__(self, kind: str, record_id: str) -> None:
        super().__init__(f"{kind} not found: {record_id}")
        self.kind = kind
        self.record_id = record_id


class ValidationError(ValueError):
    """Carries every field problem found in one submission.

    ``errors`` maps a field name to its message so callers can report all of them
    together instead of one at a time.
    """

    subject = "record"

    def __init__(self, errors: Mapping[str, str]) -> None:
        self.errors: dict[str, str] = dict(errors)
        details = "; ".join(f"{name}: {message}" for name, message in self.errors.items())
        super().__init__(f"Invalid {self.subject}: {details}")


class EntityValidationError(ValidationError):
    subject = "entity"


class WasteTypeValidationError(ValidationError):
    subject = "waste type"


class OrderTypeValidationError(ValidationError):
    subject = "order type"


class AgreementValidationError(ValidationError):
    subject = "agreement"


class OrderValidationError(ValidationError):
    subject = "order"


class WasteStreamError(ValueError):
    """Raised when a waste stream edit would break its destination invariants."""


class DuplicateWasteTypeError(WasteStreamError):
    """Raised when an agreement already has a stream for the waste type."""
