"""Form-level rules for writing agreements and their waste streams."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Final

from wasteflow.domain.errors import AgreementValidationError, WasteStreamError
from wasteflow.domain.model import (
    DEFAULT_REQUIRED_MESSAGE,
    DUPLICATE_WASTE_TYPE_MESSAGE,
    LAST_DESTINATION_MESSAGE,
    Destination,
    EntityRole,
    WasteStream,
    new_id,
)

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from wasteflow.domain.agreements import AgreementDraft
    from wasteflow.domain.model import Entity, ProcessingMethod

INCOMPLETE_ROW_MESSAGE: Final[str] = "Every receiver row needs a receiver and a processing method."


@dataclass(slots=True, kw_only=True)
class DestinationRow:
    """One editable receiver row of a waste stream being written."""

    id: str = field(default_factory=lambda: new_id("dest"))
    receiver_id: str | None = None
    processing_method: ProcessingMethod | None = None
    asn: str | None = None

    @property
    def is_complete(self) -> bool:
        return bool(self.receiver_id) and self.processing_method is not None


class WasteStreamBuilder:
    """Collects destination rows until they form a valid ``WasteStream``.

    The builder always holds at least one row. Removing the default row promotes the
    first remaining row.
    """

    def __init__(self, waste_type_id: str | None = None) -> None:
        self.waste_type_id = waste_type_id
        first = DestinationRow()
        self._rows: list[DestinationRow] = [first]
        self._default_row_id: str | None = None

    @classmethod
    def from_stream(cls, stream: WasteStream) -> WasteStreamBuilder:
        builder = cls(stream.waste_type_id)
        builder._rows = [
            DestinationRow(
                id=d.id,
                receiver_id=d.receiver_id,
                processing_method=d.processing_method,
                asn=d.asn,
            )
            for d in stream.destinations
        ]
        builder._default_row_id = stream.default_destination_id
        return builder

    @property
    def rows(self) -> tuple[DestinationRow, ...]:
        return tuple(self._rows)

    @property
    def default_row_id(self) -> str | None:
        if self._default_row_id is None and len(self._rows) == 1:
            return self._rows[0].id
        return self._default_row_id

    def row(self, row_id: str) -> DestinationRow:
        for row in self._rows:
            if row.id == row_id:
                return row
        raise WasteStreamError(f"Unknown receiver row {row_id}")

    def add_row(
        self,
        *,
        receiver_id: str | None = None,
        processing_method: ProcessingMethod | None = None,
        asn: str | None = None,
    ) -> DestinationRow:
        row = DestinationRow(receiver_id=receiver_id, processing_method=processing_method, asn=asn)
        self._rows.append(row)
        return row

    def remove_row(self, row_id: str) -> None:
        row = self.row(row_id)
        if len(self._rows) == 1:
            raise WasteStreamError(LAST_DESTINATION_MESSAGE)
        was_default = self.default_row_id == row_id
        self._rows.remove(row)
        if was_default:
            self._default_row_id = self._rows[0].id

    def mark_default(self, row_id: str) -> None:
        self.row(row_id)
        self._default_row_id = row_id

    def validation_errors(self) -> dict[str, str]:
        errors: dict[str, str] = {}
        if not self.waste_type_id:
            errors["waste_type"] = "Waste Type is required"
        if not all(row.is_complete for row in self._rows):
            errors["destinations"] = INCOMPLETE_ROW_MESSAGE
        if self.default_row_id is None:
            errors["default_destination"] = DEFAULT_REQUIRED_MESSAGE
        return errors

    def build(self) -> WasteStream:
        errors = self.validation_errors()
        if errors or not self.waste_type_id:
            raise WasteStreamError(" ".join(errors.values()))
        destinations: list[Destination] = []
        for row in self._rows:
            if not row.receiver_id or row.processing_method is None:
                raise WasteStreamError(INCOMPLETE_ROW_MESSAGE)
            destinations.append(
                Destination(
                    id=row.id,
                    receiver_id=row.receiver_id,
                    processing_method=row.processing_method,
                    asn=(row.asn or "").strip() or None,
                )
            )
        return WasteStream.create(
            self.waste_type_id,
            destinations,
            default_destination_id=self.default_row_id,
        )


def add_stream(streams: Sequence[WasteStream], stream: WasteStream) -> tuple[WasteStream, ...]:
    """Append ``stream`` to an agreement's stream list being written."""

    if any(s.waste_type_id == stream.waste_type_id for s in streams):
        raise WasteStreamError(DUPLICATE_WASTE_TYPE_MESSAGE)
    return (*streams, stream)


def agreement_errors(
    draft: AgreementDraft,
    *,
    entities: Mapping[str, Entity],
) -> dict[str, str]:
    """Collect every header and party problem of an agreement draft."""

    errors: dict[str, str] = {}
    disposer = entities.get(draft.disposer_id) if draft.disposer_id else None
    if not draft.disposer_id:
        errors["disposer"] = "Disposer is required"
    elif disposer is None or not disposer.has_role(EntityRole.DISPOSER):
        errors["disposer"] = "Disposer must be an entity with the Disposer role"
    if draft.valid_from is None:
        errors["valid_from"] = "Valid From is required"
    elif draft.valid_until is not None and draft.valid_until < draft.valid_from:
        errors["valid_until"] = "Valid Until cannot be before Valid From"
    if not draft.reporting_system:
        errors["reporting_system"] = "Reporting System is required"
    _check_party(errors, "sender", draft.sender_id, EntityRole.SENDER, entities)
    _check_party(errors, "transporter", draft.transporter_id, EntityRole.TRANSPORTER, entities)
    if (
        draft.service_point_id
        and disposer is not None
        and not disposer.owns_service_point(draft.service_point_id)
    ):
        errors["service_point"] = "Service point does not belong to the selected disposer"
    if not draft.waste_streams:
        errors["waste_streams"] = "Please add at least one waste stream"
    else:
        waste_type_ids = [s.waste_type_id for s in draft.waste_streams]
        if len(waste_type_ids) != len(set(waste_type_ids)):
            errors["waste_streams"] = DUPLICATE_WASTE_TYPE_MESSAGE
        for stream in draft.waste_streams:
            for destination in stream.destinations:
                receiver = entities.get(destination.receiver_id)
                if receiver is None or not receiver.has_role(EntityRole.RECEIVER):
                    errors["receiver"] = (
                        f"Receiver {destination.receiver_id} is not an entity with the "
                        "Receiver role"
                    )
    return errors


def validate_agreement(draft: AgreementDraft, *, entities: Mapping[str, Entity]) -> None:
    errors = agreement_errors(draft, entities=entities)
    if errors:
        raise AgreementValidationError(errors)


def _check_party(
    errors: dict[str, str],
    name: str,
    entity_id: str,
    role: EntityRole,
    entities: Mapping[str, Entity],
) -> None:
    label = name.capitalize()
    if not entity_id:
        errors[name] = f"{label} is required"
        return
    entity = entities.get(entity_id)
    if entity is None or not entity.has_role(role):
        errors[name] = f"{label} must be an entity with the {role} role"
