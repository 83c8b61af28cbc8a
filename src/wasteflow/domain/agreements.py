"""Agreement store."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING, Any, Final

from wasteflow.domain.errors import RecordNotFoundError
from wasteflow.domain.model import Agreement, AgreementStatus, new_id, utcnow

if TYPE_CHECKING:
    from datetime import date, datetime

    from wasteflow.domain.model import ReportingSystem, WasteStream
    from wasteflow.domain.ports import AgreementRepository

log = getLogger(__name__)

UPDATABLE_FIELDS: Final[frozenset[str]] = frozenset(
    {
        "disposer_id",
        "service_point_id",
        "reporting_system",
        "valid_from",
        "valid_until",
        "sender_id",
        "transporter_id",
        "status",
        "waste_streams",
    }
)


@dataclass(frozen=True, slots=True, kw_only=True)
class AgreementDraft:
    disposer_id: str
    reporting_system: ReportingSystem
    valid_from: date | None
    sender_id: str
    transporter_id: str
    service_point_id: str | None = None
    valid_until: date | None = None
    waste_streams: tuple[WasteStream, ...] = ()


class AgreementStore:
    """Persists agreements as given.

    Callers validate drafts first (see ``wasteflow.domain.authoring``); the store only
    stamps identity, status and creation time.
    """

    def __init__(
        self,
        agreements: AgreementRepository,
        *,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._agreements = agreements
        self._clock = clock

    def list(self) -> tuple[Agreement, ...]:
        return self._agreements.all()

    def get(self, agreement_id: str) -> Agreement | None:
        return self._agreements.get(agreement_id)

    def require(self, agreement_id: str) -> Agreement:
        agreement = self._agreements.get(agreement_id)
        if agreement is None:
            raise RecordNotFoundError("Agreement", agreement_id)
        return agreement

    def for_disposer(self, disposer_id: str) -> tuple[Agreement, ...]:
        return tuple(a for a in self._agreements.all() if a.disposer_id == disposer_id)

    def grouped_by_disposer(self) -> dict[str, tuple[Agreement, ...]]:
        groups: dict[str, list[Agreement]] = {}
        for agreement in self._agreements.all():
            groups.setdefault(agreement.disposer_id, []).append(agreement)
        return {disposer_id: tuple(items) for disposer_id, items in groups.items()}

    def create(self, draft: AgreementDraft) -> Agreement:
        if draft.valid_from is None:
            raise ValueError("An agreement needs a valid-from date")
        agreement = Agreement(
            id=new_id(Agreement.ID_PREFIX),
            disposer_id=draft.disposer_id,
            service_point_id=draft.service_point_id or None,
            reporting_system=draft.reporting_system,
            valid_from=draft.valid_from,
            valid_until=draft.valid_until,
            sender_id=draft.sender_id,
            transporter_id=draft.transporter_id,
            status=AgreementStatus.ACTIVE,
            created_at=self._clock(),
            _waste_streams=list(draft.waste_streams),
        )
        self._agreements.add(agreement)
        log.info(
            "Created agreement %s for disposer %s (%s, %d waste streams)",
            agreement.id,
            agreement.disposer_id,
            agreement.reporting_system,
            len(agreement.waste_streams),
        )
        return agreement

    def update(self, agreement_id: str, **changes: Any) -> Agreement:
        """Apply a partial update; unknown field names are rejected."""

        unknown = set(changes) - UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Cannot update agreement fields: {', '.join(sorted(unknown))}")
        agreement = self.require(agreement_id)
        streams = changes.pop("waste_streams", None)
        if streams is not None:
            agreement.replace_waste_streams(streams)
        for name, value in changes.items():
            setattr(agreement, name, value)
        if "service_point_id" in changes:
            agreement.service_point_id = agreement.service_point_id or None
        self._agreements.save(agreement)
        return agreement

    def set_status(self, agreement_id: str, status: AgreementStatus) -> Agreement:
        agreement = self.require(agreement_id)
        agreement.status = status
        self._agreements.save(agreement)
        log.info("Agreement %s is now %s", agreement_id, status)
        return agreement

    def delete(self, agreement_id: str) -> None:
        if not self._agreements.remove(agreement_id):
            raise RecordNotFoundError("Agreement", agreement_id)
        log.info("Deleted agreement %s", agreement_id)
