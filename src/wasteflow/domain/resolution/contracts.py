"""Inputs and outputs of agreement resolution."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from wasteflow.domain.model.enums import LmaReportingMethod, ProcessingMethod
    from wasteflow.domain.resolution.draft import TransferDraft

NO_DEFAULT_COLLECTOR_MESSAGE: Final[str] = (
    "No Default Internal Collector is configured. "
    "Please mark one Transporter entity as Default Internal Collector."
)
NO_COMMON_RECEIVER_MESSAGE: Final[str] = (
    "No receiver is configured for all selected waste types under the current agreement."
)


class IssueKind(StrEnum):
    CONFIGURATION = "configuration"
    RESOLUTION_EMPTY = "resolution_empty"


@dataclass(frozen=True, slots=True, kw_only=True)
class ResolutionIssue:
    """A blocking condition the user has to fix before submitting."""

    kind: IssueKind
    field: str
    message: str


@dataclass(frozen=True, slots=True, kw_only=True)
class ResolutionRequest:
    entity_id: str
    waste_type_ids: tuple[str, ...]
    mode: LmaReportingMethod
    service_point_id: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class WasteTypeReceivers:
    waste_type_id: str
    receiver_ids: tuple[str, ...]
    default_receiver_id: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class AgreementParties:
    """Sender and transporter of the agreement a selection matched first."""

    agreement_id: str
    sender_id: str
    transporter_id: str


@dataclass(frozen=True, slots=True, kw_only=True)
class ReceiverResolution:
    per_waste_type: tuple[WasteTypeReceivers, ...]
    common_receivers: tuple[str, ...]
    default_receiver: str | None = None
    matched: AgreementParties | None = None

    @property
    def proposed_receiver(self) -> str | None:
        if len(self.common_receivers) == 1:
            return self.common_receivers[0]
        return self.default_receiver


@dataclass(frozen=True, slots=True, kw_only=True)
class DestinationDetails:
    agreement_id: str
    waste_type_id: str
    receiver_id: str
    destination_id: str
    processing_method: ProcessingMethod
    asn: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class TransferResolution:
    """Outcome of one resolution run over the transfer section.

    ``exempt`` marks route collection, where the transfer section is not used.
    """

    draft: TransferDraft
    receivers: ReceiverResolution | None = None
    destinations: tuple[DestinationDetails, ...] = ()
    issues: tuple[ResolutionIssue, ...] = ()
    exempt: bool = False

    @property
    def blocked(self) -> bool:
        return bool(self.issues)

    @property
    def common_receivers(self) -> tuple[str, ...]:
        return self.receivers.common_receivers if self.receivers else ()

    def issue_for(self, field: str) -> ResolutionIssue | None:
        for issue in self.issues:
            if issue.field == field:
                return issue
        return None

    def destination_for(self, waste_type_id: str) -> DestinationDetails | None:
        for details in self.destinations:
            if details.waste_type_id == waste_type_id:
                return details
        return None
