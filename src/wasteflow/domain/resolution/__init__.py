"""Agreement resolution engine."""

from __future__ import annotations

from .contracts import (
    NO_COMMON_RECEIVER_MESSAGE,
    NO_DEFAULT_COLLECTOR_MESSAGE,
    AgreementParties,
    DestinationDetails,
    IssueKind,
    ReceiverResolution,
    ResolutionIssue,
    ResolutionRequest,
    TransferResolution,
    WasteTypeReceivers,
)
from .destinations import lookup_destination, lookup_destinations
from .draft import TransferDraft, TransferField
from .engine import default_internal_collector, resolve_transfer
from .matching import REPORTING_SYSTEMS_BY_MODE, matching_agreements, service_point_matches
from .receivers import (
    first_matched_parties,
    intersect_receivers,
    receivers_for_waste_type,
    resolve_receivers,
    unanimous_default,
)

__all__ = [
    "NO_COMMON_RECEIVER_MESSAGE",
    "NO_DEFAULT_COLLECTOR_MESSAGE",
    "REPORTING_SYSTEMS_BY_MODE",
    "AgreementParties",
    "DestinationDetails",
    "IssueKind",
    "ReceiverResolution",
    "ResolutionIssue",
    "ResolutionRequest",
    "TransferDraft",
    "TransferField",
    "TransferResolution",
    "WasteTypeReceivers",
    "default_internal_collector",
    "first_matched_parties",
    "intersect_receivers",
    "lookup_destination",
    "lookup_destinations",
    "matching_agreements",
    "receivers_for_waste_type",
    "resolve_receivers",
    "resolve_transfer",
    "service_point_matches",
    "unanimous_default",
]
