"""Agreement resolution for the waste-transfer section of an order.

``resolve_transfer`` is pure: it reads entity and agreement snapshots, never a
repository, so it can be re-run on every input change. Feeding the returned draft
back in with the same inputs yields the same resolution.
"""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from wasteflow.domain.model.enums import EntityRole, LmaReportingMethod
from wasteflow.domain.resolution.contracts import (
    NO_COMMON_RECEIVER_MESSAGE,
    NO_DEFAULT_COLLECTOR_MESSAGE,
    IssueKind,
    ResolutionIssue,
    TransferResolution,
)
from wasteflow.domain.resolution.destinations import lookup_destinations
from wasteflow.domain.resolution.draft import TransferDraft, TransferField
from wasteflow.domain.resolution.receivers import resolve_receivers

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from wasteflow.domain.model.agreement import Agreement
    from wasteflow.domain.model.entity import Entity
    from wasteflow.domain.resolution.contracts import ResolutionRequest

log = getLogger(__name__)


def default_internal_collector(entities: Iterable[Entity]) -> Entity | None:
    for entity in entities:
        if entity.is_default_internal_collector and entity.has_role(EntityRole.TRANSPORTER):
            return entity
    return None


def _assign_originating_parties(
    request: ResolutionRequest,
    draft: TransferDraft,
    entities: Sequence[Entity],
) -> tuple[TransferDraft, list[ResolutionIssue]]:
    issues: list[ResolutionIssue] = []
    if request.mode == LmaReportingMethod.BASIC_SYSTEM:
        return draft.force(TransferField.DISPOSER, request.entity_id), issues

    draft = draft.force(TransferField.SENDER, request.entity_id)
    collector = default_internal_collector(entities)
    if collector is None:
        issues.append(
            ResolutionIssue(
                kind=IssueKind.CONFIGURATION,
                field=TransferField.DISPOSER.value,
                message=NO_DEFAULT_COLLECTOR_MESSAGE,
            )
        )
        return draft.propose(TransferField.DISPOSER, None), issues
    return draft.propose(TransferField.DISPOSER, collector.id), issues


def resolve_transfer(
    request: ResolutionRequest,
    *,
    agreements: Sequence[Agreement],
    entities: Sequence[Entity],
    draft: TransferDraft | None = None,
) -> TransferResolution:
    """Resolve disposer, receiver, sender and agreement transporter for ``request``."""

    current = draft or TransferDraft()
    if request.mode == LmaReportingMethod.ROUTE_COLLECTION:
        return TransferResolution(draft=current, exempt=True)

    current, issues = _assign_originating_parties(request, current, entities)
    disposer_id = current.value(TransferField.DISPOSER)
    basic = request.mode == LmaReportingMethod.BASIC_SYSTEM

    if not disposer_id or not request.waste_type_ids:
        current = current.propose(TransferField.RECEIVER, None).propose(
            TransferField.TRANSPORTER, None
        )
        if basic:
            current = current.propose(TransferField.SENDER, None)
        return TransferResolution(draft=current, issues=tuple(issues))

    receivers = resolve_receivers(
        agreements,
        disposer_id=disposer_id,
        waste_type_ids=request.waste_type_ids,
        mode=request.mode,
        service_point_id=request.service_point_id,
    )
    if not receivers.common_receivers:
        log.debug(
            "No common receiver for disposer=%s waste_types=%s",
            disposer_id,
            request.waste_type_ids,
        )
        issues.append(
            ResolutionIssue(
                kind=IssueKind.RESOLUTION_EMPTY,
                field=TransferField.RECEIVER.value,
                message=NO_COMMON_RECEIVER_MESSAGE,
            )
        )

    matched = receivers.matched
    current = current.propose(TransferField.RECEIVER, receivers.proposed_receiver)
    if basic:
        current = current.propose(TransferField.SENDER, matched.sender_id if matched else None)
    current = current.propose(
        TransferField.TRANSPORTER, matched.transporter_id if matched else None
    )

    receiver_id = current.value(TransferField.RECEIVER)
    destinations = (
        lookup_destinations(
            agreements,
            disposer_id=disposer_id,
            waste_type_ids=request.waste_type_ids,
            receiver_id=receiver_id,
            mode=request.mode,
            service_point_id=request.service_point_id,
        )
        if receiver_id
        else ()
    )
    return TransferResolution(
        draft=current,
        receivers=receivers,
        destinations=destinations,
        issues=tuple(issues),
    )
