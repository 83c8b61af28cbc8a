"""Steps 2 to 5: receivers per waste type, their intersection and the default."""

from __future__ import annotations

from typing import TYPE_CHECKING

from wasteflow.domain.resolution.contracts import (
    AgreementParties,
    ReceiverResolution,
    WasteTypeReceivers,
)
from wasteflow.domain.resolution.matching import matching_agreements

if TYPE_CHECKING:
    from collections.abc import Sequence

    from wasteflow.domain.model.agreement import Agreement
    from wasteflow.domain.model.enums import LmaReportingMethod


def receivers_for_waste_type(
    agreements: Sequence[Agreement], waste_type_id: str
) -> WasteTypeReceivers:
    """Union the receivers of every stream for ``waste_type_id``.

    The default is taken from the first stream encountered; streams always point
    their default at one of their own destinations.
    """

    receivers: dict[str, None] = {}
    default_receiver_id: str | None = None
    for agreement in agreements:
        stream = agreement.stream_for(waste_type_id)
        if stream is None:
            continue
        receivers.update(dict.fromkeys(stream.receiver_ids))
        if default_receiver_id is None:
            default_receiver_id = stream.default_destination.receiver_id
    return WasteTypeReceivers(
        waste_type_id=waste_type_id,
        receiver_ids=tuple(receivers),
        default_receiver_id=default_receiver_id,
    )


def intersect_receivers(per_waste_type: Sequence[WasteTypeReceivers]) -> tuple[str, ...]:
    """Fold left over the per-type sets, keeping the first type's order."""

    if not per_waste_type:
        return ()
    common = list(per_waste_type[0].receiver_ids)
    for entry in per_waste_type[1:]:
        allowed = set(entry.receiver_ids)
        common = [receiver_id for receiver_id in common if receiver_id in allowed]
    return tuple(common)


def unanimous_default(per_waste_type: Sequence[WasteTypeReceivers]) -> str | None:
    """Return the default shared by every waste type, if there is exactly one."""

    defaults = {entry.default_receiver_id for entry in per_waste_type}
    if len(defaults) != 1:
        return None
    return defaults.pop()


def first_matched_parties(
    agreements: Sequence[Agreement], waste_type_ids: Sequence[str]
) -> AgreementParties | None:
    for waste_type_id in waste_type_ids:
        for agreement in agreements:
            if agreement.stream_for(waste_type_id) is not None:
                return AgreementParties(
                    agreement_id=agreement.id,
                    sender_id=agreement.sender_id,
                    transporter_id=agreement.transporter_id,
                )
    return None


def resolve_receivers(
    agreements: Sequence[Agreement],
    *,
    disposer_id: str,
    waste_type_ids: Sequence[str],
    mode: LmaReportingMethod,
    service_point_id: str | None = None,
) -> ReceiverResolution:
    matching = matching_agreements(
        agreements,
        disposer_id=disposer_id,
        mode=mode,
        service_point_id=service_point_id,
    )
    per_waste_type = tuple(
        receivers_for_waste_type(matching, waste_type_id)
        for waste_type_id in dict.fromkeys(waste_type_ids)
    )
    return ReceiverResolution(
        per_waste_type=per_waste_type,
        common_receivers=intersect_receivers(per_waste_type),
        default_receiver=unanimous_default(per_waste_type),
        matched=first_matched_parties(matching, waste_type_ids),
    )
