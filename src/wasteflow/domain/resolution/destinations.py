"""Step 7: exact destination row for a chosen receiver."""

from __future__ import annotations

from typing import TYPE_CHECKING

from wasteflow.domain.resolution.contracts import DestinationDetails
from wasteflow.domain.resolution.matching import matching_agreements

if TYPE_CHECKING:
    from collections.abc import Sequence

    from wasteflow.domain.model.agreement import Agreement
    from wasteflow.domain.model.enums import LmaReportingMethod


def lookup_destination(
    agreements: Sequence[Agreement],
    *,
    disposer_id: str,
    waste_type_id: str,
    receiver_id: str,
    mode: LmaReportingMethod,
    service_point_id: str | None = None,
) -> DestinationDetails | None:
    for agreement in matching_agreements(
        agreements,
        disposer_id=disposer_id,
        mode=mode,
        service_point_id=service_point_id,
    ):
        stream = agreement.stream_for(waste_type_id)
        if stream is None:
            continue
        destination = stream.destination_for_receiver(receiver_id)
        if destination is None:
            continue
        return DestinationDetails(
            agreement_id=agreement.id,
            waste_type_id=waste_type_id,
            receiver_id=receiver_id,
            destination_id=destination.id,
            processing_method=destination.processing_method,
            asn=destination.asn,
        )
    return None


def lookup_destinations(
    agreements: Sequence[Agreement],
    *,
    disposer_id: str,
    waste_type_ids: Sequence[str],
    receiver_id: str,
    mode: LmaReportingMethod,
    service_point_id: str | None = None,
) -> tuple[DestinationDetails, ...]:
    """Look up one destination per waste type, skipping types without a row."""

    found: list[DestinationDetails] = []
    for waste_type_id in dict.fromkeys(waste_type_ids):
        details = lookup_destination(
            agreements,
            disposer_id=disposer_id,
            waste_type_id=waste_type_id,
            receiver_id=receiver_id,
            mode=mode,
            service_point_id=service_point_id,
        )
        if details is not None:
            found.append(details)
    return tuple(found)
