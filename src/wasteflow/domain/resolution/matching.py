"""Step 1: which agreements apply to a disposer under a reporting mode."""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from wasteflow.domain.model.enums import LmaReportingMethod, ReportingSystem
from wasteflow.domain.model.order import NO_SERVICE_POINT

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from wasteflow.domain.model.agreement import Agreement

REPORTING_SYSTEMS_BY_MODE: Final[Mapping[LmaReportingMethod, frozenset[ReportingSystem]]] = {
    LmaReportingMethod.BASIC_SYSTEM: frozenset({ReportingSystem.BASIC_SYSTEM}),
    LmaReportingMethod.COLLECTORS_SCHEMA: frozenset({ReportingSystem.COLLECTOR_SCHEME}),
    LmaReportingMethod.ROUTE_COLLECTION: frozenset(
        {ReportingSystem.ROUTE_COLLECTION, ReportingSystem.ROUTE_INZAMELING}
    ),
}


def service_point_matches(
    agreement: Agreement,
    mode: LmaReportingMethod,
    service_point_id: str | None,
) -> bool:
    # Only the basic system is scoped by service point; an unselected point matches any.
    if mode != LmaReportingMethod.BASIC_SYSTEM:
        return True
    if not service_point_id or service_point_id == NO_SERVICE_POINT:
        return True
    return agreement.service_point_id == service_point_id


def matching_agreements(
    agreements: Iterable[Agreement],
    *,
    disposer_id: str,
    mode: LmaReportingMethod,
    service_point_id: str | None = None,
) -> tuple[Agreement, ...]:
    """Return the active agreements of ``disposer_id`` for ``mode`` in store order."""

    systems = REPORTING_SYSTEMS_BY_MODE[mode]
    return tuple(
        agreement
        for agreement in agreements
        if agreement.disposer_id == disposer_id
        and agreement.is_active
        and agreement.reporting_system in systems
        and service_point_matches(agreement, mode, service_point_id)
    )
