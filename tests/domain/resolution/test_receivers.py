from __future__ import annotations

from tests.helpers.builders import make_agreement, make_stream
from wasteflow.domain.model import AgreementStatus, LmaReportingMethod, ReportingSystem
from wasteflow.domain.resolution import (
    WasteTypeReceivers,
    first_matched_parties,
    intersect_receivers,
    matching_agreements,
    receivers_for_waste_type,
    resolve_receivers,
    unanimous_default,
)


def _entry(waste_type_id: str, *receivers: str, default: str | None) -> WasteTypeReceivers:
    return WasteTypeReceivers(
        waste_type_id=waste_type_id, receiver_ids=receivers, default_receiver_id=default
    )


def test_intersection_keeps_receivers_shared_by_every_waste_type() -> None:
    per_type = (_entry("w1", "A", "B", default="B"), _entry("w2", "B", "C", default="B"))

    assert intersect_receivers(per_type) == ("B",)


def test_intersection_of_nothing_is_empty() -> None:
    assert intersect_receivers(()) == ()


def test_default_requires_every_waste_type_to_agree() -> None:
    same = (_entry("w1", "A", "B", default="B"), _entry("w2", "B", "C", default="B"))
    different = (_entry("w1", "A", "B", default="B"), _entry("w2", "B", "C", default="C"))

    assert unanimous_default(same) == "B"
    assert unanimous_default(different) is None


def test_receivers_are_unioned_across_agreements_with_first_default() -> None:
    first = make_agreement("agr-1", make_stream("gft", "indaver", "attero", default="attero"))
    second = make_agreement("agr-2", make_stream("gft", "avr"))

    entry = receivers_for_waste_type([first, second], "gft")

    assert entry.receiver_ids == ("indaver", "attero", "avr")
    assert entry.default_receiver_id == "attero"


def test_matching_filters_disposer_status_and_reporting_system() -> None:
    basic = make_agreement("agr-basic", make_stream("gft", "indaver"))
    inactive = make_agreement("agr-off", make_stream("gft", "indaver"))
    inactive.status = AgreementStatus.INACTIVE
    other_disposer = make_agreement("agr-other", make_stream("gft", "indaver"), disposer_id="x")
    collector = make_agreement(
        "agr-col",
        make_stream("gft", "indaver"),
        reporting_system=ReportingSystem.COLLECTOR_SCHEME,
    )
    agreements = [basic, inactive, other_disposer, collector]

    matched = matching_agreements(
        agreements, disposer_id="customer", mode=LmaReportingMethod.BASIC_SYSTEM
    )

    assert [a.id for a in matched] == ["agr-basic"]


def test_route_collection_matches_both_route_systems() -> None:
    route = make_agreement(
        "agr-route",
        make_stream("rest", "avr"),
        reporting_system=ReportingSystem.ROUTE_COLLECTION,
    )
    inzameling = make_agreement(
        "agr-ri",
        make_stream("rest", "avr"),
        reporting_system=ReportingSystem.ROUTE_INZAMELING,
    )

    matched = matching_agreements(
        [route, inzameling], disposer_id="customer", mode=LmaReportingMethod.ROUTE_COLLECTION
    )

    assert [a.id for a in matched] == ["agr-route", "agr-ri"]


def test_basic_system_is_scoped_by_service_point() -> None:
    yard = make_agreement("agr-yard", make_stream("gft", "indaver"), service_point_id="yard")
    dock = make_agreement("agr-dock", make_stream("gft", "attero"), service_point_id="dock")
    mode = LmaReportingMethod.BASIC_SYSTEM

    scoped = matching_agreements(
        [yard, dock], disposer_id="customer", mode=mode, service_point_id="dock"
    )
    unscoped = matching_agreements([yard, dock], disposer_id="customer", mode=mode)
    sentinel = matching_agreements(
        [yard, dock], disposer_id="customer", mode=mode, service_point_id="no_service_point"
    )

    assert [a.id for a in scoped] == ["agr-dock"]
    assert [a.id for a in unscoped] == ["agr-yard", "agr-dock"]
    assert [a.id for a in sentinel] == ["agr-yard", "agr-dock"]


def test_collector_scheme_ignores_service_point() -> None:
    agreement = make_agreement(
        "agr-col",
        make_stream("gft", "indaver"),
        reporting_system=ReportingSystem.COLLECTOR_SCHEME,
        service_point_id="yard",
    )

    matched = matching_agreements(
        [agreement],
        disposer_id="customer",
        mode=LmaReportingMethod.COLLECTORS_SCHEMA,
        service_point_id="dock",
    )

    assert matched == (agreement,)


def test_first_matched_parties_walks_waste_types_first() -> None:
    pmd_only = make_agreement("agr-pmd", make_stream("pmd", "avr"), transporter_id="t-pmd")
    gft_only = make_agreement("agr-gft", make_stream("gft", "indaver"), transporter_id="t-gft")

    parties = first_matched_parties([pmd_only, gft_only], ["gft", "pmd"])

    assert parties is not None
    assert parties.agreement_id == "agr-gft"
    assert parties.transporter_id == "t-gft"
    assert first_matched_parties([pmd_only], ["rest"]) is None


def test_resolve_receivers_combines_every_step() -> None:
    agreement = make_agreement(
        "agr-1",
        make_stream("w1", "A", "B", default="B"),
        make_stream("w2", "B", "C", default="C"),
    )

    resolution = resolve_receivers(
        [agreement],
        disposer_id="customer",
        waste_type_ids=["w1", "w2"],
        mode=LmaReportingMethod.BASIC_SYSTEM,
    )

    assert resolution.common_receivers == ("B",)
    assert resolution.default_receiver is None
    assert resolution.proposed_receiver == "B"
    assert resolution.matched is not None
    assert resolution.matched.sender_id == "customer"
