from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING

import pytest

from tests.helpers.builders import make_stream
from wasteflow import app
from wasteflow.domain.agreements import AgreementDraft
from wasteflow.domain.catalog import WasteTypeDraft
from wasteflow.domain.errors import AgreementValidationError, OrderValidationError
from wasteflow.domain.fixtures import (
    PMD,
    seed_agreements,
    seed_entities,
    seed_order_types,
    seed_waste_types,
)
from wasteflow.domain.model import (
    Address,
    EntityDraft,
    EntityRole,
    LmaReportingMethod,
    OrderStatus,
    ProcessingMethod,
    ReceiverConfig,
    ReportingSystem,
)
from wasteflow.domain.orders import OrderRequest
from wasteflow.domain.registry import REFERENCED_ENTITY_MESSAGE
from wasteflow.domain.resolution import ResolutionRequest

if TYPE_CHECKING:
    from collections.abc import Callable

    from wasteflow.adapters.sqlalchemy import SqlAlchemyUnitOfWork

    UnitOfWorkFactory = Callable[[], SqlAlchemyUnitOfWork]


def _collector_agreement() -> AgreementDraft:
    return AgreementDraft(
        disposer_id="reinis_nv",
        reporting_system=ReportingSystem.COLLECTOR_SCHEME,
        valid_from=date(2025, 1, 1),
        sender_id="reinis_nv",
        transporter_id="reinis_nv",
        waste_streams=(make_stream(PMD, "avr", "renewi", default="renewi"),),
    )


def test_initialize_seeds_every_collection(sqlite_unit_of_work: UnitOfWorkFactory) -> None:
    counts = app.initialize(unit_of_work_factory=sqlite_unit_of_work)

    assert counts == {
        "entities": len(seed_entities()),
        "waste_types": len(seed_waste_types()),
        "order_types": len(seed_order_types()),
        "agreements": len(seed_agreements()),
        "orders": 0,
    }


def test_entities_can_be_listed_by_role(sqlite_unit_of_work: UnitOfWorkFactory) -> None:
    transporters = app.list_entities(
        role=EntityRole.TRANSPORTER, unit_of_work_factory=sqlite_unit_of_work
    )

    assert {entity.id for entity in transporters} == {"reinis_nv", "renewi"}


def test_created_entity_is_persisted(sqlite_unit_of_work: UnitOfWorkFactory) -> None:
    draft = EntityDraft(
        name="Sorting Hub Delft",
        roles=frozenset({EntityRole.RECEIVER}),
        address=Address(city="Delft"),
        kvk_number="27000001",
        receiver_config=ReceiverConfig(),
    )

    created = app.create_entity(draft, unit_of_work_factory=sqlite_unit_of_work)
    stored = app.get_entity(created.id, unit_of_work_factory=sqlite_unit_of_work)

    assert stored.name == "Sorting Hub Delft"
    assert stored.has_role(EntityRole.RECEIVER)


def test_referenced_entity_cannot_be_deleted(sqlite_unit_of_work: UnitOfWorkFactory) -> None:
    result = app.delete_entity("rotterdam_municipality", unit_of_work_factory=sqlite_unit_of_work)

    assert not result.success
    assert result.reason == REFERENCED_ENTITY_MESSAGE
    assert app.get_entity("rotterdam_municipality", unit_of_work_factory=sqlite_unit_of_work)


def test_default_internal_collector_moves(sqlite_unit_of_work: UnitOfWorkFactory) -> None:
    app.set_default_internal_collector("renewi", unit_of_work_factory=sqlite_unit_of_work)

    flagged = [
        entity.id
        for entity in app.list_entities(unit_of_work_factory=sqlite_unit_of_work)
        if entity.is_default_internal_collector
    ]
    assert flagged == ["renewi"]


def test_deactivated_waste_types_are_hidden(sqlite_unit_of_work: UnitOfWorkFactory) -> None:
    created = app.create_waste_type(
        WasteTypeDraft(name="Glass", ewc_code="20 01 02"),
        unit_of_work_factory=sqlite_unit_of_work,
    )

    app.deactivate_waste_type(created.id, unit_of_work_factory=sqlite_unit_of_work)

    active = app.list_waste_types(unit_of_work_factory=sqlite_unit_of_work)
    everything = app.list_waste_types(
        include_inactive=True, unit_of_work_factory=sqlite_unit_of_work
    )
    assert created.id not in {wt.id for wt in active}
    assert created.id in {wt.id for wt in everything}


def test_invalid_agreement_is_not_stored(sqlite_unit_of_work: UnitOfWorkFactory) -> None:
    draft = AgreementDraft(
        disposer_id="avr",
        reporting_system=ReportingSystem.BASIC_SYSTEM,
        valid_from=None,
        sender_id="erasmus_mc",
        transporter_id="renewi",
    )

    with pytest.raises(AgreementValidationError) as excinfo:
        app.create_agreement(draft, unit_of_work_factory=sqlite_unit_of_work)

    assert set(excinfo.value.errors) == {"disposer", "valid_from", "waste_streams"}
    assert app.list_agreements(
        disposer_id="avr", unit_of_work_factory=sqlite_unit_of_work
    ) == ()


def test_agreement_update_is_validated(sqlite_unit_of_work: UnitOfWorkFactory) -> None:
    agreement = app.create_agreement(
        _collector_agreement(), unit_of_work_factory=sqlite_unit_of_work
    )

    with pytest.raises(AgreementValidationError):
        app.update_agreement(
            agreement.id, sender_id="avr", unit_of_work_factory=sqlite_unit_of_work
        )
    updated = app.update_agreement(
        agreement.id, valid_until=date(2025, 12, 31), unit_of_work_factory=sqlite_unit_of_work
    )

    assert updated.sender_id == "reinis_nv"
    assert updated.valid_until == date(2025, 12, 31)
    grouped = app.agreements_by_disposer(unit_of_work_factory=sqlite_unit_of_work)
    assert [a.id for a in grouped["reinis_nv"]] == [agreement.id]


def test_collector_order_flows_from_preview_to_storage(
    sqlite_unit_of_work: UnitOfWorkFactory,
) -> None:
    app.create_agreement(_collector_agreement(), unit_of_work_factory=sqlite_unit_of_work)

    resolution = app.preview_transfer(
        ResolutionRequest(
            entity_id="erasmus_mc",
            waste_type_ids=(PMD,),
            mode=LmaReportingMethod.COLLECTORS_SCHEMA,
        ),
        unit_of_work_factory=sqlite_unit_of_work,
    )
    assert resolution.draft.disposer.value == "reinis_nv"
    assert resolution.draft.sender.value == "erasmus_mc"
    assert resolution.draft.receiver.value == "renewi"

    order = app.submit_order(
        OrderRequest(
            entity_id="erasmus_mc",
            order_type_id="ot-seed-collector",
            fulfillment_date=date(2025, 4, 2),
            waste_type_ids=(PMD,),
            service_point_id="erasmus_waste_dock",
            transfer=resolution.draft,
        ),
        unit_of_work_factory=sqlite_unit_of_work,
    )
    app.set_order_status(order.id, OrderStatus.DRAFT, unit_of_work_factory=sqlite_unit_of_work)

    (stored,) = app.list_orders(
        entity_id="erasmus_mc", unit_of_work_factory=sqlite_unit_of_work
    )
    assert stored.id == order.id
    assert stored.status == OrderStatus.DRAFT
    assert stored.agreement_transporter_id == "reinis_nv"
    (line,) = stored.waste_lines
    assert line.disposer_id == "reinis_nv"
    assert line.receiver_id == "renewi"
    assert line.asn == f"ASN-{PMD}-renewi"

    app.delete_order(order.id, unit_of_work_factory=sqlite_unit_of_work)
    assert app.list_orders(unit_of_work_factory=sqlite_unit_of_work) == ()


def test_invalid_order_is_rejected(sqlite_unit_of_work: UnitOfWorkFactory) -> None:
    with pytest.raises(OrderValidationError) as excinfo:
        app.submit_order(
            OrderRequest(entity_id="erasmus_mc", order_type_id="ot-seed-basic"),
            unit_of_work_factory=sqlite_unit_of_work,
        )

    assert "fulfillment_date" in excinfo.value.errors
    assert "waste_types" in excinfo.value.errors
    assert app.list_orders(unit_of_work_factory=sqlite_unit_of_work) == ()


def test_agreement_edits_leave_submitted_orders_unchanged(
    sqlite_unit_of_work: UnitOfWorkFactory,
) -> None:
    agreement = app.create_agreement(
        _collector_agreement(), unit_of_work_factory=sqlite_unit_of_work
    )
    order = app.submit_order(
        OrderRequest(
            entity_id="erasmus_mc",
            order_type_id="ot-seed-collector",
            fulfillment_date=date(2025, 4, 2),
            waste_type_ids=(PMD,),
        ),
        unit_of_work_factory=sqlite_unit_of_work,
    )

    app.update_agreement(
        agreement.id,
        waste_streams=(
            make_stream(PMD, "avr", method=ProcessingMethod.ENERGY_RECOVERY),
        ),
        unit_of_work_factory=sqlite_unit_of_work,
    )

    (stored,) = app.list_orders(unit_of_work_factory=sqlite_unit_of_work)
    assert stored.id == order.id
    (line,) = stored.waste_lines
    assert line.receiver_id == "renewi"
    assert line.asn == f"ASN-{PMD}-renewi"
    assert line.processing_method == ProcessingMethod.MATERIAL_RECOVERY
    (updated,) = app.list_agreements(
        disposer_id="reinis_nv", unit_of_work_factory=sqlite_unit_of_work
    )
    stream = updated.stream_for(PMD)
    assert stream is not None
    assert stream.receiver_ids == ("avr",)
