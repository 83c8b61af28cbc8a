"""Application orchestration entry points."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import replace
from logging import getLogger
from typing import TYPE_CHECKING, Any

from wasteflow.adapters.sqlalchemy.unit_of_work import SqlAlchemyUnitOfWork, is_started, startup
from wasteflow.domain.agreements import UPDATABLE_FIELDS, AgreementDraft, AgreementStore
from wasteflow.domain.authoring import validate_agreement
from wasteflow.domain.catalog import OrderTypeCatalog, WasteTypeCatalog
from wasteflow.domain.orders import OrderStore, prepare_order
from wasteflow.domain.ports import MasterDataUnitOfWork
from wasteflow.domain.registry import EntityRegistry
from wasteflow.domain.resolution import resolve_transfer

if TYPE_CHECKING:
    from wasteflow.domain.catalog import OrderTypeDraft, WasteTypeDraft
    from wasteflow.domain.model import (
        Agreement,
        AgreementStatus,
        Entity,
        EntityDraft,
        EntityRole,
        Order,
        OrderStatus,
        OrderType,
        WasteType,
    )
    from wasteflow.domain.orders import OrderRequest
    from wasteflow.domain.ports import MasterDataRepositories
    from wasteflow.domain.registry import DeleteResult
    from wasteflow.domain.resolution import ResolutionRequest, TransferDraft, TransferResolution

UnitOfWorkFactory = Callable[[], MasterDataUnitOfWork]


log = getLogger(__name__)


def _ensure_started(unit_of_work_factory: UnitOfWorkFactory | None) -> UnitOfWorkFactory:
    if unit_of_work_factory is not None:
        return unit_of_work_factory
    if not is_started():
        startup()
        initialize(unit_of_work_factory=SqlAlchemyUnitOfWork)
    return SqlAlchemyUnitOfWork


def _registry(repositories: MasterDataRepositories) -> EntityRegistry:
    return EntityRegistry(entities=repositories.entities, agreements=repositories.agreements)


def initialize(*, unit_of_work_factory: UnitOfWorkFactory | None = None) -> dict[str, int]:
    """Seed every empty collection and return the number of records per collection."""

    factory = _ensure_started(unit_of_work_factory)
    with factory() as uow:
        repositories = uow.repositories
        counts = {
            "entities": len(repositories.entities.all()),
            "waste_types": len(repositories.waste_types.all()),
            "order_types": len(repositories.order_types.all()),
            "agreements": len(repositories.agreements.all()),
            "orders": len(repositories.orders.all()),
        }
        uow.commit()
    log.info(
        "Storage ready: %s",
        ", ".join(f"{name}={count}" for name, count in counts.items()),
    )
    return counts


# Entities --------------------------------------------------------------------


def list_entities(
    *,
    role: EntityRole | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> tuple[Entity, ...]:
    factory = _ensure_started(unit_of_work_factory)
    with factory() as uow:
        registry = _registry(uow.repositories)
        return registry.list_all() if role is None else registry.list_by_role(role)


def get_entity(
    entity_id: str, *, unit_of_work_factory: UnitOfWorkFactory | None = None
) -> Entity:
    factory = _ensure_started(unit_of_work_factory)
    with factory() as uow:
        return _registry(uow.repositories).require(entity_id)


def create_entity(
    draft: EntityDraft, *, unit_of_work_factory: UnitOfWorkFactory | None = None
) -> Entity:
    factory = _ensure_started(unit_of_work_factory)
    with factory() as uow:
        entity = _registry(uow.repositories).create(draft)
        uow.commit()
    return entity


def update_entity(
    entity_id: str,
    draft: EntityDraft,
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> Entity:
    factory = _ensure_started(unit_of_work_factory)
    with factory() as uow:
        entity = _registry(uow.repositories).update(entity_id, draft)
        uow.commit()
    return entity


def set_default_internal_collector(
    entity_id: str, *, unit_of_work_factory: UnitOfWorkFactory | None = None
) -> Entity:
    factory = _ensure_started(unit_of_work_factory)
    with factory() as uow:
        entity = _registry(uow.repositories).set_default_internal_collector(entity_id)
        uow.commit()
    return entity


def delete_entity(
    entity_id: str, *, unit_of_work_factory: UnitOfWorkFactory | None = None
) -> DeleteResult:
    factory = _ensure_started(unit_of_work_factory)
    with factory() as uow:
        result = _registry(uow.repositories).delete(entity_id)
        if result.success:
            uow.commit()
    return result


# Waste types and order types -------------------------------------------------


def list_waste_types(
    *,
    include_inactive: bool = False,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> tuple[WasteType, ...]:
    factory = _ensure_started(unit_of_work_factory)
    with factory() as uow:
        return WasteTypeCatalog(uow.repositories.waste_types).list(
            include_inactive=include_inactive
        )


def create_waste_type(
    draft: WasteTypeDraft, *, unit_of_work_factory: UnitOfWorkFactory | None = None
) -> WasteType:
    factory = _ensure_started(unit_of_work_factory)
    with factory() as uow:
        waste_type = WasteTypeCatalog(uow.repositories.waste_types).create(draft)
        uow.commit()
    return waste_type


def update_waste_type(
    waste_type_id: str,
    draft: WasteTypeDraft,
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> WasteType:
    factory = _ensure_started(unit_of_work_factory)
    with factory() as uow:
        waste_type = WasteTypeCatalog(uow.repositories.waste_types).update(waste_type_id, draft)
        uow.commit()
    return waste_type


def deactivate_waste_type(
    waste_type_id: str, *, unit_of_work_factory: UnitOfWorkFactory | None = None
) -> WasteType:
    factory = _ensure_started(unit_of_work_factory)
    with factory() as uow:
        waste_type = WasteTypeCatalog(uow.repositories.waste_types).deactivate(waste_type_id)
        uow.commit()
    return waste_type


def list_order_types(
    *, unit_of_work_factory: UnitOfWorkFactory | None = None
) -> tuple[OrderType, ...]:
    factory = _ensure_started(unit_of_work_factory)
    with factory() as uow:
        return OrderTypeCatalog(uow.repositories.order_types).list()


def create_order_type(
    draft: OrderTypeDraft, *, unit_of_work_factory: UnitOfWorkFactory | None = None
) -> OrderType:
    factory = _ensure_started(unit_of_work_factory)
    with factory() as uow:
        order_type = OrderTypeCatalog(uow.repositories.order_types).create(draft)
        uow.commit()
    return order_type


def update_order_type(
    order_type_id: str,
    draft: OrderTypeDraft,
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> OrderType:
    factory = _ensure_started(unit_of_work_factory)
    with factory() as uow:
        order_type = OrderTypeCatalog(uow.repositories.order_types).update(order_type_id, draft)
        uow.commit()
    return order_type


def delete_order_type(
    order_type_id: str, *, unit_of_work_factory: UnitOfWorkFactory | None = None
) -> None:
    factory = _ensure_started(unit_of_work_factory)
    with factory() as uow:
        OrderTypeCatalog(uow.repositories.order_types).delete(order_type_id)
        uow.commit()


# Agreements ------------------------------------------------------------------


def list_agreements(
    *,
    disposer_id: str | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> tuple[Agreement, ...]:
    factory = _ensure_started(unit_of_work_factory)
    with factory() as uow:
        store = AgreementStore(uow.repositories.agreements)
        return store.list() if disposer_id is None else store.for_disposer(disposer_id)


def agreements_by_disposer(
    *, unit_of_work_factory: UnitOfWorkFactory | None = None
) -> dict[str, tuple[Agreement, ...]]:
    factory = _ensure_started(unit_of_work_factory)
    with factory() as uow:
        return AgreementStore(uow.repositories.agreements).grouped_by_disposer()


def create_agreement(
    draft: AgreementDraft, *, unit_of_work_factory: UnitOfWorkFactory | None = None
) -> Agreement:
    factory = _ensure_started(unit_of_work_factory)
    with factory() as uow:
        entities = {e.id: e for e in uow.repositories.entities.all()}
        validate_agreement(draft, entities=entities)
        agreement = AgreementStore(uow.repositories.agreements).create(draft)
        uow.commit()
    return agreement


def update_agreement(
    agreement_id: str,
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    **changes: Any,
) -> Agreement:
    """Apply a partial update after validating the agreement it would produce."""

    factory = _ensure_started(unit_of_work_factory)
    with factory() as uow:
        store = AgreementStore(uow.repositories.agreements)
        current = store.require(agreement_id)
        draft_changes = {
            name: tuple(value) if name == "waste_streams" else value
            for name, value in changes.items()
            if name in UPDATABLE_FIELDS and name != "status"
        }
        draft = replace(_draft_of(current), **draft_changes)
        entities = {e.id: e for e in uow.repositories.entities.all()}
        validate_agreement(draft, entities=entities)
        agreement = store.update(agreement_id, **changes)
        uow.commit()
    return agreement


def _draft_of(agreement: Agreement) -> AgreementDraft:
    return AgreementDraft(
        disposer_id=agreement.disposer_id,
        reporting_system=agreement.reporting_system,
        valid_from=agreement.valid_from,
        sender_id=agreement.sender_id,
        transporter_id=agreement.transporter_id,
        service_point_id=agreement.service_point_id,
        valid_until=agreement.valid_until,
        waste_streams=agreement.waste_streams,
    )


def set_agreement_status(
    agreement_id: str,
    status: AgreementStatus,
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> Agreement:
    factory = _ensure_started(unit_of_work_factory)
    with factory() as uow:
        agreement = AgreementStore(uow.repositories.agreements).set_status(agreement_id, status)
        uow.commit()
    return agreement


def delete_agreement(
    agreement_id: str, *, unit_of_work_factory: UnitOfWorkFactory | None = None
) -> None:
    factory = _ensure_started(unit_of_work_factory)
    with factory() as uow:
        AgreementStore(uow.repositories.agreements).delete(agreement_id)
        uow.commit()


# Resolution and orders -------------------------------------------------------


def preview_transfer(
    request: ResolutionRequest,
    *,
    draft: TransferDraft | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> TransferResolution:
    """Resolve the transfer parties for an order being composed, without storing it."""

    factory = _ensure_started(unit_of_work_factory)
    with factory() as uow:
        resolution = resolve_transfer(
            request,
            agreements=uow.repositories.agreements.all(),
            entities=uow.repositories.entities.all(),
            draft=draft,
        )
    log.debug(
        "Resolved transfer for %s (%s): %d issues",
        request.entity_id,
        request.mode,
        len(resolution.issues),
    )
    return resolution


def submit_order(
    request: OrderRequest, *, unit_of_work_factory: UnitOfWorkFactory | None = None
) -> Order:
    factory = _ensure_started(unit_of_work_factory)
    with factory() as uow:
        repositories = uow.repositories
        prepared = prepare_order(
            request,
            entities=repositories.entities.all(),
            agreements=repositories.agreements.all(),
            order_types=repositories.order_types.all(),
            waste_types=repositories.waste_types.all(),
        )
        order = OrderStore(repositories.orders).create(prepared)
        uow.commit()
    return order


def list_orders(
    *,
    entity_id: str | None = None,
    order_type_id: str | None = None,
    status: OrderStatus | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> tuple[Order, ...]:
    factory = _ensure_started(unit_of_work_factory)
    with factory() as uow:
        return OrderStore(uow.repositories.orders).list(
            entity_id=entity_id, order_type_id=order_type_id, status=status
        )


def set_order_status(
    order_id: str,
    status: OrderStatus,
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> Order:
    factory = _ensure_started(unit_of_work_factory)
    with factory() as uow:
        order = OrderStore(uow.repositories.orders).set_status(order_id, status)
        uow.commit()
    return order


def delete_order(order_id: str, *, unit_of_work_factory: UnitOfWorkFactory | None = None) -> None:
    factory = _ensure_started(unit_of_work_factory)
    with factory() as uow:
        OrderStore(uow.repositories.orders).delete(order_id)
        uow.commit()
