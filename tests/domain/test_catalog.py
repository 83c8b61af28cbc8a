from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from tests.helpers.builders import make_waste_type
from wasteflow.domain.catalog import (
    OrderTypeCatalog,
    OrderTypeDraft,
    WasteTypeCatalog,
    WasteTypeDraft,
)
from wasteflow.domain.errors import (
    OrderTypeValidationError,
    RecordNotFoundError,
    WasteTypeValidationError,
)
from wasteflow.domain.model import ComplianceModule, LmaReportingMethod

if TYPE_CHECKING:
    from collections.abc import Callable

    from tests.helpers.memory import InMemoryUnitOfWork


def test_waste_type_lifecycle(empty_unit_of_work: Callable[[], InMemoryUnitOfWork]) -> None:
    with empty_unit_of_work() as uow:
        catalog = WasteTypeCatalog(uow.repositories.waste_types)
        created = catalog.create(WasteTypeDraft(name=" Asbestos ", ewc_code="17 06 05*"))

        assert created.id.startswith("wt-")
        assert created.name == "Asbestos"
        assert created.hazardous

        updated = catalog.update(
            created.id, WasteTypeDraft(name="Asbestos", ewc_code="17 06 05*", description="Dak")
        )
        assert updated.description == "Dak"

        catalog.deactivate(created.id)
        assert catalog.list() == ()
        assert [wt.id for wt in catalog.list(include_inactive=True)] == [created.id]

        catalog.reactivate(created.id)
        assert catalog.require(created.id).active


def test_waste_type_requires_name_and_code(
    empty_unit_of_work: Callable[[], InMemoryUnitOfWork],
) -> None:
    with empty_unit_of_work() as uow:
        catalog = WasteTypeCatalog(uow.repositories.waste_types)

        with pytest.raises(WasteTypeValidationError) as excinfo:
            catalog.create(WasteTypeDraft(name="", ewc_code=" "))

    assert excinfo.value.errors == {
        "name": "Name is required",
        "ewc_code": "EWC Code is required",
    }


def test_update_keeps_active_flag(empty_unit_of_work: Callable[[], InMemoryUnitOfWork]) -> None:
    with empty_unit_of_work() as uow:
        uow.repositories.waste_types.add(make_waste_type("rest"))
        catalog = WasteTypeCatalog(uow.repositories.waste_types)
        catalog.deactivate("rest")

        updated = catalog.update("rest", WasteTypeDraft(name="Rest", ewc_code="20 03 01"))

    assert not updated.active


def test_order_type_lifecycle(empty_unit_of_work: Callable[[], InMemoryUnitOfWork]) -> None:
    with empty_unit_of_work() as uow:
        catalog = OrderTypeCatalog(uow.repositories.order_types)
        created = catalog.create(
            OrderTypeDraft(
                name="Container Pickup",
                compliance_module=ComplianceModule.NL_LMA,
                lma_reporting_method=LmaReportingMethod.BASIC_SYSTEM,
            )
        )

        assert catalog.reporting_method_of(created.id) == LmaReportingMethod.BASIC_SYSTEM

        catalog.update(created.id, OrderTypeDraft(name="Container Pickup"))
        assert catalog.reporting_method_of(created.id) is None

        catalog.delete(created.id)
        assert catalog.get(created.id) is None
        with pytest.raises(RecordNotFoundError):
            catalog.delete(created.id)


def test_lma_order_type_requires_reporting_method(
    empty_unit_of_work: Callable[[], InMemoryUnitOfWork],
) -> None:
    with empty_unit_of_work() as uow:
        catalog = OrderTypeCatalog(uow.repositories.order_types)

        with pytest.raises(OrderTypeValidationError) as excinfo:
            catalog.create(
                OrderTypeDraft(name="Pickup", compliance_module=ComplianceModule.NL_LMA)
            )

        assert catalog.list() == ()
    assert set(excinfo.value.errors) == {"lma_reporting_method"}
