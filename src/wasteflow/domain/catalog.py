"""Waste type and order type catalogues."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from wasteflow.domain.errors import (
    OrderTypeValidationError,
    RecordNotFoundError,
    WasteTypeValidationError,
)
from wasteflow.domain.model import (
    ComplianceModule,
    OrderType,
    WasteType,
    WasteTypeSelection,
    new_id,
)

if TYPE_CHECKING:
    from wasteflow.domain.model import LmaReportingMethod
    from wasteflow.domain.ports import OrderTypeRepository, WasteTypeRepository

log = getLogger(__name__)


@dataclass(frozen=True, slots=True, kw_only=True)
class WasteTypeDraft:
    name: str
    ewc_code: str
    description: str = ""

    def validation_errors(self) -> dict[str, str]:
        errors: dict[str, str] = {}
        if not self.name.strip():
            errors["name"] = "Name is required"
        if not self.ewc_code.strip():
            errors["ewc_code"] = "EWC Code is required"
        return errors


class WasteTypeCatalog:
    """Waste types are deactivated rather than deleted.

    Orders and agreements keep pointing at the ids of retired types, so the
    records stay resolvable while new selections only offer active ones.
    """

    def __init__(self, waste_types: WasteTypeRepository) -> None:
        self._waste_types = waste_types

    def list(self, *, include_inactive: bool = False) -> tuple[WasteType, ...]:
        return tuple(wt for wt in self._waste_types.all() if include_inactive or wt.active)

    def get(self, waste_type_id: str) -> WasteType | None:
        return self._waste_types.get(waste_type_id)

    def require(self, waste_type_id: str) -> WasteType:
        waste_type = self._waste_types.get(waste_type_id)
        if waste_type is None:
            raise RecordNotFoundError("Waste type", waste_type_id)
        return waste_type

    def create(self, draft: WasteTypeDraft) -> WasteType:
        errors = draft.validation_errors()
        if errors:
            raise WasteTypeValidationError(errors)
        waste_type = WasteType(
            id=new_id(WasteType.ID_PREFIX),
            name=draft.name.strip(),
            ewc_code=draft.ewc_code,
            description=draft.description.strip(),
        )
        self._waste_types.add(waste_type)
        log.info("Created waste type %s (%s)", waste_type.id, waste_type.ewc_code)
        return waste_type

    def update(self, waste_type_id: str, draft: WasteTypeDraft) -> WasteType:
        current = self.require(waste_type_id)
        errors = draft.validation_errors()
        if errors:
            raise WasteTypeValidationError(errors)
        waste_type = WasteType(
            id=current.id,
            name=draft.name.strip(),
            ewc_code=draft.ewc_code,
            description=draft.description.strip(),
            active=current.active,
        )
        self._waste_types.save(waste_type)
        return waste_type

    def deactivate(self, waste_type_id: str) -> WasteType:
        waste_type = self.require(waste_type_id)
        waste_type.deactivate()
        self._waste_types.save(waste_type)
        log.info("Deactivated waste type %s", waste_type_id)
        return waste_type

    def reactivate(self, waste_type_id: str) -> WasteType:
        waste_type = self.require(waste_type_id)
        waste_type.reactivate()
        self._waste_types.save(waste_type)
        return waste_type


@dataclass(frozen=True, slots=True, kw_only=True)
class OrderTypeDraft:
    name: str
    description: str | None = None
    waste_type_selection: WasteTypeSelection = WasteTypeSelection.MULTIPLE
    compliance_module: ComplianceModule = ComplianceModule.NONE
    lma_reporting_method: LmaReportingMethod | None = None

    def build(self, order_type_id: str) -> OrderType:
        return OrderType(
            id=order_type_id,
            name=self.name.strip(),
            description=(self.description or "").strip() or None,
            waste_type_selection=self.waste_type_selection,
            compliance_module=self.compliance_module,
            lma_reporting_method=self.lma_reporting_method,
        )


class OrderTypeCatalog:
    def __init__(self, order_types: OrderTypeRepository) -> None:
        self._order_types = order_types

    def list(self) -> tuple[OrderType, ...]:
        return self._order_types.all()

    def get(self, order_type_id: str) -> OrderType | None:
        return self._order_types.get(order_type_id)

    def require(self, order_type_id: str) -> OrderType:
        order_type = self._order_types.get(order_type_id)
        if order_type is None:
            raise RecordNotFoundError("Order type", order_type_id)
        return order_type

    def reporting_method_of(self, order_type_id: str) -> LmaReportingMethod | None:
        return self.require(order_type_id).lma_reporting_method

    def create(self, draft: OrderTypeDraft) -> OrderType:
        order_type = draft.build(new_id(OrderType.ID_PREFIX))
        errors = order_type.validation_errors()
        if errors:
            raise OrderTypeValidationError(errors)
        self._order_types.add(order_type)
        log.info("Created order type %s (%s)", order_type.id, order_type.name)
        return order_type

    def update(self, order_type_id: str, draft: OrderTypeDraft) -> OrderType:
        self.require(order_type_id)
        order_type = draft.build(order_type_id)
        errors = order_type.validation_errors()
        if errors:
            raise OrderTypeValidationError(errors)
        self._order_types.save(order_type)
        return order_type

    def delete(self, order_type_id: str) -> None:
        if not self._order_types.remove(order_type_id):
            raise RecordNotFoundError("Order type", order_type_id)
        log.info("Deleted order type %s", order_type_id)
