"""Public domain model surface."""

from __future__ import annotations

from wasteflow.domain.model.agreement import (
    DEFAULT_REQUIRED_MESSAGE,
    DUPLICATE_WASTE_TYPE_MESSAGE,
    LAST_DESTINATION_MESSAGE,
    Agreement,
    Destination,
    WasteStream,
)
from wasteflow.domain.model.base import Record, new_id, utcnow
from wasteflow.domain.model.entity import (
    Address,
    Entity,
    EntityDraft,
    ReceiverConfig,
    SenderConfig,
    ServicePoint,
    TransporterConfig,
)
from wasteflow.domain.model.enums import (
    AgreementStatus,
    ComplianceModule,
    EntityRole,
    EntityType,
    FacilityType,
    FleetSource,
    LmaReportingMethod,
    OrderStatus,
    ProcessingMethod,
    ReportingSystem,
    SenderLegalRole,
    TransporterCapability,
    WasteTypeSelection,
)
from wasteflow.domain.model.order import NO_SERVICE_POINT, Order, WasteLine
from wasteflow.domain.model.order_type import OrderType
from wasteflow.domain.model.provenance import FieldSource, TrackedValue
from wasteflow.domain.model.waste import (
    EWC_CATALOG,
    EwcCode,
    WasteType,
    is_hazardous_ewc,
    lookup_ewc,
    normalize_ewc_code,
)

__all__ = [
    "DEFAULT_REQUIRED_MESSAGE",
    "DUPLICATE_WASTE_TYPE_MESSAGE",
    "EWC_CATALOG",
    "LAST_DESTINATION_MESSAGE",
    "NO_SERVICE_POINT",
    "Address",
    "Agreement",
    "AgreementStatus",
    "ComplianceModule",
    "Destination",
    "Entity",
    "EntityDraft",
    "EntityRole",
    "EntityType",
    "EwcCode",
    "FacilityType",
    "FieldSource",
    "FleetSource",
    "LmaReportingMethod",
    "Order",
    "OrderStatus",
    "OrderType",
    "ProcessingMethod",
    "ReceiverConfig",
    "Record",
    "ReportingSystem",
    "SenderConfig",
    "SenderLegalRole",
    "ServicePoint",
    "TrackedValue",
    "TransporterCapability",
    "TransporterConfig",
    "WasteLine",
    "WasteStream",
    "WasteType",
    "WasteTypeSelection",
    "is_hazardous_ewc",
    "lookup_ewc",
    "new_id",
    "normalize_ewc_code",
    "utcnow",
]
