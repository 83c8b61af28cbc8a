"""Pydantic models describing the stored JSON documents.

Field names are stored in camelCase, matching the collections written by earlier
releases of the browser application.
"""

from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from wasteflow.domain.model import (
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


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


class DocumentModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True, alias_generator=to_camel)


class ServicePointDocument(DocumentModel):
    id: str
    name: str
    street: str = ""
    house_number: str = ""
    postal_code: str = ""
    city: str = ""


class SenderConfigDocument(DocumentModel):
    legal_roles: list[SenderLegalRole] = Field(default_factory=list)


class TransporterConfigDocument(DocumentModel):
    fleet_source: FleetSource = FleetSource.INTERNAL
    legal_capabilities: list[TransporterCapability] = Field(default_factory=list)
    international_transport: bool = False
    eurovergunning: str | None = None

    normalize_permit = field_validator("eurovergunning", mode="before")(_blank_to_none)


class ReceiverConfigDocument(DocumentModel):
    lma_reporting_obligated: bool = True
    processor_number: str | None = None
    allowed_waste_type_ids: list[str] = Field(default_factory=list)
    facility_type: FacilityType | None = None

    normalize_optional = field_validator("processor_number", "facility_type", mode="before")(
        _blank_to_none
    )


class EntityDocument(DocumentModel):
    id: str
    name: str
    entity_type: EntityType = EntityType.CUSTOMER
    is_tenant: bool = False
    is_default_internal_collector: bool = False
    street: str = ""
    house_number: str = ""
    postal_code: str = ""
    city: str = ""
    country: str = "Netherlands"
    kvk_number: str = ""
    vihb_number: str | None = None
    roles: list[EntityRole] = Field(default_factory=list)
    sender_config: SenderConfigDocument | None = None
    transporter_config: TransporterConfigDocument | None = None
    receiver_config: ReceiverConfigDocument | None = None
    service_points: list[ServicePointDocument] = Field(default_factory=list)
    created_at: datetime

    normalize_vihb = field_validator("vihb_number", mode="before")(_blank_to_none)


class WasteTypeDocument(DocumentModel):
    id: str
    name: str
    ewc_code: str
    hazardous: bool = False
    description: str = ""
    active: bool = True


class DestinationDocument(DocumentModel):
    id: str
    receiver_id: str
    asn: str | None = None
    processing_method: ProcessingMethod

    normalize_asn = field_validator("asn", mode="before")(_blank_to_none)


class WasteStreamDocument(DocumentModel):
    waste_type_id: str
    destinations: list[DestinationDocument]
    default_destination_id: str = ""


class AgreementDocument(DocumentModel):
    id: str
    disposer_id: str
    service_point_id: str | None = None
    reporting_system: ReportingSystem
    valid_from: date
    valid_until: date | None = None
    sender_id: str
    transporter_id: str
    status: AgreementStatus = AgreementStatus.ACTIVE
    waste_streams: list[WasteStreamDocument] = Field(default_factory=list)
    created_at: datetime

    normalize_optional = field_validator("service_point_id", "valid_until", mode="before")(
        _blank_to_none
    )


class OrderTypeDocument(DocumentModel):
    id: str
    name: str
    description: str | None = None
    waste_type_selection: WasteTypeSelection = WasteTypeSelection.MULTIPLE
    compliance_module: ComplianceModule = ComplianceModule.NONE
    lma_reporting_method: LmaReportingMethod | None = None

    normalize_optional = field_validator(
        "description", "lma_reporting_method", mode="before"
    )(_blank_to_none)


class WasteLineDocument(DocumentModel):
    id: str
    waste_type_id: str
    disposer_id: str | None = None
    receiver_id: str | None = None
    asn: str | None = None
    processing_method: ProcessingMethod | None = None
    afas_rom_number: str | None = None
    sender_id: str | None = None
    transporter_id: str | None = None

    normalize_optional = field_validator(
        "disposer_id",
        "receiver_id",
        "asn",
        "processing_method",
        "afas_rom_number",
        "sender_id",
        "transporter_id",
        mode="before",
    )(_blank_to_none)


class OrderDocument(DocumentModel):
    id: str
    entity_id: str
    service_point_id: str
    order_type_id: str
    fulfillment_date: date
    order_name: str
    status: OrderStatus = OrderStatus.SUBMITTED
    waste_lines: list[WasteLineDocument] = Field(default_factory=list)
    agreement_transporter_id: str | None = Field(
        default=None, alias="agreementTransporterEntityId"
    )
    use_outsourced_carrier: bool = False
    outsourced_carrier_id: str | None = Field(default=None, alias="outsourcedCarrierEntityId")
    note: str | None = None
    created_at: datetime
    updated_at: datetime

    normalize_optional = field_validator(
        "agreement_transporter_id", "outsourced_carrier_id", "note", mode="before"
    )(_blank_to_none)
