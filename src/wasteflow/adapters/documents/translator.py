"""Translate domain records to stored documents and back."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from wasteflow.adapters.documents.schema import (
    AgreementDocument,
    DestinationDocument,
    DocumentModel,
    EntityDocument,
    OrderDocument,
    OrderTypeDocument,
    ReceiverConfigDocument,
    SenderConfigDocument,
    ServicePointDocument,
    TransporterConfigDocument,
    WasteLineDocument,
    WasteStreamDocument,
    WasteTypeDocument,
)
from wasteflow.domain.fixtures import (
    seed_agreements,
    seed_entities,
    seed_order_types,
    seed_waste_types,
)
from wasteflow.domain.model import (
    Address,
    Agreement,
    Destination,
    Entity,
    Order,
    OrderType,
    ReceiverConfig,
    Record,
    SenderConfig,
    ServicePoint,
    TransporterConfig,
    WasteLine,
    WasteStream,
    WasteType,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from wasteflow.domain.ports import Document


def _dump(model: DocumentModel) -> Document:
    return model.model_dump(mode="json", by_alias=True)


# Entities --------------------------------------------------------------------


def _service_point_to_record(document: ServicePointDocument) -> ServicePoint:
    return ServicePoint(
        id=document.id,
        name=document.name,
        address=Address(
            street=document.street,
            house_number=document.house_number,
            postal_code=document.postal_code,
            city=document.city,
        ),
    )


def entity_from_document(payload: Document) -> Entity:
    document = EntityDocument.model_validate(payload)
    sender = document.sender_config
    transporter = document.transporter_config
    receiver = document.receiver_config
    return Entity(
        id=document.id,
        name=document.name,
        entity_type=document.entity_type,
        roles=frozenset(document.roles),
        address=Address(
            street=document.street,
            house_number=document.house_number,
            postal_code=document.postal_code,
            city=document.city,
            country=document.country,
        ),
        kvk_number=document.kvk_number,
        vihb_number=document.vihb_number,
        is_tenant=document.is_tenant,
        sender_config=(
            SenderConfig(legal_roles=frozenset(sender.legal_roles)) if sender else None
        ),
        transporter_config=(
            TransporterConfig(
                fleet_source=transporter.fleet_source,
                legal_capabilities=frozenset(transporter.legal_capabilities),
                international_transport=transporter.international_transport,
                eurovergunning=transporter.eurovergunning,
            )
            if transporter
            else None
        ),
        receiver_config=(
            ReceiverConfig(
                lma_reporting_obligated=receiver.lma_reporting_obligated,
                processor_number=receiver.processor_number,
                allowed_waste_type_ids=tuple(receiver.allowed_waste_type_ids),
                facility_type=receiver.facility_type,
            )
            if receiver
            else None
        ),
        created_at=document.created_at,
        _is_default_internal_collector=document.is_default_internal_collector,
        _service_points=[_service_point_to_record(sp) for sp in document.service_points],
    )


def entity_to_document(entity: Entity) -> Document:
    sender = entity.sender_config
    transporter = entity.transporter_config
    receiver = entity.receiver_config
    document = EntityDocument(
        id=entity.id,
        name=entity.name,
        entity_type=entity.entity_type,
        is_tenant=entity.is_tenant,
        is_default_internal_collector=entity.is_default_internal_collector,
        street=entity.address.street,
        house_number=entity.address.house_number,
        postal_code=entity.address.postal_code,
        city=entity.address.city,
        country=entity.address.country,
        kvk_number=entity.kvk_number,
        vihb_number=entity.vihb_number,
        roles=sorted(entity.roles),
        sender_config=(
            SenderConfigDocument(legal_roles=sorted(sender.legal_roles)) if sender else None
        ),
        transporter_config=(
            TransporterConfigDocument(
                fleet_source=transporter.fleet_source,
                legal_capabilities=sorted(transporter.legal_capabilities),
                international_transport=transporter.international_transport,
                eurovergunning=transporter.eurovergunning,
            )
            if transporter
            else None
        ),
        receiver_config=(
            ReceiverConfigDocument(
                lma_reporting_obligated=receiver.lma_reporting_obligated,
                processor_number=receiver.processor_number,
                allowed_waste_type_ids=list(receiver.allowed_waste_type_ids),
                facility_type=receiver.facility_type,
            )
            if receiver
            else None
        ),
        service_points=[
            ServicePointDocument(
                id=sp.id,
                name=sp.name,
                street=sp.address.street,
                house_number=sp.address.house_number,
                postal_code=sp.address.postal_code,
                city=sp.address.city,
            )
            for sp in entity.service_points
        ],
        created_at=entity.created_at,
    )
    return _dump(document)


# Waste types -----------------------------------------------------------------


def waste_type_from_document(payload: Document) -> WasteType:
    document = WasteTypeDocument.model_validate(payload)
    return WasteType(
        id=document.id,
        name=document.name,
        ewc_code=document.ewc_code,
        description=document.description,
        active=document.active,
    )


def waste_type_to_document(waste_type: WasteType) -> Document:
    return _dump(
        WasteTypeDocument(
            id=waste_type.id,
            name=waste_type.name,
            ewc_code=waste_type.ewc_code,
            hazardous=waste_type.hazardous,
            description=waste_type.description,
            active=waste_type.active,
        )
    )


# Agreements ------------------------------------------------------------------


def agreement_from_document(payload: Document) -> Agreement:
    document = AgreementDocument.model_validate(payload)
    return Agreement(
        id=document.id,
        disposer_id=document.disposer_id,
        service_point_id=document.service_point_id,
        reporting_system=document.reporting_system,
        valid_from=document.valid_from,
        valid_until=document.valid_until,
        sender_id=document.sender_id,
        transporter_id=document.transporter_id,
        status=document.status,
        created_at=document.created_at,
        _waste_streams=[
            WasteStream.create(
                stream.waste_type_id,
                [
                    Destination(
                        id=d.id,
                        receiver_id=d.receiver_id,
                        processing_method=d.processing_method,
                        asn=d.asn,
                    )
                    for d in stream.destinations
                ],
                default_destination_id=stream.default_destination_id,
            )
            for stream in document.waste_streams
        ],
    )


def agreement_to_document(agreement: Agreement) -> Document:
    return _dump(
        AgreementDocument(
            id=agreement.id,
            disposer_id=agreement.disposer_id,
            service_point_id=agreement.service_point_id,
            reporting_system=agreement.reporting_system,
            valid_from=agreement.valid_from,
            valid_until=agreement.valid_until,
            sender_id=agreement.sender_id,
            transporter_id=agreement.transporter_id,
            status=agreement.status,
            created_at=agreement.created_at,
            waste_streams=[
                WasteStreamDocument(
                    waste_type_id=stream.waste_type_id,
                    default_destination_id=stream.default_destination_id,
                    destinations=[
                        DestinationDocument(
                            id=d.id,
                            receiver_id=d.receiver_id,
                            asn=d.asn,
                            processing_method=d.processing_method,
                        )
                        for d in stream.destinations
                    ],
                )
                for stream in agreement.waste_streams
            ],
        )
    )


# Order types -----------------------------------------------------------------


def order_type_from_document(payload: Document) -> OrderType:
    document = OrderTypeDocument.model_validate(payload)
    return OrderType(
        id=document.id,
        name=document.name,
        description=document.description,
        waste_type_selection=document.waste_type_selection,
        compliance_module=document.compliance_module,
        lma_reporting_method=document.lma_reporting_method,
    )


def order_type_to_document(order_type: OrderType) -> Document:
    return _dump(
        OrderTypeDocument(
            id=order_type.id,
            name=order_type.name,
            description=order_type.description,
            waste_type_selection=order_type.waste_type_selection,
            compliance_module=order_type.compliance_module,
            lma_reporting_method=order_type.lma_reporting_method,
        )
    )


# Orders ----------------------------------------------------------------------


def order_from_document(payload: Document) -> Order:
    document = OrderDocument.model_validate(payload)
    return Order(
        id=document.id,
        entity_id=document.entity_id,
        service_point_id=document.service_point_id,
        order_type_id=document.order_type_id,
        fulfillment_date=document.fulfillment_date,
        order_name=document.order_name,
        status=document.status,
        agreement_transporter_id=document.agreement_transporter_id,
        use_outsourced_carrier=document.use_outsourced_carrier,
        outsourced_carrier_id=document.outsourced_carrier_id,
        note=document.note,
        created_at=document.created_at,
        updated_at=document.updated_at,
        _waste_lines=[
            WasteLine(
                id=line.id,
                waste_type_id=line.waste_type_id,
                disposer_id=line.disposer_id,
                receiver_id=line.receiver_id,
                asn=line.asn,
                processing_method=line.processing_method,
                sender_id=line.sender_id,
                transporter_id=line.transporter_id,
                afas_rom_number=line.afas_rom_number,
            )
            for line in document.waste_lines
        ],
    )


def order_to_document(order: Order) -> Document:
    return _dump(
        OrderDocument(
            id=order.id,
            entity_id=order.entity_id,
            service_point_id=order.service_point_id,
            order_type_id=order.order_type_id,
            fulfillment_date=order.fulfillment_date,
            order_name=order.order_name,
            status=order.status,
            agreement_transporter_id=order.agreement_transporter_id,
            use_outsourced_carrier=order.use_outsourced_carrier,
            outsourced_carrier_id=order.outsourced_carrier_id,
            note=order.note,
            created_at=order.created_at,
            updated_at=order.updated_at,
            waste_lines=[
                WasteLineDocument(
                    id=line.id,
                    waste_type_id=line.waste_type_id,
                    disposer_id=line.disposer_id,
                    receiver_id=line.receiver_id,
                    asn=line.asn,
                    processing_method=line.processing_method,
                    sender_id=line.sender_id,
                    transporter_id=line.transporter_id,
                    afas_rom_number=line.afas_rom_number,
                )
                for line in order.waste_lines
            ],
        )
    )


# Collections -----------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class CollectionCodec[TRecord: Record]:
    """How one stored collection is named, decoded, encoded and seeded."""

    key: str
    decode: Callable[[Document], TRecord]
    encode: Callable[[TRecord], Document]
    seed: Callable[[], Sequence[TRecord]] | None = None


ENTITIES: Final = CollectionCodec[Entity](
    "entities", entity_from_document, entity_to_document, seed_entities
)
WASTE_TYPES: Final = CollectionCodec[WasteType](
    "waste_types", waste_type_from_document, waste_type_to_document, seed_waste_types
)
ORDER_TYPES: Final = CollectionCodec[OrderType](
    "order_types", order_type_from_document, order_type_to_document, seed_order_types
)
AGREEMENTS: Final = CollectionCodec[Agreement](
    "agreements", agreement_from_document, agreement_to_document, seed_agreements
)
ORDERS: Final = CollectionCodec[Order]("orders", order_from_document, order_to_document)
