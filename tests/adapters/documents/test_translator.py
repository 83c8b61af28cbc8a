from __future__ import annotations

from datetime import date

from tests.helpers.builders import (
    FIXED_TIME,
    make_agreement,
    make_collector,
    make_customer,
    make_order_type,
    make_stream,
    make_waste_type,
)
from wasteflow.adapters.documents.translator import (
    agreement_from_document,
    agreement_to_document,
    entity_from_document,
    entity_to_document,
    order_from_document,
    order_to_document,
    order_type_from_document,
    order_type_to_document,
    waste_type_from_document,
    waste_type_to_document,
)
from wasteflow.domain.model import (
    EntityRole,
    LmaReportingMethod,
    Order,
    OrderStatus,
    ProcessingMethod,
    WasteLine,
)


def _order() -> Order:
    return Order(
        id="ORD-000042",
        entity_id="customer",
        service_point_id="yard",
        order_type_id="basic_pickup",
        fulfillment_date=date(2025, 3, 14),
        order_name="Customer – Basic Pickup – 14 Mar 2025",
        status=OrderStatus.SUBMITTED,
        agreement_transporter_id="carrier",
        use_outsourced_carrier=True,
        outsourced_carrier_id="subcontractor",
        created_at=FIXED_TIME,
        updated_at=FIXED_TIME,
        _waste_lines=[
            WasteLine(
                waste_type_id="gft",
                disposer_id="customer",
                receiver_id="R1",
                asn="ASN-gft-R1",
                processing_method=ProcessingMethod.COMPOSTING,
                sender_id="customer",
                transporter_id="carrier",
            )
        ],
    )


def test_entity_document_uses_camel_case_and_flat_address() -> None:
    entity = make_customer("customer", "yard")

    document = entity_to_document(entity)

    assert document["isDefaultInternalCollector"] is False
    assert document["kvkNumber"] == "24000000"
    assert document["city"] == "Rotterdam"
    assert document["roles"] == ["Disposer", "Sender"]
    assert document["servicePoints"][0]["id"] == "yard"
    assert document["senderConfig"] == {"legalRoles": ["Ontdoener"]}
    assert document["createdAt"].startswith("2025-03-01T09:30:00")


def test_entity_round_trip_keeps_collector_flag_and_configs() -> None:
    collector = make_collector()

    restored = entity_from_document(entity_to_document(collector))

    assert restored.id == collector.id
    assert restored.roles == collector.roles
    assert restored.is_default_internal_collector
    assert restored.transporter_config == collector.transporter_config
    assert restored.created_at == FIXED_TIME


def test_entity_document_tolerates_blank_optionals_and_unknown_keys() -> None:
    payload = {
        "id": "legacy",
        "name": "Legacy BV",
        "vihbNumber": "  ",
        "roles": ["Receiver"],
        "receiverConfig": {"processorNumber": "", "facilityType": ""},
        "createdAt": "2024-01-01T00:00:00+00:00",
        "uiExpanded": True,
    }

    entity = entity_from_document(payload)

    assert entity.vihb_number is None
    assert entity.roles == frozenset({EntityRole.RECEIVER})
    assert entity.receiver_config is not None
    assert entity.receiver_config.processor_number is None
    assert entity.receiver_config.facility_type is None


def test_agreement_round_trip_keeps_stream_defaults() -> None:
    agreement = make_agreement(
        "agr-1",
        make_stream("gft", "R1", "R2", default="R2"),
        service_point_id="yard",
    )

    document = agreement_to_document(agreement)
    restored = agreement_from_document(document)

    assert document["reportingSystem"] == "Basic System"
    assert document["wasteStreams"][0]["defaultDestinationId"] == "dest-gft-R2"
    assert restored.service_point_id == "yard"
    stream = restored.stream_for("gft")
    assert stream is not None
    assert stream.default_destination_id == "dest-gft-R2"
    assert stream.destinations == agreement.waste_streams[0].destinations


def test_order_document_uses_stored_transporter_keys() -> None:
    document = order_to_document(_order())

    assert document["agreementTransporterEntityId"] == "carrier"
    assert document["outsourcedCarrierEntityId"] == "subcontractor"
    assert document["fulfillmentDate"] == "2025-03-14"
    assert document["wasteLines"][0]["processingMethod"] == "Composting"

    restored = order_from_document(document)
    assert restored.agreement_transporter_id == "carrier"
    assert restored.outsourced_carrier_id == "subcontractor"
    (line,) = restored.waste_lines
    assert line.receiver_id == "R1"
    assert line.processing_method == ProcessingMethod.COMPOSTING


def test_order_document_blank_note_becomes_none() -> None:
    document = order_to_document(_order())
    document["note"] = ""
    document["agreementTransporterEntityId"] = ""

    order = order_from_document(document)

    assert order.note is None
    assert order.agreement_transporter_id is None


def test_catalogue_records_round_trip() -> None:
    waste_type = make_waste_type("gft", "20 01 08")
    waste_type.deactivate()
    order_type = make_order_type("route", LmaReportingMethod.ROUTE_COLLECTION)

    restored_waste_type = waste_type_from_document(waste_type_to_document(waste_type))
    order_type_document = order_type_to_document(order_type)

    assert restored_waste_type.ewc_code == "20 01 08"
    assert not restored_waste_type.active
    assert order_type_document["lmaReportingMethod"] == "Route Collection"
    restored_order_type = order_type_from_document(order_type_document)
    assert restored_order_type.id == "route"
    assert restored_order_type.lma_reporting_method == LmaReportingMethod.ROUTE_COLLECTION
