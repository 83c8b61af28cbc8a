"""Versioned seed data written into empty collections on first use.

Bump ``SEED_VERSION`` whenever the fixtures change; stored collections record the
version they were seeded with.
"""

from __future__ import annotations

from datetime import UTC, date, datetime
from typing import Final

from wasteflow.domain.model import (
    Address,
    Agreement,
    ComplianceModule,
    Destination,
    Entity,
    EntityRole,
    EntityType,
    FacilityType,
    FleetSource,
    LmaReportingMethod,
    OrderType,
    ProcessingMethod,
    ReceiverConfig,
    ReportingSystem,
    SenderConfig,
    SenderLegalRole,
    ServicePoint,
    TransporterCapability,
    TransporterConfig,
    WasteStream,
    WasteType,
    WasteTypeSelection,
)

SEED_VERSION: Final[int] = 1
SEEDED_AT: Final[datetime] = datetime(2024, 1, 1, tzinfo=UTC)

GFT: Final[str] = "wt-seed-0"
OPK: Final[str] = "wt-seed-1"
PMD: Final[str] = "wt-seed-2"
REST: Final[str] = "wt-seed-3"


def seed_waste_types() -> list[WasteType]:
    return [
        WasteType(
            id=GFT,
            name="GFT (Groente-, Fruit- en Tuinafval)",
            ewc_code="20 01 08",
            description="Organic waste from vegetables, fruit and garden",
        ),
        WasteType(
            id=OPK,
            name="OPK (Papier en Karton)",
            ewc_code="20 01 01",
            description="Paper and cardboard waste",
        ),
        WasteType(
            id=PMD,
            name="PMD (Gemengde verpakkingen)",
            ewc_code="15 01 06",
            description="Mixed packaging waste - plastic, metal, drink cartons",
        ),
        WasteType(
            id=REST,
            name="Restafval",
            ewc_code="20 03 01",
            description="Residual household waste",
        ),
    ]


def _rotterdam(street: str, house_number: str, postal_code: str) -> Address:
    return Address(
        street=street, house_number=house_number, postal_code=postal_code, city="Rotterdam"
    )


def _point(
    point_id: str, name: str, street: str, house_number: str, postal_code: str
) -> ServicePoint:
    return ServicePoint(
        id=point_id, name=name, address=_rotterdam(street, house_number, postal_code)
    )


def _customer(
    entity_id: str,
    name: str,
    address: Address,
    kvk_number: str,
    *service_points: ServicePoint,
    sender: bool = True,
) -> Entity:
    roles = {EntityRole.DISPOSER}
    if sender:
        roles.add(EntityRole.SENDER)
    return Entity(
        id=entity_id,
        name=name,
        entity_type=EntityType.CUSTOMER,
        roles=frozenset(roles),
        address=address,
        kvk_number=kvk_number,
        sender_config=(
            SenderConfig(legal_roles=frozenset({SenderLegalRole.ONTDOENER})) if sender else None
        ),
        created_at=SEEDED_AT,
        _service_points=list(service_points),
    )


def _processor(
    entity_id: str,
    name: str,
    address: Address,
    kvk_number: str,
    facility_type: FacilityType = FacilityType.PROCESSOR,
) -> Entity:
    return Entity(
        id=entity_id,
        name=name,
        entity_type=EntityType.SUPPLIER,
        roles=frozenset({EntityRole.RECEIVER}),
        address=address,
        kvk_number=kvk_number,
        receiver_config=ReceiverConfig(facility_type=facility_type),
        created_at=SEEDED_AT,
    )


def seed_entities() -> list[Entity]:
    reinis = Entity(
        id="reinis_nv",
        name="Reinis N.V.",
        entity_type=EntityType.INTERNAL_BRANCH,
        roles=frozenset({EntityRole.SENDER, EntityRole.DISPOSER, EntityRole.TRANSPORTER}),
        address=_rotterdam("Waalhaven Oostzijde", "12", "3087 AM"),
        kvk_number="24123456",
        vihb_number="VIHB-001234",
        is_tenant=True,
        sender_config=SenderConfig(
            legal_roles=frozenset({SenderLegalRole.ONTDOENER, SenderLegalRole.HANDELAAR})
        ),
        transporter_config=TransporterConfig(
            fleet_source=FleetSource.INTERNAL,
            legal_capabilities=frozenset(
                {TransporterCapability.INZAMELAARS, TransporterCapability.VERVOERDER}
            ),
        ),
        created_at=SEEDED_AT,
        _is_default_internal_collector=True,
    )
    renewi = Entity(
        id="renewi",
        name="Renewi (Rotterdam)",
        entity_type=EntityType.SUPPLIER,
        roles=frozenset({EntityRole.TRANSPORTER, EntityRole.RECEIVER}),
        address=_rotterdam("Botlekweg", "5", "3197 KB"),
        kvk_number="24456789",
        vihb_number="VIHB-987654",
        transporter_config=TransporterConfig(
            fleet_source=FleetSource.EXTERNAL,
            legal_capabilities=frozenset({TransporterCapability.VERVOERDER}),
        ),
        receiver_config=ReceiverConfig(facility_type=FacilityType.TRANSFER_STATION),
        created_at=SEEDED_AT,
    )
    return [
        reinis,
        _customer(
            "erasmus_mc",
            "Erasmus MC (Rotterdam)",
            _rotterdam("Doctor Molewaterplein", "40", "3015 GD"),
            "24890123",
            _point("erasmus_waste_dock", "Erasmus MC – Waste Dock", "Wytemaweg", "80", "3015 CN"),
            _point(
                "erasmus_pharmacy_labs",
                "Erasmus MC – Pharmacy & Labs",
                "Doctor Molewaterplein",
                "50",
                "3015 GD",
            ),
        ),
        _customer(
            "maasstad",
            "Maasstad Ziekenhuis (Rotterdam)",
            _rotterdam("Maasstadweg", "21", "3079 DZ"),
            "24891234",
            _point(
                "maasstad_service_yard", "Maasstad – Service Yard", "Maasstadweg", "25", "3079 DZ"
            ),
            sender=False,
        ),
        _customer(
            "havenbedrijf",
            "Port of Rotterdam Authority",
            _rotterdam("Wilhelminakade", "909", "3072 AP"),
            "24892345",
            _point("maasvlakte_gate_a", "Maasvlakte – Gate A", "Maasvlakteweg", "1", "3199 LZ"),
            _point(
                "waalhaven_yard_3", "Waalhaven – Yard 3", "Waalhaven Zuidzijde", "3", "3089 JH"
            ),
        ),
        _customer(
            "rotterdam_municipality",
            "Municipality of Rotterdam",
            _rotterdam("Coolsingel", "40", "3011 AD"),
            "24234567",
            _point(
                "municipal_transfer_zuid",
                "Municipal Transfer Station Zuid",
                "Schiehaven",
                "50",
                "3024 EC",
            ),
            _point(
                "municipal_depot_noord", "Municipal Depot Noord", "Overschieseweg", "10", "3044 EE"
            ),
        ),
        _customer(
            "bouwcom",
            "Bouwcom Rotterdam BV (Construction)",
            _rotterdam("Maasboulevard", "100", "3063 NS"),
            "24345678",
            _point("bouwcom_keileweg", "Bouwcom – Site Keileweg", "Keileweg", "15", "3029 BS"),
            _point(
                "bouwcom_europoort", "Bouwcom – Site Europoort", "Europaweg", "200", "3198 LD"
            ),
        ),
        renewi,
        _processor(
            "avr",
            "AVR Afvalverwerking (Rotterdam)",
            _rotterdam("Schiehavenweg", "1", "3089 JH"),
            "24678901",
        ),
        _processor(
            "indaver", "Indaver NL", _rotterdam("Oude Maasweg", "91", "3197 KE"), "24567890"
        ),
        _processor("attero", "Attero NL", _rotterdam("Europaweg", "200", "3199 LD"), "24789012"),
        _processor(
            "atm",
            "ATM Moerdijk",
            Address(street="Middenweg", house_number="36", postal_code="4782 PM", city="Moerdijk"),
            "24790123",
        ),
        _processor(
            "sme_haz",
            "Specialist Hazardous Waste Center (NL)",
            _rotterdam("Industrieweg", "50", "3044 AS"),
            "24791234",
        ),
        _processor(
            "suez",
            "SUEZ NL",
            _rotterdam("Shannonweg", "15", "3197 KB"),
            "24792345",
            FacilityType.SORTING_FACILITY,
        ),
    ]


def seed_agreements() -> list[Agreement]:
    streams = [
        WasteStream.create(
            PMD,
            [
                Destination(
                    id="dest-pmd-avr",
                    receiver_id="avr",
                    asn="ASN-PMD-001",
                    processing_method=ProcessingMethod.MATERIAL_RECOVERY,
                ),
                Destination(
                    id="dest-pmd-renewi",
                    receiver_id="renewi",
                    asn="ASN-PMD-002",
                    processing_method=ProcessingMethod.MATERIAL_RECOVERY,
                ),
            ],
            default_destination_id="dest-pmd-avr",
        ),
        WasteStream.create(
            OPK,
            [
                Destination(
                    id="dest-opk-avr",
                    receiver_id="avr",
                    asn="ASN-OPK-001",
                    processing_method=ProcessingMethod.MATERIAL_RECOVERY,
                ),
            ],
        ),
        WasteStream.create(
            GFT,
            [
                Destination(
                    id="dest-gft-indaver",
                    receiver_id="indaver",
                    asn="ASN-GFT-001",
                    processing_method=ProcessingMethod.COMPOSTING,
                ),
            ],
        ),
        WasteStream.create(
            REST,
            [
                Destination(
                    id="dest-rest-avr",
                    receiver_id="avr",
                    asn="ASN-REST-001",
                    processing_method=ProcessingMethod.ENERGY_RECOVERY,
                ),
                Destination(
                    id="dest-rest-attero",
                    receiver_id="attero",
                    asn="ASN-REST-002",
                    processing_method=ProcessingMethod.ENERGY_RECOVERY,
                ),
            ],
            default_destination_id="dest-rest-avr",
        ),
    ]
    return [
        Agreement(
            id="agr-seed-ri-1",
            disposer_id="rotterdam_municipality",
            reporting_system=ReportingSystem.ROUTE_INZAMELING,
            valid_from=date(2024, 1, 1),
            valid_until=date(2026, 12, 31),
            sender_id="rotterdam_municipality",
            transporter_id="reinis_nv",
            created_at=SEEDED_AT,
            _waste_streams=streams,
        )
    ]


def seed_order_types() -> list[OrderType]:
    return [
        OrderType(
            id="ot-seed-basic",
            name="Container Pickup",
            description="Single pickup reported under the basic system",
            waste_type_selection=WasteTypeSelection.MULTIPLE,
            compliance_module=ComplianceModule.NL_LMA,
            lma_reporting_method=LmaReportingMethod.BASIC_SYSTEM,
        ),
        OrderType(
            id="ot-seed-collector",
            name="Collector Pickup",
            description="Small-volume pickup under the collectors scheme",
            waste_type_selection=WasteTypeSelection.MULTIPLE,
            compliance_module=ComplianceModule.NL_LMA,
            lma_reporting_method=LmaReportingMethod.COLLECTORS_SCHEMA,
        ),
        OrderType(
            id="ot-seed-route",
            name="Route Collection",
            waste_type_selection=WasteTypeSelection.MULTIPLE,
            compliance_module=ComplianceModule.NL_LMA,
            lma_reporting_method=LmaReportingMethod.ROUTE_COLLECTION,
        ),
    ]
