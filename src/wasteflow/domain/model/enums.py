"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class EntityRole(StrEnum):
    SENDER = "Sender"
    DISPOSER = "Disposer"
    TRANSPORTER = "Transporter"
    RECEIVER = "Receiver"


class EntityType(StrEnum):
    CUSTOMER = "Customer"
    SUPPLIER = "Supplier"
    PARTNER = "Partner"
    INTERNAL_BRANCH = "Internal Branch"


class SenderLegalRole(StrEnum):
    """Legal capacity in which a sender signs the Begeleidingsbrief."""

    ONTDOENER = "Ontdoener"
    ONTVANGER = "Ontvanger"
    HANDELAAR = "Handelaar"
    BEMIDDELAAR = "Bemiddelaar"


class FleetSource(StrEnum):
    INTERNAL = "Internal"
    EXTERNAL = "External"


class TransporterCapability(StrEnum):
    INZAMELAARS = "Inzamelaars"
    VERVOERDER = "Vervoerder"


class FacilityType(StrEnum):
    PROCESSOR = "Processor"
    TRANSFER_STATION = "Transfer Station"
    SORTING_FACILITY = "Sorting Facility"
    STORAGE = "Storage"


class ReportingSystem(StrEnum):
    """Reporting system recorded on an agreement.

    ``ROUTE_INZAMELING`` is the legacy Dutch label for route collection and is kept
    so stored agreements keep loading.
    """

    BASIC_SYSTEM = "Basic System"
    COLLECTOR_SCHEME = "Collector Scheme"
    ROUTE_COLLECTION = "Route Collection"
    ROUTE_INZAMELING = "Route Inzameling"


class AgreementStatus(StrEnum):
    ACTIVE = "Active"
    INACTIVE = "Inactive"


class ProcessingMethod(StrEnum):
    MATERIAL_RECOVERY = "Material Recovery"
    ENERGY_RECOVERY = "Energy Recovery"
    COMPOSTING = "Composting"
    SECURE_DISPOSAL = "Secure Disposal"
    CHEMICAL_TREATMENT = "Chemical Treatment"


class WasteTypeSelection(StrEnum):
    NONE = "none"
    SINGLE = "single"
    MULTIPLE = "multiple"


class ComplianceModule(StrEnum):
    NONE = "none"
    NL_LMA = "nl_lma"
    GLOBAL = "global"


class LmaReportingMethod(StrEnum):
    """Reporting method of an order type; selects the resolution mode."""

    BASIC_SYSTEM = "basic_system"
    COLLECTORS_SCHEMA = "collectors_schema"
    ROUTE_COLLECTION = "route_collection"

    @property
    def display_name(self) -> str:
        return _REPORTING_METHOD_LABELS[self]


_REPORTING_METHOD_LABELS: dict[LmaReportingMethod, str] = {
    LmaReportingMethod.BASIC_SYSTEM: "Basic System (Basissystematiek)",
    LmaReportingMethod.COLLECTORS_SCHEMA: "Collectors Schema (Inzamelaarsregeling)",
    LmaReportingMethod.ROUTE_COLLECTION: "Route Collection (Route-inzameling)",
}


class OrderStatus(StrEnum):
    DRAFT = "Draft"
    SUBMITTED = "Submitted"
