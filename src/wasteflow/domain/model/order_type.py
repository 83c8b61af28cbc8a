"""Order templates."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from wasteflow.domain.model.base import Record
from wasteflow.domain.model.enums import (
    ComplianceModule,
    LmaReportingMethod,
    WasteTypeSelection,
)


@dataclass(eq=False, kw_only=True)
class OrderType(Record):
    """Declares how many waste types an order takes and how it is reported.

    The LMA reporting method only exists for the ``nl_lma`` compliance module and is
    cleared for every other module.
    """

    ID_PREFIX: ClassVar[str] = "ot"

    name: str
    description: str | None = None
    waste_type_selection: WasteTypeSelection = WasteTypeSelection.MULTIPLE
    compliance_module: ComplianceModule = ComplianceModule.NONE
    lma_reporting_method: LmaReportingMethod | None = None

    def __post_init__(self) -> None:
        if self.compliance_module != ComplianceModule.NL_LMA:
            self.lma_reporting_method = None

    @property
    def takes_waste_types(self) -> bool:
        return self.waste_type_selection != WasteTypeSelection.NONE

    @property
    def reporting_label(self) -> str:
        if self.lma_reporting_method is None:
            return "-"
        return self.lma_reporting_method.display_name

    def validation_errors(self) -> dict[str, str]:
        errors: dict[str, str] = {}
        if not self.name.strip():
            errors["name"] = "Name is required"
        if (
            self.compliance_module == ComplianceModule.NL_LMA
            and self.lma_reporting_method is None
        ):
            errors["lma_reporting_method"] = (
                "LMA Reporting Method is required when Compliance Module is Netherlands – LMA"
            )
        return errors
