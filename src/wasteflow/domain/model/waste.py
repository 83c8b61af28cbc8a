"""Waste types and the European Waste Catalogue (EWC) codes they are classified by."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Final

from wasteflow.domain.model.base import Record


@dataclass(frozen=True, slots=True)
class EwcCode:
    code: str
    description: str
    hazardous: bool


EWC_CATALOG: Final[tuple[EwcCode, ...]] = (
    EwcCode("18 01 03*", "Infectious Medical Waste", hazardous=True),
    EwcCode("18 01 09", "Pharmaceutical Waste", hazardous=False),
    EwcCode("20 03 01", "Mixed Municipal Waste", hazardous=False),
    EwcCode("20 01 08", "Biodegradable Kitchen and Garden Waste", hazardous=False),
    EwcCode("15 01 02", "Plastic Packaging", hazardous=False),
    EwcCode("20 01 01", "Paper and Cardboard", hazardous=False),
    EwcCode("20 03 07", "Bulky Waste", hazardous=False),
    EwcCode("17 09 04", "Mixed Construction and Demolition Waste", hazardous=False),
    EwcCode("17 05 03*", "Contaminated Soil", hazardous=True),
    EwcCode("16 05 06*", "Laboratory Chemicals", hazardous=True),
    EwcCode("16 02 14", "Discarded Electronic Equipment", hazardous=False),
    EwcCode("17 06 05*", "Construction Materials Containing Asbestos", hazardous=True),
    EwcCode("13 02 05*", "Mineral-Based Engine Oils", hazardous=True),
    EwcCode("15 01 10*", "Packaging Containing Hazardous Residues", hazardous=True),
)

_CATALOG_BY_CODE: Final[dict[str, EwcCode]] = {entry.code: entry for entry in EWC_CATALOG}


def normalize_ewc_code(code: str) -> str:
    """Collapse whitespace so ``"20  01 08"`` and ``" 20 01 08"`` compare equal."""

    return " ".join(code.split())


def lookup_ewc(code: str) -> EwcCode | None:
    return _CATALOG_BY_CODE.get(normalize_ewc_code(code))


def is_hazardous_ewc(code: str) -> bool:
    """Catalogue entries decide; unknown codes are hazardous when marked with ``*``."""

    entry = lookup_ewc(code)
    if entry is not None:
        return entry.hazardous
    return normalize_ewc_code(code).endswith("*")


@dataclass(eq=False, kw_only=True)
class WasteType(Record):
    ID_PREFIX: ClassVar[str] = "wt"

    name: str
    ewc_code: str
    description: str = ""
    active: bool = True

    def __post_init__(self) -> None:
        self.ewc_code = normalize_ewc_code(self.ewc_code)

    @property
    def hazardous(self) -> bool:
        return is_hazardous_ewc(self.ewc_code)

    def deactivate(self) -> None:
        self.active = False

    def reactivate(self) -> None:
        self.active = True
