"""Collection orders and their frozen waste-line snapshots."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, ClassVar, Final

from wasteflow.domain.model.base import Record, new_id, utcnow
from wasteflow.domain.model.enums import OrderStatus

if TYPE_CHECKING:
    from datetime import date, datetime

    from wasteflow.domain.model.enums import ProcessingMethod

NO_SERVICE_POINT: Final[str] = "no_service_point"


@dataclass(frozen=True, slots=True, kw_only=True)
class WasteLine:
    """Regulatory parties for one waste type, copied at order creation.

    Lines never point back at the agreement they were resolved from, so later
    agreement edits leave historical orders untouched.
    """

    id: str = field(default_factory=lambda: new_id("wl"))
    waste_type_id: str
    disposer_id: str | None = None
    receiver_id: str | None = None
    asn: str | None = None
    processing_method: ProcessingMethod | None = None
    sender_id: str | None = None
    transporter_id: str | None = None
    afas_rom_number: str | None = None


@dataclass(eq=False, kw_only=True)
class Order(Record):
    ID_PREFIX: ClassVar[str] = "ORD"

    entity_id: str
    order_type_id: str
    fulfillment_date: date
    order_name: str
    service_point_id: str = NO_SERVICE_POINT
    status: OrderStatus = OrderStatus.SUBMITTED
    agreement_transporter_id: str | None = None
    use_outsourced_carrier: bool = False
    outsourced_carrier_id: str | None = None
    note: str | None = None
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    _waste_lines: list[WasteLine] = field(default_factory=list["WasteLine"], repr=False)

    def __post_init__(self) -> None:
        if self.use_outsourced_carrier and not self.outsourced_carrier_id:
            raise ValueError("Outsourced carrier must be set when the toggle is enabled")
        if not self.use_outsourced_carrier:
            self.outsourced_carrier_id = None

    @property
    def waste_lines(self) -> tuple[WasteLine, ...]:
        return tuple(self._waste_lines)

    @property
    def waste_type_ids(self) -> tuple[str, ...]:
        return tuple(line.waste_type_id for line in self._waste_lines)

    @property
    def has_service_point(self) -> bool:
        return bool(self.service_point_id) and self.service_point_id != NO_SERVICE_POINT

    def set_status(self, status: OrderStatus, *, at: datetime | None = None) -> None:
        self.status = status
        self.touch(at)

    def touch(self, at: datetime | None = None) -> None:
        self.updated_at = at or utcnow()
