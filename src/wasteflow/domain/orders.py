"""Order preparation, validation and storage."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING, Final
from uuid import uuid4

from wasteflow.domain.errors import OrderValidationError, RecordNotFoundError
from wasteflow.domain.model import (
    NO_SERVICE_POINT,
    LmaReportingMethod,
    Order,
    OrderStatus,
    WasteLine,
    WasteTypeSelection,
    utcnow,
)
from wasteflow.domain.resolution import (
    ResolutionRequest,
    TransferDraft,
    TransferField,
    TransferResolution,
    resolve_transfer,
)

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence
    from datetime import date, datetime

    from wasteflow.domain.model import Agreement, Entity, OrderType, WasteType
    from wasteflow.domain.ports import OrderRepository

log = getLogger(__name__)

NAME_SEPARATOR: Final[str] = " – "
RECEIVER_NOT_COMMON_MESSAGE: Final[str] = (
    "Receiver is not configured for all selected waste types under the current agreement."
)


@dataclass(frozen=True, slots=True, kw_only=True)
class OrderRequest:
    """Everything a user has entered for a new order."""

    entity_id: str | None = None
    order_type_id: str | None = None
    fulfillment_date: date | None = None
    waste_type_ids: tuple[str, ...] = ()
    service_point_id: str | None = None
    order_name: str | None = None
    note: str | None = None
    transfer: TransferDraft = field(default_factory=TransferDraft)


@dataclass(frozen=True, slots=True, kw_only=True)
class PreparedOrder:
    request: OrderRequest
    entity: Entity | None
    order_type: OrderType | None
    resolution: TransferResolution | None
    errors: dict[str, str]

    @property
    def is_valid(self) -> bool:
        return not self.errors


def default_order_name(entity_name: str, order_type_name: str, fulfillment_date: date) -> str:
    return NAME_SEPARATOR.join(
        (entity_name, order_type_name, fulfillment_date.strftime("%d %b %Y"))
    )


def transfer_required(order_type: OrderType | None) -> bool:
    """Whether the order carries a waste-transfer section.

    Route collection reports per route instead of per order, so it is exempt.
    """

    if order_type is None:
        return True
    if not order_type.takes_waste_types:
        return False
    return order_type.lma_reporting_method != LmaReportingMethod.ROUTE_COLLECTION


def prepare_order(
    request: OrderRequest,
    *,
    entities: Sequence[Entity],
    agreements: Sequence[Agreement],
    order_types: Sequence[OrderType],
    waste_types: Sequence[WasteType],
) -> PreparedOrder:
    """Resolve the transfer section and validate the whole request."""

    entity = next((e for e in entities if e.id == request.entity_id), None)
    order_type = next((t for t in order_types if t.id == request.order_type_id), None)
    resolution: TransferResolution | None = None
    method = order_type.lma_reporting_method if order_type is not None else None
    if entity is not None and method is not None:
        resolution = resolve_transfer(
            ResolutionRequest(
                entity_id=entity.id,
                waste_type_ids=request.waste_type_ids,
                mode=method,
                service_point_id=request.service_point_id,
            ),
            agreements=agreements,
            entities=entities,
            draft=request.transfer,
        )
    errors = order_errors(
        request,
        entity=entity,
        order_type=order_type,
        resolution=resolution,
        waste_types={wt.id: wt for wt in waste_types},
    )
    return PreparedOrder(
        request=request,
        entity=entity,
        order_type=order_type,
        resolution=resolution,
        errors=errors,
    )


def order_errors(
    request: OrderRequest,
    *,
    entity: Entity | None,
    order_type: OrderType | None,
    resolution: TransferResolution | None,
    waste_types: Mapping[str, WasteType],
) -> dict[str, str]:
    """Return every missing or inconsistent field, keyed by field name."""

    errors: dict[str, str] = {}
    if entity is None:
        errors["entity"] = "Entity is required"
    if order_type is None:
        errors["order_type"] = "Order Type is required"
    if request.fulfillment_date is None:
        errors["fulfillment_date"] = "Fulfillment Date is required"
    if (
        entity is not None
        and request.service_point_id
        and request.service_point_id != NO_SERVICE_POINT
        and not entity.owns_service_point(request.service_point_id)
    ):
        errors["service_point"] = "Service point does not belong to the selected entity"

    selection = order_type.waste_type_selection if order_type is not None else None
    count = len(request.waste_type_ids)
    if selection == WasteTypeSelection.NONE and count:
        errors["waste_types"] = "This Order Type does not take waste types"
    elif selection is not None and selection != WasteTypeSelection.NONE and not count:
        errors["waste_types"] = "Waste Type is required"
    elif selection == WasteTypeSelection.SINGLE and count > 1:
        errors["waste_types"] = "Only one Waste Type can be selected for this Order Type"
    else:
        unavailable = [
            wt_id
            for wt_id in request.waste_type_ids
            if wt_id not in waste_types or not waste_types[wt_id].active
        ]
        if unavailable:
            errors["waste_types"] = (
                f"Unknown or inactive Waste Type: {', '.join(unavailable)}"
            )

    if not transfer_required(order_type):
        return errors

    draft = resolution.draft if resolution is not None else request.transfer
    if request.waste_type_ids:
        if _collects_via_collector(order_type):
            _require(errors, draft, TransferField.DISPOSER, "Disposer is required")
        _require(errors, draft, TransferField.RECEIVER, "Receiver is required")
        _require(errors, draft, TransferField.SENDER, "Sender is required")
        _require(errors, draft, TransferField.TRANSPORTER, "Transporter is required")
        if draft.use_outsourced_carrier and not draft.outsourced_carrier_id:
            errors["outsourced_carrier"] = (
                "Outsourced transporter is required when toggle is enabled"
            )

    if resolution is not None:
        errors.update({issue.field: issue.message for issue in resolution.issues})
        receiver_id = draft.value(TransferField.RECEIVER)
        common = resolution.common_receivers
        if receiver_id and common and receiver_id not in common:
            errors["receiver"] = RECEIVER_NOT_COMMON_MESSAGE
    return errors


def _collects_via_collector(order_type: OrderType | None) -> bool:
    return (
        order_type is not None
        and order_type.lma_reporting_method == LmaReportingMethod.COLLECTORS_SCHEMA
    )


def _require(
    errors: dict[str, str], draft: TransferDraft, name: TransferField, message: str
) -> None:
    if not draft.value(name):
        errors[name.value] = message


def build_waste_lines(
    waste_type_ids: Sequence[str],
    resolution: TransferResolution | None,
    draft: TransferDraft,
) -> tuple[WasteLine, ...]:
    """Snapshot the resolved parties once per selected waste type."""

    if resolution is not None and resolution.exempt:
        return tuple(WasteLine(waste_type_id=wt) for wt in dict.fromkeys(waste_type_ids))
    lines: list[WasteLine] = []
    for waste_type_id in dict.fromkeys(waste_type_ids):
        details = resolution.destination_for(waste_type_id) if resolution else None
        lines.append(
            WasteLine(
                waste_type_id=waste_type_id,
                disposer_id=draft.disposer.value,
                receiver_id=draft.receiver.value,
                asn=details.asn if details else None,
                processing_method=details.processing_method if details else None,
                sender_id=draft.sender.value,
                transporter_id=draft.transporter.value,
            )
        )
    return tuple(lines)


def _new_order_id() -> str:
    return f"{Order.ID_PREFIX}-{uuid4().int % 1_000_000:06d}"


class OrderStore:
    def __init__(
        self,
        orders: OrderRepository,
        *,
        clock: Callable[[], datetime] = utcnow,
        id_factory: Callable[[], str] = _new_order_id,
    ) -> None:
        self._orders = orders
        self._clock = clock
        self._id_factory = id_factory

    def create(self, prepared: PreparedOrder) -> Order:
        if prepared.errors:
            raise OrderValidationError(prepared.errors)
        request = prepared.request
        entity, order_type = prepared.entity, prepared.order_type
        if entity is None or order_type is None or request.fulfillment_date is None:
            raise OrderValidationError({"order": "Order is incomplete"})
        draft = prepared.resolution.draft if prepared.resolution else request.transfer
        if not transfer_required(order_type):
            draft = TransferDraft()
        elif not _collects_via_collector(order_type):
            # Outside the collectors scheme the ordering entity is the disposer.
            draft = draft.force(TransferField.DISPOSER, entity.id)
        now = self._clock()
        order = Order(
            id=self._unused_id(),
            entity_id=entity.id,
            service_point_id=request.service_point_id or NO_SERVICE_POINT,
            order_type_id=order_type.id,
            fulfillment_date=request.fulfillment_date,
            order_name=(request.order_name or "").strip()
            or default_order_name(entity.name, order_type.name, request.fulfillment_date),
            status=OrderStatus.SUBMITTED,
            agreement_transporter_id=draft.transporter.value,
            use_outsourced_carrier=draft.use_outsourced_carrier,
            outsourced_carrier_id=draft.outsourced_carrier_id,
            note=request.note,
            created_at=now,
            updated_at=now,
            _waste_lines=list(
                build_waste_lines(request.waste_type_ids, prepared.resolution, draft)
            ),
        )
        self._orders.add(order)
        log.info("Submitted order %s (%s)", order.id, order.order_name)
        return order

    def get(self, order_id: str) -> Order | None:
        return self._orders.get(order_id)

    def require(self, order_id: str) -> Order:
        order = self._orders.get(order_id)
        if order is None:
            raise RecordNotFoundError("Order", order_id)
        return order

    def list(
        self,
        *,
        entity_id: str | None = None,
        order_type_id: str | None = None,
        status: OrderStatus | None = None,
    ) -> tuple[Order, ...]:
        """Return matching orders, most recently created first."""

        matches = [
            order
            for order in self._orders.all()
            if (entity_id is None or order.entity_id == entity_id)
            and (order_type_id is None or order.order_type_id == order_type_id)
            and (status is None or order.status == status)
        ]
        return tuple(sorted(matches, key=lambda o: o.created_at, reverse=True))

    def set_status(self, order_id: str, status: OrderStatus) -> Order:
        order = self.require(order_id)
        order.set_status(status, at=self._clock())
        self._orders.save(order)
        return order

    def delete(self, order_id: str) -> None:
        if not self._orders.remove(order_id):
            raise RecordNotFoundError("Order", order_id)
        log.info("Deleted order %s", order_id)

    def _unused_id(self) -> str:
        order_id = self._id_factory()
        while self._orders.get(order_id) is not None:
            order_id = self._id_factory()
        return order_id
