from __future__ import annotations

import argparse
import logging
import sys
from datetime import date
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from wasteflow.app import (
    delete_entity,
    initialize,
    list_agreements,
    list_entities,
    list_order_types,
    list_orders,
    list_waste_types,
    preview_transfer,
    set_agreement_status,
    set_default_internal_collector,
    set_order_status,
    submit_order,
)
from wasteflow.config import configure_logging, parse_log_level
from wasteflow.domain.errors import ValidationError
from wasteflow.domain.model import (
    AgreementStatus,
    EntityRole,
    LmaReportingMethod,
    OrderStatus,
    TrackedValue,
)
from wasteflow.domain.orders import OrderRequest
from wasteflow.domain.resolution import ResolutionRequest, TransferDraft

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from wasteflow.domain.resolution import TransferResolution

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Manage waste master data and orders")
    parser.add_argument(
        "--log-level",
        type=str,
        default="info",
        help="Logging level name (default: %(default)s)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("init", help="Create the database and seed empty collections")

    entities = subparsers.add_parser("entities", help="Entity registry commands")
    entities_sub = entities.add_subparsers(dest="entities_command", required=True)
    entities_list = entities_sub.add_parser("list", help="List entities")
    entities_list.add_argument(
        "--role",
        type=EntityRole,
        choices=list(EntityRole),
        help="Only list entities holding this role",
    )
    entities_delete = entities_sub.add_parser("delete", help="Delete an unreferenced entity")
    entities_delete.add_argument("entity_id", type=str)
    entities_collector = entities_sub.add_parser(
        "set-collector",
        help="Mark a Transporter as the default internal collector",
    )
    entities_collector.add_argument("entity_id", type=str)

    waste_types = subparsers.add_parser("waste-types", help="List waste types")
    waste_types.add_argument(
        "--all",
        action="store_true",
        help="Include deactivated waste types",
    )

    subparsers.add_parser("order-types", help="List order types")

    agreements = subparsers.add_parser("agreements", help="Waste stream agreement commands")
    agreements_sub = agreements.add_subparsers(dest="agreements_command", required=True)
    agreements_list = agreements_sub.add_parser("list", help="List agreements")
    agreements_list.add_argument("--disposer", type=str, help="Only list this disposer's")
    agreements_status = agreements_sub.add_parser("status", help="Activate or deactivate")
    agreements_status.add_argument("agreement_id", type=str)
    agreements_status.add_argument(
        "status", type=AgreementStatus, choices=list(AgreementStatus)
    )

    resolve = subparsers.add_parser("resolve", help="Preview the transfer parties of an order")
    _add_transfer_arguments(resolve)
    resolve.add_argument(
        "--mode",
        type=LmaReportingMethod,
        choices=list(LmaReportingMethod),
        required=True,
        help="LMA reporting method of the order type",
    )

    orders = subparsers.add_parser("orders", help="Order commands")
    orders_sub = orders.add_subparsers(dest="orders_command", required=True)
    orders_create = orders_sub.add_parser("create", help="Submit a new order")
    _add_transfer_arguments(orders_create)
    orders_create.add_argument("--order-type", type=str, required=True)
    orders_create.add_argument(
        "--date",
        type=_parse_date,
        required=True,
        help="Fulfillment date (YYYY-MM-DD)",
    )
    orders_create.add_argument("--name", type=str, help="Order name (defaults to a summary)")
    orders_create.add_argument("--note", type=str)
    orders_list = orders_sub.add_parser("list", help="List orders, newest first")
    orders_list.add_argument("--entity", type=str)
    orders_list.add_argument("--status", type=OrderStatus, choices=list(OrderStatus))
    orders_status = orders_sub.add_parser("status", help="Change an order's status")
    orders_status.add_argument("order_id", type=str)
    orders_status.add_argument("status", type=OrderStatus, choices=list(OrderStatus))

    return parser.parse_args(list(argv))


def _add_transfer_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--entity", type=str, required=True, help="Ordering entity id")
    parser.add_argument(
        "--waste-type",
        dest="waste_types",
        action="append",
        default=[],
        help="Waste type id (repeat for several)",
    )
    parser.add_argument("--service-point", type=str, help="Service point id")
    parser.add_argument("--disposer", type=str, help="Manual disposer override")
    parser.add_argument("--sender", type=str, help="Manual sender override")
    parser.add_argument("--receiver", type=str, help="Manual receiver override")
    parser.add_argument("--transporter", type=str, help="Manual transporter override")
    parser.add_argument(
        "--outsourced-carrier",
        type=str,
        help="Hand the transport to this carrier instead of the agreement transporter",
    )


def _parse_date(value: str) -> date:
    try:
        return date.fromisoformat(value.strip())
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Invalid date: {value}") from exc


def _transfer_draft(args: argparse.Namespace) -> TransferDraft:
    def pick(value: str | None) -> TrackedValue:
        return TrackedValue.manual(value) if value else TrackedValue()

    draft = TransferDraft(
        disposer=pick(args.disposer),
        sender=pick(args.sender),
        receiver=pick(args.receiver),
        transporter=pick(args.transporter),
    )
    return draft.with_outsourced_carrier(args.outsourced_carrier)


def _log_resolution(resolution: TransferResolution) -> None:
    if resolution.exempt:
        log.info("Route collection orders carry no transfer section")
        return
    draft = resolution.draft
    for name in ("disposer", "sender", "receiver", "transporter"):
        tracked = getattr(draft, name)
        log.info("%-12s %s (%s)", name, tracked.value or "-", tracked.source)
    if resolution.receivers is not None:
        log.info(
            "common receivers: %s",
            ", ".join(resolution.receivers.common_receivers) or "-",
        )
    for details in resolution.destinations:
        log.info(
            "%s -> %s, %s, ASN %s",
            details.waste_type_id,
            details.receiver_id,
            details.processing_method,
            details.asn or "-",
        )
    for issue in resolution.issues:
        log.warning("%s: %s", issue.field, issue.message)


def _dispatch(args: argparse.Namespace) -> None:  # noqa: C901, PLR0912
    if args.command == "init":
        initialize()
    elif args.command == "entities" and args.entities_command == "list":
        for entity in list_entities(role=args.role):
            marker = " *" if entity.is_default_internal_collector else ""
            roles = ", ".join(sorted(entity.roles))
            log.info("%s  %s [%s]%s", entity.id, entity.name, roles, marker)
    elif args.command == "entities" and args.entities_command == "delete":
        result = delete_entity(args.entity_id)
        if not result.success:
            raise ValueError(result.reason)
        log.info("Deleted entity %s", args.entity_id)
    elif args.command == "entities" and args.entities_command == "set-collector":
        entity = set_default_internal_collector(args.entity_id)
        log.info("Default internal collector: %s", entity.name)
    elif args.command == "waste-types":
        for waste_type in list_waste_types(include_inactive=args.all):
            log.info(
                "%s  %s  %s%s",
                waste_type.id,
                waste_type.ewc_code,
                waste_type.name,
                "" if waste_type.active else " (inactive)",
            )
    elif args.command == "order-types":
        for order_type in list_order_types():
            log.info("%s  %s  %s", order_type.id, order_type.name, order_type.reporting_label)
    elif args.command == "agreements" and args.agreements_command == "list":
        for agreement in list_agreements(disposer_id=args.disposer):
            log.info(
                "%s  %s  %s  %s  waste types: %s",
                agreement.id,
                agreement.disposer_id,
                agreement.reporting_system,
                agreement.status,
                ", ".join(agreement.waste_type_ids),
            )
    elif args.command == "agreements" and args.agreements_command == "status":
        agreement = set_agreement_status(args.agreement_id, args.status)
        log.info("Agreement %s is %s", agreement.id, agreement.status)
    elif args.command == "resolve":
        resolution = preview_transfer(
            ResolutionRequest(
                entity_id=args.entity,
                waste_type_ids=tuple(args.waste_types),
                mode=args.mode,
                service_point_id=args.service_point,
            ),
            draft=_transfer_draft(args),
        )
        _log_resolution(resolution)
    elif args.command == "orders" and args.orders_command == "create":
        order = submit_order(
            OrderRequest(
                entity_id=args.entity,
                order_type_id=args.order_type,
                fulfillment_date=args.date,
                waste_type_ids=tuple(args.waste_types),
                service_point_id=args.service_point,
                order_name=args.name,
                note=args.note,
                transfer=_transfer_draft(args),
            )
        )
        log.info("Submitted order %s: %s", order.id, order.order_name)
    elif args.command == "orders" and args.orders_command == "list":
        for order in list_orders(entity_id=args.entity, status=args.status):
            log.info(
                "%s  %s  %s  %s",
                order.id,
                order.fulfillment_date.isoformat(),
                order.status,
                order.order_name,
            )
    elif args.command == "orders" and args.orders_command == "status":
        order = set_order_status(args.order_id, args.status)
        log.info("Order %s is %s", order.id, order.status)
    else:
        raise ValueError(f"Unsupported command: {args.command}")


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    configure_logging()
    parsed_args: argparse.Namespace
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    try:
        parsed_args = _parse_args(args_list)
        configure_logging(level=parse_log_level(parsed_args.log_level), force=True)
    except ValueError:
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        _dispatch(parsed_args)
    except ValidationError as exc:
        for name, message in exc.errors.items():
            log.error("%s: %s", name, message)  # noqa: TRY400
        sys.exit(1)
    except Exception:
        log.exception("Command failed")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


if __name__ == "__main__":
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()
