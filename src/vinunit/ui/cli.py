from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import asdict
from datetime import datetime
from signal import SIGINT, signal
from typing import TYPE_CHECKING, cast

from dotenv import load_dotenv

from vinunit.adapters.vpic import VpicVinDecoder
from vinunit.app import build_unit_service
from vinunit.config import configure_logging
from vinunit.domain.errors import UnitServiceError

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from vinunit.domain.units import UnitService

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Manage customer units enriched from VINs")
    parser.add_argument(
        "--no-catalog",
        action="store_true",
        help="Skip reference catalog resolution and fitment lookups",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    create = subparsers.add_parser("create", help="Create a unit for a customer")
    create.add_argument("--customer-id", type=str, required=True, help="Owning customer id")
    create.add_argument("--vin", type=str, required=True, help="Vehicle identification number")
    create.add_argument(
        "--attributes",
        type=str,
        help="JSON object of customer-specific attributes",
    )
    create.add_argument(
        "--no-decode",
        action="store_true",
        help="Store the association only, without decoding the VIN",
    )
    create.add_argument(
        "--refresh",
        action="store_true",
        help="Decode again even if a vehicle record for the VIN exists",
    )

    get = subparsers.add_parser("get", help="Show one unit")
    get.add_argument("unit_id", type=str)

    listing = subparsers.add_parser("list", help="List units by customer and/or VIN")
    listing.add_argument("--customer-id", type=str, help="Filter by customer id")
    listing.add_argument("--vin", type=str, help="Filter by VIN")

    update = subparsers.add_parser("update", help="Change a unit's customer, VIN or attributes")
    update.add_argument("unit_id", type=str)
    update.add_argument("--customer-id", type=str, help="New owning customer id")
    update.add_argument("--vin", type=str, help="New VIN")
    update.add_argument("--attributes", type=str, help="Replacement JSON attributes object")

    delete = subparsers.add_parser("delete", help="Delete a unit (the vehicle record is kept)")
    delete.add_argument("unit_id", type=str)

    parts = subparsers.add_parser("parts", help="List catalog parts fitting a unit")
    parts.add_argument("unit_id", type=str)
    parts.add_argument("--category", type=str, help="Only parts in this category")

    categories = subparsers.add_parser("categories", help="List part categories")
    categories.add_argument(
        "--unit-id",
        type=str,
        help="Only categories with parts fitting this unit",
    )

    args = parser.parse_args(list(argv))
    if args.command == "list" and not (args.customer_id or args.vin):
        raise ValueError("list requires --customer-id and/or --vin")
    if args.command == "create" and args.no_decode and args.refresh:
        raise ValueError("--no-decode and --refresh are mutually exclusive")
    return args


def _parse_attributes(value: str | None) -> dict[str, object] | None:
    if value is None:
        return None
    try:
        parsed = json.loads(value)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON for --attributes: {value}") from exc
    if not isinstance(parsed, dict):
        raise ValueError("--attributes must be a JSON object")
    return cast(dict[str, object], parsed)


def _json_default(value: object) -> object:
    if isinstance(value, datetime):
        return value.isoformat()
    raise TypeError(f"Cannot serialise {type(value).__name__}")


def _emit(payload: object) -> None:
    sys.stdout.write(json.dumps(payload, default=_json_default, indent=2) + "\n")


def _dispatch(args: argparse.Namespace, service: UnitService) -> None:
    command = args.command
    if command == "create":
        attributes = _parse_attributes(args.attributes)
        if args.no_decode:
            unit = service.create_unit(args.customer_id, args.vin, attributes=attributes)
        else:
            unit = service.create_unit_from_vin(
                args.customer_id,
                args.vin,
                attributes=attributes,
                refresh=args.refresh,
            )
        _emit(asdict(unit))
    elif command == "get":
        _emit(asdict(service.get_unit(args.unit_id)))
    elif command == "list":
        if args.customer_id and args.vin:
            units = service.get_units_by_customer_and_vin(args.customer_id, args.vin)
        elif args.customer_id:
            units = service.get_units_by_customer(args.customer_id)
        else:
            units = service.get_units_by_vin(args.vin)
        _emit([asdict(unit) for unit in units])
    elif command == "update":
        unit = service.update_unit(
            args.unit_id,
            customer_id=args.customer_id,
            vin=args.vin,
            attributes=_parse_attributes(args.attributes),
        )
        _emit(asdict(unit))
    elif command == "delete":
        service.delete_unit(args.unit_id)
        log.info("Deleted unit %s", args.unit_id)
    elif command == "parts":
        found = service.find_parts_for_unit(args.unit_id, category=args.category)
        _emit([asdict(part) for part in found])
    elif command == "categories":
        if args.unit_id:
            _emit(service.find_categories_for_unit(args.unit_id))
        else:
            _emit(service.find_all_categories())
    else:
        raise ValueError(f"Unsupported command: {command}")


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    configure_logging()
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    try:
        parsed_args = _parse_args(args_list)
    except ValueError:
        log.exception("CLI validation error")
        sys.exit(2)

    decoder: VpicVinDecoder | None = None
    try:
        decoder = VpicVinDecoder()
        service = build_unit_service(decoder=decoder, use_catalog=not parsed_args.no_catalog)
        _dispatch(parsed_args, service)
    except UnitServiceError as exc:
        log.error(str(exc))  # noqa: TRY400
        sys.exit(1)
    except ValueError:
        log.exception("Invalid input")
        sys.exit(2)
    except Exception:
        log.exception("Fatal error")
        sys.exit(1)
    finally:
        if decoder is not None:
            decoder.close()


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
