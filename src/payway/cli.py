"""
Command-line interface for querying the PayWay gateway.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any, Iterable, Optional, Sequence, Tuple

import requests

from .api import create_payway_client
from .core.client import PayWayClient
from .core.config import load_payway_config
from .core.errors import ConfigurationError, PayWayError
from .core.params import TRANSACTION_STATUSES
from .core.payloads import BuiltPayload
from .core.transport import Transport


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(message)s",
    )


def _env_override(value: str) -> Tuple[str, str]:
    if "=" not in value:
        raise argparse.ArgumentTypeError("Overrides must look like KEY=VALUE")
    key, val = value.split("=", 1)
    key = key.strip()
    if not key:
        raise argparse.ArgumentTypeError("Override key must not be empty")
    return key, val


def _collect_overrides(pairs: Iterable[Tuple[str, str]]) -> dict[str, str]:
    return {key: value for key, value in pairs}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="payway",
        description="Query the ABA PayWay payment gateway",
    )
    parser.add_argument(
        "--env-file",
        default=".env",
        help="Path to the .env file containing PAYWAY_* settings (default: .env)",
    )
    parser.add_argument(
        "--set",
        action="append",
        type=_env_override,
        metavar="KEY=VALUE",
        default=None,
        help="Override an environment variable without editing the .env file",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Python logging level (default: INFO)",
    )

    commands = parser.add_subparsers(dest="command", required=True)

    check = commands.add_parser("check", help="Check the status of a transaction")
    check.add_argument("tran_id", help="Merchant transaction id")

    listing = commands.add_parser("list", help="List transactions")
    listing.add_argument("--from-date", help="Start of the range (yyyyMMddHHmmss)")
    listing.add_argument("--to-date", help="End of the range (yyyyMMddHHmmss)")
    listing.add_argument("--from-amount", help="Minimum amount")
    listing.add_argument("--to-amount", help="Maximum amount")
    listing.add_argument(
        "--status",
        choices=TRANSACTION_STATUSES,
        help="Only transactions with this status",
    )

    for sub in (check, listing):
        sub.add_argument(
            "--dry-run",
            action="store_true",
            help="Print the signed payload instead of sending it",
        )
    return parser


def _build_payload(client: PayWayClient, args: argparse.Namespace) -> BuiltPayload:
    if args.command == "check":
        return client.build_check_transaction_payload(args.tran_id)
    return client.build_transaction_list_payload(
        from_date=args.from_date,
        to_date=args.to_date,
        from_amount=args.from_amount,
        to_amount=args.to_amount,
        status=args.status,
    )


def _print_json(value: Any) -> None:
    json.dump(value, sys.stdout, indent=2, ensure_ascii=False)
    sys.stdout.write("\n")


def run_cli(
    argv: Sequence[str] | None = None,
    *,
    transport: Optional[Transport] = None,
) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    _configure_logging(args.log_level)
    overrides = _collect_overrides(args.set or ())

    try:
        config = load_payway_config(env_file=args.env_file, overrides=overrides)
    except ConfigurationError as exc:
        logging.error("Invalid configuration: %s", exc)
        return 1

    with create_payway_client(config=config, transport=transport) as client:
        payload = _build_payload(client, args)

        if args.dry_run:
            _print_json(payload.as_dict())
            return 0

        try:
            result = client.execute(payload)
        except PayWayError as exc:
            logging.error("PayWay request failed: %s", exc)
            return 1
        except requests.RequestException as exc:
            logging.error("Could not reach PayWay: %s", exc)
            return 1

    _print_json(result)
    return 0


def main() -> None:
    sys.exit(run_cli())
