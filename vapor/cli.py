"""
Command-line entry point.

::

    vapor generate <recipient> [--json] [--max-attempts N]
    vapor validate <address>
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import List, Optional

from .address import generate_vapor_address, validate_vapor_address
from .config import VaporConfig, setup_logging
from .errors import AddressGenerationFailed, InvalidRecipient

logger = logging.getLogger(__name__)


def _positive_int(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {text!r}")
    if value < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {value}")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="vapor",
        description="Derive and check unspendable ed25519 vapor addresses",
    )
    parser.add_argument("--config", metavar="FILE", help="JSON configuration file")
    parser.add_argument("--log-level", help="Override configured log level")
    sub = parser.add_subparsers(dest="command", required=True)

    gen = sub.add_parser("generate", help="Derive a new vapor address")
    gen.add_argument("recipient", help="Recipient public key (base58)")
    gen.add_argument("--max-attempts", type=_positive_int, help="Rejection sampling bound")
    gen.add_argument("--json", action="store_true", help="Print the result as JSON")

    val = sub.add_parser("validate", help="Check that an address is a curve point")
    val.add_argument("address", help="Vapor address (base58)")

    return parser


def _cmd_generate(args: argparse.Namespace, config: VaporConfig) -> int:
    max_attempts = args.max_attempts
    if max_attempts is None:
        max_attempts = config.deriver.max_attempts
    try:
        result = generate_vapor_address(args.recipient, max_attempts)
    except InvalidRecipient as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    except AddressGenerationFailed as exc:
        print(f"error: {exc}; try again", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps({
            "address": result.address,
            "secretHex": result.secret_hex,
            "recipient": result.recipient,
        }, indent=2))
    else:
        print(f"Vapor address: {result.address}")
        print(f"Secret:        {result.secret_hex}")
        print("Keep the secret safe: deposits cannot be condensed without it.")
    return 0


def _cmd_validate(args: argparse.Namespace, config: VaporConfig) -> int:
    ok = validate_vapor_address(args.address)
    print("valid" if ok else "invalid")
    return 0 if ok else 1


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logger.debug("vapor %s", args.command)

    try:
        config = VaporConfig.load(args.config) if args.config else VaporConfig()
    except (OSError, ValueError, TypeError) as exc:
        print(f"config error: {exc}", file=sys.stderr)
        return 2
    if args.log_level:
        config.log.level = args.log_level
    problems = config.validate()
    if problems:
        for p in problems:
            print(f"config error: {p}", file=sys.stderr)
        return 2
    setup_logging(config.log)

    if args.command == "generate":
        return _cmd_generate(args, config)
    return _cmd_validate(args, config)


if __name__ == "__main__":
    sys.exit(main())
