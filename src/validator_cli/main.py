"""CLI entry point for validator-cli."""

import argparse
import asyncio
import json
import sys
from typing import Optional, Sequence

from pydantic import ValidationError as PydanticValidationError

from . import __version__
from .accounts.store import InMemoryAccountProvider
from .config import ConfigurationError, ResolverSettings, get_settings
from .exceptions import InputError, ResolverException
from .logging import configure_logging, ResolverLogger
from .providers.memory import InMemoryValidatorsProvider
from .resolver import ValidatorResolver
from .wallet.shared_import import gather_input, merge_options


def setup_logging(verbose: bool = False, quiet: bool = False, log_format: str = None,
                  settings: Optional[ResolverSettings] = None) -> None:
    """Configure logging.

    Args:
        verbose: Enable debug level logging
        quiet: Only log errors
        log_format: Output format ('json' or 'text'). Defaults to settings value.
    """
    settings = settings or get_settings()
    if verbose:
        level = "DEBUG"
    elif quiet:
        level = "ERROR"
    else:
        level = settings.log_level
    configure_logging(log_level=level, log_format=log_format or settings.log_format)


def build_parser() -> argparse.ArgumentParser:
    """Build the command line parser."""
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("-v", "--verbose", action="store_true", help="Verbose output")
    common.add_argument("-q", "--quiet", action="store_true", help="Only report errors")
    common.add_argument("--debug", action="store_true", help="Include debug details in errors")
    common.add_argument(
        "--log-format",
        choices=["json", "text"],
        default=None,
        help="Log output format: 'json' for structured (default), 'text' for human-readable",
    )

    parser = argparse.ArgumentParser(
        prog="validator-cli",
        description="Validator identifier resolution and wallet import input checks",
        epilog="Example: validator-cli validators 5 10-12 0xa1b2... --snapshot state.json",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    validators = subparsers.add_parser(
        "validators",
        parents=[common],
        help="Resolve validator identifiers to validator records",
    )
    validators.add_argument(
        "identifiers",
        nargs="+",
        help="Validator index, 0x public key, wallet/account path, or low-high range",
    )
    validators.add_argument(
        "--snapshot",
        required=True,
        help="JSON file with validator records (a list, or an object keyed by state)",
    )
    validators.add_argument(
        "--accounts",
        help="JSON file with wallets, used for wallet/account identifiers",
    )
    validators.add_argument("--state", default=None, help="State identifier (default: head)")
    validators.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Resolution timeout in seconds",
    )
    validators.add_argument(
        "--legacy-pubkeys",
        action="store_true",
        help="Zero-pad or truncate public keys that are not 48 bytes instead of rejecting them",
    )
    validators.add_argument(
        "--strict-ranges",
        action="store_true",
        help="Reject ranges whose start is greater than their end",
    )
    validators.add_argument("--no-pretty", action="store_false", dest="pretty", help="Compact JSON output")

    shared_import = subparsers.add_parser(
        "wallet-shared-import",
        parents=[common],
        help="Check the input of a wallet shared import",
    )
    shared_import.add_argument("--file", default=None, help="Wallet import file")
    shared_import.add_argument("--shares", nargs="+", default=None, help="Key shares")
    shared_import.add_argument("--timeout", default=None, help="Import timeout, e.g. 30s or 1m")
    shared_import.add_argument("--remote", default=None, help="Remote wallet address")

    return parser


def _configuration_error(e: PydanticValidationError) -> ConfigurationError:
    error = e.errors()[0]
    field = ".".join(str(part) for part in error["loc"])
    return ConfigurationError(field, error.get("input"), error["msg"])


def load_environment_settings() -> ResolverSettings:
    """Load settings from VALIDATOR_CLI_* variables and .env.

    Raises:
        ConfigurationError: If a variable holds an invalid value
    """
    try:
        return get_settings()
    except PydanticValidationError as e:
        raise _configuration_error(e) from e


def load_settings(args: argparse.Namespace, settings: Optional[ResolverSettings] = None) -> ResolverSettings:
    """Apply command line overrides to the environment settings."""
    settings = settings or load_environment_settings()
    try:
        return settings.with_overrides(
            state_id=args.state,
            timeout_seconds=args.timeout,
            strict_public_key_length=False if args.legacy_pubkeys else None,
            reject_inverted_ranges=True if args.strict_ranges else None,
        )
    except PydanticValidationError as e:
        raise _configuration_error(e) from e


async def resolve(args: argparse.Namespace, settings: ResolverSettings) -> list[dict]:
    """Resolve the requested identifiers and return them as JSON-ready dicts."""
    provider = InMemoryValidatorsProvider.from_file(args.snapshot)
    account_provider = InMemoryAccountProvider.from_file(args.accounts) if args.accounts else None
    resolver = ValidatorResolver(provider, account_provider, settings=settings)

    validators = await asyncio.wait_for(
        resolver.resolve_validators(args.identifiers),
        timeout=settings.timeout_seconds,
    )
    return [v.model_dump(mode="json") for v in validators]


def run_validators(args: argparse.Namespace, logger: ResolverLogger,
                   env_settings: Optional[ResolverSettings] = None) -> int:
    try:
        settings = load_settings(args, env_settings)
        records = asyncio.run(resolve(args, settings))
    except ConfigurationError as e:
        logger.error("invalid_configuration", field=e.field, error=str(e))
        return 1
    except ResolverException as e:
        logger.resolution_failed(
            error=str(e),
            error_type=type(e).__name__,
            identifier=getattr(e, "identifier", None),
            **({"details": e.details} if args.debug else {}),
        )
        return 1
    except asyncio.TimeoutError:
        logger.resolution_failed(error="resolution timed out", error_type="TimeoutError")
        return 1

    print(json.dumps(records, indent=2 if args.pretty else None))
    return 0


def run_shared_import(args: argparse.Namespace, logger: ResolverLogger) -> int:
    flags = {
        "remote": args.remote,
        "timeout": args.timeout,
        "file": args.file,
        "shares": args.shares,
        "quiet": args.quiet or None,
        "verbose": args.verbose or None,
        "debug": args.debug or None,
    }
    try:
        data = gather_input(merge_options(flags))
    except InputError as e:
        logger.error("input_invalid", error=str(e), error_type=type(e).__name__)
        return 1

    if not data.quiet:
        print(json.dumps({
            "file_bytes": len(data.file),
            "shares": len(data.shares),
            "timeout_seconds": data.timeout.total_seconds(),
        }))
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    try:
        settings = load_environment_settings()
    except ConfigurationError as e:
        configure_logging(log_format=args.log_format or "json")
        ResolverLogger(__name__).error("invalid_configuration", field=e.field, error=str(e))
        return 1

    setup_logging(args.verbose, args.quiet, args.log_format, settings=settings)
    logger = ResolverLogger(__name__)

    if args.command == "validators":
        return run_validators(args, logger, settings)
    return run_shared_import(args, logger)


if __name__ == "__main__":
    sys.exit(main())
