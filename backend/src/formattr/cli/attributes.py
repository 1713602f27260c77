"""CLI command for running a single attribute operation.

Opens a store connection for this invocation only and closes it before
exiting, whatever the outcome.

Usage:
    python -m formattr.cli OPERATION [OPTIONS]

Examples:
    # List all attributes
    python -m formattr.cli attributes

    # Create an attribute
    python -m formattr.cli addAttribute --input '{"name": "Email", "type": "T"}'

    # Partial update
    python -m formattr.cli updateAttribute --input '{"id": "...", "options": ["a@b.com"]}'

    # Fetch / delete by id
    python -m formattr.cli attribute --id 6650c0ffee0000000000beef
    python -m formattr.cli deleteAttribute --id 6650c0ffee0000000000beef

Exit codes: 0 (success), 1 (invalid input, not found, configuration or unexpected
error), 2 (store unavailable)
"""

import asyncio
import json
import sys
from argparse import ArgumentParser, Namespace
from typing import Any

import structlog

from formattr.core.config import Settings, configure_logging
from formattr.core.database import scoped_client
from formattr.services.attributes import AttributeService, OperationResult
from formattr.services.exceptions import PermanentError, TransientError
from formattr.services.operations import OPERATION_NAMES, parse_operation
from formattr.uow import create_uow_factory

logger = structlog.get_logger()


def parse_args(argv: list[str] | None = None) -> Namespace:
    """Parse command-line arguments."""
    parser = ArgumentParser(
        description="Run one attribute operation against the document store",
        epilog="Results are printed to stdout as JSON",
    )

    parser.add_argument("operation", choices=OPERATION_NAMES, help="Operation name")

    parser.add_argument("--id", dest="attribute_id", help="Attribute id (attribute, deleteAttribute)")

    parser.add_argument(
        "--input",
        dest="input_json",
        help="JSON object input (addAttribute, updateAttribute)",
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging (DEBUG level)",
    )

    return parser.parse_args(argv)


def build_arguments(args: Namespace) -> dict[str, Any]:
    """Translate CLI options into raw operation arguments.

    Raises:
        json.JSONDecodeError: If --input is not valid JSON
    """
    arguments: dict[str, Any] = {}
    if args.attribute_id is not None:
        arguments["id"] = args.attribute_id
    if args.input_json is not None:
        arguments["input"] = json.loads(args.input_json)
    return arguments


def to_json(result: OperationResult) -> str:
    """Serialize an operation result (attribute, list or None) as JSON."""
    if isinstance(result, list):
        return json.dumps([attribute.model_dump() for attribute in result])
    return json.dumps(result.model_dump() if result is not None else None)


def print_error(code: str, message: str) -> None:
    print(json.dumps({"error": {"code": code, "message": message}}), file=sys.stderr)


async def async_main(argv: list[str] | None = None) -> int:
    """Main CLI entry point (async).

    Returns:
        Exit code: 0 (success), 1 (invalid input, not found, configuration or
        unexpected error), 2 (store unavailable)
    """
    args = parse_args(argv)

    # Initialize settings and logging
    try:
        settings = Settings()  # type: ignore[call-arg]
    except ValueError as e:
        # Logging is not configured yet; report on stderr only
        print_error("CONFIGURATION_ERROR", str(e))
        return 1

    if args.verbose:
        settings.log_level = "DEBUG"

    configure_logging(settings)

    logger.info("cli.started", operation=args.operation)

    try:
        operation = parse_operation(args.operation, build_arguments(args))

        async with scoped_client(
            settings.mongodb_url,
            max_pool_size=1,
            timeout_ms=settings.mongodb_timeout_ms,
        ) as client:
            uow_factory = create_uow_factory(
                client[settings.mongodb_database], settings.attributes_collection
            )
            result = await AttributeService(uow_factory).execute(operation)

        print(to_json(result))
        logger.info("cli.success", operation=args.operation)
        return 0

    except json.JSONDecodeError as e:
        logger.error("cli.invalid_json", error=str(e))
        print_error("VALIDATION_ERROR", f"--input is not valid JSON: {e}")
        return 1

    except PermanentError as e:
        logger.error("cli.operation_failed", error=str(e), error_type=type(e).__name__)
        print_error(e.code, str(e))
        return 1

    except TransientError as e:
        logger.error("cli.store_unavailable", error=str(e), error_type=type(e).__name__)
        print_error(e.code, str(e))
        return 2

    except KeyboardInterrupt:
        logger.info("cli.interrupted")
        print("\nOperation interrupted by user", file=sys.stderr)
        return 130  # Standard exit code for SIGINT

    except Exception as e:
        logger.error("cli.unexpected_error", error=str(e), error_type=type(e).__name__)
        print_error("INTERNAL_ERROR", str(e))
        return 1


def main() -> None:
    """Synchronous entry point for CLI."""
    sys.exit(asyncio.run(async_main()))


if __name__ == "__main__":
    main()
