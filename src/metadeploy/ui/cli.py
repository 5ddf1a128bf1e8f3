from __future__ import annotations

import argparse
import dataclasses
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from metadeploy.app import fetch, install_bundle, uninstall
from metadeploy.config import ConfigurationError, configure_logging, get_logging_config
from metadeploy.domain.model import MetadataKind

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from metadeploy.domain.model import MetadataObject

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Install bundled metadata into the database")
    subparsers = parser.add_subparsers(dest="command", required=True)

    install = subparsers.add_parser("install", help="Install every object of a bundle file")
    install.add_argument("bundle", type=Path, help="Path to a JSON metadata bundle")

    kinds = [kind.value for kind in MetadataKind]

    remove = subparsers.add_parser("uninstall", help="Retire or purge an installed object")
    remove.add_argument("kind", choices=kinds, help="Metadata kind")
    remove.add_argument("identifier", help="Unique identifier (uuid or property name)")
    remove.add_argument(
        "--reason",
        required=True,
        help="Reason recorded when the object is retired",
    )

    show = subparsers.add_parser("show", help="Print an installed object")
    show.add_argument("kind", choices=kinds, help="Metadata kind")
    show.add_argument("identifier", help="Unique identifier (uuid or property name)")

    return parser.parse_args(list(argv))


def _describe(obj: MetadataObject) -> str:
    lines = [type(obj).__name__]
    for field in dataclasses.fields(obj):
        value = getattr(obj, field.name)
        if dataclasses.is_dataclass(value):
            value = getattr(value, "uuid", value)
        lines.append(f"  {field.name}: {value}")
    return "\n".join(lines)


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    try:
        configure_logging(level=get_logging_config().level)
        parsed_args = _parse_args(args_list)
    except ConfigurationError:
        log.exception("Invalid configuration")
        sys.exit(2)

    try:
        if parsed_args.command == "install":
            result = install_bundle(parsed_args.bundle)
            log.info("Installed %s objects (%s replaced)", result.total, result.replaced)
        elif parsed_args.command == "uninstall":
            if not uninstall(
                MetadataKind(parsed_args.kind), parsed_args.identifier, parsed_args.reason
            ):
                sys.exit(1)
        elif parsed_args.command == "show":
            obj = fetch(MetadataKind(parsed_args.kind), parsed_args.identifier)
            if obj is None:
                log.error("No %s %s installed", parsed_args.kind, parsed_args.identifier)
                sys.exit(1)
            print(_describe(obj))  # noqa: T201
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301

    except Exception:
        log.exception("Fatal error during metadata deploy")
        sys.exit(1)


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
