"""
Command line entry point for checking and maintaining a bot's configuration files.

    botconfig check            validate all three documents
    botconfig show strategies  print a document as the repositories see it
    botconfig encrypt exchange encrypt a data file in place
    botconfig decrypt exchange decrypt a data file in place
"""

import argparse
import getpass
import json
import sys
from typing import List, Optional

from pydantic import SecretStr

from .config import Settings, load_settings
from .datastore.documents import ExchangeDocument, MarketsDocument, StrategiesDocument
from .errors import BotConfigError
from .factory import Repositories, create_repositories, create_store
from .utils.logging import get_logger, setup_logging

logger = get_logger(__name__)

KINDS = ("strategies", "markets", "exchange")

DOCUMENT_TYPES = {
    "strategies": StrategiesDocument,
    "markets": MarketsDocument,
    "exchange": ExchangeDocument,
}


def show(repositories: Repositories, kind: str) -> object:
    """Return a JSON-serializable view of one configuration class."""
    if kind == "exchange":
        return repositories.exchange.get().model_dump(mode="json")

    repository = repositories.strategies if kind == "strategies" else repositories.markets
    return [entity.model_dump(mode="json") for entity in repository.find_all()]


def check(repositories: Repositories) -> List[str]:
    """Load every document; return a description of each failure."""
    failures: List[str] = []
    for kind in KINDS:
        try:
            show(repositories, kind)
        except (BotConfigError, OSError) as e:
            logger.error("document_check_failed", kind=kind, error=str(e))
            failures.append(f"{kind}: {e}")
        else:
            logger.info("document_check_passed", kind=kind)
    return failures


def convert(settings: Settings, kind: str, action: str) -> None:
    """Encrypt or decrypt one data file in place with the master password."""
    store = create_store(settings)
    convert_file = store.encrypt_file if action == "encrypt" else store.decrypt_file
    convert_file(DOCUMENT_TYPES[kind], settings.data_path(kind), settings.schema_path(kind))


def _prompt_password(confirm: bool) -> Optional[str]:
    password = getpass.getpass("Enter master password: ")
    if confirm and password != getpass.getpass("Confirm master password: "):
        print("Error: Passwords do not match", file=sys.stderr)
        return None
    return password


def _load(settings_path: Optional[str], password: Optional[str]) -> Settings:
    settings = load_settings(settings_path)
    if password:
        settings = settings.model_copy(update={"master_password": SecretStr(password)})
    return settings


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Trading bot configuration store")
    parser.add_argument(
        "-s", "--settings",
        help="Path to a YAML settings file (default: environment only)"
    )
    parser.add_argument(
        "-p", "--password",
        help="Master password for encrypted data files (or set BOTCONFIG_MASTER_PASSWORD env)"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("check", help="Validate all configuration documents")
    show_parser = subparsers.add_parser("show", help="Print a configuration document")
    show_parser.add_argument("kind", choices=KINDS)
    for action in ("encrypt", "decrypt"):
        action_parser = subparsers.add_parser(
            action, help=f"{action.capitalize()} a data file in place"
        )
        action_parser.add_argument("kind", choices=KINDS)

    args = parser.parse_args(argv)

    try:
        settings = _load(args.settings, args.password)
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    setup_logging(
        level=settings.logging.level,
        json_output=settings.logging.json_output,
        log_file=settings.logging.log_file,
        stream=sys.stderr,
    )

    if args.command in ("encrypt", "decrypt"):
        if settings.get_master_password() is None:
            password = _prompt_password(confirm=args.command == "encrypt")
            if not password:
                return 1
            settings = settings.model_copy(update={"master_password": SecretStr(password)})
        try:
            convert(settings, args.kind, args.command)
        except (BotConfigError, OSError) as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        print(f"{args.command.capitalize()}ed {settings.data_path(args.kind)}")
        return 0

    repositories = create_repositories(settings)

    if args.command == "check":
        failures = check(repositories)
        for failure in failures:
            print(f"FAIL {failure}", file=sys.stderr)
        return 1 if failures else 0

    try:
        print(json.dumps(show(repositories, args.kind), indent=2))
    except (BotConfigError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
