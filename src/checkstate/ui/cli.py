from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from checkstate.adapters.state_file import JsonStateRepository, StateFileError, default_state_path
from checkstate.app import compare_documents, refresh_state
from checkstate.config import ConfigurationError, configure_logging
from checkstate.domain.model import Outcome

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)

EXIT_FAILURE = 1
EXIT_USAGE = 2
EXIT_WOULD_REPLACE = 3


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Reconcile stored synthetic checks")
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log reconciliation details at DEBUG level",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    refresh = subparsers.add_parser(
        "refresh",
        help="Read every stored check from the API and update the state file",
    )
    refresh.add_argument(
        "--state",
        type=Path,
        default=None,
        help="Path to the JSON state file (defaults to the data directory)",
    )

    diff = subparsers.add_parser(
        "diff",
        help="Report whether a remote document would replace a local one",
    )
    diff.add_argument("local", type=Path, help="File holding the stored document")
    diff.add_argument("remote", type=Path, help="File holding the fetched document")

    return parser.parse_args(list(argv))


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ValueError(f"Cannot read {path}: {exc}") from exc


def _run_refresh(args: argparse.Namespace) -> int:
    state_path = args.state or default_state_path()
    summary = refresh_state(JsonStateRepository(state_path))
    return 0 if summary.ok else EXIT_FAILURE


def _run_diff(args: argparse.Namespace) -> int:
    verdict = compare_documents(_read_text(args.local), _read_text(args.remote))
    print(verdict.outcome.value)  # noqa: T201
    if verdict.diagnostic is not None:
        print(f"{verdict.diagnostic.severity}: {verdict.diagnostic.message}")  # noqa: T201
    return 0 if verdict.outcome is Outcome.UNCHANGED else EXIT_WOULD_REPLACE


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    configure_logging(verbose=parsed_args.verbose)

    try:
        if parsed_args.command == "refresh":
            exit_code = _run_refresh(parsed_args)
        elif parsed_args.command == "diff":
            exit_code = _run_diff(parsed_args)
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301
    except (ConfigurationError, ValueError) as exc:
        log.error("%s", exc)  # noqa: TRY400
        sys.exit(EXIT_USAGE)
    except StateFileError as exc:
        log.error("%s", exc)  # noqa: TRY400
        sys.exit(EXIT_FAILURE)
    except Exception:
        log.exception("Fatal error during refresh")
        sys.exit(EXIT_FAILURE)

    if exit_code:
        sys.exit(exit_code)


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
