"""filedeck entry point."""

import argparse
import asyncio
import logging
from importlib.metadata import version as get_version

from rich.console import Console

from filedeck.browser import FileBrowser
from filedeck.cli import run_shell
from filedeck.config import Settings
from filedeck.logging_setup import setup_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="filedeck",
        description="Browse and manage a remote file hierarchy",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  filedeck                                  Interactive console against the default API
  filedeck --api-base http://nas:8080/api   Use another server
  filedeck "cd Photos" "get cat.jpg"        Run commands and exit
""",
    )
    parser.add_argument("--api-base", type=str, default=None, help="Items API base URL")
    parser.add_argument(
        "--download-dir", type=str, default=None, help="Where downloaded files are saved"
    )
    parser.add_argument(
        "--discard-stale",
        action="store_true",
        help="Ignore listing responses from navigations that were superseded",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "--version",
        "-v",
        action="version",
        version=f"%(prog)s {get_version('filedeck')}",
    )
    parser.add_argument("commands", nargs="*", help="Console commands to run non-interactively")
    return parser


def settings_from_args(args: argparse.Namespace) -> Settings:
    overrides: dict = {}
    if args.api_base:
        overrides["api_base"] = args.api_base
    if args.download_dir:
        overrides["download_dir"] = args.download_dir
    if args.discard_stale:
        overrides["discard_stale_responses"] = True
    if args.verbose:
        overrides["log_level"] = "DEBUG"
    return Settings(**overrides)


def main() -> None:
    """Main entry point."""
    args = build_parser().parse_args()
    settings = settings_from_args(args)
    setup_logging(level=settings.log_level)

    console = Console()
    browser = FileBrowser(settings=settings)
    logger.debug("Using items API at %s", settings.api_base)

    try:
        asyncio.run(run_shell(browser, console, args.commands))
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
