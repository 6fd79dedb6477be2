"""Command-line entry point: parse flags once, then run exactly one display mode."""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

import structlog

from bldver.build_info import load_build_metadata
from bldver.logging import setup_logging
from bldver.platforms import current_system, resolve_os_family
from bldver.provenance import DistributionProvider
from bldver.reporter import VersionReporter

if TYPE_CHECKING:
    from collections.abc import Sequence

    from bldver.provenance import BuildInfoProvider

logger = structlog.get_logger()


class DisplayMode(str, Enum):
    HELP = "help"
    VERSION = "version"
    BUILD = "build"
    RUN = "run"


@dataclass(frozen=True)
class InvocationFlags:
    show_help: bool = False
    show_version: bool = False
    show_build: bool = False

    @property
    def mode(self) -> DisplayMode:
        """First set flag wins: help, then version, then build."""
        if self.show_help:
            return DisplayMode.HELP
        if self.show_version:
            return DisplayMode.VERSION
        if self.show_build:
            return DisplayMode.BUILD
        return DisplayMode.RUN


def build_parser(prog: str) -> argparse.ArgumentParser:
    # -h is a plain flag; InvocationFlags.mode decides precedence
    parser = argparse.ArgumentParser(
        prog=prog,
        description="Report build version, date and git hash",
        add_help=False,
    )
    parser.add_argument("-h", "--help", action="store_true", dest="show_help", help="Show help")
    parser.add_argument("-v", "--version", action="store_true", dest="show_version", help="Show the current version")
    parser.add_argument("-b", action="store_true", dest="show_build", help="Show build command for this program")
    return parser


def parse_flags(parser: argparse.ArgumentParser, argv: Sequence[str] | None = None) -> InvocationFlags:
    args = parser.parse_args(argv)
    return InvocationFlags(show_help=args.show_help, show_version=args.show_version, show_build=args.show_build)


def main(argv: Sequence[str] | None = None, *, provider: BuildInfoProvider | None = None) -> int:
    setup_logging()

    build = load_build_metadata()
    parser = build_parser(build.program_name)
    flags = parse_flags(parser, argv)

    system = current_system()
    reporter = VersionReporter(
        build,
        provider or DistributionProvider(build=build),
        resolve_os_family(system),
        system=system,
    )

    mode = flags.mode
    logger.debug("dispatching display mode", mode=mode)
    if mode is DisplayMode.HELP:
        parser.print_help()
    elif mode is DisplayMode.VERSION:
        reporter.show_version()
    elif mode is DisplayMode.BUILD:
        reporter.show_build_command()
    else:
        reporter.run()
    return 0
