"""Display modes of the version reporter.

Each mode writes its report to stdout. The two recoverable conditions,
missing provenance and an unsupported OS, are logged and end the mode early.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from bldver.platforms import OsFamily, build_command

if TYPE_CHECKING:
    from collections.abc import Callable
    from typing import TextIO

    from bldver.build_info import BuildMetadata
    from bldver.provenance import BuildInfoProvider

logger = structlog.get_logger()


class VersionReporter:
    def __init__(
        self,
        build: BuildMetadata,
        provider: BuildInfoProvider,
        os_family: OsFamily,
        *,
        system: str = "",
        out: TextIO | None = None,
    ) -> None:
        self._build = build
        self._provider = provider
        self._os_family = os_family
        self._system = system
        # None means whatever sys.stdout is at print time
        self._out = out

    def _print(self, text: str = "") -> None:
        print(text, file=self._out)

    def show_version(self) -> None:
        """Print the version line, then the provenance dump and dependency records."""
        self._print(self._build.version_line())
        self._print()

        provenance = self._provider.read()
        if provenance is None:
            logger.error("failed to read build info", program=self._build.program_name)
            return

        self._print("Build Info:")
        self._print(provenance.render())
        self._print()
        self._print("Dependencies:")
        for dep in provenance.deps:
            self._print(f"\t{dep!r}")

    def show_build_command(self) -> None:
        command = build_command(self._os_family)
        if command is None:
            logger.error(
                "show build command not supported on this system",
                system=self._system,
                os_family=self._os_family,
            )
            return
        self._print(command)

    def run(self, work: Callable[[], None] | None = None) -> None:
        """Default mode: start banner, the program's work, then the end banner.

        The end banner is printed last even when work raises.
        """
        self._print(f"{self._build.program_name} version {self._build.version} started")
        try:
            if work is not None:
                work()
        finally:
            self._print(f"{self._build.program_name} ended")
