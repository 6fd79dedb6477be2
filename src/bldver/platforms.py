"""Operating system families and the build command shown for each.

The commands stamp the build metadata into the environment and launch the
program, so a fresh build reports the tag, UTC date and hash of HEAD.
"""

import platform
from enum import Enum


class OsFamily(str, Enum):
    UNIX = "unix"
    WINDOWS = "windows"
    UNSUPPORTED = "unsupported"


_UNIX_SYSTEMS = {"linux", "darwin", "freebsd", "openbsd", "netbsd"}

BUILD_COMMAND_UNIX = (
    "HEAD=`git rev-parse HEAD` BLDVER_VERSION=`git describe --tags $HEAD`"
    " BLDVER_BUILD_DATE=`date -u '+%Y-%m-%d_%I:%M:%S%p'`"
    " BLDVER_GITHASH=`git rev-parse HEAD` bldver -v"
)

BUILD_COMMAND_WINDOWS = (
    "git rev-parse HEAD > temp.txt\n"
    "set /p BLDVER_GITHASH=<temp.txt\n"
    "git describe --tags %BLDVER_GITHASH% > temp.txt\n"
    "set /p BLDVER_VERSION=<temp.txt\n"
    "set BLDVER_BUILD_DATE=%DATE%_%TIME%\n"
    "bldver -v"
)

BUILD_COMMANDS: dict[OsFamily, str] = {
    OsFamily.UNIX: BUILD_COMMAND_UNIX,
    OsFamily.WINDOWS: BUILD_COMMAND_WINDOWS,
}


def current_system() -> str:
    return platform.system()


def resolve_os_family(system: str | None = None) -> OsFamily:
    """Map a platform.system() name to its family. Defaults to the running system."""
    name = (current_system() if system is None else system).lower()
    if name in _UNIX_SYSTEMS:
        return OsFamily.UNIX
    if name == "windows":
        return OsFamily.WINDOWS
    return OsFamily.UNSUPPORTED


def build_command(family: OsFamily) -> str | None:
    return BUILD_COMMANDS.get(family)
