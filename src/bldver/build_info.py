"""Build metadata exposed at runtime.

The build step stamps BLDVER_PROGRAM_NAME, BLDVER_BUILD_DATE, BLDVER_VERSION and
BLDVER_GITHASH into the environment the program ships with (see ``bldver -b``).
Without a stamp the compiled-in defaults below are reported. An empty stamp
(e.g. ``git describe`` in a repo without tags) is reported as-is.
"""

from pydantic_settings import BaseSettings

DEFAULT_PROGRAM_NAME = "bldver"
DEFAULT_BUILD_DATE = "2022-10-01_00:00:00AM"
DEFAULT_VERSION = "v0.0.10"
DEFAULT_GITHASH = "0" * 40


class BuildMetadata(BaseSettings):
    model_config = {"env_prefix": "BLDVER_", "frozen": True, "extra": "ignore"}

    # program name set when the program was created
    program_name: str = DEFAULT_PROGRAM_NAME

    # UTC date of the last build, e.g. 2022-10-02_04:27:12AM
    build_date: str = DEFAULT_BUILD_DATE

    # most recent git tag reachable from the built revision
    version: str = DEFAULT_VERSION

    # full hash of the built revision
    githash: str = DEFAULT_GITHASH

    def version_line(self) -> str:
        return f"{self.program_name} ver: {self.version} at: {self.build_date} githash: {self.githash}"

    def stamp(self) -> tuple[tuple[str, str], ...]:
        """The values as the build step exports them, in BLDVER_* form."""
        return (
            ("BLDVER_PROGRAM_NAME", self.program_name),
            ("BLDVER_BUILD_DATE", self.build_date),
            ("BLDVER_VERSION", self.version),
            ("BLDVER_GITHASH", self.githash),
        )


def load_build_metadata() -> BuildMetadata:
    """Read the build stamp once at process start."""
    return BuildMetadata()
