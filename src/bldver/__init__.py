"""Version reporter: build metadata, provenance dump and build command."""

from bldver.build_info import BuildMetadata, load_build_metadata
from bldver.platforms import OsFamily, resolve_os_family
from bldver.provenance import BuildInfoProvider, BuildProvenance, Dependency, DistributionProvider
from bldver.reporter import VersionReporter

__all__ = [
    "BuildInfoProvider",
    "BuildMetadata",
    "BuildProvenance",
    "Dependency",
    "DistributionProvider",
    "OsFamily",
    "VersionReporter",
    "load_build_metadata",
    "resolve_os_family",
]
