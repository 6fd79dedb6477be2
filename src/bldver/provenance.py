"""Build provenance: how the running program was built and what it depends on.

DistributionProvider answers from installed distribution metadata
(importlib.metadata). Each dependency carries a checksum over its RECORD
file so two installs of the same version can be told apart. When the
program's own distribution is not installed (e.g. run from a bare source
checkout) the provenance is unavailable and read() returns None.
"""

from __future__ import annotations

import base64
import hashlib
import platform
import re
import sys
from importlib import metadata
from typing import TYPE_CHECKING, Protocol, runtime_checkable

import structlog
from pydantic import BaseModel

if TYPE_CHECKING:
    from bldver.build_info import BuildMetadata

logger = structlog.get_logger()

DEFAULT_DISTRIBUTION = "bldver"

_REQUIREMENT_NAME = re.compile(r"^\s*([A-Za-z0-9][A-Za-z0-9._-]*)")
_EXTRA_MARKER = re.compile(r"\bextra\s*==")
_NAME_SEPARATORS = re.compile(r"[-_.]+")


class Dependency(BaseModel, frozen=True):
    """One installed distribution."""

    name: str
    version: str
    checksum: str = ""  # "sha256=<b64>" over the RECORD file; empty when the dist ships none


class BuildProvenance(BaseModel, frozen=True):
    """Toolchain view of the running program."""

    python: str  # interpreter version, e.g. "3.13.1"
    path: str  # main module
    main: Dependency
    deps: tuple[Dependency, ...] = ()  # sorted by name
    settings: tuple[tuple[str, str], ...] = ()

    def render(self) -> str:
        """Tab-separated dump, one record per line."""
        lines = [f"python\t{self.python}", f"path\t{self.path}", _module_line("mod", self.main)]
        lines.extend(_module_line("dep", dep) for dep in self.deps)
        lines.extend(f"build\t{key}={value}" for key, value in self.settings)
        return "\n".join(lines)


def _module_line(kind: str, module: Dependency) -> str:
    return f"{kind}\t{module.name}\t{module.version}\t{module.checksum}"


@runtime_checkable
class BuildInfoProvider(Protocol):
    """Report how the running program was built, or None when that is unknown."""

    def read(self) -> BuildProvenance | None: ...


class DistributionProvider:
    """Provenance from the installed distribution and its declared requirements."""

    def __init__(
        self,
        distribution: str = DEFAULT_DISTRIBUTION,
        module_path: str | None = None,
        *,
        build: BuildMetadata | None = None,
    ) -> None:
        self._distribution = distribution
        self._module_path = module_path or distribution
        # stamp reported alongside the toolchain settings
        self._build = build

    def read(self) -> BuildProvenance | None:
        try:
            dist = metadata.distribution(self._distribution)
        except metadata.PackageNotFoundError:
            return None

        deps: list[Dependency] = []
        for name in required_names(dist.requires or []):
            try:
                deps.append(_dependency(metadata.distribution(name)))
            except metadata.PackageNotFoundError:
                logger.debug("declared dependency not installed", dependency=name)

        return BuildProvenance(
            python=platform.python_version(),
            path=self._module_path,
            main=_dependency(dist),
            deps=tuple(sorted(deps, key=lambda dep: dep.name.lower())),
            settings=_build_settings(self._build),
        )


def required_names(requirements: list[str]) -> list[str]:
    """Distribution names from requirement strings, skipping extras-only ones.

    Other environment markers are not evaluated; a requirement whose marker
    excludes this interpreter is simply not installed and gets skipped later.
    """
    names: list[str] = []
    seen: set[str] = set()
    for requirement in requirements:
        requirement_spec, _, marker = requirement.partition(";")
        if _EXTRA_MARKER.search(marker):
            continue
        match = _REQUIREMENT_NAME.match(requirement_spec)
        if match is None:
            continue
        name = match.group(1)
        key = normalize_name(name)
        if key not in seen:
            seen.add(key)
            names.append(name)
    return names


def normalize_name(name: str) -> str:
    """PEP 503 normalized form, e.g. "PyYAML" and "pyyaml" compare equal."""
    return _NAME_SEPARATORS.sub("-", name).lower()


def _dependency(dist: metadata.Distribution) -> Dependency:
    return Dependency(name=dist.name, version=dist.version, checksum=record_checksum(dist.read_text("RECORD")))


def record_checksum(record: str | None) -> str:
    if record is None:
        return ""
    digest = hashlib.sha256(record.encode("utf-8")).digest()
    return "sha256=" + base64.urlsafe_b64encode(digest).rstrip(b"=").decode("ascii")


def _build_settings(build: BuildMetadata | None = None) -> tuple[tuple[str, str], ...]:
    settings = (
        ("implementation", platform.python_implementation()),
        ("compiler", platform.python_compiler()),
        ("platform", sys.platform),
        ("machine", platform.machine()),
    )
    if build is None:
        return settings
    return settings + build.stamp()
