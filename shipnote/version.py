"""Version bumping for the release.

The version lives in a single ``version = "x.y.z"`` line of the version
file (``pyproject.toml`` by default). Bumping rewrites that line only and
returns the tag name for the new version.
"""

import logging
import re
from dataclasses import dataclass
from pathlib import Path

from .errors import VersionError


logger = logging.getLogger(__name__)

BUMP_TYPES = ("major", "minor", "patch", "custom")

_VERSION_RE = re.compile(r'^v?(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)$')
_VERSION_LINE_RE = re.compile(r'^(?P<prefix>version\s*=\s*["\'])(?P<version>[^"\']+)(?P<suffix>["\'])', re.MULTILINE)


@dataclass(frozen=True, order=True)
class SemVer:
    major: int
    minor: int
    patch: int

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"

    def to_tag(self) -> str:
        return f"v{self}"

    def bump(self, kind: str) -> "SemVer":
        if kind == "major":
            return SemVer(self.major + 1, 0, 0)
        if kind == "minor":
            return SemVer(self.major, self.minor + 1, 0)
        if kind == "patch":
            return SemVer(self.major, self.minor, self.patch + 1)
        raise VersionError(f"Unknown bump type: {kind}")


def parse_version(value: str) -> SemVer:
    """Parse ``x.y.z`` or ``vx.y.z``.

    Raises:
        VersionError: If the value is not a plain semantic version
    """
    m = _VERSION_RE.match(value.strip())
    if m is None:
        raise VersionError(f"Invalid version: {value!r}")
    return SemVer(int(m.group(1)), int(m.group(2)), int(m.group(3)))


def _read_version_file(path: str) -> str:
    try:
        return Path(path).read_text(encoding='utf-8')
    except (OSError, UnicodeDecodeError) as e:
        raise VersionError(f"Cannot read version file {path}: {e}")


def read_version(path: str) -> SemVer:
    """Read the current version from the version file."""
    content = _read_version_file(path)
    m = _VERSION_LINE_RE.search(content)
    if m is None:
        raise VersionError(f"No version line found in {path}")
    return parse_version(m.group('version'))


def bump_version(path: str, bump: str, custom_version: str = "") -> str:
    """Bump the version stored in the version file.

    Args:
        path: Version file path
        bump: One of ``major``, ``minor``, ``patch`` or ``custom``
        custom_version: New version when ``bump`` is ``custom``

    Returns:
        Tag name of the new version, e.g. ``v1.3.0``

    Raises:
        VersionError: If the file has no valid version line or the bump is invalid
    """
    current = read_version(path)
    if bump == "custom":
        new = parse_version(custom_version)
    else:
        new = current.bump(bump)

    content = _read_version_file(path)
    updated = _VERSION_LINE_RE.sub(
        lambda m: f"{m.group('prefix')}{new}{m.group('suffix')}", content, count=1
    )
    try:
        Path(path).write_text(updated, encoding='utf-8')
    except OSError as e:
        raise VersionError(f"Cannot write version file {path}: {e}")

    logger.info(f"Versioned package {current} -> {new}")
    return new.to_tag()
