"""
EnergyPlus version registry.

Defines the EnergyPlus versions whose Input Data Dictionary (IDD) layout
epmodel understands and provides utilities for version manipulation.
"""

from __future__ import annotations

import re
from typing import Final

# All EnergyPlus versions shipping an Energy+.idd that epmodel can parse.
# Each entry is a (major, minor, patch) tuple.
ENERGYPLUS_VERSIONS: Final[tuple[tuple[int, int, int], ...]] = (
    (8, 1, 0),
    (8, 2, 0),
    (8, 3, 0),
    (8, 4, 0),
    (8, 5, 0),
    (8, 6, 0),
    (8, 7, 0),
    (8, 8, 0),
    (8, 9, 0),
    (9, 0, 1),
    (9, 1, 0),
    (9, 2, 0),
    (9, 3, 0),
    (9, 4, 0),
    (9, 5, 0),
    (9, 6, 0),
)

#: Versions with a dictionary bundled inside the package.
EMBEDDED_VERSIONS: Final[tuple[tuple[int, int, int], ...]] = ((8, 8, 0),)

#: The latest version with a bundled dictionary.
LATEST_VERSION: Final[tuple[int, int, int]] = EMBEDDED_VERSIONS[-1]

#: Minimum supported version.
MINIMUM_VERSION: Final[tuple[int, int, int]] = ENERGYPLUS_VERSIONS[0]

# Set for O(1) membership checks
_VERSION_SET: Final[frozenset[tuple[int, int, int]]] = frozenset(ENERGYPLUS_VERSIONS)

_VERSION_STRING_PATTERN = re.compile(r"^\s*(\d+)(?:\.(\d+))?(?:\.(\d+))?")


def parse_version(value: str | tuple[int, ...]) -> tuple[int, int, int]:
    """Normalise a version string or tuple to ``(major, minor, patch)``.

    '8.8' -> (8, 8, 0)
    '9.0.1' -> (9, 0, 1)

    Raises:
        ValueError: If *value* does not start with a version number.
    """
    if isinstance(value, tuple):
        padded = (*value, 0, 0, 0)
        return (int(padded[0]), int(padded[1]), int(padded[2]))

    match = _VERSION_STRING_PATTERN.match(value)
    if match is None:
        msg = f"Invalid EnergyPlus version: {value!r}"
        raise ValueError(msg)
    major = int(match.group(1))
    minor = int(match.group(2) or 0)
    patch = int(match.group(3) or 0)
    return (major, minor, patch)


def is_supported_version(version: tuple[int, int, int]) -> bool:
    """Check if a version is in the supported set."""
    return version in _VERSION_SET


def version_string(version: tuple[int, int, int]) -> str:
    """Format a version tuple as a human-readable string (e.g. '8.8.0')."""
    return f"{version[0]}.{version[1]}.{version[2]}"


def short_version_string(version: tuple[int, int, int]) -> str:
    """Format a version the way IDF files write it (e.g. '8.8')."""
    return f"{version[0]}.{version[1]}"


def version_dirname(version: tuple[int, int, int]) -> str:
    """Return the dictionary directory name for a version (e.g. 'V8-8-0')."""
    return f"V{version[0]}-{version[1]}-{version[2]}"


def same_release(a: tuple[int, int, int], b: tuple[int, int, int]) -> bool:
    """Whether two versions share major and minor numbers.

    IDF files only record ``major.minor``, so a dictionary for 8.8.0 serves
    a file stamped ``8.8``.
    """
    return a[:2] == b[:2]


def find_embedded_version(version: tuple[int, int, int]) -> tuple[int, int, int] | None:
    """Return the bundled dictionary version matching *version*, if any."""
    for v in EMBEDDED_VERSIONS:
        if same_release(v, version):
            return v
    return None
