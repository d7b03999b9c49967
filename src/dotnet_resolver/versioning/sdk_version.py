"""SDK version codec.

.NET SDK versions pack two numbers into the third component: ``8.0.304`` is
feature band 3, patch 4 of the 8.0 line. This module parses and formats SDK
versions and exposes the band arithmetic used to build version ranges.
"""

from typing import NamedTuple

import semantic_version

from ..errors import VersionParseError

BAND_WIDTH = 100


class SdkComponents(NamedTuple):
    """A version split into its SDK meaning."""
    major: int
    minor: int
    feature_band: int
    patch_number: int


def parse_version(text: str) -> semantic_version.Version:
    """Parse a full ``major.minor.patch[-pre][+build]`` version.

    Raises:
        VersionParseError: If ``text`` is not a valid semantic version.
    """
    if not isinstance(text, str):
        raise VersionParseError(repr(text), "not a string")
    try:
        return semantic_version.Version(text.strip())
    except ValueError as exc:
        raise VersionParseError(text, str(exc)) from exc


def format_version(version: semantic_version.Version) -> str:
    return str(version)


def prerelease_label(version: semantic_version.Version) -> str:
    """Return the prerelease label as written (``"preview.7"``), or ``""``."""
    return ".".join(version.prerelease)


def decompose(version: semantic_version.Version) -> SdkComponents:
    return SdkComponents(
        major=version.major,
        minor=version.minor,
        feature_band=version.patch // BAND_WIDTH,
        patch_number=version.patch % BAND_WIDTH,
    )


def ceiling_to_hundred(patch: int) -> int:
    """Round up to a multiple of 100; exact multiples are returned unchanged."""
    return -(-patch // BAND_WIDTH) * BAND_WIDTH


def next_band_boundary(patch: int) -> int:
    """Return the first patch value of the band after the one holding ``patch``."""
    return (patch // BAND_WIDTH + 1) * BAND_WIDTH


def compose_patch_upper_bound(version: semantic_version.Version) -> semantic_version.Version:
    """Exclusive upper bound for "any patch within the same feature band".

    ``8.0.100`` -> ``8.0.200``, ``8.0.105`` -> ``8.0.200``, ``8.0.200`` -> ``8.0.300``.
    The prerelease label of ``version`` is dropped.
    """
    return semantic_version.Version(
        major=version.major,
        minor=version.minor,
        patch=next_band_boundary(version.patch),
    )
