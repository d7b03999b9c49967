"""Match version ranges against known versions using semantic versioning.

Ranges produced by the roll-forward translator and requests typed by users
("8", "8.0", "~8.0.100", "8.0.100-rc.2.23502.2") are evaluated with npm
semantics, so prereleases only match when the range names the same
``major.minor.patch`` with a prerelease.
"""

import logging
import re
from typing import Iterable, List, Optional, Union

import semantic_version

from ..errors import VersionParseError

logger = logging.getLogger(__name__)

Spec = Union[semantic_version.NpmSpec, semantic_version.SimpleSpec]

_EXACT_RE = re.compile(r"^\s*=?=?\s*v?(\d+\.\d+\.\d+(?:-[0-9A-Za-z.-]+)?)\s*$")


def _normalize_spec(spec_str: str) -> str:
    """Normalize comma-separated comparators into SimpleSpec form."""
    # ">=8.0.100, <8.0.200" => ">=8.0.100,<8.0.200"
    return re.sub(r"\s*,\s*", ",", spec_str.strip())


def _exact_pin(spec_str: str) -> Optional[semantic_version.Version]:
    """Return the version named by an exact pin such as ``=8.0.100-rc.2``."""
    m = _EXACT_RE.match(spec_str)
    if not m:
        return None
    try:
        return semantic_version.Version(m.group(1))
    except ValueError:
        return None


def parse_range(spec_str: str) -> Spec:
    """Parse a range with NpmSpec, falling back to a normalized SimpleSpec.

    Exact pins become a SimpleSpec equality, since NpmSpec lets
    ``=8.0.100-rc.1`` also match the stable ``8.0.100``.

    Raises:
        VersionParseError: If neither grammar accepts the range.
    """
    pinned = _exact_pin(spec_str)
    if pinned is not None:
        return semantic_version.SimpleSpec(f"=={pinned}")
    try:
        return semantic_version.NpmSpec(spec_str)
    except ValueError:
        norm = _normalize_spec(spec_str)
        try:
            return semantic_version.SimpleSpec(norm)
        except ValueError as exc:
            raise VersionParseError(spec_str, f"invalid version range: {exc}") from exc


def matching_versions(
    spec: Spec, versions: Iterable[semantic_version.Version]
) -> List[semantic_version.Version]:
    """Return the versions satisfied by ``spec``, in input order."""
    return [ver for ver in versions if spec.match(ver)]


def pick_highest(
    spec: Union[str, Spec], versions: Iterable[semantic_version.Version]
) -> Optional[semantic_version.Version]:
    """Pick the greatest version satisfying ``spec``, or None."""
    if isinstance(spec, str):
        spec = parse_range(spec)
    matches = matching_versions(spec, versions)
    if not matches:
        return None
    matches.sort(reverse=True)
    logger.debug("Range %s matched %d versions, picked %s", spec, len(matches), matches[0])
    return matches[0]
