"""Curate the list of known SDK versions from repository tags.

Walking the release index channel by channel takes one request per channel,
so the catalog is built from the SDK repository's git tags instead. Those
tags line up with the ``sdk.version`` fields of the release index, but only
go back to 2.x and include internal prerelease builds that were never
published. The 1.x era is supplied from ``HISTORIC_TAGS`` and internal builds
are filtered out here.
"""

import logging
from typing import Iterable, Iterator, List, Optional, Set

import semantic_version

from ..common.logging_utils import extra_context, is_debug_enabled
from ..constants import Constants
from ..errors import VersionParseError
from .models import CatalogEntry, VersionListing
from .sdk_version import parse_version, prerelease_label

logger = logging.getLogger(__name__)

# SDK releases that predate the tags of the SDK repository.
HISTORIC_TAGS = (
    "v1.0.0-preview2-003121",
    "v1.0.0-preview2-003131",
    "v1.0.0-preview2-003156",
    "v1.0.0-preview2-1-003177",
    "v1.0.0-preview4-004233",
    "v1.0.0-rc4-004771",
    "v1.0.0",
    "v1.0.1",
    "v1.0.3",
    "v1.0.4",
    "v1.1.0",
    "v1.1.4",
    "v1.1.5",
    "v1.1.7",
    "v1.1.8",
    "v1.1.9",
    "v1.1.10",
    "v1.1.11",
    "v1.1.12",
    "v1.1.13",
    "v1.1.14",
)


def is_published_prerelease(label: str) -> bool:
    """Return True for prerelease labels that appear in the release index.

    Previews (except the ``*sdk`` flavoured internal ones) and release
    candidates are kept; daily and CI builds are not.
    """
    if not label:
        return True
    if label.startswith("preview") and not label.endswith("sdk"):
        return True
    return label.startswith("rc")


def classify_tag(tag: str, prefix: str = Constants.TAG_PREFIX) -> CatalogEntry:
    """Classify one raw tag as an accepted version or a rejection reason."""
    if not tag.startswith(prefix):
        return CatalogEntry(tag=tag, version=None, reason="missing tag prefix")

    text = tag[len(prefix):]
    if not text:
        return CatalogEntry(tag=tag, version=None, reason="empty version")

    try:
        version = parse_version(text)
    except VersionParseError:
        if is_debug_enabled(logger):
            logger.debug(
                "Unable to parse tag '%s' as a version",
                tag,
                extra=extra_context(event="parse", component="catalog", outcome="skipped", target=tag),
            )
        return CatalogEntry(tag=tag, version=None, reason="unparsable version")

    label = prerelease_label(version)
    if not is_published_prerelease(label):
        return CatalogEntry(tag=tag, version=None, reason=f"unpublished prerelease '{label}'")

    return CatalogEntry(tag=tag, version=version)


def curate(
    raw_tags: Iterable[str],
    supplemental: Iterable[str] = HISTORIC_TAGS,
    prefix: str = Constants.TAG_PREFIX,
) -> Iterator[semantic_version.Version]:
    """Yield accepted versions, supplemental tags first, in source order.

    Duplicates are dropped, keeping the first occurrence. The generator holds
    no state beyond a single pass; call again to re-derive.
    """
    seen: Set[semantic_version.Version] = set()
    for source in (supplemental, raw_tags):
        for tag in source:
            entry = classify_tag(tag.strip(), prefix)
            if not entry.accepted or entry.version in seen:
                continue
            seen.add(entry.version)
            yield entry.version


def latest_stable(versions: Iterable[semantic_version.Version]) -> Optional[semantic_version.Version]:
    """Highest version without a prerelease label."""
    stable = [v for v in versions if not v.prerelease]
    return max(stable) if stable else None


def build_listing(versions: Iterable[semantic_version.Version]) -> VersionListing:
    """Wrap curated versions with the ``latest`` alias."""
    collected: List[semantic_version.Version] = list(versions)
    latest = latest_stable(collected)
    aliases = {Constants.ALIAS_LATEST: latest} if latest is not None else {}
    return VersionListing(versions=collected, latest=latest, aliases=aliases)
