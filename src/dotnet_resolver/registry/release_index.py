"""Client for the .NET release metadata feed.

The feed has two levels:

- ``releases-index.json``: one entry per channel (``channel-version``,
  ``latest-sdk``, ``release-type`` and a ``releases.json`` pointer), newest
  channel first.
- ``<channel>/releases.json``: every runtime release of that channel with its
  SDK build(s) and downloadable files.

Entries that do not match the expected shape are skipped; a feed that cannot
be fetched or decoded raises ``FetchError``.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from ..common.http_client import get_json
from ..common.logging_utils import extra_context, is_debug_enabled
from ..config import ResolverSettings
from ..errors import FetchError
from ..versioning.models import ChannelRelease, ReleaseChannel, ReleaseFile, ReleaseSdk

logger = logging.getLogger(__name__)


def _log_skipped(kind: str, reason: str) -> None:
    if is_debug_enabled(logger):
        logger.debug(
            "Skipping malformed %s entry: %s",
            kind,
            reason,
            extra=extra_context(event="parse", component="release_index", outcome="skipped", kind=kind),
        )


def _require_str(entry: Dict[str, Any], key: str) -> str:
    value = entry.get(key)
    if not isinstance(value, str):
        raise KeyError(key)
    return value


def parse_release_channel(entry: Any) -> Optional[ReleaseChannel]:
    """Build a ReleaseChannel from a ``releases-index`` item, or None if malformed."""
    if not isinstance(entry, dict):
        _log_skipped("releases-index", "not an object")
        return None
    try:
        return ReleaseChannel(
            channel_version=_require_str(entry, "channel-version"),
            latest_sdk=_require_str(entry, "latest-sdk"),
            release_type=_require_str(entry, "release-type"),
            releases_json=_require_str(entry, "releases.json"),
        )
    except KeyError as exc:
        _log_skipped("releases-index", f"missing field {exc}")
        return None


def _parse_file(entry: Any) -> Optional[ReleaseFile]:
    if not isinstance(entry, dict):
        return None
    try:
        rid = entry.get("rid")
        return ReleaseFile(
            name=_require_str(entry, "name"),
            url=_require_str(entry, "url"),
            hash=entry.get("hash") or "",
            rid=rid if isinstance(rid, str) else None,
        )
    except KeyError as exc:
        _log_skipped("file", f"missing field {exc}")
        return None


def parse_release_sdk(entry: Any) -> Optional[ReleaseSdk]:
    """Build a ReleaseSdk from a ``sdk``/``sdks`` item, or None if malformed."""
    if not isinstance(entry, dict) or not isinstance(entry.get("version"), str):
        _log_skipped("sdk", "missing version")
        return None
    files = entry.get("files") or []
    if not isinstance(files, list):
        files = []
    display = entry.get("version-display")
    return ReleaseSdk(
        version=entry["version"],
        version_display=display if isinstance(display, str) else None,
        files=tuple(f for f in (_parse_file(item) for item in files) if f is not None),
    )


def parse_channel_release(entry: Any) -> Optional[ChannelRelease]:
    """Build a ChannelRelease from a ``releases`` item, or None if malformed."""
    if not isinstance(entry, dict):
        _log_skipped("release", "not an object")
        return None
    sdk = parse_release_sdk(entry.get("sdk"))
    if sdk is None:
        return None
    raw_sdks = entry.get("sdks")
    sdks = None
    if isinstance(raw_sdks, list):
        sdks = tuple(s for s in (parse_release_sdk(item) for item in raw_sdks) if s is not None)
    return ChannelRelease(sdk=sdk, sdks=sdks)


def fetch_release_index(settings: ResolverSettings) -> List[ReleaseChannel]:
    """Fetch the channel list, newest channel first.

    Raises:
        FetchError: If the index cannot be retrieved or lacks ``releases-index``.
    """
    context = "index of releases"
    data = get_json(settings.releases_index_url, context=context, timeout=settings.request_timeout)
    entries = data.get("releases-index") if isinstance(data, dict) else None
    if not isinstance(entries, list):
        raise FetchError(f"Failed to retrieve {context}: missing 'releases-index' array")

    channels = [c for c in (parse_release_channel(e) for e in entries) if c is not None]
    logger.debug("Release index lists %d channels", len(channels))
    return channels


def fetch_channel_releases(channel: ReleaseChannel, settings: ResolverSettings) -> List[ChannelRelease]:
    """Fetch the releases of one channel through its ``releases.json`` pointer.

    Raises:
        FetchError: If the document cannot be retrieved or lacks ``releases``.
    """
    context = f"releases of channel {channel.channel_version}"
    data = get_json(channel.releases_json, context=context, timeout=settings.request_timeout)
    entries = data.get("releases") if isinstance(data, dict) else None
    if not isinstance(entries, list):
        raise FetchError(f"Failed to retrieve {context}: missing 'releases' array")

    releases = [r for r in (parse_channel_release(e) for e in entries) if r is not None]
    logger.debug("Channel %s lists %d releases", channel.channel_version, len(releases))
    return releases
