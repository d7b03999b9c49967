"""Resolve aliases to release channels and pick SDK builds from a channel."""

import logging
from typing import Iterable, Iterator, List, Optional, Sequence

import semantic_version

from ..constants import Constants
from ..errors import AssetNotFoundError, ReleaseNotFoundError
from .models import ChannelRelease, DownloadAsset, ReleaseChannel, ReleaseSdk
from .sdk_version import parse_version

logger = logging.getLogger(__name__)

CHANNEL_ALIASES = (Constants.ALIAS_LTS, Constants.ALIAS_STS)


def is_known_alias(alias: str) -> bool:
    return alias.lower() in (Constants.ALIAS_LATEST,) + CHANNEL_ALIASES


def select_channel(alias: str, channels: Sequence[ReleaseChannel]) -> Optional[ReleaseChannel]:
    """Pick the channel an alias refers to.

    ``latest`` is the first channel (the index lists newest first); ``lts``
    and ``sts`` are the first channel with that release type. Matching is
    case-insensitive. Unknown aliases give None.
    """
    key = alias.lower()
    if key == Constants.ALIAS_LATEST:
        return channels[0] if channels else None
    if key in CHANNEL_ALIASES:
        return next((c for c in channels if c.release_type.lower() == key), None)
    return None


def resolve_alias(alias: str, channels: Sequence[ReleaseChannel]) -> Optional[semantic_version.Version]:
    """Resolve an alias to the latest SDK of its channel.

    Raises:
        VersionParseError: If the channel's ``latest-sdk`` is not a valid
            version, which means the upstream feed is corrupt.
    """
    channel = select_channel(alias, channels)
    if channel is None:
        logger.debug("No channel matches alias '%s'", alias)
        return None
    version = parse_version(channel.latest_sdk)
    logger.debug("Alias '%s' -> channel %s -> %s", alias, channel.channel_version, version)
    return version


def channel_version_of(version: semantic_version.Version) -> str:
    """Channel key (``major.minor``) an SDK version is published under."""
    return f"{version.major}.{version.minor}"


def find_channel(channels: Iterable[ReleaseChannel], channel_version: str) -> Optional[ReleaseChannel]:
    return next((c for c in channels if c.channel_version == channel_version), None)


def iter_channel_sdks(releases: Iterable[ChannelRelease]) -> Iterator[ReleaseSdk]:
    """Every SDK build of a channel; releases without ``sdks`` contribute ``sdk``."""
    for release in releases:
        if release.sdks is not None:
            yield from release.sdks
        else:
            yield release.sdk


def find_sdk(releases: Iterable[ChannelRelease], version: semantic_version.Version) -> ReleaseSdk:
    """Find the SDK build whose version string equals ``version``.

    Raises:
        ReleaseNotFoundError: If no build matches.
    """
    wanted = str(version)
    for sdk in iter_channel_sdks(releases):
        if sdk.version == wanted:
            return sdk
    raise ReleaseNotFoundError(f"Failed to find release matching '{wanted}'")


def select_asset(
    sdk: ReleaseSdk,
    rid: str,
    extension: str,
    tool_name: str = Constants.TOOL_NAME,
) -> DownloadAsset:
    """Pick the archive of ``sdk`` built for ``rid`` with the given extension.

    Raises:
        AssetNotFoundError: Naming ``rid`` when no file fits.
    """
    candidates: List[str] = []
    for file in sdk.files:
        if file.rid is None:
            continue
        candidates.append(file.name)
        if file.rid == rid and file.name.endswith(extension):
            return DownloadAsset(url=file.url, filename=file.name, checksum=file.hash or None)
    logger.debug("No %s file for %s among %s", extension, rid, candidates)
    raise AssetNotFoundError(tool_name, rid)
