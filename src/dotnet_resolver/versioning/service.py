"""Resolution entry points.

Each function is independent: it fetches what it needs, computes its result
and keeps nothing between calls.
"""

import logging
import os
import re
from typing import Callable, List, Optional

import semantic_version

from ..config import ResolverSettings
from ..constants import Constants, HostArch, HostOS
from ..errors import ReleaseNotFoundError, UnsupportedAliasError
from ..platform_support import archive_extension, check_supported, runtime_identifier
from ..registry.git_tags import load_git_tags
from ..registry.release_index import fetch_channel_releases, fetch_release_index
from .catalog import HISTORIC_TAGS, build_listing, curate
from .channels import channel_version_of, find_channel, find_sdk, resolve_alias, select_asset
from .global_json import parse_global_json
from .matcher import pick_highest
from .models import DownloadAsset, VersionListing
from .roll_forward import translate
from .sdk_version import parse_version

logger = logging.getLogger(__name__)

TagLoader = Callable[[str], List[str]]

_ALIAS_RE = re.compile(r"^(?![xX]$)[A-Za-z][A-Za-z0-9_-]*$")
_V_PREFIX_RE = re.compile(r"^[vV](?=\d)")


def _normalize_request(request: str) -> str:
    return _V_PREFIX_RE.sub("", request.strip())


def is_alias(request: str) -> bool:
    """True for symbolic requests such as ``lts`` (as opposed to versions and ranges)."""
    return bool(_ALIAS_RE.match(request.strip()))


def detect_version_files() -> List[str]:
    """File names that may pin the SDK version of a project."""
    return [Constants.VERSION_FILE]


def list_known_versions(
    settings: ResolverSettings,
    tag_loader: Optional[TagLoader] = None,
) -> VersionListing:
    """Load the SDK repository tags and curate them into known versions."""
    loader = tag_loader or (lambda url: load_git_tags(url, timeout=settings.git_timeout))
    tags = loader(settings.sdk_repo_url)
    supplemental = settings.extra_historic_tags + HISTORIC_TAGS
    listing = build_listing(curate(tags, supplemental=supplemental, prefix=settings.tag_prefix))
    logger.info("Loaded %d known %s versions", len(listing.versions), settings.tool_name)
    return listing


def resolve_alias_request(alias: str, settings: ResolverSettings) -> Optional[semantic_version.Version]:
    """Resolve ``lts``, ``sts`` or ``latest`` against the release index.

    Returns None for aliases that name no channel.
    """
    if not is_alias(alias):
        return None
    return resolve_alias(alias, fetch_release_index(settings))


def resolve_version(
    request: str,
    settings: ResolverSettings,
    tag_loader: Optional[TagLoader] = None,
) -> semantic_version.Version:
    """Resolve an alias, partial version, range or exact version to a known version.

    Raises:
        UnsupportedAliasError: For ``canary`` and aliases without a channel.
        ReleaseNotFoundError: When no known version satisfies the request.
        VersionParseError: When the request is neither an alias nor a range.
    """
    text = _normalize_request(request)
    if text.lower() == Constants.ALIAS_CANARY:
        raise UnsupportedAliasError(text)

    if is_alias(text):
        version = resolve_alias_request(text, settings)
        if version is None:
            raise UnsupportedAliasError(text)
        return version

    listing = list_known_versions(settings, tag_loader=tag_loader)
    version = pick_highest(text, listing.versions)
    if version is None:
        raise ReleaseNotFoundError(f"No known {settings.tool_name} version matches '{request}'")
    logger.info("Resolved '%s' to %s", request, version)
    return version


def parse_constraint_file(path: str, content: str) -> Optional[str]:
    """Translate a global.json into a version range.

    Returns None for other files, blank content or a file without ``sdk``.

    Raises:
        ConstraintFileError: For malformed global.json content.
        VersionParseError: When a patch policy cannot parse ``sdk.version``.
    """
    if os.path.basename(path) != Constants.VERSION_FILE:
        return None
    sdk = parse_global_json(content, path)
    if sdk is None:
        return None
    return translate(sdk.version, sdk.roll_forward)


def select_download_asset(
    request: str,
    host_os: HostOS,
    host_arch: HostArch,
    settings: ResolverSettings,
    musl: bool = False,
) -> DownloadAsset:
    """Find the SDK archive to download for a version or alias on a platform.

    Raises:
        UnsupportedPlatformError: For OS/architecture pairs without builds.
        UnsupportedAliasError: For ``canary`` and unknown aliases.
        ReleaseNotFoundError: When the channel or build does not exist.
        AssetNotFoundError: When the build has no archive for the platform.
    """
    check_supported(host_os, host_arch, settings.tool_name)

    text = _normalize_request(request)
    if text.lower() == Constants.ALIAS_CANARY:
        raise UnsupportedAliasError(text)

    channels = fetch_release_index(settings)
    if is_alias(text):
        version = resolve_alias(text, channels)
        if version is None:
            raise UnsupportedAliasError(text)
    else:
        version = parse_version(text)

    channel_version = channel_version_of(version)
    channel = find_channel(channels, channel_version)
    if channel is None:
        raise ReleaseNotFoundError(f"No release channel {channel_version} for '{version}'")

    sdk = find_sdk(fetch_channel_releases(channel, settings), version)
    rid = runtime_identifier(host_os, host_arch, musl)
    asset = select_asset(sdk, rid, archive_extension(host_os), settings.tool_name)
    logger.info("Selected %s for %s on %s", asset.filename, version, rid)
    return asset
