"""Data models for SDK version resolution."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple

import semantic_version


class RollForward(Enum):
    """Roll-forward policies accepted in global.json (values are case-exact)."""
    MAJOR = "major"
    MINOR = "minor"
    FEATURE = "feature"
    PATCH = "patch"
    LATEST_MAJOR = "latestMajor"
    LATEST_MINOR = "latestMinor"
    LATEST_FEATURE = "latestFeature"
    LATEST_PATCH = "latestPatch"
    DISABLE = "disable"

    @classmethod
    def parse(cls, value: str) -> "RollForward":
        """Look up a policy by its global.json literal; raises ValueError."""
        return cls(value)


@dataclass(frozen=True)
class GlobalJsonSdk:
    """The ``sdk`` object of a global.json file."""
    version: Optional[str] = None
    allow_prerelease: Optional[bool] = None  # parsed, not used by resolution
    roll_forward: Optional[RollForward] = None


@dataclass(frozen=True)
class CatalogEntry:
    """Classification of one raw tag."""
    tag: str
    version: Optional[semantic_version.Version]
    reason: Optional[str] = None

    @property
    def accepted(self) -> bool:
        return self.version is not None


@dataclass
class VersionListing:
    """Known versions plus the aliases derived from them."""
    versions: List[semantic_version.Version]
    latest: Optional[semantic_version.Version] = None
    aliases: Dict[str, semantic_version.Version] = field(default_factory=dict)


@dataclass(frozen=True)
class ReleaseChannel:
    """One entry of the release index (a major.minor release line)."""
    channel_version: str
    latest_sdk: str
    release_type: str
    releases_json: str


@dataclass(frozen=True)
class ReleaseFile:
    """A downloadable file of an SDK build."""
    name: str
    url: str
    hash: str
    # Some older rhel / "win-gs" builds omit the runtime identifier.
    rid: Optional[str] = None


@dataclass(frozen=True)
class ReleaseSdk:
    """An SDK build as listed in a channel's releases.json."""
    version: str
    files: Tuple[ReleaseFile, ...] = ()
    version_display: Optional[str] = None


@dataclass(frozen=True)
class ChannelRelease:
    """A runtime release with the SDK builds shipped alongside it."""
    sdk: ReleaseSdk
    # None when the feed only lists the single latest build.
    sdks: Optional[Tuple[ReleaseSdk, ...]] = None


@dataclass(frozen=True)
class DownloadAsset:
    """Where to download an SDK archive from."""
    url: str
    filename: str
    checksum: Optional[str] = None
