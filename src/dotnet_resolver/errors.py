"""Exception taxonomy for version resolution.

Every failure that aborts a resolution call derives from ``ResolverError`` so
the CLI can report it with a single handler. Failures of a single discardable
unit (one tag, one release entry) are logged and skipped instead of raised.
"""

from __future__ import annotations

from typing import Optional


class ResolverError(Exception):
    """Base class for all resolution failures."""


class VersionParseError(ResolverError, ValueError):
    """A version string that is the subject of the call could not be parsed."""

    def __init__(self, text: str, reason: Optional[str] = None):
        self.text = text
        self.reason = reason
        message = f"Unable to parse '{text}' as a version"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class ConstraintFileError(ResolverError):
    """A project constraint file (global.json) is malformed."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid {path}: {reason}")


class UnsupportedAliasError(ResolverError):
    """The requested alias has no meaning for the .NET SDK."""

    def __init__(self, alias: str):
        self.alias = alias
        super().__init__(f"Alias '{alias}' is not supported")


class UnsupportedPlatformError(ResolverError):
    """No SDK builds are published for the OS/architecture pair."""


class FetchError(ResolverError):
    """A remote collaborator (release index, tag source, script host) failed."""


class ReleaseNotFoundError(ResolverError):
    """No SDK build in the channel releases matches the requested version."""


class AssetNotFoundError(ResolverError):
    """The SDK build has no downloadable file for the runtime identifier."""

    def __init__(self, tool: str, rid: str):
        self.rid = rid
        super().__init__(f"Unable to install {tool}, unable to find build fitting {rid}.")
