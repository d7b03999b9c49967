"""Host platform checks and .NET runtime identifiers."""

from __future__ import annotations

import glob
import logging
import platform
import sys
from typing import Dict, FrozenSet, Tuple

from .constants import Constants, HostArch, HostOS
from .errors import UnsupportedPlatformError

logger = logging.getLogger(__name__)

SUPPORTED_PLATFORMS: Dict[HostOS, FrozenSet[HostArch]] = {
    HostOS.LINUX: frozenset({HostArch.X86, HostArch.X64, HostArch.ARM, HostArch.ARM64}),
    HostOS.MACOS: frozenset({HostArch.X64, HostArch.ARM64}),
    HostOS.WINDOWS: frozenset({HostArch.X86, HostArch.X64, HostArch.ARM64}),
}

_RID_OS = {
    HostOS.LINUX: "linux",
    HostOS.MACOS: "osx",
    HostOS.WINDOWS: "win",
}

_MACHINE_ARCH = {
    "x86_64": HostArch.X64,
    "amd64": HostArch.X64,
    "i386": HostArch.X86,
    "i686": HostArch.X86,
    "x86": HostArch.X86,
    "aarch64": HostArch.ARM64,
    "arm64": HostArch.ARM64,
    "armv7l": HostArch.ARM,
    "armv6l": HostArch.ARM,
    "arm": HostArch.ARM,
}


def check_supported(host_os: HostOS, host_arch: HostArch, tool_name: str = Constants.TOOL_NAME) -> None:
    """Raise UnsupportedPlatformError unless builds exist for the pair."""
    if host_arch not in SUPPORTED_PLATFORMS.get(host_os, frozenset()):
        raise UnsupportedPlatformError(
            f"Unable to install {tool_name}, unsupported OS {host_os.value} "
            f"and architecture {host_arch.value}"
        )


def runtime_identifier(host_os: HostOS, host_arch: HostArch, musl: bool = False) -> str:
    """Runtime identifier used in the ``rid`` field of release files, e.g. ``linux-musl-x64``."""
    os_part = _RID_OS[host_os]
    if host_os == HostOS.LINUX and musl:
        os_part = "linux-musl"
    return f"{os_part}-{host_arch.value}"


def archive_extension(host_os: HostOS) -> str:
    return ".zip" if host_os == HostOS.WINDOWS else ".tar.gz"


def is_musl() -> bool:
    """Best-effort check for a musl libc (Alpine and friends)."""
    if not sys.platform.startswith("linux"):
        return False
    return bool(glob.glob("/lib/ld-musl-*") or glob.glob("/usr/lib/libc.musl-*"))


def detect_host() -> Tuple[HostOS, HostArch, bool]:
    """Return the OS, architecture and musl flag of the running interpreter.

    Raises:
        UnsupportedPlatformError: For operating systems or machines with no
            known .NET mapping.
    """
    if sys.platform.startswith("linux"):
        host_os = HostOS.LINUX
    elif sys.platform == "darwin":
        host_os = HostOS.MACOS
    elif sys.platform in ("win32", "cygwin"):
        host_os = HostOS.WINDOWS
    else:
        raise UnsupportedPlatformError(f"Unsupported operating system '{sys.platform}'")

    machine = platform.machine().lower()
    host_arch = _MACHINE_ARCH.get(machine)
    if host_arch is None:
        raise UnsupportedPlatformError(f"Unsupported architecture '{machine}'")

    musl = host_os == HostOS.LINUX and is_musl()
    logger.debug("Detected host %s/%s (musl=%s)", host_os.value, host_arch.value, musl)
    return host_os, host_arch, musl
