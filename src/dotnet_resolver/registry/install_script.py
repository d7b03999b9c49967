"""Download and cache the official dotnet-install scripts.

A script already present on disk is reused as-is; there is no expiry or
refresh.
"""
from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

from ..common.http_client import get_text
from ..config import ResolverSettings
from ..constants import Constants, HostOS
from ..errors import FetchError

logger = logging.getLogger(__name__)


def install_script_name(host_os: HostOS) -> str:
    if host_os == HostOS.WINDOWS:
        return Constants.INSTALL_SCRIPT_WINDOWS
    return Constants.INSTALL_SCRIPT_UNIX


def ensure_install_script(directory: os.PathLike, host_os: HostOS, settings: ResolverSettings) -> Path:
    """Return the path of the install script, downloading it when absent.

    Raises:
        FetchError: If the download or the write fails.
    """
    name = install_script_name(host_os)
    path = Path(directory) / name
    if path.exists():
        logger.debug("Install script already present at %s", path)
        return path

    url = f"{settings.install_script_base_url}{name}"
    content = get_text(url, context=f"install script {name}", timeout=settings.request_timeout)

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{name}.", dir=path.parent)
    except OSError as exc:
        raise FetchError(f"Failed to write install script to {path}: {exc}") from exc

    # Only a complete script may land at the final path.
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(content)
        if host_os != HostOS.WINDOWS:
            os.chmod(tmp_name, 0o755)
        os.replace(tmp_name, path)
    except OSError as exc:
        try:
            os.unlink(tmp_name)
        except OSError:
            logger.debug("Could not remove partial install script %s", tmp_name)
        raise FetchError(f"Failed to write install script to {path}: {exc}") from exc

    logger.info("Downloaded %s to %s", name, path)
    return path
