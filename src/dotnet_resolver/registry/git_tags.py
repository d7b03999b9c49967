"""Read the tag list of a remote git repository."""

from __future__ import annotations

import logging
import subprocess
from typing import List

from ..common.logging_utils import Timer, extra_context, is_debug_enabled, safe_url
from ..constants import Constants
from ..errors import FetchError

logger = logging.getLogger(__name__)

_TAG_REF = "refs/tags/"


def parse_ls_remote(output: str) -> List[str]:
    """Extract tag names from ``git ls-remote --tags`` output.

    Peeled refs (``^{}``) are ignored; their tag is listed on its own line.
    """
    tags = []
    for line in output.splitlines():
        parts = line.split("\t", 1)
        if len(parts) != 2:
            continue
        ref = parts[1].strip()
        if not ref.startswith(_TAG_REF) or ref.endswith("^{}"):
            continue
        tags.append(ref[len(_TAG_REF):])
    return tags


def load_git_tags(url: str, timeout: int = Constants.GIT_TIMEOUT) -> List[str]:
    """Return all tag names of the repository at ``url``, in git's order.

    Raises:
        FetchError: If git is missing, times out or exits non-zero.
    """
    target = safe_url(url)
    with Timer() as t:
        try:
            result = subprocess.run(
                ["git", "ls-remote", "--tags", "--refs", url],
                capture_output=True,
                text=True,
                timeout=timeout,
                check=True,
            )
        except FileNotFoundError as exc:
            raise FetchError("Failed to load git tags: git executable not found") from exc
        except subprocess.TimeoutExpired as exc:
            raise FetchError(f"Failed to load git tags from {target}: timed out after {timeout} seconds") from exc
        except subprocess.CalledProcessError as exc:
            detail = (exc.stderr or "").strip() or f"exit code {exc.returncode}"
            raise FetchError(f"Failed to load git tags from {target}: {detail}") from exc

    tags = parse_ls_remote(result.stdout)
    if is_debug_enabled(logger):
        logger.debug(
            "Loaded git tags",
            extra=extra_context(
                event="git_ls_remote",
                component="git_tags",
                target=target,
                count=len(tags),
                duration_ms=t.duration_ms(),
            ),
        )
    return tags
