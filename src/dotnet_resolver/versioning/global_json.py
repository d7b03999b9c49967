"""Parsing of global.json, the project-level SDK constraint file."""

import json
import logging
from typing import Any, Dict, Optional

from ..errors import ConstraintFileError
from .models import GlobalJsonSdk, RollForward

logger = logging.getLogger(__name__)


def _optional_str(sdk: Dict[str, Any], key: str, path: str) -> Optional[str]:
    value = sdk.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConstraintFileError(path, f"'sdk.{key}' must be a string")
    return value


def parse_global_json(content: str, path: str = "global.json") -> Optional[GlobalJsonSdk]:
    """Parse global.json content into its ``sdk`` section.

    Returns None when the content is blank or has no ``sdk`` object. Unknown
    fields are ignored.

    Raises:
        ConstraintFileError: On malformed JSON, wrong field types or an
            unknown ``rollForward`` value.
    """
    if not content or not content.strip():
        return None

    try:
        data = json.loads(content)
    except json.JSONDecodeError as exc:
        raise ConstraintFileError(path, f"malformed JSON ({exc.msg} at line {exc.lineno})") from exc

    if not isinstance(data, dict):
        raise ConstraintFileError(path, "top-level value must be an object")

    sdk = data.get("sdk")
    if sdk is None:
        logger.debug("%s has no 'sdk' section", path)
        return None
    if not isinstance(sdk, dict):
        raise ConstraintFileError(path, "'sdk' must be an object")

    version = _optional_str(sdk, "version", path)

    allow_prerelease = sdk.get("allowPrerelease")
    if allow_prerelease is not None and not isinstance(allow_prerelease, bool):
        raise ConstraintFileError(path, "'sdk.allowPrerelease' must be a boolean")

    roll_forward = None
    raw_policy = _optional_str(sdk, "rollForward", path)
    if raw_policy is not None:
        try:
            roll_forward = RollForward.parse(raw_policy)
        except ValueError as exc:
            allowed = ", ".join(p.value for p in RollForward)
            raise ConstraintFileError(
                path, f"unknown rollForward '{raw_policy}' (expected one of: {allowed})"
            ) from exc

    return GlobalJsonSdk(
        version=version,
        allow_prerelease=allow_prerelease,
        roll_forward=roll_forward,
    )
