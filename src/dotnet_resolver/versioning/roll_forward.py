"""Translate a global.json roll-forward policy into a version range.

The range uses npm syntax so it can be evaluated by any semver matcher
(see ``matcher.py``). The matcher always selects the greatest satisfying
version, so the "earliest" policies (``major``, ``minor``, ``feature``,
``patch``) cannot be expressed and produce the same range as their
``latest*`` counterparts.
"""

import logging
from typing import Optional

from .models import RollForward
from .sdk_version import compose_patch_upper_bound, format_version, parse_version

logger = logging.getLogger(__name__)

MIN_VERSION = "0.0.0"


def translate(declared_version: Optional[str], policy: Optional[RollForward]) -> str:
    """Build the version range for a declared minimum and roll-forward policy.

    Args:
        declared_version: ``sdk.version`` from global.json, if any.
        policy: ``sdk.rollForward`` from global.json, if any.

    Returns:
        A range string such as ``~8.0.100`` or ``>=8.0.100 <8.0.200``.

    Raises:
        VersionParseError: If the patch policies cannot parse ``declared_version``.
    """
    if declared_version is None:
        # Without a minimum every policy allows any version.
        if policy not in (None, RollForward.LATEST_MAJOR):
            logger.debug("Ignoring rollForward %s without a declared version", policy.value)
        minimum = MIN_VERSION
        policy = RollForward.LATEST_MAJOR
    else:
        minimum = declared_version.strip()
        policy = policy or RollForward.LATEST_PATCH

    if policy in (RollForward.MAJOR, RollForward.LATEST_MAJOR):
        result = f">={minimum}"
    elif policy in (RollForward.MINOR, RollForward.LATEST_MINOR):
        result = f"^{minimum}"
    elif policy in (RollForward.FEATURE, RollForward.LATEST_FEATURE):
        result = f"~{minimum}"
    elif policy in (RollForward.PATCH, RollForward.LATEST_PATCH):
        upper = compose_patch_upper_bound(parse_version(minimum))
        result = f">={minimum} <{format_version(upper)}"
    elif policy == RollForward.DISABLE:
        result = f"={minimum}"
    else:
        raise ValueError(f"Unhandled roll-forward policy: {policy!r}")

    logger.debug("Roll-forward %s on %s -> %s", policy.value, minimum, result)
    return result
