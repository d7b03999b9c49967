"""Runtime settings for the resolver.

Defaults come from ``Constants``; an optional YAML file and
``DOTNET_RESOLVER_*`` environment variables override them. The result is a
frozen ``ResolverSettings`` that callers pass into the entry points.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, Mapping, Optional, Tuple

import yaml

from .constants import Constants
from .errors import ResolverError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolverSettings:
    """Immutable configuration values injected into every resolution call."""

    tool_name: str = Constants.TOOL_NAME
    bin_name: str = Constants.BIN_NAME
    releases_index_url: str = Constants.RELEASES_INDEX_URL
    sdk_repo_url: str = Constants.SDK_REPO_URL
    tag_prefix: str = Constants.TAG_PREFIX
    install_script_base_url: str = Constants.INSTALL_SCRIPT_BASE_URL
    request_timeout: int = Constants.REQUEST_TIMEOUT
    git_timeout: int = Constants.GIT_TIMEOUT
    # Extra historic tags merged ahead of the bundled list.
    extra_historic_tags: Tuple[str, ...] = field(default_factory=tuple)


_INT_FIELDS = ("request_timeout", "git_timeout")


def _coerce(name: str, value: Any) -> Any:
    """Convert a raw config value to the type of the target field."""
    if name in _INT_FIELDS:
        try:
            return int(value)
        except (TypeError, ValueError) as exc:
            raise ResolverError(f"Setting '{name}' must be an integer, got {value!r}") from exc
    if name == "extra_historic_tags":
        if isinstance(value, str):
            return tuple(tag.strip() for tag in value.split(",") if tag.strip())
        if isinstance(value, (list, tuple)):
            return tuple(str(tag) for tag in value)
        raise ResolverError(f"Setting '{name}' must be a list of tags")
    return str(value)


def _load_yaml_config(path: str) -> Dict[str, Any]:
    """Read the ``resolver`` section (or the whole mapping) of a YAML file."""
    try:
        with open(path, "r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle)
    except FileNotFoundError as exc:
        raise ResolverError(f"Config file not found: {path}") from exc
    except yaml.YAMLError as exc:
        raise ResolverError(f"Failed to parse config file {path}: {exc}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ResolverError(f"Config file {path} must contain a mapping")
    section = data.get(Constants.CONFIG_SECTION, data)
    if not isinstance(section, dict):
        raise ResolverError(f"Section '{Constants.CONFIG_SECTION}' in {path} must be a mapping")
    return section


def _env_overrides(environ: Mapping[str, str]) -> Dict[str, Any]:
    overrides: Dict[str, Any] = {}
    for f in fields(ResolverSettings):
        key = f"{Constants.ENV_PREFIX}{f.name.upper()}"
        value = environ.get(key)
        if value is not None and value.strip():
            overrides[f.name] = value.strip()
    return overrides


def load_settings(
    config_path: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> ResolverSettings:
    """Build settings from defaults, an optional YAML file and the environment.

    Environment variables take precedence over the file. Unknown keys in the
    file are ignored with a warning.
    """
    known = {f.name for f in fields(ResolverSettings)}
    raw: Dict[str, Any] = {}

    if config_path:
        for key, value in _load_yaml_config(config_path).items():
            if key in known:
                raw[key] = value
            else:
                logger.warning("Ignoring unknown setting '%s' in %s", key, config_path)

    raw.update(_env_overrides(os.environ if environ is None else environ))

    settings = replace(ResolverSettings(), **{k: _coerce(k, v) for k, v in raw.items()})
    logger.debug("Resolver settings: %s", settings)
    return settings
