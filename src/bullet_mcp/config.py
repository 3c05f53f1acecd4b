"""Configuration loaded from environment variables.

BULLET_STRICT_MODE         treat warnings as errors (default false)
BULLET_RESEARCH_CITATIONS  attach research citations to issues (default true)
BULLET_COLOR_OUTPUT        colour the console report (default true)
NO_COLOR                   when set, disables colour regardless of the above
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from typing import Optional

from .core.models import DEFAULT_CONFIG, BulletConfig, DisplayConfig, ValidationConfig

logger = logging.getLogger(__name__)

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})

__all__ = ["DEFAULT_CONFIG", "load_config"]


def _env_bool(environ: Mapping[str, str], name: str, default: bool) -> bool:
    raw = environ.get(name)
    if raw is None or not raw.strip():
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean (true/false, yes/no, on/off, 1/0), got {raw!r}")


def load_config(environ: Optional[Mapping[str, str]] = None) -> BulletConfig:
    """Build a ``BulletConfig`` from the environment (``os.environ`` by default)."""
    env = os.environ if environ is None else environ
    color = _env_bool(env, "BULLET_COLOR_OUTPUT", DEFAULT_CONFIG.display.color_output)
    if "NO_COLOR" in env:
        color = False

    config = BulletConfig(
        validation=ValidationConfig(
            strict_mode=_env_bool(env, "BULLET_STRICT_MODE", DEFAULT_CONFIG.validation.strict_mode),
            enable_research_citations=_env_bool(
                env, "BULLET_RESEARCH_CITATIONS", DEFAULT_CONFIG.validation.enable_research_citations
            ),
        ),
        display=DisplayConfig(color_output=color),
    )
    logger.debug("Loaded config: %s", config.model_dump())
    return config
