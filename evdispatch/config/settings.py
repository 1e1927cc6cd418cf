"""
evdispatch Config - Dispatcher Settings
=========================================
Per-dispatcher knobs. Frozen once built.

Only observability is configurable. Dispatch semantics (ordering,
fire-once, deferred removal, nested-dispatch fault) are fixed.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

logger = logging.getLogger("evdispatch.config")

ENV_PREFIX = "EVDISPATCH_"

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off", ""})
_LEVEL_NAMES = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean flag, got {raw!r}.")


# ══════════════════════════════════════════════════════════════
# DISPATCHER CONFIG
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class DispatcherConfig:
    """
    Dispatcher settings.

    Fields:
        name:         Label used in this dispatcher's log lines
        log_dispatch: Emit one summary record per dispatch
        log_level:    Level of that summary record (logging level name)
    """

    name: str = "default"
    log_dispatch: bool = False
    log_level: str = "DEBUG"

    def __post_init__(self):
        if not isinstance(self.name, str) or not self.name.strip():
            raise ValueError("name must be a non-empty string.")

        if not isinstance(self.log_level, str):
            raise ValueError(
                f"log_level must be a level name, got {self.log_level!r}."
            )
        level = self.log_level.strip().upper()
        if level not in _LEVEL_NAMES:
            raise ValueError(
                f"log_level must be one of {', '.join(_LEVEL_NAMES)}, "
                f"got {self.log_level!r}."
            )
        object.__setattr__(self, "log_level", level)

    @property
    def level(self) -> int:
        """log_level as a numeric logging level."""
        return logging.getLevelName(self.log_level)

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        prefix: str = ENV_PREFIX,
    ) -> "DispatcherConfig":
        """
        Build config from environment variables.

        Reads <prefix>NAME, <prefix>LOG_DISPATCH, <prefix>LOG_LEVEL.
        Unset variables keep their defaults.

        Raises:
            ValueError: A variable is set to an invalid value.
        """
        env = os.environ if environ is None else environ
        kwargs = {}

        if f"{prefix}NAME" in env:
            kwargs["name"] = env[f"{prefix}NAME"]
        if f"{prefix}LOG_DISPATCH" in env:
            kwargs["log_dispatch"] = _parse_bool(
                f"{prefix}LOG_DISPATCH", env[f"{prefix}LOG_DISPATCH"]
            )
        if f"{prefix}LOG_LEVEL" in env:
            kwargs["log_level"] = env[f"{prefix}LOG_LEVEL"]

        config = cls(**kwargs)
        logger.debug(f"Dispatcher config loaded from environment: {config}")
        return config


DEFAULT_CONFIG = DispatcherConfig()
