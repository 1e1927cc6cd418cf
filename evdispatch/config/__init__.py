"""
evdispatch Config - Public API
================================
"""

from evdispatch.config.settings import (
    DEFAULT_CONFIG,
    ENV_PREFIX,
    DispatcherConfig,
)

__all__ = [
    "DispatcherConfig",
    "DEFAULT_CONFIG",
    "ENV_PREFIX",
]
