"""
Configuration for ytcaptions.

Contains default settings and the layered config loader.
"""

from ytcaptions.config.defaults import DEFAULT_LANGUAGE
from ytcaptions.config.loader import (
    ConfigSource,
    YtCaptionsConfig,
    clear_config_cache,
    get_config,
    get_root_dir,
)

__all__ = [
    "DEFAULT_LANGUAGE",
    # Config loader
    "YtCaptionsConfig",
    "ConfigSource",
    "get_config",
    "get_root_dir",
    "clear_config_cache",
]
