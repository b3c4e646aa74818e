"""
Unified configuration loader with priority resolution.

Root directory (YTCAPTIONS_ROOT):
- macOS/Linux: ~/.ytcaptions
- Windows: %APPDATA%\\ytcaptions
- Override: YTCAPTIONS_ROOT environment variable

Each setting is resolved independently (highest to lowest):
1. Environment variable (YTCAPTIONS_CACHE_ENABLED, ...) - override
2. Project config (.ytcaptions/config.yaml)
3. User config ({root_dir}/config.yaml)
4. Default (config/defaults.py)

Config file layout:

    default_language: en
    client_timeout: 30
    cache:
      enabled: true
      default_ttl: 3600
      max_keys: 1000
      check_period: 600
"""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass, field
from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml

from ytcaptions.cache.store import CacheConfig
from ytcaptions.config import defaults

logger = logging.getLogger(__name__)

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}

# setting name -> (environment variable, value type)
_SETTINGS: dict[str, tuple[str, type]] = {
    "default_language": ("YTCAPTIONS_DEFAULT_LANGUAGE", str),
    "client_timeout": ("YTCAPTIONS_CLIENT_TIMEOUT", int),
    "cache.enabled": ("YTCAPTIONS_CACHE_ENABLED", bool),
    "cache.default_ttl": ("YTCAPTIONS_CACHE_DEFAULT_TTL", int),
    "cache.max_keys": ("YTCAPTIONS_CACHE_MAX_KEYS", int),
    "cache.check_period": ("YTCAPTIONS_CACHE_CHECK_PERIOD", int),
}

_DEFAULTS: dict[str, Any] = {
    "default_language": defaults.DEFAULT_LANGUAGE,
    "client_timeout": defaults.CLIENT_TIMEOUT,
    "cache.enabled": defaults.CACHE_ENABLED,
    "cache.default_ttl": defaults.CACHE_DEFAULT_TTL,
    "cache.max_keys": defaults.CACHE_MAX_KEYS,
    "cache.check_period": defaults.CACHE_CHECK_PERIOD,
}


class ConfigSource(Enum):
    """Source of the configuration value."""

    ENV = "env"
    PROJECT = "project"
    USER = "user"
    DEFAULT = "default"


@dataclass(frozen=True)
class YtCaptionsConfig:
    """Resolved ytcaptions configuration.

    ``source`` is the highest-priority source that supplied at least one
    setting.
    """

    root_dir: Path
    cache: CacheConfig = field(default_factory=CacheConfig)
    default_language: str = defaults.DEFAULT_LANGUAGE
    client_timeout: int = defaults.CLIENT_TIMEOUT
    source: ConfigSource = ConfigSource.DEFAULT

    def __repr__(self) -> str:
        return (
            f"YtCaptionsConfig(root_dir={self.root_dir!r}, cache={self.cache!r}, "
            f"default_language={self.default_language!r}, "
            f"client_timeout={self.client_timeout!r}, source={self.source.value!r})"
        )


def _load_yaml_config(config_path: Path) -> dict[str, Any] | None:
    """Load configuration from a YAML file.

    Args:
        config_path: Path to the YAML config file.

    Returns:
        Parsed config dict, or None if file doesn't exist or fails to parse.
    """
    if not config_path.exists():
        return None

    try:
        with open(config_path) as f:
            config = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        logger.warning(f"Failed to load config from {config_path}: {e}")
        return None

    if config is None:
        return {}
    if not isinstance(config, dict):
        logger.warning(f"Config file {config_path} is not a valid YAML dict")
        return None
    return config


def _flatten_yaml(config: dict[str, Any]) -> dict[str, Any]:
    """Map a parsed config file onto dotted setting names."""
    flat: dict[str, Any] = {}
    for name in _SETTINGS:
        section, _, key = name.rpartition(".")
        container = config.get(section) if section else config
        if isinstance(container, dict) and key in container:
            flat[name] = container[key]
    return flat


def _coerce(value: Any, kind: type) -> Any:
    """Convert a raw env/YAML value to the setting's type.

    Raises:
        ValueError: If the value cannot be converted
    """
    if kind is bool:
        if isinstance(value, bool):
            return value
        text = str(value).strip().lower()
        if text in _TRUE_VALUES:
            return True
        if text in _FALSE_VALUES:
            return False
        raise ValueError(f"not a boolean: {value!r}")

    if kind is int:
        if isinstance(value, bool):
            raise ValueError(f"not an integer: {value!r}")
        number = int(value)
        if number < 0:
            raise ValueError(f"must not be negative: {value!r}")
        return number

    text = str(value).strip()
    if not text:
        raise ValueError("must not be empty")
    return text


def _find_project_config() -> Path | None:
    """Find project-level config by walking up from cwd.

    Returns:
        Path to .ytcaptions/config.yaml if found, None otherwise.
    """
    cwd = Path.cwd()
    for parent in [cwd, *cwd.parents]:
        config_path = parent / ".ytcaptions" / "config.yaml"
        if config_path.exists():
            return config_path
    return None


def _get_root_dir() -> Path:
    """Get the ytcaptions root directory.

    Priority:
    1. YTCAPTIONS_ROOT environment variable
    2. Platform-specific default:
       - Windows: %APPDATA%\\ytcaptions
       - macOS/Linux: ~/.ytcaptions

    Returns:
        Path to the root directory (may not exist yet).
    """
    env_root = os.environ.get("YTCAPTIONS_ROOT")
    if env_root:
        return Path(env_root).expanduser().resolve()

    if sys.platform == "win32":
        appdata = os.environ.get("APPDATA")
        if appdata:
            return Path(appdata) / "ytcaptions"
        return Path.home() / "AppData" / "Roaming" / "ytcaptions"
    return Path.home() / ".ytcaptions"


def _get_user_config_path() -> Path:
    """Get the user-level config path ({root_dir}/config.yaml)."""
    return _get_root_dir() / "config.yaml"


def _layers() -> list[tuple[ConfigSource, str, dict[str, Any]]]:
    """Collect raw settings from every source, highest priority first."""
    env = {
        name: os.environ[var]
        for name, (var, _) in _SETTINGS.items()
        if os.environ.get(var)
    }
    layers = [(ConfigSource.ENV, "environment", env)]

    project_config_path = _find_project_config()
    if project_config_path:
        project_config = _load_yaml_config(project_config_path)
        if project_config:
            layers.append(
                (ConfigSource.PROJECT, str(project_config_path), _flatten_yaml(project_config))
            )

    user_config_path = _get_user_config_path()
    user_config = _load_yaml_config(user_config_path)
    if user_config:
        layers.append((ConfigSource.USER, str(user_config_path), _flatten_yaml(user_config)))

    return layers


def _resolve_config() -> YtCaptionsConfig:
    """Resolve configuration from all sources in priority order.

    Returns:
        Resolved YtCaptionsConfig. Invalid values are logged and skipped,
        falling through to the next source.
    """
    root_dir = _get_root_dir()
    layers = _layers()

    values: dict[str, Any] = {}
    source = ConfigSource.DEFAULT
    source_rank = list(ConfigSource)

    for name, (_, kind) in _SETTINGS.items():
        for layer_source, origin, raw in layers:
            if name not in raw:
                continue
            try:
                values[name] = _coerce(raw[name], kind)
            except (TypeError, ValueError) as e:
                logger.warning(f"Ignoring invalid {name} from {origin}: {e}")
                continue
            if source_rank.index(layer_source) < source_rank.index(source):
                source = layer_source
            break
        else:
            values[name] = _DEFAULTS[name]

    config = YtCaptionsConfig(
        root_dir=root_dir,
        cache=CacheConfig(
            enabled=values["cache.enabled"],
            default_ttl=values["cache.default_ttl"],
            max_keys=values["cache.max_keys"],
            check_period=values["cache.check_period"],
        ),
        default_language=values["default_language"],
        client_timeout=values["client_timeout"] or defaults.CLIENT_TIMEOUT,
        source=source,
    )
    logger.debug(f"Resolved config: {config!r}")
    return config


@lru_cache(maxsize=1)
def get_config() -> YtCaptionsConfig:
    """Get resolved ytcaptions configuration.

    Results are cached - configuration is resolved once per process.
    To force re-resolution (e.g., after env change), use clear_config_cache().
    """
    return _resolve_config()


def get_root_dir(ensure_exists: bool = True) -> Path:
    """Get the resolved root directory.

    Args:
        ensure_exists: If True (default), create the directory if it doesn't exist.

    Returns:
        Path to the root directory (e.g., ~/.ytcaptions).
    """
    root_dir = get_config().root_dir
    if ensure_exists:
        root_dir.mkdir(parents=True, exist_ok=True)
    return root_dir


def clear_config_cache() -> None:
    """Clear the cached configuration.

    Call this if environment variables or config files have changed
    and you need to re-resolve the configuration.
    """
    get_config.cache_clear()
