"""
Configuration System

Small YAML configuration layer for the toolkit. Features:
- Optional single-file YAML loading (the toolkit runs with defaults alone)
- Built-in defaults deep-merged under the user's file
- Environment variable resolution (${VAR}, ${VAR:-default}, $VAR)
- Dot-path access through get_config_value()

Lookup order for the config file:
1. Explicit path (``kit --config PATH``)
2. ``KIT_CONFIG`` environment variable
3. ``$KIT_EXT_DIR/config.yml`` (``KIT_EXT_DIR`` defaults to ``~/.config/kit``)
"""

import copy
import logging
import os
import re
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from kit.base.errors import ConfigurationError

# Use standard logging (not get_logger) to avoid circular imports with logger.py
logger = logging.getLogger("CONFIG")

DEFAULT_EXT_DIR = "~/.config/kit"

_ENV_VAR_RE = re.compile(
    r"\$\{(?P<braced>[^}:]+)(?::-(?P<default>[^}]*))?\}|\$(?P<bare>[A-Za-z_][A-Za-z0-9_]*)"
)

DEFAULT_CONFIG: dict[str, Any] = {
    "paths": {
        # Built-in operation modules are always scanned first
        "functions_dirs": ["${KIT_EXT_DIR}/functions"],
        "shortcuts_file": "${KIT_EXT_DIR}/shortcuts.conf",
        "editors_file": "${KIT_EXT_DIR}/editor.conf",
    },
    "shortcuts": {
        "navigation": {"enabled": "${KIT_AUTO_SHORTCUTS:-true}"},
        "editor": {"enabled": "${KIT_AUTO_EDITORS:-true}"},
    },
    "categories": {
        "Image Processing": {"icon": "🎨", "description": "Image conversion and optimization"},
        "Media Processing": {"icon": "🎬", "description": "Audio and video utilities"},
        "System Utilities": {"icon": "⚙️ ", "description": "Shell and filesystem utilities"},
        "File Listing": {"icon": "📁", "description": "Enhanced directory listings"},
    },
    "logging": {
        "level": "WARNING",
        "rich_tracebacks": True,
        "show_traceback_locals": False,
        "show_full_paths": False,
        "logging_colors": {},
    },
    "cli": {"theme": "default"},
}


def get_ext_dir() -> Path:
    """Return the toolkit's extension directory (config files, user modules)."""
    return Path(os.environ.get("KIT_EXT_DIR") or DEFAULT_EXT_DIR).expanduser()


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Merge ``override`` into a copy of ``base``; nested mappings merge, everything else replaces."""
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


class ConfigBuilder:
    """
    Configuration builder for the toolkit.

    Features:
    - Optional YAML file merged over DEFAULT_CONFIG
    - Environment variable resolution
    - Dot-separated path access
    """

    def __init__(self, config_path: str | Path | None = None):
        """
        Initialize configuration builder.

        Args:
            config_path: Path to a YAML config file. If None, KIT_CONFIG and
                $KIT_EXT_DIR/config.yml are tried; a missing file means defaults only.

        Raises:
            ConfigurationError: If an explicitly requested file does not exist or
                the file is not valid YAML mapping.
        """
        # Load .env file from current working directory without overriding the environment
        dotenv_path = Path.cwd() / ".env"
        if dotenv_path.exists():
            load_dotenv(dotenv_path, override=False)
            logger.debug(f"Loaded .env file from {dotenv_path}")

        explicit = config_path is not None or bool(os.environ.get("KIT_CONFIG"))
        if config_path is None:
            config_path = os.environ.get("KIT_CONFIG") or get_ext_dir() / "config.yml"

        self.config_path = Path(config_path).expanduser()
        if explicit and not self.config_path.is_file():
            raise ConfigurationError(f"Config file not found: {self.config_path}")

        user_config = self._load_yaml_file(self.config_path) if self.config_path.is_file() else {}
        if not user_config:
            logger.debug(f"No user configuration at {self.config_path}, using defaults")

        # KIT_EXT_DIR is referenced by the defaults; make sure it always resolves
        env = dict(os.environ)
        env.setdefault("KIT_EXT_DIR", str(get_ext_dir()))
        self.raw_config = self._resolve_env_vars(_deep_merge(DEFAULT_CONFIG, user_config), env)

    def _load_yaml_file(self, file_path: Path) -> dict[str, Any]:
        """Load and validate a YAML configuration file."""
        try:
            with open(file_path, encoding="utf-8") as f:
                config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Error parsing YAML configuration {file_path}: {e}") from e

        if config is None:
            logger.warning(f"Configuration file is empty: {file_path}")
            return {}

        if not isinstance(config, dict):
            raise ConfigurationError(
                f"Configuration file must contain a dictionary/mapping: {file_path}"
            )

        logger.debug(f"Loaded configuration from {file_path}")
        return config

    def _resolve_env_vars(self, data: Any, env: dict[str, str]) -> Any:
        """Substitute ``${VAR}``, ``${VAR:-default}`` and ``$VAR`` in every string value.

        Unknown variables without a default are left as written.
        """
        if isinstance(data, dict):
            return {key: self._resolve_env_vars(value, env) for key, value in data.items()}
        if isinstance(data, list):
            return [self._resolve_env_vars(item, env) for item in data]
        if not isinstance(data, str):
            return data

        def substitute(match: re.Match) -> str:
            var_name = match.group("braced") or match.group("bare")
            default = match.group("default")
            if var_name in env:
                return env[var_name]
            if default is not None:
                return default
            logger.info(f"Environment variable '{var_name}' is not set, keeping '{match.group(0)}'")
            return match.group(0)

        return _ENV_VAR_RE.sub(substitute, data)

    def get(self, path: str, default: Any = None) -> Any:
        """Get a configuration value by dot-separated path."""
        value: Any = self.raw_config
        for key in path.split("."):
            if isinstance(value, dict) and key in value:
                value = value[key]
            else:
                return default
        return value


# Per-path config cache; None key holds the default lookup
_config_cache: dict[str | None, ConfigBuilder] = {}


def get_config_builder(config_path: str | Path | None = None) -> ConfigBuilder:
    """Get configuration instance (cached per path).

    Examples:
        >>> config = get_config_builder()
        >>> config = get_config_builder("/path/to/config.yml")
    """
    key = str(Path(config_path).expanduser().resolve()) if config_path is not None else None
    if key not in _config_cache:
        _config_cache[key] = ConfigBuilder(config_path)
        logger.debug(f"Initialized configuration from {_config_cache[key].config_path}")
    return _config_cache[key]


def set_default_config(config_path: str | Path) -> ConfigBuilder:
    """Load ``config_path`` and make it the default for later lookups without a path."""
    builder = get_config_builder(config_path)
    _config_cache[None] = builder
    return builder


def reset_config() -> None:
    """Forget every cached configuration (used by tests and ``--config``)."""
    _config_cache.clear()


def get_config_value(path: str, default: Any = None, config_path: str | Path | None = None) -> Any:
    """
    Get a specific configuration value by dot-separated path.

    Args:
        path: Dot-separated configuration path (e.g., "paths.shortcuts_file")
        default: Default value to return if path is not found
        config_path: Optional explicit path to configuration file

    Returns:
        The configuration value at the specified path, or default if not found

    Raises:
        ValueError: If path is empty or None

    Examples:
        >>> shortcuts = get_config_value("paths.shortcuts_file")
        >>> level = get_config_value("logging.level", "WARNING")
    """
    if not path:
        raise ValueError("Configuration path cannot be empty or None")

    return get_config_builder(config_path).get(path, default)


def as_bool(value: Any) -> bool:
    """Interpret config toggles such as ``"true"``/``"false"`` coming from env placeholders."""
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)
