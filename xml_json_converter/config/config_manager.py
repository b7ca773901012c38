"""
Centralized configuration management for the XML to JSON conversion system.

This module provides the ConfigManager class that resolves converter settings
from layered key-value sources: compiled-in defaults, then a property file
(flat key=value lines, or YAML), then explicit overrides supplied by the caller.
"""

import os
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import yaml

from .converter_defaults import ConverterDefaults
from ..interfaces import ConfigurationManagerInterface
from ..models import ConverterSettings, ScoreDataType, INT32_MAX, INT64_MAX
from ..exceptions import ConfigurationError
from ..utils import ValidationUtils


@dataclass
class ConfigPaths:
    """Configuration file paths with environment variable support."""
    base_config_path: Path = field(default_factory=lambda: Path.cwd())
    config_file: str = ConverterDefaults.DEFAULT_CONFIG_FILE

    @classmethod
    def from_environment(cls, base_path: Optional[Union[str, Path]] = None) -> 'ConfigPaths':
        """Create configuration paths, honoring XML_JSON_CONVERTER_CONFIG when set."""
        base_config_path = Path(base_path) if base_path else Path.cwd()
        config_file = os.environ.get(ConverterDefaults.CONFIG_PATH_ENV_VAR, ConverterDefaults.DEFAULT_CONFIG_FILE)
        return cls(base_config_path=base_config_path, config_file=config_file)

    @property
    def default_config_path(self) -> Path:
        path = Path(self.config_file)
        return path if path.is_absolute() else self.base_config_path / path


class ConfigManager(ConfigurationManagerInterface):
    """
    Configuration manager serving as single source of truth for converter settings.

    Every property is optional. In lenient mode (the default) a malformed value
    is logged and replaced by its default; with strict=True it raises
    ConfigurationError instead.
    """

    def __init__(self, base_config_path: Optional[Union[str, Path]] = None, strict: bool = False):
        """
        Initialize the configuration manager.

        Args:
            base_config_path: Base path for relative configuration files. If None, uses current directory.
            strict: Raise ConfigurationError on malformed values instead of falling back to defaults
        """
        self.logger = logging.getLogger(__name__)
        self.paths = ConfigPaths.from_environment(base_config_path)
        self.strict = strict

        # Cache for loaded property files
        self._properties_cache: Dict[str, Dict[str, Any]] = {}
        self._settings: Optional[ConverterSettings] = None

        self.logger.debug(f"ConfigManager initialized with base path: {self.paths.base_config_path}")

    def get_settings(self) -> ConverterSettings:
        """
        Get settings resolved from the default configuration file, cached after first use.

        Returns:
            ConverterSettings built from defaults and the default property file (if present)
        """
        if self._settings is None:
            self._settings = self.load_settings()
        return self._settings

    def load_settings(self, config_path: Optional[Union[str, Path]] = None,
                      overrides: Optional[Mapping[str, Any]] = None) -> ConverterSettings:
        """
        Load layered settings.

        Args:
            config_path: Property or YAML file. If None, the default file is used when it exists.
            overrides: Explicit properties applied on top of the file

        Returns:
            Resolved ConverterSettings

        Raises:
            ConfigurationError: If an explicitly named file is missing or unreadable
        """
        source: Dict[str, Any] = {}

        if config_path is not None:
            source.update(self.load_properties(config_path))
        else:
            default_path = self.paths.default_config_path
            if default_path.exists():
                source.update(self.load_properties(default_path))
            else:
                self.logger.warning(f"{default_path} not found, using default values")

        if overrides:
            source.update(overrides)

        return self.resolve(source)

    def load_properties(self, config_path: Union[str, Path]) -> Dict[str, Any]:
        """
        Load a flat property mapping from a .properties or YAML file, with caching.

        Args:
            config_path: File path, relative paths resolve against the base config path

        Returns:
            Dictionary of dotted property keys to raw values
        """
        full_path = Path(config_path)
        if not full_path.is_absolute():
            full_path = self.paths.base_config_path / full_path

        cache_key = str(full_path)
        if cache_key in self._properties_cache:
            self.logger.debug(f"Returning cached properties for {full_path}")
            return dict(self._properties_cache[cache_key])

        if not full_path.exists():
            raise ConfigurationError(f"Configuration file not found: {full_path}")

        try:
            with open(full_path, 'r', encoding='utf-8') as file:
                content = file.read()
        except OSError as e:
            raise ConfigurationError(f"Failed to read configuration file {full_path}: {e}", cause=e) from e

        if full_path.suffix.lower() in ['.yaml', '.yml']:
            try:
                data = yaml.safe_load(content)
            except yaml.YAMLError as e:
                raise ConfigurationError(f"Failed to parse configuration file {full_path}: {e}", cause=e) from e
            if data is None:
                data = {}
            if not isinstance(data, dict):
                raise ConfigurationError(f"Configuration file {full_path} must contain a mapping at the top level")
            properties = self._flatten_mapping(data)
        else:
            properties = self.parse_properties(content)

        self._properties_cache[cache_key] = properties
        self.logger.info(f"Loaded {len(properties)} properties from {full_path}")
        return dict(properties)

    @staticmethod
    def parse_properties(content: str) -> Dict[str, str]:
        """
        Parse key=value lines. Lines starting with # or ! are comments;
        ':' is accepted as a separator as well as '='.
        """
        properties: Dict[str, str] = {}
        for raw_line in content.splitlines():
            line = raw_line.strip()
            if not line or line[0] in '#!':
                continue

            separators = [pos for pos in (line.find('='), line.find(':')) if pos >= 0]
            if separators:
                split_at = min(separators)
                key, value = line[:split_at].strip(), line[split_at + 1:].strip()
            else:
                # A bare key is a property with an empty value
                key, value = line, ''
            if key:
                properties[key] = value
        return properties

    def _flatten_mapping(self, data: Mapping[str, Any], prefix: str = '') -> Dict[str, Any]:
        """Join nested YAML keys with '.' to get property-style keys."""
        flat: Dict[str, Any] = {}
        for key, value in data.items():
            full_key = f"{prefix}.{key}" if prefix else str(key)
            if isinstance(value, dict):
                flat.update(self._flatten_mapping(value, full_key))
            else:
                flat[full_key] = value
        return flat

    def resolve(self, source: Mapping[str, Any]) -> ConverterSettings:
        """
        Build an immutable ConverterSettings from a flat property mapping.

        Args:
            source: Property keys to raw values; every key is optional

        Returns:
            ConverterSettings with defaults for anything absent or (in lenient mode) malformed
        """
        source = source or {}

        max_int_value = self._read_int(source, ConverterDefaults.MAX_INT_VALUE_KEY,
                                       ConverterDefaults.MAX_INT_VALUE, INT32_MAX)
        max_long_value = self._read_int(source, ConverterDefaults.MAX_LONG_VALUE_KEY,
                                        ConverterDefaults.MAX_LONG_VALUE, INT64_MAX)
        score_data_type = self._read_score_data_type(source)
        match_summary_enabled = self._read_bool(source, ConverterDefaults.MATCH_SUMMARY_ENABLED_KEY,
                                                ConverterDefaults.MATCH_SUMMARY_ENABLED)

        override_value = source.get(ConverterDefaults.OVERRIDE_SECOND_MATCH_SCORE_KEY)
        override_second_match_score = str(override_value) if override_value not in (None, '') else None

        settings = ConverterSettings(
            max_int_value=max_int_value,
            max_long_value=max_long_value,
            score_data_type=score_data_type,
            match_summary_enabled=match_summary_enabled,
            field_mappings=self._read_field_mappings(source),
            override_second_match_score=override_second_match_score,
            fixed_second_match_score=self._read_fixed_second_match_score(source),
        )
        self.logger.debug(f"Resolved converter settings: {settings}")
        return settings

    def get_configuration_summary(self) -> Dict[str, Any]:
        """
        Get summary of current configuration for logging/debugging.

        Returns:
            Dictionary with configuration summary
        """
        settings = self.get_settings()
        return {
            'paths': {
                'base_config_path': str(self.paths.base_config_path),
                'config_file': str(self.paths.default_config_path),
            },
            'converter': {
                'max_int_value': settings.max_int_value,
                'max_long_value': settings.max_long_value,
                'score_data_type': settings.score_data_type.value,
                'match_summary_enabled': settings.match_summary_enabled,
                'override_second_match_score': settings.override_second_match_score,
                'fixed_second_match_score': settings.fixed_second_match_score,
            },
            'field_mappings': dict(settings.field_mappings),
            'strict': self.strict,
        }

    def clear_cache(self) -> None:
        """Clear loaded property files and cached settings."""
        self._properties_cache.clear()
        self._settings = None
        self.logger.info("Configuration cache cleared")

    def _invalid(self, key: str, value: Any, default: Any, reason: str) -> Any:
        message = f"Invalid value for {key}: {value!r} ({reason})"
        if self.strict:
            raise ConfigurationError(message, key=key, value=str(value))
        self.logger.warning(f"{message}. Using default {default!r}")
        return default

    def _read_int(self, source: Mapping[str, Any], key: str, default: int, upper_bound: int) -> int:
        raw = source.get(key)
        if raw is None or raw == '':
            return default
        value = ValidationUtils.safe_int_conversion(raw if isinstance(raw, int) else str(raw).strip())
        if value is None:
            return self._invalid(key, raw, default, "not an integer")
        if value > upper_bound or value < -upper_bound - 1:
            return self._invalid(key, raw, default, "out of range")
        return value

    def _read_bool(self, source: Mapping[str, Any], key: str, default: bool) -> bool:
        raw = source.get(key)
        if raw is None or raw == '':
            return default
        value = ValidationUtils.parse_bool(raw)
        if value is None:
            return self._invalid(key, raw, default, "not a boolean")
        return value

    def _read_score_data_type(self, source: Mapping[str, Any]) -> ScoreDataType:
        key = ConverterDefaults.SCORE_DATA_TYPE_KEY
        default = ScoreDataType.from_string(ConverterDefaults.SCORE_DATA_TYPE)
        raw = source.get(key)
        if raw is None or raw == '':
            return default
        try:
            return ScoreDataType.from_string(str(raw))
        except ValueError:
            return self._invalid(key, raw, default, "expected 'integer' or 'long'")

    def _read_fixed_second_match_score(self, source: Mapping[str, Any]) -> bool:
        raw = source.get(ConverterDefaults.FIXED_SECOND_MATCH_SCORE_KEY)
        # Older property files set this key to the literal score itself
        if raw is not None and str(raw).strip() == '40':
            return True
        return self._read_bool(source, ConverterDefaults.FIXED_SECOND_MATCH_SCORE_KEY, False)

    def _read_field_mappings(self, source: Mapping[str, Any]) -> Dict[str, str]:
        mappings = dict(ConverterDefaults.FIELD_MAPPINGS)
        prefix = ConverterDefaults.FIELD_MAPPING_PREFIX
        for key, value in source.items():
            if key.startswith(prefix) and len(key) > len(prefix):
                mappings[key[len(prefix):]] = str(value)
        return mappings


# Global configuration manager instance
_global_config_manager: Optional[ConfigManager] = None


def get_config_manager(base_config_path: Optional[Union[str, Path]] = None) -> ConfigManager:
    """
    Get the global configuration manager instance.

    Args:
        base_config_path: Base path for configuration files (only used on first call)

    Returns:
        Global ConfigManager instance
    """
    global _global_config_manager

    if _global_config_manager is None:
        _global_config_manager = ConfigManager(base_config_path)

    return _global_config_manager


def reset_config_manager() -> None:
    """Reset the global configuration manager instance."""
    global _global_config_manager
    _global_config_manager = None
