"""Configuration management components."""

from .config_manager import ConfigManager, get_config_manager, reset_config_manager
from .converter_defaults import ConverterDefaults

__all__ = ['ConfigManager', 'ConverterDefaults', 'get_config_manager', 'reset_config_manager']
