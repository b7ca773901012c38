"""
Centralized configuration defaults for XML to JSON conversion.

This module defines the compiled-in defaults for every property the converter
understands. Property files and explicit overrides are layered on top of these
values by the ConfigManager.

Single Source of Truth: Change these values once; all modules automatically use updated defaults.
"""

from ..models import INT32_MAX, INT64_MAX


class ConverterDefaults:
    """
    Compiled-in defaults, keyed the same way as the property file.

    Any value can be overridden in application.properties:
    - converter.max.int.value=1000
    - converter.score.data.type=long
    """

    # Property keys
    MAX_INT_VALUE_KEY = "converter.max.int.value"
    MAX_LONG_VALUE_KEY = "converter.max.long.value"
    SCORE_DATA_TYPE_KEY = "converter.score.data.type"
    MATCH_SUMMARY_ENABLED_KEY = "feature.match.summary.enabled"
    OVERRIDE_SECOND_MATCH_SCORE_KEY = "override.second.match.score"
    FIXED_SECOND_MATCH_SCORE_KEY = "fixed.second.match.score"
    FIELD_MAPPING_PREFIX = "field.mapping."

    # Score aggregation
    MAX_INT_VALUE = INT32_MAX
    MAX_LONG_VALUE = INT64_MAX
    SCORE_DATA_TYPE = "integer"

    # Features
    MATCH_SUMMARY_ENABLED = True

    # Field renames always present unless overridden
    FIELD_MAPPINGS = {"MatchDetails.Score": "Score"}

    # Locations
    CONFIG_PATH_ENV_VAR = "XML_JSON_CONVERTER_CONFIG"
    DEFAULT_CONFIG_FILE = "config/application.properties"

    # Logging
    LOG_LEVEL = "INFO"

    @classmethod
    def to_dict(cls) -> dict:
        """
        Export the value defaults as a dictionary.

        Property key names (the *_KEY and *_PREFIX attributes) are left out.

        Returns:
            Dictionary of ConverterDefaults class attributes.
        """
        return {
            key: getattr(cls, key)
            for key in dir(cls)
            if not key.startswith('_') and key.isupper()
            and not key.endswith('_KEY') and not key.endswith('_PREFIX')
        }

    @classmethod
    def log_summary(cls, logger=None):
        """
        Log a summary of all converter defaults.

        Args:
            logger: Optional logger instance. If None, prints to stdout.
        """
        config_dict = cls.to_dict()
        summary = "\n".join([f"  {key}: {value}" for key, value in sorted(config_dict.items())])
        message = f"Converter Configuration Defaults:\n{summary}"

        if logger:
            logger.info(message)
        else:
            print(message)
