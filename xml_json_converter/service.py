"""
Service facade over the XML to JSON converter.
"""

import logging

from typing import Optional

from .config.config_manager import ConfigManager, get_config_manager
from .converter import XmlToJsonConverter
from .exceptions import ConverterError, ServiceError


class XmlToJsonService:
    """Processes XML input with a converter built from the resolved configuration."""

    def __init__(self, converter: Optional[XmlToJsonConverter] = None,
                 config_manager: Optional[ConfigManager] = None):
        """
        Initialize the service.

        Args:
            converter: Converter to use. If None, one is built from the configuration manager's settings.
            config_manager: Source of settings. If None, the global configuration manager is used.
        """
        self.logger = logging.getLogger(__name__)
        if converter is None:
            config_manager = config_manager or get_config_manager()
            converter = XmlToJsonConverter(config_manager.get_settings())
        self.converter = converter

    def process_xml(self, xml_input: str) -> str:
        """
        Processes the XML input and returns the converted JSON.

        Raises:
            ServiceError: If the conversion fails for any reason
        """
        self.logger.info("Processing XML input")
        try:
            return self.converter.convert_xml_to_json(xml_input)
        except ConverterError as e:
            self.logger.error(f"Error processing XML: {e}")
            raise ServiceError(f"Failed to process XML: {e.message}", cause=e) from e
