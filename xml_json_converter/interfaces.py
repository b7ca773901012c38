"""
Abstract interfaces for the XML to JSON conversion system.

This module defines the contracts the parser, converter and configuration
components implement so they can be swapped or mocked independently.
"""

from abc import ABC, abstractmethod
from typing import Mapping, Optional

from lxml import etree

from .models import ConverterSettings


class XMLParserInterface(ABC):
    """Abstract interface for XML parsing components."""

    @abstractmethod
    def parse_xml_stream(self, xml_content: str) -> etree._Element:
        """
        Parse XML content into an element tree.

        Args:
            xml_content: Raw XML content as string

        Returns:
            Root element of the parsed document

        Raises:
            ParseError: If XML is malformed, empty, or declares a DTD
        """
        pass

    @abstractmethod
    def validate_xml_structure(self, xml_content: str) -> bool:
        """
        Validate XML structure before processing.

        Args:
            xml_content: Raw XML content to validate

        Returns:
            True if XML would be accepted by parse_xml_stream, False otherwise
        """
        pass


class ConverterInterface(ABC):
    """Abstract interface for XML to JSON converters."""

    @abstractmethod
    def convert_xml_to_json(self, xml_content: str) -> str:
        """
        Convert an XML document to pretty-printed JSON text.

        Raises:
            ParseError: If the XML cannot be parsed
            ConversionError: For any other failure
        """
        pass


class ConfigurationManagerInterface(ABC):
    """Abstract interface for configuration management."""

    @abstractmethod
    def resolve(self, source: Mapping[str, str]) -> ConverterSettings:
        """Build converter settings from a flat property mapping."""
        pass

    @abstractmethod
    def load_settings(self, config_path: Optional[str] = None,
                      overrides: Optional[Mapping[str, str]] = None) -> ConverterSettings:
        """Load layered settings: defaults, then file, then explicit overrides."""
        pass
