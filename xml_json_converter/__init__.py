"""
XML to JSON Conversion System

Converts response XML documents to JSON with array coercion for repeated
elements, attribute flattening, field renaming, and an injected
TotalMatchScore summary.
"""

__version__ = "1.0.0"

# Import core models and interfaces for easy access
from .models import (
    ConverterSettings,
    ScoreDataType
)

from .interfaces import (
    XMLParserInterface,
    ConverterInterface,
    ConfigurationManagerInterface
)

from .exceptions import (
    ConverterError,
    ConversionError,
    ParseError,
    ConfigurationError,
    ServiceError
)

from .converter import XmlToJsonConverter, convert
from .service import XmlToJsonService

__all__ = [
    # Core models
    "ConverterSettings",
    "ScoreDataType",

    # Interfaces
    "XMLParserInterface",
    "ConverterInterface",
    "ConfigurationManagerInterface",

    # Exceptions
    "ConverterError",
    "ConversionError",
    "ParseError",
    "ConfigurationError",
    "ServiceError",

    # Conversion
    "XmlToJsonConverter",
    "XmlToJsonService",
    "convert"
]
