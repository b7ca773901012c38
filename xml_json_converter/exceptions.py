"""
Custom exceptions for the XML to JSON conversion system.

This module defines specific exception types for the error conditions that
can end a conversion: unreadable XML, failures while building the JSON tree,
and invalid configuration.
"""

from typing import Optional


class ConverterError(Exception):
    """Base exception for all conversion related errors."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        """
        Initialize converter error.

        Args:
            message: Error description
            cause: Optional underlying exception that triggered this error
        """
        super().__init__(message)
        self.message = message
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause


class ConversionError(ConverterError):
    """Exception raised when mapping, aggregation or serialization fails."""
    pass


class ParseError(ConversionError):
    """Exception raised when XML parsing fails or the document declares a DTD."""

    def __init__(self, message: str, xml_content: Optional[str] = None,
                 cause: Optional[BaseException] = None):
        """
        Initialize XML parse error.

        Args:
            message: Error description
            xml_content: Optional XML content that failed to parse (truncated for logging)
            cause: Optional underlying parser exception
        """
        super().__init__(message, cause)
        # Keep the first 500 chars for debugging
        self.xml_content = xml_content[:500] + "..." if xml_content and len(xml_content) > 500 else xml_content


class ConfigurationError(ConverterError):
    """Exception raised when configuration is invalid or cannot be read."""

    def __init__(self, message: str, key: Optional[str] = None, value: Optional[str] = None,
                 cause: Optional[BaseException] = None):
        """
        Initialize configuration error.

        Args:
            message: Error description
            key: Property key that failed validation
            value: Raw property value that failed validation
            cause: Optional underlying exception
        """
        super().__init__(message, cause)
        self.key = key
        self.value = value


class ServiceError(ConverterError):
    """Exception raised by the service layer when a request cannot be processed."""
    pass
