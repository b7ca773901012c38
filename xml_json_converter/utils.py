"""
Utility functions for common patterns across the XML to JSON conversion system.
"""

import re
from typing import Any, Optional

from lxml import etree

from .models import INT32_MAX


class StringUtils:
    """Utility methods for string validation and processing."""

    # Cached regex patterns for performance
    _regex_cache = {
        'signed_integer': re.compile(r'[+-]?[0-9]+'),
    }

    @staticmethod
    def is_signed_integer(text: str) -> bool:
        """True if text is an optional sign followed by ASCII digits only."""
        return bool(text) and StringUtils._regex_cache['signed_integer'].fullmatch(text) is not None


class ValidationUtils:
    """Utility methods for validation patterns."""

    _TRUE_VALUES = frozenset({'true', 'yes', 'on', '1'})
    _FALSE_VALUES = frozenset({'false', 'no', 'off', '0'})

    @staticmethod
    def safe_int_conversion(value: Any, default: Optional[int] = None) -> Optional[int]:
        """
        Safely convert value to integer.

        Only plain decimal integers with an optional sign are accepted; no
        surrounding whitespace, underscores or decimal points.

        Args:
            value: Value to convert
            default: Default value if conversion fails

        Returns:
            Integer value or default
        """
        if value is None:
            return default
        if isinstance(value, bool):
            return default
        if isinstance(value, int):
            return value

        text = str(value)
        if not StringUtils.is_signed_integer(text):
            return default
        return int(text)

    @staticmethod
    def parse_int32(text: Optional[str]) -> Optional[int]:
        """
        Parse text as a 32-bit signed integer.

        Returns:
            The integer, or None when the text is not an integer or is out of range
        """
        number = ValidationUtils.safe_int_conversion(text)
        if number is None or number > INT32_MAX or number < -INT32_MAX - 1:
            return None
        return number

    @staticmethod
    def parse_bool(value: Any) -> Optional[bool]:
        """
        Parse common boolean spellings.

        Returns:
            True/False, or None when the value is not a recognized boolean
        """
        if isinstance(value, bool):
            return value
        if value is None:
            return None
        normalized = str(value).strip().lower()
        if normalized in ValidationUtils._TRUE_VALUES:
            return True
        if normalized in ValidationUtils._FALSE_VALUES:
            return False
        return None


class ElementUtils:
    """Helpers for reading lxml elements the way a DOM would."""

    @staticmethod
    def child_elements(element: etree._Element) -> list:
        """Direct child elements in document order, skipping comments and PIs."""
        return [child for child in element if isinstance(child.tag, str)]

    @staticmethod
    def has_child_elements(element: etree._Element) -> bool:
        return any(isinstance(child.tag, str) for child in element)

    @staticmethod
    def text_content(element: etree._Element) -> str:
        """Concatenated text of the element and all descendants, trimmed."""
        return ''.join(element.itertext()).strip()
