"""
XML parsing engine for response documents.

This module parses raw XML text into an lxml element tree with entity
resolution and network access disabled, and rejects any document that
declares a DTD.
"""

import logging

from lxml import etree

from ..interfaces import XMLParserInterface
from ..exceptions import ParseError


class XMLParser(XMLParserInterface):
    """
    Safe XML parser for response documents.

    Parsing is strict (no recovery mode): malformed input raises ParseError
    rather than producing a partial tree. Any DOCTYPE declaration, with an
    internal subset or an external reference, is rejected after parsing and
    before any element is read. Comments and processing instructions are
    dropped so that only elements and text remain in the tree.
    """

    def __init__(self):
        """Initialize XML parser."""
        self.logger = logging.getLogger(__name__)

        # Performance tracking
        self.parse_count = 0
        self.validation_count = 0

    def _new_parser(self) -> etree.XMLParser:
        # lxml parser objects are not thread safe, so each parse gets its own
        return etree.XMLParser(
            recover=False,
            resolve_entities=False,  # Security: don't resolve entities
            no_network=True,  # Security: disable network access
            load_dtd=False,
            dtd_validation=False,
            remove_comments=True,
            remove_pis=True,
        )

    def parse_xml_stream(self, xml_content: str) -> etree._Element:
        """
        Parse XML content into an element tree.

        Args:
            xml_content: Raw XML content as string

        Returns:
            Parsed XML element tree root

        Raises:
            ParseError: If XML is empty, malformed, or declares a DTD
        """
        if xml_content is None or not xml_content.strip():
            raise ParseError("XML content is empty or None")

        self.parse_count += 1

        cleaned_xml = self._clean_xml_content(xml_content)
        try:
            root = etree.fromstring(cleaned_xml.encode('utf-8'), self._new_parser())
        except (etree.XMLSyntaxError, ValueError) as e:
            self.logger.error(f"Error parsing XML string (parse #{self.parse_count}): {e}")
            raise ParseError(f"Failed to parse XML string: {e}", xml_content, cause=e) from e

        docinfo = root.getroottree().docinfo
        if docinfo.doctype or docinfo.internalDTD is not None:
            self.logger.error(f"Rejected XML document declaring a DTD (parse #{self.parse_count})")
            raise ParseError("DOCTYPE declarations are not allowed", xml_content)

        self.logger.debug(f"Parsed XML document with root element <{root.tag}>")
        return root

    def validate_xml_structure(self, xml_content: str) -> bool:
        """
        Validate XML structure before processing.

        Args:
            xml_content: Raw XML content to validate

        Returns:
            True if the document would be accepted by parse_xml_stream
        """
        self.validation_count += 1
        try:
            self.parse_xml_stream(xml_content)
        except ParseError as e:
            self.logger.warning(f"XML validation failed (validation #{self.validation_count}): {e}")
            return False
        return True

    def _clean_xml_content(self, xml_content: str) -> str:
        """
        Clean and normalize XML content for parsing.

        Args:
            xml_content: Raw XML content

        Returns:
            Cleaned XML content
        """
        # Remove BOM if present
        if xml_content.startswith('\ufeff'):
            xml_content = xml_content[1:]
            self.logger.debug("Removed UTF-8 BOM from XML content")

        # Normalize line endings
        xml_content = xml_content.replace('\r\n', '\n').replace('\r', '\n')

        return xml_content.strip()
