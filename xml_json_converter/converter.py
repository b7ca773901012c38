"""
XML to JSON conversion engine.

Ties the parser, the element mapper, the score calculator and the summary
injection together behind a single text-in, text-out operation.
"""

import json
import logging

from typing import Optional

from .interfaces import ConverterInterface
from .exceptions import ConversionError
from .models import ConverterSettings, JsonObject
from .parsing.xml_parser import XMLParser
from .mapping.element_mapper import ElementMapper
from .mapping.score_calculator import ScoreCalculator
from .mapping.summary_injector import inject_match_summary


class XmlToJsonConverter(ConverterInterface):
    """
    Converts response XML documents to pretty-printed JSON.

    Steps for every call:
    1. Parse the XML (DOCTYPE declarations are rejected)
    2. Map the root element's content under a single key named after the root tag
    3. Sum every Score element into the total match score
    4. Insert ResultBlock.MatchSummary.TotalMatchScore when the feature is enabled
    5. Serialize with two-space indentation
    """

    def __init__(self, settings: Optional[ConverterSettings] = None):
        """
        Initialize the converter.

        Args:
            settings: Converter settings. If None, compiled-in defaults are used.
        """
        self.settings = settings or ConverterSettings()
        self.logger = logging.getLogger(__name__)
        self.parser = XMLParser()
        self.element_mapper = ElementMapper(self.settings)
        self.score_calculator = ScoreCalculator(self.settings)

    def convert_xml_to_json(self, xml_content: str) -> str:
        """
        Convert XML text to JSON text and add the MatchSummary field.

        Args:
            xml_content: Raw XML document

        Returns:
            JSON document as indented text

        Raises:
            ParseError: If the XML is empty, malformed, or declares a DTD
            ConversionError: If mapping, aggregation or serialization fails
        """
        self.logger.debug("Starting XML to JSON conversion")
        try:
            json_tree = self.convert_xml_to_tree(xml_content)
            json_text = json.dumps(json_tree, indent=2, ensure_ascii=False)
        except ConversionError:
            raise
        except Exception as e:
            self.logger.error(f"Error converting XML to JSON: {e}")
            raise ConversionError("Failed to convert XML to JSON", cause=e) from e

        self.logger.info("XML to JSON conversion completed successfully")
        return json_text

    def convert_xml_to_tree(self, xml_content: str) -> JsonObject:
        """
        Convert XML text to the JSON tree without serializing it.

        Returns:
            Dict with a single key, the root element's tag
        """
        root = self.parser.parse_xml_stream(xml_content)

        try:
            response_node: JsonObject = {}
            json_tree: JsonObject = {root.tag: response_node}

            self.element_mapper.map_element(root, response_node)

            total_score = self.score_calculator.calculate_total_match_score(root)

            if self.settings.match_summary_enabled:
                inject_match_summary(response_node, total_score)
        except Exception as e:
            self.logger.error(f"Error mapping XML document: {e}")
            raise ConversionError("Failed to convert XML to JSON", cause=e) from e

        return json_tree


def convert(xml_content: str, settings: Optional[ConverterSettings] = None) -> str:
    """
    Convert an XML document to JSON text.

    Args:
        xml_content: Raw XML document
        settings: Converter settings. If None, compiled-in defaults are used.

    Returns:
        JSON document as indented text
    """
    return XmlToJsonConverter(settings).convert_xml_to_json(xml_content)
