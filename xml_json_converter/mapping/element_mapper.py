"""
Recursive XML element to JSON mapping.

The mapper walks the element tree in document order. An element named
MatchDetails is handed to the MatchDetails rule as a whole; for any other
element, the first occurrence of each child tag is dispatched to a rule
chosen by tag name:

- Values: collapsed to {"Value": "<text>"} or {"Value": ["<text>", ...]}
- anything else: nested object for elements with children, trimmed text
  (or null) for leaves

A repeated sibling tag turns the field into an array, and every further
occurrence is mapped into a fresh object of its own. The attributes of an
element are merged into its object after its children.
"""

import logging

from abc import ABC, abstractmethod
from typing import Dict

from lxml import etree

from ..models import ConverterSettings, JsonObject
from ..utils import ElementUtils
from .score_calculator import SCORE_TAG, resolve_second_match_score

MATCH_DETAILS_TAG = "MatchDetails"
MATCH_TAG = "Match"
VALUES_TAG = "Values"
VALUE_TAG = "Value"


class ElementRule(ABC):
    """Writes an element into a JSON object."""

    @abstractmethod
    def apply(self, element: etree._Element, target_node: JsonObject, mapper: "ElementMapper") -> None:
        pass


class GenericElementRule(ElementRule):
    """Default rule: nested object for branch elements, trimmed text for leaves."""

    def apply(self, element, target_node, mapper):
        if ElementUtils.has_child_elements(element):
            child_node: JsonObject = {}
            target_node[element.tag] = child_node
            mapper.map_element(element, child_node)
        else:
            text = ElementUtils.text_content(element)
            target_node[element.tag] = text if text else None


class ValuesRule(ElementRule):
    """Collapses every descendant Value element into a single Value field."""

    def apply(self, element, target_node, mapper):
        target_node[element.tag] = self.collapse(element)

    @staticmethod
    def collapse(element: etree._Element) -> JsonObject:
        values = [ElementUtils.text_content(value) for value in element.iterdescendants(VALUE_TAG)]
        values_node: JsonObject = {}
        if len(values) > 1:
            values_node[VALUE_TAG] = values
        elif len(values) == 1:
            values_node[VALUE_TAG] = values[0]
        return values_node


class MatchDetailsRule(ElementRule):
    """
    Maps a MatchDetails element to an array of {"Match": {...}} wrappers.

    The array is written into the target object under "MatchDetails" and
    exists even when there are no Match elements. Field names are looked up
    in the settings under "MatchDetails.<tag>", and the Score of the second
    Match goes through the second-match override. Values are always strings.
    """

    def __init__(self, settings: ConverterSettings):
        self.settings = settings
        self.logger = logging.getLogger(__name__)

    def apply(self, element, target_node, mapper):
        matches = []
        for index, match_element in enumerate(element.iterdescendants(MATCH_TAG)):
            match_node: JsonObject = {}
            for field_element in ElementUtils.child_elements(match_element):
                field_name = field_element.tag
                field_value = ElementUtils.text_content(field_element)
                if field_name == SCORE_TAG:
                    field_value = resolve_second_match_score(index, field_value, self.settings)
                match_node[self.settings.map_field_name(MATCH_DETAILS_TAG, field_name)] = field_value

            matches.append({MATCH_TAG: match_node})

        target_node[MATCH_DETAILS_TAG] = matches
        self.logger.debug(f"Mapped {len(matches)} match entries under {MATCH_DETAILS_TAG}")


class ElementMapper:
    """
    Recursive element mapper with tag-based rule dispatch.

    The JSON objects it fills are plain dicts; their insertion order is the
    order fields appear in the output.
    """

    def __init__(self, settings: ConverterSettings):
        self.settings = settings
        self.logger = logging.getLogger(__name__)
        self._match_details_rule = MatchDetailsRule(settings)
        self._generic_rule = GenericElementRule()
        self._rules: Dict[str, ElementRule] = {
            VALUES_TAG: ValuesRule(),
        }

    def rule_for(self, tag: str) -> ElementRule:
        return self._rules.get(tag, self._generic_rule)

    def map_element(self, element: etree._Element, target_node: JsonObject) -> None:
        """
        Map the children and attributes of an element into target_node.

        Args:
            element: Element whose content is mapped
            target_node: JSON object receiving the fields
        """
        if element.tag == MATCH_DETAILS_TAG:
            self._match_details_rule.apply(element, target_node, self)
            return

        for child in ElementUtils.child_elements(element):
            if child.tag in target_node:
                self.append_repeated(target_node, child)
            else:
                self.rule_for(child.tag).apply(child, target_node, self)

        # Attributes last: they win on name collisions with child fields
        for name, value in element.attrib.items():
            target_node[name] = value

    def append_repeated(self, target_node: JsonObject, child: etree._Element) -> None:
        """
        Map a repeated child into a new object and append it to the field's array.

        The second occurrence converts the field to an array seeded with the
        existing value; later ones append.
        """
        repeated_node: JsonObject = {}
        self.map_element(child, repeated_node)

        existing = target_node[child.tag]
        if isinstance(existing, list):
            existing.append(repeated_node)
        else:
            target_node[child.tag] = [existing, repeated_node]
