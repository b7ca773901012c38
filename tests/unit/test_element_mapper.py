"""
Tests for the recursive element mapper and its tag rules.

Covers the generic path (objects, leaves, attributes, repeated siblings), the
Values collapsing rule and the MatchDetails array rule including field renames
and the second-match score override.
"""

import pytest

from xml_json_converter.mapping.element_mapper import ElementMapper, ValuesRule
from xml_json_converter.models import ConverterSettings
from xml_json_converter.parsing.xml_parser import XMLParser


def map_xml(xml, settings=None):
    root = XMLParser().parse_xml_stream(xml)
    node = {}
    ElementMapper(settings or ConverterSettings()).map_element(root, node)
    return node


class TestGenericMapping:
    """Objects, leaves and attributes."""

    def test_leaves_objects_and_attributes_keep_document_order(self):
        node = map_xml('<Root a="1"><Name>  Alice  </Name><Empty/><Nested><Inner>x</Inner></Nested></Root>')
        assert node == {"Name": "Alice", "Empty": None, "Nested": {"Inner": "x"}, "a": "1"}
        assert list(node) == ["Name", "Empty", "Nested", "a"]

    def test_leaf_values_are_never_coerced(self):
        node = map_xml("<Root><Count>42</Count><Flag>true</Flag><Ratio>1.5</Ratio></Root>")
        assert node == {"Count": "42", "Flag": "true", "Ratio": "1.5"}

    def test_whitespace_only_leaf_is_null(self):
        assert map_xml("<Root><Blank>   </Blank></Root>") == {"Blank": None}

    def test_nested_attributes_merge_after_children(self):
        node = map_xml('<Root><Warnings warningCount="1"><Warning><Number>7</Number></Warning></Warnings></Root>')
        assert node == {"Warnings": {"Warning": {"Number": "7"}, "warningCount": "1"}}
        assert list(node["Warnings"]) == ["Warning", "warningCount"]

    def test_attribute_wins_name_collision(self):
        assert map_xml('<Root id="from-attribute"><id>from-child</id></Root>') == {"id": "from-attribute"}

    def test_leaf_attributes_are_not_emitted(self):
        # A leaf maps to its text, so there is no object to hold attributes
        assert map_xml('<Root><Errors errorCount="0"/></Root>') == {"Errors": None}


class TestRepeatedSiblings:
    """Repeated tags become arrays; every further occurrence is mapped into its own object."""

    def test_three_object_siblings_become_array_in_order(self):
        node = map_xml(
            "<Root>"
            "<Warning><Number>1</Number></Warning>"
            "<Warning><Number>2</Number></Warning>"
            "<Warning><Number>3</Number></Warning>"
            "</Root>"
        )
        assert node == {"Warning": [{"Number": "1"}, {"Number": "2"}, {"Number": "3"}]}

    def test_repeated_leaves_map_to_objects_after_the_first(self):
        node = map_xml("<Root><Item>a</Item><Item>b</Item><Item>c</Item></Root>")
        # The first value seeds the array; repeated leaves have no children to map
        assert node == {"Item": ["a", {}, {}]}
        assert len(node["Item"]) == 3

    def test_repeated_leaf_attributes_are_kept(self):
        node = map_xml('<Root><E code="1"/><E code="2"/><E code="3"/></Root>')
        assert node == {"E": [None, {"code": "2"}, {"code": "3"}]}

    def test_existing_leaf_value_is_kept_when_array_is_created(self):
        node = map_xml("<Root><Item>a</Item><Item><X>1</X></Item></Root>")
        assert node == {"Item": ["a", {"X": "1"}]}

    def test_repeated_siblings_keep_their_attributes(self):
        node = map_xml('<Root><Item code="A"><V>1</V></Item><Item code="B"><V>2</V></Item></Root>')
        assert node == {"Item": [{"V": "1", "code": "A"}, {"V": "2", "code": "B"}]}

    def test_array_field_keeps_its_position(self):
        node = map_xml("<Root><A><N>1</N></A><B>x</B><A><N>2</N></A></Root>")
        assert list(node) == ["A", "B"]
        assert node["A"] == [{"N": "1"}, {"N": "2"}]

    def test_array_keeps_growing(self):
        mapper = ElementMapper(ConverterSettings())
        node = {"Item": {"n": "1"}}
        for xml in ("<Item><n>2</n></Item>", "<Item/>"):
            mapper.append_repeated(node, XMLParser().parse_xml_stream(xml))
        assert node == {"Item": [{"n": "1"}, {"n": "2"}, {}]}


class TestValuesRule:
    """Values blocks collapse to a single Value field."""

    def test_two_values_become_array(self):
        node = map_xml("<Root><Values><Value>Bellandur</Value><Value>Bangalore</Value></Values></Root>")
        assert node == {"Values": {"Value": ["Bellandur", "Bangalore"]}}

    def test_single_value_is_not_wrapped(self):
        assert map_xml("<Root><Values><Value>Only</Value></Values></Root>") == {"Values": {"Value": "Only"}}

    def test_no_values_gives_empty_object(self):
        assert map_xml("<Root><Values><Other>x</Other></Values></Root>") == {"Values": {}}
        assert map_xml("<Root><Values/></Root>") == {"Values": {}}

    def test_nested_value_descendants_are_collected(self):
        node = map_xml("<Root><Values><Group><Value>a</Value></Group><Value>b</Value></Values></Root>")
        assert node == {"Values": {"Value": ["a", "b"]}}

    def test_empty_value_stays_empty_string(self):
        assert ValuesRule.collapse(XMLParser().parse_xml_stream("<Values><Value/></Values>")) == {"Value": ""}

    def test_only_the_first_values_block_is_collapsed(self):
        node = map_xml(
            "<Root><Values><Value>a</Value></Values>"
            "<Values><Value>b</Value><Value>c</Value></Values></Root>"
        )
        assert node == {"Values": [{"Value": "a"}, {"Value": ["b", {}]}]}


MATCH_DETAILS_XML = (
    "<MatchDetails>"
    "<Match><Entity>John</Entity><MatchType>Exact</MatchType><Score>35</Score></Match>"
    "<Match><Entity>Doe</Entity><MatchType>Exact</MatchType><Score>50</Score></Match>"
    "<Match><Entity>Roe</Entity><MatchType>Fuzzy</MatchType><Score>20</Score></Match>"
    "</MatchDetails>"
)


def scores(node):
    return [entry["Match"]["Score"] for entry in node["MatchDetails"]]


class TestMatchDetailsRule:
    """A MatchDetails element maps to an array of Match wrappers inside its own object."""

    def test_zero_matches_gives_empty_array(self):
        assert map_xml("<MatchDetails/>") == {"MatchDetails": []}
        assert map_xml("<MatchDetails><Note>x</Note></MatchDetails>") == {"MatchDetails": []}

    def test_single_match_is_still_an_array(self):
        node = map_xml("<MatchDetails><Match><Entity>John</Entity></Match></MatchDetails>")
        assert node == {"MatchDetails": [{"Match": {"Entity": "John"}}]}

    def test_matches_are_wrapped_in_document_order(self):
        node = map_xml(MATCH_DETAILS_XML)
        assert node["MatchDetails"][0] == {"Match": {"Entity": "John", "MatchType": "Exact", "Score": "35"}}
        assert [entry["Match"]["Entity"] for entry in node["MatchDetails"]] == ["John", "Doe", "Roe"]
        assert scores(node) == ["35", "50", "20"]

    def test_fixed_second_score_forces_forty(self):
        node = map_xml(MATCH_DETAILS_XML, ConverterSettings(fixed_second_match_score=True))
        assert scores(node) == ["35", "40", "20"]

    def test_override_literal_beats_fixed_toggle(self):
        settings = ConverterSettings(override_second_match_score="99", fixed_second_match_score=True)
        assert scores(map_xml(MATCH_DETAILS_XML, settings)) == ["35", "99", "20"]

    def test_non_score_fields_of_second_match_are_untouched(self):
        node = map_xml(MATCH_DETAILS_XML, ConverterSettings(override_second_match_score="99"))
        assert node["MatchDetails"][1]["Match"]["Entity"] == "Doe"

    def test_field_mapping_renames_match_fields(self):
        settings = ConverterSettings(field_mappings={"MatchDetails.Entity": "Name"})
        node = map_xml(MATCH_DETAILS_XML, settings)
        assert list(node["MatchDetails"][0]["Match"]) == ["Name", "MatchType", "Score"]

    def test_renamed_score_still_gets_override(self):
        settings = ConverterSettings(field_mappings={"MatchDetails.Score": "MatchScore"},
                                     fixed_second_match_score=True)
        node = map_xml(MATCH_DETAILS_XML, settings)
        assert node["MatchDetails"][1]["Match"]["MatchScore"] == "40"

    def test_empty_match_field_is_empty_string(self):
        node = map_xml("<MatchDetails><Match><Entity/></Match></MatchDetails>")
        assert node["MatchDetails"][0]["Match"]["Entity"] == ""


class TestNestedMatchDetails:
    """A MatchDetails child goes through the generic path first."""

    def test_child_match_details_nests_its_array(self):
        node = map_xml("<Root>" + MATCH_DETAILS_XML + "</Root>")
        assert isinstance(node["MatchDetails"], dict)
        assert list(node["MatchDetails"]) == ["MatchDetails"]
        assert scores(node["MatchDetails"]) == ["35", "50", "20"]

    def test_empty_child_match_details_is_null(self):
        assert map_xml("<Root><MatchDetails/><Other>x</Other></Root>") == {"MatchDetails": None, "Other": "x"}

    def test_child_without_matches_gives_empty_array(self):
        node = map_xml("<Root><MatchDetails><Note>x</Note></MatchDetails></Root>")
        assert node == {"MatchDetails": {"MatchDetails": []}}

    def test_sibling_match_details_each_restart_the_index(self):
        xml = (
            "<Root>"
            "<MatchDetails><Match><Score>1</Score></Match><Match><Score>2</Score></Match></MatchDetails>"
            "<MatchDetails><Match><Score>3</Score></Match><Match><Score>4</Score></Match></MatchDetails>"
            "</Root>"
        )
        node = map_xml(xml, ConverterSettings(fixed_second_match_score=True))
        first, second = node["MatchDetails"]
        assert scores(first) == ["1", "40"]
        assert scores(second) == ["3", "40"]

    @pytest.mark.parametrize("container", ["Wrapper", "ResultBlock"])
    def test_match_details_nested_in_objects(self, container):
        node = map_xml(f"<Root><{container}><MatchDetails><Match><Score>7</Score></Match></MatchDetails>"
                       f"<Other>x</Other></{container}></Root>")
        assert node == {container: {"MatchDetails": {"MatchDetails": [{"Match": {"Score": "7"}}]}, "Other": "x"}}
