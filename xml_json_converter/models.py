"""
Core data models for the XML to JSON conversion system.

This module defines the immutable settings object consumed by the conversion
engine together with the enums and type aliases used to describe the JSON tree.
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Union


# Values stored in the JSON tree. Numbers never appear: numeric-looking
# fields are carried as strings.
JsonValue = Union[None, str, List[Any], Dict[str, Any]]
JsonObject = Dict[str, JsonValue]

INT32_MAX = 2 ** 31 - 1
INT64_MAX = 2 ** 63 - 1

SCORE_FIELD_MAPPING_KEY = "MatchDetails.Score"


class ScoreDataType(Enum):
    """Numeric width used when saturating the total match score."""
    INTEGER = "integer"
    LONG = "long"

    @classmethod
    def from_string(cls, value: str) -> "ScoreDataType":
        """Case-insensitive lookup; raises ValueError for unknown names."""
        normalized = (value or "").strip().lower()
        for member in cls:
            if member.value == normalized:
                return member
        raise ValueError(f"Unknown score data type: {value!r}")


def _default_field_mappings() -> Mapping[str, str]:
    return MappingProxyType({SCORE_FIELD_MAPPING_KEY: "Score"})


@dataclass(frozen=True)
class ConverterSettings:
    """
    Tunable behavior of the conversion engine.

    Attributes:
        max_int_value: Ceiling for the total score in integer mode
        max_long_value: Ceiling for the total score in long mode
        score_data_type: Selects which ceiling applies
        match_summary_enabled: Whether MatchSummary is injected into ResultBlock
        field_mappings: "<ElementPath>.<FieldName>" -> output field name
        override_second_match_score: Literal used for the second Score, when set
        fixed_second_match_score: Force "40" for the second Score when no override is set
    """
    max_int_value: int = INT32_MAX
    max_long_value: int = INT64_MAX
    score_data_type: ScoreDataType = ScoreDataType.INTEGER
    match_summary_enabled: bool = True
    field_mappings: Mapping[str, str] = field(default_factory=_default_field_mappings)
    override_second_match_score: Optional[str] = None
    fixed_second_match_score: bool = False

    def __post_init__(self):
        """Validate settings and freeze the field mapping table."""
        if isinstance(self.score_data_type, str):
            object.__setattr__(self, "score_data_type", ScoreDataType.from_string(self.score_data_type))
        mappings = dict(self.field_mappings or {})
        mappings.setdefault(SCORE_FIELD_MAPPING_KEY, "Score")
        object.__setattr__(self, "field_mappings", MappingProxyType(mappings))

    @property
    def score_ceiling(self) -> int:
        """Upper bound applied to the running total score."""
        if self.score_data_type is ScoreDataType.LONG:
            return self.max_long_value
        return self.max_int_value

    def map_field_name(self, element_path: str, field_name: str) -> str:
        """Return the configured output name for a field, or the field name itself."""
        return self.field_mappings.get(f"{element_path}.{field_name}", field_name)
