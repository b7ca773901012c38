"""
Total match score aggregation.

Sums every Score element in a document with saturating overflow protection,
and owns the second-match override rule shared with the MatchDetails mapping.
"""

import logging

from lxml import etree

from ..models import ConverterSettings, ScoreDataType, INT32_MAX
from ..utils import ElementUtils, ValidationUtils

SCORE_TAG = "Score"
SECOND_MATCH_INDEX = 1
FIXED_SECOND_MATCH_SCORE = "40"


def resolve_second_match_score(index: int, score_text: str, settings: ConverterSettings) -> str:
    """
    Apply the second-match override to a score.

    Only the occurrence at index 1 (the second one, in document order) is
    affected. An explicit override literal wins over the fixed "40" toggle.

    Args:
        index: Zero-based position of the score
        score_text: Score as read from the document
        settings: Converter settings holding the override rules

    Returns:
        The score text to use
    """
    if index != SECOND_MATCH_INDEX:
        return score_text
    if settings.override_second_match_score:
        return settings.override_second_match_score
    if settings.fixed_second_match_score:
        return FIXED_SECOND_MATCH_SCORE
    return score_text


class ScoreCalculator:
    """
    Computes the TotalMatchScore for a parsed document.

    Every element named Score, anywhere in the tree, is considered. Scores that
    are not 32-bit integers are skipped with a warning. When adding a score
    would pass the configured ceiling the calculation stops and returns the
    saturated value.
    """

    def __init__(self, settings: ConverterSettings):
        self.settings = settings
        self.logger = logging.getLogger(__name__)

    def calculate_total_match_score(self, root: etree._Element) -> int:
        """
        Calculate total match score from all Score elements.

        Args:
            root: Root element of the parsed document

        Returns:
            Accumulated total, or the saturated ceiling on overflow
        """
        total_score = 0
        ceiling = self.settings.score_ceiling

        for index, score_element in enumerate(root.iter(SCORE_TAG)):
            score_text = resolve_second_match_score(index, ElementUtils.text_content(score_element), self.settings)

            score = ValidationUtils.parse_int32(score_text)
            if score is None:
                self.logger.warning(f"Non-numeric score found: {score_text}. Skipping this value.")
                continue

            if total_score > ceiling - score:
                return self._saturated_total()

            total_score += score

        self.logger.debug(f"Calculated total match score: {total_score}")
        return total_score

    def _saturated_total(self) -> int:
        if self.settings.score_data_type is ScoreDataType.LONG:
            self.logger.warning("Total score exceeds maximum long value. Returning max value")
            # Summary stays within 32-bit range even in long mode
            return min(self.settings.max_long_value, INT32_MAX)
        self.logger.warning("Total score exceeds maximum integer value. Returning max value")
        return self.settings.max_int_value
