"""
MatchSummary injection into the ResultBlock object.
"""

import logging

from ..models import JsonObject

RESULT_BLOCK_FIELD = "ResultBlock"
MATCH_SUMMARY_FIELD = "MatchSummary"
TOTAL_MATCH_SCORE_FIELD = "TotalMatchScore"

logger = logging.getLogger(__name__)


def inject_match_summary(response_node: JsonObject, total_score: int) -> bool:
    """
    Add MatchSummary as the first field of ResultBlock.

    The existing ResultBlock fields keep their relative order after the new
    field. The ResultBlock dict is reordered in place.

    Args:
        response_node: Object under the document's root tag
        total_score: Aggregate emitted as TotalMatchScore (as a string)

    Returns:
        True if the summary was injected, False when ResultBlock is missing or not an object
    """
    result_block = response_node.get(RESULT_BLOCK_FIELD)
    if not isinstance(result_block, dict):
        logger.warning(f"{RESULT_BLOCK_FIELD} not found in response. Cannot add {MATCH_SUMMARY_FIELD}.")
        return False

    existing_fields = list(result_block.items())
    result_block.clear()
    result_block[MATCH_SUMMARY_FIELD] = {TOTAL_MATCH_SCORE_FIELD: str(total_score)}
    # A pre-existing MatchSummary keeps the first slot but its own value
    for name, value in existing_fields:
        result_block[name] = value

    logger.debug(f"Injected {MATCH_SUMMARY_FIELD} with {TOTAL_MATCH_SCORE_FIELD}={total_score}")
    return True
