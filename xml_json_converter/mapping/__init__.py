"""Element mapping, score aggregation and summary injection."""

from .element_mapper import ElementMapper
from .score_calculator import ScoreCalculator, resolve_second_match_score
from .summary_injector import inject_match_summary

__all__ = ['ElementMapper', 'ScoreCalculator', 'resolve_second_match_score', 'inject_match_summary']
