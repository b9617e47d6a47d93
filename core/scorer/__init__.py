"""
Scoring Module - Pure scoring functions.

Public API:
- unified_score / application_unified_score / candidate_search_score
- match_tags / TagMatchResult
"""

from core.scorer.aggregator import (
    APPLICATION_WEIGHTS,
    CANDIDATE_SEARCH_WEIGHTS,
    unified_score,
    application_unified_score,
    candidate_search_score,
)
from core.scorer.tag_matcher import TagMatchResult, match_tags

__all__ = [
    'APPLICATION_WEIGHTS',
    'CANDIDATE_SEARCH_WEIGHTS',
    'unified_score',
    'application_unified_score',
    'candidate_search_score',
    'TagMatchResult',
    'match_tags',
]
