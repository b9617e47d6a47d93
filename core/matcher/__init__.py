"""Matcher Module - proactive job-to-candidate matching."""
from core.matcher.dto import CandidateSummaryDTO, MatchDTO, MatchRunResult
from core.matcher.explainability import build_match_reason
from core.matcher.service import CandidateMatcher, combine_scores

__all__ = [
    'CandidateMatcher', 'combine_scores', 'build_match_reason',
    'CandidateSummaryDTO', 'MatchDTO', 'MatchRunResult',
]
