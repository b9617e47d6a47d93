#!/usr/bin/env python3
"""
Score Aggregator - Weighted combination of independently obtained sub-scores.

Two weightings are in use:
- Application scoring: resume 0.5, GitHub/portfolio 0.3, compensation 0.2,
  rounded to a whole number.
- Candidate search: resume 0.4, GitHub/portfolio 0.25, compensation 0.15,
  AI-tools compatibility 0.2, rounded to two decimals.

Missing sub-scores count as 0. Weights are never renormalized over the
sub-scores that happen to be present, so incomplete data lowers the score.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Mapping, Optional, Union

Number = Union[int, float]

RESUME_SCORE = 'resume_score'
GITHUB_PORTFOLIO_SCORE = 'github_portfolio_score'
COMPENSATION_SCORE = 'compensation_score'
AI_TOOLS_COMPATIBILITY_SCORE = 'ai_tools_compatibility_score'

APPLICATION_WEIGHTS: Dict[str, float] = {
    RESUME_SCORE: 0.5,
    GITHUB_PORTFOLIO_SCORE: 0.3,
    COMPENSATION_SCORE: 0.2,
}

CANDIDATE_SEARCH_WEIGHTS: Dict[str, float] = {
    RESUME_SCORE: 0.4,
    GITHUB_PORTFOLIO_SCORE: 0.25,
    COMPENSATION_SCORE: 0.15,
    AI_TOOLS_COMPATIBILITY_SCORE: 0.2,
}


def round_half_up(value: float, precision: int = 0) -> Decimal:
    """Round to ``precision`` decimal places with halves rounded away from zero."""
    quantum = Decimal(1).scaleb(-precision)
    return Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP)


def weighted_sum(scores: Mapping[str, Optional[Number]], weights: Mapping[str, float]) -> float:
    total = 0.0
    for key, weight in weights.items():
        value = scores.get(key)
        total += (float(value) if value is not None else 0.0) * weight
    return total


def unified_score(
    scores: Mapping[str, Optional[Number]],
    weights: Mapping[str, float] = APPLICATION_WEIGHTS,
    precision: int = 0,
) -> Number:
    """
    Combine sub-scores into a single 0-100 score.

    Args:
        scores: Sub-scores keyed by name; absent or None entries count as 0
        weights: Weight per sub-score name; keys not in ``weights`` are ignored
        precision: Decimal places kept after rounding (0 returns an int)

    Returns:
        Rounded score clamped to [0, 100]
    """
    raw = max(0.0, min(100.0, weighted_sum(scores, weights)))
    rounded = round_half_up(raw, precision)
    if precision <= 0:
        return int(rounded)
    return float(rounded)


def application_unified_score(scores: Mapping[str, Optional[Number]]) -> int:
    return unified_score(scores, APPLICATION_WEIGHTS, precision=0)


# Ranking for recruiter-side candidate search; no HTTP route exposes it yet
def candidate_search_score(scores: Mapping[str, Optional[Number]]) -> float:
    return unified_score(scores, CANDIDATE_SEARCH_WEIGHTS, precision=2)
