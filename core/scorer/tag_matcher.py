#!/usr/bin/env python3
"""
Tag Matcher - Overlap between job tags and candidate tags.

A job tag counts as matched when, after lowercasing and trimming, it is a
substring of some candidate tag or some candidate tag is a substring of it.
This lets "React" match "React.js" in either direction. It also lets
"Java" match "JavaScript"; that over-match is current behavior and is
left as is.
"""

from dataclasses import dataclass, field
from typing import Iterable, List

from core.scorer.aggregator import round_half_up


@dataclass(frozen=True)
class TagMatchResult:
    matched_tags: List[str] = field(default_factory=list)
    score: int = 0


def _normalize(tag) -> str:
    return str(tag).strip().lower() if tag is not None else ''


def tag_matches(job_tag: str, candidate_tags: Iterable[str]) -> bool:
    """True if ``job_tag`` contains, or is contained in, any candidate tag."""
    needle = _normalize(job_tag)
    if not needle:
        return False
    for candidate_tag in candidate_tags:
        other = _normalize(candidate_tag)
        if other and (needle in other or other in needle):
            return True
    return False


def match_tags(job_tags: Iterable[str], candidate_tags: Iterable[str]) -> TagMatchResult:
    """
    Score how many job tags the candidate covers.

    Returns:
        TagMatchResult with the matched job tags (original spelling) and
        ``round(100 * matched / total_job_tags)`` capped at 100. No job tags
        scores 0.
    """
    job_list = [tag for tag in (job_tags or []) if _normalize(tag)]
    candidate_list = [tag for tag in (candidate_tags or []) if _normalize(tag)]

    if not job_list or not candidate_list:
        return TagMatchResult(matched_tags=[], score=0)

    matched = [tag for tag in job_list if tag_matches(tag, candidate_list)]
    score = int(round_half_up(100 * len(matched) / len(job_list)))
    return TagMatchResult(matched_tags=matched, score=min(100, score))
