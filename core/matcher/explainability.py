#!/usr/bin/env python3
"""
Explainability Module - Human-readable reason for a job-candidate match.

Combines score bands with the first few matched tags and skills, e.g.
"Good tag alignment. Strong skills match. Matched tags: Python, AWS".
"""

from typing import List, Optional

EXCELLENT_THRESHOLD = 80
GOOD_THRESHOLD = 60
MAX_LISTED = 3
FALLBACK_REASON = 'Potential match based on profile'


def build_match_reason(
    tag_match_score: int,
    skills_match_score: int,
    matched_tags: Optional[List[str]] = None,
    matched_skills: Optional[List[str]] = None
) -> str:
    reasons = []

    if tag_match_score >= EXCELLENT_THRESHOLD:
        reasons.append('Excellent tag alignment')
    elif tag_match_score >= GOOD_THRESHOLD:
        reasons.append('Good tag alignment')

    if skills_match_score >= EXCELLENT_THRESHOLD:
        reasons.append('Strong skills match')
    elif skills_match_score >= GOOD_THRESHOLD:
        reasons.append('Relevant skills')

    if matched_tags:
        reasons.append(f"Matched tags: {', '.join(matched_tags[:MAX_LISTED])}")

    if matched_skills:
        reasons.append(f"Key skills: {', '.join(matched_skills[:MAX_LISTED])}")

    return '. '.join(reasons) or FALLBACK_REASON
