# services/scoring.py
"""
Scoring functions
-----------------
Four independent scorers, each returning a normalized score in [0, 1]:
1. Text relevance (IDF sum over query terms)
2. Title match (whole-word / substring / prefix)
3. Author match (substring)
4. Recency (bucketed publication age)

No ranking, no sorting, no Flask code here.
"""

import math
import re

# Text relevance
MISSING_TERM_FREQUENCY = 1
TEXT_NORMALIZER = 10.0

# Title match
WHOLE_WORD_MATCH = 1.0
PARTIAL_MATCH = 0.6
PREFIX_BONUS = 0.3

# Author match
AUTHOR_MATCH = 0.8

# Recency: (max age in years, score), checked in order
UNKNOWN_YEAR_SCORE = 0.1
RECENCY_BUCKETS = [
    (10, 1.0),   # very recent
    (25, 0.8),   # recent
    (50, 0.6),   # modern
    (100, 0.4),  # classic
]
HISTORICAL_SCORE = 0.2


def text_score(terms, term_frequencies: dict, corpus_size_estimate: int):
    """
    IDF-style relevance: sum of ln(N / df) over query terms, divided by
    TEXT_NORMALIZER and capped at 1.0.

    N is a configured estimate of the corpus size, not a live count.
    """
    if not terms:
        return 0.0

    total = 0.0
    for t in terms:
        df = term_frequencies.get(t, MISSING_TERM_FREQUENCY)
        total += math.log(corpus_size_estimate / max(df, 1))

    # terms more common than the corpus estimate can push the sum below 0
    return max(0.0, min(1.0, total / TEXT_NORMALIZER))


def _is_whole_word(text: str, term: str) -> bool:
    pattern = r"(?<!\w)" + re.escape(term) + r"(?!\w)"
    return re.search(pattern, text) is not None


def title_score(title: str, terms):
    """
    Title matching score.

    Per term found in the title:
    - whole-word match:  1.0
    - substring only:    0.6
    - title starts with the term: +0.3
    """
    if not terms:
        return 0.0

    title_text = (title or "").lower()
    score = 0.0

    for t in terms:
        if t not in title_text:
            continue

        if _is_whole_word(title_text, t):
            score += WHOLE_WORD_MATCH
        else:
            score += PARTIAL_MATCH

        if title_text.startswith(t):
            score += PREFIX_BONUS

    return min(1.0, score / len(terms))


def author_score(author: str, terms):
    """0.8 per term found in the author field, normalized by term count."""
    if not terms:
        return 0.0

    author_text = (author or "").lower()
    if not author_text:
        return 0.0

    score = sum(AUTHOR_MATCH for t in terms if t in author_text)
    return min(1.0, score / len(terms))


def recency_score(year: int, current_year: int):
    """Newer books score higher; unknown year (<= 0) scores 0.1."""
    if year is None or year <= 0:
        return UNKNOWN_YEAR_SCORE

    age = current_year - year
    for max_age, score in RECENCY_BUCKETS:
        if age <= max_age:
            return score

    return HISTORICAL_SCORE
