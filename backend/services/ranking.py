# services/ranking.py
"""
Ranking Service
---------------
Implements deterministic multi-factor scoring using:
1. Text Relevance (IDF weighting from the inverted index)
2. Title Match (whole-word and prefix matches)
3. Author Match
4. Recency (publication age buckets)

Final Score = max(floor, 0.40*text + 0.35*title + 0.15*author + 0.10*recency)

Complexity:
- Scoring: O(M * T) where M = candidates, T = query tokens.
- Sorting: O(M log M).
"""

import datetime
import logging
from dataclasses import dataclass
from typing import Optional

from .index import DEFAULT_FREQUENCY
from .models import RankedBook
from .scoring import author_score, recency_score, text_score, title_score
from .search import tokenize_query

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RankingConfig:
    """Tunables of the ranking formula."""
    corpus_size_estimate: int = 50000
    text_weight: float = 0.40
    title_weight: float = 0.35
    author_weight: float = 0.15
    recency_weight: float = 0.10
    score_floor: float = 0.1
    # None -> system clock at ranking time
    current_year: Optional[int] = None

    def __post_init__(self):
        if self.corpus_size_estimate <= 0:
            raise ValueError("corpus_size_estimate must be positive")
        for name in ("text_weight", "title_weight", "author_weight",
                     "recency_weight", "score_floor"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be non-negative")

    def resolve_year(self) -> int:
        if self.current_year is not None:
            return self.current_year
        return datetime.date.today().year

    def weights_description(self) -> str:
        return (
            f"Text: {self.text_weight:.0%}, Title: {self.title_weight:.0%}, "
            f"Author: {self.author_weight:.0%}, Recency: {self.recency_weight:.0%}"
        )


def score_book(ranked: RankedBook, terms, term_frequencies, config, current_year):
    """Fill in the component scores and the weighted final score."""
    book = ranked.book
    ranked.text_score = text_score(terms, term_frequencies, config.corpus_size_estimate)
    ranked.title_score = title_score(book.title, terms)
    ranked.author_score = author_score(book.author, terms)
    ranked.recency_score = recency_score(book.year, current_year)

    combined = (
        ranked.text_score * config.text_weight
        + ranked.title_score * config.title_weight
        + ranked.author_score * config.author_weight
        + ranked.recency_score * config.recency_weight
    )
    ranked.final_score = max(config.score_floor, combined)
    return ranked


def rank_books(books, query, candidate_ids=None, config=None, term_source=None):
    """
    Rank candidate books against a free-text query.

    Args:
        books: candidate Book records, unranked.
        query: raw query string; None or blank skips scoring.
        candidate_ids: ids of the candidate set, accepted for callers that
            track it; the current scorers do not use it.
        config: RankingConfig, defaults when omitted.
        term_source: object with lookup(terms) -> {term: df}. Without one
            every term gets DEFAULT_FREQUENCY.

    Returns:
        list of RankedBook sorted by final score desc, then book id asc.
        When scoring is skipped, scores stay 0 and catalog order is kept.
    """
    ranked_books = [RankedBook(book) for book in books]

    terms = tokenize_query(query)
    if not ranked_books or not terms:
        return ranked_books

    config = config or RankingConfig()
    current_year = config.resolve_year()

    if term_source is not None:
        term_frequencies = term_source.lookup(terms)
    else:
        term_frequencies = {t: DEFAULT_FREQUENCY for t in terms}

    for ranked in ranked_books:
        score_book(ranked, terms, term_frequencies, config, current_year)

    ranked_books.sort(key=lambda r: (-r.final_score, r.id))

    logger.debug(
        f"Ranked {len(ranked_books)} books for terms {terms}, "
        f"top score {ranked_books[0].final_score:.3f}"
    )
    return ranked_books


def top_n(ranked_books, limit=None):
    """First `limit` results, or all of them when limit is None."""
    if limit is None:
        return list(ranked_books)
    return list(ranked_books[:limit])
