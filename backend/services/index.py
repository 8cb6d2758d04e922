# services/index.py
"""
Term Frequency Service
----------------------
Reads the inverted index produced by the indexing service and answers
document-frequency lookups for query terms.

Data Structures:
1. Inverted Index artifact: JSON object {term: [book_id, ...]}
2. Term Frequency Table: HashMap<Token, Integer> (Number of books containing word)

The artifact is optional. When it is missing or unreadable every term is
assumed common (DEFAULT_FREQUENCY); when it is present but lacks a term, the
term is assumed rare (RARE_TERM_FREQUENCY).

Complexity:
- Lookup: O(F + T) where F is artifact size (re-read per call), T = terms.
"""

import json
import logging

logger = logging.getLogger(__name__)

# df(t) when the index is unavailable: term contributes little signal
DEFAULT_FREQUENCY = 1000
# df(t) when the index lacks the term: term contributes strong signal
RARE_TERM_FREQUENCY = 1


class TermFrequencySource:
    def __init__(self, index_path: str):
        self.index_path = index_path

    def _read_index(self):
        """Load the artifact, or None when it is missing or malformed."""
        try:
            with open(self.index_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            logger.warning(f"Inverted index not found at {self.index_path}")
            return None
        except (OSError, ValueError, RecursionError, MemoryError) as e:
            logger.warning(f"Error reading inverted index {self.index_path}: {e}")
            return None

        if not isinstance(data, dict):
            logger.warning(
                f"Inverted index {self.index_path} is not a JSON object, ignoring"
            )
            return None
        return data

    def lookup(self, terms) -> dict:
        """
        Document frequency for each term.

        Returns:
            dict: {term: positive int}
        """
        index = self._read_index()
        if index is None:
            return {t: DEFAULT_FREQUENCY for t in terms}

        frequencies = {}
        for t in terms:
            book_ids = index.get(t)
            if isinstance(book_ids, list) and book_ids:
                try:
                    frequencies[t] = len(set(book_ids))
                except TypeError:
                    # unhashable ids, count entries as-is
                    frequencies[t] = len(book_ids)
            else:
                frequencies[t] = RARE_TERM_FREQUENCY
        return frequencies

    def is_indexed(self, book_id: int) -> bool:
        """True when the book appears in any posting list."""
        index = self._read_index()
        if index is None:
            return False
        for book_ids in index.values():
            if isinstance(book_ids, list) and book_id in book_ids:
                return True
        return False
