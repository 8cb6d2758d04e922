# services/models.py
"""
Data models for the ranking engine.
"""
from dataclasses import dataclass


@dataclass(frozen=True)
class Book:
    """A catalog record. Read-only for the ranking engine."""
    id: int
    title: str
    author: str = ""
    language: str = ""
    year: int = 0

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "author": self.author,
            "language": self.language,
            "year": self.year,
        }


@dataclass
class RankedBook:
    """One book plus its per-factor and final scores for a single request."""
    book: Book
    final_score: float = 0.0
    text_score: float = 0.0
    title_score: float = 0.0
    author_score: float = 0.0
    recency_score: float = 0.0

    @property
    def id(self) -> int:
        return self.book.id

    def score_breakdown(self) -> str:
        """Formatted score breakdown for debugging."""
        return (
            f"Final: {self.final_score:.3f} (Text: {self.text_score:.3f}, "
            f"Title: {self.title_score:.3f}, Author: {self.author_score:.3f}, "
            f"Recency: {self.recency_score:.3f})"
        )

    def to_dict(self, include_scores: bool = False) -> dict:
        out = self.book.to_dict()
        out["score"] = round(self.final_score, 6)
        if include_scores:
            out["final_score"] = round(self.final_score, 6)
            out["text_score"] = round(self.text_score, 6)
            out["title_score"] = round(self.title_score, 6)
            out["author_score"] = round(self.author_score, 6)
            out["recency_score"] = round(self.recency_score, 6)
        return out
