# utils/loader.py
"""
Dataset loader and normalizer
-----------------------------
Loads books.json, cleans fields, and builds the id lookup.
"""

import json
import logging
import os

from backend.services.models import Book

logger = logging.getLogger(__name__)


def _normalize_year(value):
    """Integer year, or 0 when unknown."""
    if value is None or isinstance(value, bool):
        return 0
    try:
        if isinstance(value, float):
            value = int(value)
        year = int(str(value).strip())
    except (ValueError, OverflowError):
        return 0
    return year if year > 0 else 0


def _normalize_id(value):
    """Positive integer id, or None."""
    if value is None or isinstance(value, bool):
        return None
    try:
        bid = int(str(value).strip())
    except ValueError:
        return None
    return bid if bid > 0 else None


def normalize_record(record: dict):
    """
    Clean one raw record into a Book.

    Returns:
        Book, or None when the record lacks a usable id or title
    """
    if not isinstance(record, dict):
        return None

    bid = _normalize_id(record.get("id", record.get("book_id")))
    title = record.get("title")
    if bid is None or not isinstance(title, str) or not title.strip():
        return None

    author = record.get("author")
    language = record.get("language")

    return Book(
        id=bid,
        title=title.strip(),
        author=author.strip() if isinstance(author, str) else "",
        language=language.strip().lower() if isinstance(language, str) else "",
        year=_normalize_year(record.get("year")),
    )


def load_books(data_path: str):
    """
    Load and normalize the books dataset.

    Returns:
        tuple:
          - books (list of Book)
          - book_by_id (dict id -> Book)
    """

    if not os.path.exists(data_path):
        raise FileNotFoundError(f"Dataset not found: {data_path}")

    with open(data_path, "r", encoding="utf-8") as f:
        records = json.load(f)

    if not isinstance(records, list):
        raise ValueError(f"Dataset must be a JSON array: {data_path}")

    books = []
    book_by_id = {}

    for idx, record in enumerate(records):
        book = normalize_record(record)
        if book is None:
            logger.warning(f"Skipping book record at index {idx}: missing id or title")
            continue
        if book.id in book_by_id:
            logger.warning(f"Skipping duplicate book id {book.id}")
            continue

        books.append(book)
        book_by_id[book.id] = book

    logger.info(f"Loaded {len(books)} books from {data_path}")
    return books, book_by_id
