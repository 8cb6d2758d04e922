# services/search.py
"""
Search service
---------------
Responsible for keyword matching and structured filters over the catalog.
Returns unranked candidates. No scoring, no sorting, no Flask code here.
"""


def tokenize_query(query: str):
    """Lowercase and split on whitespace runs."""
    if not query or not isinstance(query, str):
        return []
    return query.lower().split()


def matches_query(book, tokens: list):
    """True when any token appears in the title or the author."""
    title = (book.title or "").lower()
    author = (book.author or "").lower()
    return any(tok in title or tok in author for tok in tokens)


def matches_filters(book, author=None, language=None, year=None):
    if author and author.strip().lower() not in (book.author or "").lower():
        return False

    if language and language.strip().lower() != (book.language or "").lower():
        return False

    if year is not None and book.year != year:
        return False

    return True


def search_books(books: list, query: str, author=None, language=None, year=None):
    """
    Filter books matching the query and the optional filters.

    Returns:
        list of Book in catalog order
    """
    tokens = tokenize_query(query)
    if not tokens:
        return []

    return [
        b for b in books
        if matches_query(b, tokens) and matches_filters(b, author, language, year)
    ]
