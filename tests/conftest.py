import json

import pytest

from backend.services.models import Book
from backend.services.ranking import RankingConfig

CURRENT_YEAR = 2024


@pytest.fixture
def ranking_config():
    return RankingConfig(current_year=CURRENT_YEAR)


@pytest.fixture
def catalog():
    return [
        Book(1, "The Great Gatsby", "F. Scott Fitzgerald", "en", 1925),
        Book(2, "Gatsby Revisited", "Jane Doe", "en", 2020),
        Book(3, "Moby Dick", "Herman Melville", "en", 1851),
        Book(4, "Tender Is the Night", "F. Scott Fitzgerald", "en", 1934),
        Book(5, "Le Petit Prince", "Antoine de Saint-Exupery", "fr", 1943),
        Book(6, "Untitled Draft", "", "en", 0),
    ]


@pytest.fixture
def write_index(tmp_path):
    """Write an inverted index artifact and return its path."""
    def _write(data):
        path = tmp_path / "inverted_index.json"
        path.write_text(json.dumps(data), encoding="utf-8")
        return str(path)
    return _write


@pytest.fixture
def missing_index_path(tmp_path):
    return str(tmp_path / "does_not_exist.json")
