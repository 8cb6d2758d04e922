import json

import pytest

from backend.services.models import Book
from backend.utils.loader import load_books, normalize_record


def write_dataset(tmp_path, records):
    path = tmp_path / "books.json"
    path.write_text(json.dumps(records), encoding="utf-8")
    return str(path)


class TestNormalizeRecord:
    def test_full_record(self):
        book = normalize_record({
            "id": 7, "title": " Dune ", "author": "Frank Herbert",
            "language": "EN", "year": 1965,
        })
        assert book == Book(7, "Dune", "Frank Herbert", "en", 1965)

    def test_defaults_for_missing_fields(self):
        assert normalize_record({"id": "3", "title": "Dune"}) == Book(3, "Dune", "", "", 0)

    def test_book_id_alias(self):
        assert normalize_record({"book_id": 4, "title": "Dune"}).id == 4

    @pytest.mark.parametrize("year", ["unknown", None, -20, 0])
    def test_unknown_year(self, year):
        assert normalize_record({"id": 1, "title": "Dune", "year": year}).year == 0

    @pytest.mark.parametrize("year", [float("inf"), float("-inf"), float("nan")])
    def test_non_finite_year(self, year):
        assert normalize_record({"id": 1, "title": "Dune", "year": year}).year == 0

    @pytest.mark.parametrize(
        "record",
        [
            {"title": "Dune"},
            {"id": 0, "title": "Dune"},
            {"id": "abc", "title": "Dune"},
            {"id": 1, "title": "   "},
            {"id": 1},
            "not a dict",
        ],
    )
    def test_unusable_records(self, record):
        assert normalize_record(record) is None


class TestLoadBooks:
    def test_load_and_index(self, tmp_path):
        path = write_dataset(tmp_path, [
            {"id": 1, "title": "Dune", "year": 1965},
            {"id": 2, "title": "Emma", "author": "Jane Austen"},
        ])
        books, book_by_id = load_books(path)
        assert [b.id for b in books] == [1, 2]
        assert book_by_id[2].author == "Jane Austen"

    def test_skips_invalid_and_duplicates(self, tmp_path):
        path = write_dataset(tmp_path, [
            {"id": 1, "title": "Dune"},
            {"id": 1, "title": "Dune Messiah"},
            {"title": "No id"},
        ])
        books, _ = load_books(path)
        assert [b.title for b in books] == ["Dune"]

    def test_infinite_year_in_dataset(self, tmp_path):
        path = tmp_path / "books.json"
        path.write_text('[{"id": 1, "title": "Dune", "year": 1e400}]', encoding="utf-8")
        books, _ = load_books(str(path))
        assert books[0].year == 0

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_books(str(tmp_path / "missing.json"))

    def test_non_array_dataset(self, tmp_path):
        path = write_dataset(tmp_path, {"id": 1})
        with pytest.raises(ValueError):
            load_books(path)
