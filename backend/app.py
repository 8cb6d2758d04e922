import logging

from flask import Flask, request, jsonify
from flask_cors import CORS

from backend import config
from backend.services.index import TermFrequencySource
from backend.services.ranking import RankingConfig, rank_books, top_n
from backend.services.search import search_books
from backend.utils.loader import load_books

logger = logging.getLogger(__name__)

ALGORITHM_DESCRIPTION = "TF-IDF + Title Match + Author Match + Recency"


class InvalidParameter(Exception):
    """Invalid request parameter, answered with HTTP 400."""


def _error(message, status):
    return jsonify({"error": message}), status


def _parse_int_param(name, message, positive=False):
    raw = (request.args.get(name) or "").strip()
    if not raw:
        return None
    try:
        value = int(raw)
    except ValueError:
        raise InvalidParameter(message)
    if positive and value <= 0:
        raise InvalidParameter(message)
    return value


def _parse_search_params():
    """Read q/author/language/year/limit from the query string."""
    query = (request.args.get("q") or "").strip()
    if not query:
        raise InvalidParameter("Query parameter 'q' is required")

    author = (request.args.get("author") or "").strip() or None
    language = (request.args.get("language") or "").strip() or None
    year = _parse_int_param("year", "Invalid year format")
    limit = _parse_int_param("limit", "Invalid limit format", positive=True)

    filters = {}
    if author:
        filters["author"] = author
    if language:
        filters["language"] = language
    if year is not None:
        filters["year"] = year

    return query, author, language, year, limit, filters


def create_app(books=None, index_path=None, ranking_config=None):
    """
    Build the Flask app.

    books: list of Book; loaded from config.BOOKS_PATH when omitted.
    index_path: inverted index artifact; config.INVERTED_INDEX_PATH when omitted.
    """
    app = Flask(__name__)
    CORS(app)

    if books is None:
        try:
            books, book_by_id = load_books(config.BOOKS_PATH)
        except FileNotFoundError as e:
            logger.warning(f"{e}, starting with an empty catalog")
            books, book_by_id = [], {}
        except ValueError as e:
            logger.warning(
                f"Malformed dataset {config.BOOKS_PATH}: {e}, starting with an empty catalog"
            )
            books, book_by_id = [], {}
    else:
        book_by_id = {b.id: b for b in books}

    term_source = TermFrequencySource(index_path or config.INVERTED_INDEX_PATH)
    ranking_config = ranking_config or RankingConfig(
        corpus_size_estimate=config.CORPUS_SIZE_ESTIMATE,
        current_year=config.CURRENT_YEAR,
    )

    def run_search():
        query, author, language, year, limit, filters = _parse_search_params()
        candidates = search_books(books, query, author, language, year)
        ranked = rank_books(
            candidates,
            query,
            candidate_ids={b.id for b in candidates},
            config=ranking_config,
            term_source=term_source,
        )
        return query, filters, top_n(ranked, limit)

    @app.errorhandler(InvalidParameter)
    def handle_invalid_parameter(e):
        return _error(str(e), 400)

    @app.route("/status")
    def status():
        return jsonify({
            "service": config.SERVICE_NAME,
            "status": "running",
            "port": config.PORT,
        })

    @app.route("/search")
    def search():
        """Ranked results with the final score only."""
        try:
            query, filters, results = run_search()
        except InvalidParameter:
            raise
        except Exception:
            logger.exception("Error handling search request")
            return _error("Internal server error", 500)

        return jsonify({
            "query": query,
            "filters": filters,
            "count": len(results),
            "results": [r.to_dict() for r in results],
        })

    @app.route("/search/ranked")
    def ranked_search():
        """Ranked results with per-factor scores; debug=true adds breakdowns."""
        try:
            query, filters, results = run_search()
        except InvalidParameter:
            raise
        except Exception:
            logger.exception("Error handling ranked search request")
            return _error("Internal server error", 500)

        response = {
            "query": query,
            "filters": filters,
            "count": len(results),
            "results": [r.to_dict(include_scores=True) for r in results],
        }

        debug = (request.args.get("debug") or "").lower() == "true"
        if debug and results:
            response["ranking_info"] = {
                "algorithm": ALGORITHM_DESCRIPTION,
                "weights": ranking_config.weights_description(),
                "top_score": round(results[0].final_score, 6),
            }
            response["debug_top_results"] = [
                {
                    "book_id": r.id,
                    "title": r.book.title,
                    "author": r.book.author,
                    "breakdown": r.score_breakdown(),
                }
                for r in results[:config.DEBUG_TOP_RESULTS]
            ]

        return jsonify(response)

    @app.route("/index/status/<int:book_id>")
    def index_status(book_id):
        if book_id not in book_by_id:
            return _error("Book not found", 404)
        indexed = term_source.is_indexed(book_id)
        return jsonify({
            "book_id": book_id,
            "status": "indexed" if indexed else "not_indexed",
        })

    return app


if __name__ == "__main__":
    logging.basicConfig(
        level=config.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = create_app()
    logger.info(f"{config.SERVICE_NAME} starting on port {config.PORT}")
    app.run(host="0.0.0.0", port=config.PORT)
