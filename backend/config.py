# config.py
"""Configuration settings for the book search service."""
import os
from dotenv import load_dotenv

load_dotenv()

# Data repository shared with the indexing service
DATA_REPOSITORY_PATH = os.getenv("DATA_REPOSITORY_PATH", "../data_repository")
BOOKS_PATH = os.getenv(
    "BOOKS_PATH", os.path.join(DATA_REPOSITORY_PATH, "books.json")
)
INVERTED_INDEX_PATH = os.getenv(
    "INVERTED_INDEX_PATH", os.path.join(DATA_REPOSITORY_PATH, "inverted_index.json")
)

# Ranking Configuration
# Estimated corpus size, not a live count of indexed books
CORPUS_SIZE_ESTIMATE = int(os.getenv("CORPUS_SIZE_ESTIMATE", "50000"))
# Empty -> use the system clock
CURRENT_YEAR = int(os.getenv("CURRENT_YEAR")) if os.getenv("CURRENT_YEAR") else None

# Server Configuration
SERVICE_NAME = os.getenv("SERVICE_NAME", "search-service")
PORT = int(os.getenv("PORT", "7002"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Debug output
DEBUG_TOP_RESULTS = 3
