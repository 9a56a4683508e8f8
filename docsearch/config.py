# docsearch/config.py

import os

# --- Persisted index ---
INDEX_PATH = os.environ.get("DOCSEARCH_INDEX_PATH", "index.json")

# --- Corpus walking: file suffixes treated as documents ---
DOC_SUFFIXES = tuple(
    s.strip().lower()
    for s in os.environ.get("DOCSEARCH_DOC_SUFFIXES", ".xml,.xhtml").split(",")
    if s.strip()
)

# --- HTTP server ---
HOST = os.environ.get("DOCSEARCH_HOST", "127.0.0.1")
PORT = int(os.environ.get("DOCSEARCH_PORT", "6969"))

# --- Query defaults ---
DEFAULT_LIMIT = int(os.environ.get("DOCSEARCH_DEFAULT_LIMIT", "10"))

# --- HTTP client ---
CLIENT_TIMEOUT = float(os.environ.get("DOCSEARCH_CLIENT_TIMEOUT", "10"))

LOG_LEVEL = os.environ.get("DOCSEARCH_LOG_LEVEL", "INFO").upper()
