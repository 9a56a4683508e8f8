"""
docsearch/storage.py

Reads and writes the corpus index as a single JSON file:

    {
        "docs/gl4/glBindTexture.xml": {"GL": 12, "BIND": 3, ...},
        ...
    }

Saving writes a temp file next to the destination and renames it over the
old one, so readers only ever see a complete index. Loading validates the
shape and raises PersistenceError for anything else.
"""

import json
import logging
import os
import tempfile

from docsearch.errors import PersistenceError

logger = logging.getLogger(__name__)


def save_index(index, path):
    """
    Save a corpus index (doc_id -> {term: count}) to `path`, replacing any
    previous file.
    Raises PersistenceError if the index is malformed or the destination
    can't be written.
    """
    validate_index(index, path)
    data = {doc_id: dict(tf) for doc_id, tf in index.items()}

    directory = os.path.dirname(os.path.abspath(path))
    tmp_path = None
    try:
        fd, tmp_path = tempfile.mkstemp(prefix=".index-", suffix=".tmp", dir=directory)
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            # ASCII output: undecodable filenames (surrogate escapes) survive as \udcXX
            json.dump(data, f)
        os.chmod(tmp_path, 0o666 & ~_current_umask())
        os.replace(tmp_path, path)
        tmp_path = None
    except OSError as e:
        raise PersistenceError(path, f"cannot write index: {e.strerror or e}") from e
    except (TypeError, ValueError) as e:
        raise PersistenceError(path, f"cannot encode index: {e}") from e
    finally:
        if tmp_path is not None and os.path.exists(tmp_path):
            os.unlink(tmp_path)
    logger.info("[Storage] Index saved: %d documents to %s", len(data), path)


def _current_umask():
    mask = os.umask(0)
    os.umask(mask)
    return mask


def _is_count(value):
    # bool is an int subclass; reject it explicitly
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


def validate_index(data, path="<memory>"):
    """
    Check that `data` has the shape {str: {str: int >= 0}}.
    Returns `data` unchanged, raises PersistenceError otherwise.
    """
    if not isinstance(data, dict):
        raise PersistenceError(path, f"expected a JSON object, got {type(data).__name__}")
    for doc_id, tf in data.items():
        if not isinstance(doc_id, str):
            raise PersistenceError(path, f"document id {doc_id!r} is not a string")
        if not isinstance(tf, dict):
            raise PersistenceError(path, f"entry for {doc_id!r} is not an object")
        for term, count in tf.items():
            if not isinstance(term, str):
                raise PersistenceError(path, f"term {term!r} in {doc_id!r} is not a string")
            if not _is_count(count):
                raise PersistenceError(
                    path, f"count for {term!r} in {doc_id!r} is not a non-negative integer: {count!r}"
                )
    return data


def load_index(path):
    """
    Load a corpus index from `path`.
    Returns:
        dict[str, dict[str, int]]
    Raises PersistenceError if the file is missing, unreadable or malformed.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise PersistenceError(path, "index file not found") from e
    except OSError as e:
        raise PersistenceError(path, f"cannot read index: {e.strerror or e}") from e
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise PersistenceError(path, f"not a valid JSON index: {e}") from e

    validate_index(data, path)
    logger.info("[Storage] Index loaded: %d documents from %s", len(data), path)
    return data
