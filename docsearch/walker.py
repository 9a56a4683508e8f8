# docsearch/walker.py
"""
Recursive corpus enumeration.

walk() yields document paths lazily. Entries are visited in sorted order per
directory so that fixtures are reproducible; nothing downstream depends on it.

Symbolic links are not followed. Each one is logged as unhandled and skipped.
"""

import logging
import os
from typing import Iterable, Iterator

from docsearch.config import DOC_SUFFIXES
from docsearch.errors import EnumerationError

logger = logging.getLogger(__name__)


def is_document(path: str, suffixes: Iterable[str] = DOC_SUFFIXES) -> bool:
    return os.path.splitext(path)[1].lower() in tuple(suffixes)


def walk(root: str, suffixes: Iterable[str] = DOC_SUFFIXES) -> Iterator[str]:
    """
    Yield every document path under `root`, recursing into subdirectories.

    If `root` is itself a file it is yielded as-is (regardless of suffix).
    Raises EnumerationError when a directory (or the root) can't be listed.
    """
    suffixes = tuple(s.lower() for s in suffixes)

    if os.path.isfile(root) and not os.path.islink(root):
        yield root
        return

    try:
        with os.scandir(root) as it:
            entries = sorted(it, key=lambda e: e.name)
    except OSError as e:
        raise EnumerationError(root, e) from e

    for entry in entries:
        path = os.path.join(root, entry.name)
        if entry.is_symlink():
            logger.warning("[Walker] Symbolic link %s is not handled, skipping", path)
            continue
        if entry.is_dir(follow_symlinks=False):
            yield from walk(path, suffixes)
        elif entry.is_file(follow_symlinks=False) and is_document(path, suffixes):
            yield path
