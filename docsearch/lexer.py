"""
docsearch/lexer.py

Tokenizer shared by indexing and querying.

A Lexer walks a string and yields raw token slices:
  - leading whitespace is skipped
  - a run of numeric chars is one token        ("2024"   -> "2024")
  - a run of alphabetic chars is one token     ("glBind" -> "glBind")
  - anything else is a one-char token          ("(", ";", "+")

Mixed runs split at the boundary: "gl4" -> "gl", "4".
Upper-casing is done by the caller through normalize()/tokenize(), so that
documents and queries always end up with the same terms.
"""

import unicodedata
from typing import Iterator

NUMBER_CATEGORIES = ("Nd", "Nl", "No")


def is_numeric(ch: str) -> bool:
    """Unicode number categories only; CJK numeral ideographs count as letters."""
    return unicodedata.category(ch) in NUMBER_CATEGORIES


def is_alphabetic(ch: str) -> bool:
    return ch.isalpha() and not is_numeric(ch)


class Lexer:
    """
    Iterator over the raw tokens of one text.

    Typical usage:
        for tok in Lexer("glBindTexture(GL_TEXTURE_2D, id);"):
            ...

    A Lexer is single-use; make a fresh one per text.
    """

    def __init__(self, content: str):
        self.content = content
        self.pos = 0

    def __iter__(self) -> Iterator[str]:
        return self

    def __next__(self) -> str:
        tok = self.next_token()
        if tok is None:
            raise StopIteration
        return tok

    def _trim_left(self):
        while self.pos < len(self.content) and self.content[self.pos].isspace():
            self.pos += 1

    def _chop(self, n: int) -> str:
        token = self.content[self.pos:self.pos + n]
        self.pos += n
        return token

    def _chop_while(self, predicate) -> str:
        n = 0
        while self.pos + n < len(self.content) and predicate(self.content[self.pos + n]):
            n += 1
        return self._chop(n)

    def next_token(self) -> str | None:
        """Return the next raw token, or None once the input is exhausted."""
        self._trim_left()
        if self.pos >= len(self.content):
            return None

        ch = self.content[self.pos]
        if is_numeric(ch):
            return self._chop_while(is_numeric)
        if is_alphabetic(ch):
            return self._chop_while(is_alphabetic)
        return self._chop(1)


def normalize(token: str) -> str:
    """Turn a raw token into a term. Only ASCII letters are upper-cased."""
    return "".join(c.upper() if c.isascii() else c for c in token)


def tokenize(text: str) -> list[str]:
    """Lex and normalize `text`. Returns [] for empty or whitespace-only input."""
    return [normalize(tok) for tok in Lexer(text)]
