import pytest
from docsearch.lexer import Lexer, is_alphabetic, is_numeric, normalize, tokenize


@pytest.mark.parametrize("text,expected", [
    ("", []),
    ("   \n\t ", []),
    ("hello", ["hello"]),
    ("hello world", ["hello", "world"]),
    ("gl4", ["gl", "4"]),
    ("GL_TEXTURE_2D", ["GL", "_", "TEXTURE", "_", "2", "D"]),
    ("glBindTexture(target, texture);", ["glBindTexture", "(", "target", ",", "texture", ")", ";"]),
    ("3.14", ["3", ".", "14"]),
    ("a+b", ["a", "+", "b"]),
    ("x--y", ["x", "-", "-", "y"]),
    ("2024abc", ["2024", "abc"]),
    ("  padded  ", ["padded"]),
    ("café", ["café"]),
    ("中一", ["中一"]),
    ("一中", ["一中"]),
    ("中3", ["中", "3"]),
    ("Ⅻ中", ["Ⅻ", "中"]),
    ("½x", ["½", "x"]),
])
def test_lexer(text, expected):
    assert list(Lexer(text)) == expected


@pytest.mark.parametrize("text", [
    "",
    "the cat sat",
    "glBindBuffer(GL_ARRAY_BUFFER, vbo[0]);  // bind\n\tnext",
    "mixed123runs456 and   spaces nbsp",
    "½ Ⅻ ٣ numerals",
    "中一 一中 百3 gl4",
    "!!!???",
])
def test_tokens_reconstruct_non_whitespace(text):
    """Concatenated tokens give back the input with whitespace removed."""
    tokens = list(Lexer(text))
    assert "".join(tokens) == "".join(c for c in text if not c.isspace())
    assert all(tokens), "empty token produced"
    for tok in tokens:
        assert not (any(is_alphabetic(c) for c in tok) and any(is_numeric(c) for c in tok)), tok


def test_lexer_is_lazy_and_terminates():
    lx = Lexer("one two")
    assert next(lx) == "one"
    assert next(lx) == "two"
    with pytest.raises(StopIteration):
        next(lx)
    assert lx.next_token() is None


def test_normalize_upper_cases_ascii_only():
    assert normalize("glBind") == "GLBIND"
    assert normalize("café") == "CAFé"
    assert normalize("42") == "42"


def test_tokenize_is_case_insensitive():
    assert tokenize("Bind Texture") == tokenize("bind TEXTURE") == ["BIND", "TEXTURE"]


@pytest.mark.parametrize("ch,numeric,alphabetic", [
    ("7", True, False),
    ("٣", True, False),
    ("Ⅻ", True, False),
    ("½", True, False),
    ("一", False, True),
    ("百", False, True),
    ("a", False, True),
    ("_", False, False),
])
def test_char_classes(ch, numeric, alphabetic):
    assert is_numeric(ch) is numeric
    assert is_alphabetic(ch) is alphabetic
