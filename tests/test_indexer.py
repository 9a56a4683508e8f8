import logging
import os

import pytest
from docsearch.errors import EnumerationError, Extracted, ExtractionFailed
from docsearch.extractor import extract
from docsearch.indexer import Indexer, term_frequencies, top_terms
from docsearch.lexer import Lexer
from docsearch.walker import walk


def write(path, content):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return str(path)


@pytest.fixture
def corpus(tmp_path):
    root = tmp_path / "corpus"
    write(root / "a.xml", "<doc><p>the cat</p><p>sat</p></doc>")
    write(root / "sub" / "b.xml", "<doc><title>the dog</title> sat <b>down</b></doc>")
    write(root / "sub" / "deeper" / "c.xhtml", "<html><body>gl4 glBindTexture</body></html>")
    write(root / "notes.txt", "not a document")
    write(root / "broken.xml", "<doc><p>unclosed</doc>")
    return root


def test_term_frequencies_counts_every_token():
    tf = term_frequencies("The cat saw the CAT, the end.")
    assert tf == {"THE": 3, "CAT": 2, "SAW": 1, ",": 1, "END": 1, ".": 1}


@pytest.mark.parametrize("text", [
    "",
    "a a a",
    "glBindBuffer(GL_ARRAY_BUFFER, 0);",
    "Lorem ipsum 2024 dolor; sit amet 3.14",
])
def test_term_frequencies_sum_matches_token_count(text):
    tf = term_frequencies(text)
    assert sum(tf.values()) == len(list(Lexer(text)))
    assert all(count >= 1 for count in tf.values())


def test_top_terms_orders_by_count_then_term():
    tf = {"B": 2, "A": 2, "C": 5, "D": 1}
    assert top_terms(tf, 3) == [("C", 5), ("A", 2), ("B", 2)]


def test_extract_joins_fragments_with_space(tmp_path):
    path = write(tmp_path / "x.xml", "<a><b>gl</b><c>Bind</c>tail<!-- hidden --></a>")
    result = extract(path)
    assert isinstance(result, Extracted)
    assert result.text == "gl Bind tail"


def test_extract_reports_malformed_and_missing(tmp_path):
    bad = write(tmp_path / "bad.xml", "<a><b></a>")
    res = extract(bad)
    assert isinstance(res, ExtractionFailed)
    assert res.doc_id == bad
    assert "malformed" in res.reason

    missing = str(tmp_path / "nope.xml")
    res = extract(missing)
    assert isinstance(res, ExtractionFailed)
    assert "unreadable" in res.reason


def test_walk_recurses_and_filters_suffixes(corpus):
    paths = list(walk(str(corpus)))
    rel = sorted(os.path.relpath(p, corpus) for p in paths)
    assert rel == sorted([
        "a.xml",
        "broken.xml",
        os.path.join("sub", "b.xml"),
        os.path.join("sub", "deeper", "c.xhtml"),
    ])


def test_walk_missing_root_raises(tmp_path):
    with pytest.raises(EnumerationError) as exc:
        list(walk(str(tmp_path / "missing")))
    assert exc.value.path.endswith("missing")


@pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unsupported")
def test_walk_skips_symlinks(tmp_path, caplog):
    target = tmp_path / "target"
    write(target / "t.xml", "<a>x</a>")
    root = tmp_path / "root"
    root.mkdir()
    os.symlink(target, root / "link")
    with caplog.at_level(logging.WARNING):
        assert list(walk(str(root))) == []
    assert "Symbolic link" in caplog.text


def test_build_skips_broken_documents(corpus, caplog):
    indexer = Indexer()
    with caplog.at_level(logging.WARNING):
        index = indexer.build(str(corpus))

    names = {os.path.basename(p) for p in index}
    assert names == {"a.xml", "b.xml", "c.xhtml"}
    assert [os.path.basename(s.doc_id) for s in indexer.skipped] == ["broken.xml"]
    assert "broken.xml" in caplog.text

    a = index[str(corpus / "a.xml")]
    assert a == {"THE": 1, "CAT": 1, "SAT": 1}
    c = index[str(corpus / "sub" / "deeper" / "c.xhtml")]
    assert c == {"GL": 1, "4": 1, "GLBINDTEXTURE": 1}


def test_build_indexes_empty_documents(tmp_path):
    write(tmp_path / "empty.xml", "<doc/>")
    index = Indexer().build(str(tmp_path))
    assert index == {str(tmp_path / "empty.xml"): {}}


def test_build_propagates_enumeration_errors(tmp_path):
    with pytest.raises(EnumerationError):
        Indexer().build(str(tmp_path / "missing"))


def test_build_with_custom_collaborators():
    texts = {"doc1": "alpha beta", "doc2": "beta", "bad": None}

    def fake_walk(root, suffixes):
        yield from texts

    def fake_extract(doc_id):
        if texts[doc_id] is None:
            return ExtractionFailed(doc_id, "boom")
        return Extracted(doc_id, texts[doc_id])

    indexer = Indexer(extract_fn=fake_extract, walk_fn=fake_walk)
    index = indexer.build("ignored")
    assert index == {"doc1": {"ALPHA": 1, "BETA": 1}, "doc2": {"BETA": 1}}
    assert [(s.doc_id, s.reason) for s in indexer.skipped] == [("bad", "boom")]


@pytest.mark.skipif(
    not hasattr(os, "geteuid") or os.geteuid() == 0,
    reason="needs POSIX permissions enforced for a non-root user",
)
def test_build_aborts_on_unreadable_subdirectory(corpus):
    locked = corpus / "sub" / "deeper"
    locked.chmod(0)
    try:
        indexer = Indexer()
        with pytest.raises(EnumerationError) as exc:
            indexer.build(str(corpus))
    finally:
        locked.chmod(0o755)
    assert exc.value.path == str(locked)
    assert indexer.index == {}


def test_enumeration_error_midway_leaves_no_partial_index():
    def failing_walk(root, suffixes):
        yield "first.xml"
        yield "second.xml"
        raise EnumerationError("corpus/locked", PermissionError(13, "Permission denied"))

    indexer = Indexer(extract_fn=lambda d: Extracted(d, "some text"), walk_fn=failing_walk)
    with pytest.raises(EnumerationError):
        indexer.build("corpus")
    assert indexer.index == {}
