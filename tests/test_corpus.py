"""Tests for the directory corpus provider."""

from datetime import datetime

import pytest

from doc_timeline.corpus.provider import DirectoryCorpus


@pytest.fixture
def notes_dir(tmp_path):
    (tmp_path / "sub").mkdir()
    (tmp_path / "b.md").write_text("bravo", encoding="utf-8")
    (tmp_path / "a.md").write_text("alpha", encoding="utf-8")
    (tmp_path / "sub" / "c.md").write_text("charlie", encoding="utf-8")
    (tmp_path / "ignored.txt").write_text("not a note", encoding="utf-8")
    return tmp_path


def test_lists_notes_sorted_with_relative_ids(notes_dir):
    refs = DirectoryCorpus(notes_dir).list_documents()
    assert [r.doc_id for r in refs] == ["a.md", "b.md", "sub/c.md"]
    assert refs[2].label == "c"


def test_custom_pattern(notes_dir):
    refs = DirectoryCorpus(notes_dir, pattern="*.txt").list_documents()
    assert [r.doc_id for r in refs] == ["ignored.txt"]


def test_read_and_created(notes_dir):
    corpus = DirectoryCorpus(notes_dir)
    ref = corpus.list_documents()[0]
    assert corpus.read(ref) == "alpha"
    created = corpus.created(ref)
    assert isinstance(created, datetime)
    assert created.tzinfo is not None


def test_missing_directory(tmp_path):
    with pytest.raises(FileNotFoundError):
        DirectoryCorpus(tmp_path / "missing").list_documents()


def test_read_errors_propagate(notes_dir):
    corpus = DirectoryCorpus(notes_dir)
    ref = corpus.list_documents()[0]
    ref.path.unlink()
    with pytest.raises(OSError):
        corpus.read(ref)
    assert corpus.created(ref) is None
