"""Tests for the document model and mutation splicing."""

import pytest

from resume_copilot.domain.document import (
    Document,
    DocumentMutation,
    Selection,
    apply_mutation,
    capture_selection,
)


def test_new_document_defaults():
    doc = Document()
    assert doc.text == ""
    assert doc.title == "Untitled Resume"
    assert doc.word_count == 0
    assert doc.is_blank()


def test_word_count():
    assert Document(text="  Led   a\nteam  ").word_count == 3


class TestCaptureSelection:
    def test_captures_text_and_offsets(self):
        selection = capture_selection("Hello brave world", 6, 11)
        assert selection == Selection(text="brave", start=6, end=11)

    def test_collapsed_caret_is_no_selection(self):
        assert capture_selection("Hello", 2, 2) is None

    @pytest.mark.parametrize(("start", "end"), [(-1, 2), (3, 2), (0, 6)])
    def test_out_of_range(self, start, end):
        with pytest.raises(ValueError):
            capture_selection("Hello", start, end)


class TestApplyMutation:
    def test_replace_selection(self):
        doc = Document(text="Worked on stuff at Acme.", title="CV")
        snapshot = capture_selection(doc.text, 0, 15)
        new_doc, selection = apply_mutation(doc, DocumentMutation("Led 3 launches", snapshot))
        assert new_doc.text == "Led 3 launches at Acme."
        assert new_doc.title == "CV"
        assert selection is None

    def test_append_to_existing_text(self):
        doc = Document(text="SUMMARY\nEngineer")
        new_doc, _ = apply_mutation(doc, DocumentMutation("SKILLS\nPython"))
        assert new_doc.text == "SUMMARY\nEngineer\n\nSKILLS\nPython"

    def test_append_to_blank_document_has_no_separator(self):
        for text in ("", "  \n "):
            new_doc, _ = apply_mutation(Document(text=text), DocumentMutation("SUMMARY"))
            assert new_doc.text == "SUMMARY"

    def test_replace_uses_snapshot_offsets(self):
        doc = Document(text="abcdef")
        snapshot = Selection(text="cd", start=2, end=4)
        new_doc, _ = apply_mutation(doc, DocumentMutation("XY", snapshot))
        assert new_doc.text == "abXYef"

    def test_mutation_kind(self):
        assert DocumentMutation("x").kind == "append"
        assert DocumentMutation("x", Selection("a", 0, 1)).kind == "replace"

    def test_original_document_is_unchanged(self):
        doc = Document(text="abc")
        apply_mutation(doc, DocumentMutation("d"))
        assert doc.text == "abc"


def test_whole_document_selection_replace():
    doc = Document(text="Helped with projects.")
    snapshot = capture_selection(doc.text, 0, 21)
    assert snapshot.text == "Helped with projects."
    new_doc, selection = apply_mutation(
        doc, DocumentMutation("Led 3 projects, cutting delivery time by 20%.", snapshot)
    )
    assert new_doc.text == "Led 3 projects, cutting delivery time by 20%."
    assert selection is None
