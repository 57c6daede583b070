"""Tests for [[INSERT]] payload extraction."""

from resume_copilot.domain.insertion import DEFAULT_ACKNOWLEDGEMENT, parse_insertion


def test_no_markers_leaves_message_untouched():
    result = parse_insertion("  Looks great overall.  ")
    assert result.insert_content is None
    assert result.cleaned_message == "  Looks great overall.  "


def test_extracts_and_trims_content():
    result = parse_insertion("Here you go:\n[[INSERT]]\n  Led a team of 5.\n[[/INSERT]]\nWant more?")
    assert result.insert_content == "Led a team of 5."
    assert result.cleaned_message == "Here you go:\n\nWant more?"


def test_only_span_falls_back_to_acknowledgement():
    result = parse_insertion("[[INSERT]]New summary[[/INSERT]]")
    assert result.insert_content == "New summary"
    assert result.cleaned_message == DEFAULT_ACKNOWLEDGEMENT == "Done! I've updated your document."


def test_multiline_content():
    result = parse_insertion("[[INSERT]]SKILLS\nPython\nSQL[[/INSERT]] done")
    assert result.insert_content == "SKILLS\nPython\nSQL"
    assert result.cleaned_message == "done"


def test_only_first_span_is_used():
    text = "A [[INSERT]]one[[/INSERT]] B [[INSERT]]two[[/INSERT]] C"
    result = parse_insertion(text)
    assert result.insert_content == "one"
    assert result.cleaned_message == "A  B [[INSERT]]two[[/INSERT]] C"


def test_unclosed_marker_is_ignored():
    result = parse_insertion("[[INSERT]]dangling")
    assert result.insert_content is None
    assert result.cleaned_message == "[[INSERT]]dangling"


def test_blank_span_yields_empty_content():
    result = parse_insertion("Nothing to add [[INSERT]]   [[/INSERT]]")
    assert result.insert_content == ""
    assert result.cleaned_message == "Nothing to add"
