"""Tests for advisory slot validation."""

import io

import pytest

from document_studio.catalog import LayoutRegistry
from document_studio.errors import ValidationFailed
from document_studio.validation import content_length, is_blank, validate_content


def _layout(layout_id: str):
    return LayoutRegistry().get_layout(layout_id)


# ============================================================
# LENGTH / BLANK TESTS
# ============================================================

def test_content_length():
    assert content_length(None) == 0
    assert content_length("hello") == 5
    assert content_length({"text": "abc", "extra": "ignored"}) == 3
    assert content_length({"value": "42%", "label": "Growth"}) == 9


def test_is_blank():
    assert is_blank(None)
    assert is_blank("   ")
    assert is_blank({"value": "", "label": None})
    assert not is_blank("x")
    assert not is_blank({"value": "1"})


# ============================================================
# validate_content TESTS
# ============================================================

def test_valid_content():
    report = validate_content(_layout("title-slide"), {"title": "Q3 Results", "subtitle": "Board update"})
    assert report.valid
    assert report.errors == []
    assert report.slots["title"].length == 10
    assert report.slots["title"].max_length == 60


def test_exceeds_max_length():
    report = validate_content(_layout("twitter-post"), {"content": "x" * 281})
    assert not report.valid
    assert report.errors == ["content exceeds max 280 characters (current: 281)"]


def test_at_max_length_is_valid():
    assert validate_content(_layout("twitter-post"), {"content": "x" * 280}).valid


def test_required_missing():
    report = validate_content(_layout("title-slide"), {"subtitle": "only"})
    assert not report.valid
    assert "title is required" in report.errors


def test_required_whitespace_only():
    report = validate_content(_layout("content-slide"), {"heading": "   ", "body": "b"})
    assert report.slots["heading"].errors == ["heading is required"]


def test_unknown_slot_is_warning_only():
    report = validate_content(_layout("title-slide"), {"title": "T", "footnote": "x"})
    assert report.valid
    assert report.unknown_slots == ["footnote"]
    assert report.warnings == ["footnote is not a slot of title-slide and will be ignored"]


def test_raise_if_invalid():
    report = validate_content(_layout("title-slide"), {})
    with pytest.raises(ValidationFailed) as excinfo:
        report.raise_if_invalid()
    assert excinfo.value.report is report
    validate_content(_layout("title-slide"), {"title": "T"}).raise_if_invalid()


def test_to_dict_shape():
    data = validate_content(_layout("content-slide"), {"heading": "H" * 51}).to_dict()
    assert data["layoutId"] == "content-slide"
    assert data["valid"] is False
    heading = data["slotStatus"]["heading"]
    assert heading == {
        "valid": False,
        "currentLength": 51,
        "maxChars": 50,
        "required": True,
        "errors": ["heading exceeds max 50 characters (current: 51)"],
    }


def test_print_report():
    out = io.StringIO()
    validate_content(_layout("title-slide"), {"title": ""}).print_report(file=out)
    text = out.getvalue()
    assert "INVALID" in text
    assert "title is required" in text
