import pytest

from todos.domain.enums import TaskStatus
from todos.domain.errors import InvalidStatusError
from todos.domain.status import clean_status_emoji, parse_status


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("✅ Completed", TaskStatus.COMPLETED),
        ("done", TaskStatus.COMPLETED),
        ("Complete", TaskStatus.COMPLETED),
        ("🚧 In Progress", TaskStatus.IN_PROGRESS),
        ("  IN PROGRESS  ", TaskStatus.IN_PROGRESS),
        ("⏳ not started", TaskStatus.NOT_STARTED),
        ("pending", TaskStatus.NOT_STARTED),
        ("todo", TaskStatus.NOT_STARTED),
        ("❌ Rejected", TaskStatus.REJECTED),
        ("reject", TaskStatus.REJECTED),
        ("🔴⛔ rejected 🚫", TaskStatus.REJECTED),
    ],
)
def test_parse_status_synonyms(raw, expected):
    assert parse_status(raw) is expected


def test_parse_status_unknown_keeps_original_input():
    with pytest.raises(InvalidStatusError) as exc:
        parse_status("🟢 frobnicate")

    assert exc.value.raw == "🟢 frobnicate"
    assert "frobnicate" in str(exc.value)


@pytest.mark.parametrize("raw", ["", "   ", "✅", "in-progress", "progress", "done!", "not  started"])
def test_parse_status_is_exact_after_normalization(raw):
    with pytest.raises(InvalidStatusError):
        parse_status(raw)


def test_clean_status_emoji_strips_glyphs_and_whitespace():
    assert clean_status_emoji(" ✓ 🟡 Done 🔄 ") == "Done"


def test_status_str_is_display_value():
    assert str(TaskStatus.NOT_STARTED) == "Not Started"
