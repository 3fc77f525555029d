from __future__ import annotations

from vector_cloud.ui.sidebar import _format_item_label, parse_input_lines


def test_blank_lines_are_dropped_and_items_stripped() -> None:
    text = "cat\n\n  dog  \n   \ncar\n"

    assert parse_input_lines(text) == ["cat", "dog", "car"]


def test_empty_input_gives_no_items() -> None:
    assert parse_input_lines("") == []
    assert parse_input_lines("\n \n") == []


def test_long_labels_are_truncated_for_the_dropdown() -> None:
    assert _format_item_label("short") == "short"
    assert _format_item_label("x" * 60) == "x" * 50 + "..."
