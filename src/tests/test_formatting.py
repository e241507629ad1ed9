"""Tests for display formatting and type metadata."""

from datetime import date

import pytest

from models.fields import is_read_only, pill_colors, type_label
from models.table import PLACEHOLDER
from parsers.formatting import CHECK_MARK, format_for_display


class TestFormatForDisplay:
    """Display-only rendering of decoded values."""

    def test_empty_renders_placeholder(self):
        assert format_for_display("rich_text", "") == PLACEHOLDER
        assert format_for_display("number", "") == PLACEHOLDER

    @pytest.mark.parametrize("value", ["Yes", "yes", "TRUE", "1", " yes "])
    def test_checkbox_truthy(self, value):
        assert format_for_display("checkbox", value) == CHECK_MARK

    @pytest.mark.parametrize("value", ["No", "0", "false", "maybe"])
    def test_checkbox_falsy(self, value):
        assert format_for_display("checkbox", value) == PLACEHOLDER

    def test_number_thousands_separators(self):
        assert format_for_display("number", "1234567") == "1,234,567"
        assert format_for_display("number", "1234.5") == "1,234.5"
        assert format_for_display("number", "3") == "3"

    def test_number_unparseable_falls_back(self):
        assert format_for_display("number", "n/a") == "n/a"

    def test_date_uses_locale_format(self):
        expected = date(2024, 1, 15).strftime("%x")
        assert format_for_display("date", "2024-01-15") == expected

    def test_date_custom_format(self):
        assert format_for_display("date", "2024-01-15", date_format="%Y/%m/%d") == "2024/01/15"

    def test_date_time_with_utc_suffix(self):
        assert format_for_display("date", "2024-01-15T09:30:00.000Z", date_format="%Y-%m-%d %H:%M") == "2024-01-15 09:30"

    def test_date_unparseable_falls_back(self):
        assert format_for_display("date", "next tuesday") == "next tuesday"

    def test_other_types_pass_through(self):
        assert format_for_display("url", "https://example.com") == "https://example.com"
        assert format_for_display("select", "High") == "High"

    @pytest.mark.parametrize(
        "field_type,value",
        [
            ("checkbox", "Yes"),
            ("checkbox", "No"),
            ("number", "1234.5"),
            ("number", "abc"),
            ("date", "2024-01-15"),
            ("date", "garbage"),
            ("title", "Alpha"),
            ("rich_text", ""),
        ],
    )
    def test_idempotent(self, field_type, value):
        once = format_for_display(field_type, value)
        assert format_for_display(field_type, once) == once


class TestTypeMetadata:
    def test_read_only_types(self):
        assert is_read_only("formula")
        assert is_read_only("rollup")
        assert is_read_only("people")
        assert not is_read_only("title")
        assert not is_read_only(None)

    def test_type_labels(self):
        assert type_label("rich_text") == "Text"
        assert type_label("relation") == "relation"

    def test_pill_colors_default(self):
        assert pill_colors("red") == ("#FEE2E2", "#991B1B")
        assert pill_colors(None) == pill_colors("default")
        assert pill_colors("teal") == pill_colors("default")
