"""
Unit tests for field sanitizers
"""

from datetime import date, datetime, timezone

import pytest
from hypothesis import given
from hypothesis import strategies as st

from activity_planner.core.models import FieldSpec
from activity_planner.core.sanitizers import (
    AllowListHtmlSanitizer,
    DateSanitizer,
    EscapingHtmlSanitizer,
    PostcodeSanitizer,
    TextSanitizer,
    TimeSanitizer,
    build_rich_text_sanitizer,
    date_timestamp,
    is_valid_time,
    sanitizer_for_field,
    validate_postcode,
)


@pytest.mark.unit
class TestTextSanitizer:
    """Tests for TextSanitizer"""

    def setup_method(self):
        self.sanitizer = TextSanitizer()

    def test_removes_angle_brackets_and_trims(self):
        assert self.sanitizer.sanitize("  <b>Ada</b>  ") == "bAda/b"

    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_blank_becomes_empty_string(self, value):
        assert self.sanitizer.sanitize(value) == ""

    def test_non_string_converted(self):
        assert self.sanitizer.sanitize(42) == "42"

    @given(st.text())
    def test_output_has_no_angle_brackets(self, value):
        result = self.sanitizer.sanitize(value)
        assert "<" not in result
        assert ">" not in result
        assert result == result.strip()


@pytest.mark.unit
class TestDateSanitizer:
    """Tests for DateSanitizer"""

    def setup_method(self):
        self.sanitizer = DateSanitizer()

    def test_valid_date_unchanged(self):
        assert self.sanitizer.sanitize("2025-06-01") == "2025-06-01"

    @pytest.mark.parametrize(
        "value", [None, "", "  ", "garbage", "2025-02-30", "10:30", "Monday", "5", "13", "2025-06"]
    )
    def test_empty_or_invalid_becomes_none(self, value):
        assert self.sanitizer.sanitize(value) is None

    @given(st.dates(min_value=date(1900, 1, 1), max_value=date(2200, 12, 31)))
    def test_iso_dates_accepted(self, value):
        assert self.sanitizer.sanitize(value.isoformat()) == value.isoformat()


@pytest.mark.unit
class TestDateTimestamp:
    """Tests for date_timestamp ordering key"""

    @pytest.mark.parametrize("value", [None, "", "garbage"])
    def test_missing_or_invalid_is_epoch_zero(self, value):
        assert date_timestamp(value) == 0.0

    def test_later_date_sorts_after(self):
        assert date_timestamp("2025-06-02") > date_timestamp("2025-06-01")

    def test_time_only_has_no_timestamp(self):
        assert date_timestamp("10:30") == 0.0

    def test_independent_of_current_date(self):
        expected = datetime(2025, 6, 1, 10, 30, tzinfo=timezone.utc).timestamp()
        assert date_timestamp("2025-06-01 10:30") == expected
        assert date_timestamp("2025-06-01") == datetime(2025, 6, 1, tzinfo=timezone.utc).timestamp()


@pytest.mark.unit
class TestTimeSanitizer:
    """Tests for TimeSanitizer"""

    def setup_method(self):
        self.sanitizer = TimeSanitizer()

    @pytest.mark.parametrize("value", ["23:59", "00:00", "9:05", "14:30"])
    def test_valid_times_unchanged(self, value):
        assert self.sanitizer.sanitize(value) == value

    @pytest.mark.parametrize("value", ["24:00", "9:5", "12:60", "noon", "12:00:00", None, ""])
    def test_invalid_times_become_none(self, value):
        assert self.sanitizer.sanitize(value) is None

    @given(st.integers(min_value=0, max_value=23), st.integers(min_value=0, max_value=59))
    def test_every_clock_time_is_valid(self, hour, minute):
        assert is_valid_time(f"{hour:02d}:{minute:02d}")

    @given(st.integers(min_value=24, max_value=99), st.integers(min_value=0, max_value=59))
    def test_hours_past_23_invalid(self, hour, minute):
        assert not is_valid_time(f"{hour}:{minute:02d}")


@pytest.mark.unit
class TestPostcodeSanitizer:
    """Tests for PostcodeSanitizer and validate_postcode"""

    def setup_method(self):
        self.sanitizer = PostcodeSanitizer()

    def test_uppercases(self):
        assert self.sanitizer.sanitize("sw1a 1aa") == "SW1A 1AA"

    def test_strips_disallowed_characters(self):
        assert self.sanitizer.sanitize(" SW1A-1AA! ") == "SW1A1AA"

    def test_blank_becomes_empty_string(self):
        assert self.sanitizer.sanitize(None) == ""

    @pytest.mark.parametrize("postcode", ["SW1A 1AA", "EC1A1BB", "M1 1AE", "B33 8TH", "CR2 6XH"])
    def test_valid_postcodes(self, postcode):
        assert validate_postcode(postcode) is True

    @pytest.mark.parametrize("postcode", ["12345", "SW1A", "ABC 123", "1AA SW1"])
    def test_invalid_postcodes(self, postcode):
        assert validate_postcode(postcode) is False

    def test_empty_postcode_is_valid(self):
        assert validate_postcode("") is True

    @given(st.text())
    def test_output_alphabet(self, value):
        result = self.sanitizer.sanitize(value)
        assert all(ch in "ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789 " for ch in result)
        assert result == result.strip()


@pytest.mark.unit
class TestAllowListHtmlSanitizer:
    """Tests for the allow-list rich-text sanitizer"""

    def setup_method(self):
        self.sanitizer = AllowListHtmlSanitizer()

    def test_keeps_allowed_tags_without_attributes(self):
        result = self.sanitizer.sanitize("<b onclick='steal()'>Hi</b> <em>there</em>")
        assert result == "<b>Hi</b> <em>there</em>"

    def test_drops_script_with_content(self):
        assert self.sanitizer.sanitize("<b>Hi</b><script>alert(1)</script>") == "<b>Hi</b>"

    def test_drops_disallowed_tags_keeps_text(self):
        assert self.sanitizer.sanitize("<a href='x'>link</a>") == "link"
        assert self.sanitizer.sanitize("<div>Line<br/>two</div>") == "Line<br/>two"

    def test_escapes_text(self):
        assert self.sanitizer.sanitize("Fish & Chips") == "Fish &amp; Chips"

    def test_closes_unclosed_tags(self):
        assert self.sanitizer.sanitize("<strong>bold") == "<strong>bold</strong>"

    def test_blank(self):
        assert self.sanitizer.sanitize(None) == ""
        assert self.sanitizer.sanitizer_type == "richtext_allowlist"

    @given(st.text(alphabet=st.characters(blacklist_characters="<(")))
    def test_no_script_survives(self, value):
        result = self.sanitizer.sanitize(f"{value}<script>evil()</script>")
        assert "<script" not in result.lower()
        assert "evil()" not in result


@pytest.mark.unit
class TestEscapingHtmlSanitizer:
    """Tests for the escaping rich-text sanitizer"""

    def test_escapes_all_markup(self):
        sanitizer = EscapingHtmlSanitizer()
        assert sanitizer.sanitize("<b>Hi</b>") == "&lt;b&gt;Hi&lt;/b&gt;"
        assert sanitizer.sanitizer_type == "richtext_escape"

    @given(st.text())
    def test_no_raw_angle_brackets(self, value):
        result = EscapingHtmlSanitizer().sanitize(value)
        assert "<" not in result
        assert ">" not in result


@pytest.mark.unit
class TestSanitizerSelection:
    """Sanitizers are chosen by kind and role, never by field name"""

    def test_build_rich_text_sanitizer(self):
        assert isinstance(build_rich_text_sanitizer("allowlist"), AllowListHtmlSanitizer)
        assert isinstance(build_rich_text_sanitizer("escape"), EscapingHtmlSanitizer)
        assert isinstance(build_rich_text_sanitizer("bleach"), EscapingHtmlSanitizer)

    @pytest.mark.parametrize(
        "field,expected",
        [
            (FieldSpec(name="when", kind="date"), DateSanitizer),
            (FieldSpec(name="starts", kind="time"), TimeSanitizer),
            (FieldSpec(name="zip", kind="text", role="postcode"), PostcodeSanitizer),
            (FieldSpec(name="postcode", kind="text"), TextSanitizer),
            (FieldSpec(name="notes", kind="textarea"), TextSanitizer),
            (None, TextSanitizer),
        ],
    )
    def test_selection(self, field, expected):
        assert isinstance(sanitizer_for_field(field, EscapingHtmlSanitizer()), expected)

    def test_richtext_role_uses_configured_sanitizer(self):
        rich_text = AllowListHtmlSanitizer()
        field = FieldSpec(name="details", kind="textarea", role="richtext")
        assert sanitizer_for_field(field, rich_text) is rich_text
