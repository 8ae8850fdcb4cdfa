"""
Unit tests for the sanitize-then-validate pipeline
"""

import pytest

from activity_planner.core.rules import RecordValidator
from activity_planner.core.sanitizers import EscapingHtmlSanitizer
from activity_planner.core.schema import SchemaRegistry

REQUIRED_CASES = [
    (schema.record_type, field.name)
    for schema in SchemaRegistry.from_yaml()
    for field in schema.required_fields
]


@pytest.mark.unit
class TestValidSubmissions:
    """Well-formed submissions pass for every event type"""

    @pytest.mark.parametrize("record_type", ["wedding", "funeral", "breakfast", "musical"])
    def test_valid(self, validator, valid_submissions, record_type):
        result = validator.validate_and_sanitize(record_type, valid_submissions[record_type])

        assert result.is_valid is True
        assert result.errors == []
        assert result.failed_fields == []

    def test_wedding_data_covers_every_schema_field(self, validator, valid_submissions):
        result = validator.validate_and_sanitize("wedding", valid_submissions["wedding"])

        assert result.data == {
            "date": "2025-06-01",
            "bride": "Ada",
            "groom": "Alan",
            "place": "Hall",
            "postcode": "",
        }

    def test_postcode_normalized(self, validator, valid_submissions):
        raw = {**valid_submissions["wedding"], "postcode": "sw1a 1aa"}
        result = validator.validate_and_sanitize("wedding", raw)

        assert result.is_valid is True
        assert result.data["postcode"] == "SW1A 1AA"

    @pytest.mark.parametrize("postcode", ["SW1A 1AA", "EC1A1BB"])
    def test_valid_postcodes(self, validator, valid_submissions, postcode):
        raw = {**valid_submissions["breakfast"], "postcode": postcode}
        assert validator.validate_and_sanitize("breakfast", raw).is_valid is True

    @pytest.mark.parametrize("time", ["23:59", "00:00"])
    def test_boundary_times(self, validator, valid_submissions, time):
        raw = {**valid_submissions["musical"], "time": time}
        result = validator.validate_and_sanitize("musical", raw)

        assert result.is_valid is True
        assert result.data["time"] == time

    def test_text_fields_stripped_of_angle_brackets(self, validator, valid_submissions):
        raw = {**valid_submissions["wedding"], "bride": "  <Ada>  "}
        result = validator.validate_and_sanitize("wedding", raw)

        assert result.data["bride"] == "Ada"

    def test_extra_keys_sanitized_as_text(self, validator, valid_submissions):
        raw = {**valid_submissions["wedding"], "colour": "<blue>"}
        result = validator.validate_and_sanitize("wedding", raw)

        assert result.is_valid is True
        assert result.data["colour"] == "blue"


@pytest.mark.unit
class TestRequiredFields:
    """Required-field errors"""

    def test_funeral_all_empty(self, validator):
        raw = {"date": "", "deceased": "", "place": "", "time": ""}
        result = validator.validate_and_sanitize("funeral", raw)

        assert result.is_valid is False
        assert result.errors == [
            "Date is required",
            "Deceased Name is required",
            "Place is required",
            "Time is required",
        ]
        assert result.failed_fields == ["date", "deceased", "place", "time"]

    @pytest.mark.parametrize("record_type,field_name", REQUIRED_CASES)
    def test_single_empty_required_field(self, validator, registry, valid_submissions, record_type, field_name):
        raw = {**valid_submissions[record_type], field_name: ""}
        result = validator.validate_and_sanitize(record_type, raw)

        label = registry.get_schema(record_type).get_field(field_name).label("en")
        assert result.errors == [f"{label} is required"]
        assert result.failed_fields == [field_name]

    def test_missing_keys_treated_as_empty(self, validator):
        result = validator.validate_and_sanitize("wedding", {})

        assert result.failed_fields == ["date", "bride", "groom", "place"]
        assert result.data["postcode"] == ""
        assert result.data["date"] is None

    def test_turkish_messages(self, validator, valid_submissions):
        raw = {**valid_submissions["funeral"], "deceased": ""}
        result = validator.validate_and_sanitize("funeral", raw, locale="tr")

        assert result.errors == ["Merhumun Adı zorunludur"]


@pytest.mark.unit
class TestFormatErrors:
    """Postcode, date and time format errors"""

    def test_invalid_postcode(self, validator, valid_submissions):
        raw = {**valid_submissions["wedding"], "postcode": "12345"}
        result = validator.validate_and_sanitize("wedding", raw)

        assert result.errors == ["Invalid UK postcode format"]
        assert result.failed_fields == ["postcode"]

    @pytest.mark.parametrize("time", ["24:00", "9:5"])
    def test_invalid_time(self, validator, valid_submissions, time):
        raw = {**valid_submissions["breakfast"], "time": time}
        result = validator.validate_and_sanitize("breakfast", raw)

        assert result.is_valid is False
        assert result.errors == ["Time is required", "Invalid time format"]
        assert result.data["time"] is None

    def test_invalid_date(self, validator, valid_submissions):
        raw = {**valid_submissions["wedding"], "date": "2025-02-30"}
        result = validator.validate_and_sanitize("wedding", raw)

        assert result.errors == ["Date is required", "Invalid date format"]
        assert result.failed_fields == ["date", "date"]

    @pytest.mark.parametrize("date", ["10:30", "Monday"])
    def test_date_without_calendar_day(self, validator, valid_submissions, date):
        raw = {**valid_submissions["wedding"], "date": date}
        result = validator.validate_and_sanitize("wedding", raw)

        assert result.errors == ["Date is required", "Invalid date format"]
        assert result.data["date"] is None

    def test_error_order(self, validator):
        raw = {
            "date": "garbage",
            "deceased": "",
            "place": "Chapel",
            "time": "25:00",
            "postcode": "12345",
        }
        result = validator.validate_and_sanitize("funeral", raw)

        assert result.errors == [
            "Date is required",
            "Deceased Name is required",
            "Time is required",
            "Invalid UK postcode format",
            "Invalid date format",
            "Invalid time format",
        ]
        assert result.failed_fields == ["date", "deceased", "time", "postcode", "date", "time"]


@pytest.mark.unit
class TestRichTextFields:
    """Rich-text fields use the configured sanitizer"""

    def test_allowlist(self, validator, valid_submissions):
        raw = {**valid_submissions["funeral"], "notes": "<b>Kind</b><script>x()</script>"}
        result = validator.validate_and_sanitize("funeral", raw)

        assert result.is_valid is True
        assert result.data["notes"] == "<b>Kind</b>"

    def test_escaping(self, registry, valid_submissions):
        validator = RecordValidator(registry, EscapingHtmlSanitizer())
        raw = {**valid_submissions["musical"], "address": "<i>1 High St</i>"}
        result = validator.validate_and_sanitize("musical", raw)

        assert result.data["address"] == "&lt;i&gt;1 High St&lt;/i&gt;"


@pytest.mark.unit
class TestUnknownType:
    """Submissions for types outside the registry"""

    def test_unknown_type_rejected(self, validator):
        result = validator.validate_and_sanitize("party", {"date": "2025-06-01"})

        assert result.is_valid is False
        assert result.errors == ["Unknown event type: party"]
        assert result.data == {}

    def test_default_locale(self, registry, valid_submissions):
        validator = RecordValidator(registry, EscapingHtmlSanitizer(), default_locale="tr")
        result = validator.validate_and_sanitize("wedding", {**valid_submissions["wedding"], "bride": ""})

        assert result.errors == ["Gelin zorunludur"]
