"""
Unit tests for validator.
"""

import json

import pytest
from form_guard.validation import (
    EngineError,
    format_engine_error,
    format_error_with_context,
    quick_verify,
    suggest_fix,
    verify_schema,
)


class TestVerifySchema:
    """Test schema text verification."""

    def test_verify_valid_schema(self):
        """Test verifying a valid schema."""
        text = json.dumps({"fields": [{"name": "title", "label": "Title", "type": "string"}]})

        result = verify_schema(text)

        assert result.is_valid is True
        assert result.error is None
        assert result.schema.fields[0].name == "title"
        assert result.raw_text == text

    def test_verify_bytes(self):
        """Test that UTF-8 bytes are accepted."""
        result = verify_schema(b'{"fields": []}')

        assert result.is_valid is True
        assert result.schema.fields == ()

    def test_invalid_json_syntax(self):
        """Test that unparsable text is reported as malformed."""
        result = verify_schema("{invalid json}")

        assert result.is_valid is False
        assert result.error.kind == "malformed"
        assert result.error.message == "Invalid JSON format"
        assert result.error.path is None
        assert result.schema is None

    def test_empty_text(self):
        """Test that empty text is malformed."""
        assert verify_schema("").error.kind == "malformed"

    def test_nan_rejected(self):
        """Test that NaN literals are not accepted as JSON."""
        result = verify_schema('{"fields": [{"name": "n", "type": "number", "defaultValue": NaN}]}')

        assert result.error.kind == "malformed"

    def test_non_text_input(self):
        """Test that non-text input is malformed rather than crashing."""
        result = verify_schema(None)

        assert result.error.kind == "malformed"

    def test_deeply_nested_text(self):
        """Test that pathologically nested JSON is rejected without raising."""
        depth = 100000
        result = verify_schema("[" * depth + "]" * depth)

        assert result.is_valid is False
        assert result.error.kind == "malformed"

    def test_root_not_object(self):
        """Test that a JSON array root is a shape error."""
        result = verify_schema("[]")

        assert result.error.kind == "shape"
        assert result.error.message == "Schema must be a valid JSON object"

    def test_missing_fields(self):
        """Test that a document without fields is a shape error."""
        result = verify_schema('{"layout": {"columns": 2}}')

        assert result.error.kind == "shape"
        assert result.error.message == "Schema must have a fields array"

    def test_layout_error(self):
        """Test that a malformed layout block is a shape error."""
        result = verify_schema('{"fields": [], "layout": {"columns": 0}}')

        assert result.error.kind == "shape"
        assert "columns" in result.error.message

    def test_field_error_has_path(self):
        """Test that field errors carry their dotted path."""
        text = json.dumps({
            "fields": [{
                "name": "personalInfo",
                "type": "object",
                "properties": {"age": {"name": "age", "type": "number", "min": 10, "max": 1}},
            }]
        })

        result = verify_schema(text)

        assert result.error.kind == "field"
        assert result.error.path == "personalInfo.age"
        assert "age" in result.error.message

    def test_quick_verify(self):
        """Test quick verification."""
        assert quick_verify('{"fields": []}') is True
        assert quick_verify('{"fields": [{"name": "x"}]}') is False
        assert quick_verify("not json") is False


class TestEngineError:
    """Test EngineError serialization."""

    def test_to_dict_with_path(self):
        """Test that a field error includes its path."""
        error = EngineError(kind="field", message="bad", path="a.b")

        assert error.to_dict() == {"kind": "field", "message": "bad", "path": "a.b"}

    def test_to_dict_without_path(self):
        """Test that document-level errors omit the path."""
        error = EngineError(kind="shape", message="bad")

        assert error.to_dict() == {"kind": "shape", "message": "bad"}


class TestErrorFormatting:
    """Test error formatting."""

    def test_format_no_error(self):
        """Test formatting when there is nothing to report."""
        assert format_engine_error(None) == "No errors"

    def test_format_field_error(self):
        """Test formatting a located field error."""
        error = EngineError("field", "Invalid field type for x", "x")

        assert format_engine_error(error) == "Field error at x: Invalid field type for x"

    def test_format_document_error(self):
        """Test formatting an error without a path."""
        error = EngineError("malformed", "Invalid JSON format")

        assert format_engine_error(error) == "Malformed input: Invalid JSON format"

    def test_format_with_context(self):
        """Test the multi-line formatter."""
        error = EngineError("field", "Invalid field type for x. Must be one of: string", "x")

        formatted = format_error_with_context(error)

        assert "Schema Error (field)" in formatted
        assert "Problem: Invalid field type for x" in formatted
        assert "Location: x" in formatted
        assert "Hint: Use one of: string, longtext" in formatted

    def test_suggest_fix_for_range(self):
        """Test the hint for min/max problems."""
        error = EngineError("field", "Min value cannot be greater than max value for field age", "age")

        assert "min <= defaultValue <= max" in suggest_fix(error)

    def test_suggest_fix_for_layout(self):
        """Test the hint for layout problems."""
        error = EngineError("shape", "Layout gutter must be an array of two non-negative integers")

        assert "gutter" in suggest_fix(error)

    def test_suggest_fix_for_nesting(self):
        """Test the hint for over-deep schemas."""
        error = EngineError("shape", "Schema nesting is too deep (more than 32 levels)", "o.p")

        assert "Flatten nested objects" in suggest_fix(error)

    def test_suggest_fix_unknown(self):
        """Test that unrecognized problems get no hint."""
        error = EngineError("field", "Span must be an integer between 1 and 24 for field x", "x")

        assert suggest_fix(error) == ""
