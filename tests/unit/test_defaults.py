"""
Unit tests for default value extraction.
"""

from datetime import datetime

import pytest
from form_guard.resolution import extract_defaults, merge_initial_values
from form_guard.schema import parse_form_schema


def _schema(*fields):
    return parse_form_schema({"fields": list(fields)})


class TestExtractDefaults:
    """Test flat initial value extraction."""

    def test_top_level_default(self):
        """Test that a top-level default is keyed by field name."""
        schema = _schema({"name": "age", "type": "number", "defaultValue": 25})

        assert extract_defaults(schema) == {"age": 25}

    def test_fields_without_defaults_are_absent(self):
        """Test that no key is emitted for fields without defaults."""
        schema = _schema({"name": "title", "type": "string"}, {"name": "n", "type": "number"})

        assert extract_defaults(schema) == {}

    def test_object_properties_are_flattened(self):
        """Test that object property defaults merge into the top level."""
        schema = _schema({
            "name": "personalInfo",
            "type": "object",
            "properties": {
                "age": {"name": "age", "type": "number", "defaultValue": 25},
                "nick": {"name": "nickname", "type": "string", "defaultValue": "Ace"},
                "bio": {"name": "bio", "type": "longtext"},
            },
        })

        values = extract_defaults(schema)

        assert values == {"age": 25, "nick": "Ace"}
        assert "personalInfo" not in values

    def test_object_own_default_not_emitted(self):
        """Test that an object's own default does not appear in the mapping."""
        schema = _schema({
            "name": "venue",
            "type": "object",
            "properties": {"city": {"name": "city", "type": "string"}},
            "defaultValue": {"city": "Porto"},
        })

        assert extract_defaults(schema) == {}

    def test_array_default_passes_through(self):
        """Test that array defaults are emitted unchanged."""
        default = [{"type": "email", "value": "a@b.c"}]
        schema = _schema({
            "name": "contacts",
            "type": "array",
            "items": {
                "name": "contact",
                "type": "object",
                "properties": {
                    "type": {"name": "type", "type": "select", "options": [{"label": "Email", "value": "email"}]},
                    "value": {"name": "value", "type": "string"},
                },
            },
            "defaultValue": default,
        })

        values = extract_defaults(schema)

        assert values == {"contacts": default}

    def test_defaults_are_copies(self):
        """Test that mutating the result does not touch the schema."""
        schema = _schema({"name": "tags", "type": "array", "items": {"name": "t", "type": "string"}, "defaultValue": ["a"]})

        values = extract_defaults(schema)
        values["tags"].append("b")

        assert schema.fields[0].default_value == ("a",)
        assert extract_defaults(schema) == {"tags": ["a"]}

    def test_date_default_converted(self):
        """Test that date defaults become datetime values."""
        schema = _schema({"name": "birthDate", "type": "date", "defaultValue": "2000-01-01"})

        assert extract_defaults(schema) == {"birthDate": datetime(2000, 1, 1)}

    def test_partial_date_uses_reference(self):
        """Test that missing components come from the reference, not the clock."""
        schema = _schema({"name": "d", "type": "date", "defaultValue": "March 2021"})

        assert extract_defaults(schema, reference=datetime(1970, 1, 1)) == {"d": datetime(2021, 3, 1)}
        assert extract_defaults(schema, reference=datetime(1999, 12, 15)) == {"d": datetime(2021, 3, 15)}

    def test_checkbox_defaults(self):
        """Test both checkbox default spellings, including false."""
        schema = _schema(
            {"name": "a", "type": "checkbox", "defaultValue": False},
            {"name": "b", "type": "checkbox", "defaultChecked": True},
            {"name": "c", "type": "checkbox"},
        )

        assert extract_defaults(schema) == {"a": False, "b": True}

    def test_json_default_kept_as_text(self):
        """Test that json defaults are not decoded."""
        schema = _schema({"name": "j", "type": "json", "defaultValue": '{"a": 1}'})

        assert extract_defaults(schema) == {"j": '{"a": 1}'}

    def test_later_field_wins_on_collision(self):
        """Test that a flattened key is overwritten by a later field of the same name."""
        schema = _schema(
            {
                "name": "info",
                "type": "object",
                "properties": {"age": {"name": "age", "type": "number", "defaultValue": 1}},
            },
            {"name": "age", "type": "number", "defaultValue": 2},
        )

        assert extract_defaults(schema) == {"age": 2}

    def test_deterministic(self):
        """Test that extraction is repeatable."""
        schema = _schema(
            {"name": "d", "type": "date", "defaultValue": "2020-02-02"},
            {"name": "s", "type": "select", "mode": "multiple", "options": [{"label": "A", "value": "a"}], "defaultValue": ["a"]},
        )

        assert extract_defaults(schema) == extract_defaults(schema)


class TestMergeInitialValues:
    """Test caller override merging."""

    def test_override_wins(self):
        """Test that caller values win key by key."""
        merged = merge_initial_values({"age": 25, "name": "John"}, {"age": 30})

        assert merged == {"age": 30, "name": "John"}

    def test_extra_keys_kept(self):
        """Test that caller keys unknown to the schema are passed through."""
        merged = merge_initial_values({"age": 25}, {"nickname": "Ace"})

        assert merged == {"age": 25, "nickname": "Ace"}

    def test_shallow_merge(self):
        """Test that nested values are replaced, not merged."""
        merged = merge_initial_values({"contacts": [{"v": 1}, {"v": 2}]}, {"contacts": []})

        assert merged == {"contacts": []}

    def test_none_overrides(self):
        """Test that no overrides yields a copy of the defaults."""
        defaults = {"age": 25}
        merged = merge_initial_values(defaults, None)

        assert merged == defaults
        assert merged is not defaults

    @pytest.mark.parametrize("overrides", [{}, {"age": None}])
    def test_inputs_not_modified(self, overrides):
        """Test that neither input mapping is mutated."""
        defaults = {"age": 25}
        snapshot = dict(overrides)

        merge_initial_values(defaults, overrides)

        assert defaults == {"age": 25}
        assert overrides == snapshot
