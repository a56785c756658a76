"""
End-to-end test: user profile form with carded objects and an object array.

Runs the profile fixture through the whole engine and checks the resolved
tree and initial values a renderer would receive.
"""

import json
from datetime import datetime
from pathlib import Path

import pytest
from form_guard import SchemaEngine
from form_guard.resolution import RuleKind
from form_guard.schema import thaw


FIXTURES_DIR = Path(__file__).parent.parent / "fixtures" / "schemas"
PROFILE_TEXT = (FIXTURES_DIR / "profile.json").read_text(encoding="utf-8")
INVALID_CONTACTS_TEXT = (FIXTURES_DIR / "invalid_contacts.json").read_text(encoding="utf-8")


@pytest.mark.e2e
class TestProfileForm:
    """Test resolution of the profile form."""

    @pytest.fixture(scope="class")
    def result(self):
        return SchemaEngine().resolve(PROFILE_TEXT)

    def test_is_valid(self, result):
        """Test that the profile schema verifies."""
        assert result.is_valid
        assert [f.name for f in result.tree] == [
            "personalInfo", "contactMethods", "photos", "subscribe", "interests",
        ]

    def test_initial_values(self, result):
        """Test the flattened initial values."""
        assert result.initial_values == {
            "name": "John Doe",
            "age": 25,
            "birthDate": datetime(2000, 1, 1),
            "gender": "male",
            "contactMethods": [
                {"type": "email", "value": "john@example.com", "preferred": True},
                {"type": "phone", "value": "+1 (234) 567-8900", "preferred": False},
            ],
            "subscribe": True,
            "interests": ["sports", "music"],
        }

    def test_personal_info_card(self, result):
        """Test the carded object and its property spans."""
        info = result.find("personalInfo")

        assert info.card.title == "Basic Information"
        assert info.card.bordered is True
        assert info.span == 24
        assert [child.path for child in info.children] == [
            "personalInfo.name", "personalInfo.age", "personalInfo.birthDate", "personalInfo.gender",
        ]
        assert all(child.span == 12 for child in info.children)

    def test_authored_rules_win(self, result):
        """Test that explicit rules replace generated ones."""
        age = result.find("personalInfo.age")
        birth_date = result.find("personalInfo.birthDate")

        assert [rule.kind for rule in age.rules] == [RuleKind.CUSTOM, RuleKind.CUSTOM]
        assert age.rules[1].to_dict()["message"] == "Age must be between 0 and 150"
        assert [rule.kind for rule in birth_date.rules] == [RuleKind.CUSTOM]

    def test_property_initial_values(self, result):
        """Test that properties bind to their flattened keys."""
        assert result.find("personalInfo.age").initial_value == 25
        assert result.find("personalInfo.gender").initial_value == "male"
        assert [o.value for o in result.find("personalInfo.gender").options] == ["male", "female", "other"]

    def test_contact_methods_item(self, result):
        """Test the array item descriptor and its property spans."""
        methods = result.find("contactMethods")
        item = methods.children[0]

        assert thaw(methods.initial_value) == result.initial_values["contactMethods"]
        assert item.path == "contactMethods.items"
        assert item.value_path == "contactMethods[]"
        assert {child.name: child.span for child in item.children} == {"type": 12, "value": 12, "preferred": 8}
        assert result.find("contactMethods.items.type").value_path == "contactMethods[].type"
        assert not any(child.has_initial_value for child in item.children)

    def test_generated_required_rule(self, result):
        """Test the generated required rule inside array items."""
        value = result.find("contactMethods.items.value")

        assert value.rules[0].kind == RuleKind.REQUIRED
        assert value.rules[0].message == "Please input Value"
        assert result.find("contactMethods.items.preferred").rules == ()

    def test_widgets(self, result):
        """Test value props and full-width fields."""
        assert result.find("photos").value_prop == "fileList"
        assert result.find("subscribe").value_prop == "checked"
        assert result.find("interests").newline is True
        assert result.find("interests").span == 24

    def test_serialized(self, result):
        """Test that the serialized result is JSON-compatible."""
        data = json.loads(json.dumps(result.to_dict()))

        assert data["initialValues"]["birthDate"] == "2000-01-01T00:00:00"
        assert data["fields"][0]["card"]["title"] == "Basic Information"

    def test_caller_overrides(self):
        """Test that caller values replace flattened defaults."""
        result = SchemaEngine().resolve(PROFILE_TEXT, {"age": 40, "contactMethods": []})

        assert result.initial_values["age"] == 40
        assert result.initial_values["contactMethods"] == []
        assert result.initial_values["name"] == "John Doe"
        assert result.find("personalInfo.age").initial_value == 40


@pytest.mark.e2e
def test_invalid_contacts_rejected():
    """Test that a bad element in an array default is located in the array."""
    result = SchemaEngine().resolve(INVALID_CONTACTS_TEXT)

    assert not result.is_valid
    assert result.error.kind == "field"
    assert result.error.path == "contacts.defaultValue[1].value"
    assert result.tree == ()
