"""Tests for the required attribute."""

import pytest

from cinnamon_validator import SchemaError, create_validator

TYPES = ["string", "number", "boolean", "any"]


class TestRequired:
    """Test the three required states."""

    @pytest.mark.parametrize("field_type", TYPES)
    def test_not_required(self, field_type):
        for schema in ({"type": field_type}, {"type": field_type, "required": False}):
            validator = create_validator(schema)
            assert validator.validate()[0].success
            assert validator.validate(None)[0].success

    @pytest.mark.parametrize("field_type", TYPES)
    def test_required(self, field_type):
        validator = create_validator({"type": field_type, "required": True})
        assert validator.validate()[0].message == "The value field must be set and not null."
        assert validator.validate(None)[0].message == "The value field must be set and not null."

    @pytest.mark.parametrize("field_type", TYPES)
    def test_explicit(self, field_type):
        """Test that explicit fields must be present but may be None."""
        validator = create_validator({"type": field_type, "required": "explicit"})
        assert validator.validate(None)[0].success
        assert validator.validate()[0].message == "The value field must be set."

    def test_explicit_in_object(self):
        validator = create_validator({"deletedAt": {"type": "string", "required": "explicit"}})
        assert validator.validate({"deletedAt": None})[0].success
        assert validator.validate({"deletedAt": "2024-01-01"})[0].success
        assert validator.validate({})[0].message == "The deleted at field must be set."

    def test_absent_skips_other_checks(self):
        validator = create_validator({"type": "number", "min": 10, "equals": 12})
        assert validator.validate()[0].success

    def test_falsy_values_are_present(self):
        assert create_validator({"type": "number", "required": True}).validate(0)[0].success
        assert create_validator({"type": "boolean", "required": True}).validate(False)[0].success
        assert create_validator({"type": "string", "required": True}).validate("")[0].success

    def test_invalid_required(self):
        with pytest.raises(SchemaError):
            create_validator({"type": "string", "required": "yes"}).validate("x")


class TestRequiredInNestedSchemas:
    """Test that required fields of nested schemas are enforced."""

    def make(self, required):
        return create_validator({
            "messages": [{"type": "string", "required": required}],
            "user": {"name": {"type": "string", "required": required}},
        })

    def test_nested_fields(self):
        assert self.make(False).validate({"messages": ["hi"], "user": {}})[0].success

        result, _ = self.make(True).validate({"messages": ["hi"], "user": {}})
        assert result.message == "The user > name field must be set and not null."

    def test_nested_containers_must_be_present(self):
        """Test that an empty payload fails when its containers are absent."""
        result, _ = self.make(False).validate({})
        assert result.message == "The 'messages' field is missing."

        result, _ = self.make(False).validate({"user": {}})
        assert result.message == "The 'messages' field is missing."

        result, _ = self.make(False).validate({"messages": ["hi"]})
        assert result.message == "The 'user' field is missing."

    def test_array_elements(self):
        result, _ = self.make(True).validate({"messages": ["hi", None], "user": {"name": "Sam"}})
        assert result.message == "The 2nd messages field was invalid."
