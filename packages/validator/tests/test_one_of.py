"""Tests for OneOf fields."""

from cinnamon_validator import create_validator


def one_of(*possible, **attributes):
    return {"type": "OneOf", "possibleSchemas": list(possible), **attributes}


class TestOneOf:
    """Test OneOf composition.

    Every possible schema is applied to the value and the first failure is
    reported.
    """

    def test_all_pass(self):
        validator = create_validator(one_of({"type": "string"}, {"type": "string", "maxLength": 3}))
        result, value = validator.validate("abc")
        assert result.success
        assert value == "abc"

    def test_first_failure_is_reported(self):
        validator = create_validator(one_of({"type": "string"}, {"type": "string", "maxLength": 3}))
        assert validator.validate("abcd")[0].message == "The value field must be at most 3 characters."
        assert validator.validate(5)[0].message == "The value field must be a string."

    def test_every_schema_must_pass(self):
        validator = create_validator(one_of(
            {"type": "string", "equals": "foo"},
            {"type": "string", "equals": "bar"},
        ))
        assert not validator.validate("foo")[0].success
        assert not validator.validate("bar")[0].success

    def test_invalid_message_overrides(self):
        validator = create_validator(one_of(
            {"type": "string", "equals": "foo"},
            {"type": "number"},
            invalidMessage="The ${fieldName} must be foo or a number.",
        ))
        assert validator.validate("bar")[0].message == "The value must be foo or a number."

    def test_no_possible_schemas(self):
        assert create_validator(one_of()).validate("anything")[0].success

    def test_object_possibility(self):
        validator = create_validator(one_of({"a": {"type": "number", "required": True}}))
        assert validator.validate({"a": 1})[0].success
        assert validator.validate("x")[0].message == "The submitted value is invalid."
        assert validator.validate({})[0].message == "The a field must be set and not null."

    def test_array_possibility(self):
        validator = create_validator(one_of([{"type": "string", "required": True}]))
        assert validator.validate(["a", "b"])[0].success
        assert validator.validate(["a", 3])[0].message == "The 2nd field was invalid."

    def test_inside_object(self):
        validator = create_validator({
            "contact": one_of({"type": "string", "required": True}, {"type": "string", "matches": "@"}),
        })
        assert validator.validate({"contact": "me@example.com"})[0].success
        assert validator.validate({"contact": "me"})[0].message == "The contact field was invalid."
        assert validator.validate({})[0].message == "The contact field must be set and not null."
