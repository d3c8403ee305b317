"""Tests for object validation, paths and validator behavior."""

import copy
from concurrent.futures import ThreadPoolExecutor

import pytest

from cinnamon_validator import SchemaKind, Validator, ValidatorOptions, create_validator


class TestObjects:
    """Test object schemas."""

    user_schema = {
        "user": {
            "name": {"type": "string", "required": True},
            "age": {"type": "number", "integer": True, "min": 0},
        },
    }

    def test_valid(self):
        payload = {"user": {"name": "Sam", "age": 30}}
        result, value = create_validator(self.user_schema).validate(payload)
        assert result.success
        assert value is payload

    def test_nested_path_in_message(self):
        result, value = create_validator(self.user_schema).validate({"user": {}})
        assert result.message == "The user > name field must be set and not null."
        assert value is None

    def test_deep_path(self):
        schema = {"account": {"billingAddress": {"postCode": {"type": "string", "required": True}}}}
        result, _ = create_validator(schema).validate({"account": {"billingAddress": {}}})
        assert result.message == "The account > billing address > post code field must be set and not null."

    def test_missing_nested_object(self):
        """Test that nested objects must be present even with no required fields."""
        result, _ = create_validator(self.user_schema).validate({})
        assert result.message == "The 'user' field is missing."

        result, _ = create_validator(self.user_schema).validate({"user": "Sam"})
        assert result.message == "The 'user' field is missing."

    @pytest.mark.parametrize("value", [None, "{;}", 3, [], True])
    def test_root_not_an_object(self, value):
        result, returned = create_validator(self.user_schema).validate(value)
        assert result.message == "The submitted value is invalid."
        assert returned is None

    def test_root_missing(self):
        result, _ = create_validator(self.user_schema).validate()
        assert result.message == "The submitted value is invalid."

    def test_empty_object_schema(self):
        validator = create_validator({})
        assert validator.validate({"anything": 1})[0].success
        assert not validator.validate("text")[0].success

    def test_extra_keys_are_ignored(self):
        payload = {"user": {"name": "Sam", "nickname": "S"}, "extra": [1, 2]}
        assert create_validator(self.user_schema).validate(payload)[0].success

    def test_first_failure_in_schema_order(self):
        """Test that keys are checked in the order the schema declares them."""
        first = {"a": {"type": "string", "required": True}, "b": {"type": "string", "required": True}}
        second = {"b": {"type": "string", "required": True}, "a": {"type": "string", "required": True}}

        assert create_validator(first).validate({})[0].message == "The a field must be set and not null."
        assert create_validator(second).validate({})[0].message == "The b field must be set and not null."


class TestValidator:
    """Test Validator construction and guarantees."""

    def test_kind(self):
        assert create_validator({"type": "string"}).kind is SchemaKind.FIELD
        assert create_validator({"type": "string"}).is_single_field_schema
        assert create_validator({"a": {"type": "string"}}).kind is SchemaKind.OBJECT
        assert create_validator([]).kind is SchemaKind.ARRAY
        assert not create_validator([]).is_single_field_schema

    def test_options(self):
        assert create_validator({}).options == ValidatorOptions()
        assert Validator({}, {"strict_arrays": True}).options.strict_arrays is True
        assert Validator({}, ValidatorOptions(max_depth=3)).options.max_depth == 3

    def test_is_valid(self, signup_validator):
        assert signup_validator.is_valid({
            "username": "sam", "password": "Passw0rd!", "confirmPassword": "Passw0rd!",
        })
        assert not signup_validator.is_valid({})

    def test_inputs_are_not_modified(self):
        schema = {"tags": [{"type": "string"}], "name": {"type": "string", "equals": ["a", "b"]}}
        payload = {"tags": '["x", "y"]', "name": "a"}
        schema_copy = copy.deepcopy(schema)
        payload_copy = copy.deepcopy(payload)

        validator = create_validator(schema)
        validator.validate(payload)
        validator.validate(payload)

        assert schema == schema_copy
        assert payload == payload_copy

    def test_deterministic(self, signup_validator):
        payload = {"username": "s", "password": "x", "confirmPassword": "y"}
        results = [signup_validator.validate(payload)[0] for _ in range(5)]
        assert all(result == results[0] for result in results)
        assert results[0].message == "The username field must be at least 2 characters and at most 32 characters."

    def test_shared_between_threads(self, signup_validator):
        good = {"username": "sam", "password": "Passw0rd!", "confirmPassword": "Passw0rd!"}
        bad = {"username": "sam", "password": "Passw0rd!", "confirmPassword": "nope"}
        payloads = [good, bad] * 50

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(lambda p: signup_validator.validate(p)[0].success, payloads))

        assert results == [True, False] * 50
