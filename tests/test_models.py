import pytest
from pydantic import ValidationError as PydanticValidationError

from swagger_input_validator.models import (
    RequestDescriptor,
    ValidationError,
    ValidatorConfig,
    Verdict,
)
from swagger_input_validator.schema.base import ParameterSpec


class TestParameterSpec:
    def test_create_from_swagger_entry(self):
        p = ParameterSpec.model_validate({"name": "id", "in": "path", "required": True, "type": "integer"})
        assert p.name == "id"
        assert p.location == "path"
        assert p.required is True
        assert p.format is None

    def test_required_defaults_to_false(self):
        p = ParameterSpec(name="q", location="query", type="string")
        assert p.required is False

    def test_effective_type_from_body_schema(self):
        p = ParameterSpec.model_validate({"name": "user", "in": "body", "schema": {"type": "object"}})
        assert p.type is None
        assert p.effective_type == "object"

    def test_effective_type_without_declaration(self):
        p = ParameterSpec(name="user", location="body")
        assert p.effective_type is None

    def test_missing_location_rejected(self):
        with pytest.raises(PydanticValidationError):
            ParameterSpec.model_validate({"name": "id"})


class TestValidationError:
    def test_str(self):
        error = ValidationError(parameter_name="id", message="does not respect its type")
        assert str(error) == "Parameter : id does not respect its type."


class TestRequestDescriptor:
    def test_body_defaults_to_empty(self):
        req = RequestDescriptor(method="GET", path="/users", body_params=None)
        assert req.body_params == {}
        assert req.query_params == {}
        assert req.path_params == {}

    def test_from_url_parses_query(self):
        req = RequestDescriptor.from_url("GET", "/users?page=2&tag=a&tag=b&empty=")
        assert req.query_params == {"page": "2", "tag": ["a", "b"], "empty": ""}
        assert req.path == "/users?page=2&tag=a&tag=b&empty="

    def test_from_url_without_query(self):
        req = RequestDescriptor.from_url("POST", "/users", body={"name": "Ada"})
        assert req.query_params == {}
        assert req.body_params == {"name": "Ada"}

    def test_from_url_keeps_framework_path_params(self):
        req = RequestDescriptor.from_url("GET", "/users/42", path_params={"id": "42"})
        assert req.path_params == {"id": "42"}


class TestVerdict:
    def test_empty_is_ok(self):
        assert Verdict().ok is True

    def test_errors_not_ok(self):
        verdict = Verdict(errors=[ValidationError(parameter_name="id", message="not specified")])
        assert verdict.ok is False


class TestValidatorConfig:
    def test_defaults(self):
        config = ValidatorConfig()
        assert config.strict is False
        assert config.on_error is None

    def test_strict_must_be_bool(self):
        with pytest.raises(PydanticValidationError):
            ValidatorConfig(strict="yes")

    def test_on_error_must_be_callable(self):
        with pytest.raises(PydanticValidationError):
            ValidatorConfig(on_error="not a function")
