from unittest.mock import MagicMock

import pytest

from swagger_input_validator.errors import (
    AmbiguousRouteError,
    ConfigurationError,
    RouteNotFoundError,
    SchemaError,
)
from swagger_input_validator.middleware import CatchAllValidator, RouteValidator, SwaggerInputValidator, _Handler
from swagger_input_validator.models import RequestDescriptor, ValidatorConfig

USERS = {
    "paths": {
        "/users/{id}": {
            "get": {
                "parameters": [
                    {"name": "id", "in": "path", "required": True, "type": "integer"},
                ]
            }
        }
    }
}


def _request(url: str, method: str = "GET", **kwargs) -> RequestDescriptor:
    return RequestDescriptor.from_url(method, url, **kwargs)


def _call(handler, request):
    response = MagicMock()
    response.status_code = 200
    next_ = MagicMock()
    handler(request, response, next_)
    return response, next_


class TestConstruction:
    def test_missing_paths(self):
        with pytest.raises(ConfigurationError):
            SwaggerInputValidator({"swagger": "2.0"})

    def test_missing_document(self):
        with pytest.raises(SchemaError):
            SwaggerInputValidator(None)

    def test_strict_not_a_boolean(self):
        with pytest.raises(ConfigurationError):
            SwaggerInputValidator(USERS, strict="yes")

    def test_on_error_not_callable(self):
        with pytest.raises(ConfigurationError):
            SwaggerInputValidator(USERS, on_error=42)

    def test_route_not_in_schema(self):
        validator = SwaggerInputValidator(USERS)
        with pytest.raises(RouteNotFoundError):
            validator.post("/users/{id}")

    def test_base_handler_is_abstract(self):
        with pytest.raises(TypeError):
            _Handler(ValidatorConfig())

    def test_handler_types(self):
        validator = SwaggerInputValidator(USERS)
        assert isinstance(validator.get("/users/:id"), RouteValidator)
        assert isinstance(validator.all(), CatchAllValidator)

    @pytest.mark.parametrize("verb", ["get", "post", "put", "patch", "delete", "head"])
    def test_every_verb_bound(self, verb):
        doc = {"paths": {"/items": {verb: {"parameters": [{"name": "q", "in": "query", "type": "string"}]}}}}
        handler = getattr(SwaggerInputValidator(doc), verb)("/items")
        assert [p.name for p in handler.parameters] == ["q"]


class TestCatchAll:
    def test_valid_request_proceeds(self):
        handler = SwaggerInputValidator(USERS).all()
        response, next_ = _call(handler, _request("/users/42"))
        next_.assert_called_once_with()
        assert response.status_code == 200

    def test_wrong_type_forwarded_to_next(self):
        handler = SwaggerInputValidator(USERS).all()
        response, next_ = _call(handler, _request("/users/abc"))
        assert response.status_code == 400
        (errors,), _ = next_.call_args
        assert [(e.parameter_name, e.message) for e in errors] == [("id", "does not respect its type")]

    def test_strict_extra_parameter(self):
        handler = SwaggerInputValidator(USERS, strict=True).all()
        verdict = handler.validate(_request("/users/42?extra=1"))
        assert [(e.parameter_name, e.message) for e in verdict.errors] == [("extra", "should not be specified")]

    def test_unmatched_path_passes_through(self):
        handler = SwaggerInputValidator(USERS, strict=True).all()
        response, next_ = _call(handler, _request("/orders/1?x=1"))
        next_.assert_called_once_with()
        assert response.status_code == 200

    def test_undeclared_verb_passes_through(self):
        handler = SwaggerInputValidator(USERS).all()
        assert handler.validate(_request("/users/abc", method="DELETE")).ok is True

    def test_ambiguous_templates_raise(self):
        doc = {"paths": {"/users/{id}": {"get": {}}, "/users/{name}": {"get": {}}}}
        handler = SwaggerInputValidator(doc).all()
        with pytest.raises(AmbiguousRouteError):
            handler.validate(_request("/users/42"))

    def test_path_params_come_from_url(self):
        handler = SwaggerInputValidator(USERS).all()
        verdict = handler.validate(_request("/users/abc", path_params={"id": "42"}))
        assert verdict.ok is False

    def test_idempotent(self):
        handler = SwaggerInputValidator(USERS, strict=True).all()
        request = _request("/users/abc?extra=1")
        first = handler.validate(request)
        second = handler.validate(request)
        assert first == second
        assert len(first.errors) == 2
        assert request.path_params == {}


class TestRouteScoped:
    def test_uses_framework_path_params(self):
        handler = SwaggerInputValidator(USERS).get("/users/:id")
        assert handler.validate(_request("/users/42", path_params={"id": "42"})).ok is True

    def test_missing_path_param(self):
        handler = SwaggerInputValidator(USERS).get("/users/{id}")
        verdict = handler.validate(_request("/users/42"))
        assert [(e.parameter_name, e.message) for e in verdict.errors] == [("id", "not specified")]

    def test_body_missing_treated_as_empty(self):
        doc = {"paths": {"/users": {"post": {"parameters": [{"name": "name", "in": "body", "required": True, "type": "string"}]}}}}
        handler = SwaggerInputValidator(doc).post("/users")
        verdict = handler.validate(RequestDescriptor(method="POST", path="/users", body_params=None))
        assert [(e.parameter_name, e.message) for e in verdict.errors] == [("name", "not specified")]


class TestOnError:
    def test_callback_receives_errors_request_and_response(self):
        on_error = MagicMock()
        handler = SwaggerInputValidator(USERS, on_error=on_error).all()
        request = _request("/users/abc")
        response, next_ = _call(handler, request)

        next_.assert_not_called()
        assert response.status_code == 400
        errors, called_request, called_response = on_error.call_args.args
        assert errors[0].parameter_name == "id"
        assert called_request is request
        assert called_response is response

    def test_callback_not_called_for_valid_request(self):
        on_error = MagicMock()
        handler = SwaggerInputValidator(USERS, on_error=on_error).get("/users/{id}")
        _, next_ = _call(handler, _request("/users/42", path_params={"id": "42"}))
        on_error.assert_not_called()
        next_.assert_called_once_with()
