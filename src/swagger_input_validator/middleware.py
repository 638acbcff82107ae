"""Request handlers validating incoming requests against a Swagger document.

Usage::

    validator = SwaggerInputValidator(swagger, strict=True)
    check_user = validator.get("/users/{id}")   # one route
    check_all = validator.all()                 # every request

    check_user(request, response, next_)

A handler calls ``next_()`` when the request is valid. Otherwise it sets
``response.status_code`` to 400 and calls ``on_error(errors, request,
response)`` if one was configured, or ``next_(errors)`` if not.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from swagger_input_validator.errors import ConfigurationError
from swagger_input_validator.models import (
    ErrorCallback,
    RequestDescriptor,
    ValidatorConfig,
    Verdict,
)
from swagger_input_validator.schema.base import ParameterSpec, SchemaIndex
from swagger_input_validator.schema.index import compile_schema, parameters_for
from swagger_input_validator.verdict import build_verdict, resolve_verdict

logger = logging.getLogger(__name__)

BAD_REQUEST = 400


class _Handler(ABC):
    def __init__(self, config: ValidatorConfig):
        self.config = config

    @abstractmethod
    def validate(self, request: RequestDescriptor) -> Verdict:
        """Validate a request without touching the response."""

    def __call__(self, request: RequestDescriptor, response: Any, next_: Callable[..., Any]) -> Any:
        verdict = self.validate(request)
        if verdict.ok:
            return next_()

        response.status_code = BAD_REQUEST
        if self.config.on_error is not None:
            return self.config.on_error(verdict.errors, request, response)
        return next_(verdict.errors)


class RouteValidator(_Handler):
    """Validates requests of one route, resolved when the handler is built.

    Path parameters are read from ``request.path_params``, as extracted by
    the surrounding framework.
    """

    def __init__(self, config: ValidatorConfig, parameters: tuple[ParameterSpec, ...]):
        super().__init__(config)
        self.parameters = parameters

    def validate(self, request: RequestDescriptor) -> Verdict:
        return build_verdict(self.parameters, request, strict=self.config.strict)


class CatchAllValidator(_Handler):
    """Validates every request, resolving its route from the url."""

    def __init__(self, config: ValidatorConfig, index: SchemaIndex):
        super().__init__(config)
        self.index = index

    def validate(self, request: RequestDescriptor) -> Verdict:
        return resolve_verdict(self.index, request, strict=self.config.strict)


class SwaggerInputValidator:
    """Builds request handlers from a parsed Swagger document."""

    def __init__(self, swagger: Any, strict: bool = False, on_error: ErrorCallback | None = None):
        self.index = compile_schema(swagger)
        try:
            self.config = ValidatorConfig(strict=strict, on_error=on_error)
        except PydanticValidationError as e:
            raise ConfigurationError(f"Invalid validator options: {e}") from e

    def get(self, path: str) -> RouteValidator:
        return self._route("get", path)

    def post(self, path: str) -> RouteValidator:
        return self._route("post", path)

    def put(self, path: str) -> RouteValidator:
        return self._route("put", path)

    def patch(self, path: str) -> RouteValidator:
        return self._route("patch", path)

    def delete(self, path: str) -> RouteValidator:
        return self._route("delete", path)

    def head(self, path: str) -> RouteValidator:
        return self._route("head", path)

    def all(self) -> CatchAllValidator:
        return CatchAllValidator(self.config, self.index)

    def _route(self, verb: str, path: str) -> RouteValidator:
        parameters = parameters_for(self.index, verb, path)
        logger.debug("Validating %s %s against %d parameters", verb.upper(), path, len(parameters))
        return RouteValidator(self.config, parameters)
