"""Check request parameters against the parameters declared for a route."""

from collections.abc import Sequence
from typing import Any

from swagger_input_validator.models import NOT_DECLARED, NOT_SPECIFIED, WRONG_TYPE, ValidationError
from swagger_input_validator.schema.base import ParameterSpec
from swagger_input_validator.type_checker import is_respecting_type

BODY_LOCATIONS = ("body", "formData")


def collect_errors(
    parameters: Sequence[ParameterSpec],
    query_params: dict[str, Any],
    path_params: dict[str, Any],
    body_params: dict[str, Any],
    strict: bool = False,
) -> list[ValidationError]:
    """Return every parameter of the request that does not respect the schema.

    Declared parameters are checked first, in declaration order: required
    ones must be present and present ones must respect their type. With
    ``strict``, request parameters the schema does not declare are reported
    afterwards, for the query, path and body maps in that order.
    """
    sources = {
        "query": query_params,
        "path": path_params,
        "body": body_params,
        "formData": body_params,
    }

    errors = []
    for spec in parameters:
        source = sources.get(spec.location)
        if source is None:
            # header / cookie parameters are not part of the request descriptor
            continue
        value = source.get(spec.name)
        if value is None:
            if spec.required:
                errors.append(ValidationError(parameter_name=spec.name, message=NOT_SPECIFIED))
        elif not is_respecting_type(value, spec):
            errors.append(ValidationError(parameter_name=spec.name, message=WRONG_TYPE))

    if strict:
        errors.extend(_undeclared(parameters, query_params, ("query",)))
        errors.extend(_undeclared(parameters, path_params, ("path",)))
        errors.extend(_undeclared(parameters, body_params, BODY_LOCATIONS))

    return errors


def _undeclared(
    parameters: Sequence[ParameterSpec], source: dict[str, Any], locations: tuple[str, ...]
) -> list[ValidationError]:
    declared = {spec.name for spec in parameters if spec.location in locations}
    return [
        ValidationError(parameter_name=name, message=NOT_DECLARED)
        for name in source
        if name not in declared
    ]
