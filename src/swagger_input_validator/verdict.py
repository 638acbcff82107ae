"""Turn one request into a Verdict."""

import logging
from collections.abc import Sequence

from swagger_input_validator.matcher import match_path
from swagger_input_validator.models import RequestDescriptor, Verdict
from swagger_input_validator.params import collect_errors
from swagger_input_validator.schema.base import ParameterSpec, SchemaIndex
from swagger_input_validator.schema.index import has_route, parameters_for

logger = logging.getLogger(__name__)


def build_verdict(
    parameters: Sequence[ParameterSpec], request: RequestDescriptor, strict: bool = False
) -> Verdict:
    """Validate a request against parameters already resolved for its route."""
    errors = collect_errors(
        parameters,
        request.query_params,
        request.path_params,
        request.body_params,
        strict=strict,
    )
    if errors:
        logger.debug(
            "%s %s rejected: %s", request.method, request.path, "; ".join(str(e) for e in errors)
        )
    return Verdict(errors=errors)


def resolve_verdict(index: SchemaIndex, request: RequestDescriptor, strict: bool = False) -> Verdict:
    """Resolve the route of a request from its url, then validate it.

    Urls that match no template, or whose template does not declare the
    request verb, pass through with an empty verdict.
    """
    route = match_path(index, request.path)
    if route is None:
        return Verdict()

    if not has_route(index, request.method, route.template_path):
        logger.debug("No %s operation declared for %s", request.method, route.template_path)
        return Verdict()

    parameters = parameters_for(index, request.method, route.template_path)
    request = request.model_copy(update={"path_params": route.path_params})
    return build_verdict(parameters, request, strict=strict)
