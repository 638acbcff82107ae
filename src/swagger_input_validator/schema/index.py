"""Compile a Swagger document into a SchemaIndex.

Each path template becomes a PathPattern whose regex recognizes concrete
urls. ``{name}`` placeholders turn into single-segment capture groups and
their names are recorded in template order so captured values can be bound
back to them positionally.
"""

import logging
import re
from typing import Any

from pydantic import ValidationError

from swagger_input_validator.errors import RouteNotFoundError, SchemaError

from .base import HTTP_VERBS, ParameterSpec, PathPattern, SchemaIndex

logger = logging.getLogger(__name__)

PLACEHOLDER_RE = re.compile(r"\{(\w+)\}")
COLON_PLACEHOLDER_RE = re.compile(r":(\w+)")

SEGMENT_CAPTURE = r"([^/?#]+)"
# Optional trailing slash, optional query string, then end of url.
URL_SUFFIX = r"/?(?:\?.*)?\Z"


def compile_schema(document: Any) -> SchemaIndex:
    """Compile a parsed Swagger document into an immutable SchemaIndex."""
    if not document or not isinstance(document, dict):
        raise SchemaError("Please provide a Swagger document as a JSON object")

    paths = document.get("paths")
    if paths is None:
        raise SchemaError("The Swagger document does not contain any paths specification")
    if not isinstance(paths, dict):
        raise SchemaError("The paths entry of the Swagger document is not an object")

    base_path = document.get("basePath") or ""
    if not isinstance(base_path, str):
        raise SchemaError("The basePath entry of the Swagger document is not a string")
    base_path = base_path.rstrip("/")

    patterns = []
    operations: dict[str, dict[str, tuple[ParameterSpec, ...]]] = {}
    for template, path_item in paths.items():
        if not isinstance(path_item, dict):
            raise SchemaError(f"The path {template} is not an object")
        patterns.append(_compile_pattern(template, base_path))
        operations[template] = _compile_operations(template, path_item, document)

    logger.debug("Compiled %d path patterns (basePath=%r)", len(patterns), base_path)
    return SchemaIndex(base_path=base_path, patterns=tuple(patterns), operations=operations)


def parameters_for(index: SchemaIndex, verb: str, path: str) -> tuple[ParameterSpec, ...]:
    """Return the parameters declared for a route.

    ``path`` may use ``:name`` placeholders instead of ``{name}``.
    Raises RouteNotFoundError if the schema has no such route.
    """
    template = normalize_template(path)
    verb = verb.lower()
    try:
        return index.operations[template][verb]
    except KeyError:
        raise RouteNotFoundError(verb, template) from None


def has_route(index: SchemaIndex, verb: str, path: str) -> bool:
    return verb.lower() in index.operations.get(normalize_template(path), {})


def normalize_template(path: str) -> str:
    """Rewrite ``/users/:id`` into ``/users/{id}``."""
    return COLON_PLACEHOLDER_RE.sub(r"{\1}", path)


def _compile_pattern(template: str, base_path: str) -> PathPattern:
    variable_names = []
    parts = []
    position = 0
    # The trailing slash is optional in URL_SUFFIX already.
    literal = template.rstrip("/")
    for match in PLACEHOLDER_RE.finditer(literal):
        parts.append(re.escape(literal[position:match.start()]))
        parts.append(SEGMENT_CAPTURE)
        variable_names.append(match.group(1))
        position = match.end()
    parts.append(re.escape(literal[position:]))

    expression = "".join(parts)
    regex = re.compile("^" + re.escape(base_path) + expression + URL_SUFFIX, re.IGNORECASE)
    return PathPattern(
        template_path=template,
        match_expression=expression,
        variable_names=tuple(variable_names),
        regex=regex,
    )


def _compile_operations(
    template: str, path_item: dict, document: dict
) -> dict[str, tuple[ParameterSpec, ...]]:
    shared = _parse_parameters(path_item.get("parameters") or [], template, document)

    result = {}
    for verb, operation in path_item.items():
        if verb.lower() not in HTTP_VERBS:
            continue
        operation = operation or {}
        if not isinstance(operation, dict):
            raise SchemaError(f"The {verb} operation of {template} is not an object")
        own = _parse_parameters(operation.get("parameters") or [], template, document)
        # Operation parameters override path-level ones with the same name and location.
        own_keys = {(p.name, p.location) for p in own}
        merged = [p for p in shared if (p.name, p.location) not in own_keys] + own
        result[verb.lower()] = tuple(merged)
    return result


def _parse_parameters(params: list, template: str, document: dict) -> list[ParameterSpec]:
    if not isinstance(params, list):
        raise SchemaError(f"The parameters of {template} are not a list")

    result = []
    for p in params:
        if isinstance(p, dict) and "$ref" in p:
            p = _resolve_ref(p["$ref"], template, document)
        try:
            result.append(ParameterSpec.model_validate(p))
        except ValidationError as e:
            raise SchemaError(f"Invalid parameter declared for {template}: {e}") from e
    return result


def _resolve_ref(ref: str, template: str, document: dict) -> Any:
    prefix = "#/parameters/"
    if not ref.startswith(prefix):
        raise SchemaError(f"Unsupported parameter reference {ref} in {template}")
    name = ref[len(prefix):]
    try:
        return document["parameters"][name]
    except (KeyError, TypeError):
        raise SchemaError(f"Unresolved parameter reference {ref} in {template}") from None
