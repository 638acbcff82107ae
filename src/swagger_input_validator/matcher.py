"""Resolve a concrete request url to the schema path template it belongs to."""

import logging
from urllib.parse import unquote

from pydantic import BaseModel, ConfigDict

from swagger_input_validator.errors import AmbiguousRouteError
from swagger_input_validator.schema.base import PathPattern, SchemaIndex

logger = logging.getLogger(__name__)


class RouteMatch(BaseModel):
    """The pattern a url matched and the path variables taken from it."""

    model_config = ConfigDict(frozen=True)

    pattern: PathPattern
    path_params: dict[str, str]

    @property
    def template_path(self) -> str:
        return self.pattern.template_path


def match_path(index: SchemaIndex, url: str) -> RouteMatch | None:
    """Find the single pattern matching ``url``.

    Returns None when no template matches; the url may belong to a route
    outside the schema. Raises AmbiguousRouteError when several do, since
    the schema then declares overlapping templates.
    """
    matched = [pattern for pattern in index.patterns if pattern.match(url)]

    if not matched:
        logger.debug("No schema path matches %s", url)
        return None
    if len(matched) > 1:
        raise AmbiguousRouteError(url, [p.template_path for p in matched])

    pattern = matched[0]
    return RouteMatch(pattern=pattern, path_params=extract_path_params(pattern, url))


def extract_path_params(pattern: PathPattern, url: str) -> dict[str, str]:
    """Bind each captured segment to its placeholder name, in template order."""
    match = pattern.match(url)
    if match is None:
        return {}
    return {name: unquote(value) for name, value in zip(pattern.variable_names, match.groups())}
