"""Data models for a compiled Swagger schema.

The schema document is read once and turned into these frozen models, which
are then shared read-only by every request.
"""

import re
from collections.abc import Mapping
from types import MappingProxyType

from pydantic import BaseModel, ConfigDict, Field, field_validator

HTTP_VERBS = ("get", "put", "post", "delete", "options", "head", "patch")


class ParameterSpec(BaseModel):
    """A single declared operation parameter."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    location: str = Field(alias="in")  # query / path / body / formData / header / cookie
    required: bool = False
    type: str | None = None  # string / number / integer / boolean / array / object
    format: str | None = None  # float / double / int32 ...
    schema_: dict | None = Field(default=None, alias="schema")

    @property
    def effective_type(self) -> str | None:
        """Declared type, falling back to the top-level type of a body schema."""
        if self.type is not None:
            return self.type
        if self.schema_:
            return self.schema_.get("type")
        return None


class PathPattern(BaseModel):
    """A path template compiled into a matcher."""

    model_config = ConfigDict(frozen=True)

    template_path: str  # /users/{id}
    match_expression: str  # /users/([^/?#]+)
    variable_names: tuple[str, ...]  # ("id",)
    regex: re.Pattern

    def match(self, url: str) -> re.Match | None:
        return self.regex.match(url)


class SchemaIndex(BaseModel):
    """The compiled schema: path patterns plus per-route parameter specs."""

    model_config = ConfigDict(frozen=True)

    base_path: str = ""
    patterns: tuple[PathPattern, ...] = ()
    # {template_path: {verb: (ParameterSpec, ...)}}, read-only once compiled
    operations: Mapping[str, Mapping[str, tuple[ParameterSpec, ...]]] = Field(
        default_factory=dict, validate_default=True
    )

    @field_validator("operations", mode="after")
    @classmethod
    def _read_only(cls, value: Mapping) -> Mapping:
        return MappingProxyType({template: MappingProxyType(dict(verbs)) for template, verbs in value.items()})
