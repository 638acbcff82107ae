"""Per-request models: the request descriptor, errors, verdicts and options."""

from collections.abc import Callable
from typing import Any
from urllib.parse import parse_qs, urlsplit

from pydantic import BaseModel, ConfigDict, Field, field_validator

NOT_SPECIFIED = "not specified"
WRONG_TYPE = "does not respect its type"
NOT_DECLARED = "should not be specified"


class ValidationError(BaseModel):
    """One parameter that does not respect the schema."""

    model_config = ConfigDict(frozen=True)

    parameter_name: str
    message: str

    def __str__(self) -> str:
        return f"Parameter : {self.parameter_name} {self.message}."


class RequestDescriptor(BaseModel):
    """The parts of an HTTP request the validator looks at."""

    method: str
    path: str  # raw url, query string included
    query_params: dict[str, Any] = Field(default_factory=dict)
    path_params: dict[str, str] = Field(default_factory=dict)
    body_params: dict[str, Any] = Field(default_factory=dict)

    @field_validator("body_params", mode="before")
    @classmethod
    def _empty_body(cls, value: Any) -> Any:
        # GET requests carry no body
        return {} if value is None else value

    @classmethod
    def from_url(
        cls,
        method: str,
        url: str,
        body: dict[str, Any] | None = None,
        path_params: dict[str, str] | None = None,
    ) -> "RequestDescriptor":
        """Build a descriptor from a raw url, parsing its query string."""
        query: dict[str, Any] = {}
        for key, values in parse_qs(urlsplit(url).query, keep_blank_values=True).items():
            query[key] = values[0] if len(values) == 1 else values
        return cls(
            method=method,
            path=url,
            query_params=query,
            path_params=path_params or {},
            body_params=body,
        )


class Verdict(BaseModel):
    """Outcome of validating one request."""

    errors: list[ValidationError] = []

    @property
    def ok(self) -> bool:
        return not self.errors


ErrorCallback = Callable[[list[ValidationError], Any, Any], Any]


class ValidatorConfig(BaseModel):
    """Options set once when the validator is built."""

    model_config = ConfigDict(frozen=True)

    strict: bool = False
    on_error: ErrorCallback | None = None

    @field_validator("strict", mode="before")
    @classmethod
    def _strict_is_bool(cls, value: Any) -> Any:
        if not isinstance(value, bool):
            raise ValueError("The option strict is not a boolean")
        return value
