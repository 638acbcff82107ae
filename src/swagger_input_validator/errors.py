"""Exceptions raised by the validator.

Request-level parameter violations are never raised: they are returned as
``ValidationError`` models (see ``swagger_input_validator.models``).
"""


class ValidatorError(Exception):
    """Base class for all errors raised by swagger-input-validator."""


class ConfigurationError(ValidatorError):
    """Raised at construction time for malformed validator options."""


class SchemaError(ConfigurationError):
    """Raised when the schema document is missing or malformed."""


class RouteNotFoundError(ValidatorError):
    """Raised when a verb + path template has no entry in the schema."""

    def __init__(self, verb: str, path: str):
        self.verb = verb
        self.path = path
        super().__init__(f"There is no schema entry for the url {path} with the HTTP verb {verb}")


class AmbiguousRouteError(ValidatorError):
    """Raised when a concrete url matches more than one schema path template."""

    def __init__(self, url: str, templates: list[str]):
        self.url = url
        self.templates = templates
        super().__init__(
            f"Duplicate schema paths for the url {url}: {', '.join(templates)}"
        )
