"""Read a Swagger document from a YAML or JSON file."""

from pathlib import Path

import yaml

from swagger_input_validator.errors import SchemaError

from .base import SchemaIndex
from .index import compile_schema

SCHEMA_SUFFIXES = (".yaml", ".yml", ".json")


def load_schema(file_path: Path) -> dict:
    """Load a Swagger document. YAML is a superset of JSON, so one parser reads both."""
    if file_path.suffix.lower() not in SCHEMA_SUFFIXES:
        raise SchemaError(f"Unsupported schema file type: {file_path.name}")

    try:
        text = file_path.read_text(encoding="utf-8")
    except OSError as e:
        raise SchemaError(f"Cannot read schema file {file_path}: {e}") from e

    try:
        doc = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise SchemaError(f"Cannot parse schema file {file_path}: {e}") from e

    if not isinstance(doc, dict):
        raise SchemaError(f"Schema file {file_path} does not contain an object")
    return doc


def load_index(file_path: Path) -> SchemaIndex:
    """Load and compile a Swagger document."""
    return compile_schema(load_schema(file_path))
