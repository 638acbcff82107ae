"""CLI entry point for swagger-input-validator."""

import json
import logging
from pathlib import Path

import click

from swagger_input_validator.errors import ValidatorError
from swagger_input_validator.matcher import match_path
from swagger_input_validator.models import RequestDescriptor
from swagger_input_validator.schema.base import SchemaIndex
from swagger_input_validator.schema.loader import load_index
from swagger_input_validator.verdict import resolve_verdict


def _load(schema_path: Path) -> SchemaIndex:
    try:
        return load_index(schema_path)
    except ValidatorError as e:
        raise click.ClickException(str(e)) from e


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
def main(verbose: bool):
    """Swagger Input Validator: check HTTP requests against a Swagger document."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


@main.command()
@click.argument("schema_path", type=click.Path(exists=True, path_type=Path))
def routes(schema_path: Path):
    """List the path templates of a Swagger document with their verbs."""
    index = _load(schema_path)
    for pattern in index.patterns:
        verbs = ", ".join(v.upper() for v in index.operations[pattern.template_path]) or "-"
        line = f"{index.base_path}{pattern.template_path}  [{verbs}]"
        if pattern.variable_names:
            line += f"  variables: {', '.join(pattern.variable_names)}"
        click.echo(line)
    click.echo(f"Found {len(index.patterns)} paths.")


@main.command()
@click.argument("schema_path", type=click.Path(exists=True, path_type=Path))
@click.argument("method")
@click.argument("url")
@click.option("--body", default=None, help="JSON object sent as request body.")
@click.option("--strict", is_flag=True, help="Reject parameters the schema does not declare.")
def check(schema_path: Path, method: str, url: str, body: str | None, strict: bool):
    """Validate a single request against a Swagger document."""
    index = _load(schema_path)

    body_params = None
    if body is not None:
        try:
            body_params = json.loads(body)
        except json.JSONDecodeError as e:
            raise click.BadParameter(f"not valid JSON: {e}", param_hint="--body") from e
        if not isinstance(body_params, dict):
            raise click.BadParameter("must be a JSON object", param_hint="--body")

    request = RequestDescriptor.from_url(method.upper(), url, body=body_params)
    try:
        if match_path(index, url) is None:
            click.echo("No matching route")
            return
        verdict = resolve_verdict(index, request, strict=strict)
    except ValidatorError as e:
        raise click.ClickException(str(e)) from e

    if verdict.ok:
        click.echo("OK")
        return
    for error in verdict.errors:
        click.echo(str(error))
    raise SystemExit(1)
