"""CLI entry point for openapi-node-builder."""

import json
from pathlib import Path

import click
import yaml

from openapi_node_builder.builder import PropertiesBuilder
from openapi_node_builder.config import load_config
from openapi_node_builder.logging import configure_logging
from openapi_node_builder.parser.openapi import DocumentError, load_document
from openapi_node_builder.properties.collector import NoOperationsError


def _load(doc_path: Path) -> dict:
    try:
        return load_document(doc_path)
    except DocumentError as e:
        raise click.ClickException(str(e)) from e


@click.group()
@click.option("--log-level", default="WARNING", type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False), help="Diagnostic log level.")
def main(log_level: str):
    """OpenAPI Node Builder: compile OpenAPI documents into node properties."""
    configure_logging(log_level)


@main.command()
@click.argument("doc_path", type=click.Path(exists=True, path_type=Path))
@click.option("-o", "--output", required=True, type=click.Path(path_type=Path), help="Output file (.json, .yaml or .yml).")
@click.option("--config", "config_path", default=None, type=click.Path(exists=True, path_type=Path), help="Builder configuration YAML.")
@click.option("--notice/--no-notice", default=None, help="Prefix each operation's fields with its METHOD /path.")
@click.option("--include-deprecated", is_flag=True, help="Keep operations marked deprecated.")
def build(doc_path: Path, output: Path, config_path: Path | None, notice: bool | None, include_deprecated: bool):
    """Generate the node property list from an OpenAPI document."""
    config = load_config(config_path)
    if notice is not None:
        config.endpoint_notice = notice
    if include_deprecated:
        config.skip_deprecated = False

    click.echo(f"Parsing {doc_path}...")
    builder = PropertiesBuilder(_load(doc_path), config, url=doc_path.resolve().as_uri())
    try:
        properties = builder.to_dicts()
    except NoOperationsError as e:
        raise click.ClickException(str(e)) from e

    output.parent.mkdir(parents=True, exist_ok=True)
    if output.suffix in (".yaml", ".yml"):
        text = yaml.safe_dump(properties, sort_keys=False, allow_unicode=True)
    else:
        text = json.dumps(properties, indent=2, ensure_ascii=False)
    output.write_text(text, encoding="utf-8")

    click.echo(f"Generated {len(properties)} properties in {output}")
    if builder.failures:
        click.echo(f"Skipped {len(builder.failures)} operations that failed to parse.")


@main.command()
@click.argument("doc_path", type=click.Path(exists=True, path_type=Path))
@click.option("--include-deprecated", is_flag=True, help="Keep operations marked deprecated.")
def inspect(doc_path: Path, include_deprecated: bool):
    """List resources and their operations without writing anything."""
    config = load_config(None)
    config.skip_deprecated = not include_deprecated
    builder = PropertiesBuilder(_load(doc_path), config, url=doc_path.resolve().as_uri())
    try:
        builder.build()
    except NoOperationsError as e:
        raise click.ClickException(str(e)) from e

    for resource, options in builder.collector.options_by_resource:
        click.echo(f"{resource}:")
        for option in options:
            request = option.routing["request"]
            click.echo(f"  - {option.value} ({request['method']} {request['url'].lstrip('=')})")
    if builder.failures:
        click.echo(f"Failed operations: {len(builder.failures)}")
