"""CLI entry point for routedoc."""

import json
import logging
from pathlib import Path

import click
import yaml

from routedoc.config import load_config
from routedoc.errors import RoutedocError
from routedoc.generator.publish import ApiInfo, build_openapi_document
from routedoc.loader import load_responses
from routedoc.parser.discover import discover_route_files
from routedoc.parser.javascript import extract_routes
from routedoc.pipeline import generate_documentation
from routedoc.schema.registry import load_registry


def _write_document(document: dict, output: Path) -> None:
    """Write JSON, or YAML when the output file asks for it."""
    output.parent.mkdir(parents=True, exist_ok=True)
    if output.suffix.lower() in (".yaml", ".yml"):
        text = yaml.safe_dump(document, sort_keys=False, allow_unicode=True)
    else:
        text = json.dumps(document, indent=2, ensure_ascii=False) + "\n"
    output.write_text(text, encoding="utf-8")


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
def main(verbose: bool):
    """routedoc: recover an OpenAPI document from Express route files."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


@main.command()
@click.argument("routes_dir", type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.option("-s", "--schemas", "schemas_path", required=True, type=click.Path(exists=True, dir_okay=False, path_type=Path), help="Schema registry (YAML or JSON).")
@click.option("-r", "--responses", "responses_path", default=None, type=click.Path(exists=True, dir_okay=False, path_type=Path), help="Response overrides (YAML or JSON).")
@click.option("-c", "--config", "config_path", default=None, envvar="ROUTEDOC_CONFIG", type=click.Path(exists=True, dir_okay=False, path_type=Path), help="Extractor config (YAML).")
@click.option("-o", "--output", required=True, type=click.Path(path_type=Path), help="Output file (.json, .yaml or .yml).")
@click.option("--paths-only", is_flag=True, help="Write only the paths object instead of a full document.")
@click.option("--title", default="API Docs", help="Document title.")
@click.option("--version", "api_version", default="1.0.0", help="API version.")
@click.option("--description", default="API Documentation", help="API description.")
@click.option("--server-url", default="http://localhost:3000", help="Server URL.")
@click.option("--strict", is_flag=True, help="Abort on the first route file that fails to parse.")
def generate(
    routes_dir: Path,
    schemas_path: Path,
    responses_path: Path | None,
    config_path: Path | None,
    output: Path,
    paths_only: bool,
    title: str,
    api_version: str,
    description: str,
    server_url: str,
    strict: bool,
):
    """Generate an OpenAPI document from the route files in ROUTES_DIR."""
    try:
        config = load_config(config_path)
        registry = load_registry(schemas_path)
        responses = load_responses(responses_path)

        click.echo(f"Scanning {routes_dir} for *{config.file_suffix} files...")
        result = generate_documentation(routes_dir, registry, responses, config, strict=strict)
    except RoutedocError as e:
        raise click.ClickException(str(e)) from e

    click.echo(f"Found {len(result.routes)} routes across {len(result.paths)} paths.")

    if paths_only:
        document = result.paths
    else:
        info = ApiInfo(title=title, version=api_version, description=description, server_url=server_url)
        document = build_openapi_document(result.paths, info)

    _write_document(document, output)
    click.echo(f"Document saved to {output}")

    if result.failures:
        click.echo(f"{len(result.failures)} route files could not be parsed:", err=True)
        for failure in result.failures:
            click.echo(f"  {failure.file_path}: {failure.error}", err=True)
        click.get_current_context().exit(1)


@main.command("list-routes")
@click.argument("routes_dir", type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.option("-c", "--config", "config_path", default=None, envvar="ROUTEDOC_CONFIG", type=click.Path(exists=True, dir_okay=False, path_type=Path), help="Extractor config (YAML).")
def list_routes(routes_dir: Path, config_path: Path | None):
    """Print the routes registered in ROUTES_DIR."""
    try:
        config = load_config(config_path)
        files = discover_route_files(routes_dir, config.file_suffix)
    except RoutedocError as e:
        raise click.ClickException(str(e)) from e

    result = extract_routes(files, config=config)
    for route in result.routes:
        click.echo(f"{route.method.upper():7} {route.path} -> {route.controller_ref} ({route.schema_ref})")
    for failure in result.failures:
        click.echo(f"ERROR   {failure.file_path}: {failure.error}", err=True)
