"""CLI entry point for api-spec-builder."""

import json
import logging
from pathlib import Path

import click
import yaml

from api_spec_builder.builder.paths import build_document
from api_spec_builder.config import DEFAULT_TITLE, DEFAULT_VERSION, Config
from api_spec_builder.errors import SpecBuilderError
from api_spec_builder.routes.loader import load_routes


def _output_format(output: Path, fmt: str) -> str:
    """Pick json or yaml, guessing from the output suffix when fmt is 'auto'."""
    if fmt != "auto":
        return fmt
    return "json" if output.suffix.lower() == ".json" else "yaml"


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Log debug details of the build.")
def main(verbose: bool):
    """API Spec Builder — generate an API description document from route manifests."""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING, format="%(levelname)s %(name)s: %(message)s")


@main.command()
@click.argument("manifests", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("-o", "--output", required=True, type=click.Path(path_type=Path), help="Output file for the document.")
@click.option("--format", "fmt", default="auto", type=click.Choice(["auto", "yaml", "json"]), help="Output format.")
@click.option("--title", default=DEFAULT_TITLE, help="Document title.")
@click.option("--api-version", default=DEFAULT_VERSION, help="Document version.")
def build(manifests: tuple[Path, ...], output: Path, fmt: str, title: str, api_version: str):
    """Build the document from one or more route manifests."""
    config = Config(title=title, version=api_version)
    try:
        registries = []
        for manifest in manifests:
            click.echo(f"Loading routes from {manifest}...")
            registry = load_routes(manifest)
            click.echo(f"Found {len(registry.routes)} routes.")
            registries.append(registry)
        document = build_document(registries, config)
    except SpecBuilderError as e:
        raise click.ClickException(str(e)) from e

    data = document.to_dict()
    if _output_format(output, fmt) == "json":
        text = json.dumps(data, indent=2) + "\n"
    else:
        text = yaml.safe_dump(data, sort_keys=False, allow_unicode=True)

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text, encoding="utf-8")
    click.echo(f"Wrote {len(document.paths)} paths to {output}")
