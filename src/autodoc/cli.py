"""CLI entry point for autodoc."""

import json
import logging
from pathlib import Path

import click
import yaml

from autodoc.config import DocumentConfig, Settings, load_settings, parse_info, parse_servers
from autodoc.errors import AutodocError
from autodoc.extractor.project import ProjectExtractor
from autodoc.generator.diagram import render_endpoint_map
from autodoc.generator.openapi import OpenApiBuilder
from autodoc.generator.table import render_endpoint_table, render_model_table
from autodoc.ir import ParsedProject
from autodoc.parser.java import JavaSourceParser


def _extract(sources: tuple[Path, ...], settings: Settings) -> ParsedProject:
    """Parse sources and extract the project, reporting progress."""
    click.echo(f"Parsing {len(sources)} source path(s)...")
    try:
        decls = JavaSourceParser().parse_paths(list(sources))
        project = ProjectExtractor(settings.heuristics).extract(decls)
    except AutodocError as e:
        raise click.ClickException(str(e)) from e
    click.echo(f"Found {len(project.endpoints)} endpoints and {len(project.models)} models.")
    return project


def _document_config(base: DocumentConfig, info: str | None, servers: str | None) -> DocumentConfig:
    update: dict = {}
    try:
        if info:
            pairs = parse_info(info)
            update.update({k: pairs[k] for k in ("title", "version") if k in pairs})
        if servers:
            update["servers"] = parse_servers(servers)
    except AutodocError as e:
        raise click.BadParameter(str(e)) from e
    return base.model_copy(update=update)


def _write(output: Path, content: str) -> None:
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(content, encoding="utf-8")
    click.echo(f"Saved {output}")


sources_argument = click.argument(
    "sources", nargs=-1, required=True, type=click.Path(exists=True, path_type=Path),
)


@click.group()
@click.option("--config", "config_path", default=None, type=click.Path(exists=True, path_type=Path), help="YAML settings file.")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.pass_context
def main(ctx: click.Context, config_path: Path | None, verbose: bool):
    """autodoc - generate OpenAPI documents from annotated Java sources."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        ctx.obj = load_settings(config_path)
    except AutodocError as e:
        raise click.ClickException(str(e)) from e


@main.command()
@sources_argument
@click.option("-o", "--output", required=True, type=click.Path(path_type=Path), help="Output JSON file for the extracted project.")
@click.pass_obj
def extract(settings: Settings, sources: tuple[Path, ...], output: Path):
    """Extract endpoints, models and components as JSON."""
    project = _extract(sources, settings)
    _write(output, json.dumps(project.to_dict(), indent=2))


@main.command()
@sources_argument
@click.option("-o", "--output", required=True, type=click.Path(path_type=Path), help="Output file for the OpenAPI document.")
@click.option("--info", default=None, help='Document info, e.g. title="My API",version="2.1.0".')
@click.option("--servers", default=None, help='Servers, e.g. url="https://a",description="Prod";url="https://b".')
@click.option("--format", "fmt", default=None, type=click.Choice(["json", "yaml"]), help="Output format. Defaults from the output file suffix.")
@click.pass_obj
def openapi(settings: Settings, sources: tuple[Path, ...], output: Path, info: str | None, servers: str | None, fmt: str | None):
    """Generate an OpenAPI 3.0 document."""
    document_config = _document_config(settings.document, info, servers)
    project = _extract(sources, settings)
    doc = OpenApiBuilder(document_config).build(project)

    if fmt is None:
        fmt = "yaml" if output.suffix.lower() in (".yaml", ".yml") else "json"
    if fmt == "yaml":
        content = yaml.safe_dump(doc, sort_keys=False, allow_unicode=True)
    else:
        content = json.dumps(doc, indent=2)
    _write(output, content)


@main.command()
@sources_argument
@click.option("-o", "--output", required=True, type=click.Path(file_okay=False, path_type=Path), help="Output directory for the Markdown tables.")
@click.pass_obj
def tables(settings: Settings, sources: tuple[Path, ...], output: Path):
    """Write endpoint and model tables as Markdown."""
    project = _extract(sources, settings)
    _write(output / "endpoints.md", render_endpoint_table(project.endpoints))
    _write(output / "models.md", render_model_table(project.models))


@main.command()
@sources_argument
@click.option("-o", "--output", required=True, type=click.Path(path_type=Path), help="Output file for the Mermaid diagram.")
@click.pass_obj
def diagram(settings: Settings, sources: tuple[Path, ...], output: Path):
    """Write a Mermaid map of the endpoints."""
    project = _extract(sources, settings)
    _write(output, render_endpoint_map(project.endpoints))
