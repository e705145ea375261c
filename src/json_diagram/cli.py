"""Command-line interface for the JSON Diagram builder."""

import logging
import click
from pathlib import Path
from typing import Optional
from .config import DiagramConfig
from .diagram_visualizer import DiagramVisualizer

KIND_CHOICES = click.Choice(["json", "xml"], case_sensitive=False)


def _detect_kind(input_file: Path, kind: Optional[str]) -> str:
    """Pick the input kind from the option or the file extension."""
    if kind:
        return kind.lower()
    return "xml" if input_file.suffix.lower() == ".xml" else "json"


@click.group()
@click.version_option(version="1.0.0")
def main():
    """JSON Diagram - Turn JSON or XML documents into node/connector graphs."""
    pass


@main.command()
@click.argument('input_file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option('--kind', '-k', type=KIND_CHOICES, help='Input format (default: from file extension)')
@click.option('--output', '-o', type=click.Path(dir_okay=False, path_type=Path), help='Output JSON file path')
@click.option('--indent', default=2, show_default=True, help='Indentation of the output JSON')
@click.option('--max-depth', default=DiagramConfig.max_depth, show_default=True,
              help='Maximum document nesting depth')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose output')
def render(input_file: Path, kind: Optional[str], output: Optional[Path], indent: int,
           max_depth: int, verbose: bool):
    """Render a document into diagram JSON (nodes and connectors)."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG)

    input_kind = _detect_kind(input_file, kind)
    visualizer = DiagramVisualizer(config=DiagramConfig(max_depth=max_depth))
    result = visualizer.render(input_file.read_text(encoding='utf-8'), input_kind)

    if not result.success:
        click.echo("❌ Render failed:", err=True)
        for error in result.errors or []:
            click.echo(f"   • {error}", err=True)
        raise SystemExit(1)

    diagram_json = result.data.to_json(indent=indent)
    if output:
        output.write_text(diagram_json, encoding='utf-8')
        click.echo(f"✅ Wrote {len(result.data.nodes)} nodes and "
                   f"{len(result.data.connectors)} connectors to {output}")
    else:
        click.echo(diagram_json)

    for warning in result.warnings or []:
        click.echo(f"⚠️  {warning}", err=True)


@main.command()
@click.argument('input_file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option('--kind', '-k', type=KIND_CHOICES, help='Input format (default: from file extension)')
def summary(input_file: Path, kind: Optional[str]):
    """Print node, connector and root counts for a document."""
    input_kind = _detect_kind(input_file, kind)
    visualizer = DiagramVisualizer(enable_profiling=False)
    result = visualizer.render(input_file.read_text(encoding='utf-8'), input_kind)

    if not result.success:
        click.echo("❌ Summary failed:", err=True)
        for error in result.errors or []:
            click.echo(f"   • {error}", err=True)
        raise SystemExit(1)

    data = result.data
    leaf_count = sum(1 for node in data.nodes if node.is_leaf)
    click.echo(f"📊 Nodes: {len(data.nodes)} ({leaf_count} leaf, {len(data.nodes) - leaf_count} container)")
    click.echo(f"🔗 Connectors: {len(data.connectors)}")
    click.echo(f"🌳 Roots: {', '.join(data.root_ids()) or 'none'}")


if __name__ == '__main__':
    main()
