"""Command-line interface for the XML/JSON converter."""

import logging
import sys
import click
from pathlib import Path
from typing import Optional
from .converter import DocumentConverter
from .io import FileReader, FileWriter
from .types import ConversionError, InputFormat


FORMAT_CHOICE = click.Choice([f.value for f in InputFormat])


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s"
    )


def _read_input(input_file: Path) -> str:
    try:
        return FileReader().read_document(input_file)
    except ConversionError as e:
        click.echo(f"❌ Error: {e}", err=True)
        sys.exit(1)


@click.group()
@click.version_option(version="1.0.0")
def main():
    """XML/JSON converter - Convert documents between XML and JSON."""
    pass


@main.command()
@click.argument('input_file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option('--output', '-o', type=click.Path(dir_okay=False, path_type=Path),
              help='Write the converted document to this file instead of stdout')
@click.option('--from', 'input_format', type=FORMAT_CHOICE,
              help='Input format (default: detected from the first character)')
@click.option('--max-depth', default=256, show_default=True, help='Maximum nesting depth')
@click.option('--check', is_flag=True, help='Convert back and verify the tree is unchanged')
@click.option('--profile', is_flag=True, help='Print timing and memory figures')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose output')
def convert(input_file: Path, output: Optional[Path], input_format: Optional[str],
            max_depth: int, check: bool, profile: bool, verbose: bool):
    """Convert an XML file to JSON or a JSON file to XML."""
    _configure_logging(verbose)
    text = _read_input(input_file)
    if not text:
        click.echo("Input is empty")
        return

    converter = DocumentConverter(max_depth=max_depth, enable_profiling=profile)
    source_format = InputFormat(input_format) if input_format else None
    result = converter.convert(text, source_format)

    if not result.success:
        click.echo("❌ Conversion failed:", err=True)
        for error in result.errors or []:
            click.echo(f"   • {error}", err=True)
        sys.exit(1)

    for warning in result.warnings:
        click.echo(f"⚠️  {warning}", err=True)

    if output:
        try:
            FileWriter().write_document(output, result.output)
        except ConversionError as e:
            click.echo(f"❌ Error: {e}", err=True)
            sys.exit(1)
        click.echo(f"✅ Wrote {result.output_format.value.upper()} to {output}")
    else:
        click.echo(result.output)

    if check:
        original = converter.parse(text, result.input_format)
        back = converter.convert(result.output, result.output_format)
        if back.success and converter.parse(back.output, result.input_format) == original:
            click.echo("✅ Round trip preserved the document tree", err=True)
        else:
            click.echo("❌ Round trip changed the document tree", err=True)
            sys.exit(2)

    if profile and converter.profiler:
        click.echo(converter.profiler.export_summary(), err=True)


@main.command()
@click.argument('input_file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option('--from', 'input_format', type=FORMAT_CHOICE,
              help='Input format (default: detected from the first character)')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose output')
def inspect(input_file: Path, input_format: Optional[str], verbose: bool):
    """Print the element tree of a document with paths, values and attributes."""
    _configure_logging(verbose)
    text = _read_input(input_file)
    if not text:
        click.echo("Input is empty")
        return

    converter = DocumentConverter(enable_profiling=False)
    try:
        source_format = InputFormat(input_format) if input_format else converter.detect_format(text)
        root = converter.parse(text, source_format)
    except ConversionError as e:
        click.echo(f"❌ Error: {e}", err=True)
        sys.exit(1)

    click.echo(root.describe(), nl=False)


if __name__ == '__main__':
    main()
