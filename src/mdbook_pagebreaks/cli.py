"""Command-line interface for mdbook-pagebreaks.

mdBook talks to preprocessors over stdin/stdout, so everything meant for a
human goes to stderr.
"""

import sys
from pathlib import Path

import click

from . import __version__
from .css import generate_css
from .preprocessor import (
    MDBOOK_VERSION,
    PageBreaks,
    parse_input,
    version_matches,
    write_output,
)
from .replacer import count_page_breaks


@click.group(invoke_without_command=True)
@click.version_option(version=__version__)
@click.pass_context
def cli(ctx: click.Context) -> None:
    """mdBook preprocessor which turns {{---}} lines into page breaks.

    Without a subcommand, reads the book from stdin and writes the processed
    book to stdout, as mdBook expects.
    """
    if ctx.invoked_subcommand is None:
        try:
            run_preprocessor()
        except Exception as e:
            click.echo(f"Error: {e}", err=True)
            sys.exit(1)


def run_preprocessor() -> None:
    """Process the book mdBook pipes in on stdin."""
    preprocessor = PageBreaks()
    ctx, book = parse_input(sys.stdin)

    if not version_matches(ctx.mdbook_version):
        click.echo(
            f"Warning: The {preprocessor.name} plugin was built against version "
            f"{MDBOOK_VERSION} of mdbook, but we're being called from version "
            f"{ctx.mdbook_version}",
            err=True,
        )

    markers = sum(count_page_breaks(ch.content) for ch in book.iter_chapters())
    processed = preprocessor.run(ctx, book)
    write_output(processed, sys.stdout)

    action = "Rendered" if ctx.renderer == "html" else "Removed"
    noun = "page break" if markers == 1 else "page breaks"
    click.echo(f"✓ {action} {markers} {noun} for renderer '{ctx.renderer}'", err=True)


@cli.command()
@click.argument("renderer")
def supports(renderer: str) -> None:
    """Check whether RENDERER is supported (exit status 0 if so).

    \b
    Examples:
        mdbook-pagebreaks supports html
        mdbook-pagebreaks supports pdf
    """
    supported = PageBreaks().supports_renderer(renderer)
    click.echo(
        f"Handling supports for renderer {renderer}: {str(supported).lower()}",
        err=True,
    )
    sys.exit(0 if supported else 1)


@cli.command()
@click.option(
    "--output-dir",
    "-o",
    type=click.Path(file_okay=False, path_type=Path),
    default=Path("."),
    help="Directory to write the stylesheet into (default: current directory)",
)
def init(output_dir: Path) -> None:
    """Generate the CSS file needed to style page breaks.

    \b
    Examples:
        mdbook-pagebreaks init
        mdbook-pagebreaks init -o theme
    """
    try:
        css_path = generate_css(output_dir)
    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo(f"✓ Generated {css_path}", err=True)
    click.echo("  Add it to output.html.additional-css in book.toml", err=True)


if __name__ == "__main__":
    cli()
