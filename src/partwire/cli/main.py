"""Main CLI entry point."""

import logging
from typing import Optional, Tuple

import rich_click as click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from partwire import __version__
from partwire.compiler.exceptions import TemplateSyntaxError
from partwire.runtime.engine import TemplateEngine
from partwire.runtime.parts import PartType
from partwire.runtime.processor import values_processor

console = Console()

click.rich_click.USE_RICH_MARKUP = True
click.rich_click.STYLE_HELPTEXT_FIRST = True
click.rich_click.STYLE_COMMANDS_TABLE_SHOW_LINES = False
click.rich_click.STYLE_COMMANDS_TABLE_BOX = None
click.rich_click.STYLE_OPTIONS_TABLE_BOX = None
click.rich_click.SHOW_ARGUMENTS = True
click.rich_click.GROUP_ARGUMENTS_OPTIONS = True
click.rich_click.STYLE_ERRORS_SUGGESTION = "magenta italic"
click.rich_click.ERRORS_SUGGESTION = "Try running 'partwire --help' for more information."

# Cyan theme
click.rich_click.STYLE_HEADER_TEXT = "bold cyan"
click.rich_click.STYLE_OPTION = "cyan"
click.rich_click.STYLE_SWITCH = "cyan"
click.rich_click.STYLE_METAVAR = "dim white"
click.rich_click.STYLE_USAGE_COMMAND = "cyan"
click.rich_click.STYLE_USAGE = "dim"


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False, markup=False)],
    )


def _compile(fragments: Tuple[str, ...], svg: Optional[bool], verbose: bool):
    _configure_logging(verbose)
    engine = TemplateEngine(debug=verbose)
    try:
        return engine.compile(fragments, svg=svg)
    except TemplateSyntaxError as e:
        raise click.ClickException(str(e))


@click.group(
    help=f"""
[bold white on cyan] partwire [/] [bold cyan]v{__version__}[/] Compile markup templates into live parts.

Pass the literal fragments of a template as separate arguments, each
argument boundary being a placeholder:

[bold cyan]partwire inspect '<p class="' '">' '</p>'[/]
"""
)
@click.version_option(__version__)
def cli() -> None:
    pass


@cli.command()
@click.argument("fragments", nargs=-1, required=True)
@click.option("--svg/--html", "svg", default=None, help="Force the namespace mode")
@click.option("--verbose", is_flag=True, help="Log compilation details")
def inspect(fragments: Tuple[str, ...], svg: Optional[bool], verbose: bool) -> None:
    """Show the scanned markup and the parts of a template."""
    template = _compile(fragments, svg, verbose)
    instance = template.instantiate()

    console.print(f"Mode: [bold cyan]{'svg' if template.svg else 'html'}[/]")
    console.print("Scanned markup:", style="bold")
    console.print(template.markup, markup=False, highlight=False)

    table = Table(title=f"{len(instance.parts)} parts", title_justify="left")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Type", style="cyan")
    table.add_column("Element")
    table.add_column("Attribute")
    for index, part in instance.parts.entries():
        if part.part_type is PartType.ATTRIBUTE_PART:
            table.add_row(str(index), "attribute", part.element.name, part.attribute_name)
        elif part.part_type is PartType.ELEMENT_PART:
            table.add_row(str(index), "element", part.element.name, "")
        else:
            parent = part.parent
            # The top-level fragment has no element name of its own
            owner = "(root)" if parent is instance.fragment else parent.name
            table.add_row(str(index), "nodes", owner, "")
    console.print(table)


@cli.command()
@click.argument("fragments", nargs=-1, required=True)
@click.option(
    "--value",
    "-v",
    "values",
    multiple=True,
    help="Value for the next placeholder (repeat once per placeholder)",
)
@click.option("--svg/--html", "svg", default=None, help="Force the namespace mode")
@click.option("--verbose", is_flag=True, help="Log compilation details")
def render(
    fragments: Tuple[str, ...],
    values: Tuple[str, ...],
    svg: Optional[bool],
    verbose: bool,
) -> None:
    """Render a template with string values."""
    template = _compile(fragments, svg, verbose)
    if len(values) > template.placeholder_count:
        raise click.BadParameter(
            f"Got {len(values)} values for {template.placeholder_count} placeholders",
            param_hint="--value",
        )

    instance = template.instantiate(values_processor, list(values))
    click.echo(instance.render())


if __name__ == "__main__":
    cli()
