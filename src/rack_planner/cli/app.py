"""Main CLI application for rack-planner."""

from __future__ import annotations

import logging

import typer
from rich.logging import RichHandler

from rack_planner import __version__

app = typer.Typer(
    name="rack-planner",
    help="Plan rack-unit layouts: validate, place, compact and distribute devices.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

# Subcommand groups
template_app = typer.Typer(
    name="template",
    help="Browse rack templates and start racks from them.",
    no_args_is_help=True,
)
app.add_typer(template_app, name="template")


def version_callback(value: bool) -> None:
    if value:
        typer.echo(f"rack-planner {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False, "--version", "-V", help="Show version.", callback=version_callback, is_eager=True
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging."),
) -> None:
    """rack-planner: keep rack layouts free of overlaps."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(show_path=False)],
        force=True,
    )


# Import and register commands
from rack_planner.cli.import_cmd import import_devices  # noqa: E402
from rack_planner.cli.inspect_cmd import gaps, show, validate  # noqa: E402
from rack_planner.cli.place_cmd import snap, suggest  # noqa: E402
from rack_planner.cli.reorganize_cmd import compact, distribute  # noqa: E402
from rack_planner.cli.template_cmd import list_templates, new_from_template  # noqa: E402

app.command("show")(show)
app.command("validate")(validate)
app.command("gaps")(gaps)
app.command("suggest")(suggest)
app.command("snap")(snap)
app.command("compact")(compact)
app.command("distribute")(distribute)
app.command("import")(import_devices)

template_app.command("list")(list_templates)
template_app.command("new")(new_from_template)


def main() -> None:
    """Entry point for the CLI."""
    app()
