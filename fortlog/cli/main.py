"""Main entry point for the fortlog command line interface."""

from __future__ import annotations

import sys

import typer
from rich.box import SIMPLE
from rich.console import Console
from rich.table import Table

from fortlog.core.attributes import attr, text
from fortlog.core.config.env import env_help
from fortlog.core.exceptions import InvalidLevelError
from fortlog.core.levels import LEVEL_TO_JSON, LEVEL_TO_STR, LEVEL_TO_TEXT, Level, validate_level
from fortlog.core.logging import (
    critf,
    current_context,
    debugf,
    errf,
    fatalf,
    infof,
    logvf,
    printf,
    s,
    set_defaults_for_client_tools,
    set_log_level_quiet,
    warnf,
)


def create_app() -> typer.Typer:
    """Create a Typer application instance for fortlog."""

    app = typer.Typer(add_completion=False, help="fortlog command line interface")

    @app.callback()
    def main(
        loglevel: str | None = typer.Option(
            None,
            "--loglevel",
            help=f"Log level, one of {', '.join(LEVEL_TO_STR)}.",
        ),
        client_tools: bool = typer.Option(
            False,
            "--client-tools",
            help="Use the command line tools defaults (text or color output, no file:line).",
        ),
    ) -> None:
        if client_tools:
            set_defaults_for_client_tools()
        if loglevel is None:
            return
        try:
            lvl = validate_level(loglevel)
        except InvalidLevelError as exc:
            raise typer.BadParameter(exc.message, param_hint="--loglevel") from exc
        set_log_level_quiet(lvl)

    app.command("env-help")(env_help_command)
    app.command("levels")(levels_command)
    app.command("demo")(demo_command)
    return app


def env_help_command() -> None:
    """Show the LOGGER_* environment variables and their current values."""

    env_help(sys.stdout)


def levels_command(
    no_color: bool = typer.Option(False, "--no-color", help="Disable colorized table output."),
) -> None:
    """Show the log levels and how each is rendered."""

    console = Console(file=sys.stdout, color_system=None if no_color else "auto", no_color=no_color)
    table = Table(box=SIMPLE, show_header=True, header_style="bold")
    for column in ("value", "name", "json", "tag"):
        table.add_column(column)
    for lvl in Level:
        if lvl == Level.NO_LEVEL:
            continue
        table.add_row(str(int(lvl)), str(lvl), LEVEL_TO_JSON[lvl], LEVEL_TO_TEXT[lvl])
    console.print(table)


def demo_command() -> None:
    """Log one message at each level, in the current output format."""

    config = current_context().config
    saved = config.fatal_panics, config.fatal_exit
    # So fatalf() neither raises nor exits.
    config.fatal_panics = False
    config.fatal_exit = lambda code: None
    set_log_level_quiet(Level.DEBUG)
    try:
        debugf("This is a debug message ending with backslash \\")
        logvf("This is a verbose message")
        printf("This an always printed, file:line omitted message (and no level in console)")
        infof('This is an info message with no attributes but with "quotes"...')
        s(
            Level.INFO,
            "This is multi line\n\tstructured info message with 3 attributes",
            text("attr1", "value1"),
            attr("attr2", 42),
            text("attr3", '"quoted\nvalue"'),
        )
        warnf("This is a warning message")
        errf("This is an error message")
        critf("This is a critical message")
        fatalf("This is a fatal message")
    finally:
        config.fatal_panics, config.fatal_exit = saved
    typer.echo("This is a non json output")


app = create_app()
