"""Command-line interface for Todo NLP."""

import json
import logging
import sys
from datetime import date
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from .config import Config, ParserConfig, load_config, save_config
from .models import ParsedResult, Priority
from .parser import NaturalLanguageParser
from .preview import build_preview
from .utils.datetime import local_today, parse_iso_date

console = Console()


def _parse_today(value: Optional[str]) -> date:
    if not value:
        return local_today()
    try:
        return parse_iso_date(value)
    except ValueError:
        raise click.BadParameter(f"Invalid date '{value}'. Use YYYY-MM-DD", param_hint="--today")


def format_result_table(result: ParsedResult, today: date) -> Table:
    """Build a rich table describing a parsed result."""
    preview = build_preview(result, today)

    priority_colors = {
        Priority.HIGH: "red",
        Priority.MEDIUM: "yellow",
        Priority.LOW: "dim",
    }

    table = Table(title=escape(result.original_input) or "(empty)", show_header=True, header_style="bold")
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    table.add_column("Display", style="green")

    table.add_row("title", Text(result.title), "")
    if result.due_date:
        table.add_row("due_date", result.due_date, preview.date_display)
    if result.due_time:
        table.add_row("due_time", result.due_time, preview.time_display)
    if result.priority:
        color = priority_colors[result.priority]
        table.add_row("priority", Text(result.priority.value, style=color), preview.priority_display)
    if result.tags:
        table.add_row("tags", Text(", ".join(result.tags)), Text(" ".join(preview.tags_display)))
    if result.recurrence:
        table.add_row("recurrence", json.dumps(result.recurrence.to_dict()), preview.recurrence_display)
    table.add_row("confidence", f"{result.confidence:.2f}", "")
    return table


@click.group()
@click.option("--config", type=click.Path(dir_okay=False, path_type=Path), help="Path to config file")
@click.option("--verbose", "-v", is_flag=True, help="Verbose output")
@click.pass_context
def main(ctx, config, verbose):
    """Todo NLP - parse Korean quick-add task lines."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["config_path"] = config
    ctx.obj["config"] = load_config(config)


@main.command("parse")
@click.argument("text", nargs=-1)
@click.option("--json", "as_json", is_flag=True, help="Print results as JSON")
@click.option("--today", help="Reference date (YYYY-MM-DD) instead of the local date")
@click.option("--tokens", "show_tokens", is_flag=True, help="Show the matched tokens")
@click.pass_context
def parse_command(ctx, text, as_json, today, show_tokens):
    """Parse task lines into structured fields.

    With no TEXT, one task per line is read from standard input.
    """
    reference = _parse_today(today)
    parser = NaturalLanguageParser(ctx.obj["config"])

    if text:
        lines = [" ".join(text)]
    else:
        lines = [line.rstrip("\n") for line in sys.stdin if line.strip()]

    results = [parser.parse(line, reference) for line in lines]

    if as_json:
        payload = [result.to_dict() for result in results]
        click.echo(json.dumps(payload if len(payload) != 1 else payload[0], ensure_ascii=False, indent=2))
        return

    for result in results:
        console.print(format_result_table(result, reference))
        if show_tokens and result.tokens:
            for token in result.tokens:
                console.print(f"  [dim]{token.start:>3}-{token.end:<3}[/dim] "
                              f"[cyan]{token.kind.value:<10}[/cyan] {escape(repr(token.raw_text))}")


@main.command("preview")
@click.argument("text", nargs=-1, required=True)
@click.option("--today", help="Reference date (YYYY-MM-DD) instead of the local date")
@click.option("--json", "as_json", is_flag=True, help="Print the preview as JSON")
@click.pass_context
def preview_command(ctx, text, today, as_json):
    """Show the badges a task entry box would display."""
    reference = _parse_today(today)
    preview = NaturalLanguageParser(ctx.obj["config"]).preview(" ".join(text), reference)

    if as_json:
        click.echo(json.dumps(preview.to_dict(), ensure_ascii=False, indent=2))
        return

    if not preview.has_any:
        console.print("[dim]Nothing recognised[/dim]")
        return

    badges = [
        preview.date_display,
        preview.time_display,
        preview.priority_display,
        " ".join(preview.tags_display) if preview.tags_display else None,
        preview.recurrence_display,
    ]
    console.print("  ".join(f"[bold blue]\\[{escape(badge)}][/bold blue]" for badge in badges if badge))


@main.group("config")
def config_group():
    """Inspect or create the configuration file."""


@config_group.command("show")
@click.pass_context
def config_show(ctx):
    """Print the active configuration as YAML."""
    click.echo(ctx.obj["config"].to_yaml(), nl=False)


@config_group.command("init")
@click.option("--force", is_flag=True, help="Overwrite an existing file")
@click.pass_context
def config_init(ctx, force):
    """Write a default configuration file."""
    path = ctx.obj["config_path"] or Config.default_path()
    if path.exists() and not force:
        console.print(f"[yellow]Config already exists at {path}. Use --force to overwrite.[/yellow]")
        sys.exit(1)
    save_config(ParserConfig(), path)
    console.print(f"[green]Created default configuration at {path}[/green]")


if __name__ == "__main__":
    main()
