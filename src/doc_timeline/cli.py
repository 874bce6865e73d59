"""Command-line interface for the Document Timeline system.

Entry point: `dtl` command (defined in pyproject.toml).
"""

import logging
import sys

import click
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler

from doc_timeline.config import Config, SearchMode, SortOrder, TimelineSettings

console = Console()


def setup_logging(verbose: bool = False) -> None:
    """Configure logging with rich handler."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging.")
@click.pass_context
def main(ctx: click.Context, verbose: bool) -> None:
    """Document Timeline — lay tagged notes out on a timeline."""
    setup_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["config"] = Config()


@main.command()
@click.argument("notes_dir", type=click.Path(exists=True, file_okay=False), required=False)
@click.option("--tag", "-t", type=str, default=None, help="Tag to filter notes (e.g. #timeline).")
@click.option("--date-property", type=str, default=None, help="Frontmatter key holding the note date.")
@click.option(
    "--search-in",
    type=click.Choice([m.value for m in SearchMode]),
    default=None,
    help="Where to look for the tag.",
)
@click.option("--threshold", type=float, default=None, help="Minimum spacing between notes, in percent.")
@click.option(
    "--order",
    type=click.Choice([o.value for o in SortOrder]),
    default=None,
    help="Axis direction (default: descending, most recent on top).",
)
@click.option("--html", "html_path", type=click.Path(dir_okay=False), default=None, help="Write an HTML timeline here.")
@click.option("--terminal", is_flag=True, help="Print the timeline to the terminal instead of HTML.")
@click.option("--num-workers", "-w", type=int, default=None, help="Threads used to read notes.")
@click.pass_context
def render(
    ctx: click.Context,
    notes_dir: str | None,
    tag: str | None,
    date_property: str | None,
    search_in: str | None,
    threshold: float | None,
    order: str | None,
    html_path: str | None,
    terminal: bool,
    num_workers: int | None,
) -> None:
    """Render the timeline for all notes in NOTES_DIR.

    Options given here apply to this run only; use `dtl settings set`
    to change the saved defaults.

    \b
    Examples:
        dtl render notes/                         # HTML to data/timeline.html
        dtl render notes/ --terminal              # Print to the terminal
        dtl render notes/ --tag "#project" --search-in metadata
    """
    from pathlib import Path

    from doc_timeline.corpus.provider import DirectoryCorpus
    from doc_timeline.output.html import HtmlRenderer
    from doc_timeline.output.terminal import TerminalRenderer
    from doc_timeline.pipeline import TimelineApp
    from doc_timeline.settings import JsonSettingsStore

    config = ctx.obj["config"]
    root = Path(notes_dir) if notes_dir else config.notes_dir

    if terminal:
        sink = TerminalRenderer(console)
    else:
        sink = HtmlRenderer(Path(html_path) if html_path else config.output_path, link_root=root)

    app = TimelineApp(
        corpus=DirectoryCorpus(root, pattern=config.note_pattern),
        sink=sink,
        settings_store=JsonSettingsStore(config.settings_path),
        num_workers=num_workers or config.num_workers,
    )

    overrides = {
        key: value
        for key, value in {
            "tag": tag,
            "date_property": date_property,
            "search_in": search_in,
            "threshold": threshold,
            "order": order,
        }.items()
        if value is not None
    }

    try:
        with app:
            run_settings = app.settings
            if overrides:
                run_settings = TimelineSettings.model_validate({**run_settings.model_dump(), **overrides})
            console.print(
                f"[cyan]Tag: {run_settings.tag}  Search in: {run_settings.search_in.value}  "
                f"Date property: {run_settings.date_property or '(file creation date)'}[/cyan]"
            )
            report = app.run(run_settings)
    except ValidationError as e:
        console.print(f"[red]Invalid settings:[/red]\n{e}")
        sys.exit(2)
    except FileNotFoundError as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)

    console.print(f"\nNotes scanned: {report.total}")
    console.print(f"Notes matched: {len(report.matched)}")

    if report.failures:
        console.print("\n[yellow]Unreadable notes:[/yellow]")
        for failure in report.failures[:20]:
            console.print(f"  - {failure['doc_id']}: {failure['error']}")
        if len(report.failures) > 20:
            console.print(f"  ... and {len(report.failures) - 20} more")

    if report.notice:
        console.print(f"\n[yellow]{report.notice}[/yellow]")
        return

    if report.date_sources:
        sources = ", ".join(f"{k}: {v}" for k, v in sorted(report.date_sources.items()))
        console.print(f"Date sources: {sources}")
    if report.layout and report.layout.overflowed:
        console.print(
            f"[yellow]{len(report.layout.overflowed)} notes did not fit and were "
            f"placed past the end of the timeline[/yellow]"
        )
    if not terminal:
        console.print(f"\n[green]Timeline written to {report.artifact}[/green]")


@main.group()
def settings() -> None:
    """Show or change the saved timeline settings."""


@settings.command(name="show")
@click.pass_context
def settings_show(ctx: click.Context) -> None:
    """Print the current settings."""
    from doc_timeline.settings import JsonSettingsStore, load_settings

    config = ctx.obj["config"]
    try:
        current = load_settings(JsonSettingsStore(config.settings_path))
    except ValidationError as e:
        console.print(f"[red]Saved settings are invalid:[/red]\n{e}")
        sys.exit(2)

    console.print(f"[cyan]Settings file: {config.settings_path}[/cyan]")
    for key, value in current.model_dump(mode="json").items():
        console.print(f"  {key:15s} {value}")


@settings.command(name="set")
@click.argument("key", type=click.Choice(list(TimelineSettings.model_fields)))
@click.argument("value")
@click.pass_context
def settings_set(ctx: click.Context, key: str, value: str) -> None:
    """Change one saved setting.

    \b
    Examples:
        dtl settings set tag "#journal"
        dtl settings set search_in inline
        dtl settings set date_property ""     # always use file creation date
    """
    from doc_timeline.pipeline import TimelineApp
    from doc_timeline.settings import JsonSettingsStore

    config = ctx.obj["config"]
    app = TimelineApp(corpus=None, sink=None, settings_store=JsonSettingsStore(config.settings_path))
    try:
        with app:
            updated = app.update_settings(**{key: value})
    except ValidationError as e:
        console.print(f"[red]Invalid value for {key}:[/red]\n{e}")
        sys.exit(2)

    console.print(f"[green]{key} = {updated.model_dump(mode='json')[key]}[/green]")


if __name__ == "__main__":
    main()
