"""
Command-line interface for Desk Calendar.
"""

import dataclasses
import json
import logging
from configparser import ConfigParser
from contextlib import contextmanager
from dataclasses import dataclass
from dataclasses import field
from datetime import date
from datetime import datetime
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from desk_calendar import grid
from desk_calendar.app import DeskCalendar
from desk_calendar.legacy import import_legacy_events
from desk_calendar.models import DEFAULT_CONFIG
from desk_calendar.models import DEFAULT_DB
from desk_calendar.models import DEFAULT_WINDOW_STATE
from desk_calendar.models import CalendarEvent
from desk_calendar.models import CalendarStoreError
from desk_calendar.models import CustomTheme
from desk_calendar.models import WindowState
from desk_calendar.themes import theme_config_template

# ---------------------------------------------------------------------------
# Typer apps
# ---------------------------------------------------------------------------

app = typer.Typer(
    no_args_is_help=True,
    rich_markup_mode="rich",
    help="Month-grid desktop calendar: events, themes and window state.",
)
events_app = typer.Typer(no_args_is_help=True, help="Create, edit and delete events.")
themes_app = typer.Typer(no_args_is_help=True, help="Manage colour themes.")
window_app = typer.Typer(no_args_is_help=True, help="Saved window geometry.")
app.add_typer(events_app, name="events")
app.add_typer(themes_app, name="themes")
app.add_typer(window_app, name="window")

console = Console()


# ---------------------------------------------------------------------------
# Global state shared across subcommands
# ---------------------------------------------------------------------------


@dataclass
class _State:
    config_path: Path = field(default_factory=lambda: DEFAULT_CONFIG)
    db_path: Path | None = None
    verbose: bool = False


state = _State()


@app.callback()
def _global(
    config: Annotated[
        Path,
        typer.Option("--config", "-c", help=f"Config file path (default: {DEFAULT_CONFIG})"),
    ] = DEFAULT_CONFIG,
    db: Annotated[
        Path | None,
        typer.Option("--db", help=f"Database path (default: {DEFAULT_DB})"),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose debug output"),
    ] = False,
) -> None:
    state.config_path = config
    state.db_path = db
    state.verbose = verbose
    _setup_logging(verbose)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False, console=console)],
    )


def _load_config_file(config_path: Path) -> dict[str, str]:
    if not config_path.exists():
        return {}
    parser = ConfigParser()
    parser.read(config_path)
    if "desk-calendar" not in parser:
        return {}
    return dict(parser["desk-calendar"])


def _resolve_db_path() -> Path:
    """--db wins over the config file, which wins over the default."""
    if state.db_path is not None:
        return state.db_path
    configured = _load_config_file(state.config_path).get("database")
    if configured:
        return Path(configured).expanduser()
    return DEFAULT_DB


@contextmanager
def _calendar():
    """Open the stores; turn store errors into a message and exit code 1."""
    try:
        with DeskCalendar(_resolve_db_path()) as cal:
            yield cal
    except CalendarStoreError as e:
        console.print(f"[bold red]Error:[/] {e}")
        raise typer.Exit(1) from None


def _check_date(value: str) -> str:
    """Accept only values that start with YYYY-MM-DD.

    Dates are compared as strings, so compact or week-date forms would fall
    outside every range query.
    """
    try:
        if len(value) < 10 or value[4] != "-" or value[7] != "-":
            raise ValueError(value)
        date.fromisoformat(value[:10])
        datetime.fromisoformat(value)
    except ValueError:
        console.print(f"[bold red]Error:[/] Invalid date: {value!r} (expected YYYY-MM-DD)")
        raise typer.Exit(1) from None
    return value


def _clean_title(value: str) -> str:
    title = value.strip()
    if not title:
        console.print("[bold red]Error:[/] Title must not be empty.")
        raise typer.Exit(1)
    return title


def _read_theme_file(path: Path) -> dict:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        console.print(f"[bold red]Error:[/] Cannot read theme config {path}: {e}")
        raise typer.Exit(1) from None


def _events_table(events: list[CalendarEvent]) -> Table:
    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("ID", justify="right", style="bold")
    table.add_column("Date")
    table.add_column("Title")
    for event in events:
        table.add_row(str(event.id), event.date, event.title)
    return table


# ---------------------------------------------------------------------------
# Subcommand: month
# ---------------------------------------------------------------------------


@app.command()
def month(
    which: Annotated[
        str | None,
        typer.Argument(metavar="YYYY-MM", help="Month to show (default: current month)"),
    ] = None,
) -> None:
    """Render a month grid with its events."""
    if which:
        try:
            first = datetime.strptime(which, "%Y-%m").date()
        except ValueError:
            console.print(f"[bold red]Error:[/] Invalid month: {which!r} (expected YYYY-MM)")
            raise typer.Exit(1) from None
    else:
        first = date.today().replace(day=1)

    weeks = grid.month_weeks(first.year, first.month)
    start, end = grid.visible_range(weeks)
    with _calendar() as cal:
        buckets = grid.events_by_day(cal.events.list_events(start, end))

    table = Table(show_header=True, header_style="bold cyan", show_lines=True, expand=True)
    for name in grid.weekday_names():
        table.add_column(name, ratio=1, overflow="fold")
    today = date.today()
    for week in weeks:
        cells = []
        for day in week:
            cell = Text()
            in_month = day.month == first.month
            style = "bold" if in_month else "dim"
            if day == today:
                style = "bold reverse"
            cell.append(grid.day_label(day), style=style)
            for event in buckets.get(day, []):
                cell.append("\n")
                cell.append(f"{event.title} ", style="cyan" if in_month else "dim cyan")
                cell.append(f"#{event.id}", style="dim")
            cells.append(cell)
        table.add_row(*cells)

    console.print(Panel(table, title=f"[bold]{first.strftime('%B %Y')}[/bold]"))


# ---------------------------------------------------------------------------
# Subcommands: events
# ---------------------------------------------------------------------------


@events_app.command("list")
def events_list(
    start: Annotated[str | None, typer.Option("--start", help="First date (inclusive)")] = None,
    end: Annotated[str | None, typer.Option("--end", help="Last date (inclusive)")] = None,
) -> None:
    """List events in date order."""
    if bool(start) != bool(end):
        raise typer.BadParameter("--start and --end must be given together")
    with _calendar() as cal:
        events = cal.events.list_events(start, end)
    if not events:
        console.print("[yellow]No events.[/]")
        return
    console.print(_events_table(events))


@events_app.command("add")
def events_add(
    title: Annotated[str, typer.Argument(help="Event title")],
    when: Annotated[str, typer.Argument(metavar="DATE", help="ISO date, e.g. 2024-03-15")],
) -> None:
    """Add an event."""
    title = _clean_title(title)
    when = _check_date(when)
    with _calendar() as cal:
        event_id = cal.events.add_event(title, when)
    console.print(f"Added event [bold]#{event_id}[/]: {title} [dim]({when})[/dim]")


@events_app.command("edit")
def events_edit(
    event_id: Annotated[int, typer.Argument(metavar="ID")],
    title: Annotated[str | None, typer.Option("--title", "-t", help="New title")] = None,
    when: Annotated[str | None, typer.Option("--date", "-d", help="New date")] = None,
) -> None:
    """Change the title and/or date of an event."""
    if title is None and when is None:
        raise typer.BadParameter("Nothing to change: pass --title and/or --date")
    if title is not None:
        title = _clean_title(title)
    if when is not None:
        when = _check_date(when)
    with _calendar() as cal:
        current = cal.events.get_event(event_id)
        if current is None:
            console.print(f"[yellow]Warning:[/] No event #{event_id}; nothing changed.")
            return
        cal.events.update_event(
            CalendarEvent(
                id=event_id,
                title=title if title is not None else current.title,
                date=when if when is not None else current.date,
            )
        )
    console.print(f"Updated event [bold]#{event_id}[/].")


@events_app.command("move")
def events_move(
    event_id: Annotated[int, typer.Argument(metavar="ID")],
    when: Annotated[str, typer.Argument(metavar="DATE", help="New ISO date")],
) -> None:
    """Move an event to another day."""
    when = _check_date(when)
    with _calendar() as cal:
        cal.events.move_event(event_id, when)
    console.print(f"Moved event [bold]#{event_id}[/] to {when}.")


@events_app.command("delete")
def events_delete(
    event_id: Annotated[int, typer.Argument(metavar="ID")],
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Skip confirmation prompt")] = False,
) -> None:
    """Delete an event."""
    with _calendar() as cal:
        current = cal.events.get_event(event_id)
        if current is None:
            console.print(f"[yellow]Warning:[/] No event #{event_id}; nothing deleted.")
            return
        if not yes:
            typer.confirm(f"Delete '{current.title}' ({current.date})?", abort=True)
        cal.events.delete_event(event_id)
    console.print(f"Deleted event [bold]#{event_id}[/].")


@events_app.command("import-json")
def events_import_json(
    path: Annotated[Path, typer.Argument(help="Legacy calendar.json file")],
) -> None:
    """Import events from the old JSON event file."""
    if not path.exists():
        console.print(f"[bold red]Error:[/] File not found: {path}")
        raise typer.Exit(1)
    with _calendar() as cal:
        count = import_legacy_events(cal.events, path)
    console.print(f"Imported [bold]{count}[/] event(s) from {path}.")


# ---------------------------------------------------------------------------
# Subcommands: themes
# ---------------------------------------------------------------------------


@themes_app.command("list")
def themes_list() -> None:
    """List saved themes."""
    with _calendar() as cal:
        themes = cal.themes.list_themes()
    if not themes:
        console.print("[yellow]No themes saved.[/]")
        return
    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("ID", justify="right", style="bold")
    table.add_column("Name")
    table.add_column("Event colours")
    for theme in themes:
        colours = (
            f"{theme.config.get('--event-background-color', '')} / "
            f"{theme.config.get('--event-text-color', '')}"
        )
        table.add_row(str(theme.id), theme.name, colours)
    console.print(table)


@themes_app.command("show")
def themes_show(name: Annotated[str, typer.Argument(help="Theme name")]) -> None:
    """Show every style value of a theme."""
    with _calendar() as cal:
        theme = cal.themes.get_theme_by_name(name)
    if theme is None:
        console.print(f"[bold red]Error:[/] No theme named {name!r}.")
        raise typer.Exit(1)
    table = Table.grid(padding=(0, 2))
    table.add_column(style="bold")
    table.add_column()
    for key, value in theme.config.items():
        table.add_row(key, value)
    console.print(Panel(table, title=f"[bold]{theme.name}[/bold] [dim]#{theme.id}[/dim]"))


@themes_app.command("template")
def themes_template() -> None:
    """Print an empty theme config to fill in."""
    console.print_json(data=theme_config_template())


@themes_app.command("add")
def themes_add(
    name: Annotated[str, typer.Argument(help="Theme name (must be unique)")],
    config_file: Annotated[Path, typer.Argument(metavar="CONFIG_JSON")],
) -> None:
    """Save a new theme from a JSON config file."""
    config = _read_theme_file(config_file)
    with _calendar() as cal:
        theme_id = cal.themes.add_theme(name, config)
    console.print(f"Added theme [bold]#{theme_id}[/]: {name}")


@themes_app.command("update")
def themes_update(
    name: Annotated[str, typer.Argument(help="Existing theme name")],
    config_file: Annotated[Path, typer.Argument(metavar="CONFIG_JSON")],
    rename: Annotated[str | None, typer.Option("--rename", help="New theme name")] = None,
) -> None:
    """Replace a theme's config (and optionally its name)."""
    config = _read_theme_file(config_file)
    with _calendar() as cal:
        current = cal.themes.get_theme_by_name(name)
        if current is None:
            console.print(f"[yellow]Warning:[/] No theme named {name!r}; nothing changed.")
            return
        cal.themes.update_theme(CustomTheme(id=current.id, name=rename or name, config=config))
    console.print(f"Updated theme [bold]#{current.id}[/].")


@themes_app.command("delete")
def themes_delete(
    name: Annotated[str, typer.Argument(help="Theme name")],
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Skip confirmation prompt")] = False,
) -> None:
    """Delete a theme."""
    with _calendar() as cal:
        current = cal.themes.get_theme_by_name(name)
        if current is None:
            console.print(f"[yellow]Warning:[/] No theme named {name!r}; nothing deleted.")
            return
        if not yes:
            typer.confirm(f"Delete theme '{name}'?", abort=True)
        cal.themes.delete_theme(current.id)
    console.print(f"Deleted theme [bold]{name}[/].")


# ---------------------------------------------------------------------------
# Subcommands: window
# ---------------------------------------------------------------------------


@window_app.command("show")
def window_show() -> None:
    """Show the saved window geometry."""
    with _calendar() as cal:
        saved = cal.window.get_window_state()
    current = saved if saved is not None else dataclasses.replace(DEFAULT_WINDOW_STATE)
    info = Text()
    info.append("  Position: ", style="bold")
    info.append(f"{current.x}, {current.y}\n")
    info.append("  Size:     ", style="bold")
    info.append(f"{current.width} × {current.height}\n")
    info.append("  Monitor:  ", style="bold")
    info.append(current.monitor_name or "—")
    if saved is None:
        info.append("\n  (defaults — nothing saved yet)", style="yellow")
    console.print(Panel(info, title="[bold]Window state[/bold]", expand=False))


@window_app.command("save")
def window_save(
    x: int,
    y: int,
    width: int,
    height: int,
    monitor: Annotated[str | None, typer.Option("--monitor", help="Monitor name")] = None,
) -> None:
    """Replace the saved window geometry."""
    if width <= 0 or height <= 0:
        raise typer.BadParameter("width and height must be positive")
    with _calendar() as cal:
        cal.window.save_window_state(WindowState(x, y, width, height, monitor))
    console.print(f"Saved window state {width}×{height} at {x},{y}.")


# ---------------------------------------------------------------------------
# Subcommand: status
# ---------------------------------------------------------------------------


@app.command()
def status() -> None:
    """Show configuration and database summary."""
    db_path = _resolve_db_path()
    config_exists = state.config_path.exists()
    db_exists = db_path.exists()

    info = Text()
    info.append("  Config:   ", style="bold")
    info.append(str(state.config_path) + " ")
    info.append("✓" if config_exists else "(not found)", style="green" if config_exists else "red")
    info.append("\n  Database: ", style="bold")
    info.append(str(db_path) + " ")
    info.append("✓" if db_exists else "(not found)", style="green" if db_exists else "yellow")
    console.print(Panel(info, title="[bold]Desk Calendar — Status[/bold]"))

    if not db_exists:
        console.print(
            "[yellow]No database yet — run[/] [cyan]desk-calendar events add[/] "
            "[yellow]to create it.[/]"
        )
        return

    with _calendar() as cal:
        counts = cal.db.summary()
    results = Table.grid(padding=(0, 2))
    results.add_column(style="bold")
    results.add_column(justify="right")
    results.add_row("Events", str(counts["calendar_events"]))
    results.add_row("Themes", str(counts["themes"]))
    results.add_row("Window state", "saved" if counts["window_state"] else "—")
    console.print(Panel(results, title="[bold]Database[/bold]", expand=False))


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def main() -> None:
    app()
