"""Command line interface for media catalog."""

import asyncio
import logging
import sys
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import List, Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from .application import MediaLibrary
from .domain.catalog import (
    CatalogEntry,
    EntryDraft,
    LibraryFilter,
    MediaKind,
    MediaStatus,
    parse_media_kind,
    parse_media_status,
)
from .domain.layout import flow_layout, measure_tags
from .domain.reporting import YearlyReport
from .exceptions import EntryNotFoundError, MediaCatalogError
from .infrastructure.export import EXPORT_FORMATS, ReportExporter, default_report_filename
from .infrastructure.repositories import FileBasedCatalogEntryRepository
from .models.config import (
    DEFAULT_CONFIG_FILENAME,
    DEFAULT_LIBRARY_DIR,
    CatalogConfig,
    create_default_config,
    load_config,
)

logger = logging.getLogger(__name__)

console = Console()

KIND_CHOICES = [kind.value for kind in MediaKind]
STATUS_CHOICES = [status.value for status in MediaStatus]
SHORT_ID_LENGTH = 8


@dataclass
class CliContext:
    """State shared by all subcommands."""
    config: CatalogConfig
    library_directory: Path

    def create_library(self) -> MediaLibrary:
        repository = FileBasedCatalogEntryRepository(self.library_directory)
        return MediaLibrary(
            repository,
            top_rated_limit=self.config.report.top_rated_limit,
            hours_per_entry=self.config.report.hours_per_entry,
        )


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _fail(message: str) -> None:
    console.print(f"[red]Error: {escape(message)}[/red]")
    sys.exit(1)


def _short_id(entry: CatalogEntry) -> str:
    return entry.id[:SHORT_ID_LENGTH]


def _stars(rating: int) -> str:
    return "★" * rating + "☆" * (5 - rating)


def render_tag_lines(tags: List[str], max_width: int, spacing: int = 1) -> List[str]:
    """Wrap tag chips into terminal lines using the flow layout."""
    chips = [f"[{tag}]" for tag in tags]
    layout = flow_layout(
        measure_tags(tags, char_width=1, horizontal_padding=1, height=1),
        max_width=max_width,
        spacing=spacing,
    )
    separator = " " * spacing
    return [separator.join(chips[p.index] for p in line) for line in layout.lines()]


async def _require_entry(library: MediaLibrary, entry_id: str) -> CatalogEntry:
    resolved = await library.resolve_entry_id(entry_id)
    entry = await library.get_entry(resolved) if resolved else None
    if entry is None:
        raise EntryNotFoundError(entry_id)
    return entry


def _run(coro) -> None:
    try:
        asyncio.run(coro)
    except MediaCatalogError as e:
        _fail(str(e))


def _report_command_errors(result) -> None:
    if not result.success:
        details = "; ".join(result.errors) or "unknown error"
        raise MediaCatalogError(f"{result.message or 'Command failed'}: {details}")


@click.group()
@click.version_option(package_name="media-catalog")
@click.option(
    '--library',
    type=click.Path(file_okay=False, path_type=Path),
    envvar='MEDIA_CATALOG_LIBRARY',
    help='Directory holding the catalog (entries.json)'
)
@click.option(
    '--config',
    type=click.Path(dir_okay=False, path_type=Path),
    help='Configuration file path'
)
@click.option(
    '--verbose',
    is_flag=True,
    help='Verbose output'
)
@click.pass_context
def cli(ctx: click.Context, library: Optional[Path], config: Optional[Path], verbose: bool):
    """Catalog books, movies, albums, blogs, videos and podcasts."""
    _configure_logging(verbose)

    config_path = config or (library or DEFAULT_LIBRARY_DIR) / DEFAULT_CONFIG_FILENAME
    try:
        cfg = load_config(config_path)
    except MediaCatalogError as e:
        _fail(str(e))

    library_directory = library or cfg.library_directory
    logger.debug("Using library %s (config %s)", library_directory, config_path)
    ctx.obj = CliContext(config=cfg, library_directory=library_directory)


@cli.command()
@click.argument('title')
@click.option('--creator', default='', help='Author, director, artist or host')
@click.option('--kind', type=click.Choice(KIND_CHOICES, case_sensitive=False), default='book', show_default=True)
@click.option('--release-date', type=click.DateTime(formats=['%Y-%m-%d']), help='Release date (YYYY-MM-DD)')
@click.option('--platform', default='', help='Where it was read, watched or heard')
@click.option('--link', default='', help='External link')
@click.option('--rating', type=int, default=0, help='Rating from 0 to 5')
@click.option('--status', type=click.Choice(STATUS_CHOICES, case_sensitive=False), default='backlog', show_default=True)
@click.option('--tags', default='', help='Comma-separated tags')
@click.option('--note', default='', help='Free-form notes')
@click.option('--favorite', is_flag=True, help='Mark as favorite')
@click.option('--cover', type=click.Path(exists=True, dir_okay=False, path_type=Path), help='Cover image file')
@click.pass_obj
def add(
    obj: CliContext,
    title: str,
    creator: str,
    kind: str,
    release_date: Optional[datetime],
    platform: str,
    link: str,
    rating: int,
    status: str,
    tags: str,
    note: str,
    favorite: bool,
    cover: Optional[Path],
):
    """Add a new entry titled TITLE."""
    draft = EntryDraft(
        title=title,
        creator=creator,
        kind=parse_media_kind(kind),
        platform=platform,
        link=link,
        rating=rating,
        status=parse_media_status(status),
        tag_input=tags,
        note=note,
        is_favorite=favorite,
        cover_image=cover.read_bytes() if cover else None,
    )
    if release_date is not None:
        draft.has_release_date = True
        draft.release_date = release_date.date()

    async def _add():
        result = await obj.create_library().add_entry(draft)
        _report_command_errors(result)
        entry = result.result_data["entry"]
        console.print(f"[green]Added[/green] {escape(entry.title)} [dim]({_short_id(entry)})[/dim]")

    _run(_add())


@cli.command(name='list')
@click.option('--favorites', is_flag=True, help='Only favorites')
@click.option('--kind', type=click.Choice(KIND_CHOICES, case_sensitive=False), help='Only one kind')
@click.option('--year', type=int, help='Only entries released in YEAR')
@click.option('--search', help='Match title, creator, platform or tags')
@click.option('--limit', type=int, help='Maximum number of rows')
@click.pass_obj
def list_entries(
    obj: CliContext,
    favorites: bool,
    kind: Optional[str],
    year: Optional[int],
    search: Optional[str],
    limit: Optional[int],
):
    """List entries, most recently updated first."""
    if favorites:
        selection = LibraryFilter.favorites()
    elif kind:
        selection = LibraryFilter.for_kind(parse_media_kind(kind))
    elif year is not None:
        selection = LibraryFilter.for_year(year)
    else:
        selection = LibraryFilter.all()

    async def _list():
        library = obj.create_library()
        entries = await library.list_entries(
            selection,
            search_text=search,
            limit=limit or obj.config.display.list_limit,
        )

        if not entries:
            console.print("[yellow]No entries found[/yellow]")
            console.print("Add books, movies, music, podcasts, and more with 'media-catalog add'.")
            return

        table = Table(title=selection.label)
        table.add_column("ID", style="dim")
        table.add_column("Title", style="cyan")
        table.add_column("Creator")
        table.add_column("Kind")
        table.add_column("Year", justify="right")
        table.add_column("Rating")
        table.add_column("★", justify="center")

        for entry in entries:
            table.add_row(
                _short_id(entry),
                escape(entry.title),
                escape(entry.display_creator),
                entry.kind.display_name,
                str(entry.year) if entry.year else "",
                _stars(entry.rating),
                "★" if entry.is_favorite else "",
            )
        console.print(table)

    _run(_list())


@cli.command()
@click.argument('entry_id')
@click.pass_obj
def show(obj: CliContext, entry_id: str):
    """Show the details of one entry."""

    async def _show():
        entry = await _require_entry(obj.create_library(), entry_id)

        header = f"[bold]{escape(entry.title)}[/bold]\n{escape(entry.display_creator)}"
        facts = [entry.kind.display_name]
        if entry.year:
            facts.append(str(entry.year))
        facts.append(entry.status.display_name)
        if entry.is_favorite:
            facts.append("★ Favorite")
        console.print(Panel(f"{header}\n[dim]{' · '.join(facts)}[/dim]", expand=False))

        if entry.tags:
            max_width = obj.config.display.max_tag_width or max(console.width - 4, 10)
            for line in render_tag_lines(list(entry.tags), max_width, obj.config.display.tag_spacing):
                console.print(f"  {escape(line)}")

        details = Table(show_header=False, box=None)
        details.add_column("Property", style="cyan")
        details.add_column("Value")
        details.add_row("ID", entry.id)
        details.add_row("Rating", _stars(entry.rating))
        details.add_row("Platform", escape(entry.display_platform))
        details.add_row("Added", entry.created_at.strftime("%Y-%m-%d %H:%M"))
        details.add_row("Updated", entry.updated_at.strftime("%Y-%m-%d %H:%M"))
        if entry.release_date:
            details.add_row("Release Date", entry.release_date.isoformat())
        if entry.external_link:
            details.add_row("Link", escape(entry.external_link))
        details.add_row("Cover", f"{len(entry.cover_image)} bytes" if entry.cover_image else "-")
        console.print(details)

        if entry.note:
            console.print("\n[bold]Notes[/bold]")
            console.print(escape(entry.note))

    _run(_show())


@cli.command()
@click.argument('entry_id')
@click.option('--title', help='New title')
@click.option('--creator', help='New creator')
@click.option('--kind', type=click.Choice(KIND_CHOICES, case_sensitive=False))
@click.option('--release-date', type=click.DateTime(formats=['%Y-%m-%d']), help='Release date (YYYY-MM-DD)')
@click.option('--clear-release-date', is_flag=True, help='Remove the release date')
@click.option('--platform', help='New platform')
@click.option('--link', help='New external link (empty string clears it)')
@click.option('--rating', type=int, help='Rating from 0 to 5')
@click.option('--status', type=click.Choice(STATUS_CHOICES, case_sensitive=False))
@click.option('--tags', help='Replace tags (comma-separated)')
@click.option('--note', help='Replace notes')
@click.option('--favorite/--no-favorite', default=None, help='Set or clear the favorite flag')
@click.option('--cover', type=click.Path(exists=True, dir_okay=False, path_type=Path), help='Replace cover image')
@click.option('--clear-cover', is_flag=True, help='Remove the cover image')
@click.pass_obj
def edit(obj: CliContext, entry_id: str, **changes):
    """Edit an existing entry. Only the given options change."""

    async def _edit():
        library = obj.create_library()
        entry = await _require_entry(library, entry_id)
        draft = EntryDraft.from_entry(entry)

        for name in ('title', 'creator', 'platform', 'link', 'note', 'rating'):
            if changes[name] is not None:
                setattr(draft, name, changes[name])
        if changes['kind']:
            draft.kind = parse_media_kind(changes['kind'])
        if changes['status']:
            draft.status = parse_media_status(changes['status'])
        if changes['tags'] is not None:
            draft.tag_input = changes['tags']
        if changes['favorite'] is not None:
            draft.is_favorite = changes['favorite']
        if changes['clear_release_date']:
            draft.has_release_date = False
        elif changes['release_date'] is not None:
            draft.has_release_date = True
            draft.release_date = changes['release_date'].date()
        if changes['clear_cover']:
            draft.cover_image = None
        elif changes['cover'] is not None:
            draft.cover_image = changes['cover'].read_bytes()

        result = await library.update_entry(entry.id, draft)
        _report_command_errors(result)
        updated_fields = result.result_data.get("updated_fields", [])
        summary = ", ".join(updated_fields) if updated_fields else "no changes"
        console.print(f"[green]Updated[/green] {escape(draft.title.strip())} [dim]({summary})[/dim]")

    _run(_edit())


@cli.command()
@click.argument('entry_id')
@click.pass_obj
def favorite(obj: CliContext, entry_id: str):
    """Mark or unmark an entry as favorite."""

    async def _toggle():
        library = obj.create_library()
        entry = await _require_entry(library, entry_id)
        result = await library.toggle_favorite(entry.id)
        _report_command_errors(result)
        console.print(f"[green]{escape(result.message)}[/green]")

    _run(_toggle())


@cli.command()
@click.argument('entry_id')
@click.option('--yes', '-y', is_flag=True, help='Do not ask for confirmation')
@click.pass_obj
def delete(obj: CliContext, entry_id: str, yes: bool):
    """Delete an entry. This cannot be undone."""

    async def _delete():
        library = obj.create_library()
        entry = await _require_entry(library, entry_id)
        if not yes and not click.confirm(f"Delete {entry.title}?", default=False):
            console.print("[yellow]Cancelled[/yellow]")
            return
        result = await library.remove_entry(entry.id)
        _report_command_errors(result)
        console.print(f"[green]{escape(result.message)}[/green]")

    _run(_delete())


@cli.command()
@click.pass_obj
def years(obj: CliContext):
    """Show release years and the years a report can cover."""

    async def _years():
        library = obj.create_library()
        release_years = await library.sidebar_years()
        report_years = await library.available_years()
        console.print(f"[bold]Release years:[/bold] {', '.join(map(str, release_years)) or '-'}")
        console.print(f"[bold]Report years:[/bold] {', '.join(map(str, report_years))}")

    _run(_years())


def render_report(report: YearlyReport) -> None:
    """Print a yearly report to the console."""
    console.print(Panel(
        f"[bold]{report.year}[/bold]\nYear in Review - Digital Library",
        expand=False,
    ))

    stats = Table(show_header=True)
    stats.add_column("Total Items", justify="right")
    stats.add_column("Favorite Items", justify="right")
    stats.add_column("Est. Hours", justify="right")
    stats.add_row(str(report.total_count), str(report.favorite_count), f"{report.estimated_hours}h")
    console.print(stats)

    if report.kind_breakdown:
        breakdown = Table(title="Breakdown")
        breakdown.add_column("Kind", style="cyan")
        breakdown.add_column("Count", justify="right")
        for kind, count in report.kind_breakdown:
            breakdown.add_row(kind.display_name, str(count))
        console.print(breakdown)

    if report.top_rated:
        top = Table(title="Top Rated")
        top.add_column("#", justify="right")
        top.add_column("Title", style="cyan")
        top.add_column("Creator")
        top.add_column("Rating")
        for rank, entry in enumerate(report.top_rated, start=1):
            top.add_row(str(rank), escape(entry.title), escape(entry.display_creator), "★" * entry.rating)
        console.print(top)

    if report.is_empty:
        console.print(f"[yellow]No entries for {report.year}[/yellow]")


@cli.command()
@click.option('--year', type=int, help='Report year (default: most recent year with entries)')
@click.pass_obj
def report(obj: CliContext, year: Optional[int]):
    """Show the yearly highlights report."""

    async def _report():
        render_report(await obj.create_library().yearly_report(year))

    _run(_report())


@cli.command()
@click.option('--year', type=int, help='Report year (default: most recent year with entries)')
@click.option('--format', 'export_format', type=click.Choice(list(EXPORT_FORMATS)), help='Export format')
@click.option(
    '--output', '-o',
    type=click.Path(path_type=Path),
    help='Output file or directory (default: Yearly_Report_<year>.<format>)'
)
@click.pass_obj
def export(obj: CliContext, year: Optional[int], export_format: Optional[str], output: Optional[Path]):
    """Export the yearly report to a file."""
    fmt = export_format or obj.config.report.export_format

    async def _export():
        yearly = await obj.create_library().yearly_report(year)
        target = output or Path(default_report_filename(yearly.year, fmt))
        written = ReportExporter(fmt).export(yearly, target)
        console.print(f"[green]Report exported successfully to {escape(written.name)}.[/green]")

    _run(_export())


@cli.command(name='init-config')
@click.argument('config_path', type=click.Path(dir_okay=False, path_type=Path))
@click.option('--force', is_flag=True, help='Overwrite an existing file')
def init_config(config_path: Path, force: bool):
    """Write a default configuration file to CONFIG_PATH."""
    if config_path.exists() and not force:
        _fail(f"{config_path} already exists (use --force to overwrite)")
    create_default_config(config_path)
    console.print(f"[green]Wrote default configuration to {escape(str(config_path))}[/green]")


def main():
    """Entry point for the CLI."""
    cli()


if __name__ == '__main__':
    main()
