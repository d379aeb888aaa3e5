"""Command-line interface for CMS translation orchestration."""

import asyncio
from typing import List, Optional, Tuple

import click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn, BarColumn, TaskProgressColumn
from rich.table import Table

from . import __version__
from .clients.cms_client import CMSClient
from .config import config
from .exceptions import CMSApiError, UnknownLocaleError
from .locales import SUPPORTED_LOCALES, TIER_NAMES, get_locale, target_locales
from .logging_config import setup_logging
from .models.translation_unit import DispatchProgress, UnitStatus
from .services.cache import QueryCache
from .services.dispatcher import BulkDispatcher
from .services.manager import JobStatus, Notice, TranslationManager
from .services.selection import ALL_TYPES, SelectionMatrix

console = Console()

CONTENT_TYPES = [ALL_TYPES, "attraction", "hotel", "article", "dining"]

STATUS_MARKS = {
    UnitStatus.COMPLETED: "[green]✓[/green]",
    UnitStatus.PENDING: "[blue]…[/blue]",
    UnitStatus.IN_PROGRESS: "[blue]…[/blue]",
    UnitStatus.NEEDS_REVIEW: "[yellow]?[/yellow]",
    UnitStatus.MISSING: "[dim]✗[/dim]",
}


def _make_client() -> CMSClient:
    return CMSClient()


def _check_config() -> None:
    errors = config.validate()
    if errors:
        console.print("[red]Configuration errors:[/red]")
        for error in errors:
            console.print(f"  - {error}")
        raise click.Abort()


def _print_notice(notice: Notice) -> None:
    color = "red" if notice.is_error else "cyan"
    text = f"[{color}]{notice.title}[/{color}]"
    if notice.description:
        text += f" {escape(notice.description)}"
    console.print(text)


async def _load_matrix(client: CMSClient, content_type: str) -> SelectionMatrix:
    contents = await client.list_published_contents()
    translations = await client.list_translations()
    return SelectionMatrix(
        contents,
        translations,
        locales=target_locales(config.source_locale),
        content_type_filter=content_type,
    )


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose: bool):
    """Travel CMS translation orchestrator."""
    setup_logging("DEBUG" if verbose else config.log_level, config.log_format)


@cli.command()
def locales():
    """List supported locales grouped by tier."""
    table = Table(title="Supported Locales")
    table.add_column("Tier", style="cyan")
    table.add_column("Code")
    table.add_column("Language")

    for locale in SUPPORTED_LOCALES:
        table.add_row(f"{locale.tier} - {TIER_NAMES[locale.tier]}", locale.code, locale.name)

    console.print(table)


@cli.command()
@click.option(
    "--type", "-t",
    "content_type",
    type=click.Choice(CONTENT_TYPES),
    default=ALL_TYPES,
    help="Content type to show"
)
def matrix(content_type: str):
    """Show translation coverage for published content."""
    _check_config()

    async def run() -> SelectionMatrix:
        async with _make_client() as client:
            return await _load_matrix(client, content_type)

    try:
        selection = asyncio.run(run())
    except CMSApiError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise click.Abort()

    stats = selection.stats()
    console.print(Panel(
        f"[bold]{stats.percentage}%[/bold] translated\n"
        f"[green]{stats.translated} completed[/green]  [dim]{stats.missing} missing[/dim]",
        title="Coverage",
    ))

    table = Table(show_header=True)
    table.add_column("Content", max_width=40)
    for code in selection.locale_codes:
        table.add_column(code, justify="center")

    for content in selection.filtered_contents:
        marks = [STATUS_MARKS[selection.status_of(content.id, code)] for code in selection.locale_codes]
        table.add_row(f"{escape(content.title[:30])} [dim]({content.type})[/dim]", *marks)

    console.print(table)


@cli.command()
@click.option(
    "--type", "-t",
    "content_type",
    type=click.Choice(CONTENT_TYPES),
    default=ALL_TYPES,
    help="Restrict the view to one content type"
)
@click.option("--content", "-c", "content_ids", multiple=True, help="Content ID to select (repeatable)")
@click.option("--locale", "-l", "locale_codes", multiple=True, help="Locale code to select (repeatable)")
@click.option("--all-content", is_flag=True, help="Select every visible content item")
@click.option("--all-locales", is_flag=True, help="Select every target locale")
@click.option("--missing-only", is_flag=True, help="Select everything that is not translated yet")
@click.option("--yes", "-y", is_flag=True, help="Skip the confirmation prompt")
def bulk(
    content_type: str,
    content_ids: Tuple[str, ...],
    locale_codes: Tuple[str, ...],
    all_content: bool,
    all_locales: bool,
    missing_only: bool,
    yes: bool,
):
    """Translate many content items into many locales."""
    _check_config()

    for code in locale_codes:
        try:
            get_locale(code)
        except UnknownLocaleError as e:
            raise click.BadParameter(str(e), param_hint="--locale")

    async def run() -> None:
        async with _make_client() as client:
            selection = await _load_matrix(client, content_type)

            # selection starts empty, so select-all always selects here
            if all_content:
                selection.select_all_content()
            if all_locales:
                selection.select_all_locales()
            if missing_only:
                selection.select_missing_only()
            for content_id in content_ids:
                if content_id not in selection.selected_content_ids:
                    selection.toggle_content(content_id)
            for code in locale_codes:
                if code not in selection.selected_locales:
                    selection.toggle_locale(code)

            work_list = selection.compute_work_list()
            if not work_list:
                console.print("[green]Nothing to translate[/green]")
                return

            console.print(
                f"[blue]Translate {len(work_list)} items[/blue] "
                f"({len(selection.selected_content_ids)} contents x "
                f"{len(selection.selected_locales)} languages)"
            )
            if not yes and not click.confirm("Start bulk translation?"):
                console.print("[yellow]Cancelled[/yellow]")
                return

            with Progress(
                SpinnerColumn(),
                TextColumn("[progress.description]{task.description}"),
                BarColumn(),
                TaskProgressColumn(),
                console=console,
            ) as progress:
                task = progress.add_task("Translating...", total=len(work_list))

                async def update_progress(update: DispatchProgress) -> None:
                    progress.update(task, completed=update.current, description=update.message)

                dispatcher = BulkDispatcher(client, QueryCache(), progress_callback=update_progress)
                result = await dispatcher.run(selection)

            color = "green" if result.success else "yellow"
            console.print(f"[{color}]Bulk translation complete:[/{color}] {result.summary()}")

    try:
        asyncio.run(run())
    except CMSApiError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise click.Abort()


@cli.command()
@click.argument("content_id")
def status(content_id: str):
    """Show translation status for one content item."""
    _check_config()

    async def run():
        async with _make_client() as client:
            return await client.get_translation_status(content_id)

    try:
        report = asyncio.run(run())
    except CMSApiError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise click.Abort()

    console.print(
        f"[cyan]{report.completed_count} / {report.total_locales} languages "
        f"({report.percentage}%)[/cyan]"
    )

    table = Table(show_header=True)
    table.add_column("Tier", style="dim")
    table.add_column("Locale")
    table.add_column("Status")
    for locale in SUPPORTED_LOCALES:
        unit_status = report.status_of(locale.code)
        table.add_row(str(locale.tier), f"{locale.code} {locale.name}", f"{STATUS_MARKS[unit_status]} {unit_status.value}")

    console.print(table)


@cli.command()
@click.argument("content_id")
@click.option(
    "--tier", "-t",
    "tiers",
    multiple=True,
    type=click.IntRange(1, 4),
    help="Tier to translate (repeatable, defaults to DEFAULT_TIERS)"
)
@click.option("--all-tiers", is_flag=True, help="Translate into every supported locale")
@click.option("--wait/--no-wait", default=True, help="Poll until the translation completes")
def translate(content_id: str, tiers: Tuple[int, ...], all_tiers: bool, wait: bool):
    """Translate one content item into the selected tiers."""
    _check_config()

    selected: List[int] = [] if all_tiers else list(tiers or config.default_tiers)

    async def run() -> Optional[JobStatus]:
        async with _make_client() as client:
            manager = TranslationManager(
                client,
                content_id,
                initial_delay=config.poll_initial_delay,
                poll_interval=config.poll_interval,
                selected_tiers=selected,
                notify=_print_notice,
            )
            if selected:
                console.print(f"[blue]Selected:[/blue] {manager.selected_language_count} languages")
            else:
                console.print("[blue]Selected:[/blue] all languages")

            if await manager.start_translation() is None:
                return manager.job_status
            if not wait:
                await manager.close()
                return manager.job_status

            try:
                with console.status("Translation in progress..."):
                    return await manager.wait()
            finally:
                await manager.close()

    outcome = asyncio.run(run())
    if outcome is JobStatus.FAILED:
        raise click.exceptions.Exit(1)


@cli.command()
@click.argument("content_id")
def cancel(content_id: str):
    """Cancel pending translations for one content item."""
    _check_config()

    async def run():
        async with _make_client() as client:
            return await client.cancel_translation(content_id)

    try:
        response = asyncio.run(run())
    except CMSApiError as e:
        console.print(f"[red]Failed to cancel:[/red] {escape(str(e))}")
        raise click.Abort()

    console.print(f"[green]Translation cancelled[/green] ({response.cancelled_count} pending)")


@cli.command()
@click.argument("content_id")
@click.argument("locale")
def preview(content_id: str, locale: str):
    """Preview one locale's translation of a content item."""
    _check_config()

    try:
        get_locale(locale)
    except UnknownLocaleError as e:
        raise click.BadParameter(str(e), param_hint="LOCALE")

    async def run():
        async with _make_client() as client:
            manager = TranslationManager(client, content_id, notify=_print_notice)
            return await manager.preview_translation(locale)

    record = asyncio.run(run())
    if record is None:
        console.print(f"[yellow]No {locale} translation for {content_id}[/yellow]")
        return

    panel_content = (
        f"[bold]{escape(record.title or '')}[/bold]\n"
        f"{escape(record.meta_description) if record.meta_description else '[dim]No meta description[/dim]'}\n\n"
        f"[dim]Blocks:[/dim] {len(record.blocks)}  [dim]Status:[/dim] {record.status.value}"
    )
    console.print(Panel(panel_content, title=f"{content_id} ({locale})"))


if __name__ == "__main__":
    cli()
