"""WV Runs CLI application.

Usage:
    wvruns results template > results.csv
    wvruns results import results.csv --meet mountaineer-invite --name "Mountaineer Invite" --date 2024-09-14
    wvruns results list mountaineer-invite
    wvruns athletes graduate
    wvruns athletes advance --skip-already-advanced
    wvruns season set 2025 7 10
    wvruns season archive 2025
"""

from datetime import date, datetime
from pathlib import Path
from typing import NoReturn

import typer
from dotenv import load_dotenv

# Load .env file for store settings
load_dotenv()
from rich.console import Console
from rich.table import Table

from wvruns import bind_context, configure_logging
from wvruns.config import get_settings
from wvruns.dao import MeetDAO, ResultDAO, SchoolDAO
from wvruns.errors import WVRunsError
from wvruns.models import Meet
from wvruns.services.import_schemas import ImportReport
from wvruns.services.import_service import ImportService, csv_template
from wvruns.services.lifecycle import Active, Graduated, Senior
from wvruns.services.normalizer import calculate_pace, format_duration
from wvruns.services.season_service import BulkTransitionResult, SeasonService
from wvruns.store import Store, get_store

console = Console()
app = typer.Typer(
    name="wvruns",
    help="WV cross country results and roster CLI",
    no_args_is_help=True,
)

DATE_FORMATS = ["%Y-%m-%d"]


@app.callback()
def main_callback():
    """WV cross country results and roster CLI."""
    configure_logging()


def _store() -> Store:
    return get_store(get_settings())


def _fail(e: Exception) -> NoReturn:
    console.print(f"[red]Error: {e}[/red]")
    raise typer.Exit(1) from None


def _as_date(value: datetime | None) -> date:
    return value.date() if value else date.today()


# =============================================================================
# RESULTS COMMANDS
# =============================================================================

results_app = typer.Typer(help="Import and list meet results", no_args_is_help=True)
app.add_typer(results_app, name="results")


def _display_import_report(report: ImportReport) -> None:
    """Display rejected rows and the batch outcome."""
    if report.rejected:
        console.print(f"\n[red]Rejected rows ({report.rejected_count}):[/red]")
        for row in report.rejected[:10]:
            for reason in row.reasons:
                console.print(f"  Row {row.row_number}: {reason}")
        if report.rejected_count > 10:
            console.print(f"  [dim]... and {report.rejected_count - 10} more rows[/dim]")

    console.print()
    if report.failure:
        console.print(f"[red]{report.failure_reason}: {report.failure}[/red]")
    elif report.persisted:
        if report.meet_created:
            console.print(f"[green]Created meet {report.meet_slug}[/green]")
        console.print(f"[green]Imported {report.accepted_count} results[/green]")
    elif report.dry_run:
        console.print(
            f"[yellow]Dry run - {report.accepted_count} rows would be imported, "
            "no changes made[/yellow]"
        )
    else:
        console.print("[yellow]No valid rows to import[/yellow]")


@results_app.command("import")
def results_import(
    csv_path: Path = typer.Argument(..., help="Path to results CSV file"),
    meet_slug: str = typer.Option(..., "--meet", "-m", help="Meet slug"),
    meet_name: str = typer.Option(..., "--name", help="Meet name (used if the meet is new)"),
    meet_date: datetime = typer.Option(..., "--date", formats=DATE_FORMATS, help="Meet date"),
    location: str = typer.Option(None, "--location", help="Meet location"),
    description: str = typer.Option(None, "--description", help="Meet description"),
    batch_id: str = typer.Option(None, "--batch-id", help="Tag rows with an import batch id"),
    dry_run: bool = typer.Option(False, "--dry-run", "-n", help="Validate only, don't import"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
):
    """Import meet results from a CSV file.

    Expected columns: athlete_name, school_slug, gender, time, distance, place

    Re-importing the same file adds every row again. Pass --batch-id to
    have an already-imported batch refused.

    Example:
        wvruns results import results.csv --meet wv-state-2024 --name "WV State" --date 2024-11-02
    """
    if not csv_path.exists():
        console.print(f"[red]File not found: {csv_path}[/red]")
        raise typer.Exit(1)

    try:
        meet = Meet(
            slug=meet_slug,
            name=meet_name,
            date=meet_date.date(),
            location=location,
            description=description,
        )
        bind_context(meet_slug=meet.slug, batch_id=batch_id)
        service = ImportService(_store())

        if batch_id and service.result_dao.has_batch(batch_id):
            console.print(f"[red]Batch '{batch_id}' has already been imported[/red]")
            raise typer.Exit(1)

        preview = service.import_file(meet, csv_path, batch_id=batch_id, dry_run=True)
        if dry_run or not preview.accepted:
            _display_import_report(preview)
            raise typer.Exit(0 if preview.accepted else 1)

        console.print(
            f"[cyan]{preview.accepted_count} of {preview.total_rows} rows are valid[/cyan]"
        )
        if not yes and not typer.confirm(f"Import {preview.accepted_count} results?"):
            console.print("[yellow]Cancelled[/yellow]")
            raise typer.Exit(0)

        with console.status("Importing results..."):
            report = service.import_file(meet, csv_path, batch_id=batch_id)
    except (WVRunsError, ValueError) as e:
        _fail(e)

    _display_import_report(report)
    if not report.success:
        raise typer.Exit(1)


@results_app.command("template")
def results_template(
    output: Path = typer.Option(None, "--output", "-o", help="Write to file instead of stdout"),
):
    """Print the results CSV template."""
    template = csv_template()
    if output is None:
        typer.echo(template)
        return

    output.write_text(template + "\n")
    console.print(f"[green]Created:[/green] {output}")


@results_app.command("list")
def results_list(
    meet_slug: str = typer.Argument(..., help="Meet slug"),
):
    """List results for a meet, fastest first."""
    try:
        store = _store()
        meet = MeetDAO(store).get_by_slug(meet_slug)
        results = ResultDAO(store).find_by_meet(meet_slug)
        school_names = SchoolDAO(store).get_names()
    except WVRunsError as e:
        _fail(e)

    if not results:
        console.print("[yellow]No results found[/yellow]")
        return

    title = meet.name if meet else meet_slug
    table = Table(title=f"{title} ({len(results)})")
    table.add_column("Place", style="dim")
    table.add_column("Athlete", style="cyan")
    table.add_column("School")
    table.add_column("Time")
    table.add_column("Pace")

    for result in results:
        seconds = result.time_seconds
        table.add_row(
            str(result.place) if result.place is not None else "-",
            result.athlete_name,
            school_names.get(result.school_slug) or result.school_slug or "-",
            format_duration(seconds) if seconds is not None else "-",
            (calculate_pace(seconds, result.distance_meters) or "-") if seconds else "-",
        )

    console.print(table)


# =============================================================================
# ATHLETE COMMANDS
# =============================================================================

athletes_app = typer.Typer(help="Athlete lifecycle commands", no_args_is_help=True)
app.add_typer(athletes_app, name="athletes")


def _display_transition(result: BulkTransitionResult, verb: str) -> None:
    console.print(
        f"[green]{verb} {result.count} athletes (academic year {result.academic_year})[/green]"
    )
    if result.skipped:
        console.print(f"[yellow]Skipped {len(result.skipped)} already advanced[/yellow]")
    if result.failed:
        console.print(f"[red]Failed ({len(result.failed)}): {', '.join(result.failed)}[/red]")


@athletes_app.command("advance")
def athletes_advance(
    on: datetime = typer.Option(None, "--date", formats=DATE_FORMATS, help="Reference date"),
    skip_already_advanced: bool = typer.Option(
        False,
        "--skip-already-advanced",
        help="Skip athletes already advanced this academic year",
    ),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
):
    """Move every non-graduated athlete one year closer to graduation.

    Running this twice in one academic year advances twice unless
    --skip-already-advanced is given.
    """
    if not yes and not typer.confirm("Advance all athletes?"):
        console.print("[yellow]Cancelled[/yellow]")
        raise typer.Exit(0)

    try:
        result = SeasonService(_store()).advance_all_athletes(
            _as_date(on), skip_already_advanced=skip_already_advanced
        )
    except WVRunsError as e:
        _fail(e)

    _display_transition(result, "Advanced")
    if not result.success:
        raise typer.Exit(1)


@athletes_app.command("graduate")
def athletes_graduate(
    on: datetime = typer.Option(None, "--date", formats=DATE_FORMATS, help="Reference date"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
):
    """Graduate this academic year's seniors."""
    if not yes and not typer.confirm("Graduate all seniors?"):
        console.print("[yellow]Cancelled[/yellow]")
        raise typer.Exit(0)

    try:
        result = SeasonService(_store()).graduate_all_seniors(_as_date(on))
    except WVRunsError as e:
        _fail(e)

    _display_transition(result, "Graduated")
    if not result.success:
        raise typer.Exit(1)


@athletes_app.command("status")
def athletes_status(
    slug: str = typer.Argument(..., help="Athlete slug"),
    on: datetime = typer.Option(None, "--date", formats=DATE_FORMATS, help="Reference date"),
):
    """Show an athlete's lifecycle standing."""
    try:
        view = SeasonService(_store()).classify_athlete(slug, _as_date(on))
    except WVRunsError as e:
        _fail(e)

    standing = view.standing
    if isinstance(standing, Graduated):
        summary = f"[dim]Graduated {standing.graduated_year} ({standing.years_ago} years ago)[/dim]"
    elif isinstance(standing, Senior):
        summary = (
            f"[magenta]Senior[/magenta], {standing.days_until_graduation} days until graduation"
        )
    elif isinstance(standing, Active):
        summary = f"[green]{standing.grade}[/green]"
    else:
        summary = "[yellow]Unknown[/yellow]"

    table = Table(title="Athlete Details")
    table.add_column("Field", style="cyan")
    table.add_column("Value")

    table.add_row("Name", view.athlete.name)
    table.add_row("School", view.athlete.school_slug or "-")
    table.add_row("Graduation Year", str(view.athlete.graduation_year))
    table.add_row("Status", view.athlete.status.value)
    table.add_row("Standing", summary)
    table.add_row("Academic Year", str(view.academic_year))

    console.print(table)


@athletes_app.command("roster")
def athletes_roster(
    on: datetime = typer.Option(None, "--date", formats=DATE_FORMATS, help="Reference date"),
):
    """Count athletes by lifecycle state."""
    try:
        summary = SeasonService(_store()).roster_summary(_as_date(on))
    except WVRunsError as e:
        _fail(e)

    table = Table(title=f"Roster, academic year {summary.academic_year} ({summary.total})")
    table.add_column("Group", style="cyan")
    table.add_column("Athletes", justify="right")

    for state, count in sorted(summary.by_state.items()):
        table.add_row(state.value, str(count))
    for grade, count in sorted(summary.by_grade.items()):
        table.add_row(f"  {grade}", str(count))

    console.print(table)


@athletes_app.command("set-graduation-year")
def athletes_set_graduation_year(
    slug: str = typer.Argument(..., help="Athlete slug"),
    year: int = typer.Argument(..., help="Corrected graduation year"),
):
    """Correct an athlete's graduation year."""
    try:
        athlete = SeasonService(_store()).correct_graduation_year(slug, year)
    except WVRunsError as e:
        _fail(e)

    console.print(f"[green]{athlete.name} now graduates in {athlete.graduation_year}[/green]")


# =============================================================================
# SEASON COMMANDS
# =============================================================================

season_app = typer.Typer(help="Season commands", no_args_is_help=True)
app.add_typer(season_app, name="season")


@season_app.command("current")
def season_current():
    """Show the current season."""
    try:
        season = SeasonService(_store()).get_current_season()
    except WVRunsError as e:
        _fail(e)

    if not season:
        console.print("[yellow]No current season is set[/yellow]")
        return

    console.print(
        f"Season {season.year}: months {season.start_month}-{season.end_month} (0 = January)"
    )


@season_app.command("set")
def season_set(
    year: int = typer.Argument(..., help="Season year"),
    start_month: int = typer.Argument(..., min=0, max=11, help="Start month (0-11)"),
    end_month: int = typer.Argument(..., min=0, max=11, help="End month (0-11)"),
):
    """Replace the current season."""
    try:
        season = SeasonService(_store()).set_current_season(year, start_month, end_month)
    except WVRunsError as e:
        _fail(e)

    console.print(f"[green]Current season set to {season.year}[/green]")


@season_app.command("archive")
def season_archive(
    year: int = typer.Argument(..., help="Year to archive the current season under"),
):
    """Archive the current season. Each year can be archived once."""
    try:
        archived = SeasonService(_store()).archive_season(year)
    except WVRunsError as e:
        _fail(e)

    console.print(
        f"[green]Archived season {archived.year} as {year} "
        f"at {archived.archived_at:%Y-%m-%d %H:%M}[/green]"
    )


@season_app.command("archived")
def season_archived():
    """List archived seasons."""
    try:
        seasons = SeasonService(_store()).list_archived_seasons()
    except WVRunsError as e:
        _fail(e)

    if not seasons:
        console.print("[yellow]No archived seasons[/yellow]")
        return

    table = Table(title=f"Archived Seasons ({len(seasons)})")
    table.add_column("Year", style="cyan")
    table.add_column("Months")
    table.add_column("Archived At", style="dim")

    for season in seasons:
        table.add_row(
            str(season.year),
            f"{season.start_month}-{season.end_month}",
            season.archived_at.isoformat(timespec="seconds"),
        )

    console.print(table)


@season_app.command("show")
def season_show(
    year: int = typer.Argument(..., help="Calendar year"),
):
    """Show meets, results and athletes for a calendar year."""
    try:
        data = SeasonService(_store()).get_season_data(year)
    except WVRunsError as e:
        _fail(e)

    console.print(
        f"[cyan]Season {data.year}:[/cyan] {data.meet_count} meets, "
        f"{data.result_count} results, {data.athlete_count} athletes"
    )
    if not data.meets:
        return

    table = Table(title="Meets")
    table.add_column("Date", style="dim")
    table.add_column("Slug", style="cyan")
    table.add_column("Name")
    table.add_column("Location")

    for meet in data.meets:
        table.add_row(meet.date.isoformat(), meet.slug, meet.name, meet.location or "-")

    console.print(table)


def main():
    """Entry point for CLI."""
    app()


if __name__ == "__main__":
    main()
