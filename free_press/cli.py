"""
Command-line interface for the Free Press outlet catalog.

Uses Typer for commands and rich for tables. Global options select the YAML
config file and log level; .env files are loaded for API keys.
"""

from __future__ import annotations

from dataclasses import dataclass
import json
from pathlib import Path

from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table
import typer

from .config import AppConfig, load_config
from .core.catalog import bias_category, catalog_stats, compare_outlets, filter_outlets
from .core.dedup import DuplicateResolver, merge_duplicates
from .core.scoring import recompute_all, recompute_scores
from .discovery import DiscoveryFilters, discover_outlets
from .enrichment import ALL_STEPS, StepResult, refresh_outlet
from .llm.cascade import ProviderCascade, build_cascade
from .llm.tracing import flush, setup_langfuse
from .logging_utils import setup_llm_logger, setup_logging
from .repository import OutletRepository
from .storage import StorageError, create_store, load_seed_outlets

app = typer.Typer(add_completion=False)
console = Console()


@dataclass
class _State:
    cfg: AppConfig
    repository: OutletRepository | None = None


def _state(ctx: typer.Context) -> _State:
    return ctx.obj


def _repository(ctx: typer.Context) -> OutletRepository:
    """Build the repository on first use and load it from the configured store."""
    state = _state(ctx)
    if state.repository is not None:
        return state.repository
    try:
        store = create_store(state.cfg.storage)
    except ValueError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1) from exc
    resolver = DuplicateResolver(
        single_check_threshold=state.cfg.dedup.single_check_threshold,
        bulk_scan_threshold=state.cfg.dedup.bulk_scan_threshold,
    )
    repository = OutletRepository(store=store, resolver=resolver)
    try:
        repository.load()
    except StorageError as exc:
        console.print(f"[red]Could not load outlets: {exc}[/red]")
        raise typer.Exit(code=1) from exc
    state.repository = repository
    return repository


def _save(repository: OutletRepository) -> None:
    if not repository.flush():
        console.print("[red]Failed to save changes; see log for details[/red]")
        raise typer.Exit(code=1)


def _cascade(ctx: typer.Context) -> ProviderCascade:
    cfg = _state(ctx).cfg
    llm_logger = setup_llm_logger(cfg.logging)
    return build_cascade(cfg, llm_logger)


@app.callback()
def main(
    ctx: typer.Context,
    config: Path | None = typer.Option(None, "--config", "-c", exists=True, help="YAML config file."),
    log_level: str | None = typer.Option(None, "--log-level", help="Logging level."),
):
    """Browse, score, de-duplicate and research media outlets."""
    load_dotenv()
    cfg = load_config(str(config) if config else None)
    if log_level:
        cfg.logging.level = log_level
    setup_logging(cfg.logging)
    setup_langfuse(cfg.langfuse)
    ctx.obj = _State(cfg=cfg)
    ctx.call_on_close(flush)


@app.command()
def seed(ctx: typer.Context):
    """Insert the bundled seed outlets, skipping ids and duplicates already present."""
    repository = _repository(ctx)
    added = 0
    for outlet in load_seed_outlets():
        if repository.add(outlet) is outlet:
            added += 1
    _save(repository)
    console.print(f"Seeded {added} outlets ({repository.count()} total)")


@app.command()
def stats(ctx: typer.Context):
    """Show catalog totals and breakdowns by country and bias."""
    summary = catalog_stats(_repository(ctx).get_all())
    console.print(f"Outlets: {summary['total']} (scrapable: {summary['scrapable']})")
    console.print(f"Average Free Press Score: {summary['averageFreePressScore']}")

    for title, key in (("Country", "byCountry"), ("Bias", "byBias")):
        table = Table(title=f"By {title.lower()}")
        table.add_column(title)
        table.add_column("Outlets", justify="right")
        for label, count in sorted(summary[key].items(), key=lambda item: (-item[1], item[0])):
            table.add_row(label, str(count))
        console.print(table)


@app.command("list")
def list_outlets(
    ctx: typer.Context,
    country: str | None = typer.Option(None, "--country", help="Exact country name."),
    bias: str | None = typer.Option(None, "--bias", help="Bias category, e.g. left or center."),
    media_type: str | None = typer.Option(None, "--type", help="Media type, e.g. tv or social."),
    query: str | None = typer.Option(None, "--search", "-s", help="Match name or description."),
    sort: str = typer.Option("score", "--sort", help="score or name."),
):
    """List outlets with optional filters."""
    try:
        outlets = filter_outlets(_repository(ctx).get_all(), country, bias, media_type, query, sort)
    except ValueError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1) from exc

    table = Table()
    table.add_column("ID")
    table.add_column("Name")
    table.add_column("Country")
    table.add_column("Type")
    table.add_column("Bias")
    table.add_column("Score", justify="right")
    for outlet in outlets:
        table.add_row(
            outlet.id,
            outlet.name,
            outlet.country,
            outlet.media_type or "-",
            bias_category(outlet.bias_score),
            str(outlet.free_press_score),
        )
    console.print(table)
    console.print(f"{len(outlets)} outlets")


@app.command()
def show(ctx: typer.Context, outlet_id: str = typer.Argument(..., help="Outlet id.")):
    """Print one outlet as JSON."""
    outlet = _repository(ctx).get(outlet_id)
    if outlet is None:
        console.print(f"[red]Outlet not found: {outlet_id}[/red]")
        raise typer.Exit(code=1)
    console.print_json(json.dumps(outlet.to_dict(), ensure_ascii=False))


@app.command()
def compare(ctx: typer.Context, outlet_ids: list[str] = typer.Argument(..., help="Outlet ids.")):
    """Compare scores and track records side by side."""
    rows = compare_outlets(_repository(ctx).get_all(), outlet_ids)
    if not rows:
        console.print("[red]None of the given outlets exist[/red]")
        raise typer.Exit(code=1)

    labels = [
        ("Country", "country"),
        ("Bias", "bias"),
        ("Bias score", "biasScore"),
        ("Free Press Score", "freePressScore"),
        ("Fact-check accuracy", "factCheckAccuracy"),
        ("Editorial independence", "editorialIndependence"),
        ("Transparency", "transparency"),
        ("Retractions", "retractions"),
        ("Lawsuits", "lawsuits"),
        ("Scandals", "scandals"),
    ]
    table = Table()
    table.add_column("")
    for row in rows:
        table.add_column(row["name"], justify="right")
    for label, key in labels:
        table.add_row(label, *(str(row[key]) for row in rows))
    console.print(table)


@app.command()
def duplicates(ctx: typer.Context):
    """Report duplicate pairs and the groups a merge would collapse."""
    repository = _repository(ctx)
    snapshot = repository.get_all()
    pairs = repository.resolver.find_all_duplicates(snapshot)
    if not pairs:
        console.print("No duplicates found")
        return

    table = Table(title="Duplicate pairs")
    table.add_column("Outlet 1")
    table.add_column("Outlet 2")
    table.add_column("Match")
    table.add_column("Reason")
    for pair in pairs:
        table.add_row(pair.outlet1.id, pair.outlet2.id, pair.match_type, pair.reason)
    console.print(table)

    groups = repository.resolver.group_duplicates(pairs, snapshot)
    for group in groups:
        console.print(f"{group.name}: keep {group.ids[0]}, remove {', '.join(group.ids[1:])}")


@app.command()
def merge(ctx: typer.Context):
    """Keep the first outlet of every duplicate group and remove the rest."""
    repository = _repository(ctx)
    report = merge_duplicates(repository)
    _save(repository)
    for entry in report.entries:
        console.print(f"{entry.name}: kept {entry.kept}, removed {', '.join(entry.removed)}")
    console.print(f"Removed {report.removed} duplicates ({repository.count()} remain)")


@app.command()
def score(
    ctx: typer.Context,
    outlet_id: str | None = typer.Argument(None, help="Outlet id; all outlets when omitted."),
):
    """Recompute Free Press Scores from stored research data."""
    repository = _repository(ctx)
    if outlet_id is None:
        updated = recompute_all(repository)
        _save(repository)
        console.print(f"Recomputed scores for {updated} outlets")
        return

    outlet = recompute_scores(repository, outlet_id)
    if outlet is None:
        console.print(f"[red]Outlet not found: {outlet_id}[/red]")
        raise typer.Exit(code=1)
    _save(repository)
    console.print(
        f"{outlet.name}: score {outlet.free_press_score} "
        f"(fact-check {outlet.fact_check_accuracy}, independence {outlet.editorial_independence}, "
        f"transparency {outlet.transparency})"
    )


@app.command()
def refresh(
    ctx: typer.Context,
    outlet_id: str = typer.Argument(..., help="Outlet id."),
    steps: list[str] | None = typer.Option(
        None, "--step", help=f"Step to run; repeatable. Default: {', '.join(ALL_STEPS)}."
    ),
):
    """Research an outlet with the provider cascade and recompute its scores."""
    repository = _repository(ctx)
    if repository.get(outlet_id) is None:
        console.print(f"[red]Outlet not found: {outlet_id}[/red]")
        raise typer.Exit(code=1)
    cascade = _cascade(ctx)
    if not cascade:
        console.print("[red]No enrichment provider has an API key configured[/red]")
        raise typer.Exit(code=1)

    def _progress(index: int, total: int, result: StepResult) -> None:
        status = "[green]ok[/green]" if result.success else f"[yellow]{result.error}[/yellow]"
        console.print(f"[{index}/{total}] {result.step}: {status}")

    try:
        report = refresh_outlet(repository, outlet_id, cascade, steps or ALL_STEPS, progress=_progress)
    except ValueError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1) from exc
    _save(repository)
    console.print(f"{report.succeeded} steps succeeded, {report.failed} failed")
    if report.scores is not None:
        console.print(f"Free Press Score: {report.scores.free_press_score}")


@app.command()
def discover(
    ctx: typer.Context,
    country: str | None = typer.Option(None, "--country", help="Country or region key, e.g. us."),
    media_types: list[str] | None = typer.Option(None, "--type", help="Media type; repeatable."),
    min_audience: int | None = typer.Option(None, "--min-audience", help="Minimum monthly audience."),
    count: int | None = typer.Option(None, "--count", "-n", help="Outlets to find."),
):
    """Find new outlets and add the ones not already in the catalog."""
    cfg = _state(ctx).cfg
    filters = DiscoveryFilters(
        country=country or cfg.discovery.country,
        media_types=list(media_types or cfg.discovery.media_types),
        min_audience=min_audience if min_audience is not None else cfg.discovery.min_audience,
        outlets_to_find=count if count is not None else cfg.discovery.outlets_to_find,
    )
    repository = _repository(ctx)
    results = discover_outlets(
        repository,
        _cascade(ctx),
        filters,
        max_prompt_names=cfg.enrichment.max_prompt_names,
        curated=cfg.discovery.curated_fallback,
    )
    _save(repository)

    table = Table()
    table.add_column("Outlet")
    table.add_column("Source")
    table.add_column("Result")
    for result in results:
        outcome = f"[green]added as {result.outlet_id}[/green]" if result.success else f"[yellow]{result.error}[/yellow]"
        table.add_row(result.candidate.name, result.source, outcome)
    console.print(table)
    console.print(f"Added {sum(1 for r in results if r.success)} of {len(results)} candidates")


if __name__ == "__main__":
    app()
