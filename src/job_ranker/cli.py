"""CLI for the job ranker.

Commands:
- rank: Rank job openings under a scoring formula and write CSV outputs
- score: Show the per-criterion breakdown of one job opening's score
- formulas: List the scoring formulas in the catalogue
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Annotated, Protocol

import typer
from rich import print as rprint

from . import __version__
from .application.formulas import load_formula_catalog, resolve_formula
from .application.job_openings import find_job_opening, load_job_openings
from .application.rank_jobs import RankJobsResult, run_rank_jobs
from .config import RankerConfig
from .config_file import load_ranker_config_file
from .domain.criteria import CRITERIA
from .domain.scoring import explain_score
from .protocols import FileSystem


class DependenciesBuilder(Protocol):
    """Protocol for constructing CLI dependencies."""

    def __call__(self, *, config: RankerConfig) -> CliDependencies:
        """Build dependencies for CLI commands."""
        ...


@dataclass(frozen=True)
class CliDependencies:
    """Concrete dependencies required by the CLI."""

    fs: FileSystem


@dataclass(frozen=True)
class CliContext:
    """Runtime CLI context for a single command invocation."""

    config: RankerConfig
    deps_builder: DependenciesBuilder

    def build_dependencies(self, *, config: RankerConfig | None = None) -> CliDependencies:
        """Return dependencies using the configured builder."""
        return self.deps_builder(config=config or self.config)


class CliContextNotInitialisedError(typer.BadParameter):
    """Raised when CLI context is missing."""

    def __init__(self) -> None:
        super().__init__("CLI context is not initialised. Use the job-ranker entry point.")


def _get_context(ctx: typer.Context) -> CliContext:
    if not isinstance(ctx.obj, CliContext):
        raise CliContextNotInitialisedError()
    return ctx.obj


def _version_callback(value: bool) -> None:
    if value:
        rprint(f"job-ranker {__version__}")
        raise typer.Exit()


def _print_ranked(result: RankJobsResult) -> None:
    for position, item in enumerate(result.ranked, start=1):
        wow = " [magenta]★[/magenta]" if item.job.wow else ""
        rprint(
            f"  {position:>3}. [bold]{item.score:>4}[/bold]  "
            f"{item.job.title} @ {item.job.company}{wow}"
        )


def _print_status_counts(result: RankJobsResult) -> None:
    counts = ", ".join(f"{status} {count}" for status, count in result.status_counts.items())
    rprint(f"  [dim]by status:[/dim] {counts}")


def create_app(deps_builder: DependenciesBuilder) -> typer.Typer:
    """Create a Typer app wired with the provided dependencies builder."""
    app = typer.Typer(
        add_completion=False,
        help="Job ranker: score job openings against weighted criteria and rank them",
    )

    @app.callback()
    def main(
        ctx: typer.Context,
        config_path: Annotated[
            Path | None,
            typer.Option(
                "--config",
                help="TOML config file (overrides environment values)",
            ),
        ] = None,
        version: Annotated[
            bool,
            typer.Option(
                "--version",
                callback=_version_callback,
                is_eager=True,
                help="Show the package version and exit",
            ),
        ] = False,
    ) -> None:
        """Initialise CLI context."""
        _ = version
        config = RankerConfig.from_env()
        if config_path is not None:
            deps = deps_builder(config=config)
            config = config.with_file_overrides(
                load_ranker_config_file(path=config_path, fs=deps.fs)
            )
        ctx.obj = CliContext(config=config, deps_builder=deps_builder)

    @app.command()
    def rank(
        ctx: typer.Context,
        jobs_path: Annotated[
            Path | None,
            typer.Option("--jobs", "-j", help="Job openings JSON file"),
        ] = None,
        formulas_path: Annotated[
            Path | None,
            typer.Option("--formulas", "-f", help="Scoring formulas JSON file"),
        ] = None,
        formula: Annotated[
            str | None,
            typer.Option("--formula", help="Formula id or name (default: first in catalogue)"),
        ] = None,
        country: Annotated[
            str | None,
            typer.Option("--country", "-c", help="Only list jobs in this country (e.g. DE)"),
        ] = None,
        sort_by: Annotated[
            str | None,
            typer.Option("--sort", help="Order by 'score' (default) or 'date'"),
        ] = None,
        status: Annotated[
            str | None,
            typer.Option(
                "--status",
                "-s",
                help="'active' (default), 'all' or one status such as 'rejected'",
            ),
        ] = None,
        limit: Annotated[
            int | None,
            typer.Option("--limit", "-n", min=1, help="Only keep the top N jobs"),
        ] = None,
        out_dir: Annotated[
            Path | None,
            typer.Option("--output-dir", "-o", help="Directory for output files"),
        ] = None,
    ) -> None:
        """Rank job openings by score and write ranked and explainability CSVs."""
        state = _get_context(ctx)
        config = state.config.with_overrides(
            jobs_path=str(jobs_path) if jobs_path is not None else None,
            formulas_path=str(formulas_path) if formulas_path is not None else None,
            formula_name=formula,
            country=country,
            sort_by=sort_by,
            status=status,
            limit=limit,
            output_dir=str(out_dir) if out_dir is not None else None,
        )
        deps = state.build_dependencies(config=config)
        result = run_rank_jobs(config=config, fs=deps.fs)

        if result.formula_name is None:
            rprint("[yellow]No scoring formulas found. Jobs are listed without scores.[/yellow]")
        else:
            rprint(f"[green]✓ Ranked with formula:[/green] {result.formula_name}")
        rprint(
            f"  {result.total_jobs:,} job openings → {result.listed_jobs:,} listed"
            f" (status: {result.status})"
        )
        _print_status_counts(result)
        _print_ranked(result)
        rprint(f"  ranked: {result.ranked_path}")
        rprint(f"  explain: {result.explain_path}")

    @app.command()
    def score(
        ctx: typer.Context,
        job_id: Annotated[str, typer.Argument(help="Id of the job opening to explain")],
        formula: Annotated[
            str | None,
            typer.Option("--formula", help="Formula id or name (default: first in catalogue)"),
        ] = None,
    ) -> None:
        """Show how one job opening's score is made up."""
        state = _get_context(ctx)
        config = state.config.with_overrides(formula_name=formula)
        deps = state.build_dependencies(config=config)
        jobs = load_job_openings(path=Path(config.jobs_path), fs=deps.fs)
        job = find_job_opening(jobs, job_id)
        catalog = load_formula_catalog(path=Path(config.formulas_path), fs=deps.fs)
        selected = resolve_formula(catalog, config.formula_name)
        if selected is None:
            rprint("[yellow]No scoring formulas found.[/yellow]")
            raise typer.Exit(code=1)

        breakdown = explain_score(job, selected)
        rprint(f"[bold]{job.title}[/bold] @ {job.company} ({selected.name})")
        for criterion in CRITERIA:
            rating = criterion.rating_of(job)
            if rating is None:
                rprint(f"  {criterion.label:<14} [dim]unrated[/dim]")
                continue
            weight = selected.weight(criterion.weight_key)
            points = breakdown.points_for(criterion.name)
            rprint(f"  {criterion.label:<14} {rating:>2} × {weight:>3} = {points:>4}")
        if job.wow:
            rprint(f"  {'Wow boost':<14} {breakdown.wow_boost:>17}")
        rprint(f"[green]Score: {breakdown.total}[/green]")

    @app.command(name="formulas")
    def list_formulas(ctx: typer.Context) -> None:
        """List the scoring formulas in the catalogue."""
        state = _get_context(ctx)
        deps = state.build_dependencies()
        catalog = load_formula_catalog(path=Path(state.config.formulas_path), fs=deps.fs)
        if not catalog.formulas:
            rprint("[yellow]No scoring formulas found.[/yellow]")
            return
        default = resolve_formula(catalog, state.config.formula_name)
        for item in catalog.formulas:
            is_default = default is not None and item.id == default.id
            marker = " [green](default)[/green]" if is_default else ""
            rprint(f"  {item.name} [dim]{item.id}[/dim]{marker}")

    _ = (main, rank, score, list_formulas)

    return app
