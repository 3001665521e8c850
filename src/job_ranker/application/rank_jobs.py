"""Rank jobs: load openings and formulas, rank, and write CSV outputs.

Outputs:
- ranked_jobs.csv: one row per listed job with its rank and score
- ranked_jobs_explain.csv: per-criterion points behind each score
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

import pandas as pd

from ..config import RankerConfig
from ..domain.criteria import CRITERIA
from ..domain.records import ApplicationStatus, ScoringFormula
from ..domain.scoring import RankedJobOpening, explain_score
from ..infrastructure import LocalFileSystem
from ..observability import get_logger
from ..protocols import FileSystem
from .formulas import load_formula_catalog, resolve_formula
from .job_openings import load_job_openings
from .listing import (
    count_by_status,
    filter_job_openings,
    list_ranked_job_openings,
    statuses_for_filter,
)

RANKED_COLUMNS: tuple[str, ...] = (
    "rank",
    "score",
    "id",
    "title",
    "company",
    "country",
    "status",
    "wow",
)
EXPLAIN_COLUMNS: tuple[str, ...] = (
    "id",
    "score",
    *(f"points_{criterion.name}" for criterion in CRITERIA),
    "wow_boost",
)


@dataclass(frozen=True)
class RankJobsResult:
    """Summary of a rank-jobs run."""

    ranked: tuple[RankedJobOpening, ...]
    formula_name: str | None
    status: str
    status_counts: Mapping[ApplicationStatus, int]
    total_jobs: int
    listed_jobs: int
    ranked_path: Path
    explain_path: Path


def _ranked_frame(ranked: list[RankedJobOpening]) -> pd.DataFrame:
    rows = [
        {
            "rank": position,
            "score": item.score,
            "id": item.job.id,
            "title": item.job.title,
            "company": item.job.company,
            "country": item.job.country or "",
            "status": item.job.status,
            "wow": item.job.wow,
        }
        for position, item in enumerate(ranked, start=1)
    ]
    return pd.DataFrame(rows, columns=list(RANKED_COLUMNS))


def _explain_frame(
    ranked: list[RankedJobOpening],
    formula: ScoringFormula | None,
) -> pd.DataFrame:
    rows: list[dict[str, object]] = []
    for item in ranked:
        row: dict[str, object] = {"id": item.job.id, "score": item.score}
        breakdown = explain_score(item.job, formula) if formula is not None else None
        for criterion in CRITERIA:
            points = breakdown.points_for(criterion.name) if breakdown is not None else None
            # Unrated criteria stay blank rather than 0.
            row[f"points_{criterion.name}"] = "" if points is None else points
        row["wow_boost"] = breakdown.wow_boost if breakdown is not None else 0
        rows.append(row)
    return pd.DataFrame(rows, columns=list(EXPLAIN_COLUMNS))


def run_rank_jobs(
    *,
    config: RankerConfig,
    fs: FileSystem | None = None,
    jobs_path: str | Path | None = None,
    formulas_path: str | Path | None = None,
    out_dir: str | Path | None = None,
) -> RankJobsResult:
    """Rank job openings under the configured formula and write CSV outputs.

    Args:
        config: Ranker configuration (load at the entry point).
        fs: Optional filesystem for testing.
        jobs_path: Job openings JSON; defaults to ``config.jobs_path``.
        formulas_path: Formula catalogue JSON; defaults to ``config.formulas_path``.
        out_dir: Output directory; defaults to ``config.output_dir``.

    Returns:
        RankJobsResult with the ranked jobs and output paths.
    """
    fs = fs or LocalFileSystem()
    logger = get_logger("job_ranker.rank_jobs", level=config.log_level)
    jobs_path = Path(jobs_path or config.jobs_path)
    formulas_path = Path(formulas_path or config.formulas_path)
    out_dir = Path(out_dir or config.output_dir)
    fs.mkdir(out_dir, parents=True)

    jobs = load_job_openings(path=jobs_path, fs=fs)
    catalog = load_formula_catalog(path=formulas_path, fs=fs)
    formula = resolve_formula(catalog, config.formula_name)
    logger.info("Loaded %s job openings and %s formulas", len(jobs), len(catalog.formulas))

    if formula is None:
        logger.warning("No scoring formulas found; jobs are listed without scores")
    else:
        logger.info("Formula: %s", formula.name)

    status_counts = count_by_status(jobs)
    statuses = statuses_for_filter(config.status)
    selected = filter_job_openings(jobs, country=config.country, statuses=statuses)
    logger.info(
        "Filtered (%s): %s of %s job openings", config.status, len(selected), len(jobs)
    )

    ranked = list_ranked_job_openings(selected, formula, sort_by=config.sort_by)
    if config.limit is not None:
        ranked = ranked[: config.limit]

    ranked_path = out_dir / "ranked_jobs.csv"
    fs.write_csv(_ranked_frame(ranked), ranked_path)
    logger.info("Ranked: %s (%s jobs)", ranked_path, len(ranked))

    explain_path = out_dir / "ranked_jobs_explain.csv"
    fs.write_csv(_explain_frame(ranked, formula), explain_path)
    logger.info("Explainability: %s", explain_path)

    return RankJobsResult(
        ranked=tuple(ranked),
        formula_name=formula.name if formula is not None else None,
        status=config.status,
        status_counts=status_counts,
        total_jobs=len(jobs),
        listed_jobs=len(ranked),
        ranked_path=ranked_path,
        explain_path=explain_path,
    )
