"""Listing rules applied around the scoring engine.

Filtering and the choice of formula happen here; the engine only scores and
orders whatever it is given.
"""

from __future__ import annotations

from collections.abc import Collection, Iterable, Sequence
from datetime import UTC, datetime

from ..domain.records import (
    ACTIVE_FILTER,
    ACTIVE_STATUSES,
    ALL_FILTER,
    APPLICATION_STATUSES,
    STATUS_FILTERS,
    ApplicationStatus,
    JobOpening,
    ScoringFormula,
)
from ..domain.scoring import RankedJobOpening, rank_job_openings
from ..exceptions import SortOrderError, StatusFilterError


def statuses_for_filter(status_filter: str) -> frozenset[str] | None:
    """Map a status filter to the statuses it keeps.

    ``"active"`` keeps the active statuses, ``"all"`` returns None (no filter) and
    a single application status keeps only that status.
    """
    if status_filter not in STATUS_FILTERS:
        raise StatusFilterError(status_filter)
    if status_filter == ALL_FILTER:
        return None
    if status_filter == ACTIVE_FILTER:
        return frozenset(ACTIVE_STATUSES)
    return frozenset({status_filter})


def filter_job_openings(
    jobs: Iterable[JobOpening],
    *,
    country: str | None = None,
    statuses: Collection[str] | None = None,
) -> list[JobOpening]:
    """Keep jobs matching the country and status filters, in input order.

    ``country`` of None or ``"all"`` disables the country filter; ``statuses`` of
    None disables the status filter.
    """
    wanted_country = None if country is None or country.lower() == "all" else country.upper()
    selected: list[JobOpening] = []
    for job in jobs:
        if wanted_country is not None and job.country != wanted_country:
            continue
        if statuses is not None and job.status not in statuses:
            continue
        selected.append(job)
    return selected


def available_countries(jobs: Iterable[JobOpening]) -> list[str]:
    """Return the distinct countries present on the jobs, sorted."""
    return sorted({job.country for job in jobs if job.country})


def count_by_status(jobs: Iterable[JobOpening]) -> dict[ApplicationStatus, int]:
    """Count jobs per application status, listing every status even when zero."""
    counts: dict[ApplicationStatus, int] = dict.fromkeys(APPLICATION_STATUSES, 0)
    for job in jobs:
        counts[job.status] += 1
    return counts


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def _sort_newest_first(ranked: Sequence[RankedJobOpening]) -> list[RankedJobOpening]:
    dated: list[tuple[datetime, RankedJobOpening]] = []
    undated: list[RankedJobOpening] = []
    for item in ranked:
        if item.job.date_added is None:
            undated.append(item)
        else:
            dated.append((_as_utc(item.job.date_added), item))
    dated.sort(key=lambda pair: pair[0], reverse=True)
    # Undated jobs go last, in their existing order.
    return [item for _, item in dated] + undated


def list_ranked_job_openings(
    jobs: Sequence[JobOpening],
    formula: ScoringFormula | None,
    *,
    sort_by: str = "score",
) -> list[RankedJobOpening]:
    """Pair jobs with scores for display.

    Without a formula every job scores 0 and keeps its input order. ``sort_by``
    of ``"date"`` re-orders the result newest first by ``date_added``; naive
    timestamps are read as UTC.
    """
    if sort_by not in {"score", "date"}:
        raise SortOrderError(sort_by)

    if formula is None:
        ranked = [RankedJobOpening(job=job, score=0) for job in jobs]
    else:
        ranked = rank_job_openings(jobs, formula)

    if sort_by == "date":
        return _sort_newest_first(ranked)
    return ranked
