"""The closed, ordered set of rating criteria shared by job openings and formulas.

Each criterion is a single descriptor naming both the job-opening attribute that
holds its rating and the formula key that holds its weight, so the two can never
drift out of alignment.

Usage example:
    from job_ranker.domain.criteria import CRITERIA

    for criterion in CRITERIA:
        rating = criterion.rating_of(job)
        weight = formula.weight(criterion.weight_key)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .records import JobOpening

WOW_BOOST_KEY = "wow_boost"


@dataclass(frozen=True)
class Criterion:
    """One rating dimension of a job opening."""

    name: str
    label: str
    rating_field: str
    weight_key: str

    def rating_of(self, job: JobOpening) -> int | None:
        """Return the job's rating for this criterion, or None when unrated."""
        rating: int | None = getattr(job, self.rating_field)
        return rating


def _criterion(name: str, label: str) -> Criterion:
    return Criterion(name=name, label=label, rating_field=f"rating_{name}", weight_key=name)


# Canonical order; scoring iterates in this order.
CRITERIA: tuple[Criterion, ...] = (
    _criterion("impact", "Impact"),
    _criterion("compensation", "Compensation"),
    _criterion("role", "Role"),
    _criterion("tech", "Tech"),
    _criterion("location", "Location"),
    _criterion("industry", "Industry"),
    _criterion("culture", "Culture"),
    _criterion("growth", "Growth"),
    _criterion("profile_match", "Profile match"),
    _criterion("company_size", "Company size"),
    _criterion("stress", "Stress"),
    _criterion("job_security", "Job security"),
)

CRITERION_NAMES: tuple[str, ...] = tuple(criterion.name for criterion in CRITERIA)
WEIGHT_KEYS: frozenset[str] = frozenset(
    {criterion.weight_key for criterion in CRITERIA} | {WOW_BOOST_KEY}
)
