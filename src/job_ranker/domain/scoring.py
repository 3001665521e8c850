"""Domain scoring rules: weighted criterion sums and score-ordered ranking.

A score is the sum of ``rating * weight`` over every rated criterion, plus the
formula's flat wow boost when the job is flagged as wow. Unrated criteria are
skipped; missing weights count as 0. Weights may be negative.

Usage example:
    from job_ranker.domain.records import JobOpening, ScoringFormula
    from job_ranker.domain.scoring import calculate_score, rank_job_openings

    job = JobOpening(id="1", title="Engineer", company="Acme", rating_impact=1)
    formula = ScoringFormula(id="f1", name="Default", weights={"impact": 2})

    assert calculate_score(job, formula) == 2
    ranked = rank_job_openings([job], formula)
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from .criteria import CRITERIA, Criterion
from .records import JobOpening, ScoringFormula


@dataclass(frozen=True)
class CriterionContribution:
    """The score term contributed by one rated criterion."""

    criterion: Criterion
    rating: int
    weight: int

    @property
    def points(self) -> int:
        return self.rating * self.weight


@dataclass(frozen=True)
class ScoreBreakdown:
    """Per-criterion terms behind a job's score."""

    contributions: tuple[CriterionContribution, ...]
    wow_boost: int

    @property
    def total(self) -> int:
        """Sum of all criterion terms plus the applied wow boost."""
        return sum(c.points for c in self.contributions) + self.wow_boost

    def points_for(self, criterion_name: str) -> int | None:
        """Return the points for a criterion, or None when it was unrated."""
        for contribution in self.contributions:
            if contribution.criterion.name == criterion_name:
                return contribution.points
        return None


@dataclass(frozen=True)
class RankedJobOpening:
    """A job opening paired with its score under one formula."""

    job: JobOpening
    score: int


def explain_score(job: JobOpening, formula: ScoringFormula) -> ScoreBreakdown:
    """Break a job's score down into one term per rated criterion."""
    contributions: list[CriterionContribution] = []
    for criterion in CRITERIA:
        rating = criterion.rating_of(job)
        if rating is None:
            continue
        contributions.append(
            CriterionContribution(
                criterion=criterion,
                rating=rating,
                weight=formula.weight(criterion.weight_key),
            )
        )
    return ScoreBreakdown(
        contributions=tuple(contributions),
        wow_boost=formula.wow_boost if job.wow else 0,
    )


def calculate_score(job: JobOpening, formula: ScoringFormula) -> int:
    """Calculate the weighted score of a job opening under a formula."""
    score = 0
    for criterion in CRITERIA:
        rating = criterion.rating_of(job)
        if rating is not None:
            score += rating * formula.weight(criterion.weight_key)

    if job.wow:
        score += formula.wow_boost

    return score


def rank_job_openings(
    jobs: Iterable[JobOpening],
    formula: ScoringFormula,
) -> list[RankedJobOpening]:
    """Score every job and order them by score, highest first.

    Jobs with equal scores keep their input order.
    """
    ranked = [RankedJobOpening(job=job, score=calculate_score(job, formula)) for job in jobs]
    return sorted(ranked, key=lambda item: item.score, reverse=True)
