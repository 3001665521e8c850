"""Domain modules for job scoring and ranking."""

from .criteria import CRITERIA, WOW_BOOST_KEY, Criterion
from .records import JobOpening, ScoringFormula
from .scoring import RankedJobOpening, ScoreBreakdown, calculate_score, rank_job_openings

__all__ = [
    "CRITERIA",
    "WOW_BOOST_KEY",
    "Criterion",
    "JobOpening",
    "RankedJobOpening",
    "ScoreBreakdown",
    "ScoringFormula",
    "calculate_score",
    "rank_job_openings",
]
