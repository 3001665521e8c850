"""Domain records supplied to the scoring engine."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from types import MappingProxyType
from typing import Literal

from .criteria import WOW_BOOST_KEY

ApplicationStatus = Literal[
    "not_applied",
    "applied",
    "interviewing",
    "offer",
    "rejected",
    "ghosted",
    "dumped",
]

APPLICATION_STATUSES: tuple[ApplicationStatus, ...] = (
    "not_applied",
    "applied",
    "interviewing",
    "offer",
    "rejected",
    "ghosted",
    "dumped",
)
ACTIVE_STATUSES: frozenset[ApplicationStatus] = frozenset(
    {"not_applied", "applied", "interviewing", "offer"}
)

# Listing filters: the active set, every status, or one status.
ACTIVE_FILTER = "active"
ALL_FILTER = "all"
STATUS_FILTERS: frozenset[str] = frozenset({ACTIVE_FILTER, ALL_FILTER, *APPLICATION_STATUSES})


@dataclass(frozen=True)
class JobOpening:
    """A job opening with its optional per-criterion ratings.

    Ratings are ``-1``, ``0`` or ``1`` once set and ``None`` while unrated.
    """

    id: str
    title: str
    company: str
    description: str = ""
    country: str | None = None
    status: ApplicationStatus = "not_applied"
    date_added: datetime | None = None
    wow: bool = False
    rating_impact: int | None = None
    rating_compensation: int | None = None
    rating_role: int | None = None
    rating_tech: int | None = None
    rating_location: int | None = None
    rating_industry: int | None = None
    rating_culture: int | None = None
    rating_growth: int | None = None
    rating_profile_match: int | None = None
    rating_company_size: int | None = None
    rating_stress: int | None = None
    rating_job_security: int | None = None


def _empty_weights() -> MappingProxyType[str, int]:
    return MappingProxyType({})


@dataclass(frozen=True)
class ScoringFormula:
    """A named set of integer weights keyed by criterion weight key.

    The flat ``wow_boost`` weight lives in the same mapping. Missing keys read as 0.
    """

    id: str
    name: str
    weights: Mapping[str, int] = field(default_factory=_empty_weights)

    def weight(self, key: str) -> int:
        """Return the weight for ``key``, defaulting to 0 when absent."""
        return self.weights.get(key, 0)

    @property
    def wow_boost(self) -> int:
        """Flat score added to jobs flagged as wow."""
        return self.weight(WOW_BOOST_KEY)


@dataclass(frozen=True)
class FormulaCatalog:
    """Scoring formulas loaded from a single catalogue file, in file order."""

    schema_version: int
    formulas: tuple[ScoringFormula, ...]
