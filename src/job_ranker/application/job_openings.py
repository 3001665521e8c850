"""Loading and strict validation for job opening files.

This is the validation boundary for ratings: the scoring engine takes any
integer literally, so out-of-range values are rejected here.

Usage example:
    from pathlib import Path

    from job_ranker.application.job_openings import load_job_openings
    from job_ranker.infrastructure import LocalFileSystem

    jobs = load_job_openings(path=Path("data/job_openings.json"), fs=LocalFileSystem())
"""

from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path

from pydantic import (
    BaseModel,
    ConfigDict,
    StrictInt,
    ValidationError,
    field_validator,
    model_validator,
)

from ..config_file import format_validation_error
from ..domain.criteria import CRITERIA
from ..domain.records import ApplicationStatus, JobOpening
from ..exceptions import (
    JobOpeningNotFoundError,
    JobOpeningsFileNotFoundError,
    JobOpeningsValidationError,
)
from ..protocols import FileSystem

_SCHEMA_VERSION = 1

RATING_VALUES = frozenset({-1, 0, 1})
_RATING_FIELDS = tuple(criterion.rating_field for criterion in CRITERIA)


class _JobOpeningModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    id: str
    title: str
    company: str
    description: str = ""
    country: str | None = None
    status: ApplicationStatus = "not_applied"
    date_added: datetime | None = None
    wow: bool = False

    rating_impact: StrictInt | None = None
    rating_compensation: StrictInt | None = None
    rating_role: StrictInt | None = None
    rating_tech: StrictInt | None = None
    rating_location: StrictInt | None = None
    rating_industry: StrictInt | None = None
    rating_culture: StrictInt | None = None
    rating_growth: StrictInt | None = None
    rating_profile_match: StrictInt | None = None
    rating_company_size: StrictInt | None = None
    rating_stress: StrictInt | None = None
    rating_job_security: StrictInt | None = None

    @field_validator("id")
    @classmethod
    def _validate_id(cls, value: str) -> str:
        text = value.strip()
        if not text:
            raise ValueError
        return text

    @field_validator("title", "company")
    @classmethod
    def _validate_required_text(cls, value: str) -> str:
        text = value.strip()
        if not text or len(text) > 255:
            raise ValueError
        return text

    @field_validator(*_RATING_FIELDS)
    @classmethod
    def _validate_rating(cls, value: int | None) -> int | None:
        if value is not None and value not in RATING_VALUES:
            raise ValueError("rating must be -1, 0 or 1")
        return value

    @field_validator("country")
    @classmethod
    def _validate_country(cls, value: str | None) -> str | None:
        if value is None:
            return None
        text = value.strip().upper()
        if not text:
            return None
        if len(text) != 2 or not text.isalpha():
            raise ValueError
        return text

    @field_validator("date_added")
    @classmethod
    def _validate_date_added(cls, value: datetime | None) -> datetime | None:
        if value is None or value.tzinfo is not None:
            return value
        return value.replace(tzinfo=UTC)


class _JobOpeningsFileModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    schema_version: int
    job_openings: tuple[_JobOpeningModel, ...]

    @field_validator("schema_version")
    @classmethod
    def _validate_schema_version(cls, value: int) -> int:
        if value != _SCHEMA_VERSION:
            raise ValueError
        return value

    @model_validator(mode="after")
    def _validate_unique_ids(self) -> _JobOpeningsFileModel:
        ids = [job.id for job in self.job_openings]
        if len(set(ids)) != len(ids):
            raise ValueError("job opening ids must be unique")
        return self


def _to_domain_job(model: _JobOpeningModel) -> JobOpening:
    return JobOpening(**model.model_dump())


def load_job_openings(*, path: Path, fs: FileSystem) -> tuple[JobOpening, ...]:
    """Load and validate job openings from JSON, preserving file order."""
    if not fs.exists(path):
        raise JobOpeningsFileNotFoundError(str(path))

    payload = fs.read_text(path)
    try:
        model = _JobOpeningsFileModel.model_validate_json(payload)
    except ValidationError as exc:
        raise JobOpeningsValidationError(str(path), format_validation_error(exc)) from exc

    return tuple(_to_domain_job(job) for job in model.job_openings)


def find_job_opening(jobs: tuple[JobOpening, ...], job_id: str) -> JobOpening:
    """Return the job opening with ``job_id`` or raise JobOpeningNotFoundError."""
    for job in jobs:
        if job.id == job_id:
            return job
    raise JobOpeningNotFoundError(job_id)
