"""Typed parsing and validation for ranker config files."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass
from pathlib import Path

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from .domain.records import STATUS_FILTERS
from .exceptions import ConfigFileNotFoundError, ConfigFileParseError, ConfigFileValidationError
from .protocols import FileSystem

_SCHEMA_VERSION = 1

SORT_ORDERS = frozenset({"score", "date"})
LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})


@dataclass(frozen=True)
class RankerConfigFile:
    """Validated ranker config values loaded from a TOML file."""

    jobs_path: str | None = None
    formulas_path: str | None = None
    formula_name: str | None = None
    country: str | None = None  # "all" clears a country set elsewhere
    sort_by: str | None = None
    status: str | None = None
    limit: int | None = None
    output_dir: str | None = None
    log_level: str | None = None


class _RankingSectionModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    jobs_path: str | None = None
    formulas_path: str | None = None
    formula_name: str | None = None
    country: str | None = None
    sort_by: str | None = None
    status: str | None = None
    limit: int | None = None
    output_dir: str | None = None
    log_level: str | None = None

    @field_validator("jobs_path", "formulas_path", "formula_name", "output_dir")
    @classmethod
    def _validate_non_empty_text(cls, value: str | None) -> str | None:
        if value is None:
            return None
        text = value.strip()
        if not text:
            raise ValueError
        return text

    @field_validator("country")
    @classmethod
    def _validate_country(cls, value: str | None) -> str | None:
        if value is None:
            return None
        text = value.strip().upper()
        if text == "ALL":
            return "all"
        if len(text) != 2 or not text.isalpha():
            raise ValueError
        return text

    @field_validator("sort_by")
    @classmethod
    def _validate_sort_by(cls, value: str | None) -> str | None:
        if value is None:
            return None
        text = value.strip().lower()
        if text not in SORT_ORDERS:
            raise ValueError
        return text

    @field_validator("status")
    @classmethod
    def _validate_status(cls, value: str | None) -> str | None:
        if value is None:
            return None
        text = value.strip().lower()
        if text not in STATUS_FILTERS:
            raise ValueError
        return text

    @field_validator("limit")
    @classmethod
    def _validate_limit(cls, value: int | None) -> int | None:
        if value is None:
            return None
        if value < 1:
            raise ValueError
        return value

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str | None) -> str | None:
        if value is None:
            return None
        text = value.strip().upper()
        if text not in LOG_LEVELS:
            raise ValueError
        return text


class _ConfigFileModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    schema_version: int
    ranking: _RankingSectionModel

    @field_validator("schema_version")
    @classmethod
    def _validate_schema_version(cls, value: int) -> int:
        if value != _SCHEMA_VERSION:
            raise ValueError
        return value


def format_validation_error(exc: ValidationError) -> str:
    """Render the first pydantic error as ``location: message``."""
    first = exc.errors()[0]
    location = ".".join(str(part) for part in first.get("loc", ("<root>",)))
    message = str(first.get("msg", "invalid value"))
    return f"{location}: {message}"


def load_ranker_config_file(*, path: Path, fs: FileSystem) -> RankerConfigFile:
    """Load and validate a ranker TOML config file."""
    if not fs.exists(path):
        raise ConfigFileNotFoundError(str(path))

    raw_payload = fs.read_text(path)
    try:
        payload: object = tomllib.loads(raw_payload)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigFileParseError(str(path), str(exc)) from exc

    try:
        model = _ConfigFileModel.model_validate(payload)
    except ValidationError as exc:
        raise ConfigFileValidationError(str(path), format_validation_error(exc)) from exc

    section = model.ranking
    return RankerConfigFile(
        jobs_path=section.jobs_path,
        formulas_path=section.formulas_path,
        formula_name=section.formula_name,
        country=section.country,
        sort_by=section.sort_by,
        status=section.status,
        limit=section.limit,
        output_dir=section.output_dir,
        log_level=section.log_level,
    )
