"""Centralised, injectable configuration for the job ranker."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Self

from dotenv import load_dotenv

from .config_file import LOG_LEVELS, SORT_ORDERS, RankerConfigFile
from .domain.records import ACTIVE_FILTER, STATUS_FILTERS
from .exceptions import SortOrderError, StatusFilterError

DEFAULT_JOBS_PATH = "data/job_openings.json"
DEFAULT_FORMULAS_PATH = "data/scoring_formulas.json"
DEFAULT_OUTPUT_DIR = "data/processed"


class PositiveIntegerEnvVarError(ValueError):
    """Raised when an environment variable must be a positive integer."""

    def __init__(self, env_name: str) -> None:
        super().__init__(f"{env_name} must be a positive integer.")


class LogLevelEnvVarError(ValueError):
    """Raised when LOG_LEVEL is not a standard logging level name."""

    def __init__(self, value: str) -> None:
        levels = ", ".join(sorted(LOG_LEVELS))
        super().__init__(f"LOG_LEVEL must be one of {levels} (got {value!r}).")


@dataclass(frozen=True)
class RankerConfig:
    """Immutable configuration for loading, filtering and ranking job openings.

    Load from environment with `RankerConfig.from_env()` or construct directly for testing.
    """

    # Inputs
    jobs_path: str = DEFAULT_JOBS_PATH
    formulas_path: str = DEFAULT_FORMULAS_PATH
    formula_name: str | None = None  # None selects the first formula in the catalogue

    # Listing
    country: str | None = None
    sort_by: str = "score"
    status: str = ACTIVE_FILTER  # "active", "all" or one application status
    limit: int | None = None

    # Outputs
    output_dir: str = DEFAULT_OUTPUT_DIR
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, dotenv_path: str | None = None) -> Self:
        """Load configuration from environment variables.

        Args:
            dotenv_path: Optional path to .env file. If None, uses default .env discovery.

        Returns:
            RankerConfig instance populated from environment.
        """
        load_dotenv(dotenv_path)

        return cls(
            jobs_path=os.getenv("JOBS_PATH", "").strip() or DEFAULT_JOBS_PATH,
            formulas_path=os.getenv("FORMULAS_PATH", "").strip() or DEFAULT_FORMULAS_PATH,
            formula_name=os.getenv("FORMULA_NAME", "").strip() or None,
            country=_parse_country(os.getenv("JOB_COUNTRY", "")),
            sort_by=_parse_sort_by(os.getenv("JOB_SORT", "")),
            status=_parse_status(os.getenv("JOB_STATUS", "")),
            limit=_parse_optional_positive_int(os.getenv("RANK_LIMIT", ""), env_name="RANK_LIMIT"),
            output_dir=os.getenv("OUTPUT_DIR", "").strip() or DEFAULT_OUTPUT_DIR,
            log_level=_parse_log_level(os.getenv("LOG_LEVEL", "")),
        )

    def with_overrides(
        self,
        *,
        jobs_path: str | None = None,
        formulas_path: str | None = None,
        formula_name: str | None = None,
        country: str | None = None,
        sort_by: str | None = None,
        status: str | None = None,
        limit: int | None = None,
        output_dir: str | None = None,
    ) -> Self:
        """Return a new config with specified overrides (for CLI options)."""
        return replace(
            self,
            jobs_path=self.jobs_path if jobs_path is None else jobs_path,
            formulas_path=self.formulas_path if formulas_path is None else formulas_path,
            formula_name=self.formula_name if formula_name is None else formula_name.strip(),
            country=self.country if country is None else _parse_country(country),
            sort_by=self.sort_by if sort_by is None else _parse_sort_by(sort_by),
            status=self.status if status is None else _parse_status(status),
            limit=self.limit if limit is None else limit,
            output_dir=self.output_dir if output_dir is None else output_dir,
        )

    def with_file_overrides(self, file_config: RankerConfigFile) -> Self:
        """Return a new config with config-file values overriding env/default values."""
        return replace(
            self,
            jobs_path=self.jobs_path if file_config.jobs_path is None else file_config.jobs_path,
            formulas_path=self.formulas_path
            if file_config.formulas_path is None
            else file_config.formulas_path,
            formula_name=self.formula_name
            if file_config.formula_name is None
            else file_config.formula_name,
            country=self.country
            if file_config.country is None
            else _parse_country(file_config.country),
            sort_by=self.sort_by if file_config.sort_by is None else file_config.sort_by,
            status=self.status if file_config.status is None else file_config.status,
            limit=self.limit if file_config.limit is None else file_config.limit,
            output_dir=self.output_dir
            if file_config.output_dir is None
            else file_config.output_dir,
            log_level=self.log_level if file_config.log_level is None else file_config.log_level,
        )


def _parse_country(value: str) -> str | None:
    """Parse an optional country code; empty and ``all`` mean no filter."""
    text = value.strip()
    if not text or text.lower() == "all":
        return None
    return text.upper()


def _parse_sort_by(value: str) -> str:
    text = value.strip().lower()
    if not text:
        return "score"
    if text not in SORT_ORDERS:
        raise SortOrderError(value)
    return text


def _parse_status(value: str) -> str:
    text = value.strip().lower()
    if not text:
        return ACTIVE_FILTER
    if text not in STATUS_FILTERS:
        raise StatusFilterError(value)
    return text


def _parse_log_level(value: str) -> str:
    text = value.strip().upper()
    if not text:
        return "INFO"
    if text not in LOG_LEVELS:
        raise LogLevelEnvVarError(value)
    return text


def _parse_optional_positive_int(value: str, *, env_name: str) -> int | None:
    """Parse an optional positive integer from an environment variable."""
    text = value.strip()
    if not text:
        return None
    try:
        parsed = int(text)
    except ValueError as exc:
        raise PositiveIntegerEnvVarError(env_name) from exc
    if parsed < 1:
        raise PositiveIntegerEnvVarError(env_name)
    return parsed

