"""Custom exceptions for the job ranker.

The scoring engine itself raises nothing; these cover configuration, loading
and selection at the edges.
"""

from __future__ import annotations


class JobRankerError(Exception):
    """Base exception for all job ranker errors."""

    pass


class ConfigFileNotFoundError(JobRankerError):
    """Raised when a config file path does not exist."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Config file not found: {path}")


class ConfigFileParseError(JobRankerError):
    """Raised when a config file is not valid TOML."""

    def __init__(self, path: str, detail: str) -> None:
        super().__init__(f"Config file could not be parsed: {path} ({detail})")


class ConfigFileValidationError(JobRankerError):
    """Raised when a config file fails schema validation."""

    def __init__(self, path: str, detail: str) -> None:
        super().__init__(f"Config file is invalid: {path} ({detail})")


class SortOrderError(JobRankerError, ValueError):
    """Raised when a listing sort key is not supported."""

    def __init__(self, value: str) -> None:
        super().__init__(f"Unsupported sort order: {value!r}. Use 'score' or 'date'.")


class StatusFilterError(JobRankerError, ValueError):
    """Raised when a listing status filter is not supported."""

    def __init__(self, value: str) -> None:
        super().__init__(
            f"Unsupported status filter: {value!r}. "
            "Use 'active', 'all' or a single application status."
        )


class FormulaFileNotFoundError(JobRankerError):
    """Raised when the scoring formula catalogue is missing."""

    def __init__(self, path: str) -> None:
        super().__init__(
            f"Scoring formula file not found: {path}\n"
            "Create it or set FORMULAS_PATH to a valid file."
        )


class FormulaValidationError(JobRankerError):
    """Raised when the scoring formula catalogue fails validation."""

    def __init__(self, path: str, detail: str) -> None:
        super().__init__(f"Scoring formula file is invalid: {path} ({detail})")


class FormulaSelectionError(JobRankerError):
    """Raised when a requested formula is not in the catalogue."""

    def __init__(self, selector: str, available: tuple[str, ...]) -> None:
        self.selector = selector
        self.available = available
        names = ", ".join(available) if available else "none"
        super().__init__(f"Unknown scoring formula: {selector!r}. Available: {names}.")


class JobOpeningsFileNotFoundError(JobRankerError):
    """Raised when the job openings file is missing."""

    def __init__(self, path: str) -> None:
        super().__init__(
            f"Job openings file not found: {path}\nCreate it or set JOBS_PATH to a valid file."
        )


class JobOpeningsValidationError(JobRankerError):
    """Raised when the job openings file fails validation."""

    def __init__(self, path: str, detail: str) -> None:
        super().__init__(f"Job openings file is invalid: {path} ({detail})")


class JobOpeningNotFoundError(JobRankerError):
    """Raised when a job opening id is not present in the loaded openings."""

    def __init__(self, job_id: str) -> None:
        self.job_id = job_id
        super().__init__(f"Job opening not found: {job_id}")
