"""Tests for CLI wiring, output and overrides."""

import re
from pathlib import Path

import pytest
import typer
from typer.testing import CliRunner

from job_ranker import cli
from job_ranker.cli import CliDependencies
from job_ranker.config import RankerConfig
from job_ranker.exceptions import (
    FormulaSelectionError,
    JobOpeningNotFoundError,
    StatusFilterError,
)
from tests.fakes import InMemoryFileSystem
from tests.support.payloads import FORMULAS_PATH, write_default_inputs, write_json

runner = CliRunner()
_ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;]*m")


def _strip_ansi(text: str) -> str:
    return _ANSI_ESCAPE_RE.sub("", text)


@pytest.fixture(autouse=True)
def default_config(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_from_env(cls: type[RankerConfig], dotenv_path: str | None = None) -> RankerConfig:
        _ = (cls, dotenv_path)
        return RankerConfig()

    monkeypatch.setattr(cli.RankerConfig, "from_env", classmethod(fake_from_env))


def _build_app_with_fs(fs: InMemoryFileSystem) -> typer.Typer:
    def build_with_shared_fs(*, config: RankerConfig) -> CliDependencies:
        _ = config
        return CliDependencies(fs=fs)

    return cli.create_app(build_with_shared_fs)


def _seeded_fs() -> InMemoryFileSystem:
    fs = InMemoryFileSystem()
    write_default_inputs(fs)
    return fs


def test_cli_version_option_prints_package_version(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(cli, "__version__", "9.9.9", raising=False)

    result = runner.invoke(_build_app_with_fs(InMemoryFileSystem()), ["--version"])

    assert result.exit_code == 0
    assert "job-ranker 9.9.9" in _strip_ansi(result.output)


def test_cli_rank_writes_outputs_and_prints_summary() -> None:
    fs = _seeded_fs()

    result = runner.invoke(_build_app_with_fs(fs), ["rank"])

    assert result.exit_code == 0, result.output
    output = _strip_ansi(result.output)
    assert "Ranked with formula: Impact first" in output
    assert "4 job openings → 3 listed" in output
    assert "Staff Engineer @ Contoso" in output
    ranked = fs.read_csv(Path("data/processed/ranked_jobs.csv"))
    assert ranked["id"].tolist() == ["job-2", "job-1", "job-4"]
    assert fs.exists(Path("data/processed/ranked_jobs_explain.csv"))


def test_cli_rank_options_override_config() -> None:
    fs = _seeded_fs()

    result = runner.invoke(
        _build_app_with_fs(fs),
        [
            "rank",
            "--formula",
            "f-money",
            "--country",
            "de",
            "--status",
            "all",
            "--limit",
            "1",
            "--output-dir",
            "out",
        ],
    )

    assert result.exit_code == 0, result.output
    assert "Money first" in _strip_ansi(result.output)
    ranked = fs.read_csv(Path("out/ranked_jobs.csv"))
    assert ranked["id"].tolist() == ["job-1"]


def test_cli_rank_single_status_and_counts() -> None:
    fs = _seeded_fs()

    result = runner.invoke(_build_app_with_fs(fs), ["rank", "--status", "rejected"])

    assert result.exit_code == 0, result.output
    output = " ".join(_strip_ansi(result.output).split())
    assert "4 job openings → 1 listed (status: rejected)" in output
    assert (
        "by status: not_applied 1, applied 1, interviewing 1, offer 0, rejected 1, ghosted 0,"
        " dumped 0"
    ) in output
    ranked = fs.read_csv(Path("data/processed/ranked_jobs.csv"))
    assert ranked["id"].tolist() == ["job-3"]


def test_cli_rank_rejects_unknown_status() -> None:
    result = runner.invoke(_build_app_with_fs(_seeded_fs()), ["rank", "--status", "hired"])

    assert result.exit_code == 1
    assert isinstance(result.exception, StatusFilterError)


def test_cli_rank_without_formulas_lists_unscored_jobs() -> None:
    fs = _seeded_fs()
    write_json(fs, FORMULAS_PATH, {"schema_version": 1, "formulas": []})

    result = runner.invoke(_build_app_with_fs(fs), ["rank", "--sort", "date"])

    assert result.exit_code == 0, result.output
    assert "No scoring formulas found" in _strip_ansi(result.output)
    ranked = fs.read_csv(Path("data/processed/ranked_jobs.csv"))
    assert ranked["id"].tolist() == ["job-2", "job-1", "job-4"]
    assert ranked["score"].tolist() == [0, 0, 0]


def test_cli_rank_rejects_limit_below_one() -> None:
    result = runner.invoke(_build_app_with_fs(_seeded_fs()), ["rank", "--limit", "0"])

    assert result.exit_code == 2


def test_cli_rank_unknown_formula_propagates_error() -> None:
    result = runner.invoke(_build_app_with_fs(_seeded_fs()), ["rank", "--formula", "nope"])

    assert result.exit_code == 1
    assert isinstance(result.exception, FormulaSelectionError)


def test_cli_score_prints_breakdown() -> None:
    result = runner.invoke(_build_app_with_fs(_seeded_fs()), ["score", "job-2"])

    assert result.exit_code == 0, result.output
    output = _strip_ansi(result.output)
    assert "Staff Engineer @ Contoso (Impact first)" in output
    assert "Wow boost" in output
    assert "unrated" in output
    assert "Score: 10" in output


def test_cli_score_uses_selected_formula() -> None:
    result = runner.invoke(
        _build_app_with_fs(_seeded_fs()), ["score", "job-4", "--formula", "Money first"]
    )

    assert result.exit_code == 0, result.output
    output = _strip_ansi(result.output)
    assert "Wow boost" not in output
    assert "Score: 4" in output


def test_cli_score_unknown_job_propagates_error() -> None:
    result = runner.invoke(_build_app_with_fs(_seeded_fs()), ["score", "missing"])

    assert result.exit_code == 1
    assert isinstance(result.exception, JobOpeningNotFoundError)


def test_cli_score_without_formulas_exits_non_zero() -> None:
    fs = _seeded_fs()
    write_json(fs, FORMULAS_PATH, {"schema_version": 1, "formulas": []})

    result = runner.invoke(_build_app_with_fs(fs), ["score", "job-1"])

    assert result.exit_code == 1
    assert "No scoring formulas found" in _strip_ansi(result.output)


def test_cli_formulas_marks_default() -> None:
    result = runner.invoke(_build_app_with_fs(_seeded_fs()), ["formulas"])

    assert result.exit_code == 0, result.output
    lines = [line.strip() for line in _strip_ansi(result.output).splitlines() if line.strip()]
    assert lines == ["Impact first f-impact (default)", "Money first f-money"]


def test_cli_global_config_file_overrides_env() -> None:
    fs = _seeded_fs()
    fs.write_text(
        """
schema_version = 1

[ranking]
formula_name = "Money first"
output_dir = "from-file"
""",
        Path("ranker.toml"),
    )

    result = runner.invoke(_build_app_with_fs(fs), ["--config", "ranker.toml", "rank"])

    assert result.exit_code == 0, result.output
    assert "Ranked with formula: Money first" in _strip_ansi(result.output)
    assert fs.exists(Path("from-file/ranked_jobs.csv"))


def test_cli_options_override_config_file() -> None:
    fs = _seeded_fs()
    fs.write_text(
        'schema_version = 1\n\n[ranking]\nformula_name = "Money first"\n',
        Path("ranker.toml"),
    )

    result = runner.invoke(
        _build_app_with_fs(fs), ["--config", "ranker.toml", "rank", "--formula", "f-impact"]
    )

    assert result.exit_code == 0, result.output
    assert "Ranked with formula: Impact first" in _strip_ansi(result.output)


def test_command_without_context_raises_helpful_error() -> None:
    ctx = typer.Context(typer.main.get_command(_build_app_with_fs(InMemoryFileSystem())))

    with pytest.raises(cli.CliContextNotInitialisedError):
        cli._get_context(ctx)
