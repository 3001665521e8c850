"""Tests for scoring formula catalogue loading and selection."""

from __future__ import annotations

import pytest

from job_ranker.application.formulas import load_formula_catalog, resolve_formula
from job_ranker.domain.records import FormulaCatalog, ScoringFormula
from job_ranker.exceptions import (
    FormulaFileNotFoundError,
    FormulaSelectionError,
    FormulaValidationError,
)
from tests.fakes import InMemoryFileSystem
from tests.support.payloads import FORMULAS_PATH, formula_catalog_payload, write_json


def _first_formula(payload: dict[str, object]) -> dict[str, object]:
    formulas = payload["formulas"]
    assert isinstance(formulas, list)
    formula = formulas[0]
    assert isinstance(formula, dict)
    return formula


def _load(payload: dict[str, object]) -> FormulaCatalog:
    fs = InMemoryFileSystem()
    write_json(fs, FORMULAS_PATH, payload)
    return load_formula_catalog(path=FORMULAS_PATH, fs=fs)


def test_load_formula_catalog_returns_formulas_in_file_order() -> None:
    catalog = _load(formula_catalog_payload())

    assert catalog.schema_version == 1
    assert [formula.name for formula in catalog.formulas] == ["Impact first", "Money first"]
    impact_first = catalog.formulas[0]
    assert impact_first.weight("impact") == 3
    assert impact_first.weight("stress") == -2
    assert impact_first.wow_boost == 5
    assert impact_first.weight("culture") == 0


def test_loaded_weights_are_read_only() -> None:
    catalog = _load(formula_catalog_payload())

    with pytest.raises(TypeError):
        catalog.formulas[0].weights["impact"] = 99  # type: ignore[index]


def test_load_formula_catalog_fails_when_path_missing() -> None:
    with pytest.raises(FormulaFileNotFoundError):
        load_formula_catalog(path=FORMULAS_PATH, fs=InMemoryFileSystem())


def test_load_formula_catalog_accepts_empty_catalogue() -> None:
    catalog = _load({"schema_version": 1, "formulas": []})

    assert catalog.formulas == ()


def test_load_formula_catalog_rejects_unknown_weight_keys() -> None:
    payload = formula_catalog_payload()
    _first_formula(payload)["weights"] = {"impact": 1, "vibes": 2}

    with pytest.raises(FormulaValidationError) as exc_info:
        _load(payload)

    assert "vibes" in str(exc_info.value)


def test_load_formula_catalog_rejects_non_integer_weights() -> None:
    payload = formula_catalog_payload()
    _first_formula(payload)["weights"] = {"impact": 1.5}

    with pytest.raises(FormulaValidationError) as exc_info:
        _load(payload)

    assert "weights" in str(exc_info.value)


def test_load_formula_catalog_rejects_unknown_keys() -> None:
    payload = formula_catalog_payload()
    _first_formula(payload)["colour"] = "blue"

    with pytest.raises(FormulaValidationError) as exc_info:
        _load(payload)

    assert "colour" in str(exc_info.value)


def test_load_formula_catalog_rejects_wrong_schema_version() -> None:
    payload = formula_catalog_payload()
    payload["schema_version"] = 2

    with pytest.raises(FormulaValidationError) as exc_info:
        _load(payload)

    assert "schema_version" in str(exc_info.value)


def test_load_formula_catalog_rejects_duplicate_names() -> None:
    payload = formula_catalog_payload()
    formulas = payload["formulas"]
    assert isinstance(formulas, list)
    formulas.append({"id": "f-other", "name": "Money first", "weights": {}})

    with pytest.raises(FormulaValidationError) as exc_info:
        _load(payload)

    assert "unique" in str(exc_info.value)


def test_load_formula_catalog_rejects_blank_name() -> None:
    payload = formula_catalog_payload()
    _first_formula(payload)["name"] = "   "

    with pytest.raises(FormulaValidationError):
        _load(payload)


def test_load_formula_catalog_fails_for_invalid_json() -> None:
    fs = InMemoryFileSystem()
    fs.write_text("{not json", FORMULAS_PATH)

    with pytest.raises(FormulaValidationError):
        load_formula_catalog(path=FORMULAS_PATH, fs=fs)


class TestResolveFormula:
    """Tests for selecting one formula from a catalogue."""

    def test_defaults_to_first_formula(self) -> None:
        catalog = _load(formula_catalog_payload())

        selected = resolve_formula(catalog)

        assert selected is not None
        assert selected.id == "f-impact"

    def test_blank_selector_defaults_to_first_formula(self) -> None:
        catalog = _load(formula_catalog_payload())

        selected = resolve_formula(catalog, "  ")

        assert selected is not None
        assert selected.id == "f-impact"

    def test_selects_by_id(self) -> None:
        catalog = _load(formula_catalog_payload())

        selected = resolve_formula(catalog, "f-money")

        assert selected is not None
        assert selected.name == "Money first"

    def test_selects_by_name(self) -> None:
        catalog = _load(formula_catalog_payload())

        selected = resolve_formula(catalog, "Money first")

        assert selected is not None
        assert selected.id == "f-money"

    def test_id_match_wins_over_name_match(self) -> None:
        catalog = FormulaCatalog(
            schema_version=1,
            formulas=(
                ScoringFormula(id="a", name="b"),
                ScoringFormula(id="b", name="c"),
            ),
        )

        selected = resolve_formula(catalog, "b")

        assert selected is not None
        assert selected.id == "b"

    def test_empty_catalogue_resolves_to_none(self) -> None:
        catalog = FormulaCatalog(schema_version=1, formulas=())

        assert resolve_formula(catalog) is None

    def test_unknown_selector_lists_available_formulas(self) -> None:
        catalog = _load(formula_catalog_payload())

        with pytest.raises(FormulaSelectionError) as exc_info:
            resolve_formula(catalog, "nope")

        assert exc_info.value.available == ("Impact first", "Money first")
        assert "Impact first, Money first" in str(exc_info.value)
