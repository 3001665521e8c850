"""Loading and strict validation for scoring formula catalogues."""

from __future__ import annotations

from pathlib import Path
from types import MappingProxyType

from pydantic import (
    BaseModel,
    ConfigDict,
    StrictInt,
    ValidationError,
    field_validator,
    model_validator,
)

from ..config_file import format_validation_error
from ..domain.criteria import WEIGHT_KEYS
from ..domain.records import FormulaCatalog, ScoringFormula
from ..exceptions import FormulaFileNotFoundError, FormulaSelectionError, FormulaValidationError
from ..protocols import FileSystem

_SCHEMA_VERSION = 1


class _ScoringFormulaModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    id: str
    name: str
    weights: dict[str, StrictInt]

    @field_validator("id")
    @classmethod
    def _validate_id(cls, value: str) -> str:
        text = value.strip()
        if not text:
            raise ValueError
        return text

    @field_validator("name")
    @classmethod
    def _validate_name(cls, value: str) -> str:
        text = value.strip()
        if not text or len(text) > 255:
            raise ValueError
        return text

    @field_validator("weights")
    @classmethod
    def _validate_weight_keys(cls, value: dict[str, int]) -> dict[str, int]:
        unknown = sorted(set(value) - WEIGHT_KEYS)
        if unknown:
            raise ValueError(f"unknown weight keys: {', '.join(unknown)}")
        return value


class _FormulaCatalogModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    schema_version: int
    formulas: tuple[_ScoringFormulaModel, ...]

    @field_validator("schema_version")
    @classmethod
    def _validate_schema_version(cls, value: int) -> int:
        if value != _SCHEMA_VERSION:
            raise ValueError
        return value

    @model_validator(mode="after")
    def _validate_unique(self) -> _FormulaCatalogModel:
        ids = [formula.id for formula in self.formulas]
        names = [formula.name for formula in self.formulas]
        if len(set(ids)) != len(ids):
            raise ValueError("formula ids must be unique")
        if len(set(names)) != len(names):
            raise ValueError("formula names must be unique")
        return self


def _to_domain_formula(model: _ScoringFormulaModel) -> ScoringFormula:
    return ScoringFormula(
        id=model.id,
        name=model.name,
        weights=MappingProxyType(dict(model.weights)),
    )


def load_formula_catalog(*, path: Path, fs: FileSystem) -> FormulaCatalog:
    """Load and validate a scoring formula catalogue from JSON.

    Weight keys are checked against the known criteria; weights of any sign are
    accepted and keys may be omitted.
    """
    if not fs.exists(path):
        raise FormulaFileNotFoundError(str(path))

    payload = fs.read_text(path)
    try:
        model = _FormulaCatalogModel.model_validate_json(payload)
    except ValidationError as exc:
        raise FormulaValidationError(str(path), format_validation_error(exc)) from exc

    return FormulaCatalog(
        schema_version=model.schema_version,
        formulas=tuple(_to_domain_formula(formula) for formula in model.formulas),
    )


def resolve_formula(
    catalog: FormulaCatalog,
    selector: str | None = None,
) -> ScoringFormula | None:
    """Resolve one formula by id or name.

    Without a selector the first formula in the catalogue is used, or None when the
    catalogue is empty.
    """
    target = (selector or "").strip()
    if not target:
        return catalog.formulas[0] if catalog.formulas else None

    for formula in catalog.formulas:
        if formula.id == target:
            return formula
    for formula in catalog.formulas:
        if formula.name == target:
            return formula

    available = tuple(formula.name for formula in catalog.formulas)
    raise FormulaSelectionError(target, available)
