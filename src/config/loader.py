from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml

from ..ingest.columns import SourceColumn, SourceColumnMapping, SourceDataType
from ..model.errors import InvalidArgumentError
from .datasets import AREAS, DATASETS, InputFileSource


ALLOWED_ENTRY_KEYS = {"name", "code", "file", "parser", "cols"}
ALLOWED_TOP_LEVEL_KEYS = {"areas", "datasets"}

# Roles every importer of a given type needs in its mapping.
REQUIRED_ROLES = {
    SourceDataType.AUTHORITY_CODE_CSV: (
        SourceColumn.AUTH_CODE,
        SourceColumn.AUTH_NAME_ENG,
        SourceColumn.AUTH_NAME_CYM,
    ),
    SourceDataType.WELSH_STATS_JSON: (
        SourceColumn.AUTH_CODE,
        SourceColumn.YEAR,
        SourceColumn.VALUE,
    ),
    SourceDataType.AUTHORITY_BY_YEAR_CSV: (
        SourceColumn.AUTH_CODE,
        SourceColumn.SINGLE_MEASURE_CODE,
        SourceColumn.SINGLE_MEASURE_NAME,
    ),
}


@dataclass(frozen=True)
class DatasetConfig:
    """The authority-code source plus the importable datasets, in import order."""

    areas: InputFileSource
    datasets: Tuple[InputFileSource, ...]


DEFAULT_CONFIG = DatasetConfig(areas=AREAS, datasets=DATASETS)


def _require_str(entry: Dict[str, Any], key: str, where: str) -> str:
    value = entry.get(key)
    if not isinstance(value, str) or not value.strip():
        raise InvalidArgumentError(f"{where}: '{key}' must be a non-empty string.")
    return value


def _parse_parser(value: str, where: str) -> SourceDataType:
    try:
        return SourceDataType[value.strip().upper()]
    except KeyError:
        allowed = ", ".join(member.name for member in SourceDataType)
        raise InvalidArgumentError(
            f"{where}: unknown parser '{value}' (expected one of {allowed})."
        ) from None


def _parse_cols(value: Any, parser: SourceDataType, where: str) -> SourceColumnMapping:
    if not isinstance(value, dict) or not value:
        raise InvalidArgumentError(f"{where}: 'cols' must be a non-empty mapping.")
    cols: SourceColumnMapping = {}
    for role_name, header in value.items():
        try:
            role = SourceColumn[str(role_name).strip().upper()]
        except KeyError:
            raise InvalidArgumentError(f"{where}: unknown column role '{role_name}'.") from None
        if not isinstance(header, str):
            raise InvalidArgumentError(f"{where}: column '{role_name}' must be a string.")
        cols[role] = header

    missing = [role.name for role in REQUIRED_ROLES[parser] if role not in cols]
    if missing:
        raise InvalidArgumentError(f"{where}: cols missing {', '.join(missing)}.")
    if parser == SourceDataType.WELSH_STATS_JSON:
        per_row = {SourceColumn.MEASURE_CODE, SourceColumn.MEASURE_NAME} <= set(cols)
        fixed = {SourceColumn.SINGLE_MEASURE_CODE, SourceColumn.SINGLE_MEASURE_NAME} <= set(cols)
        if not (per_row or fixed):
            raise InvalidArgumentError(
                f"{where}: cols need MEASURE_CODE/MEASURE_NAME or "
                "SINGLE_MEASURE_CODE/SINGLE_MEASURE_NAME."
            )
    return cols


def source_from_dict(entry: Any, where: str = "dataset") -> InputFileSource:
    if not isinstance(entry, dict):
        raise InvalidArgumentError(f"{where}: entry must be a mapping.")
    unknown = [key for key in entry if key not in ALLOWED_ENTRY_KEYS]
    if unknown:
        raise InvalidArgumentError(f"{where}: unknown keys: {', '.join(sorted(map(str, unknown)))}")

    code = _require_str(entry, "code", where).strip().lower()
    where = f"{where} '{code}'"
    parser = _parse_parser(_require_str(entry, "parser", where), where)
    return InputFileSource(
        name=entry.get("name") or code,
        code=code,
        file=_require_str(entry, "file", where),
        parser=parser,
        cols=_parse_cols(entry.get("cols"), parser, where),
    )


def config_from_dict(data: Dict[str, Any]) -> DatasetConfig:
    if not isinstance(data, dict) or not data:
        raise InvalidArgumentError("Dataset config must be a non-empty mapping.")
    unknown = [key for key in data if key not in ALLOWED_TOP_LEVEL_KEYS]
    if unknown:
        raise InvalidArgumentError(f"Unknown config keys: {', '.join(sorted(map(str, unknown)))}")

    areas = DEFAULT_CONFIG.areas
    if "areas" in data:
        areas = source_from_dict(data["areas"], "areas")
        if areas.parser != SourceDataType.AUTHORITY_CODE_CSV:
            raise InvalidArgumentError("areas: parser must be AUTHORITY_CODE_CSV.")

    datasets = DEFAULT_CONFIG.datasets
    if "datasets" in data:
        entries = data["datasets"]
        if not isinstance(entries, list) or not entries:
            raise InvalidArgumentError("'datasets' must be a non-empty list.")
        parsed: List[InputFileSource] = []
        seen = set()
        for index, entry in enumerate(entries):
            source = source_from_dict(entry, f"datasets[{index}]")
            if source.code in seen:
                raise InvalidArgumentError(f"Duplicate dataset code: {source.code}")
            seen.add(source.code)
            parsed.append(source)
        datasets = tuple(parsed)

    return DatasetConfig(areas=areas, datasets=datasets)


def load_datasets_config(path: Optional[Path]) -> DatasetConfig:
    """Load a YAML dataset table; without a path the built-in table is used."""
    if path is None:
        return DEFAULT_CONFIG
    with Path(path).open("r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise InvalidArgumentError(f"Invalid dataset config {path}: {exc}") from exc
    return config_from_dict(data)
