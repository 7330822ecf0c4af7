from __future__ import annotations

import json
import logging
from typing import IO, List, Tuple

from ..model import Area, AreaCollection, Measure
from ..model.area import ENGLISH, WELSH
from ..model.errors import MalformedSourceError
from .columns import SourceColumn, SourceColumnMapping
from .filters import (
    StringFilterSet,
    YearFilterTuple,
    area_matches,
    measure_matches,
    year_matches,
)
from .readers import parse_value, parse_year, read_text, require_columns


log = logging.getLogger(__name__)


def _load_rows(stream: IO) -> List[dict]:
    try:
        payload = json.loads(read_text(stream))
    except ValueError as exc:
        raise MalformedSourceError(f"Malformed file: invalid JSON ({exc})") from exc

    rows = payload.get("value") if isinstance(payload, dict) else None
    if not isinstance(rows, list):
        raise MalformedSourceError('Malformed file: expected a top-level "value" array')
    return rows


def _field(row: dict, name: str, index: int) -> object:
    if name not in row:
        raise MalformedSourceError(f"Malformed file: row {index} has no '{name}' field")
    return row[name]


def _optional_text(row: dict, cols: SourceColumnMapping, role: SourceColumn) -> str:
    if role not in cols:
        return ""
    value = row.get(cols[role])
    return "" if value is None else str(value)


def _measure_identity(row: dict, cols: SourceColumnMapping, index: int) -> Tuple[str, str]:
    if SourceColumn.MEASURE_CODE in cols and SourceColumn.MEASURE_NAME in cols:
        codename = str(_field(row, cols[SourceColumn.MEASURE_CODE], index))
        label = str(_field(row, cols[SourceColumn.MEASURE_NAME], index))
    else:
        codename = cols[SourceColumn.SINGLE_MEASURE_CODE]
        label = cols[SourceColumn.SINGLE_MEASURE_NAME]
    return codename.lower(), label


def populate_from_welsh_stats_json(
    areas: AreaCollection,
    stream: IO,
    cols: SourceColumnMapping,
    areas_filter: StringFilterSet = None,
    measures_filter: StringFilterSet = None,
    years_filter: YearFilterTuple = None,
) -> None:
    """
    Import a StatsWales-style JSON document: `{"value": [ {...}, ... ]}` where each element is one
    reading for one authority, one year and one measure.

    The measure comes from the row (MEASURE_CODE / MEASURE_NAME) when the mapping names those
    fields, otherwise from the fixed SINGLE_MEASURE_CODE / SINGLE_MEASURE_NAME of the mapping.
    Rows for the same authority and measure accumulate into one multi-year series.
    """
    require_columns(cols, (SourceColumn.AUTH_CODE, SourceColumn.YEAR, SourceColumn.VALUE), "JSON")
    if not (
        {SourceColumn.MEASURE_CODE, SourceColumn.MEASURE_NAME} <= set(cols)
        or {SourceColumn.SINGLE_MEASURE_CODE, SourceColumn.SINGLE_MEASURE_NAME} <= set(cols)
    ):
        require_columns(cols, (SourceColumn.MEASURE_CODE, SourceColumn.MEASURE_NAME), "JSON")

    rows = _load_rows(stream)
    imported: List[Area] = []
    for index, row in enumerate(rows):
        if not isinstance(row, dict):
            raise MalformedSourceError(f"Malformed file: row {index} is not an object")

        code = str(_field(row, cols[SourceColumn.AUTH_CODE], index))
        name_eng = _optional_text(row, cols, SourceColumn.AUTH_NAME_ENG)
        name_cym = _optional_text(row, cols, SourceColumn.AUTH_NAME_CYM)
        if not area_matches(areas_filter, code, name_eng, name_cym):
            continue

        year = parse_year(_field(row, cols[SourceColumn.YEAR], index), f" in row {index}")
        if not year_matches(years_filter, year):
            continue

        codename, label = _measure_identity(row, cols, index)
        value = parse_value(_field(row, cols[SourceColumn.VALUE], index), f" in row {index}")
        if not measure_matches(measures_filter, codename, label):
            continue

        area = Area(code)
        if name_eng:
            area.set_name(ENGLISH, name_eng)
        if name_cym:
            area.set_name(WELSH, name_cym)
        measure = Measure(codename, label)
        measure.set_value(year, value)
        area.set_measure(codename, measure)
        imported.append(area)

    for area in imported:
        areas.set_area(area.local_authority_code, area)
    log.info("Imported %s of %s JSON rows", len(imported), len(rows))
