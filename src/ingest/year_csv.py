from __future__ import annotations

import logging
from typing import IO, Dict, List

import pandas as pd

from ..model import Area, AreaCollection, Measure
from ..model.errors import MalformedSourceError
from .columns import SourceColumn, SourceColumnMapping
from .filters import StringFilterSet, YearFilterTuple, area_matches, year_matches
from .readers import parse_value, read_csv_source, require_columns


log = logging.getLogger(__name__)

# Wide files carry one column per year, 11 years per file.
YEAR_COLUMN_COUNT = 11


def _parse_year_columns(columns: List[str]) -> Dict[str, int]:
    years: Dict[str, int] = {}
    for column in columns:
        try:
            year = int(column)
        except ValueError:
            raise MalformedSourceError(
                f"Malformed file: column header '{column}' is not a year"
            ) from None
        if year < 0:
            raise MalformedSourceError(
                f"Malformed file: column header '{column}' is not a year"
            )
        years[column] = year
    if len(years) != YEAR_COLUMN_COUNT:
        raise MalformedSourceError(
            "Malformed file: There is an incorrect number of columns "
            f"(expected {YEAR_COLUMN_COUNT} years, found {len(years)})"
        )
    return years


def populate_from_authority_by_year_csv(
    areas: AreaCollection,
    stream: IO,
    cols: SourceColumnMapping,
    areas_filter: StringFilterSet = None,
    years_filter: YearFilterTuple = None,
) -> None:
    """
    Import a single measure laid out as one row per authority and one column per year.

    The measure identity comes from the mapping (SINGLE_MEASURE_CODE / SINGLE_MEASURE_NAME),
    not from the file. Every value is parsed before filtering, so one bad cell rejects the file.
    """
    require_columns(
        cols,
        (SourceColumn.SINGLE_MEASURE_CODE, SourceColumn.SINGLE_MEASURE_NAME),
        "authority-by-year CSV",
    )
    df = read_csv_source(stream)
    columns = list(df.columns)
    if not columns:
        raise MalformedSourceError("Malformed file: no header row")

    code_column = columns[0]
    years = _parse_year_columns(columns[1:])

    # Melt wide -> long: one row per (authority, year).
    long_df = df.melt(
        id_vars=[code_column],
        value_vars=list(years),
        var_name="year_col",
        value_name="raw_value",
    )
    long_df["year"] = long_df["year_col"].map(years)
    long_df["value"] = [
        parse_value(raw, f" for {code} in {year_col}")
        for code, year_col, raw in zip(
            long_df[code_column], long_df["year_col"], long_df["raw_value"]
        )
    ]

    keep = pd.Series(
        [
            year_matches(years_filter, year) and area_matches(areas_filter, code)
            for code, year in zip(long_df[code_column], long_df["year"])
        ],
        index=long_df.index,
        dtype=bool,
    )
    selected = long_df[keep]

    codename = cols[SourceColumn.SINGLE_MEASURE_CODE]
    label = cols[SourceColumn.SINGLE_MEASURE_NAME]
    for code, year, value in zip(selected[code_column], selected["year"], selected["value"]):
        area = Area(code)
        measure = Measure(codename, label)
        measure.set_value(int(year), float(value))
        area.set_measure(codename, measure)
        areas.set_area(code, area)

    log.info(
        "Imported %s readings of '%s' (%s authorities, %s years in file)",
        len(selected),
        codename,
        selected[code_column].nunique(),
        len(years),
    )
