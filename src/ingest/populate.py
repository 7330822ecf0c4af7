from __future__ import annotations

import logging
from typing import IO

from ..model import AreaCollection
from .authority_csv import populate_from_authority_code_csv
from .columns import SourceColumn, SourceColumnMapping, SourceDataType
from .filters import StringFilterSet, YearFilterTuple, measure_matches
from .readers import require_columns
from .stats_json import populate_from_welsh_stats_json
from .year_csv import populate_from_authority_by_year_csv


log = logging.getLogger(__name__)


def populate(
    areas: AreaCollection,
    stream: IO,
    source_type: SourceDataType,
    cols: SourceColumnMapping,
    areas_filter: StringFilterSet = None,
    measures_filter: StringFilterSet = None,
    years_filter: YearFilterTuple = None,
) -> None:
    """
    Import one dataset stream into `areas` using the importer for `source_type`.

    Filters may be None (or empty) to import everything. Wide year-per-column files hold a single
    fixed measure, so the measures filter is checked here and the whole file skipped when it
    names neither that measure's codename nor its label.
    """
    if source_type == SourceDataType.AUTHORITY_CODE_CSV:
        populate_from_authority_code_csv(areas, stream, cols, areas_filter)
    elif source_type == SourceDataType.WELSH_STATS_JSON:
        populate_from_welsh_stats_json(
            areas, stream, cols, areas_filter, measures_filter, years_filter
        )
    elif source_type == SourceDataType.AUTHORITY_BY_YEAR_CSV:
        require_columns(
            cols,
            (SourceColumn.SINGLE_MEASURE_CODE, SourceColumn.SINGLE_MEASURE_NAME),
            "authority-by-year CSV",
        )
        codename = cols[SourceColumn.SINGLE_MEASURE_CODE]
        label = cols[SourceColumn.SINGLE_MEASURE_NAME]
        if not measure_matches(measures_filter, codename, label):
            log.info("Skipping '%s': not selected by the measures filter", codename)
            return
        populate_from_authority_by_year_csv(areas, stream, cols, areas_filter, years_filter)
    else:
        raise RuntimeError(f"populate: Unexpected data type {source_type!r}")
