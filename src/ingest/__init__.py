from .authority_csv import populate_from_authority_code_csv
from .columns import SourceColumn, SourceColumnMapping, SourceDataType
from .filters import StringFilterSet, YearFilterTuple, area_matches, measure_matches, year_matches
from .populate import populate
from .stats_json import populate_from_welsh_stats_json
from .year_csv import YEAR_COLUMN_COUNT, populate_from_authority_by_year_csv

__all__ = [
    "SourceColumn",
    "SourceColumnMapping",
    "SourceDataType",
    "StringFilterSet",
    "YEAR_COLUMN_COUNT",
    "YearFilterTuple",
    "area_matches",
    "measure_matches",
    "populate",
    "populate_from_authority_by_year_csv",
    "populate_from_authority_code_csv",
    "populate_from_welsh_stats_json",
    "year_matches",
]
