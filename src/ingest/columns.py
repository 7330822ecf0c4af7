from __future__ import annotations

from enum import Enum
from typing import Dict


class SourceDataType(Enum):
    """The three file layouts the importers understand."""

    AUTHORITY_CODE_CSV = "authority_code_csv"
    WELSH_STATS_JSON = "welsh_stats_json"
    AUTHORITY_BY_YEAR_CSV = "authority_by_year_csv"


class SourceColumn(Enum):
    """Roles a header/field name can play in a dataset file."""

    AUTH_CODE = "auth_code"
    AUTH_NAME_ENG = "auth_name_eng"
    AUTH_NAME_CYM = "auth_name_cym"
    MEASURE_CODE = "measure_code"
    MEASURE_NAME = "measure_name"
    SINGLE_MEASURE_CODE = "single_measure_code"
    SINGLE_MEASURE_NAME = "single_measure_name"
    YEAR = "year"
    VALUE = "value"


# Role -> literal header or field name (or, for the SINGLE_MEASURE_* roles, the fixed measure
# codename/label used for every reading in the file).
SourceColumnMapping = Dict[SourceColumn, str]
