from __future__ import annotations

import logging
from typing import IO, List

from ..model import Area, AreaCollection
from ..model.area import ENGLISH, WELSH
from ..model.errors import MalformedSourceError
from .columns import SourceColumn, SourceColumnMapping
from .filters import StringFilterSet, area_matches
from .readers import read_csv_source, require_columns


log = logging.getLogger(__name__)

HEADER_ROLES = (
    SourceColumn.AUTH_CODE,
    SourceColumn.AUTH_NAME_ENG,
    SourceColumn.AUTH_NAME_CYM,
)


def _check_header(columns: List[str], cols: SourceColumnMapping) -> None:
    expected = {cols[role] for role in HEADER_ROLES}
    for column in columns:
        if column not in expected:
            raise MalformedSourceError(
                f"Malformed file: unexpected column header '{column}'"
            )
    if len(columns) != len(HEADER_ROLES) or set(columns) != expected:
        raise MalformedSourceError(
            "Malformed file: expected exactly three columns "
            f"({', '.join(cols[role] for role in HEADER_ROLES)})"
        )


def populate_from_authority_code_csv(
    areas: AreaCollection,
    stream: IO,
    cols: SourceColumnMapping,
    areas_filter: StringFilterSet = None,
) -> None:
    """
    Import authority codes with their English and Welsh names.

    Expected layout: a header naming the three mapped columns, then one
    `code,English name,Welsh name` row per authority. Rows are read positionally.
    A row is kept when the filter is empty or names its code or either name.
    """
    require_columns(cols, HEADER_ROLES, "authority code CSV")
    df = read_csv_source(stream)
    _check_header(list(df.columns), cols)

    imported: List[Area] = []
    for code, name_eng, name_cym in df.iloc[:, :3].itertuples(index=False, name=None):
        if not area_matches(areas_filter, code, name_eng, name_cym):
            continue
        area = Area(code)
        area.set_name(ENGLISH, name_eng)
        area.set_name(WELSH, name_cym)
        imported.append(area)

    for area in imported:
        areas.set_area(area.local_authority_code, area)
    log.info("Imported %s of %s authorities", len(imported), len(df))
