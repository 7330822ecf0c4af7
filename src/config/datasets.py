# ====================================================================================================
# Dataset table: which files the command-line tool knows how to import, and how.
#
# Each entry pairs a short dataset code (what users type after --datasets) with the file name inside
# the data directory, the importer that understands its layout, and the column mapping that tells
# the importer which header/field names hold the authority code, names, year, value and measure.
#
# The table is read-only configuration owned by the driver: importers receive an entry's `cols`
# mapping and never look anything up here themselves.
# ====================================================================================================

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from ..ingest.columns import SourceColumn, SourceColumnMapping, SourceDataType
from ..model.errors import InvalidArgumentError


# ----------------------------------------------------------------------------------------------------
# InputFileSource
# One importable file: display name, dataset code, file name (relative to --dir), importer type and
# column mapping.
# ----------------------------------------------------------------------------------------------------
@dataclass(frozen=True)
class InputFileSource:
    name: str
    code: str
    file: str
    parser: SourceDataType
    cols: SourceColumnMapping


AREAS = InputFileSource(
    name="Areas",
    code="areas",
    file="areas.csv",
    parser=SourceDataType.AUTHORITY_CODE_CSV,
    cols={
        SourceColumn.AUTH_CODE: "Local authority code",
        SourceColumn.AUTH_NAME_ENG: "Name (eng)",
        SourceColumn.AUTH_NAME_CYM: "Name (cym)",
    },
)

POPDEN = InputFileSource(
    name="Population density",
    code="popden",
    file="popu1009.json",
    parser=SourceDataType.WELSH_STATS_JSON,
    cols={
        SourceColumn.AUTH_CODE: "Localauthority_Code",
        SourceColumn.AUTH_NAME_ENG: "Localauthority_ItemName_ENG",
        SourceColumn.MEASURE_CODE: "Measure_Code",
        SourceColumn.MEASURE_NAME: "Measure_ItemName_ENG",
        SourceColumn.YEAR: "Year_Code",
        SourceColumn.VALUE: "Data",
    },
)

BIZ = InputFileSource(
    name="Active Businesses",
    code="biz",
    file="econ0080.json",
    parser=SourceDataType.WELSH_STATS_JSON,
    cols={
        SourceColumn.AUTH_CODE: "Area_Code",
        SourceColumn.AUTH_NAME_ENG: "Area_ItemName_ENG",
        SourceColumn.MEASURE_CODE: "Variable_Code",
        SourceColumn.MEASURE_NAME: "Variable_ItemName_ENG",
        SourceColumn.YEAR: "Year_Code",
        SourceColumn.VALUE: "Data",
    },
)

# Air quality files have no separate pollutant code: the English name doubles as the codename.
AQI = InputFileSource(
    name="Air Quality Indicators",
    code="aqi",
    file="envi0201.json",
    parser=SourceDataType.WELSH_STATS_JSON,
    cols={
        SourceColumn.AUTH_CODE: "Area_Code",
        SourceColumn.AUTH_NAME_ENG: "Area_ItemName_ENG",
        SourceColumn.MEASURE_CODE: "Pollutant_ItemName_ENG",
        SourceColumn.MEASURE_NAME: "Pollutant_ItemName_ENG",
        SourceColumn.YEAR: "Year_Code",
        SourceColumn.VALUE: "Data",
    },
)

TRAINS = InputFileSource(
    name="Rail passenger journeys",
    code="trains",
    file="tran0152.json",
    parser=SourceDataType.WELSH_STATS_JSON,
    cols={
        SourceColumn.AUTH_CODE: "LocalAuthority_Code",
        SourceColumn.AUTH_NAME_ENG: "LocalAuthority_ItemName_ENG",
        SourceColumn.YEAR: "Year_Code",
        SourceColumn.VALUE: "Data",
        SourceColumn.SINGLE_MEASURE_CODE: "rail",
        SourceColumn.SINGLE_MEASURE_NAME: "Rail passenger journeys",
    },
)


def _complete_popu1009(code: str, file: str, measure_code: str, measure_name: str) -> InputFileSource:
    return InputFileSource(
        name=measure_name,
        code=code,
        file=file,
        parser=SourceDataType.AUTHORITY_BY_YEAR_CSV,
        cols={
            SourceColumn.AUTH_CODE: "AuthorityCode",
            SourceColumn.SINGLE_MEASURE_CODE: measure_code,
            SourceColumn.SINGLE_MEASURE_NAME: measure_name,
        },
    )


COMPLETE_POPDEN = _complete_popu1009(
    "complete-popden", "complete-popu1009-popden.csv", "dens", "Population density"
)
COMPLETE_POP = _complete_popu1009(
    "complete-pop", "complete-popu1009-pop.csv", "pop", "Population"
)
COMPLETE_AREA = _complete_popu1009(
    "complete-area", "complete-popu1009-area.csv", "area", "Land area"
)

# Default import order; later datasets override earlier ones on the same area/measure/year.
DATASETS: Tuple[InputFileSource, ...] = (
    POPDEN,
    BIZ,
    AQI,
    TRAINS,
    COMPLETE_POPDEN,
    COMPLETE_POP,
    COMPLETE_AREA,
)


def get_dataset(code: str, datasets: Tuple[InputFileSource, ...] = DATASETS) -> InputFileSource:
    key = code.lower().strip()
    for source in datasets:
        if source.code == key:
            return source
    raise InvalidArgumentError(f"No dataset matches key: {code}")
