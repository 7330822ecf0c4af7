import io
import json
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from src.config.datasets import POPDEN, TRAINS
from src.ingest import populate_from_welsh_stats_json
from src.model import AreaCollection, MalformedSourceError


def _popden_row(code, name, measure_code, measure_name, year, value):
    return {
        "Localauthority_Code": code,
        "Localauthority_ItemName_ENG": name,
        "Measure_Code": measure_code,
        "Measure_ItemName_ENG": measure_name,
        "Year_Code": year,
        "Data": value,
    }


POPDEN_ROWS = [
    _popden_row("W06000023", "Powys", "Pop", "Population", "2010", 132000.0),
    _popden_row("W06000023", "Powys", "Pop", "Population", "2011", "133000.5"),
    _popden_row("W06000023", "Powys", "Dens", "Population density", "2011", 25.6),
    _popden_row("W06000011", "Swansea", "Pop", "Population", "2011", 239000),
]


def _stream(rows):
    return io.StringIO(json.dumps({"odata.metadata": "x", "value": rows}))


def test_rows_accumulate_into_series():
    areas = AreaCollection()
    populate_from_welsh_stats_json(areas, _stream(POPDEN_ROWS), POPDEN.cols)

    assert areas.codes() == ["W06000011", "W06000023"]
    powys = areas.get_area("W06000023")
    assert powys.get_names() == {"eng": "Powys"}
    assert powys.get_measure("pop").get_values() == {2010: 132000.0, 2011: 133000.5}
    assert powys.get_measure("dens").get_label() == "Population density"
    assert areas.get_area("W06000011").get_measure("pop").get_value(2011) == 239000.0


def test_measure_filter_is_case_insensitive_on_code_and_label():
    areas = AreaCollection()
    populate_from_welsh_stats_json(
        areas, _stream(POPDEN_ROWS), POPDEN.cols, None, {"POP"}, None
    )
    assert list(areas.get_area("W06000023").get_measures()) == ["pop"]

    areas = AreaCollection()
    populate_from_welsh_stats_json(
        areas, _stream(POPDEN_ROWS), POPDEN.cols, None, {"population density"}, None
    )
    assert areas.codes() == ["W06000023"]
    assert list(areas.get_area("W06000023").get_measures()) == ["dens"]


def test_area_filter_matches_english_name():
    areas = AreaCollection()
    populate_from_welsh_stats_json(areas, _stream(POPDEN_ROWS), POPDEN.cols, {"Swansea"})
    assert areas.codes() == ["W06000011"]


def test_year_filter():
    areas = AreaCollection()
    populate_from_welsh_stats_json(
        areas, _stream(POPDEN_ROWS), POPDEN.cols, set(), set(), (2010, 2010)
    )
    assert areas.codes() == ["W06000023"]
    assert areas.get_area("W06000023").get_measure("pop").get_values() == {2010: 132000.0}


def test_fixed_measure_from_mapping_and_missing_names():
    rows = [
        {"LocalAuthority_Code": "W06000015", "Year_Code": "2015", "Data": "1200.5"},
        {
            "LocalAuthority_Code": "W06000015",
            "LocalAuthority_ItemName_ENG": "Cardiff",
            "Year_Code": "2016",
            "Data": 1300,
        },
    ]
    areas = AreaCollection()
    populate_from_welsh_stats_json(areas, _stream(rows), TRAINS.cols)

    cardiff = areas.get_area("W06000015")
    assert cardiff.get_names() == {"eng": "Cardiff"}
    rail = cardiff.get_measure("rail")
    assert rail.get_label() == "Rail passenger journeys"
    assert rail.get_values() == {2015: 1200.5, 2016: 1300.0}


def test_non_numeric_value_is_malformed_and_nothing_is_merged():
    rows = POPDEN_ROWS + [_popden_row("W06000015", "Cardiff", "Pop", "Population", "2011", "lots")]
    areas = AreaCollection()
    with pytest.raises(MalformedSourceError):
        populate_from_welsh_stats_json(areas, _stream(rows), POPDEN.cols)
    assert areas.size() == 0


def test_missing_value_array_is_malformed():
    with pytest.raises(MalformedSourceError):
        populate_from_welsh_stats_json(AreaCollection(), io.StringIO('{"rows": []}'), POPDEN.cols)


def test_invalid_json_is_malformed():
    with pytest.raises(MalformedSourceError):
        populate_from_welsh_stats_json(AreaCollection(), io.StringIO("{not json"), POPDEN.cols)


def test_bytes_stream_with_byte_order_mark():
    payload = ("\ufeff" + json.dumps({"value": POPDEN_ROWS[:1]})).encode("utf-8")
    areas = AreaCollection()
    populate_from_welsh_stats_json(areas, io.BytesIO(payload), POPDEN.cols)
    assert areas.get_area("W06000023").get_measure("pop").get_value(2010) == 132000.0


def test_non_finite_values_are_malformed():
    rows = [_popden_row("W06000023", "Powys", "Pop", "Population", "2016", "nan")]
    with pytest.raises(MalformedSourceError):
        populate_from_welsh_stats_json(AreaCollection(), _stream(rows), POPDEN.cols)


def test_undecodable_bytes_are_malformed():
    payload = json.dumps({"value": POPDEN_ROWS[:1]}).encode("utf-8") + b"\xff"
    with pytest.raises(MalformedSourceError, match="UTF-8"):
        populate_from_welsh_stats_json(AreaCollection(), io.BytesIO(payload), POPDEN.cols)
