import json
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from src.model import Area, AreaCollection, Measure
from src.report import render_area, render_json, render_measure, render_table


def _powys():
    area = Area("W06000023")
    area.set_name("eng", "Powys")
    area.set_name("cym", "Powys")
    measure = Measure("pop", "Population")
    measure.set_value(2001, 20.0)
    measure.set_value(1999, 10.0)
    area.set_measure("pop", measure)
    return area


def test_render_measure_aligns_columns_to_widest_value():
    area = _powys()
    assert render_measure(area.get_measure("pop")) == (
        "Population (pop)\n"
        "      1999       2001    Average      Diff.    % Diff.\n"
        " 10.000000  20.000000  15.000000  10.000000 100.000000"
    )


def test_render_empty_measure():
    lines = render_measure(Measure("dens", "Population density")).split("\n")
    assert lines[0] == "Population density (dens)"
    assert lines[1] == "Average   Diff. % Diff."
    assert lines[2] == "<no data>"


def test_render_area_orders_measures_by_codename():
    area = _powys()
    dens = Measure("dens", "Population density")
    dens.set_value(2010, 1.5)
    area.set_measure("dens", dens)

    text = render_area(area)
    lines = text.split("\n")
    assert lines[0] == "Powys / Powys (W06000023)"
    assert lines[1] == "Population density (dens)"
    assert lines[4] == ""
    assert lines[5] == "Population (pop)"


def test_render_area_without_measures_or_names():
    assert render_area(Area("W06000099")) == "Unnamed (W06000099)\n<no measures>"


def test_render_table_orders_areas_and_separates_with_blank_line():
    areas = AreaCollection()
    areas.set_area("W06000023", Area("W06000023"))
    areas.set_area("W06000011", Area("W06000011"))
    assert render_table(areas) == (
        "Unnamed (W06000011)\n<no measures>\n\nUnnamed (W06000023)\n<no measures>"
    )


def test_render_json_empty_collection():
    assert render_json(AreaCollection()) == "{}"


def test_render_json_structure():
    areas = AreaCollection()
    areas.set_area("W06000023", _powys())
    assert render_json(areas) == (
        '{"W06000023":{"names":{"cym":"Powys","eng":"Powys"},'
        '"measures":{"pop":{"1999":10.0,"2001":20.0}}}}'
    )


def test_render_json_keeps_welsh_characters_and_empty_sections():
    areas = AreaCollection()
    area = Area("W06000001")
    area.set_name("cym", "Ynys Môn")
    areas.set_area("W06000001", area)
    payload = json.loads(render_json(areas, indent=2))
    assert payload == {"W06000001": {"names": {"cym": "Ynys Môn"}, "measures": {}}}
    assert "Môn" in render_json(areas)


def test_render_json_refuses_non_finite_readings():
    areas = AreaCollection()
    area = Area("W06000023")
    measure = Measure("pop", "Population")
    measure.set_value(2016, float("nan"))
    area.set_measure("pop", measure)
    areas.set_area("W06000023", area)
    with pytest.raises(ValueError):
        render_json(areas)
