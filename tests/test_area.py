import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from src.model import Area, InvalidArgumentError, Measure, NotFoundError


def test_set_name_normalises_language_code():
    area = Area("W06000023")
    area.set_name("ENG", "Powys")
    assert area.get_names() == {"eng": "Powys"}
    assert area.get_name("eng") == "Powys"


@pytest.mark.parametrize("lang", ["en", "engl", "en1", "", "e g"])
def test_set_name_rejects_bad_language_codes(lang):
    area = Area("W06000023")
    with pytest.raises(InvalidArgumentError):
        area.set_name(lang, "Powys")


def test_invalid_argument_is_a_value_error():
    with pytest.raises(ValueError):
        Area("W06000023").set_name("12a", "Powys")


def test_get_name_missing():
    with pytest.raises(NotFoundError, match="fra"):
        Area("W06000023").get_name("fra")


def test_get_measure_is_case_insensitive_and_reports_requested_text():
    area = Area("W06000023")
    area.set_measure("Pop", Measure("pop", "Population"))
    assert area.get_measure("POP").get_label() == "Population"
    with pytest.raises(NotFoundError, match="No measure found matching DENS"):
        area.get_measure("DENS")


def test_set_measure_twice_merges():
    area = Area("W06000023")
    first = Measure("pop", "Population")
    first.set_value(2000, 1.0)
    first.set_value(2001, 2.0)
    second = Measure("pop", "Resident population")
    second.set_value(2001, 5.0)
    second.set_value(2002, 6.0)

    area.set_measure("pop", first)
    area.set_measure("POP", second)

    measure = area.get_measure("pop")
    assert measure.get_label() == "Resident population"
    assert measure.get_values() == {2000: 1.0, 2001: 5.0, 2002: 6.0}
    assert area.size() == 1
    # The caller's first Measure is not changed by the second merge.
    assert first.get_values() == {2000: 1.0, 2001: 2.0}


def test_stored_codename_matches_key():
    area = Area("W06000023")
    area.set_measure("DENS", Measure("Dens", "Population density"))
    assert list(area.get_measures()) == ["dens"]
    assert area.get_measure("dens").get_codename() == "dens"


def test_display_name_combinations():
    area = Area("W06000023")
    assert area.display_name() == "Unnamed"
    area.set_name("eng", "Powys")
    assert area.display_name() == "Powys"
    area.set_name("cym", "Powys")
    assert area.display_name() == "Powys / Powys"


def test_display_name_english_first_then_welsh():
    area = Area("W06000015")
    area.set_name("cym", "Caerdydd")
    area.set_name("eng", "Cardiff")
    assert area.display_name() == "Cardiff / Caerdydd"


def test_display_name_other_languages_in_code_order():
    area = Area("W06000015")
    area.set_name("eng", "Cardiff")
    area.set_name("fra", "Cardiff (fr)")
    area.set_name("cym", "Caerdydd")
    assert area.display_name() == "Caerdydd / Cardiff / Cardiff (fr)"


def test_merge_overwrites_names_per_language():
    area = Area("W06000011")
    area.set_name("eng", "Swansea")
    area.set_name("cym", "Abertawe")
    update = Area("W06000011")
    update.set_name("eng", "City of Swansea")
    area.merge(update)
    assert area.get_names() == {"eng": "City of Swansea", "cym": "Abertawe"}
