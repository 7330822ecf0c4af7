from __future__ import annotations

import re
from typing import Iterable, List, Optional, Sequence, Set, Tuple

from ..model.errors import InvalidArgumentError
from .datasets import DATASETS, InputFileSource, get_dataset


ALL = "all"
YEAR_PATTERN = re.compile(r"^(\d{4}|0)$")
YEAR_RANGE_PATTERN = re.compile(r"^(?:(\d{4})-(\d{4})|0-0)$")


def split_list_arg(values: Optional[Iterable[str]]) -> List[str]:
    """Flatten repeated and comma-separated option values ("a,b" "c" -> [a, b, c])."""
    items: List[str] = []
    for value in values or []:
        items.extend(part.strip() for part in value.split(",") if part.strip())
    return items


def parse_datasets_arg(
    values: Optional[Sequence[str]],
    datasets: Tuple[InputFileSource, ...] = DATASETS,
) -> List[InputFileSource]:
    """Datasets to import, in the order given. Omitted or "all" selects every dataset."""
    codes = split_list_arg(values)
    if not codes:
        return list(datasets)
    selected: List[InputFileSource] = []
    for code in codes:
        if code.lower() == ALL:
            return list(datasets)
        selected.append(get_dataset(code, datasets))
    return selected


def parse_areas_arg(values: Optional[Sequence[str]]) -> Set[str]:
    """Authority codes or names to keep; an empty set (omitted or "all") keeps every area."""
    areas: Set[str] = set()
    for area in split_list_arg(values):
        if area == ALL:
            return set()
        areas.add(area)
    return areas


def parse_measures_arg(values: Optional[Sequence[str]]) -> Set[str]:
    """Measure codenames or labels (lowercased); an empty set keeps every measure."""
    measures: Set[str] = set()
    for measure in split_list_arg(values):
        measure = measure.lower()
        if measure == ALL:
            return set()
        measures.add(measure)
    return measures


def parse_years_arg(value: Optional[str]) -> Tuple[int, int]:
    """
    "YYYY" -> (YYYY, YYYY); "YYYY-ZZZZ" -> (YYYY, ZZZZ); "", "0" or "0-0" -> (0, 0), i.e. all
    years. Anything else is rejected.
    """
    text = (value or "").strip()
    if not text:
        return 0, 0
    single = YEAR_PATTERN.match(text)
    if single:
        year = int(single.group(1))
        return year, year
    span = YEAR_RANGE_PATTERN.match(text)
    if span:
        if span.group(1) is None:
            return 0, 0
        return int(span.group(1)), int(span.group(2))
    raise InvalidArgumentError("Invalid input for years argument")
