from __future__ import annotations

from typing import AbstractSet, Optional, Tuple

# None or an empty set means "no filtering". (0, 0) means every year.
StringFilterSet = Optional[AbstractSet[str]]
YearFilterTuple = Optional[Tuple[int, int]]


def area_matches(areas_filter: StringFilterSet, *candidates: str) -> bool:
    """True when the filter is empty or contains any candidate (authority code or a name)."""
    if not areas_filter:
        return True
    return any(candidate in areas_filter for candidate in candidates if candidate)


def measure_matches(measures_filter: StringFilterSet, codename: str, label: str) -> bool:
    """Case-insensitive match of a measure's codename or label against the filter."""
    if not measures_filter:
        return True
    wanted = {item.lower() for item in measures_filter}
    return codename.lower() in wanted or label.lower() in wanted


def year_matches(years_filter: YearFilterTuple, year: int) -> bool:
    if years_filter is None:
        return True
    start, end = years_filter
    if start == 0 and end == 0:
        return True
    return start <= year <= end
