from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, Tuple

from .errors import NotFoundError


# ----------------------------------------------------------------------------------------------------
# Measure
# One statistic (e.g. population density) for one area, as a series of yearly readings.
#
# - `codename` is the key everywhere: it is lowercased on construction and never changes afterwards.
# - `label` is the human-readable name; merging another Measure replaces it.
# - `values` maps year -> reading. Insertion order is not meaningful; use `get_values()` / `items()`
#   when chronological order matters (table and JSON output both do).
# ----------------------------------------------------------------------------------------------------
@dataclass
class Measure:
    codename: str
    label: str
    values: Dict[int, float] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.codename = self.codename.lower()

    def get_codename(self) -> str:
        return self.codename

    def get_label(self) -> str:
        return self.label

    def set_label(self, label: str) -> None:
        self.label = label

    def set_value(self, year: int, value: float) -> None:
        self.values[year] = value

    def get_value(self, year: int) -> float:
        try:
            return self.values[year]
        except KeyError:
            raise NotFoundError(f"No value found for year {year}") from None

    def get_values(self) -> Dict[int, float]:
        """Readings in ascending year order (a copy)."""
        return dict(self.items())

    def items(self) -> Iterator[Tuple[int, float]]:
        return iter(sorted(self.values.items()))

    def size(self) -> int:
        return len(self.values)

    def __len__(self) -> int:
        return len(self.values)

    def get_average(self) -> float:
        if not self.values:
            return 0.0
        return sum(self.values.values()) / len(self.values)

    def get_difference(self) -> float:
        """Last year's reading minus the first year's; 0.0 without readings."""
        if not self.values:
            return 0.0
        return self.values[max(self.values)] - self.values[min(self.values)]

    def get_difference_as_percentage(self) -> float:
        """`get_difference()` relative to the first year's reading, in percent.

        Returns 0.0 when there are no readings or the first reading is zero.
        """
        if not self.values:
            return 0.0
        first = self.values[min(self.values)]
        if first == 0:
            return 0.0
        return self.get_difference() / first * 100

    def merge(self, other: Measure) -> None:
        """Fold `other` into this measure: its label wins, its readings win on the same year."""
        self.label = other.label
        self.values.update(other.values)

    def copy(self) -> Measure:
        return Measure(self.codename, self.label, dict(self.values))
