from __future__ import annotations

from typing import Dict, Iterator, List, Tuple

from .area import Area
from .errors import NotFoundError


class AreaCollection:
    """
    Every imported Area, keyed by local authority code.

    Areas are stored as copies. Storing an Area under a code that already exists merges it into
    the stored one (names replaced per language, measures merged), so importing several datasets
    builds up one Area per authority.
    Iteration is in ascending authority code order.
    """

    def __init__(self) -> None:
        self._areas: Dict[str, Area] = {}

    def set_area(self, local_authority_code: str, area: Area) -> None:
        existing = self._areas.get(local_authority_code)
        if existing is None:
            self._areas[local_authority_code] = area.copy()
        else:
            existing.merge(area)

    def get_area(self, local_authority_code: str) -> Area:
        try:
            return self._areas[local_authority_code]
        except KeyError:
            raise NotFoundError(f"No area found matching {local_authority_code}") from None

    def size(self) -> int:
        return len(self._areas)

    def codes(self) -> List[str]:
        return sorted(self._areas)

    def items(self) -> Iterator[Tuple[str, Area]]:
        for code in sorted(self._areas):
            yield code, self._areas[code]

    def __len__(self) -> int:
        return len(self._areas)

    def __contains__(self, local_authority_code: object) -> bool:
        return local_authority_code in self._areas

    def __iter__(self) -> Iterator[Area]:
        for code in sorted(self._areas):
            yield self._areas[code]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AreaCollection):
            return NotImplemented
        return self._areas == other._areas

    def __repr__(self) -> str:
        return f"AreaCollection({self.codes()!r})"
