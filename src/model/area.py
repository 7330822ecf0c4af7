from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict

from .errors import InvalidArgumentError, NotFoundError
from .measure import Measure


ENGLISH = "eng"
WELSH = "cym"
UNNAMED = "Unnamed"


@dataclass
class Area:
    """
    A local authority: its authority code, its names keyed by 3-letter language code, and its
    measures keyed by lowercase codename.
    """
    local_authority_code: str
    names: Dict[str, str] = field(default_factory=dict, init=False)
    measures: Dict[str, Measure] = field(default_factory=dict, init=False)

    def get_local_authority_code(self) -> str:
        return self.local_authority_code

    def set_name(self, lang: str, name: str) -> None:
        lang = lang.lower()
        if len(lang) != 3 or not (lang.isascii() and lang.isalpha()):
            raise InvalidArgumentError(
                "Area.set_name: Language code must be three alphabetical letters only"
            )
        self.names[lang] = name

    def get_name(self, lang: str) -> str:
        try:
            return self.names[lang.lower()]
        except KeyError:
            raise NotFoundError(f"No name found for language code: {lang}") from None

    def get_names(self) -> Dict[str, str]:
        return self.names

    def set_measure(self, codename: str, measure: Measure) -> None:
        key = codename.lower()
        existing = self.measures.get(key)
        if existing is None:
            # Stored under its own key so later merges never touch the caller's object.
            self.measures[key] = Measure(key, measure.label, dict(measure.values))
        else:
            existing.merge(measure)

    def get_measure(self, codename: str) -> Measure:
        try:
            return self.measures[codename.lower()]
        except KeyError:
            raise NotFoundError(f"No measure found matching {codename}") from None

    def get_measures(self) -> Dict[str, Measure]:
        return self.measures

    def size(self) -> int:
        return len(self.measures)

    def copy(self) -> Area:
        area = Area(self.local_authority_code)
        area.merge(self)
        return area

    def merge(self, other: Area) -> None:
        for lang, name in other.names.items():
            self.set_name(lang, name)
        for codename, measure in other.measures.items():
            self.set_measure(codename, measure)

    def display_name(self) -> str:
        """
        "English / Welsh" when exactly those two names are known, the single name when there is
        one, "Unnamed" when there are none. Any other combination joins every name in language
        code order.
        """
        if not self.names:
            return UNNAMED
        if len(self.names) == 1:
            return next(iter(self.names.values()))
        if set(self.names) == {ENGLISH, WELSH}:
            return f"{self.names[ENGLISH]} / {self.names[WELSH]}"
        return " / ".join(self.names[lang] for lang in sorted(self.names))
