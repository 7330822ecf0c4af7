from __future__ import annotations

import json
from typing import Dict, Optional

from ..model import AreaCollection


def areas_to_dict(areas: AreaCollection) -> Dict[str, dict]:
    """
    {code: {"names": {lang: name}, "measures": {codename: {"<year>": value}}}} with every level
    in key order (years chronologically).
    """
    payload: Dict[str, dict] = {}
    for code, area in areas.items():
        names = area.get_names()
        measures = area.get_measures()
        payload[code] = {
            "names": {lang: names[lang] for lang in sorted(names)},
            "measures": {
                codename: {str(year): value for year, value in measures[codename].items()}
                for codename in sorted(measures)
            },
        }
    return payload


def render_json(areas: AreaCollection, indent: Optional[int] = None) -> str:
    """JSON text for `areas`; an empty collection renders as "{}"."""
    separators = (",", ":") if indent is None else None
    return json.dumps(
        areas_to_dict(areas),
        indent=indent,
        separators=separators,
        ensure_ascii=False,
        allow_nan=False,
    )
