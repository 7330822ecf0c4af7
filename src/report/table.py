from __future__ import annotations

from typing import Iterable

from ..model import Area, AreaCollection, Measure


NO_DATA = "<no data>"
NO_MEASURES = "<no measures>"
STAT_HEADERS = ["Average", "Diff.", "% Diff."]


def format_value(value: float) -> str:
    return f"{value:.6f}"


def _align(cells: Iterable[str], width: int) -> str:
    return " ".join(cell.rjust(width) for cell in cells)


def render_measure(measure: Measure) -> str:
    """
    Three lines: "label (codename)", a header of years plus the statistics columns, then the
    readings with average, difference and percentage difference. Every column is right-aligned
    to the widest cell. A measure without readings shows "<no data>" in place of the values.
    """
    readings = measure.get_values()
    headers = [str(year) for year in readings] + STAT_HEADERS
    lines = [f"{measure.label} ({measure.codename})"]

    if not readings:
        width = max(len(header) for header in headers)
        lines.append(_align(headers, width))
        lines.append(NO_DATA)
        return "\n".join(lines)

    cells = [format_value(value) for value in readings.values()]
    cells += [
        format_value(measure.get_average()),
        format_value(measure.get_difference()),
        format_value(measure.get_difference_as_percentage()),
    ]
    width = max(len(cell) for cell in cells + headers)
    lines.append(_align(headers, width))
    lines.append(_align(cells, width))
    return "\n".join(lines)


def render_area(area: Area) -> str:
    title = f"{area.display_name()} ({area.local_authority_code})"
    measures = area.get_measures()
    if not measures:
        return f"{title}\n{NO_MEASURES}"
    blocks = [render_measure(measures[codename]) for codename in sorted(measures)]
    return title + "\n" + "\n\n".join(blocks)


def render_table(areas: AreaCollection) -> str:
    """Every area in authority code order, separated by blank lines."""
    return "\n\n".join(render_area(area) for area in areas)
