from .json_export import areas_to_dict, render_json
from .table import format_value, render_area, render_measure, render_table

__all__ = [
    "areas_to_dict",
    "format_value",
    "render_area",
    "render_json",
    "render_measure",
    "render_table",
]
