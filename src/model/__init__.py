from .area import Area
from .areas import AreaCollection
from .errors import BethYwError, InvalidArgumentError, MalformedSourceError, NotFoundError
from .measure import Measure

__all__ = [
    "Area",
    "AreaCollection",
    "BethYwError",
    "InvalidArgumentError",
    "MalformedSourceError",
    "Measure",
    "NotFoundError",
]
