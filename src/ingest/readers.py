from __future__ import annotations

import io
import math
import re
from typing import IO, Iterable, List

import pandas as pd

from ..model.errors import InvalidArgumentError, MalformedSourceError
from .columns import SourceColumn, SourceColumnMapping


LEADING_DIGITS = re.compile(r"\s*(\d+)")
DECIMAL_NUMBER = re.compile(r"[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?")


def read_text(stream: IO) -> str:
    """Whole stream as text; undecodable bytes make the source malformed."""
    try:
        raw = stream.read()
        if isinstance(raw, bytes):
            raw = raw.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise MalformedSourceError(f"Malformed file: not valid UTF-8 ({exc})") from exc
    return raw.lstrip("\ufeff")


def read_csv_source(stream: IO) -> pd.DataFrame:
    """
    Read a comma-separated stream with every cell kept as text ("" for missing cells).

    Columns are taken by position from the header: fields beyond the header's width are ignored
    on every row, and short rows are padded with "".
    """
    text = read_text(stream)
    try:
        header = pd.read_csv(io.StringIO(text), nrows=0, index_col=False)
        df = pd.read_csv(
            io.StringIO(text),
            dtype=str,
            keep_default_na=False,
            index_col=False,
            usecols=range(len(header.columns)),
            skip_blank_lines=True,
        )
    except pd.errors.EmptyDataError as exc:
        raise MalformedSourceError("Malformed file: no header row") from exc
    except pd.errors.ParserError as exc:
        raise MalformedSourceError(f"Malformed file: {exc}") from exc

    # Clean column names (remove BOM if present)
    df.columns = [str(col).replace("\ufeff", "").strip() for col in df.columns]
    return df.fillna("")


def parse_value(raw: object, context: str = "") -> float:
    """Coerce a reading that may be a native number or a plain decimal string; must be finite."""
    if isinstance(raw, bool) or raw is None:
        raise MalformedSourceError(f"Malformed value {raw!r}{context}")
    if isinstance(raw, (int, float)):
        value = float(raw)
    elif isinstance(raw, str) and DECIMAL_NUMBER.fullmatch(raw.strip()):
        value = float(raw.strip())
    else:
        raise MalformedSourceError(f"Malformed value {raw!r}{context}")
    if not math.isfinite(value):
        raise MalformedSourceError(f"Malformed value {raw!r}{context}")
    return value


def parse_year(raw: object, context: str = "") -> int:
    """Read a year from the leading digits of its string form ("2015", 2015, "2015/16")."""
    if isinstance(raw, bool) or raw is None:
        raise MalformedSourceError(f"Malformed year {raw!r}{context}")
    match = LEADING_DIGITS.match(str(raw))
    if not match:
        raise MalformedSourceError(f"Malformed year {raw!r}{context}")
    return int(match.group(1))


def require_columns(
    cols: SourceColumnMapping, roles: Iterable[SourceColumn], source: str
) -> None:
    missing: List[str] = [role.name for role in roles if role not in cols]
    if missing:
        raise InvalidArgumentError(
            f"Column mapping for {source} is missing: {', '.join(missing)}"
        )
