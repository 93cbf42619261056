"""Normalize heterogeneous spreadsheet date cells to calendar dates.

The feed mixes three representations in the same column:

  - spreadsheet serial numbers (``45123`` or ``"45123"``), counted from the
    1900 date system. Serial 25569 is 1970-01-01; the fictitious 1900-02-29
    is kept as is so older exports line up with the sheet.
  - ``dd-mm-yyyy`` / ``dd/mm/yyyy`` strings, always day first.
  - ISO 8601 and other strings pandas can parse.
"""

import math
import numbers
import re
from datetime import date, datetime, timedelta, timezone

import pandas as pd

SERIAL_UNIX_EPOCH = 25569
MS_PER_DAY = 86_400_000

_SERIAL_RE = re.compile(r"^\d+(\.\d+)?$")
_DAY_FIRST_RE = re.compile(r"^(\d{1,2})[-/](\d{1,2})[-/](\d{4})$")
_CANONICAL_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")

_UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _from_serial(serial: float) -> date | None:
    if not math.isfinite(serial) or serial <= 0:
        return None
    epoch_ms = (serial - SERIAL_UNIX_EPOCH) * MS_PER_DAY
    try:
        return (_UNIX_EPOCH + timedelta(milliseconds=epoch_ms)).date()
    except OverflowError:
        return None


def _from_day_first(day: str, month: str, year: str) -> date | None:
    try:
        return date(int(year), int(month), int(day))
    except ValueError:
        return None


def _from_generic(text: str) -> date | None:
    parsed = pd.to_datetime(text, errors="coerce")
    if pd.isna(parsed):
        return None
    return parsed.date()


def normalize_date(raw: str | int | float | date | None) -> date | None:
    """Convert a raw date cell into a ``date``, or None if it can't be read.

    Pure-numeric strings are tried as serials before any other parsing so
    ``"45123"`` is never handed to the generic parser and ``"27-11-2025"``
    is never read as 27.
    """
    match raw:
        case None | bool():
            return None
        case datetime():
            return None if pd.isna(raw) else raw.date()
        case date():
            return raw
        case numbers.Real():
            return _from_serial(float(raw))
        case str():
            text = raw.strip()
        case _:
            return None

    if not text:
        return None
    if _SERIAL_RE.match(text):
        return _from_serial(float(text))
    if m := _DAY_FIRST_RE.match(text):
        return _from_day_first(*m.groups())
    return _from_generic(text)


def to_canonical_string(value: date | None) -> str:
    """Render a date as ``YYYY-MM-DD``; empty string for None."""
    if value is None:
        return ""
    return f"{value.year:04d}-{value.month:02d}-{value.day:02d}"


def to_display_string(canonical: str) -> str:
    """Turn ``YYYY-MM-DD`` into ``DD-MM-YYYY``; anything else passes through."""
    m = _CANONICAL_RE.match(canonical)
    if not m:
        return canonical
    year, month, day = m.groups()
    return f"{day}-{month}-{year}"
