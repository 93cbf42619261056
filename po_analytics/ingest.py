"""Turn spreadsheet rows from the PO feed into ``PurchaseOrderLine`` records."""

import logging
import math
import numbers
from collections.abc import Iterable, Sequence
from pathlib import Path

import pandas as pd
from rich.console import Console

from po_analytics.dates import normalize_date
from po_analytics.models import PENDING, PurchaseOrderLine, ReceiptDate
from po_analytics.utils.io import FilePath, read_table_file
from po_analytics.utils.types import RowValue

logger = logging.getLogger(__name__)
console = Console(stderr=True)

# Column position of each field in the feed; row 0 is the header
COLUMNS = (
    "po_no",
    "po_date",
    "item_code",
    "item_description",
    "unit",
    "ordered_qty",
    "unit_rate",
    "order_value",
    "vendor_code",
    "vendor_name",
    "material_type",
    "material_group",
    "vendor_city",
    "received_qty",
    "rejected_qty",
    "last_receipt_date",
    "delivery_due_date",
)

NUMERIC_FIELDS = {"ordered_qty", "unit_rate", "order_value", "received_qty", "rejected_qty"}


def _is_missing(value: RowValue) -> bool:
    return value is None or pd.isna(value)


def _to_float(value: RowValue) -> float:
    """Parse a numeric cell, falling back to 0.0 for anything unreadable."""
    match value:
        case None | bool():
            return 0.0
        case numbers.Real():
            number = float(value)
        case str():
            try:
                number = float(value.strip().replace(",", ""))
            except ValueError:
                return 0.0
        case _:
            return 0.0
    return number if math.isfinite(number) else 0.0


def _to_text(value: RowValue) -> str:
    if _is_missing(value):
        return ""
    if isinstance(value, float) and value.is_integer():
        # codes come back from spreadsheet readers as 9004449.0
        return str(int(value))
    return str(value).strip()


def _to_receipt_date(value: RowValue) -> ReceiptDate:
    if isinstance(value, str) and value.strip().lower() == PENDING.lower():
        return PENDING
    return normalize_date(None if _is_missing(value) else value)


def record_from_row(row: Sequence[RowValue]) -> PurchaseOrderLine:
    """Map one feed row to a record; short or malformed rows get defaults."""
    cells = {name: row[i] if i < len(row) else None for i, name in enumerate(COLUMNS)}

    fields = {}
    for name, value in cells.items():
        match name:
            case "po_date" | "delivery_due_date":
                fields[name] = normalize_date(None if _is_missing(value) else value)
            case "last_receipt_date":
                fields[name] = _to_receipt_date(value)
            case n if n in NUMERIC_FIELDS:
                fields[name] = _to_float(value)
            case _:
                fields[name] = _to_text(value)

    return PurchaseOrderLine(**fields)


def records_from_rows(rows: Iterable[Sequence[RowValue]]) -> list[PurchaseOrderLine]:
    """Convert feed rows to records, skipping the header row and empty rows."""
    records = []
    for index, row in enumerate(rows):
        if index == 0 or len(row) == 0:
            continue
        records.append(record_from_row(row))

    undated = sum(1 for r in records if r.po_date is None)
    if undated:
        logger.warning(f"{undated} of {len(records)} PO lines have no readable PO date")
    return records


def load_purchase_orders(path: FilePath) -> list[PurchaseOrderLine]:
    """Load a local CSV/XLSX export of the PO sheet."""
    path = Path(path)
    raw = read_table_file(path, max_columns=len(COLUMNS))
    records = records_from_rows(raw.astype(object).values.tolist())
    console.print(f"  Loaded {len(records):,} PO lines from {path.name}")
    return records
