"""Build report DataFrames from records, item groups, vendor groups and periods."""

from collections.abc import Sequence
from dataclasses import asdict

import pandas as pd

from po_analytics.dates import to_canonical_string
from po_analytics.delivery import compute_delay_days, compute_rejection_rate
from po_analytics.models import (
    PENDING,
    DeliveryStatus,
    ItemGroup,
    PeriodBucket,
    PurchaseOrderLine,
    VendorGroup,
)
from po_analytics.periods import build_period_comparison

RECORD_COLUMNS = [
    "po_no", "po_date", "item_code", "item_description", "ordered_qty", "unit_rate",
    "order_value", "vendor_code", "vendor_name", "received_qty", "rejected_qty",
    "rejection_rate_pct", "delivery_due_date", "last_receipt_date", "delay_days",
]
ITEM_COLUMNS = [
    "item_code", "item_description", "material_group", "material_type", "unit",
    "total_order_value", "total_ordered_qty", "vendor_count", "po_count",
]
VENDOR_COLUMNS = [
    "rank", "vendor_code", "vendor_name", "vendor_city", "items_count", "total_score",
    "price", "quality", "delivery", "rejection_rate_pct", "on_time_rate_pct",
    "total_order_value", "total_orders", "delayed_orders",
]


def _receipt_label(record: PurchaseOrderLine) -> str:
    if record.last_receipt_date == PENDING:
        return PENDING
    return to_canonical_string(record.last_receipt_date)


def records_to_frame(records: Sequence[PurchaseOrderLine]) -> pd.DataFrame:
    rows = [{
        "po_no": r.po_no,
        "po_date": to_canonical_string(r.po_date),
        "item_code": r.item_code,
        "item_description": r.item_description,
        "ordered_qty": r.ordered_qty,
        "unit_rate": r.unit_rate,
        "order_value": r.order_value,
        "vendor_code": r.vendor_code,
        "vendor_name": r.vendor_name,
        "received_qty": r.received_qty,
        "rejected_qty": r.rejected_qty,
        "rejection_rate_pct": round(compute_rejection_rate(r.received_qty, r.rejected_qty), 2),
        "delivery_due_date": to_canonical_string(r.delivery_due_date),
        "last_receipt_date": _receipt_label(r),
        "delay_days": compute_delay_days(r.delivery_due_date, r.last_receipt_date),
    } for r in records]

    df = pd.DataFrame(rows, columns=RECORD_COLUMNS)
    df["delay_days"] = df["delay_days"].astype("Int64")
    return df


def items_to_frame(items: Sequence[ItemGroup]) -> pd.DataFrame:
    rows = [{
        "item_code": i.item_code,
        "item_description": i.item_description,
        "material_group": i.material_group,
        "material_type": i.material_type,
        "unit": i.unit,
        "total_order_value": i.total_order_value,
        "total_ordered_qty": i.total_ordered_qty,
        "vendor_count": i.vendor_count,
        "po_count": len(i.records),
    } for i in items]
    return pd.DataFrame(rows, columns=ITEM_COLUMNS)


def vendors_to_frame(vendors: Sequence[VendorGroup]) -> pd.DataFrame:
    """Vendor ranking table; rates are rounded to their display precision."""
    rows = [{
        "rank": rank,
        "vendor_code": v.vendor_code,
        "vendor_name": v.vendor_name,
        "vendor_city": v.vendor_city,
        "items_count": v.items_count,
        "total_score": v.score.total,
        "price": v.score.price_component,
        "quality": v.score.quality_component,
        "delivery": v.score.delivery_component,
        "rejection_rate_pct": round(v.score.rejection_rate_percent, 2),
        "on_time_rate_pct": round(v.score.on_time_rate_percent, 1),
        "total_order_value": v.score.total_order_value,
        "total_orders": v.score.total_orders,
        "delayed_orders": v.score.delayed_orders,
    } for rank, v in enumerate(vendors, start=1)]
    return pd.DataFrame(rows, columns=VENDOR_COLUMNS)


def periods_to_frame(buckets: Sequence[PeriodBucket]) -> pd.DataFrame:
    df = build_period_comparison(buckets)
    for col in ("avg_rate", "qty_change_pct", "value_change_pct", "rate_change_pct"):
        df[col] = df[col].round(1)
    return df


def delivery_to_frame(status: DeliveryStatus) -> pd.DataFrame:
    """One-row delivery breakdown."""
    df = pd.DataFrame([asdict(status)])
    df["completion_rate_percent"] = df["completion_rate_percent"].round(1)
    return df
