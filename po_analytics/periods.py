"""Bucket PO lines by calendar period and compare consecutive periods."""

import logging
from collections.abc import Sequence
from datetime import date

import pandas as pd

from po_analytics.models import PeriodBucket, PurchaseOrderLine
from po_analytics.utils.types import PeriodType, TrendMetric, parse_period_type

logger = logging.getLogger(__name__)


def period_key(value: date, period_type: PeriodType | str) -> str:
    """Sortable period label: ``2025-03``, ``2025-Q1``, ``2025-H1`` or ``2025``."""
    match parse_period_type(period_type):
        case PeriodType.MONTH:
            return f"{value.year:04d}-{value.month:02d}"
        case PeriodType.QUARTER:
            return f"{value.year:04d}-Q{(value.month - 1) // 3 + 1}"
        case PeriodType.HALF_YEAR:
            return f"{value.year:04d}-H{1 if value.month <= 6 else 2}"
        case PeriodType.YEAR:
            return f"{value.year:04d}"


def group_by_period(
    records: Sequence[PurchaseOrderLine],
    period_type: PeriodType | str,
) -> list[PeriodBucket]:
    """Roll PO lines up into period buckets sorted by period key.

    Lines without a PO date are skipped.
    """
    period_type = parse_period_type(period_type)
    dated = [r for r in records if r.po_date is not None]
    if len(dated) < len(records):
        logger.debug(f"Skipped {len(records) - len(dated)} PO lines without a PO date")
    if not dated:
        return []

    df = pd.DataFrame({
        "period": [period_key(r.po_date, period_type) for r in dated],
        "ordered_qty": [r.ordered_qty for r in dated],
        "order_value": [r.order_value for r in dated],
        "unit_rate": [r.unit_rate for r in dated],
    })

    grouped = df.groupby("period", sort=True).agg(
        count=("ordered_qty", "size"),
        total_qty=("ordered_qty", "sum"),
        total_value=("order_value", "sum"),
        rates=("unit_rate", list),
    )

    return [
        PeriodBucket(
            key=str(key),
            count=int(row["count"]),
            total_qty=float(row["total_qty"]),
            total_value=float(row["total_value"]),
            rates=tuple(float(r) for r in row["rates"]),
        )
        for key, row in grouped.iterrows()
    ]


def _metric_value(bucket: PeriodBucket | None, metric: TrendMetric) -> float:
    if bucket is None:
        return 0.0
    match metric:
        case TrendMetric.QTY:
            return bucket.total_qty
        case TrendMetric.VALUE:
            return bucket.total_value
        case TrendMetric.RATE:
            return bucket.avg_rate


def compute_period_over_period_change(
    current: PeriodBucket | None,
    previous: PeriodBucket | None,
    metric: TrendMetric | str,
) -> float:
    """Percent change of a metric from ``previous`` to ``current``.

    0.0 when there is no previous period or its metric is zero.
    """
    metric = TrendMetric(metric)
    if previous is None:
        return 0.0
    previous_value = _metric_value(previous, metric)
    if previous_value == 0:
        return 0.0
    return (_metric_value(current, metric) - previous_value) / previous_value * 100


def build_period_comparison(buckets: Sequence[PeriodBucket]) -> pd.DataFrame:
    """One row per period with changes against the preceding bucket."""
    rows = []
    previous = None
    for bucket in buckets:
        rows.append({
            "period": bucket.key,
            "count": bucket.count,
            "total_qty": bucket.total_qty,
            "total_value": bucket.total_value,
            "avg_rate": bucket.avg_rate,
            "qty_change_pct": compute_period_over_period_change(bucket, previous, TrendMetric.QTY),
            "value_change_pct": compute_period_over_period_change(bucket, previous, TrendMetric.VALUE),
            "rate_change_pct": compute_period_over_period_change(bucket, previous, TrendMetric.RATE),
        })
        previous = bucket

    return pd.DataFrame(rows, columns=[
        "period", "count", "total_qty", "total_value", "avg_rate",
        "qty_change_pct", "value_change_pct", "rate_change_pct",
    ])
