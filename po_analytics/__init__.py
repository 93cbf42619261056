"""PO analytics - item/vendor aggregation, vendor scoring and period trends."""

from pathlib import Path

from po_analytics.aggregate import group_by_item, group_by_vendor, vendors_for_item
from po_analytics.config import DEFAULT_CONFIG, ScoringConfig, load_scoring_config
from po_analytics.dates import normalize_date, to_canonical_string, to_display_string
from po_analytics.delivery import (
    compute_delay_days,
    compute_rejection_rate,
    summarize_delivery_status,
)
from po_analytics.filters import filter_items, search_vendors, top_items_by_value
from po_analytics.ingest import load_purchase_orders, records_from_rows
from po_analytics.models import PENDING, PO_LINE_SCHEMA, PurchaseOrderLine
from po_analytics.periods import compute_period_over_period_change, group_by_period
from po_analytics.reports import records_to_frame
from po_analytics.scoring import compute_item_score, compute_score
from po_analytics.utils.types import PeriodType
from po_analytics.utils.validators import validate_dataframe


def validate(path: str | Path) -> dict:
    """Check that a PO export is readable and its records are well-formed."""
    try:
        records = load_purchase_orders(path)
    except (FileNotFoundError, ValueError) as exc:
        return {"status": "error", "message": str(exc)}

    result = validate_dataframe(records_to_frame(records), PO_LINE_SCHEMA)
    match result:
        case {"valid": True}:
            return {"status": "ok", "row_count": len(records)}
        case {"valid": False, "errors": errs}:
            return {"status": "error", "message": "; ".join(errs[:5]), "errors": errs}


def run(
    path: str | Path,
    period_type: PeriodType | str = PeriodType.MONTH,
    config: ScoringConfig = DEFAULT_CONFIG,
) -> dict:
    """Load a PO export and build every aggregate the dashboard shows."""
    records = load_purchase_orders(path)
    items = group_by_item(records)
    vendors = group_by_vendor(records, exclude_placeholders=True, config=config)

    return {
        "records": records,
        "items": items,
        "vendors": vendors,
        "periods": group_by_period(records, period_type),
        "delivery": summarize_delivery_status(records),
    }
