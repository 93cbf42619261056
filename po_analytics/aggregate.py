"""Group PO lines into item-level and vendor-level summaries."""

import logging
from collections.abc import Sequence

import pandas as pd

from po_analytics.config import DEFAULT_CONFIG, ScoringConfig
from po_analytics.models import ItemGroup, PurchaseOrderLine, VendorGroup
from po_analytics.scoring import compute_score

type RecordList = Sequence[PurchaseOrderLine]

logger = logging.getLogger(__name__)


def _check_records(records: RecordList) -> None:
    if not isinstance(records, (list, tuple)):
        raise TypeError(f"Expected a list of PO lines, got {type(records).__name__}")


def _is_placeholder_vendor(record: PurchaseOrderLine, config: ScoringConfig) -> bool:
    name = record.vendor_name.strip()
    match (name, record.vendor_code.strip()):
        case ("", _) | (_, ""):
            return True
        case (n, _) if n.lower() in config.placeholder_vendor_names:
            return True
        case _:
            return False


def _partition(records: RecordList, key: str) -> dict[str, list[PurchaseOrderLine]]:
    """Split records on one attribute; groups keep first-appearance order."""
    keys = pd.DataFrame({key: [getattr(r, key) for r in records]}, dtype=object)
    return {
        value: [records[i] for i in group.index]
        for value, group in keys.groupby(key, sort=False)
    }


def group_by_item(records: RecordList) -> list[ItemGroup]:
    """Partition PO lines by item code, in order of first appearance."""
    _check_records(records)
    members = _partition(records, "item_code")

    items = []
    for item_code, lines in members.items():
        first = lines[0]
        vendor_codes = dict.fromkeys(r.vendor_code for r in lines)
        items.append(ItemGroup(
            item_code=item_code,
            item_description=first.item_description,
            material_type=first.material_type,
            material_group=first.material_group,
            unit=first.unit,
            total_order_value=sum(r.order_value for r in lines),
            total_ordered_qty=sum(r.ordered_qty for r in lines),
            vendor_codes=tuple(vendor_codes),
            records=tuple(lines),
        ))

    logger.debug(f"Grouped {len(records)} PO lines into {len(items)} items")
    return items


def group_by_vendor(
    records: RecordList,
    exclude_placeholders: bool = True,
    config: ScoringConfig = DEFAULT_CONFIG,
) -> list[VendorGroup]:
    """Partition PO lines by vendor code and rank vendors by score.

    With ``exclude_placeholders`` set, lines without a vendor name or code,
    or with a placeholder name such as "PO not released", are left out.
    Ties keep first-appearance order.
    """
    _check_records(records)
    kept = [
        r for r in records
        if not (exclude_placeholders and _is_placeholder_vendor(r, config))
    ]
    members = _partition(kept, "vendor_code")
    skipped = len(records) - len(kept)

    if skipped:
        logger.info(f"Left {skipped} PO lines without a released vendor out of vendor ranking")

    vendors = []
    for vendor_code, lines in members.items():
        first = lines[0]
        vendors.append(VendorGroup(
            vendor_code=vendor_code,
            vendor_name=first.vendor_name,
            vendor_city=first.vendor_city,
            items_count=len({r.item_code for r in lines}),
            records=tuple(lines),
            score=compute_score(lines, config),
        ))

    return sorted(vendors, key=lambda v: v.score.total, reverse=True)


def vendors_for_item(
    item: ItemGroup,
    config: ScoringConfig = DEFAULT_CONFIG,
) -> list[VendorGroup]:
    """Vendor ranking scoped to one item's PO lines."""
    return group_by_vendor(list(item.records), exclude_placeholders=False, config=config)
