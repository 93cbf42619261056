"""Search, filter and ranking helpers over aggregated items and vendors."""

from collections.abc import Sequence
from datetime import date

from po_analytics.models import ItemGroup, VendorGroup

ALL = "All"


def _option_list(values: Sequence[str]) -> list[str]:
    return [ALL, *dict.fromkeys(values)]


def material_groups(items: Sequence[ItemGroup]) -> list[str]:
    """Filter options for material group, ``"All"`` first then first-seen order."""
    return _option_list([item.material_group for item in items])


def material_types(items: Sequence[ItemGroup]) -> list[str]:
    return _option_list([item.material_type for item in items])


def _ordered_in_range(item: ItemGroup, date_from: date | None, date_to: date | None) -> bool:
    # the range only applies once both ends are set
    if date_from is None or date_to is None:
        return True
    return any(
        r.po_date is not None and date_from <= r.po_date <= date_to
        for r in item.records
    )


def filter_items(
    items: Sequence[ItemGroup],
    search: str = "",
    material_group: str = ALL,
    material_type: str = ALL,
    date_from: date | None = None,
    date_to: date | None = None,
) -> list[ItemGroup]:
    """Items matching a code/description search, material filters and PO date range."""
    needle = search.strip().lower()
    matches = []
    for item in items:
        if needle and needle not in item.item_code.lower() and needle not in item.item_description.lower():
            continue
        if material_group != ALL and item.material_group != material_group:
            continue
        if material_type != ALL and item.material_type != material_type:
            continue
        if not _ordered_in_range(item, date_from, date_to):
            continue
        matches.append(item)
    return matches


def search_vendors(vendors: Sequence[VendorGroup], search: str = "") -> list[VendorGroup]:
    """Vendors whose name, code or city contains ``search`` (case-insensitive)."""
    needle = search.strip().lower()
    if not needle:
        return list(vendors)
    return [
        v for v in vendors
        if needle in v.vendor_name.lower()
        or needle in v.vendor_code.lower()
        or needle in v.vendor_city.lower()
    ]


def top_items_by_value(items: Sequence[ItemGroup], n: int = 6) -> list[ItemGroup]:
    return sorted(items, key=lambda i: i.total_order_value, reverse=True)[:n]


def top_vendors_by(vendors: Sequence[VendorGroup], metric: str, n: int = 7) -> list[VendorGroup]:
    """Top vendors by ``total_orders``, ``total_order_value`` or ``total`` score."""
    match metric:
        case "total_orders" | "total_order_value" | "total":
            return sorted(vendors, key=lambda v: getattr(v.score, metric), reverse=True)[:n]
        case other:
            raise ValueError(f"Unknown vendor ranking metric: {other}")
