"""Shared fixtures for PO analytics tests."""

import csv
from dataclasses import replace
from datetime import date

import pytest

from po_analytics.models import PurchaseOrderLine

BASE_LINE = PurchaseOrderLine(
    po_no="4100002479",
    po_date=date(2025, 4, 6),
    item_code="0000000003002360",
    item_description="Ferro Silicon Lumps",
    unit="MT",
    ordered_qty=600.0,
    unit_rate=96000.0,
    order_value=57_600_000.0,
    vendor_code="0009004449",
    vendor_name="MAUA & COMPANY",
    material_type="ZR01",
    material_group="FESICO",
    vendor_city="KOLKATA",
    received_qty=600.0,
    rejected_qty=0.0,
    last_receipt_date=date(2025, 6, 28),
    delivery_due_date=date(2025, 4, 20),
)

HEADER = [
    "PO No", "PO Dt", "Item Cd", "Item Desc", "Unit", "PO Qty", "Basic Rate",
    "Basic Value", "Vendor Cd", "PO Vendor", "Mat Type", "Mat Grp", "Vendor City",
    "Total GRN Qty", "Reject Qty", "Last GRN", "Delivery Date",
]

SAMPLE_ROWS = [
    HEADER,
    ["4100002479", "06-04-2025", "3002360", "Ferro Silicon Lumps", "MT", "600", "96000",
     "57600000", "9004449", "MAUA & COMPANY", "ZR01", "FESICO", "KOLKATA", "600", "0",
     "28-06-2025", "20-04-2025"],
    ["4100002512", "45780", "3002360", "Ferro Silicon Lumps", "MT", "200", "95000",
     "19000000", "9004501", "SHREE ALLOYS", "ZR01", "FESICO", "RAIPUR", "200", "10",
     "45800", "45810"],
    ["4100002600", "2025-07-15", "3004410", "Graphite Electrode", "NOS", "50", "1,20,000",
     "6000000", "9004449", "MAUA & COMPANY", "ZR02", "ELECTR", "KOLKATA", "0", "0",
     "Pending", "01-08-2025"],
    ["4100002601", "not a date", "3004410", "Graphite Electrode", "NOS", "10", "abc",
     "", "", "PO not released", "ZR02", "ELECTR", "", "", "", "", ""],
]


@pytest.fixture
def make_line():
    """Build a PO line from the sample line with selected fields replaced."""
    def _make(**overrides) -> PurchaseOrderLine:
        return replace(BASE_LINE, **overrides)
    return _make


@pytest.fixture
def sample_rows() -> list[list[str]]:
    return [list(row) for row in SAMPLE_ROWS]


@pytest.fixture
def sample_csv(tmp_path):
    path = tmp_path / "po_feed.csv"
    with open(path, "w", newline="") as f:
        csv.writer(f).writerows(SAMPLE_ROWS)
    return path
