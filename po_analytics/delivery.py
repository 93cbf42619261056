"""Delivery delay and rejection-rate helpers shared by the aggregators."""

import math
from collections.abc import Sequence
from datetime import date, timedelta

from po_analytics.models import PENDING, DeliveryStatus, PurchaseOrderLine, ReceiptDate

ONE_DAY = timedelta(days=1)


def _receipt_as_date(receipt: ReceiptDate) -> date | None:
    if isinstance(receipt, date):
        return receipt
    return None


def compute_delay_days(due: date | None, receipt: ReceiptDate) -> int | None:
    """Days between due date and last receipt, rounded up. Positive means late.

    None when either side is unknown or the receipt is still pending.
    """
    if receipt == PENDING:
        return None
    received = _receipt_as_date(receipt)
    if due is None or received is None:
        return None
    return math.ceil((received - due) / ONE_DAY)


def compute_rejection_rate(received_qty: float, rejected_qty: float) -> float:
    """Rejected share of received quantity, in percent (0 when nothing was received)."""
    if received_qty <= 0:
        return 0.0
    return rejected_qty / received_qty * 100


def is_pending(record: PurchaseOrderLine) -> bool:
    return _receipt_as_date(record.last_receipt_date) is None


def is_dated(record: PurchaseOrderLine) -> bool:
    """Has both a due date and a real (non-pending) receipt date."""
    return record.delivery_due_date is not None and not is_pending(record)


def is_delayed(record: PurchaseOrderLine) -> bool:
    # same-day receipt is on time
    if not is_dated(record):
        return False
    return record.last_receipt_date > record.delivery_due_date


def summarize_delivery_status(records: Sequence[PurchaseOrderLine]) -> DeliveryStatus:
    """Split orders into on-time, delayed and pending for the delivery overview.

    Completed orders are those with a receipt date. A completed order with
    no due date can't be late, so it counts as on time.
    """
    total = len(records)
    pending = sum(1 for r in records if is_pending(r))
    completed = total - pending
    delayed = sum(1 for r in records if is_delayed(r))

    return DeliveryStatus(
        on_time=completed - delayed,
        delayed=delayed,
        pending=pending,
        completed=completed,
        total_orders=total,
        completion_rate_percent=completed / total * 100 if total > 0 else 0.0,
    )
