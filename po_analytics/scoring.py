"""Vendor performance scoring: price 30, quality 60, delivery 10."""

import logging
import math
from collections.abc import Sequence

from po_analytics.config import DEFAULT_CONFIG, ScoringConfig
from po_analytics.delivery import compute_rejection_rate, is_dated, is_delayed
from po_analytics.models import ItemScore, PurchaseOrderLine, Score
from po_analytics.utils.types import PriceScoringMode

logger = logging.getLogger(__name__)

SCORE_WEIGHTS = {
    "price": 30,
    "quality": 60,
    "delivery": 10,
}

# Quality points lost per percentage point of rejected quantity
REJECTION_PENALTY = 2


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def _price_score(total_value: float, config: ScoringConfig) -> float:
    match config.price_scoring_mode:
        case PriceScoringMode.FLAT:
            return float(SCORE_WEIGHTS["price"])
        case PriceScoringMode.PROPORTIONAL:
            if config.max_po_value_reference <= 0:
                return 0.0
            share = min(total_value / config.max_po_value_reference, 1.0)
            return share * SCORE_WEIGHTS["price"]
        case other:
            raise ValueError(f"Unknown price scoring mode: {other}")


def _quality_score(rejection_rate: float) -> float:
    return max(0.0, SCORE_WEIGHTS["quality"] - REJECTION_PENALTY * rejection_rate)


def _rejection_rate(records: Sequence[PurchaseOrderLine]) -> float:
    received = sum(r.received_qty for r in records)
    rejected = sum(r.rejected_qty for r in records)
    return compute_rejection_rate(received, rejected)


def _on_time_rate(records: Sequence[PurchaseOrderLine]) -> tuple[float, int]:
    """On-time percentage over dated orders, and the delayed count.

    A group with no dated orders is 100% on time.
    """
    dated = [r for r in records if is_dated(r)]
    delayed = sum(1 for r in dated if is_delayed(r))
    if not dated:
        return 100.0, delayed
    return (len(dated) - delayed) / len(dated) * 100, delayed


def compute_score(
    records: Sequence[PurchaseOrderLine],
    config: ScoringConfig = DEFAULT_CONFIG,
) -> Score:
    total_value = sum(r.order_value for r in records)
    rejection_rate = _rejection_rate(records)
    on_time_rate, delayed = _on_time_rate(records)

    price = _round_half_up(_price_score(total_value, config))
    quality = _round_half_up(_quality_score(rejection_rate))
    delivery = _round_half_up(on_time_rate / 100 * SCORE_WEIGHTS["delivery"])

    return Score(
        total=price + quality + delivery,
        price_component=price,
        quality_component=quality,
        delivery_component=delivery,
        rejection_rate_percent=rejection_rate,
        on_time_rate_percent=on_time_rate,
        total_order_value=total_value,
        total_orders=len(records),
        delayed_orders=delayed,
    )


def compute_item_score(records: Sequence[PurchaseOrderLine]) -> ItemScore:
    """Order count, on-time rate and rejection rate for one item's POs."""
    on_time_rate, _ = _on_time_rate(records)
    return ItemScore(
        total_orders=len(records),
        on_time_rate_percent=on_time_rate,
        rejection_rate_percent=_rejection_rate(records),
    )
