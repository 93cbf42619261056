"""Record and group types for PO analytics, plus pandera schemas for their frames."""

from dataclasses import dataclass, field
from datetime import date

from pandera import Check, Column, DataFrameSchema

# Marker stored in ``last_receipt_date`` while goods are still outstanding
PENDING = "Pending"

type ReceiptDate = date | str | None


@dataclass(frozen=True)
class PurchaseOrderLine:
    po_no: str = ""
    po_date: date | None = None
    item_code: str = ""
    item_description: str = ""
    unit: str = ""
    ordered_qty: float = 0.0
    unit_rate: float = 0.0
    order_value: float = 0.0
    vendor_code: str = ""
    vendor_name: str = ""
    material_type: str = ""
    material_group: str = ""
    vendor_city: str = ""
    received_qty: float = 0.0
    rejected_qty: float = 0.0
    last_receipt_date: ReceiptDate = None
    delivery_due_date: date | None = None


@dataclass(frozen=True)
class Score:
    """100-point vendor score.

    Components are rounded half-up on their own before being summed into
    ``total``. Rates keep full precision; the ``*_display`` properties give
    the two- and one-decimal renderings used in reports.
    """

    total: int
    price_component: int
    quality_component: int
    delivery_component: int
    rejection_rate_percent: float
    on_time_rate_percent: float
    total_order_value: float
    total_orders: int
    delayed_orders: int

    @property
    def rejection_rate_display(self) -> str:
        return f"{self.rejection_rate_percent:.2f}"

    @property
    def on_time_rate_display(self) -> str:
        return f"{self.on_time_rate_percent:.1f}"


@dataclass(frozen=True)
class ItemScore:
    total_orders: int
    on_time_rate_percent: float
    rejection_rate_percent: float


@dataclass(frozen=True)
class DeliveryStatus:
    on_time: int
    delayed: int
    pending: int
    completed: int
    total_orders: int
    completion_rate_percent: float


@dataclass(frozen=True)
class ItemGroup:
    item_code: str
    item_description: str
    material_type: str
    material_group: str
    unit: str
    total_order_value: float
    total_ordered_qty: float
    vendor_codes: tuple[str, ...]
    records: tuple[PurchaseOrderLine, ...]

    @property
    def vendor_count(self) -> int:
        return len(self.vendor_codes)


@dataclass(frozen=True)
class VendorGroup:
    vendor_code: str
    vendor_name: str
    vendor_city: str
    items_count: int
    records: tuple[PurchaseOrderLine, ...]
    score: Score


@dataclass(frozen=True)
class PeriodBucket:
    key: str
    count: int
    total_qty: float
    total_value: float
    rates: tuple[float, ...] = field(default=())

    @property
    def avg_rate(self) -> float:
        if not self.rates:
            return 0.0
        return sum(self.rates) / len(self.rates)


# Normalized record frame, see reports.records_to_frame
PO_LINE_SCHEMA = DataFrameSchema(
    columns={
        "po_no": Column(str, nullable=False),
        "po_date": Column(str, Check.str_matches(r"^(\d{4}-\d{2}-\d{2})?$")),
        "item_code": Column(str, Check.str_length(min_value=1)),
        "ordered_qty": Column(float, Check.ge(0)),
        "unit_rate": Column(float, Check.ge(0)),
        "order_value": Column(float, Check.ge(0)),
        "vendor_code": Column(str, nullable=False),
        "received_qty": Column(float, Check.ge(0)),
        "rejected_qty": Column(float, Check.ge(0)),
        "delay_days": Column("Int64", nullable=True),
    },
    checks=[
        Check(
            lambda df: df["rejected_qty"] <= df["received_qty"],
            error="rejected_qty exceeds received_qty",
        ),
    ],
    coerce=True,
    strict=False,
)

# Vendor ranking output
VENDOR_SCORE_SCHEMA = DataFrameSchema(
    columns={
        "vendor_code": Column(str, Check.str_length(min_value=1), unique=True),
        "total_score": Column(int, Check.in_range(0, 100)),
        "price": Column(int, Check.in_range(0, 30)),
        "quality": Column(int, Check.in_range(0, 60)),
        "delivery": Column(int, Check.in_range(0, 10)),
        "on_time_rate_pct": Column(float, Check.in_range(0.0, 100.0)),
        "total_orders": Column(int, Check.gt(0)),
    },
    strict=False,
    coerce=True,
)

PERIOD_SCHEMA = DataFrameSchema(
    columns={
        "period": Column(str, unique=True),
        "count": Column(int, Check.gt(0)),
        "total_qty": Column(float),
        "total_value": Column(float),
        "avg_rate": Column(float),
    },
    strict=False,
    coerce=True,
)
