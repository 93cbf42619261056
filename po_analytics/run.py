"""Command-line runner - load a PO export and print item, vendor and trend tables."""

import argparse
import logging
import sys
from dataclasses import replace

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

import po_analytics
from po_analytics.aggregate import vendors_for_item
from po_analytics.config import ScoringConfig, load_scoring_config
from po_analytics.filters import filter_items, search_vendors, top_items_by_value
from po_analytics.models import (
    PERIOD_SCHEMA,
    VENDOR_SCORE_SCHEMA,
    DeliveryStatus,
    ItemGroup,
    VendorGroup,
)
from po_analytics.reports import (
    delivery_to_frame,
    items_to_frame,
    periods_to_frame,
    vendors_to_frame,
)
from po_analytics.scoring import compute_item_score
from po_analytics.utils.io import OUTPUT_FORMATS, write_output
from po_analytics.utils.types import PeriodType, PriceScoringMode
from po_analytics.utils.validators import validate_dataframe

console = Console()

VIEWS = ["items", "vendors", "periods", "delivery"]

# Frames checked before they are written out
OUTPUT_SCHEMAS = {"vendors": VENDOR_SCORE_SCHEMA, "periods": PERIOD_SCHEMA}


def _item_table(items: list[ItemGroup]) -> Table:
    table = Table(title="Items by PO value")
    table.add_column("Item")
    table.add_column("Description")
    table.add_column("Group")
    table.add_column("PO value", justify="right")
    table.add_column("Qty", justify="right")
    table.add_column("Vendors", justify="right")

    for item in items:
        table.add_row(
            item.item_code,
            item.item_description,
            item.material_group,
            f"{item.total_order_value:,.2f}",
            f"{item.total_ordered_qty:,.3f} {item.unit}".strip(),
            str(item.vendor_count),
        )
    return table


def _score_style(total: int) -> str:
    match total:
        case t if t >= 80:
            return "green"
        case t if t >= 60:
            return "yellow"
        case _:
            return "red"


def _vendor_table(vendors: list[VendorGroup], title: str) -> Table:
    table = Table(title=title)
    table.add_column("#", justify="right")
    table.add_column("Vendor")
    table.add_column("City")
    table.add_column("Score", justify="right")
    table.add_column("Price", justify="right")
    table.add_column("Quality", justify="right")
    table.add_column("Delivery", justify="right")
    table.add_column("Rejection %", justify="right")
    table.add_column("On-time %", justify="right")
    table.add_column("Orders", justify="right")

    for rank, vendor in enumerate(vendors, start=1):
        score = vendor.score
        style = _score_style(score.total)
        table.add_row(
            str(rank),
            f"{vendor.vendor_name} ({vendor.vendor_code})",
            vendor.vendor_city,
            f"[{style}]{score.total}[/{style}]",
            str(score.price_component),
            str(score.quality_component),
            str(score.delivery_component),
            score.rejection_rate_display,
            score.on_time_rate_display,
            f"{score.total_orders} ({score.delayed_orders} late)",
        )
    return table


def _delivery_table(status: DeliveryStatus) -> Table:
    table = Table(title="Delivery status")
    table.add_column("On time", justify="right", style="green")
    table.add_column("Delayed", justify="right", style="yellow")
    table.add_column("Pending", justify="right")
    table.add_column("Completion %", justify="right")
    table.add_row(
        str(status.on_time),
        str(status.delayed),
        str(status.pending),
        f"{status.completion_rate_percent:.1f}",
    )
    return table


def _build_config(args: argparse.Namespace) -> ScoringConfig:
    config = load_scoring_config(args.env)
    if args.price_mode:
        config = replace(config, price_scoring_mode=PriceScoringMode(args.price_mode))
    return config


def _show_item(result: dict, item_code: str, config: ScoringConfig) -> None:
    matches = [i for i in result["items"] if i.item_code == item_code]
    if not matches:
        console.print(f"[red]Unknown item: {item_code}[/red]")
        sys.exit(1)

    item = matches[0]
    summary = compute_item_score(list(item.records))
    console.print(
        f"[bold]{item.item_code}[/bold] {item.item_description} - "
        f"{summary.total_orders} orders, "
        f"{summary.on_time_rate_percent:.1f}% on time, "
        f"{summary.rejection_rate_percent:.2f}% rejected"
    )
    console.print(_vendor_table(vendors_for_item(item, config), f"Vendors for {item.item_code}"))


def _write_view(frame, view: str, path: str, fmt: str) -> None:
    if schema := OUTPUT_SCHEMAS.get(view):
        result = validate_dataframe(frame, schema)
        if not result["valid"]:
            for err in result["errors"]:
                console.print(f"[red]✗ {err}[/red]")
            sys.exit(1)
    write_output(frame, path, fmt=fmt)


def main():
    parser = argparse.ArgumentParser(description="Vendor performance from a PO export")
    parser.add_argument("path", help="CSV or XLSX export of the PO sheet")
    parser.add_argument("--view", choices=VIEWS, default="vendors")
    parser.add_argument("--period", choices=[p.value for p in PeriodType], default="month")
    parser.add_argument("--item", type=str, help="Drill into one item code")
    parser.add_argument("--search", type=str, default="", help="Filter items/vendors by text")
    parser.add_argument("--price-mode", choices=[m.value for m in PriceScoringMode])
    parser.add_argument("--env", type=str, default="production")
    parser.add_argument("--output", type=str, help="Write the selected table to this path")
    parser.add_argument("--format", choices=OUTPUT_FORMATS, default="csv")
    parser.add_argument("--validate", action="store_true", help="Only validate, don't report")
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )

    if args.validate:
        match po_analytics.validate(args.path):
            case {"status": "ok", "row_count": n}:
                console.print(f"[green]✓ {n:,} PO lines passed validation[/green]")
            case {"status": "error", "message": msg}:
                console.print(f"[red]✗ {msg}[/red]")
                sys.exit(1)
        return

    config = _build_config(args)
    result = po_analytics.run(args.path, period_type=args.period, config=config)

    if args.item:
        _show_item(result, args.item, config)
        return

    match args.view:
        case "items":
            items = filter_items(result["items"], search=args.search)
            items = sorted(items, key=lambda i: i.total_order_value, reverse=True)
            console.print(_item_table(items))
            top = ", ".join(i.item_code for i in top_items_by_value(items, config.top_n))
            console.print(f"Top {config.top_n} by PO value: {top}")
            frame = items_to_frame(items)
        case "vendors":
            vendors = search_vendors(result["vendors"], args.search)
            console.print(_vendor_table(vendors, "Vendor ranking"))
            frame = vendors_to_frame(vendors)
        case "periods":
            frame = periods_to_frame(result["periods"])
            table = Table(title=f"PO trend by {args.period}")
            for col in frame.columns:
                table.add_column(col, justify="left" if col == "period" else "right")
            for row in frame.itertuples(index=False):
                table.add_row(*(str(v) for v in row))
            console.print(table)
        case "delivery":
            console.print(_delivery_table(result["delivery"]))
            frame = delivery_to_frame(result["delivery"])

    if args.output:
        _write_view(frame, args.view, args.output, args.format)


if __name__ == "__main__":
    main()
