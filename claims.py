#!/usr/bin/env python3
"""
Unified CLI for warranty repair-days tracking.

Commands:
  periods - Show warranty-year periods since the retail date
  report  - Show repair days per warranty year
  list    - List repair orders on file
  log     - Add a new repair order
  delete  - Remove a repair order
"""

import argparse
import sys
from datetime import date
from pathlib import Path
from tabulate import tabulate
from typing import List, Optional

import yaml

from warranty import (
    PeriodResult,
    RepairOrder,
    WarrantyError,
    build_periods,
    build_warranty_report,
    delete_repair_order,
    load_vehicle,
    normalize,
    save_repair_order,
)
from warranty.config import load_config
from warranty.observability import setup_logging

# =============================================================================
# Formatting helpers
# =============================================================================


def format_date(d: Optional[date]) -> str:
    """Format a date for display."""
    return d.isoformat() if d is not None else "-"


def format_days(days: int) -> str:
    """Format a day count (e.g., '1 day', '11 days')."""
    return f"{days} day" if days == 1 else f"{days} days"


def format_period(result: PeriodResult) -> str:
    """Format a period window (e.g., '2024-03-15 .. 2025-03-14')."""
    return f"{format_date(result.period.start)} .. {format_date(result.period.end)}"


def truncate(text: Optional[str], max_len: int = 30) -> str:
    """Truncate text with ellipsis if too long."""
    if text is None:
        return "-"
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."


def parse_now(value: Optional[str]) -> date:
    """Reference date from --now, defaulting to today."""
    if not value:
        return date.today()
    return normalize(value)


def make_period_table(result: PeriodResult) -> List[List[str]]:
    """Convert a period's repair-day items to table rows."""
    rows = []
    for item in result.items:
        rows.append(
            [
                str(item.order.id),
                format_date(item.order.open_date),
                format_date(item.order.close_date),
                str(item.repair_days),
                truncate(item.order.notes),
            ]
        )
    return rows


def make_order_table(orders: List[RepairOrder]) -> List[List[str]]:
    """Convert repair orders to table rows."""
    rows = []
    for order in orders:
        rows.append(
            [
                str(order.id),
                format_date(order.retail_date),
                format_date(order.open_date),
                format_date(order.close_date),
                str(order.duration_days),
                truncate(order.notes),
            ]
        )
    return rows


# =============================================================================
# Periods command
# =============================================================================


def cmd_periods(args):
    """Show warranty-year periods."""
    vehicle = load_vehicle(args.vehicle_file)
    now = parse_now(args.now)

    if vehicle.retail_date is None:
        print(f"Error: No repair orders on file for VIN {vehicle.vin}")
        return 1

    periods = build_periods(vehicle.retail_date, now)

    print(f"VIN: {vehicle.vin}")
    print(f"Retail date: {format_date(vehicle.retail_date)}")
    print(f"As of: {format_date(now)}")
    print()

    if not periods:
        print("No warranty period applies (retail date is after the reference date).")
        return 0

    rows = [
        [str(i + 1), format_date(p.start), format_date(p.end), str(p.length_days)]
        for i, p in enumerate(reversed(periods))
    ]
    rows.reverse()
    headers = ["Year", "Start", "End", "Days"]
    print(tabulate(rows, headers=headers, tablefmt="simple"))

    return 0


# =============================================================================
# Report command
# =============================================================================


def cmd_report(args):
    """Show repair days per warranty year."""
    vehicle = load_vehicle(args.vehicle_file)
    now = parse_now(args.now)

    report = build_warranty_report(vehicle, now)

    print(f"VIN: {report.vin}")
    print(f"Retail date: {format_date(report.retail_date)}")
    print(f"As of: {format_date(now)}")
    print(f"Warranty years: {len(report.periods)}")
    print(f"Total repair days: {report.total_days}")
    print()

    if not report.periods:
        print("No warranty period applies (retail date is after the reference date).")

    headers = ["RO", "Opened", "Closed", "Repair Days", "Notes"]
    for result in report.periods:
        print(f"{format_period(result)}: {format_days(result.total_days)}")
        if result.items:
            print(tabulate(make_period_table(result), headers=headers, tablefmt="simple"))
        else:
            print("  No repair orders in this period.")
        print()

    if report.skipped_order_ids:
        skipped = ", ".join(str(i) for i in report.skipped_order_ids)
        print(f"SKIPPED (close date before open date): {skipped}")

    return 0


# =============================================================================
# List command
# =============================================================================


def cmd_list(args):
    """List repair orders."""
    vehicle = load_vehicle(args.vehicle_file)
    orders = vehicle.get_orders_sorted(sort_by=args.sort, reverse=not args.asc)

    print(f"VIN: {vehicle.vin}")
    print(f"Retail date: {format_date(vehicle.retail_date)}")
    print(f"Repair orders: {len(orders)}")
    print()

    if not orders:
        print("No repair orders found.")
        return 0

    headers = ["RO", "Retail", "Opened", "Closed", "Days", "Notes"]
    print(tabulate(make_order_table(orders), headers=headers, tablefmt="simple"))

    return 0


# =============================================================================
# Log command
# =============================================================================


def cmd_log(args):
    """Add a new repair order."""
    vehicle = load_vehicle(args.vehicle_file)

    retail = args.retail or vehicle.retail_date
    if retail is None:
        print("Error: --retail is required for the first repair order of a vehicle")
        return 1

    order_id = args.id if args.id is not None else vehicle.next_order_id()
    if vehicle.get_order(order_id) is not None:
        print(f"Error: Repair order {order_id} already exists")
        return 1

    order = RepairOrder(
        id=order_id,
        open_date=args.open,
        close_date=args.close,
        retail_date=retail,
        notes=args.notes,
    )

    # Show what will be added
    print(f"Adding repair order to {args.vehicle_file}:")
    print(f"  RO:      {order.id}")
    print(f"  Retail:  {format_date(order.retail_date)}")
    print(f"  Opened:  {format_date(order.open_date)}")
    print(f"  Closed:  {format_date(order.close_date)}")
    if order.notes:
        print(f"  Notes:   {order.notes}")
    if order.is_malformed:
        print("  Warning: close date is before open date; it will not count")
    print()

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    save_repair_order(args.vehicle_file, order)
    print("Repair order saved.")

    return 0


# =============================================================================
# Delete command
# =============================================================================


def cmd_delete(args):
    """Remove a repair order."""
    vehicle = load_vehicle(args.vehicle_file)
    order = vehicle.get_order(args.id)
    if order is None:
        print(f"Error: Repair order {args.id} not found")
        return 1

    print(f"Removing repair order {order.id} ({format_date(order.open_date)} .. "
          f"{format_date(order.close_date)}) from {args.vehicle_file}")

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    delete_repair_order(args.vehicle_file, order.id)
    print("Repair order removed.")

    return 0


# =============================================================================
# Main
# =============================================================================


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Warranty repair-days tracker",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s vehicles/jf1zn.yaml periods
  %(prog)s vehicles/jf1zn.yaml report --now 2024-06-01
  %(prog)s vehicles/jf1zn.yaml list --sort open --asc
  %(prog)s vehicles/jf1zn.yaml log --open 2024-01-10 --close 2024-01-20 \\
      --notes "water pump"
  %(prog)s vehicles/jf1zn.yaml delete 3
""",
    )
    parser.add_argument(
        "vehicle_file",
        type=Path,
        help="Path to vehicle YAML file",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # Periods subcommand
    periods_parser = subparsers.add_parser(
        "periods", help="Show warranty-year periods since the retail date"
    )
    periods_parser.add_argument(
        "--now",
        type=str,
        help="Reference date in YYYY-MM-DD format (default: today)",
    )

    # Report subcommand
    report_parser = subparsers.add_parser(
        "report", help="Show repair days per warranty year"
    )
    report_parser.add_argument(
        "--now",
        type=str,
        help="Reference date in YYYY-MM-DD format (default: today)",
    )

    # List subcommand
    list_parser = subparsers.add_parser("list", help="List repair orders on file")
    list_parser.add_argument(
        "--sort",
        choices=["id", "open", "close"],
        default="id",
        help="Sort order (default: id)",
    )
    list_parser.add_argument(
        "--asc",
        action="store_true",
        help="Sort ascending instead of descending",
    )

    # Log subcommand
    log_parser = subparsers.add_parser("log", help="Add a new repair order")
    log_parser.add_argument(
        "--open",
        type=str,
        required=True,
        help="Repair order open date (YYYY-MM-DD)",
    )
    log_parser.add_argument(
        "--close",
        type=str,
        required=True,
        help="Repair order close date (YYYY-MM-DD)",
    )
    log_parser.add_argument(
        "--retail",
        type=str,
        help="Vehicle retail date (default: retail date already on file)",
    )
    log_parser.add_argument(
        "--id",
        type=int,
        help="Repair order id (default: next free id)",
    )
    log_parser.add_argument(
        "--notes",
        type=str,
        help="Notes about the repair",
    )
    log_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be added without saving",
    )

    # Delete subcommand
    delete_parser = subparsers.add_parser("delete", help="Remove a repair order")
    delete_parser.add_argument(
        "id",
        type=int,
        help="Repair order id",
    )
    delete_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be removed without saving",
    )

    return parser


COMMANDS = {
    "periods": cmd_periods,
    "report": cmd_report,
    "list": cmd_list,
    "log": cmd_log,
    "delete": cmd_delete,
}


def main(argv: Optional[List[str]] = None):
    args = build_parser().parse_args(argv)

    # Validate vehicle file exists
    if not args.vehicle_file.exists():
        print(f"Error: File not found: {args.vehicle_file}")
        return 1

    try:
        config = load_config()
        setup_logging(config.log_level, config.app_env)
        return COMMANDS[args.command](args)
    except (WarrantyError, yaml.YAMLError, OSError) as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main() or 0)
