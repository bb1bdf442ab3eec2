#!/usr/bin/env python3
"""
SplitGroups report
- Load saved expense groups, print what each person owes for one group.
- Optionally export an Excel report: items with per-person shares + summary.

Run:
  python split_report.py "Friday dinner" --excel dinner.xlsx

Dependencies:
  pip install openpyxl
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from computations import compute_calculations
from config import load_groups
from excel_export import export_excel
from groups import find_group

logger = logging.getLogger("split_report")


def print_summary(group) -> bool:
    """Print per-person totals; returns the validity flag"""
    calc = compute_calculations(group)
    names = {p.id: p.name for p in group.people}
    print(f"{group.name}")
    for p in group.people:
        line = f"  {p.name:<20} {calc.totals_with_tips[p.id]:>10.2f}"
        if calc.tips[p.id]:
            line += f"  (base {calc.totals[p.id]:.2f} + tip {calc.tips[p.id]:.2f})"
        if calc.group_members[p.id]:
            others = ", ".join(names.get(m, m) for m in calc.group_members[p.id])
            line += f"  with {others}: {calc.grouped_totals_with_tips[p.id]:.2f}"
        print(line)
    print(f"  {'Net total':<20} {calc.net_total:>10.2f}")
    if calc.total_tips:
        print(f"  {'With tips':<20} {calc.sum_of_shares_with_tips:>10.2f}")
    if not calc.is_valid:
        logger.warning(
            "Shares add up to %.2f but items total %.2f; check items nobody shares",
            calc.sum_of_shares, calc.net_total,
        )
    return calc.is_valid


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Show how a group's items split between people.")
    parser.add_argument("group", help="Group id or name")
    parser.add_argument("--data", help="Groups JSON file (defaults to the app data directory)")
    parser.add_argument("--excel", help="Also export an Excel report to this path")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    group = find_group(load_groups(args.data), args.group)
    if group is None:
        logger.error("No group named %r", args.group)
        return 1

    valid = print_summary(group)
    if args.excel:
        export_excel(group, args.excel)
    return 0 if valid else 2


if __name__ == "__main__":
    sys.exit(main())
