"""
Excel export functionality for SplitGroups
"""
from __future__ import annotations
import logging

from openpyxl import Workbook
from openpyxl.styles import Font, Alignment, PatternFill, Border, Side
from openpyxl.utils import get_column_letter

from models import EXPENSE, ExpenseGroup
from computations import allocate_item, compute_calculations, item_value

logger = logging.getLogger(__name__)


def _style_header(ws, row=1):
    """Apply header styling to worksheet row"""
    header_font = Font(bold=True, color="FFFFFF")
    fill = PatternFill("solid", fgColor="4F81BD")
    align = Alignment(horizontal="center", vertical="center")
    thin = Side(style="thin", color="A0A0A0")
    border = Border(left=thin, right=thin, top=thin, bottom=thin)
    for cell in ws[row]:
        cell.font = header_font
        cell.fill = fill
        cell.alignment = align
        cell.border = border


def _autosize_columns(ws, min_width=10, max_width=45):
    """Auto-size columns based on content"""
    for col in range(1, ws.max_column + 1):
        letter = get_column_letter(col)
        max_len = 0
        for cell in ws[letter]:
            if cell.value is None:
                continue
            max_len = max(max_len, len(str(cell.value)))
        ws.column_dimensions[letter].width = max(min_width, min(max_width, max_len + 2))


def _write_items_sheet(wb, group: ExpenseGroup) -> None:
    ws = wb.create_sheet("Items")
    people = group.people
    headers = ["item", "type", "quantity", "unit price", "value"] + [p.name for p in people]
    ws.append(headers)
    _style_header(ws, 1)
    ws.freeze_panes = "A2"

    for item in group.items:
        shares = allocate_item(item, people)
        row = [item.name, item.type, item.amount, item.price, item_value(item)]
        row += [shares.get(p.id, 0.0) for p in people]
        ws.append(row)
        if not shares:
            # nobody shares this item
            ws.cell(ws.max_row, 1).fill = PatternFill("solid", fgColor="F8CBAD")

    if group.items:
        ws.append(["TOTALS"] + [""] * (len(headers) - 1))
        trow = ws.max_row
        ws.cell(trow, 1).font = Font(bold=True)
        for col in range(6, 6 + len(people)):
            letter = get_column_letter(col)
            ws.cell(trow, col).value = f"=SUM({letter}2:{letter}{trow - 1})"

    for r in range(2, ws.max_row + 1):
        for c in range(4, 6 + len(people)):
            ws.cell(r, c).number_format = "0.00"
    _autosize_columns(ws)


def _write_summary_sheet(wb, group: ExpenseGroup) -> None:
    calc = compute_calculations(group)
    names = {p.id: p.name for p in group.people}

    ws = wb.create_sheet("Summary")
    ws.append(["Person", "Base", "Tip", "Total", "Grouped Total", "Pays With"])
    _style_header(ws, 1)
    ws.freeze_panes = "A2"
    for p in group.people:
        members = ", ".join(names.get(m, m) for m in calc.group_members[p.id])
        ws.append([
            p.name,
            calc.totals[p.id],
            calc.tips[p.id],
            calc.totals_with_tips[p.id],
            calc.grouped_totals_with_tips[p.id],
            members,
        ])

    ws.append([])
    for label, value in [
        ("Total expenses", calc.total_expenses),
        ("Total discounts", calc.total_discounts),
        ("Net total", calc.net_total),
        ("Sum of shares", calc.sum_of_shares),
        ("Total tips", calc.total_tips),
        ("Sum with tips", calc.sum_of_shares_with_tips),
    ]:
        ws.append([label, value])
        ws.cell(ws.max_row, 1).font = Font(bold=True)
    ws.append(["Valid", "yes" if calc.is_valid else "NO"])
    ws.cell(ws.max_row, 1).font = Font(bold=True)
    if not calc.is_valid:
        ws.cell(ws.max_row, 2).fill = PatternFill("solid", fgColor="F8CBAD")

    for r in range(2, ws.max_row + 1):
        for c in range(2, 6):
            ws.cell(r, c).number_format = "0.00"
    _autosize_columns(ws)


def export_excel(group: ExpenseGroup, filepath: str) -> None:
    """
    Export one group to an Excel file with two sheets:
    - Items: every item with each person's share
    - Summary: per-person totals, tips and grouped totals plus aggregates
    """
    wb = Workbook()
    # remove default sheet
    wb.remove(wb.active)
    _write_items_sheet(wb, group)
    _write_summary_sheet(wb, group)
    wb.save(filepath)
    expenses = sum(1 for i in group.items if i.type == EXPENSE)
    logger.info("Exported group %s (%d expenses, %d discounts) to %s",
                group.name, expenses, len(group.items) - expenses, filepath)
