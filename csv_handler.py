"""
CSV export and import functionality for SplitGroups
"""
from __future__ import annotations
import csv
import logging
from typing import List

from models import Item
from utils import new_id, parse_bool, safe_float
from validation import validate_item

logger = logging.getLogger(__name__)

CSV_COLUMNS = ['id', 'name', 'type', 'amount', 'price', 'applies_to_everyone', 'selected_people']


def export_items_to_csv(items: List[Item], filepath: str) -> None:
    """
    Export items list to CSV file
    CSV columns: id, name, type, amount, price, applies_to_everyone, selected_people
    """
    with open(filepath, 'w', newline='', encoding='utf-8') as f:
        writer = csv.writer(f)
        writer.writerow(CSV_COLUMNS)
        for i in items:
            writer.writerow([
                i.id,
                i.name,
                i.type,
                i.amount,
                i.price,
                'true' if i.applies_to_everyone else 'false',
                ';'.join(i.selected_people),
            ])
    logger.debug("Exported %d items to %s", len(items), filepath)


def import_items_from_csv(filepath: str) -> List[Item]:
    """
    Import items list from CSV file
    Rows without an id get a fresh one. Rows that fail validation are
    still returned but logged with their line number, so adding them to
    a group raises. Returns list of Item objects.
    """
    items = []

    with open(filepath, 'r', encoding='utf-8') as f:
        reader = csv.DictReader(f)

        for row in reader:
            selected = [pid.strip() for pid in (row.get('selected_people') or '').split(';') if pid.strip()]
            item = Item(
                id=row.get('id') or new_id(),
                name=row.get('name', ''),
                type=(row.get('type') or 'expense').strip().lower(),
                amount=safe_float(row.get('amount'), 1.0),
                price=safe_float(row.get('price')),
                applies_to_everyone=parse_bool(row.get('applies_to_everyone'), default=not selected),
                selected_people=selected,
            )
            problems = validate_item(item, [], strict_selection=False)
            if problems:
                logger.warning("%s line %d: %s", filepath, reader.line_num, "; ".join(problems))
            items.append(item)

    logger.debug("Imported %d items from %s", len(items), filepath)
    return items
