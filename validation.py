"""
Input validation for SplitGroups.

Groups are checked here, before they reach the computations, so the
engine can assume well-formed data.
"""
from __future__ import annotations
import math
from typing import Iterable, List

from models import ITEM_TYPES, ExpenseGroup, Item


class GroupValidationError(ValueError):
    """Raised when a group or item breaks a data invariant"""

    def __init__(self, problems: List[str]):
        self.problems = list(problems)
        super().__init__("; ".join(self.problems))


def _positive_number(x) -> bool:
    try:
        v = float(x)
    except (TypeError, ValueError):
        return False
    return math.isfinite(v) and v > 0


def validate_item(item: Item, people_ids: Iterable[str], strict_selection: bool = True) -> List[str]:
    """
    Return a list of problems with an item; empty when valid.
    strict_selection requires a non-empty selection of known people
    for items that do not apply to everyone.
    """
    problems = []
    label = item.name or item.id
    if not str(item.name).strip():
        problems.append(f"Item {item.id}: name is required")
    if not _positive_number(item.amount):
        problems.append(f"Item {label}: quantity must be a positive number")
    if not _positive_number(item.price):
        problems.append(f"Item {label}: unit price must be a positive number")
    if item.type not in ITEM_TYPES:
        problems.append(f"Item {label}: unknown type {item.type!r}")
    if strict_selection and not item.applies_to_everyone:
        known = set(people_ids)
        if not any(pid in known for pid in item.selected_people):
            problems.append(f"Item {label}: select at least one person")
    return problems


def validate_tip_percentage(tip_percentage) -> List[str]:
    if tip_percentage is None:
        return []
    try:
        pct = float(tip_percentage)
    except (TypeError, ValueError):
        return [f"Tip percentage {tip_percentage!r} is not a number"]
    if not math.isfinite(pct) or pct < 0:
        return [f"Tip percentage must be a non-negative number, got {tip_percentage!r}"]
    return []


def validate_payment_groups(payment_groups, people_ids: Iterable[str]) -> List[str]:
    """Payment groups must be non-empty, disjoint and refer to known people"""
    problems = []
    known = set(people_ids)
    seen = set()
    for index, members in enumerate(payment_groups or [], start=1):
        if not members:
            problems.append(f"Payment group {index} is empty")
            continue
        for pid in members:
            if pid not in known:
                problems.append(f"Payment group {index}: unknown person {pid!r}")
            if pid in seen:
                problems.append(f"Payment group {index}: person {pid!r} is already in another group")
            seen.add(pid)
    return problems


def validate_group(group: ExpenseGroup) -> List[str]:
    """
    Return a list of problems with a whole group; empty when valid.
    Items with an empty selection are allowed here since removing a
    person can leave them that way; the computations report them
    through is_valid.
    """
    problems = []
    if not str(group.name).strip():
        problems.append("Group name is required")

    people_ids = [p.id for p in group.people]
    if len(set(people_ids)) != len(people_ids):
        problems.append("Person ids must be unique")
    item_ids = [i.id for i in group.items]
    if len(set(item_ids)) != len(item_ids):
        problems.append("Item ids must be unique")

    for item in group.items:
        problems.extend(validate_item(item, people_ids, strict_selection=False))
    problems.extend(validate_tip_percentage(group.tip_percentage))
    problems.extend(validate_payment_groups(group.payment_groups, people_ids))
    return problems


def ensure_valid_item(item: Item, people_ids: Iterable[str]) -> None:
    problems = validate_item(item, people_ids)
    if problems:
        raise GroupValidationError(problems)


def ensure_valid_group(group: ExpenseGroup) -> None:
    problems = validate_group(group)
    if problems:
        raise GroupValidationError(problems)
