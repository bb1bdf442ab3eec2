"""
Group operations for SplitGroups.

Each operation returns a new ExpenseGroup and leaves its argument as it was.
"""
from __future__ import annotations
from dataclasses import replace
from typing import List, Optional

from models import ExpenseGroup, Item, Person
from utils import new_id
from validation import (
    GroupValidationError,
    ensure_valid_item,
    validate_payment_groups,
    validate_tip_percentage,
)


def create_group(name: str) -> ExpenseGroup:
    name = name.strip()
    if not name:
        raise GroupValidationError(["Group name is required"])
    return ExpenseGroup(id=new_id(), name=name)


def rename_group(group: ExpenseGroup, name: str) -> ExpenseGroup:
    name = name.strip()
    if not name:
        raise GroupValidationError(["Group name is required"])
    return replace(group, name=name)


def add_person(group: ExpenseGroup, name: str, person_id: Optional[str] = None) -> ExpenseGroup:
    name = name.strip()
    if not name:
        raise GroupValidationError(["Person name is required"])
    person = Person(id=person_id or new_id(), name=name)
    if any(p.id == person.id for p in group.people):
        raise GroupValidationError([f"Person id {person.id!r} already exists"])
    return replace(group, people=group.people + [person])


def remove_person(group: ExpenseGroup, person_id: str) -> ExpenseGroup:
    """
    Remove a person, dropping their id from every item selection and
    payment group. Payment groups left empty are discarded.
    """
    people = [p for p in group.people if p.id != person_id]
    items = [
        replace(i, selected_people=[pid for pid in i.selected_people if pid != person_id])
        for i in group.items
    ]
    payment_groups = [
        [pid for pid in members if pid != person_id]
        for members in group.payment_groups or []
    ]
    payment_groups = [members for members in payment_groups if members]
    return replace(
        group,
        people=people,
        items=items,
        payment_groups=payment_groups or None,
    )


def add_item(group: ExpenseGroup, item: Item) -> ExpenseGroup:
    ensure_valid_item(item, [p.id for p in group.people])
    if any(i.id == item.id for i in group.items):
        raise GroupValidationError([f"Item id {item.id!r} already exists"])
    item = replace(item, selected_people=list(item.selected_people))
    return replace(group, items=group.items + [item])


def remove_item(group: ExpenseGroup, item_id: str) -> ExpenseGroup:
    return replace(group, items=[i for i in group.items if i.id != item_id])


def set_tip_percentage(group: ExpenseGroup, tip_percentage: Optional[float]) -> ExpenseGroup:
    problems = validate_tip_percentage(tip_percentage)
    if problems:
        raise GroupValidationError(problems)
    if tip_percentage is not None:
        tip_percentage = float(tip_percentage)
    return replace(group, tip_percentage=tip_percentage)


def set_payment_groups(group: ExpenseGroup, payment_groups: List[List[str]]) -> ExpenseGroup:
    """Replace the payment groups; an empty list clears them"""
    normalized = [list(members) for members in payment_groups]
    problems = validate_payment_groups(normalized, [p.id for p in group.people])
    if problems:
        raise GroupValidationError(problems)
    return replace(group, payment_groups=normalized or None)


def find_group(groups: List[ExpenseGroup], key: str) -> Optional[ExpenseGroup]:
    """Look a group up by id, falling back to a case-insensitive name match"""
    for g in groups:
        if g.id == key:
            return g
    for g in groups:
        if g.name.lower() == key.lower():
            return g
    return None


def delete_group(groups: List[ExpenseGroup], group_id: str) -> List[ExpenseGroup]:
    return [g for g in groups if g.id != group_id]
