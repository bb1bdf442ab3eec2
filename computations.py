"""
Allocation and settlement computations for SplitGroups.

Everything here is a pure function of an ExpenseGroup snapshot: no I/O,
no logging, no mutation of the input.
"""
from __future__ import annotations
import math
from collections import OrderedDict
from typing import Dict, List, Optional, Tuple

from models import (
    DISCOUNT,
    EXPENSE,
    Calculations,
    ExpenseGroup,
    Item,
    Person,
    PersonBreakdown,
    PersonItemShare,
)

VALIDITY_TOLERANCE = 0.01


def _clamp(x: float) -> float:
    """Treat negative or non-finite quantities as zero"""
    x = float(x)
    if not math.isfinite(x) or x < 0:
        return 0.0
    return x


def item_value(item: Item) -> float:
    """Total value of an item: quantity times unit price"""
    return _clamp(item.amount) * _clamp(item.price)


def signed_amount(item: Item) -> float:
    """Item value, negated for discounts; unknown types count as nothing"""
    if item.type == EXPENSE:
        return item_value(item)
    if item.type == DISCOUNT:
        return -item_value(item)
    return 0.0


def applicable_people(item: Item, people: List[Person]) -> List[Person]:
    """People sharing an item. Stale ids in selected_people are ignored."""
    if item.applies_to_everyone:
        return list(people)
    selected = set(item.selected_people)
    return [p for p in people if p.id in selected]


def allocate_item(item: Item, people: List[Person]) -> Dict[str, float]:
    """
    Split one item equally among its applicable people.
    Returns person id -> signed share; empty when nobody applies.
    """
    sharing = applicable_people(item, people)
    if not sharing:
        return {}
    per_person = signed_amount(item) / len(sharing)
    return {p.id: per_person for p in sharing}


def compute_base_totals(group: ExpenseGroup) -> Dict[str, float]:
    """Sum of item shares per person, every person starting at 0"""
    totals = {p.id: 0.0 for p in group.people}
    for item in group.items:
        for pid, share in allocate_item(item, group.people).items():
            totals[pid] += share
    return totals


def compute_item_totals(items: List[Item]) -> Tuple[float, float]:
    """Return (total expenses, total discounts) regardless of participants"""
    expenses = sum(item_value(i) for i in items if i.type == EXPENSE)
    discounts = sum(item_value(i) for i in items if i.type == DISCOUNT)
    return expenses, discounts


def tip_enabled(tip_percentage: Optional[float]) -> bool:
    """A tip applies only when the percentage is set, finite and positive"""
    if tip_percentage is None:
        return False
    pct = float(tip_percentage)
    return math.isfinite(pct) and pct > 0


def compute_tips(totals: Dict[str, float], tip_percentage: Optional[float]) -> Dict[str, float]:
    """
    Tip per person, proportional to that person's own base total.
    People with a zero or negative total (credit) pay no tip.
    """
    if not tip_enabled(tip_percentage):
        return {pid: 0.0 for pid in totals}
    rate = float(tip_percentage) / 100.0
    return {pid: (t * rate if t > 0 else 0.0) for pid, t in totals.items()}


def build_payment_group_map(payment_groups: Optional[List[List[str]]]) -> Dict[str, List[str]]:
    """
    Map each person id to the full member list of its payment group.
    Groups are expected to be disjoint; overlaps are not repaired.
    """
    out: Dict[str, List[str]] = {}
    for members in payment_groups or []:
        for pid in members:
            out[pid] = list(members)
    return out


def group_sum(values: Dict[str, float], group_map: Dict[str, List[str]]) -> Dict[str, float]:
    """Add the values of every other payment-group member to each person's own"""
    out = {}
    for pid, own in values.items():
        total = own
        for member in group_map.get(pid, []):
            if member != pid:
                total += values.get(member, 0.0)
        out[pid] = total
    return out


def compute_calculations(group: ExpenseGroup) -> Calculations:
    """
    Compute per-person totals, tips, payment-group totals and aggregates.

    Items with nobody to share them are still counted in the expense and
    discount totals, so they make is_valid False instead of raising.
    """
    totals = compute_base_totals(group)
    tips = compute_tips(totals, group.tip_percentage)
    totals_with_tips = {pid: totals[pid] + tips[pid] for pid in totals}

    payment_groups = [list(g) for g in group.payment_groups or []]
    group_map = build_payment_group_map(payment_groups)
    group_members = {
        pid: [m for m in group_map.get(pid, []) if m != pid] for pid in totals
    }

    total_expenses, total_discounts = compute_item_totals(group.items)
    net_total = total_expenses - total_discounts
    sum_of_shares = sum(totals.values())

    return Calculations(
        totals=totals,
        tips=tips,
        totals_with_tips=totals_with_tips,
        grouped_totals=group_sum(totals, group_map),
        grouped_tips=group_sum(tips, group_map),
        grouped_totals_with_tips=group_sum(totals_with_tips, group_map),
        group_members=group_members,
        payment_groups=payment_groups,
        total_expenses=total_expenses,
        total_discounts=total_discounts,
        net_total=net_total,
        sum_of_shares=sum_of_shares,
        total_tips=sum(tips.values()),
        sum_of_shares_with_tips=sum(totals_with_tips.values()),
        is_valid=abs(net_total - sum_of_shares) < VALIDITY_TOLERANCE,
    )


compute = compute_calculations


def compute_person_breakdown(group: ExpenseGroup, person_id: str) -> Optional[PersonBreakdown]:
    """Itemised shares, tip and payment-group figures for one person"""
    person = next((p for p in group.people if p.id == person_id), None)
    if person is None:
        return None

    shares = []
    for item in group.items:
        sharing = applicable_people(item, group.people)
        if not any(p.id == person_id for p in sharing):
            continue
        shares.append(PersonItemShare(
            item=item,
            applicable_people=sharing,
            per_person=signed_amount(item) / len(sharing),
            total_value=item_value(item),
        ))

    calc = compute_calculations(group)
    has_tip = tip_enabled(group.tip_percentage)
    breakdown = PersonBreakdown(
        applicable_items=shares,
        base_total=calc.totals[person_id],
        tip=calc.tips[person_id],
        total_with_tip=calc.totals_with_tips[person_id],
        has_tip=has_tip,
        tip_percentage=group.tip_percentage if has_tip else None,
    )

    for index, members in enumerate(calc.payment_groups):
        if person_id in members:
            breakdown.payment_group_index = index
            breakdown.payment_group_members = [p for p in group.people if p.id in members]
            breakdown.payment_group_total = calc.grouped_totals_with_tips[person_id]
            break
    return breakdown


def group_key(group: ExpenseGroup) -> tuple:
    """Hashable key that is equal for structurally equal groups"""
    people = tuple((p.id, p.name) for p in group.people)
    items = tuple(
        (i.id, i.name, float(i.amount), float(i.price), i.type,
         bool(i.applies_to_everyone), tuple(i.selected_people))
        for i in group.items
    )
    payment_groups = tuple(tuple(g) for g in group.payment_groups or [])
    tip = group.tip_percentage if tip_enabled(group.tip_percentage) else None
    return (group.id, people, items, tip, payment_groups)


class CalculationCache:
    """Memoizes compute_calculations on structural equality of the group"""

    def __init__(self, max_size: int = 32):
        self.max_size = max_size
        self._entries: "OrderedDict[tuple, Calculations]" = OrderedDict()

    def get(self, group: ExpenseGroup) -> Calculations:
        key = group_key(group)
        if key in self._entries:
            self._entries.move_to_end(key)
            return self._entries[key]
        calc = compute_calculations(group)
        self._entries[key] = calc
        if len(self._entries) > self.max_size:
            self._entries.popitem(last=False)
        return calc

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
