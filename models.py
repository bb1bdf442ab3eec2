"""
Data models for SplitGroups
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, List, Optional

EXPENSE = "expense"
DISCOUNT = "discount"
ITEM_TYPES = (EXPENSE, DISCOUNT)


@dataclass
class Person:
    """Someone sharing the group's items"""
    id: str
    name: str


@dataclass
class Item:
    """Single expense or discount entry"""
    id: str
    name: str
    amount: float  # quantity
    price: float  # unit price
    type: str = EXPENSE  # "expense" or "discount"
    applies_to_everyone: bool = True
    selected_people: List[str] = field(default_factory=list)  # person ids


@dataclass
class ExpenseGroup:
    """Named collection of people and the items they split"""
    id: str
    name: str
    people: List[Person] = field(default_factory=list)
    items: List[Item] = field(default_factory=list)
    tip_percentage: Optional[float] = None  # None and 0 both mean no tip
    payment_groups: Optional[List[List[str]]] = None  # disjoint clusters of person ids


@dataclass
class Calculations:
    """Derived per-person and aggregate figures for one group"""
    totals: Dict[str, float]
    tips: Dict[str, float]
    totals_with_tips: Dict[str, float]
    grouped_totals: Dict[str, float]
    grouped_tips: Dict[str, float]
    grouped_totals_with_tips: Dict[str, float]
    group_members: Dict[str, List[str]]  # person id -> other members of their payment group
    payment_groups: List[List[str]]
    total_expenses: float
    total_discounts: float
    net_total: float
    sum_of_shares: float
    total_tips: float
    sum_of_shares_with_tips: float
    is_valid: bool


@dataclass
class PersonItemShare:
    """One item as seen from a single participant"""
    item: Item
    applicable_people: List[Person]
    per_person: float  # signed
    total_value: float


@dataclass
class PersonBreakdown:
    """Itemised view of what one person owes"""
    applicable_items: List[PersonItemShare]
    base_total: float
    tip: float
    total_with_tip: float
    has_tip: bool
    tip_percentage: Optional[float] = None
    payment_group_index: Optional[int] = None
    payment_group_total: Optional[float] = None
    payment_group_members: List[Person] = field(default_factory=list)


@dataclass
class Settings:
    """User preferences stored next to the groups"""
    currency: str = "BRL"
    language: Optional[str] = None
    theme: str = "system"  # "system", "dark" or "light"
