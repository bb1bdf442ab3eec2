import pytest

from conftest import make_item
from models import ExpenseGroup, Item, Person
from validation import (
    GroupValidationError,
    ensure_valid_group,
    validate_group,
    validate_item,
    validate_payment_groups,
    validate_tip_percentage,
)


def _group(**kwargs):
    defaults = dict(
        id="g",
        name="Trip",
        people=[Person("a", "Ana"), Person("b", "Bruno")],
        items=[make_item("i1", 20)],
    )
    defaults.update(kwargs)
    return ExpenseGroup(**defaults)


def test_valid_group_has_no_problems():
    assert validate_group(_group(tip_percentage=10, payment_groups=[["a", "b"]])) == []
    ensure_valid_group(_group())


def test_empty_selection_allowed_on_whole_group():
    group = _group(items=[make_item("i1", 20, people=[])])
    assert validate_group(group) == []


def test_strict_item_selection():
    item = make_item("i1", 20, people=["ghost"])
    assert validate_item(item, ["a", "b"]) == ["Item i1: select at least one person"]
    assert validate_item(item, ["a", "b"], strict_selection=False) == []


@pytest.mark.parametrize("amount,price", [(0, 10), (1, -1), (float("nan"), 1), (1, float("inf")), ("x", 1)])
def test_item_quantities_must_be_positive(amount, price):
    item = Item("i1", "Soda", amount=amount, price=price)
    assert validate_item(item, [])


def test_unknown_item_type():
    item = Item("i1", "Soda", amount=1, price=2, type="refund")
    assert validate_item(item, []) == ["Item Soda: unknown type 'refund'"]


def test_duplicate_ids():
    group = _group(
        people=[Person("a", "Ana"), Person("a", "Ana again")],
        items=[make_item("i1", 1), make_item("i1", 2)],
    )
    problems = validate_group(group)
    assert "Person ids must be unique" in problems
    assert "Item ids must be unique" in problems


@pytest.mark.parametrize("tip,ok", [(None, True), (0, True), (12.5, True), (-1, False), (float("nan"), False), ("ten", False)])
def test_tip_percentage(tip, ok):
    assert (validate_tip_percentage(tip) == []) is ok


def test_overlapping_payment_groups():
    problems = validate_payment_groups([["a", "b"], ["b"]], ["a", "b"])
    assert problems == ["Payment group 2: person 'b' is already in another group"]


def test_ensure_valid_group_raises_with_all_problems():
    group = _group(name=" ", tip_percentage=-3, payment_groups=[["zed"]])
    with pytest.raises(GroupValidationError) as exc:
        ensure_valid_group(group)
    assert len(exc.value.problems) == 3
    assert isinstance(exc.value, ValueError)
