import pytest

from models import DISCOUNT, EXPENSE, ExpenseGroup, Item, Person


def make_item(item_id, value, people=None, type=EXPENSE, amount=1):
    """Item worth `value` in total; applies to everyone unless people are given"""
    return Item(
        id=item_id,
        name=item_id,
        amount=amount,
        price=value / amount,
        type=type,
        applies_to_everyone=people is None,
        selected_people=list(people or []),
    )


@pytest.fixture
def abc_group():
    """People A, B, C; one shared expense of 3x10 and a 6 discount for A only."""
    return ExpenseGroup(
        id="g1",
        name="Dinner",
        people=[Person("a", "Ana"), Person("b", "Bruno"), Person("c", "Carla")],
        items=[
            Item("i1", "Pizza", amount=3, price=10, type=EXPENSE, applies_to_everyone=True),
            Item("i2", "Coupon", amount=1, price=6, type=DISCOUNT,
                 applies_to_everyone=False, selected_people=["a"]),
        ],
    )
