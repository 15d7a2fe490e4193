import pytest
from settleup.schemas.expense import Expense, SplitDetail


def make(paid_by, amount, splits, **fields):
    return Expense(
        paid_by=paid_by,
        amount=amount,
        split_details=[SplitDetail(member=m, amount=a) for m, a in splits.items()],
        **fields,
    )


@pytest.fixture
def trio():
    return ["Alice", "Bob", "Carol"]


@pytest.fixture
def dinner(trio):
    # Alice fronts 300, everyone eats 100
    return make("Alice", 300, {"Alice": 100, "Bob": 100, "Carol": 100})


@pytest.fixture
def snapshot_payload():
    return {
        "members": ["Alice", "Bob", "Carol"],
        "expenses": [
            {
                "paidBy": "Alice",
                "amount": 300,
                "category": "Food ",
                "splitDetails": [
                    {"member": "Alice", "amount": 100},
                    {"member": "Bob", "amount": 100},
                    {"member": "Carol", "amount": 100},
                ],
            },
            {
                "paidBy": "Bob",
                "amount": 60,
                "category": "transport",
                "splitDetails": [
                    {"member": "Bob", "amount": 30},
                    {"member": "Carol", "amount": 30},
                ],
            },
        ],
    }
