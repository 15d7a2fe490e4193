from decimal import Decimal

import pytest

from settleup.core.exceptions import DataIntegrityError
from settleup.schemas.expense import SplitType
from settleup.services.expense_services import (
    build_equal_split,
    build_exact_split,
    build_percentage_split,
    build_split,
    make_expense,
    summarize_group,
)


def as_dict(splits):
    return {s.member: s.amount for s in splits}


def test_equal_split_hands_out_leftover_cents():
    splits = build_equal_split(100, ["Alice", "Bob", "Carol"])

    assert as_dict(splits) == {
        "Alice": Decimal("33.34"),
        "Bob": Decimal("33.33"),
        "Carol": Decimal("33.33"),
    }


def test_equal_split_even_amount():
    splits = build_equal_split("50", ["Alice", "Bob"])

    assert [s.amount for s in splits] == [Decimal("25"), Decimal("25")]


def test_equal_split_always_adds_up():
    for amount in ["0.01", "0.05", "1", "10.01", "99.99", "1234.56"]:
        splits = build_equal_split(amount, ["a", "b", "c", "d", "e", "f", "g"])
        assert sum(s.amount for s in splits) == Decimal(amount)


def test_equal_split_collapses_duplicates():
    splits = build_equal_split(10, ["Alice", "Alice", "Bob"])

    assert as_dict(splits) == {"Alice": Decimal("5"), "Bob": Decimal("5")}


def test_equal_split_needs_members():
    with pytest.raises(DataIntegrityError):
        build_equal_split(10, [])


def test_amount_must_be_positive():
    with pytest.raises(DataIntegrityError):
        build_equal_split(0, ["Alice"])
    with pytest.raises(DataIntegrityError):
        build_exact_split(-5, {"Alice": -5})


def test_exact_split_drops_zero_shares():
    splits = build_exact_split(40, {"Alice": 30, "Bob": 10, "Carol": 0})

    assert as_dict(splits) == {"Alice": Decimal("30"), "Bob": Decimal("10")}


def test_exact_split_must_add_up():
    with pytest.raises(DataIntegrityError):
        build_exact_split(40, {"Alice": 30, "Bob": 5})


def test_exact_split_rejects_negative_shares():
    with pytest.raises(DataIntegrityError):
        build_exact_split(10, {"Alice": 20, "Bob": -10})


def test_percentage_split():
    splits = build_percentage_split(200, {"Alice": 50, "Bob": 30, "Carol": 20})

    assert as_dict(splits) == {
        "Alice": Decimal("100"),
        "Bob": Decimal("60"),
        "Carol": Decimal("40"),
    }


def test_percentage_split_rounding_goes_to_largest_share():
    splits = build_percentage_split(10, {"Alice": "33.33", "Bob": "33.33", "Carol": "33.34"})

    assert sum(s.amount for s in splits) == Decimal("10")
    assert as_dict(splits)["Carol"] == Decimal("3.34")


def test_percentages_must_total_100():
    with pytest.raises(DataIntegrityError):
        build_percentage_split(100, {"Alice": 50, "Bob": 40})


def test_build_split_dispatch():
    assert as_dict(build_split("unequal", 10, shares={"Alice": 10})) == {"Alice": Decimal("10")}
    assert len(build_split(SplitType.EQUAL, 10, members=["Alice", "Bob"])) == 2

    with pytest.raises(DataIntegrityError):
        build_split("percentage", 10)
    with pytest.raises(ValueError):
        build_split("thirds", 10, members=["Alice"])


def test_make_expense():
    expense = make_expense(
        "Alice",
        "90",
        "percentage",
        shares={"Alice": 50, "Bob": 50},
        description="Hotel",
        category=" Lodging",
    )

    assert expense.paid_by == "Alice"
    assert expense.amount == Decimal("90")
    assert expense.split_type is SplitType.PERCENTAGE
    assert expense.category == "lodging"
    assert as_dict(expense.split_details) == {"Alice": Decimal("45"), "Bob": Decimal("45")}


def test_summarize_group(snapshot_payload):
    summary = summarize_group(snapshot_payload)

    assert summary.total == Decimal("360")
    assert list(summary.by_category) == ["food", "transport"]
    assert summary.paid == {"Alice": Decimal("300"), "Bob": Decimal("60"), "Carol": Decimal("0")}
    assert summary.share == {"Alice": Decimal("100"), "Bob": Decimal("130"), "Carol": Decimal("130")}


def test_summarize_group_skips_inactive(snapshot_payload):
    snapshot_payload["expenses"][1]["isActive"] = False

    summary = summarize_group(snapshot_payload)

    assert summary.total == Decimal("300")
    assert "transport" not in summary.by_category


def test_summarize_group_rejects_unknown_members():
    payload = {
        "members": ["Alice"],
        "expenses": [
            {"paidBy": "Zed", "amount": 10, "splitDetails": [{"member": "Quinn", "amount": 10}]},
        ],
    }

    with pytest.raises(DataIntegrityError) as exc:
        summarize_group(payload)

    assert exc.value.member == "Zed"
    assert exc.value.expense_index == 0


def test_summarize_group_rejects_unknown_split_member(snapshot_payload):
    snapshot_payload["expenses"][1]["splitDetails"][1]["member"] = "Dave"

    with pytest.raises(DataIntegrityError) as exc:
        summarize_group(snapshot_payload)

    assert exc.value.member == "Dave"
    assert exc.value.expense_index == 1
