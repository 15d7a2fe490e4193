from decimal import Decimal
from typing import Dict, List, Mapping, Sequence

from settleup.core.config import settings
from settleup.core.exceptions import DataIntegrityError
from settleup.core.utils import ZERO, floor_quantum, money_sum, qround, to_decimal, unique_members
from settleup.schemas.expense import Expense, SplitDetail, SplitType
from settleup.schemas.group import GroupSnapshot, GroupSummary
from settleup.services.balance_service import validate_expense

HUNDRED = Decimal("100")
CENT_PERCENT = Decimal("0.01")


def _positive_amount(amount) -> Decimal:
    amount = qround(to_decimal(amount))
    if amount <= 0:
        raise DataIntegrityError(f"Expense amount must be positive, got {amount}")
    return amount


def build_equal_split(amount, members: Sequence[str]) -> List[SplitDetail]:
    """
    Divide amount evenly; leftover cents go one each to the first members.
    100 between three -> 33.34, 33.33, 33.33
    """
    amount = _positive_amount(amount)
    member_list = unique_members(members)

    if not member_list:
        raise DataIntegrityError("Equal split needs at least one member")

    quantum = settings.CURRENCY_QUANTUM
    base = floor_quantum(amount / len(member_list))
    leftover = qround(amount - base * len(member_list))
    extra_count = int(leftover / quantum)

    return [
        SplitDetail(member=m, amount=base + quantum if i < extra_count else base)
        for i, m in enumerate(member_list)
    ]


def build_exact_split(amount, shares: Mapping[str, object]) -> List[SplitDetail]:
    amount = _positive_amount(amount)
    values = {m: qround(to_decimal(v)) for m, v in shares.items()}

    if any(v < 0 for v in values.values()):
        raise DataIntegrityError("Split amounts must not be negative")

    splits = [SplitDetail(member=m, amount=v) for m, v in values.items() if v != 0]

    total_split = money_sum(s.amount for s in splits)
    if abs(total_split - amount) > settings.EPSILON:
        raise DataIntegrityError(
            f"Split total ({total_split}) must equal expense amount ({amount})"
        )

    return splits


def build_percentage_split(amount, percentages: Mapping[str, object]) -> List[SplitDetail]:
    amount = _positive_amount(amount)
    pcts = {m: to_decimal(p) for m, p in percentages.items() if to_decimal(p) != 0}

    if not pcts:
        raise DataIntegrityError("Percentage split needs at least one member")
    if any(p < 0 for p in pcts.values()):
        raise DataIntegrityError("Percentages must not be negative")

    total_pct = money_sum(pcts.values())
    if abs(total_pct - HUNDRED) > CENT_PERCENT:
        raise DataIntegrityError(f"Percentages must add up to 100, got {total_pct}")

    shares = {m: qround(amount * p / HUNDRED) for m, p in pcts.items()}

    # rounding remainder lands on the biggest percentage
    remainder = amount - money_sum(shares.values())
    if remainder:
        largest = max(pcts, key=lambda m: pcts[m])
        shares[largest] += remainder

    return [SplitDetail(member=m, amount=a) for m, a in shares.items()]


def build_split(
    split_type: SplitType | str,
    amount,
    members: Sequence[str] | None = None,
    shares: Mapping[str, object] | None = None,
) -> List[SplitDetail]:
    split_type = SplitType(split_type)

    if split_type == SplitType.EQUAL:
        return build_equal_split(amount, members or [])

    if shares is None:
        raise DataIntegrityError(f"{split_type.value} split needs per-member shares")

    if split_type == SplitType.UNEQUAL:
        return build_exact_split(amount, shares)
    return build_percentage_split(amount, shares)


def make_expense(
    paid_by: str,
    amount,
    split_type: SplitType | str = SplitType.EQUAL,
    members: Sequence[str] | None = None,
    shares: Mapping[str, object] | None = None,
    **fields,
) -> Expense:
    split_details = build_split(split_type, amount, members=members, shares=shares)
    return Expense(
        paid_by=paid_by,
        amount=_positive_amount(amount),
        split_details=split_details,
        split_type=SplitType(split_type),
        **fields,
    )


def summarize_group(snapshot: GroupSnapshot | dict) -> GroupSummary:
    if not isinstance(snapshot, GroupSnapshot):
        snapshot = GroupSnapshot.model_validate(snapshot)

    members = unique_members(snapshot.members)
    known = set(members)
    paid: Dict[str, Decimal] = {m: ZERO for m in members}
    share: Dict[str, Decimal] = {m: ZERO for m in members}
    by_category: Dict[str, Decimal] = {}

    for index, expense in enumerate(snapshot.expenses):
        if not expense.is_active:
            continue

        validate_expense(expense, known, index)

        paid[expense.paid_by] += expense.amount
        by_category[expense.category] = by_category.get(expense.category, ZERO) + expense.amount

        for split in expense.split_details:
            share[split.member] += split.amount

    by_category = dict(sorted(by_category.items(), key=lambda kv: kv[1], reverse=True))

    return GroupSummary(
        total=qround(money_sum(by_category.values())),
        by_category={c: qround(v) for c, v in by_category.items()},
        paid={m: qround(v) for m, v in paid.items()},
        share={m: qround(v) for m, v in share.items()},
    )
