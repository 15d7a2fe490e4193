import logging
from decimal import Decimal
from typing import Dict, Iterable, Sequence

from settleup.core.config import settings
from settleup.core.exceptions import DataIntegrityError
from settleup.core.utils import ZERO, money_sum, round_balances, to_decimal, unique_members
from settleup.schemas.expense import Expense
from settleup.schemas.settlements import RecordedSettlement

logger = logging.getLogger(__name__)


def validate_expense(expense: Expense, known: set, index: int | None = None) -> None:
    if expense.paid_by not in known:
        raise DataIntegrityError(
            f"Payer {expense.paid_by!r} is not a member of the group",
            member=expense.paid_by,
            expense_index=index,
        )

    for split in expense.split_details:
        if split.member not in known:
            raise DataIntegrityError(
                f"Split member {split.member!r} is not a member of the group",
                member=split.member,
                expense_index=index,
            )

    total_split = money_sum(to_decimal(s.amount) for s in expense.split_details)
    if abs(total_split - to_decimal(expense.amount)) > settings.EPSILON:
        raise DataIntegrityError(
            f"Split total ({total_split}) must equal expense amount ({expense.amount})",
            expense_index=index,
        )


def compute_balances(
    members: Sequence[str],
    expenses: Sequence[Expense],
    settlements: Iterable[RecordedSettlement] = (),
) -> Dict[str, Decimal]:
    """
    Returns:
        {
            member: net_balance (Decimal)
        }

    net_balance = total_paid - total_owed
    Positive means the member gets money back, negative means they owe.
    """
    member_list = unique_members(members)
    known = set(member_list)
    balances: Dict[str, Decimal] = {member: ZERO for member in member_list}

    for index, expense in enumerate(expenses):
        if not expense.is_active:
            continue

        validate_expense(expense, known, index)

        # paid_by increases balance
        balances[expense.paid_by] += to_decimal(expense.amount)

        # splits decrease balance
        for split in expense.split_details:
            balances[split.member] -= to_decimal(split.amount)

    for recorded in settlements:
        for member in (recorded.from_member, recorded.to_member):
            if member not in known:
                raise DataIntegrityError(
                    f"Recorded settlement names {member!r}, who is not a member of the group",
                    member=member,
                )
        balances[recorded.from_member] += to_decimal(recorded.amount)
        balances[recorded.to_member] -= to_decimal(recorded.amount)

    balances = round_balances(balances)

    drift = money_sum(balances.values())
    if abs(drift) > settings.EPSILON:
        logger.debug("Balances for %d members drift by %s after rounding", len(balances), drift)

    return balances
