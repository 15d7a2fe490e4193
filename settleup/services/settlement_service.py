import logging
from collections import deque
from decimal import Decimal
from typing import Dict, Iterable, List, Mapping

from settleup.core.config import settings
from settleup.core.utils import ZERO, money_sum, qround, round_balances, to_decimal
from settleup.schemas.balances import BalanceStatus, MemberBalance, SettlementReport
from settleup.schemas.group import GroupSnapshot
from settleup.schemas.settlements import Settlement
from settleup.services.balance_service import compute_balances

logger = logging.getLogger(__name__)


def plan_settlements(
    balances: Mapping[str, Decimal],
    epsilon: Decimal | None = None,
    sort_by_magnitude: bool | None = None,
) -> List[Settlement]:
    """
    Greedy algorithm to minimize the number of transfers.

    Debtors pay creditors, largest amounts first. Each transfer closes out
    at least one side, so a group with n unsettled members needs at most
    n - 1 transfers.
    """
    eps = settings.EPSILON if epsilon is None else to_decimal(epsilon)
    if sort_by_magnitude is None:
        sort_by_magnitude = settings.SORT_BY_MAGNITUDE

    creditors = []
    debtors = []

    for member, bal in round_balances(balances).items():
        if bal > eps:
            creditors.append([member, bal])
        elif bal < -eps:
            debtors.append([member, -bal])

    if sort_by_magnitude:
        # stable, so ties keep input order
        creditors.sort(key=lambda x: x[1], reverse=True)
        debtors.sort(key=lambda x: x[1], reverse=True)

    creditors = deque(creditors)
    debtors = deque(debtors)

    transfers: List[Settlement] = []

    while creditors and debtors:
        cred_id, cred_amt = creditors[0]
        debt_id, debt_amt = debtors[0]

        pay_amt = qround(min(cred_amt, debt_amt))

        if pay_amt > 0:
            transfers.append(Settlement(from_member=debt_id, to_member=cred_id, amount=pay_amt))

        new_cred = qround(cred_amt - pay_amt)
        new_debt = qround(debt_amt - pay_amt)

        creditors.popleft()
        debtors.popleft()

        if new_cred > eps:
            creditors.appendleft([cred_id, new_cred])
        if new_debt > eps:
            debtors.appendleft([debt_id, new_debt])

    leftover = money_sum(amt for _, amt in creditors) + money_sum(amt for _, amt in debtors)
    if leftover > eps:
        logger.warning(
            "Settlement plan leaves %s unsettled (%d creditors, %d debtors remaining); "
            "expense splits likely do not add up",
            leftover,
            len(creditors),
            len(debtors),
        )

    return transfers


def apply_settlements(
    balances: Mapping[str, Decimal],
    settlements: Iterable[Settlement],
) -> Dict[str, Decimal]:
    after = {member: to_decimal(amount) for member, amount in balances.items()}
    for s in settlements:
        after[s.from_member] = after.get(s.from_member, ZERO) + s.amount
        after[s.to_member] = after.get(s.to_member, ZERO) - s.amount
    return after


def unsettled_amount(
    balances: Mapping[str, Decimal],
    settlements: Iterable[Settlement],
    epsilon: Decimal | None = None,
) -> Decimal:
    """Total still owed to creditors once every planned transfer is made."""
    eps = settings.EPSILON if epsilon is None else to_decimal(epsilon)
    after = round_balances(apply_settlements(balances, settlements))
    outstanding = money_sum(amt for amt in after.values() if amt > eps)
    return outstanding


def is_group_settled(
    balances: Mapping[str, Decimal],
    tolerance: Decimal | None = None,
) -> bool:
    """
    A group is settled if:
        abs(net_balance) <= tolerance
        for every member
    """
    tol = settings.EPSILON if tolerance is None else to_decimal(tolerance)

    for amount in balances.values():
        if abs(to_decimal(amount)) > tol:
            return False

    return True


def member_status(amount: Decimal, epsilon: Decimal | None = None) -> BalanceStatus:
    amount = to_decimal(amount)
    eps = settings.EPSILON if epsilon is None else to_decimal(epsilon)
    if amount > eps:
        return BalanceStatus.GETS_BACK
    if amount < -eps:
        return BalanceStatus.OWES
    return BalanceStatus.SETTLED


def build_settlement_report(snapshot: GroupSnapshot | dict) -> SettlementReport:
    if not isinstance(snapshot, GroupSnapshot):
        snapshot = GroupSnapshot.model_validate(snapshot)

    balances = compute_balances(snapshot.members, snapshot.expenses, snapshot.settlements)
    settlements = plan_settlements(balances)
    residual = unsettled_amount(balances, settlements)

    return SettlementReport(
        balances=balances,
        settlements=settlements,
        members=[
            MemberBalance(member=member, amount=amount, status=member_status(amount))
            for member, amount in balances.items()
        ],
        residual=qround(residual),
        settled=is_group_settled(balances),
    )
