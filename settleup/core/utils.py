from decimal import Decimal, ROUND_DOWN, ROUND_HALF_UP, getcontext
from typing import Dict, Iterable, Mapping
from settleup.core.config import settings

getcontext().prec = 28
CENTS = Decimal("0.01")
ZERO = Decimal("0")


def to_decimal(value) -> Decimal:
    """
    Money in, Decimal out.
    Floats go through str() so 0.1 stays one tenth.
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise TypeError("bool is not a monetary amount")
    return Decimal(str(value))


def qround(d: Decimal, quantum: Decimal | None = None) -> Decimal:
    return d.quantize(quantum or settings.CURRENCY_QUANTUM, rounding=ROUND_HALF_UP)


def floor_quantum(d: Decimal, quantum: Decimal | None = None) -> Decimal:
    return d.quantize(quantum or settings.CURRENCY_QUANTUM, rounding=ROUND_DOWN)


def money_sum(values: Iterable[Decimal]) -> Decimal:
    return sum(values, ZERO)


def unique_members(members: Iterable[str]) -> list[str]:
    # keeps first-seen order
    return list(dict.fromkeys(members))


def round_balances(balances: Mapping[str, Decimal]) -> Dict[str, Decimal]:
    return {member: qround(to_decimal(amount)) for member, amount in balances.items()}
