from enum import Enum
from typing import Dict, List
from pydantic import BaseModel
from settleup.schemas.money import Money
from settleup.schemas.settlements import Settlement

class BalanceStatus(str, Enum):
    GETS_BACK = "gets_back"
    OWES = "owes"
    SETTLED = "settled"

class MemberBalance(BaseModel):
    member: str
    amount: Money
    status: BalanceStatus

class SettlementReport(BaseModel):
    balances: Dict[str, Money]
    settlements: List[Settlement]
    members: List[MemberBalance]
    residual: Money
    settled: bool

    def to_payload(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)
