from typing import Dict, List
from pydantic import BaseModel, Field
from settleup.schemas.expense import Expense
from settleup.schemas.money import Money
from settleup.schemas.settlements import RecordedSettlement

class GroupSnapshot(BaseModel):
    members: List[str]
    expenses: List[Expense] = Field(default_factory=list)
    settlements: List[RecordedSettlement] = Field(default_factory=list)

class GroupSummary(BaseModel):
    total: Money
    by_category: Dict[str, Money]
    paid: Dict[str, Money]
    share: Dict[str, Money]
