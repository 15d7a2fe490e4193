from enum import Enum
from typing import List
from pydantic import BaseModel, Field, field_validator
from settleup.schemas.money import Money

class SplitType(str, Enum):
    EQUAL = "equal"
    UNEQUAL = "unequal"
    PERCENTAGE = "percentage"

class SplitDetail(BaseModel):
    member: str
    amount: Money = Field(ge=0)

    class Config:
        frozen = True

class Expense(BaseModel):
    paid_by: str = Field(alias="paidBy")
    amount: Money = Field(gt=0)
    split_details: List[SplitDetail] = Field(alias="splitDetails")
    description: str | None = Field(default=None, max_length=200)
    category: str = "general"
    split_type: SplitType = Field(default=SplitType.EQUAL, alias="splitType")
    is_active: bool = Field(default=True, alias="isActive")

    class Config:
        populate_by_name = True
        frozen = True

    @field_validator("category")
    @classmethod
    def normalize_category(cls, value: str) -> str:
        return value.strip().lower() or "general"
