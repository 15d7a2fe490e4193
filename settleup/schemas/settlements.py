from pydantic import BaseModel, Field
from settleup.schemas.money import Money

class Settlement(BaseModel):
    from_member: str = Field(alias="from")
    to_member: str = Field(alias="to")
    amount: Money = Field(gt=0)

    class Config:
        populate_by_name = True
        frozen = True

class RecordedSettlement(BaseModel):
    """A transfer the group already made, fed back into the balances."""
    from_member: str = Field(alias="from")
    to_member: str = Field(alias="to")
    amount: Money = Field(gt=0)
    note: str | None = Field(default=None, max_length=200)

    class Config:
        populate_by_name = True
        frozen = True
