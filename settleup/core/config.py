from decimal import Decimal
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    EPSILON: Decimal = Decimal("0.01")
    CURRENCY_QUANTUM: Decimal = Decimal("0.01")
    SORT_BY_MAGNITUDE: bool = True
    LOG_LEVEL: str = "WARNING"

    class Config:
        env_file = ".env"
        env_prefix = "SETTLEUP_"
        extra = "ignore"

settings = Settings()
