class SettleupError(Exception):
    """Base class for every error raised by settleup."""


class DataIntegrityError(SettleupError, ValueError):
    """
    Raised when group data can't produce a trustworthy settlement:
    - payer or split member missing from the member list
    - split shares not adding up to the expense amount
    """

    def __init__(self, message: str, member: str | None = None, expense_index: int | None = None):
        super().__init__(message)
        self.member = member
        self.expense_index = expense_index
