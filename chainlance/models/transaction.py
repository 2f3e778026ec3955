# chainlance/models/transaction.py
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from chainlance.models.project import utc_timestamp


class TransactionType(str, Enum):
    DEPOSIT = "DEPOSIT"
    RELEASE = "RELEASE"
    REFUND = "REFUND"


class TransactionStatus(str, Enum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"


class Transaction(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    type: TransactionType
    amount: float
    # "from" is a keyword, so the sender is exposed under an alias
    sender: str = Field(alias="from")
    recipient: str = Field(alias="to")
    status: TransactionStatus = TransactionStatus.CONFIRMED
    timestamp: str = Field(default_factory=utc_timestamp)
