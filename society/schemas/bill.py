from datetime import date, datetime
from enum import Enum
from typing import Optional

from pydantic import Field

from society.schemas.base import Record


class BillStatus(str, Enum):
    PENDING = "Pending"
    PAID = "Paid"
    OVERDUE = "Overdue"


UNPAID_STATUSES = (BillStatus.PENDING, BillStatus.OVERDUE)


class Bill(Record):
    memberName: str
    memberId: str
    amount: float = Field(ge=0)
    dueDate: date
    status: BillStatus = BillStatus.PENDING
    createdAt: Optional[datetime] = None

    @property
    def is_unpaid(self) -> bool:
        return self.status in UNPAID_STATUSES
