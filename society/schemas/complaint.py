from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import Field

from society.schemas.base import Record


class ComplaintStatus(str, Enum):
    PENDING = "Pending"
    IN_PROGRESS = "In Progress"
    DONE = "Done"


class Complaint(Record):
    name: str
    description: str = Field(min_length=1)
    flatNo: str
    status: ComplaintStatus = ComplaintStatus.PENDING
    reply: Optional[str] = None
    createdBy: str
    createdAt: datetime
    updatedAt: Optional[datetime] = None
