from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import field_validator

from society.schemas.base import Record


class Role(str, Enum):
    RESIDENT = "Resident"
    COMMITTEE_MEMBER = "Committee Member"


class UserProfile(Record):
    name: str
    flatNo: str
    contactNo: str
    email: Optional[str] = None
    # absent and blank roles decode to None; unknown values are rejected
    role: Optional[Role] = None
    createdAt: Optional[datetime] = None

    @field_validator("role", mode="before")
    @classmethod
    def _blank_role_is_absent(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @property
    def effective_role(self) -> Role:
        return self.role or Role.RESIDENT
