import datetime as dt
from typing import Optional

from pydantic import Field

from society.schemas.base import Record


class Notice(Record):
    title: str = Field(min_length=1)
    date: dt.date
    time: dt.time
    description: str = Field(min_length=1)
    # display name of the committee member who posted it
    name: Optional[str] = None
    createdBy: str
    createdAt: dt.datetime

    @property
    def headline(self) -> str:
        return f"{self.title} on {self.date.isoformat()}"
