from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict


class Record(BaseModel):
    """A document stored in one collection. ``id`` is assigned by the store."""

    model_config = ConfigDict(extra="ignore")

    id: Optional[str] = None

    def to_document(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", exclude={"id"}, exclude_none=True)
