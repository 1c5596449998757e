from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Sequence

# Collection names
COLLECTIONS = {
    "users": "users",
    "complaints": "complaints",
    "bills": "bills",
    "notices": "notices",
}

Document = Dict[str, Any]


@dataclass(frozen=True)
class Filter:
    field: str
    op: str
    value: Any

    @classmethod
    def eq(cls, field: str, value: Any) -> "Filter":
        return cls(field, "==", value)

    @classmethod
    def in_(cls, field: str, values: Iterable[Any]) -> "Filter":
        return cls(field, "in", tuple(values))

    def matches(self, document: Document) -> bool:
        actual = document.get(self.field)
        if self.op == "==":
            return actual == self.value
        if self.op == "in":
            return actual in self.value
        raise ValueError(f"Unsupported filter operator: {self.op}")


@dataclass(frozen=True)
class OrderBy:
    field: str
    descending: bool = False


class DocumentStore(ABC):
    """
    Collection-oriented access to the managed database.

    Documents are plain JSON-compatible dicts. Every document returned by a
    read carries its ``id``.
    """

    @abstractmethod
    def query(
        self,
        collection: str,
        filters: Sequence[Filter] = (),
        order_by: Optional[OrderBy] = None,
    ) -> List[Document]:
        ...

    @abstractmethod
    def get(self, collection: str, doc_id: str) -> Optional[Document]:
        ...

    @abstractmethod
    def add(self, collection: str, data: Document) -> str:
        """Create a document with a store-assigned id and return the id."""

    @abstractmethod
    def set(self, collection: str, doc_id: str, data: Document) -> None:
        """Create or fully overwrite the document at ``doc_id``."""

    @abstractmethod
    def update(self, collection: str, doc_id: str, fields: Document) -> None:
        """Merge ``fields`` into an existing document. Raises NotFoundError if missing."""

    @abstractmethod
    def delete(self, collection: str, doc_id: str) -> None:
        ...
