import logging
from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

from pydantic import TypeAdapter, ValidationError

from society.core.errors import MalformedDocumentError, NotFoundError
from society.schemas.base import Record
from society.store.base import Document, DocumentStore, Filter, OrderBy

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=Record)

_fields_adapter = TypeAdapter(Dict[str, Any])


def _summarize(exc: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()
    )


class Repository(Generic[T]):
    """Typed access to one collection. Documents are validated on the way out of the store."""

    def __init__(self, store: DocumentStore, collection: str, model: Type[T]):
        self.store = store
        self.collection = collection
        self.model = model

    def decode(self, document: Document) -> T:
        try:
            return self.model.model_validate(document)
        except ValidationError as exc:
            raise MalformedDocumentError(
                self.collection, document.get("id"), _summarize(exc)
            ) from exc

    def list(self, *filters: Filter, order_by: Optional[OrderBy] = None) -> List[T]:
        records = []
        for document in self.store.query(self.collection, filters, order_by):
            try:
                records.append(self.decode(document))
            except MalformedDocumentError as exc:
                # one bad row must not blank the whole list
                logger.warning("Skipping %s", exc)
        return records

    def get(self, doc_id: str) -> Optional[T]:
        document = self.store.get(self.collection, doc_id)
        if document is None:
            return None
        return self.decode(document)

    def require(self, doc_id: str) -> T:
        record = self.get(doc_id)
        if record is None:
            raise NotFoundError(self.collection, doc_id)
        return record

    def add(self, record: T) -> T:
        doc_id = self.store.add(self.collection, record.to_document())
        return record.model_copy(update={"id": doc_id})

    def put(self, doc_id: str, record: T) -> T:
        self.store.set(self.collection, doc_id, record.to_document())
        return record.model_copy(update={"id": doc_id})

    def update(self, doc_id: str, **fields: Any) -> None:
        self.store.update(
            self.collection, doc_id, _fields_adapter.dump_python(fields, mode="json")
        )

    def delete(self, doc_id: str) -> None:
        self.store.delete(self.collection, doc_id)
