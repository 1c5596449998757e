import copy
import threading
import uuid
from datetime import datetime
from typing import Dict, List, Optional, Sequence

from society.core.errors import NotFoundError
from society.store.base import Document, DocumentStore, Filter, OrderBy


class MemoryDocumentStore(DocumentStore):
    """In-process store used when DISABLE_AUTH=true and by the test suite."""

    def __init__(self):
        self._collections: Dict[str, Dict[str, Document]] = {}
        self._lock = threading.Lock()

    def _collection(self, name: str) -> Dict[str, Document]:
        return self._collections.setdefault(name, {})

    def query(
        self,
        collection: str,
        filters: Sequence[Filter] = (),
        order_by: Optional[OrderBy] = None,
    ) -> List[Document]:
        with self._lock:
            docs = [
                {**copy.deepcopy(doc), "id": doc_id}
                for doc_id, doc in self._collection(collection).items()
                if all(f.matches(doc) for f in filters)
            ]

        if order_by:
            # documents missing the field sort last in either direction
            present = [d for d in docs if d.get(order_by.field) is not None]
            missing = [d for d in docs if d.get(order_by.field) is None]
            present.sort(key=lambda d: _sort_key(d[order_by.field]), reverse=order_by.descending)
            docs = present + missing
        return docs

    def get(self, collection: str, doc_id: str) -> Optional[Document]:
        with self._lock:
            doc = self._collection(collection).get(doc_id)
            if doc is None:
                return None
            return {**copy.deepcopy(doc), "id": doc_id}

    def add(self, collection: str, data: Document) -> str:
        doc_id = uuid.uuid4().hex
        self.set(collection, doc_id, data)
        return doc_id

    def set(self, collection: str, doc_id: str, data: Document) -> None:
        payload = {k: v for k, v in copy.deepcopy(data).items() if k != "id"}
        with self._lock:
            self._collection(collection)[doc_id] = payload

    def update(self, collection: str, doc_id: str, fields: Document) -> None:
        with self._lock:
            doc = self._collection(collection).get(doc_id)
            if doc is None:
                raise NotFoundError(collection, doc_id)
            doc.update(copy.deepcopy(fields))

    def delete(self, collection: str, doc_id: str) -> None:
        with self._lock:
            self._collection(collection).pop(doc_id, None)


def _sort_key(value):
    # ISO timestamps compare by instant, not text: "09:00:00Z" vs "09:00:00.5Z"
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return value
    return value
