import logging
from typing import List, Optional, Sequence

import httpx
from supabase import Client, PostgrestAPIError

from society.core.errors import NotFoundError, StoreError
from society.store.base import Document, DocumentStore, Filter, OrderBy

logger = logging.getLogger(__name__)


class SupabaseDocumentStore(DocumentStore):
    """
    Supabase tables used as document collections.

    Each collection is a table with a text/uuid ``id`` primary key that
    defaults server-side; column names are the camelCase field names.
    """

    def __init__(self, client: Client):
        self._client = client

    def _execute(self, collection: str, request) -> List[Document]:
        try:
            response = request.execute()
        except PostgrestAPIError as exc:
            logger.error("Supabase request on %s failed: %s", collection, exc.message)
            raise StoreError(exc.message or str(exc)) from exc
        except httpx.HTTPError as exc:
            logger.error("Supabase unreachable while querying %s: %s", collection, exc)
            raise StoreError(f"Connection error: {exc}") from exc
        return list(response.data or [])

    def query(
        self,
        collection: str,
        filters: Sequence[Filter] = (),
        order_by: Optional[OrderBy] = None,
    ) -> List[Document]:
        request = self._client.table(collection).select("*")
        for f in filters:
            if f.op == "==":
                request = request.eq(f.field, f.value)
            elif f.op == "in":
                request = request.in_(f.field, list(f.value))
            else:
                raise ValueError(f"Unsupported filter operator: {f.op}")
        if order_by:
            request = request.order(order_by.field, desc=order_by.descending)
        return self._execute(collection, request)

    def get(self, collection: str, doc_id: str) -> Optional[Document]:
        rows = self._execute(
            collection,
            self._client.table(collection).select("*").eq("id", doc_id).limit(1),
        )
        return rows[0] if rows else None

    def add(self, collection: str, data: Document) -> str:
        rows = self._execute(collection, self._client.table(collection).insert(data))
        if not rows:
            raise StoreError(f"Insert into {collection} returned no row")
        return str(rows[0]["id"])

    def set(self, collection: str, doc_id: str, data: Document) -> None:
        self._execute(
            collection,
            self._client.table(collection).upsert({**data, "id": doc_id}),
        )

    def update(self, collection: str, doc_id: str, fields: Document) -> None:
        rows = self._execute(
            collection,
            self._client.table(collection).update(fields).eq("id", doc_id),
        )
        if not rows:
            raise NotFoundError(collection, doc_id)

    def delete(self, collection: str, doc_id: str) -> None:
        self._execute(collection, self._client.table(collection).delete().eq("id", doc_id))
