from society.store.base import COLLECTIONS, DocumentStore, Filter, OrderBy
from society.store.memory import MemoryDocumentStore
from society.store.repository import Repository

__all__ = [
    "COLLECTIONS",
    "DocumentStore",
    "Filter",
    "MemoryDocumentStore",
    "OrderBy",
    "Repository",
]
