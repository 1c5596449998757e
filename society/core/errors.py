from typing import Optional


class SocietyError(Exception):
    """Base class for every error raised by the society package."""


class ConfigurationError(SocietyError):
    pass


class AuthError(SocietyError):
    """Sign-in, sign-up or session failure reported by the auth provider."""


class StoreError(SocietyError):
    """A read or write against the document store failed."""


class MalformedDocumentError(StoreError):
    def __init__(self, collection: str, doc_id: Optional[str], reason: str):
        self.collection = collection
        self.doc_id = doc_id
        self.reason = reason
        super().__init__(f"Malformed document {collection}/{doc_id}: {reason}")


class NotFoundError(SocietyError):
    def __init__(self, collection: str, doc_id: str):
        self.collection = collection
        self.doc_id = doc_id
        super().__init__(f"{collection}/{doc_id} not found")
