"""
Wiring for one browser session.

Everything a screen needs travels in an explicit ``AppContext`` instead of
module-level globals: the store, the auth gateway, the session provider,
the role resolver, the route guard and one typed repository per collection.
"""
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, Optional, Tuple

from society.core.auth import (
    LOCAL_ADMIN_EMAIL,
    LOCAL_ADMIN_PASSWORD,
    AuthGateway,
    LocalAccountBook,
    LocalAuthGateway,
)
from society.core.config import Settings
from society.core.roles import RoleResolver
from society.core.routing import RouteGuard
from society.core.session import SessionProvider
from society.core.supabase_auth import (
    SupabaseAuthGateway,
    create_admin_client,
    create_supabase_client,
)
from society.schemas.auth import Session
from society.schemas.bill import Bill
from society.schemas.complaint import Complaint
from society.schemas.notice import Notice
from society.schemas.user import Role, UserProfile
from society.store.base import COLLECTIONS, DocumentStore
from society.store.memory import MemoryDocumentStore
from society.store.repository import Repository
from society.store.supabase_store import SupabaseDocumentStore

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class AppContext:
    settings: Settings
    store: DocumentStore
    auth: AuthGateway
    sessions: SessionProvider
    resolver: RoleResolver
    guard: RouteGuard
    users: Repository[UserProfile]
    complaints: Repository[Complaint]
    bills: Repository[Bill]
    notices: Repository[Notice]
    clock: Callable[[], datetime] = field(default=utcnow)

    @property
    def session(self) -> Optional[Session]:
        return self.sessions.session

    @property
    def user_id(self) -> Optional[str]:
        return self.sessions.user_id

    @property
    def role(self) -> Optional[Role]:
        return self.guard.role

    def close(self) -> None:
        self.guard.close()
        self.sessions.close()


def create_context(
    settings: Settings,
    store: DocumentStore,
    auth: AuthGateway,
    clock: Callable[[], datetime] = utcnow,
) -> AppContext:
    users = Repository(store, COLLECTIONS["users"], UserProfile)
    sessions = SessionProvider(auth)
    resolver = RoleResolver(users)
    guard = RouteGuard(sessions, resolver)
    return AppContext(
        settings=settings,
        store=store,
        auth=auth,
        sessions=sessions,
        resolver=resolver,
        guard=guard,
        users=users,
        complaints=Repository(store, COLLECTIONS["complaints"], Complaint),
        bills=Repository(store, COLLECTIONS["bills"], Bill),
        notices=Repository(store, COLLECTIONS["notices"], Notice),
        clock=clock,
    )


# ============================================
# BACKENDS
# ============================================

def create_local_backend() -> Tuple[MemoryDocumentStore, LocalAccountBook]:
    """Shared in-process store and account book, seeded with one committee account."""
    store = MemoryDocumentStore()
    book = LocalAccountBook()
    account = book.create(LOCAL_ADMIN_EMAIL, LOCAL_ADMIN_PASSWORD, {"name": "Local Admin"})
    Repository(store, COLLECTIONS["users"], UserProfile).put(
        account.user_id,
        UserProfile(
            name="Local Admin",
            flatNo="Office",
            contactNo="0000000000",
            email=LOCAL_ADMIN_EMAIL,
            role=Role.COMMITTEE_MEMBER,
            createdAt=utcnow(),
        ),
    )
    logger.info("Local backend seeded with %s", LOCAL_ADMIN_EMAIL)
    return store, book


def create_local_context(
    settings: Settings,
    store: MemoryDocumentStore,
    book: LocalAccountBook,
) -> AppContext:
    return create_context(settings, store, LocalAuthGateway(book))


def create_supabase_context(settings: Settings) -> AppContext:
    client = create_supabase_client(settings)
    auth = SupabaseAuthGateway(client, admin_client=create_admin_client(settings))
    return create_context(settings, SupabaseDocumentStore(client), auth)
