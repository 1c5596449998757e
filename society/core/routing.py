"""
Declarative route table and the guard that evaluates it.

Every screen is listed once with a permission tag. The guard owns the
LOADING_SESSION -> LOADING_ROLE -> READY state machine and answers, for any
path, whether it can be shown or where to redirect instead.
"""
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Sequence

from society.core.roles import RoleResolver
from society.core.session import SessionProvider
from society.schemas.auth import Session
from society.schemas.user import Role

logger = logging.getLogger(__name__)


class Access(str, Enum):
    PUBLIC = "public"
    AUTHENTICATED = "authenticated"
    COMMITTEE = "committee"
    RESIDENT = "resident"


ROLE_ACCESS = {
    Role.COMMITTEE_MEMBER: Access.COMMITTEE,
    Role.RESIDENT: Access.RESIDENT,
}


@dataclass(frozen=True)
class Route:
    path: str
    name: str
    title: str
    access: Access
    icon: str = ""

    @property
    def segments(self) -> List[str]:
        return [s for s in self.path.split("/") if s]

    @property
    def has_params(self) -> bool:
        return any(s.startswith(":") for s in self.segments)

    def match(self, path: str) -> Optional[Dict[str, str]]:
        wanted = [s for s in path.split("/") if s]
        if len(wanted) != len(self.segments):
            return None
        params = {}
        for pattern, actual in zip(self.segments, wanted):
            if pattern.startswith(":"):
                params[pattern[1:]] = actual
            elif pattern != actual:
                return None
        return params


ROUTES: Sequence[Route] = (
    # Public
    Route("/login", "login", "Login", Access.PUBLIC, "🔐"),
    Route("/register", "register", "Register", Access.PUBLIC, "📝"),
    # Any signed-in user
    Route("/view-details/:id", "view_details", "Details", Access.AUTHENTICATED, "🔎"),
    Route("/file-complaint", "file_complaint", "File Complaint", Access.AUTHENTICATED, "✍️"),
    # Committee members
    Route("/home", "home", "Home", Access.COMMITTEE, "🏠"),
    Route("/maintenance", "maintenance", "Maintenance", Access.COMMITTEE, "🛠️"),
    Route("/members", "members", "Members", Access.COMMITTEE, "👥"),
    Route("/billing", "billing", "Billing", Access.COMMITTEE, "💰"),
    Route("/create-new-bill", "create_new_bill", "Create New Bill", Access.COMMITTEE, "🧾"),
    Route("/events", "events", "Events", Access.COMMITTEE, "📅"),
    Route("/create-notice", "create_notice", "Create Notice", Access.COMMITTEE, "📢"),
    Route("/notice/:noticeId", "notice_details", "Notice", Access.COMMITTEE, "📄"),
    Route("/complaints", "complaints", "Complaints", Access.COMMITTEE, "📋"),
    Route("/complaints/:id", "complaint_details", "Complaint", Access.COMMITTEE, "🗂️"),
    Route("/profile", "profile", "Profile", Access.COMMITTEE, "👤"),
    # Residents
    Route("/resident-dashboard", "resident_dashboard", "Dashboard", Access.RESIDENT, "🏠"),
    Route("/resident-billing", "resident_billing", "My Bills", Access.RESIDENT, "💰"),
    Route("/resident-complaints", "resident_complaints", "My Complaints", Access.RESIDENT, "📋"),
    Route("/resident-notice", "resident_notice", "Notices", Access.RESIDENT, "📢"),
    Route("/resident-members", "resident_members", "Members", Access.RESIDENT, "👥"),
    Route("/resident-profile", "resident_profile", "Profile", Access.RESIDENT, "👤"),
)

LOGIN_PATH = "/login"

HOME_BY_ROLE = {
    Role.COMMITTEE_MEMBER: "/home",
    Role.RESIDENT: "/resident-dashboard",
}


def normalize_path(path: str) -> str:
    path = (path or "/").split("?", 1)[0].split("#", 1)[0].strip()
    if not path.startswith("/"):
        path = "/" + path
    if len(path) > 1:
        path = path.rstrip("/") or "/"
    return path


class GuardState(str, Enum):
    LOADING_SESSION = "loading_session"
    LOADING_ROLE = "loading_role"
    READY = "ready"


@dataclass(frozen=True)
class RouteDecision:
    route: Optional[Route] = None
    params: Dict[str, str] = field(default_factory=dict)
    redirect_to: Optional[str] = None
    pending: bool = False

    @property
    def allowed(self) -> bool:
        return self.route is not None and self.redirect_to is None and not self.pending


class RouteGuard:
    def __init__(
        self,
        sessions: SessionProvider,
        resolver: RoleResolver,
        routes: Sequence[Route] = ROUTES,
    ):
        self.sessions = sessions
        self.resolver = resolver
        self.routes = tuple(routes)
        self.state = GuardState.LOADING_SESSION
        self.role: Optional[Role] = None
        self._unsubscribe = sessions.subscribe(self._on_session)

    # -------------------------
    # State machine
    # -------------------------
    def start(self) -> None:
        """Load the session; the subscription drives the rest of the transitions."""
        self.sessions.start()

    def _on_session(self, session: Optional[Session]) -> None:
        self.state = GuardState.LOADING_ROLE
        self.role = None
        try:
            self.role = self.resolver.resolve(session).role
        finally:
            self.state = GuardState.READY
        logger.info(
            "Route guard ready: %s",
            self.role.value if self.role else "unauthenticated",
        )

    def refresh(self) -> None:
        """Resolve the role again for the current session."""
        self._on_session(self.sessions.session)

    @property
    def is_ready(self) -> bool:
        return self.state == GuardState.READY

    @property
    def authenticated(self) -> bool:
        return self.is_ready and self.role is not None

    @property
    def home_path(self) -> str:
        if not self.authenticated:
            return LOGIN_PATH
        return HOME_BY_ROLE[self.role]

    # -------------------------
    # Decisions
    # -------------------------
    def route_for(self, name: str) -> Route:
        for route in self.routes:
            if route.name == name:
                return route
        raise KeyError(name)

    def match(self, path: str):
        for route in self.routes:
            params = route.match(path)
            if params is not None:
                return route, params
        return None, {}

    def permits(self, route: Route) -> bool:
        if route.access == Access.PUBLIC:
            return True
        if not self.authenticated:
            return False
        if route.access == Access.AUTHENTICATED:
            return True
        return ROLE_ACCESS[self.role] == route.access

    def resolve(self, path: str) -> RouteDecision:
        if not self.is_ready:
            return RouteDecision(pending=True)

        path = normalize_path(path)
        if path == "/":
            return RouteDecision(redirect_to=self.home_path)

        route, params = self.match(path)
        if route is not None and route.access == Access.PUBLIC:
            return RouteDecision(route=route, params=params)

        if not self.authenticated:
            return RouteDecision(redirect_to=LOGIN_PATH)

        if route is None or not self.permits(route):
            return RouteDecision(redirect_to=self.home_path)

        return RouteDecision(route=route, params=params)

    def reachable_routes(self) -> List[Route]:
        if not self.is_ready:
            return []
        return [route for route in self.routes if self.permits(route)]

    def close(self) -> None:
        self._unsubscribe()
