import logging
from dataclasses import dataclass
from typing import Optional

from society.schemas.auth import Session
from society.schemas.user import Role, UserProfile
from society.store.repository import Repository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RoleResolution:
    role: Optional[Role]
    is_resolving: bool
    authenticated: bool


PENDING = RoleResolution(role=None, is_resolving=True, authenticated=False)
UNAUTHENTICATED = RoleResolution(role=None, is_resolving=False, authenticated=False)


class RoleResolver:
    """
    Turns a session into the acting role.

    Always ends in a concrete role for a signed-in user: a missing profile,
    a profile without a role, or a failed read all resolve to Resident.
    Nothing is cached; each call reads the profile again.
    """

    def __init__(self, profiles: Repository[UserProfile]):
        self.profiles = profiles
        self.state = PENDING

    def resolve(self, session: Optional[Session]) -> RoleResolution:
        if session is None:
            self.state = UNAUTHENTICATED
            return self.state

        self.state = RoleResolution(role=None, is_resolving=True, authenticated=True)
        role = self._fetch_role(session.user_id)
        self.state = RoleResolution(role=role, is_resolving=False, authenticated=True)
        return self.state

    def _fetch_role(self, user_id: str) -> Role:
        try:
            profile = self.profiles.get(user_id)
        except Exception as exc:
            logger.exception("Error fetching role for %s: %s", user_id, exc)
            return Role.RESIDENT

        if profile is None:
            logger.info("No profile for %s, defaulting to %s", user_id, Role.RESIDENT.value)
            return Role.RESIDENT
        return profile.effective_role
