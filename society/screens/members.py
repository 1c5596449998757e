import logging
from typing import List, Union

from pydantic import ValidationError

from society.context import AppContext
from society.core.errors import AuthError, SocietyError
from society.schemas.user import Role, UserProfile
from society.screens.account import (
    build_registration,
    friendly_auth_message,
    registration_error,
    save_profile,
)
from society.screens.base import Screen
from society.store.base import OrderBy

logger = logging.getLogger(__name__)

BY_NAME = OrderBy("name")


class ResidentMembersScreen(Screen):
    """Member directory, ordered by name."""

    fetch_error = "Failed to fetch members. Please try again."

    def __init__(self, ctx: AppContext):
        super().__init__(ctx)
        self.items: List[UserProfile] = []

    def _fetch(self) -> None:
        self.items = self.ctx.users.list(order_by=BY_NAME)


class MembersScreen(ResidentMembersScreen):
    def delete(self, member_id: str) -> bool:
        self._begin_write()
        if member_id == self.user_id:
            return self._invalid("You cannot remove your own account.")
        try:
            self.ctx.users.delete(member_id)
        except SocietyError as exc:
            return self._failed(exc, "Failed to delete member. Please try again.")
        self.items = [m for m in self.items if m.id != member_id]
        self.success = "Member removed."
        return True

    def add_member(
        self,
        name: str,
        flat_no: str,
        contact_no: str,
        email: str,
        password: str,
        role: Union[Role, str] = Role.RESIDENT,
    ) -> bool:
        """Create the member's login and profile without changing who is signed in."""
        self._begin_write()
        try:
            request = build_registration(name, flat_no, contact_no, email, password, role)
        except ValidationError as exc:
            return self._invalid(registration_error(exc))

        try:
            user_id = self.ctx.auth.create_user(
                request.email,
                request.password,
                {"name": request.name, "role": request.role.value},
            )
        except AuthError as exc:
            return self._invalid(friendly_auth_message(str(exc)))

        try:
            profile = save_profile(self.ctx, user_id, request)
        except SocietyError as exc:
            return self._failed(exc, "Account created but the profile could not be saved.")

        self.items = sorted([*self.items, profile], key=lambda m: m.name)
        self.success = f"{profile.name} added to the society."
        return True
