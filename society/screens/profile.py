from typing import Optional

from society.context import AppContext
from society.schemas.user import UserProfile
from society.screens.base import Screen


class ProfileScreen(Screen):
    fetch_error = "Failed to fetch profile data. Please try again."
    not_found_error = "User profile not found."

    def __init__(self, ctx: AppContext):
        super().__init__(ctx)
        self.profile: Optional[UserProfile] = None

    def _fetch(self) -> None:
        self.profile = self.ctx.users.require(self.user_id)

    @property
    def role_label(self) -> str:
        if self.profile is None:
            return ""
        return self.profile.effective_role.value
