import logging
from typing import Optional, Union

from society.context import AppContext
from society.core.errors import NotFoundError
from society.schemas.complaint import Complaint
from society.schemas.notice import Notice
from society.screens.base import Screen

logger = logging.getLogger(__name__)


class ResourceDetailScreen(Screen):
    """
    Read-only view of a complaint or a notice by id.

    The id is looked up in complaints first, then notices. The creator's
    name comes from their profile, "Unknown" when it cannot be found.
    """

    fetch_error = "Failed to fetch resource details. Please try again."
    not_found_error = "Resource not found."

    def __init__(self, ctx: AppContext, resource_id: Optional[str]):
        super().__init__(ctx)
        self.resource_id = resource_id
        self.resource: Optional[Union[Complaint, Notice]] = None
        self.resource_type: Optional[str] = None
        self.creator_name = "Unknown"

    def load(self) -> "ResourceDetailScreen":
        if not self.resource_id or not isinstance(self.resource_id, str):
            self.error = "Invalid resource ID."
            self.loaded = True
            return self
        return super().load()

    def _fetch(self) -> None:
        complaint = self.ctx.complaints.get(self.resource_id)
        if complaint is not None:
            self.resource, self.resource_type = complaint, "complaint"
        else:
            notice = self.ctx.notices.get(self.resource_id)
            if notice is None:
                raise NotFoundError("complaints/notices", self.resource_id)
            self.resource, self.resource_type = notice, "notice"

        self.creator_name = self._creator_name(self.resource.createdBy)

    def _creator_name(self, user_id: Optional[str]) -> str:
        if not user_id:
            return "Unknown"
        profile = self.ctx.users.get(user_id)
        if profile is None:
            logger.info("No profile for creator %s", user_id)
            return "Unknown"
        return profile.name or "Unknown"
