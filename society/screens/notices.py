import datetime as dt
import logging
from typing import List, Optional

from society.context import AppContext
from society.core.errors import SocietyError
from society.schemas.notice import Notice
from society.screens.base import Screen
from society.store.base import OrderBy

logger = logging.getLogger(__name__)

NEWEST_FIRST = OrderBy("createdAt", descending=True)


class NoticeBoardScreen(Screen):
    """Read-only list of notices, newest first."""

    fetch_error = "Failed to fetch notices. Please try again."

    def __init__(self, ctx: AppContext):
        super().__init__(ctx)
        self.items: List[Notice] = []

    def _fetch(self) -> None:
        self.items = self.ctx.notices.list(order_by=NEWEST_FIRST)


class EventsScreen(NoticeBoardScreen):
    def delete(self, notice_id: str) -> bool:
        self._begin_write()
        try:
            self.ctx.notices.delete(notice_id)
        except SocietyError as exc:
            return self._failed(exc, "Failed to delete notice. Please try again.")
        self.items = [n for n in self.items if n.id != notice_id]
        self.success = "Notice deleted."
        return True


class CreateNoticeScreen(Screen):
    fetch_error = "Failed to fetch user data. Please try again."

    def __init__(self, ctx: AppContext):
        super().__init__(ctx)
        self.author = ""
        self.created: Optional[Notice] = None

    def _fetch(self) -> None:
        profile = self.ctx.users.get(self.user_id)
        self.author = profile.name if profile else (self.ctx.session.email or "")

    def create(
        self,
        title: str,
        date: Optional[dt.date],
        time: Optional[dt.time],
        description: str,
    ) -> bool:
        self._begin_write()
        title = (title or "").strip()
        description = (description or "").strip()
        if not title or not description or date is None or time is None:
            return self._invalid("Please fill in the title, date, time and description.")

        notice = Notice(
            title=title,
            date=date,
            time=time,
            description=description,
            name=self.author or None,
            createdBy=self.user_id,
            createdAt=self.ctx.clock(),
        )
        try:
            self.created = self.ctx.notices.add(notice)
        except SocietyError as exc:
            return self._failed(exc, "An error occurred while creating the notice.")
        self.success = "Notice created successfully!"
        return True


class NoticeDetailScreen(Screen):
    fetch_error = "Failed to fetch notice details. Please try again."
    not_found_error = "Notice not found."

    def __init__(self, ctx: AppContext, notice_id: str):
        super().__init__(ctx)
        self.notice_id = notice_id
        self.notice: Optional[Notice] = None

    def _fetch(self) -> None:
        self.notice = self.ctx.notices.require(self.notice_id)
