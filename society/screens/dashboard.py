import logging
from typing import Dict, List, Optional

from society.context import AppContext
from society.schemas.bill import UNPAID_STATUSES
from society.schemas.complaint import ComplaintStatus
from society.schemas.user import UserProfile
from society.screens.base import Screen
from society.store.base import Filter, OrderBy

logger = logging.getLogger(__name__)

NEWEST_FIRST = OrderBy("createdAt", descending=True)
UNPAID = Filter.in_("status", [s.value for s in UNPAID_STATUSES])


class CommitteeDashboard(Screen):
    """Society-wide summary for the committee home page."""

    fetch_error = "Failed to load the dashboard. Please try again."

    def __init__(self, ctx: AppContext):
        super().__init__(ctx)
        self.pending_complaints = 0
        self.complaints_by_status: Dict[str, int] = {}
        self.unpaid_bills = 0.0
        self.upcoming_event: Optional[str] = None
        self.past_notices: List[str] = []

    def _fetch(self) -> None:
        complaints = self.ctx.complaints.list()
        self.complaints_by_status = {status.value: 0 for status in ComplaintStatus}
        for complaint in complaints:
            self.complaints_by_status[complaint.status.value] += 1
        self.pending_complaints = self.complaints_by_status[ComplaintStatus.PENDING.value]

        self.unpaid_bills = sum(bill.amount for bill in self.ctx.bills.list(UNPAID))

        notices = self.ctx.notices.list(order_by=NEWEST_FIRST)
        if notices:
            self.upcoming_event = notices[0].headline
            self.past_notices = [notice.headline for notice in notices[1:]]
        else:
            self.upcoming_event = None
            self.past_notices = []


class ResidentDashboard(Screen):
    fetch_error = "Failed to load your dashboard. Please try again."

    def __init__(self, ctx: AppContext):
        super().__init__(ctx)
        self.profile: Optional[UserProfile] = None
        self.open_complaints = 0
        self.unpaid_bills = 0.0
        self.latest_notice: Optional[str] = None

    @property
    def greeting(self) -> str:
        if self.profile:
            return f"Welcome, {self.profile.name}"
        return "Welcome"

    def _fetch(self) -> None:
        self.profile = self.ctx.users.get(self.user_id)

        mine = self.ctx.complaints.list(Filter.eq("createdBy", self.user_id))
        self.open_complaints = len([c for c in mine if c.status != ComplaintStatus.DONE])

        bills = self.ctx.bills.list(Filter.eq("memberId", self.user_id))
        self.unpaid_bills = sum(bill.amount for bill in bills if bill.is_unpaid)

        notices = self.ctx.notices.list(order_by=NEWEST_FIRST)
        self.latest_notice = notices[0].headline if notices else None
