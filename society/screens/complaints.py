import logging
from typing import List, Optional, Union

from society.context import AppContext
from society.core.errors import SocietyError
from society.schemas.complaint import Complaint, ComplaintStatus
from society.screens.base import Screen
from society.store.base import Filter, OrderBy

logger = logging.getLogger(__name__)

NEWEST_FIRST = OrderBy("createdAt", descending=True)


class FileComplaintScreen(Screen):
    """
    Resident or committee member files a complaint about their flat.

    Name and flat number come from the filer's profile and are read-only on
    the form; only the description is typed in.
    """

    fetch_error = "Failed to fetch user data."

    def __init__(self, ctx: AppContext):
        super().__init__(ctx)
        self.member = "Anonymous"
        self.flat_no = "Not provided"
        self.filed: Optional[Complaint] = None

    def _fetch(self) -> None:
        profile = self.ctx.users.get(self.user_id)
        if profile is None:
            self.member, self.flat_no = "Anonymous", "Not provided"
            return
        self.member = profile.name or "Anonymous"
        self.flat_no = profile.flatNo or "Not provided"

    def submit(self, description: str) -> bool:
        self._begin_write()
        if not description or not description.strip():
            return self._invalid("Issue description is required.")

        complaint = Complaint(
            name=self.member,
            description=description.strip(),
            flatNo=self.flat_no,
            status=ComplaintStatus.PENDING,
            createdBy=self.user_id,
            createdAt=self.ctx.clock(),
        )
        try:
            self.filed = self.ctx.complaints.add(complaint)
        except SocietyError as exc:
            return self._failed(exc, "Failed to file complaint.")
        self.success = "Complaint filed successfully!"
        return True


class ComplaintsScreen(Screen):
    fetch_error = "Failed to fetch complaints. Please try again."

    def __init__(self, ctx: AppContext):
        super().__init__(ctx)
        self.items: List[Complaint] = []

    def _fetch(self) -> None:
        self.items = self.ctx.complaints.list(order_by=NEWEST_FIRST)

    def count_by_status(self):
        counts = {status: 0 for status in ComplaintStatus}
        for complaint in self.items:
            counts[complaint.status] += 1
        return counts


class ResidentComplaintsScreen(ComplaintsScreen):
    def _fetch(self) -> None:
        self.items = self.ctx.complaints.list(
            Filter.eq("createdBy", self.user_id), order_by=NEWEST_FIRST
        )


class MaintenanceScreen(ComplaintsScreen):
    """Open complaints queue: everything not yet Done, oldest first."""

    OPEN_STATUSES = (ComplaintStatus.PENDING.value, ComplaintStatus.IN_PROGRESS.value)

    def _fetch(self) -> None:
        self.items = self.ctx.complaints.list(
            Filter.in_("status", self.OPEN_STATUSES),
            order_by=OrderBy("createdAt"),
        )

    def mark_done(self, complaint_id: str) -> bool:
        self._begin_write()
        try:
            self.ctx.complaints.update(
                complaint_id, status=ComplaintStatus.DONE, updatedAt=self.ctx.clock()
            )
        except SocietyError as exc:
            return self._failed(exc, "Failed to update complaint status. Please try again.")
        self.items = [c for c in self.items if c.id != complaint_id]
        self.success = "Complaint marked as done."
        return True


class ComplaintDetailScreen(Screen):
    """
    Committee view of a single complaint.

    Status and reply are saved by separate actions; each write stamps
    ``updatedAt`` and only touches its own field.
    """

    fetch_error = "Failed to fetch complaint details. Please try again."
    not_found_error = "No complaint found for this ID."

    def __init__(self, ctx: AppContext, complaint_id: str):
        super().__init__(ctx)
        self.complaint_id = complaint_id
        self.complaint: Optional[Complaint] = None

    def _fetch(self) -> None:
        self.complaint = self.ctx.complaints.require(self.complaint_id)

    def update_status(self, status: Union[ComplaintStatus, str]) -> bool:
        self._begin_write()
        try:
            status = ComplaintStatus(status)
        except ValueError:
            return self._invalid("Please select a status before submitting.")

        try:
            self.ctx.complaints.update(
                self.complaint_id, status=status, updatedAt=self.ctx.clock()
            )
        except SocietyError as exc:
            return self._failed(exc, "Failed to update complaint status. Please try again.")

        if self.complaint is not None:
            self.complaint = self.complaint.model_copy(update={"status": status})
        self.success = f'Status updated to "{status.value}" successfully!'
        return True

    def reply(self, text: str) -> bool:
        self._begin_write()
        if not text or not text.strip():
            return self._invalid("Reply cannot be empty.")

        try:
            self.ctx.complaints.update(
                self.complaint_id, reply=text.strip(), updatedAt=self.ctx.clock()
            )
        except SocietyError as exc:
            return self._failed(exc, "Failed to add/update reply. Please try again.")

        if self.complaint is not None:
            self.complaint = self.complaint.model_copy(update={"reply": text.strip()})
        self.success = "Reply added/updated successfully!"
        return True
