import datetime as dt
import logging
from typing import List, Optional, Union

from society.context import AppContext
from society.core.errors import SocietyError
from society.schemas.bill import Bill, BillStatus
from society.schemas.user import UserProfile
from society.screens.base import Screen
from society.store.base import Filter, OrderBy

logger = logging.getLogger(__name__)

BY_DUE_DATE = OrderBy("dueDate")


def unpaid_total(bills: List[Bill]) -> float:
    return sum(bill.amount for bill in bills if bill.is_unpaid)


class ResidentBillingScreen(Screen):
    """Bills issued to the signed-in member."""

    fetch_error = "Failed to fetch bills. Please try again."

    def __init__(self, ctx: AppContext):
        super().__init__(ctx)
        self.items: List[Bill] = []

    def _fetch(self) -> None:
        self.items = self.ctx.bills.list(
            Filter.eq("memberId", self.user_id), order_by=BY_DUE_DATE
        )

    @property
    def unpaid_total(self) -> float:
        return unpaid_total(self.items)


class BillingScreen(ResidentBillingScreen):
    """All bills, with the committee's status action."""

    def _fetch(self) -> None:
        self.items = self.ctx.bills.list(order_by=BY_DUE_DATE)

    def update_status(self, bill_id: str, status: Union[BillStatus, str]) -> bool:
        self._begin_write()
        try:
            status = BillStatus(status)
        except ValueError:
            return self._invalid("Please select a valid status.")

        try:
            self.ctx.bills.update(bill_id, status=status)
        except SocietyError as exc:
            return self._failed(exc, "Failed to update bill status. Please try again.")

        self.items = [
            bill.model_copy(update={"status": status}) if bill.id == bill_id else bill
            for bill in self.items
        ]
        self.success = f"Bill marked as {status.value}."
        return True


class CreateBillScreen(Screen):
    fetch_error = "Failed to fetch members. Please try again."

    def __init__(self, ctx: AppContext):
        super().__init__(ctx)
        self.members: List[UserProfile] = []
        self.created: Optional[Bill] = None

    def _fetch(self) -> None:
        self.members = self.ctx.users.list(order_by=OrderBy("name"))

    def create(
        self,
        member_id: Optional[str],
        amount: Optional[float],
        due_date: Optional[dt.date],
    ) -> bool:
        self._begin_write()
        member = next((m for m in self.members if m.id == member_id), None)
        if member is None:
            return self._invalid("Please select a member.")
        if amount is None or amount <= 0:
            return self._invalid("Amount must be greater than zero.")
        if due_date is None:
            return self._invalid("Please choose a due date.")

        bill = Bill(
            memberName=member.name,
            memberId=member.id,
            amount=float(amount),
            dueDate=due_date,
            status=BillStatus.PENDING,
            createdAt=self.ctx.clock(),
        )
        try:
            self.created = self.ctx.bills.add(bill)
        except SocietyError as exc:
            return self._failed(exc, "Failed to create bill. Please try again.")
        self.success = f"Bill of {bill.amount:.2f} created for {member.name}."
        return True
