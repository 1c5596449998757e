from society.schemas.auth import RegisterRequest, Session
from society.schemas.bill import Bill, BillStatus
from society.schemas.complaint import Complaint, ComplaintStatus
from society.schemas.notice import Notice
from society.schemas.user import Role, UserProfile

__all__ = [
    "Bill",
    "BillStatus",
    "Complaint",
    "ComplaintStatus",
    "Notice",
    "RegisterRequest",
    "Role",
    "Session",
    "UserProfile",
]
