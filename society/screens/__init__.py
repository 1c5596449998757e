from society.screens.account import LoginScreen, RegisterScreen
from society.screens.billing import BillingScreen, CreateBillScreen, ResidentBillingScreen
from society.screens.complaints import (
    ComplaintDetailScreen,
    ComplaintsScreen,
    FileComplaintScreen,
    MaintenanceScreen,
    ResidentComplaintsScreen,
)
from society.screens.dashboard import CommitteeDashboard, ResidentDashboard
from society.screens.details import ResourceDetailScreen
from society.screens.members import MembersScreen, ResidentMembersScreen
from society.screens.notices import (
    CreateNoticeScreen,
    EventsScreen,
    NoticeBoardScreen,
    NoticeDetailScreen,
)
from society.screens.profile import ProfileScreen

__all__ = [
    "BillingScreen",
    "CommitteeDashboard",
    "ComplaintDetailScreen",
    "ComplaintsScreen",
    "CreateBillScreen",
    "CreateNoticeScreen",
    "EventsScreen",
    "FileComplaintScreen",
    "LoginScreen",
    "MaintenanceScreen",
    "MembersScreen",
    "NoticeBoardScreen",
    "NoticeDetailScreen",
    "ProfileScreen",
    "RegisterScreen",
    "ResidentBillingScreen",
    "ResidentComplaintsScreen",
    "ResidentDashboard",
    "ResidentMembersScreen",
    "ResourceDetailScreen",
]
