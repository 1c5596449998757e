import logging
import secrets
import threading
import time
import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from passlib.context import CryptContext

from society.core.errors import AuthError
from society.schemas.auth import Session

logger = logging.getLogger(__name__)

SessionListener = Callable[[Optional[Session]], None]
Unsubscribe = Callable[[], None]


@dataclass
class SignUpResult:
    user_id: str
    # None when the provider requires e-mail confirmation before the first sign-in
    session: Optional[Session] = None


class AuthGateway(ABC):
    """Operations the app needs from the managed authentication provider."""

    @abstractmethod
    def sign_in_with_password(self, email: str, password: str) -> Session:
        ...

    @abstractmethod
    def send_phone_otp(self, phone: str) -> None:
        ...

    @abstractmethod
    def verify_phone_otp(self, phone: str, code: str) -> Session:
        ...

    @abstractmethod
    def sign_up(self, email: str, password: str, metadata: Dict[str, str]) -> SignUpResult:
        """Create an account for the person filling the form and sign them in when allowed."""

    @abstractmethod
    def create_user(self, email: str, password: str, metadata: Dict[str, str]) -> str:
        """Create an account on someone else's behalf without touching the current session."""

    @abstractmethod
    def sign_out(self) -> None:
        ...

    @abstractmethod
    def current_session(self) -> Optional[Session]:
        ...

    @abstractmethod
    def on_session_change(self, listener: SessionListener) -> Unsubscribe:
        ...


# ============================================
# LOCAL MODE (DISABLE_AUTH=true)
# ============================================

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")

LOCAL_ADMIN_EMAIL = "admin@local.dev"
LOCAL_ADMIN_PASSWORD = "admin123"


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    if not hashed_password:
        return False
    return pwd_context.verify(plain_password, hashed_password)


@dataclass
class LocalAccount:
    user_id: str
    email: Optional[str] = None
    phone: Optional[str] = None
    password_hash: Optional[str] = None
    metadata: Dict[str, str] = field(default_factory=dict)


class LocalAccountBook:
    """
    Accounts and outstanding phone codes, shared by every local browser session.

    Every read and write holds ``_lock``; codes expire after
    ``CODE_TTL_SECONDS`` and are consumed by the first successful check.
    """

    CODE_TTL_SECONDS = 600

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self.accounts: Dict[str, LocalAccount] = {}
        self.pending_codes: Dict[str, str] = {}
        self._code_expiry: Dict[str, float] = {}
        self._clock = clock
        self._lock = threading.Lock()

    def _find_by_email(self, email: str) -> Optional[LocalAccount]:
        email = email.strip().lower()
        for account in self.accounts.values():
            if account.email == email:
                return account
        return None

    def find_by_email(self, email: str) -> Optional[LocalAccount]:
        with self._lock:
            return self._find_by_email(email)

    def create(self, email: str, password: str, metadata: Dict[str, str]) -> LocalAccount:
        if len(password) < 6:
            raise AuthError("Password should be at least 6 characters")
        password_hash = hash_password(password)
        with self._lock:
            if self._find_by_email(email):
                raise AuthError("User already registered")
            account = LocalAccount(
                user_id=str(uuid.uuid4()),
                email=email.strip().lower(),
                password_hash=password_hash,
                metadata=dict(metadata),
            )
            self.accounts[account.user_id] = account
        return account

    def issue_code(self, phone: str) -> str:
        code = f"{secrets.randbelow(10 ** 6):06d}"
        now = self._clock()
        with self._lock:
            for expired in [p for p, at in self._code_expiry.items() if at <= now]:
                self.pending_codes.pop(expired, None)
                self._code_expiry.pop(expired, None)
            self.pending_codes[phone] = code
            self._code_expiry[phone] = now + self.CODE_TTL_SECONDS
        return code

    def redeem_code(self, phone: str, code: str) -> LocalAccount:
        """Consume a valid code and return the phone's account, creating it on first sign-in."""
        with self._lock:
            expected = self.pending_codes.get(phone)
            expires_at = self._code_expiry.get(phone, 0)
            if (
                not expected
                or expires_at <= self._clock()
                or not secrets.compare_digest(expected, code.strip())
            ):
                raise AuthError("Invalid verification code")
            self.pending_codes.pop(phone, None)
            self._code_expiry.pop(phone, None)

            for account in self.accounts.values():
                if account.phone == phone:
                    return account
            account = LocalAccount(user_id=str(uuid.uuid4()), phone=phone)
            self.accounts[account.user_id] = account
            return account


class LocalAuthGateway(AuthGateway):
    """
    Auth provider for development without Supabase.

    Each browser session gets its own gateway (and so its own session) over a
    shared account book. Phone codes are written to the log instead of being
    sent by SMS.
    """

    def __init__(self, book: Optional[LocalAccountBook] = None):
        self.book = book if book is not None else LocalAccountBook()
        self._session: Optional[Session] = None
        self._listeners: List[SessionListener] = []

    def _start_session(self, account: LocalAccount) -> Session:
        self._session = Session(
            user_id=account.user_id,
            email=account.email,
            phone=account.phone,
            access_token=secrets.token_urlsafe(24),
        )
        self._notify()
        return self._session

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self._session)

    def sign_in_with_password(self, email: str, password: str) -> Session:
        account = self.book.find_by_email(email)
        if not account or not verify_password(password, account.password_hash):
            raise AuthError("Invalid login credentials")
        return self._start_session(account)

    def send_phone_otp(self, phone: str) -> None:
        code = self.book.issue_code(phone)
        logger.info("[OTP] Verification code for %s is %s", phone, code)

    def verify_phone_otp(self, phone: str, code: str) -> Session:
        return self._start_session(self.book.redeem_code(phone, code))

    def sign_up(self, email: str, password: str, metadata: Dict[str, str]) -> SignUpResult:
        account = self.book.create(email, password, metadata)
        return SignUpResult(user_id=account.user_id, session=self._start_session(account))

    def create_user(self, email: str, password: str, metadata: Dict[str, str]) -> str:
        return self.book.create(email, password, metadata).user_id

    def sign_out(self) -> None:
        self._session = None
        self._notify()

    def current_session(self) -> Optional[Session]:
        return self._session

    def on_session_change(self, listener: SessionListener) -> Unsubscribe:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe
