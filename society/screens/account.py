import logging
from typing import Optional, Union

from pydantic import ValidationError

from society.context import AppContext
from society.core.errors import AuthError, SocietyError
from society.schemas.auth import RegisterRequest
from society.schemas.user import Role, UserProfile
from society.screens.base import Screen

logger = logging.getLogger(__name__)


def friendly_auth_message(error_msg: str) -> str:
    lowered = error_msg.lower()
    if "invalid login credentials" in lowered or "invalid email or password" in lowered:
        return "Invalid email or password. Please check your credentials."
    if "email not confirmed" in lowered:
        return "Please verify your email address before logging in. Check your inbox for the confirmation email."
    if "too many requests" in lowered or "rate limit" in lowered:
        return "Too many login attempts. Please wait a few minutes and try again."
    if "already registered" in lowered or "already exists" in lowered:
        return "An account with this email already exists. Please log in instead."
    return error_msg


def registration_error(exc: ValidationError) -> str:
    fields = {str(err["loc"][0]) for err in exc.errors() if err["loc"]}
    if fields & {"name", "flatNo", "contactNo"}:
        return "Please fill in all required fields."
    if "email" in fields:
        return "Please enter a valid email address."
    if "password" in fields:
        return "Password must be at least 6 characters long."
    return "Please choose a role."


def build_registration(
    name: str,
    flat_no: str,
    contact_no: str,
    email: str,
    password: str,
    role: Union[Role, str],
) -> RegisterRequest:
    return RegisterRequest(
        name=(name or "").strip(),
        flatNo=(flat_no or "").strip(),
        contactNo=(contact_no or "").strip(),
        email=(email or "").strip(),
        password=password or "",
        role=role,
    )


def save_profile(ctx: AppContext, user_id: str, request: RegisterRequest) -> UserProfile:
    return ctx.users.put(
        user_id,
        UserProfile(
            name=request.name,
            flatNo=request.flatNo,
            contactNo=request.contactNo,
            email=request.email,
            role=request.role,
            createdAt=ctx.clock(),
        ),
    )


class LoginScreen(Screen):
    """Email/password sign-in, plus sign-in with a one-time code sent by SMS."""

    def __init__(self, ctx: AppContext):
        super().__init__(ctx)
        self.phone: Optional[str] = None
        self.code_sent = False

    def _fetch(self) -> None:
        pass

    @property
    def redirect_to(self) -> Optional[str]:
        if not self.ctx.guard.authenticated:
            return None
        return self.ctx.guard.home_path

    def sign_in(self, email: str, password: str) -> bool:
        self._begin_write()
        if not email or not email.strip() or not password:
            return self._invalid("Please enter both email and password")
        try:
            self.ctx.auth.sign_in_with_password(email.strip(), password)
        except AuthError as exc:
            logger.info("Sign in rejected for %s: %s", email, exc)
            return self._invalid(friendly_auth_message(str(exc)))
        self.success = "Logged in successfully"
        return True

    def format_phone(self, phone_number: str) -> str:
        phone_number = phone_number.strip().replace(" ", "")
        if phone_number.startswith("+"):
            return phone_number
        return f"{self.ctx.settings.phone_country_code}{phone_number}"

    def send_code(self, phone_number: str) -> bool:
        self._begin_write()
        if not phone_number or not phone_number.strip():
            return self._invalid("Please enter a phone number.")
        phone = self.format_phone(phone_number)
        try:
            self.ctx.auth.send_phone_otp(phone)
        except AuthError as exc:
            return self._failed(
                exc, "Failed to send verification code. Please check the phone number and try again."
            )
        self.phone = phone
        self.code_sent = True
        self.success = f"Verification code sent to {phone}"
        return True

    def verify_code(self, code: str) -> bool:
        self._begin_write()
        if not self.code_sent or not self.phone:
            return self._invalid("Please request a verification code first.")
        if not code or not code.strip():
            return self._invalid("Please enter the verification code.")
        try:
            self.ctx.auth.verify_phone_otp(self.phone, code)
        except AuthError as exc:
            return self._failed(exc, "Invalid verification code. Please try again.")
        self.code_sent = False
        self.success = "Logged in successfully"
        return True


class RegisterScreen(Screen):
    def __init__(self, ctx: AppContext):
        super().__init__(ctx)
        self.needs_confirmation = False

    def _fetch(self) -> None:
        pass

    def register(
        self,
        name: str,
        flat_no: str,
        contact_no: str,
        email: str,
        password: str,
        role: Union[Role, str] = Role.RESIDENT,
        confirm_password: Optional[str] = None,
    ) -> bool:
        self._begin_write()
        if confirm_password is not None and password != confirm_password:
            return self._invalid("Passwords do not match. Please try again.")
        try:
            request = build_registration(name, flat_no, contact_no, email, password, role)
        except ValidationError as exc:
            return self._invalid(registration_error(exc))

        try:
            result = self.ctx.auth.sign_up(
                request.email,
                request.password,
                {"name": request.name, "role": request.role.value},
            )
        except AuthError as exc:
            logger.info("Sign up rejected for %s: %s", request.email, exc)
            return self._invalid(friendly_auth_message(str(exc)))

        try:
            save_profile(self.ctx, result.user_id, request)
        except SocietyError as exc:
            return self._failed(exc, "Account created but the profile could not be saved.")

        if result.session is not None:
            # the session started before its profile existed
            self.ctx.guard.refresh()

        self.needs_confirmation = result.session is None
        if self.needs_confirmation:
            self.success = "User registered successfully! Please check your email to verify your account before logging in."
        else:
            self.success = "User registered successfully!"
        return True
