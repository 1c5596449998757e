import logging
from typing import Dict, Optional

from supabase import AuthError as ProviderAuthError
from supabase import Client, create_client

from society.core.auth import AuthGateway, SessionListener, SignUpResult, Unsubscribe
from society.core.config import Settings
from society.core.errors import AuthError
from society.schemas.auth import Session

logger = logging.getLogger(__name__)


def create_supabase_client(settings: Settings) -> Client:
    settings.require_supabase()
    return create_client(settings.supabase_url, settings.supabase_anon_key)


def create_admin_client(settings: Settings) -> Optional[Client]:
    """Service-role client, only needed by the committee's "add member" flow."""
    if not settings.supabase_url or not settings.supabase_service_role_key:
        return None
    return create_client(settings.supabase_url, settings.supabase_service_role_key)


def _to_session(provider_session) -> Optional[Session]:
    if not provider_session or not provider_session.user:
        return None
    user = provider_session.user
    return Session(
        user_id=str(user.id),
        email=user.email,
        phone=user.phone or None,
        access_token=provider_session.access_token,
    )


class SupabaseAuthGateway(AuthGateway):
    def __init__(self, client: Client, admin_client: Optional[Client] = None):
        self._client = client
        self._admin_client = admin_client

    def sign_in_with_password(self, email: str, password: str) -> Session:
        try:
            res = self._client.auth.sign_in_with_password({
                "email": email,
                "password": password,
            })
        except ProviderAuthError as exc:
            raise AuthError(exc.message) from exc

        session = _to_session(res.session)
        if session is None:
            raise AuthError("Sign in did not return a session")
        return session

    def send_phone_otp(self, phone: str) -> None:
        try:
            self._client.auth.sign_in_with_otp({"phone": phone})
        except ProviderAuthError as exc:
            raise AuthError(exc.message) from exc

    def verify_phone_otp(self, phone: str, code: str) -> Session:
        try:
            res = self._client.auth.verify_otp({
                "phone": phone,
                "token": code.strip(),
                "type": "sms",
            })
        except ProviderAuthError as exc:
            raise AuthError(exc.message) from exc

        session = _to_session(res.session)
        if session is None:
            raise AuthError("Invalid verification code")
        return session

    def sign_up(self, email: str, password: str, metadata: Dict[str, str]) -> SignUpResult:
        try:
            res = self._client.auth.sign_up({
                "email": email,
                "password": password,
                "options": {"data": metadata},
            })
        except ProviderAuthError as exc:
            raise AuthError(exc.message) from exc

        if not res.user:
            raise AuthError("Sign up failed: No user created")
        return SignUpResult(user_id=str(res.user.id), session=_to_session(res.session))

    def create_user(self, email: str, password: str, metadata: Dict[str, str]) -> str:
        if self._admin_client is None:
            raise AuthError("Adding members requires SUPABASE_SERVICE_ROLE_KEY to be set")
        try:
            res = self._admin_client.auth.admin.create_user({
                "email": email,
                "password": password,
                "email_confirm": True,
                "user_metadata": metadata,
            })
        except ProviderAuthError as exc:
            raise AuthError(exc.message) from exc
        return str(res.user.id)

    def sign_out(self) -> None:
        try:
            self._client.auth.sign_out()
        except ProviderAuthError as exc:
            # the local session is cleared by the SDK even when revocation fails
            logger.warning("Supabase sign out failed: %s", exc.message)

    def current_session(self) -> Optional[Session]:
        try:
            return _to_session(self._client.auth.get_session())
        except ProviderAuthError as exc:
            logger.warning("Could not restore Supabase session: %s", exc.message)
            return None

    def on_session_change(self, listener: SessionListener) -> Unsubscribe:
        def _callback(event, provider_session) -> None:
            logger.debug("Supabase auth event %s", event)
            listener(_to_session(provider_session))

        subscription = self._client.auth.on_auth_state_change(_callback)
        return subscription.unsubscribe
