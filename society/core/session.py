import logging
from typing import Callable, List, Optional

from society.core.auth import AuthGateway, SessionListener, Unsubscribe
from society.schemas.auth import Session

logger = logging.getLogger(__name__)


class SessionProvider:
    """
    Holds the current session for one browser session.

    ``start()`` subscribes to the auth provider and loads whatever session it
    already has. Dependents register with ``subscribe`` and are told about
    every change, sign-out included.
    """

    def __init__(self, auth: AuthGateway):
        self.auth = auth
        self.session: Optional[Session] = None
        self.is_loading = True
        self._listeners: List[SessionListener] = []
        self._unsubscribe: Optional[Unsubscribe] = None

    @property
    def user_id(self) -> Optional[str]:
        return self.session.user_id if self.session else None

    def start(self) -> None:
        if self._unsubscribe is None:
            self._unsubscribe = self.auth.on_session_change(self._on_change)
        self._apply(self.auth.current_session())

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def sign_out(self) -> None:
        self.auth.sign_out()
        # providers normally notify; make sure the state is cleared either way
        if self.session is not None:
            self._apply(None)

    def close(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        self._listeners.clear()

    def _on_change(self, session: Optional[Session]) -> None:
        self._apply(session)

    def _apply(self, session: Optional[Session]) -> None:
        was_loading = self.is_loading
        changed = was_loading or _identity(session) != _identity(self.session)
        self.session = session
        self.is_loading = False
        if not changed:
            return
        logger.info("Session %s", f"for {session.user_id}" if session else "cleared")
        for listener in list(self._listeners):
            listener(session)


def _identity(session: Optional[Session]) -> Optional[str]:
    return session.user_id if session else None
