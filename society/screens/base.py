import logging
from typing import Optional

from society.context import AppContext
from society.core.errors import AuthError, NotFoundError, SocietyError

logger = logging.getLogger(__name__)


class Screen:
    """
    Local state of one page view.

    ``load()`` runs the page's fetch once and turns any failure into
    ``error``. Write methods return True on success and leave a message in
    ``error`` or ``success`` for the page to show. Nothing is retried.
    """

    fetch_error = "Failed to fetch data. Please try again."
    not_found_error = "Not found."

    def __init__(self, ctx: AppContext):
        self.ctx = ctx
        self.error: Optional[str] = None
        self.success: Optional[str] = None
        self.is_loading = False
        self.loaded = False

    @property
    def user_id(self) -> str:
        if not self.ctx.user_id:
            raise AuthError("You are not logged in.")
        return self.ctx.user_id

    def load(self) -> "Screen":
        self.is_loading = True
        self.error = None
        try:
            self._fetch()
        except NotFoundError as exc:
            logger.info("%s: %s", type(self).__name__, exc)
            self.error = self.not_found_error
        except SocietyError as exc:
            logger.error("%s fetch failed: %s", type(self).__name__, exc)
            self.error = self.fetch_error
        finally:
            self.is_loading = False
            self.loaded = True
        return self

    def _fetch(self) -> None:
        raise NotImplementedError

    def _begin_write(self) -> None:
        self.error = None
        self.success = None

    def _invalid(self, message: str) -> bool:
        self.error = message
        return False

    def _failed(self, exc: Exception, message: str) -> bool:
        logger.error("%s write failed: %s", type(self).__name__, exc)
        self.error = message
        return False
