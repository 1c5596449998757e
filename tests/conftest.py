"""Pytest configuration and fixtures for the society test suite."""

from datetime import datetime, timedelta, timezone

import pytest

from society.context import create_context
from society.core.auth import LocalAccountBook, LocalAuthGateway
from society.core.config import Settings
from society.schemas.user import Role, UserProfile
from society.store.memory import MemoryDocumentStore


class TickingClock:
    """Clock that moves one minute forward on every call, so createdAt values are ordered."""

    def __init__(self, start=datetime(2026, 3, 1, 9, 0, tzinfo=timezone.utc)):
        self.now = start

    def __call__(self):
        self.now += timedelta(minutes=1)
        return self.now


@pytest.fixture
def settings():
    return Settings(disable_auth=True)


@pytest.fixture
def clock():
    return TickingClock()


@pytest.fixture
def store():
    return MemoryDocumentStore()


@pytest.fixture
def book():
    return LocalAccountBook()


@pytest.fixture
def ctx(settings, store, book, clock):
    """Started context over an empty in-memory backend, nobody signed in."""
    context = create_context(settings, store, LocalAuthGateway(book), clock=clock)
    context.guard.start()
    yield context
    context.close()


@pytest.fixture
def make_member(ctx):
    """Create a login plus profile and return the new user's id."""

    def _make(name, role=Role.RESIDENT, flat_no="A-101", email=None, password="secret123"):
        email = email or f"{name.lower().replace(' ', '.')}@society.org"
        user_id = ctx.auth.create_user(email, password, {"name": name})
        ctx.users.put(
            user_id,
            UserProfile(
                name=name,
                flatNo=flat_no,
                contactNo="9876543210",
                email=email,
                role=role,
                createdAt=ctx.clock(),
            ),
        )
        return user_id

    return _make


@pytest.fixture
def sign_in(ctx):
    def _sign_in(email, password="secret123"):
        ctx.auth.sign_in_with_password(email, password)
        return ctx.user_id

    return _sign_in


@pytest.fixture
def committee(ctx, make_member, sign_in):
    """Signed-in committee member's user id."""
    make_member("Asha Rao", role=Role.COMMITTEE_MEMBER, flat_no="B-201")
    return sign_in("asha.rao@society.org")


@pytest.fixture
def resident(ctx, make_member, sign_in):
    """Signed-in resident's user id."""
    make_member("Ravi Kumar", role=Role.RESIDENT, flat_no="A-101")
    return sign_in("ravi.kumar@society.org")
