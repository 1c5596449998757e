"""Tests for turning a session into the acting role."""

from unittest.mock import MagicMock

import pytest

from society.core.errors import StoreError
from society.core.roles import UNAUTHENTICATED, RoleResolver
from society.schemas.auth import Session
from society.schemas.user import Role, UserProfile
from society.store import MemoryDocumentStore, Repository

SESSION = Session(user_id="u1", email="ravi.kumar@society.org")


@pytest.fixture
def store():
    return MemoryDocumentStore()


@pytest.fixture
def resolver(store):
    return RoleResolver(Repository(store, "users", UserProfile))


def _profile(**extra):
    return {"name": "Ravi Kumar", "flatNo": "A-101", "contactNo": "9876543210", **extra}


class TestRoleResolver:
    def test_no_session_is_unauthenticated(self, resolver):
        assert resolver.resolve(None) == UNAUTHENTICATED

    def test_committee_member(self, resolver, store):
        store.set("users", "u1", _profile(role="Committee Member"))
        resolution = resolver.resolve(SESSION)
        assert resolution.role == Role.COMMITTEE_MEMBER
        assert resolution.authenticated
        assert not resolution.is_resolving

    def test_resident(self, resolver, store):
        store.set("users", "u1", _profile(role="Resident"))
        assert resolver.resolve(SESSION).role == Role.RESIDENT

    @pytest.mark.parametrize(
        "document",
        [None, _profile(), _profile(role=""), _profile(role="   "), _profile(role="Admin")],
        ids=["no-profile", "role-missing", "role-empty", "role-blank", "role-unknown"],
    )
    def test_defaults_to_resident(self, resolver, store, document):
        if document is not None:
            store.set("users", "u1", document)
        assert resolver.resolve(SESSION).role == Role.RESIDENT

    def test_read_failure_defaults_to_resident(self):
        profiles = MagicMock()
        profiles.get.side_effect = StoreError("timeout")
        assert RoleResolver(profiles).resolve(SESSION).role == Role.RESIDENT

    def test_unexpected_read_error_defaults_to_resident(self):
        profiles = MagicMock()
        profiles.get.side_effect = RuntimeError("invalid url")
        resolution = RoleResolver(profiles).resolve(SESSION)
        assert resolution.role == Role.RESIDENT
        assert not resolution.is_resolving

    def test_role_is_read_again_on_every_resolve(self, resolver, store):
        store.set("users", "u1", _profile(role="Resident"))
        assert resolver.resolve(SESSION).role == Role.RESIDENT
        store.update("users", "u1", {"role": "Committee Member"})
        assert resolver.resolve(SESSION).role == Role.COMMITTEE_MEMBER
