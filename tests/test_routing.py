"""Tests for the route table and the guard's decisions."""

from unittest.mock import MagicMock

import pytest

from society.context import create_context
from society.core.auth import LocalAuthGateway
from society.core.routing import (
    LOGIN_PATH,
    ROUTES,
    Access,
    GuardState,
    Route,
    normalize_path,
)
from society.schemas.user import Role

COMMITTEE_PATHS = [
    "/home",
    "/maintenance",
    "/members",
    "/billing",
    "/create-new-bill",
    "/events",
    "/create-notice",
    "/notice/n1",
    "/complaints",
    "/complaints/c1",
    "/profile",
]

RESIDENT_PATHS = [
    "/resident-dashboard",
    "/resident-billing",
    "/resident-complaints",
    "/resident-notice",
    "/resident-members",
    "/resident-profile",
]


class TestRoute:
    def test_match_static(self):
        route = Route("/home", "home", "Home", Access.COMMITTEE)
        assert route.match("/home") == {}
        assert route.match("/home/extra") is None

    def test_match_params(self):
        route = Route("/notice/:noticeId", "notice_details", "Notice", Access.COMMITTEE)
        assert route.has_params
        assert route.match("/notice/abc") == {"noticeId": "abc"}
        assert route.match("/notices/abc") is None

    def test_route_names_and_paths_are_unique(self):
        assert len({r.name for r in ROUTES}) == len(ROUTES)
        assert len({r.path for r in ROUTES}) == len(ROUTES)

    @pytest.mark.parametrize(
        "raw, expected",
        [("", "/"), ("home", "/home"), ("/home/", "/home"), ("/complaints/c1?tab=1", "/complaints/c1")],
    )
    def test_normalize_path(self, raw, expected):
        assert normalize_path(raw) == expected


class TestGuardLoading:
    def test_pending_until_started(self, settings, store, book, clock):
        context = create_context(settings, store, LocalAuthGateway(book), clock=clock)
        assert context.guard.state == GuardState.LOADING_SESSION
        assert context.guard.resolve("/home").pending
        assert context.guard.reachable_routes() == []

        context.guard.start()
        assert context.guard.state == GuardState.READY
        context.close()


class TestGuardUnauthenticated:
    def test_public_routes_allowed(self, ctx):
        for path in ("/login", "/register"):
            assert ctx.guard.resolve(path).allowed

    @pytest.mark.parametrize("path", COMMITTEE_PATHS + RESIDENT_PATHS + ["/file-complaint", "/view-details/x"])
    def test_protected_routes_redirect_to_login(self, ctx, path):
        assert ctx.guard.resolve(path).redirect_to == LOGIN_PATH

    def test_root_redirects_to_login(self, ctx):
        assert ctx.guard.resolve("/").redirect_to == LOGIN_PATH

    def test_only_public_routes_reachable(self, ctx):
        assert {r.name for r in ctx.guard.reachable_routes()} == {"login", "register"}


class TestGuardCommittee:
    @pytest.mark.parametrize("path", COMMITTEE_PATHS + ["/file-complaint", "/view-details/x"])
    def test_committee_routes_allowed(self, ctx, committee, path):
        assert ctx.guard.resolve(path).allowed

    @pytest.mark.parametrize("path", RESIDENT_PATHS)
    def test_resident_routes_redirect_home(self, ctx, committee, path):
        assert ctx.guard.resolve(path).redirect_to == "/home"

    def test_root_and_unknown_paths_redirect_home(self, ctx, committee):
        assert ctx.guard.resolve("/").redirect_to == "/home"
        assert ctx.guard.resolve("/no-such-page").redirect_to == "/home"

    def test_params_are_extracted(self, ctx, committee):
        decision = ctx.guard.resolve("/complaints/c42")
        assert decision.route.name == "complaint_details"
        assert decision.params == {"id": "c42"}

    def test_public_routes_stay_reachable(self, ctx, committee):
        assert ctx.guard.resolve("/login").allowed


class TestGuardResident:
    @pytest.mark.parametrize("path", RESIDENT_PATHS + ["/file-complaint", "/view-details/x"])
    def test_resident_routes_allowed(self, ctx, resident, path):
        assert ctx.guard.resolve(path).allowed

    @pytest.mark.parametrize("path", COMMITTEE_PATHS)
    def test_committee_routes_redirect_home(self, ctx, resident, path):
        assert ctx.guard.resolve(path).redirect_to == "/resident-dashboard"

    def test_member_without_role_lands_on_resident_dashboard(self, ctx, store, sign_in):
        user_id = ctx.auth.create_user("no.role@society.org", "secret123", {})
        store.set("users", user_id, {"name": "No Role", "flatNo": "C-3", "contactNo": "1"})
        sign_in("no.role@society.org")
        assert ctx.role == Role.RESIDENT
        assert ctx.guard.resolve("/").redirect_to == "/resident-dashboard"

    def test_sign_out_returns_to_login(self, ctx, resident):
        ctx.sessions.sign_out()
        assert not ctx.guard.authenticated
        assert ctx.guard.resolve("/resident-dashboard").redirect_to == LOGIN_PATH

    def test_refresh_picks_up_role_change(self, ctx, resident):
        ctx.users.update(resident, role=Role.COMMITTEE_MEMBER)
        assert ctx.guard.resolve("/home").redirect_to == "/resident-dashboard"
        ctx.guard.refresh()
        assert ctx.guard.resolve("/home").allowed


class TestGuardResilience:
    def test_guard_ready_when_profile_read_blows_up(self, ctx, make_member, sign_in, monkeypatch):
        make_member("Ravi Kumar")
        monkeypatch.setattr(ctx.users, "get", MagicMock(side_effect=RuntimeError("boom")))
        sign_in("ravi.kumar@society.org")
        ctx.guard.start()

        assert ctx.guard.state == GuardState.READY
        assert ctx.role == Role.RESIDENT
        assert ctx.guard.reachable_routes()

    def test_guard_ready_even_if_resolver_raises(self, ctx, resident, monkeypatch):
        monkeypatch.setattr(ctx.resolver, "resolve", MagicMock(side_effect=RuntimeError("boom")))
        with pytest.raises(RuntimeError):
            ctx.guard.refresh()
        assert ctx.guard.state == GuardState.READY
        assert ctx.guard.resolve("/resident-dashboard").redirect_to == LOGIN_PATH
