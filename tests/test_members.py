"""Tests for the member directory and the committee's member management."""

import pytest

from society.schemas.user import Role
from society.screens import MembersScreen, ResidentMembersScreen


class TestResidentMembers:
    def test_directory_ordered_by_name(self, ctx, make_member, resident):
        make_member("Zara Shah", flat_no="D-4")
        make_member("Anil Mehta", flat_no="C-2")
        screen = ResidentMembersScreen(ctx).load()
        assert [m.name for m in screen.items] == ["Anil Mehta", "Ravi Kumar", "Zara Shah"]


class TestMembers:
    def test_delete_member(self, ctx, make_member, committee):
        ravi = make_member("Ravi Kumar")
        screen = MembersScreen(ctx).load()
        assert screen.delete(ravi)
        assert ravi not in [m.id for m in screen.items]
        assert ctx.users.get(ravi) is None

    def test_cannot_delete_self(self, ctx, committee):
        screen = MembersScreen(ctx).load()
        assert not screen.delete(committee)
        assert screen.error == "You cannot remove your own account."
        assert ctx.users.get(committee) is not None

    def test_add_member_keeps_current_session(self, ctx, committee, sign_in):
        screen = MembersScreen(ctx).load()
        assert screen.add_member(
            "Meera Iyer", "C-12", "9000000000", "meera.iyer@society.org", "secret123", Role.RESIDENT
        )
        assert ctx.user_id == committee
        assert [m.name for m in screen.items] == ["Asha Rao", "Meera Iyer"]

        sign_in("meera.iyer@society.org")
        assert ctx.role == Role.RESIDENT

    @pytest.mark.parametrize(
        "fields, message",
        [
            (("", "C-12", "9", "meera@society.org", "secret123"), "Please fill in all required fields."),
            (("Meera", "C-12", "9", "not-an-email", "secret123"), "Please enter a valid email address."),
            (("Meera", "C-12", "9", "meera@society.org", "123"), "Password must be at least 6 characters long."),
        ],
    )
    def test_add_member_validation(self, ctx, committee, fields, message):
        screen = MembersScreen(ctx).load()
        assert not screen.add_member(*fields)
        assert screen.error == message

    def test_add_existing_email_rejected(self, ctx, committee):
        screen = MembersScreen(ctx).load()
        assert not screen.add_member("Asha", "B-2", "9", "asha.rao@society.org", "secret123")
        assert screen.error == "An account with this email already exists. Please log in instead."
