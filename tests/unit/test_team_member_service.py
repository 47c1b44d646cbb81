"""
Team member service tests.

Covers:
- Ownership checks on fetch, update and delete
- Member creation and reuse of existing accounts
- Full overwrite of group access
- Transactional removal
- Email lookups
"""
import pytest
from sqlalchemy.orm import Session

from teamaccess.auth.models import UserAccount
from teamaccess.storage.db import db
from teamaccess.teams.models import OwnerToTeamMember, TeamMemberGroupAccess
from teamaccess.teams.service import TeamMemberError, TeamMemberService
from tests.factories import access_group_ids, add_to_team, count_links, create_group, create_user


@pytest.fixture
def service():
    return TeamMemberService()


@pytest.mark.service
class TestGetTeamMember:

    def test_unlinked_member_returns_none(self, service, owner):
        stranger = create_user(email="stranger@example.com")

        assert service.get_team_member(owner.id, stranger.id) is None

    def test_member_of_another_owner_returns_none(self, service, owner):
        other_owner = create_user(email="other@example.com")
        member = create_user(email="member@example.com")
        add_to_team(other_owner, member)

        assert service.get_team_member(owner.id, member.id) is None

    def test_returns_member_and_group_ids(self, service, owner):
        member = create_user(email="member@example.com", name="Mia Member")
        first = create_group(owner, "First group")
        second = create_group(owner, "Second group")
        add_to_team(owner, member, [second, first])

        result = service.get_team_member(owner.id, member.id)

        assert result["user"]["id"] == member.id
        assert result["user"]["email"] == "member@example.com"
        assert result["fb_id"] == [first.id, second.id]

    def test_group_ids_limited_to_owner_link(self, service, owner):
        other_owner = create_user(email="other@example.com")
        member = create_user(email="member@example.com")
        mine = create_group(owner, "Mine")
        theirs = create_group(other_owner, "Theirs")
        add_to_team(owner, member, [mine])
        add_to_team(other_owner, member, [theirs])

        assert service.get_team_member(owner.id, member.id)["fb_id"] == [mine.id]


@pytest.mark.service
class TestListTeamMembers:

    def test_lists_only_own_members(self, service, owner):
        other_owner = create_user(email="other@example.com")
        mine = create_user(email="mine@example.com", name="Mine")
        theirs = create_user(email="theirs@example.com", name="Theirs")
        add_to_team(owner, mine)
        add_to_team(other_owner, theirs)

        total, filtered, rows = service.list_team_members(owner.id)

        assert total == 1
        assert filtered == 1
        assert [row["email"] for row in rows] == ["mine@example.com"]

    def test_rows_carry_group_names_and_status(self, service, owner):
        active = create_user(email="active@example.com", name="Active One")
        inactive = create_user(email="inactive@example.com", name="Inactive One", status=False)
        group = create_group(owner, "Runners Club")
        add_to_team(owner, active, [group])
        add_to_team(owner, inactive)

        _, _, rows = service.list_team_members(owner.id)
        by_email = {row["email"]: row for row in rows}

        assert by_email["active@example.com"]["facebook_groups_id"] == ["Runners Club"]
        assert by_email["active@example.com"]["status"] == "Active"
        assert by_email["inactive@example.com"]["facebook_groups_id"] == []
        assert by_email["inactive@example.com"]["status"] == "Inactive"

    def test_name_and_email_filters_are_substring_matches(self, service, owner):
        add_to_team(owner, create_user(email="anna@example.com", name="Anna Smith"))
        add_to_team(owner, create_user(email="bob@sample.org", name="Bob Jones"))
        add_to_team(owner, create_user(email="carl@example.com", name="Carl Smithers"))

        total, filtered, rows = service.list_team_members(owner.id, name="smith")
        assert total == 3
        assert filtered == 2
        assert {row["name"] for row in rows} == {"Anna Smith", "Carl Smithers"}

        _, filtered, rows = service.list_team_members(owner.id, name="smith", email="carl")
        assert filtered == 1
        assert rows[0]["email"] == "carl@example.com"

    def test_paging(self, service, owner):
        for index in range(5):
            add_to_team(owner, create_user(email=f"member{index}@example.com", name="Member"))

        total, filtered, rows = service.list_team_members(owner.id, start=2, length=2)

        assert total == 5
        assert filtered == 5
        assert [row["email"] for row in rows] == ["member2@example.com", "member3@example.com"]

    def test_search_matches_name_or_email(self, service, owner):
        add_to_team(owner, create_user(email="zed@example.com", name="Amy Zed"))
        add_to_team(owner, create_user(email="amy@example.com", name="Someone"))
        add_to_team(owner, create_user(email="bob@example.com", name="Bob"))

        total, filtered, rows = service.list_team_members(owner.id, search="AMY")

        assert total == 3
        assert filtered == 2
        assert {row["email"] for row in rows} == {"zed@example.com", "amy@example.com"}

    def test_order_by_name_and_status(self, service, owner):
        add_to_team(owner, create_user(email="zed@example.com", name="Zed"))
        add_to_team(owner, create_user(email="amy@example.com", name="Amy", status=False))
        add_to_team(owner, create_user(email="kim@example.com", name="Kim"))

        _, _, rows = service.list_team_members(owner.id, order=[("name", "asc")])
        assert [row["name"] for row in rows] == ["Amy", "Kim", "Zed"]

        _, _, rows = service.list_team_members(owner.id, order=[("name", "desc")])
        assert [row["name"] for row in rows] == ["Zed", "Kim", "Amy"]

        _, _, rows = service.list_team_members(owner.id, order=[("status", "asc"), ("name", "desc")])
        assert [row["name"] for row in rows] == ["Zed", "Kim", "Amy"]

    def test_unknown_order_field_keeps_id_order(self, service, owner):
        add_to_team(owner, create_user(email="zed@example.com", name="Zed"))
        add_to_team(owner, create_user(email="amy@example.com", name="Amy"))

        _, _, rows = service.list_team_members(owner.id, order=[("password_hash", "desc")])

        assert [row["name"] for row in rows] == ["Zed", "Amy"]


@pytest.mark.service
class TestAddTeamMember:

    def test_creates_account_link_and_access(self, service, owner):
        group = create_group(owner, "Group")

        result = service.add_team_member(
            owner.id,
            {"email": "New.Member@Example.com", "name": "New Member", "facebook_groups_id": [group.id]},
        )

        assert result == {"success": True, "message": "Team Member Added Successfully."}
        with db.session() as session:
            member = session.query(UserAccount).filter(UserAccount.email == "new.member@example.com").one()
            assert member.name == "New Member"
            assert member.status is True
            assert member.password_hash is None
            link = session.query(OwnerToTeamMember).filter(
                OwnerToTeamMember.owner_id == owner.id,
                OwnerToTeamMember.team_member_id == member.id,
            ).one()
        assert access_group_ids(link.id) == {group.id}

    def test_reuses_existing_account(self, service, owner):
        existing = create_user(email="existing@example.com", name="Existing Name")

        result = service.add_team_member(owner.id, {"email": "existing@example.com", "name": "Other Name"})

        assert result["success"] is True
        with db.session() as session:
            assert session.query(UserAccount).filter(UserAccount.email == "existing@example.com").count() == 1
            assert session.get(UserAccount, existing.id).name == "Existing Name"
        assert service.get_team_member(owner.id, existing.id) is not None

    def test_rejects_member_already_on_team(self, service, owner):
        member = create_user(email="member@example.com")
        add_to_team(owner, member)

        result = service.add_team_member(owner.id, {"email": "member@example.com", "name": "Member"})

        assert result == {"success": False, "message": "This user is already part of your team."}
        assert count_links(owner.id) == 1

    def test_rejects_owner_as_own_member(self, service, owner):
        result = service.add_team_member(owner.id, {"email": owner.email, "name": "Me"})

        assert result["success"] is False
        assert count_links(owner.id) == 0

    def test_duplicate_group_ids_are_granted_once(self, service, owner):
        group = create_group(owner, "Group")

        service.add_team_member(
            owner.id,
            {"email": "member@example.com", "name": "Member", "facebook_groups_id": [group.id, group.id]},
        )

        with db.session() as session:
            assert session.query(TeamMemberGroupAccess).count() == 1


@pytest.mark.service
class TestSyncGroupAccess:

    def test_replaces_previous_assignments(self, service, owner):
        member = create_user(email="member@example.com")
        first, second, third = (create_group(owner, name) for name in ("One", "Two", "Three"))
        link = add_to_team(owner, member, [first, second])

        service.sync_group_access(owner.id, member.id, [second.id, third.id])

        assert access_group_ids(link.id) == {second.id, third.id}

    def test_empty_list_removes_all_access(self, service, owner):
        member = create_user(email="member@example.com")
        link = add_to_team(owner, member, [create_group(owner, "One")])

        service.sync_group_access(owner.id, member.id, None)

        assert access_group_ids(link.id) == set()

    def test_member_not_on_team_raises(self, service, owner):
        stranger = create_user(email="stranger@example.com")

        with pytest.raises(TeamMemberError, match="not currently part of your team"):
            service.sync_group_access(owner.id, stranger.id, [])


@pytest.mark.service
class TestRemoveTeamMember:

    def test_removes_access_rows_and_link(self, service, owner):
        member = create_user(email="member@example.com")
        link = add_to_team(owner, member, [create_group(owner, "One"), create_group(owner, "Two")])

        service.remove_team_member(owner.id, member.id)

        assert access_group_ids(link.id) == set()
        assert count_links(owner.id) == 0
        assert service.get_team_member(owner.id, member.id) is None

    def test_member_account_is_kept(self, service, owner):
        member = create_user(email="member@example.com")
        add_to_team(owner, member)

        service.remove_team_member(owner.id, member.id)

        with db.session() as session:
            assert session.get(UserAccount, member.id) is not None

    def test_unknown_member_raises(self, service, owner):
        with pytest.raises(TeamMemberError, match="Team member not found"):
            service.remove_team_member(owner.id, 999)

    def test_failure_rolls_back_access_delete(self, service, owner, monkeypatch):
        member = create_user(email="member@example.com")
        group = create_group(owner, "One")
        link = add_to_team(owner, member, [group])

        def boom(self, instance):
            raise RuntimeError("database went away")

        monkeypatch.setattr(Session, "delete", boom)

        with pytest.raises(RuntimeError):
            service.remove_team_member(owner.id, member.id)

        monkeypatch.undo()
        assert access_group_ids(link.id) == {group.id}
        assert count_links(owner.id) == 1


@pytest.mark.service
class TestEmailLookups:

    def test_check_email_unknown_user(self, service, owner):
        assert service.check_email(owner.id, "nobody@example.com") == (0, None)

    def test_check_email_user_not_on_team(self, service, owner):
        create_user(email="someone@example.com")

        count, user = service.check_email(owner.id, "someone@example.com")

        assert count == 0
        assert user["email"] == "someone@example.com"

    def test_check_email_member_on_team(self, service, owner):
        member = create_user(email="member@example.com")
        add_to_team(owner, member)

        count, user = service.check_email(owner.id, "Member@Example.com")

        assert count == 1
        assert user["id"] == member.id

    def test_suggest_emails_case_insensitive_and_sorted(self, service, owner):
        zed = create_user(email="zed@acme.io")
        amy = create_user(email="amy@acme.io")
        create_user(email="bob@other.net")

        suggestions = service.suggest_emails("ACME")

        assert suggestions == [
            {"value": amy.id, "label": "amy@acme.io"},
            {"value": zed.id, "label": "zed@acme.io"},
        ]

    def test_suggest_emails_treats_wildcards_literally(self, service, owner):
        create_user(email="plain@example.com")

        assert service.suggest_emails("%") == []
