"""Tests for community membership helpers."""

import pytest

from daily_shloka.models import ActiveCommunity, CommunityMember
from daily_shloka.models.community import ROLE_MEMBER, ROLE_OWNER
from daily_shloka.services import communities
from daily_shloka.services.communities import INVITE_CODE_ALPHABET
from daily_shloka.services.errors import (
    ConflictError,
    ForbiddenError,
    NotFoundError,
    ValidationError,
)


def test_create_public_community(db_session, reader) -> None:
    community = communities.create_community(db_session, reader.id, "  Morning Readers ", "public")

    assert community.name == "Morning Readers"
    assert community.invite_code is None
    membership = db_session.get(CommunityMember, (community.id, reader.id))
    assert membership.role == ROLE_OWNER
    assert communities.get_active_community(db_session, reader.id).id == community.id


def test_private_community_gets_an_invite_code(db_session, reader) -> None:
    community = communities.create_community(db_session, reader.id, "Family", "private")

    assert len(community.invite_code) == 6
    assert set(community.invite_code) <= set(INVITE_CODE_ALPHABET)


@pytest.mark.parametrize(
    ("name", "community_type"),
    [("ab", "public"), ("x" * 31, "public"), ("Fine Name", "secret")],
)
def test_create_rejects_invalid_input(db_session, reader, name, community_type) -> None:
    with pytest.raises(ValidationError):
        communities.create_community(db_session, reader.id, name, community_type)


def test_join_public_community(db_session, other_reader, community) -> None:
    communities.join_public_community(db_session, other_reader.id, community.id)

    membership = db_session.get(CommunityMember, (community.id, other_reader.id))
    assert membership.role == ROLE_MEMBER
    assert set(communities.member_ids(db_session, community.id)) == {
        community.created_by,
        other_reader.id,
    }
    assert communities.get_active_community(db_session, other_reader.id).id == community.id

    with pytest.raises(ConflictError):
        communities.join_public_community(db_session, other_reader.id, community.id)


def test_private_community_needs_the_code(db_session, reader, other_reader) -> None:
    private = communities.create_community(db_session, reader.id, "Family", "private")

    with pytest.raises(ForbiddenError):
        communities.join_public_community(db_session, other_reader.id, private.id)

    joined = communities.join_by_invite_code(
        db_session, other_reader.id, f" {private.invite_code.lower()} "
    )
    assert joined.id == private.id


def test_join_by_unknown_code(db_session, other_reader) -> None:
    with pytest.raises(NotFoundError):
        communities.join_by_invite_code(db_session, other_reader.id, "ZZZZZZ")
    with pytest.raises(ValidationError):
        communities.join_by_invite_code(db_session, other_reader.id, "   ")


def test_join_unknown_community(db_session, other_reader) -> None:
    with pytest.raises(NotFoundError):
        communities.join_public_community(db_session, other_reader.id, 424242)


def test_leave_community(db_session, reader, other_reader, community) -> None:
    communities.join_public_community(db_session, other_reader.id, community.id)

    with pytest.raises(ValidationError):
        communities.leave_community(db_session, reader.id, community.id)

    communities.leave_community(db_session, other_reader.id, community.id)
    assert db_session.get(CommunityMember, (community.id, other_reader.id)) is None
    assert db_session.get(ActiveCommunity, other_reader.id) is None

    with pytest.raises(NotFoundError):
        communities.leave_community(db_session, other_reader.id, community.id)


def test_active_community_requires_membership(db_session, reader, other_reader, community) -> None:
    with pytest.raises(ForbiddenError):
        communities.set_active_community(db_session, other_reader.id, community.id)

    communities.set_active_community(db_session, reader.id, None)
    assert communities.get_active_community(db_session, reader.id) is None

    communities.set_active_community(db_session, reader.id, community.id)
    assert communities.get_active_community(db_session, reader.id).id == community.id


def test_listings_carry_member_counts(db_session, reader, other_reader, community) -> None:
    communities.join_public_community(db_session, other_reader.id, community.id)
    communities.create_community(db_session, reader.id, "Hidden", "private")

    public = communities.get_public_communities(db_session)
    assert [(summary.name, summary.member_count) for summary in public] == [("Gita Circle", 2)]

    mine = communities.get_user_communities(db_session, reader.id)
    assert [(summary.name, summary.role) for summary in mine] == [
        ("Gita Circle", ROLE_OWNER),
        ("Hidden", ROLE_OWNER),
    ]
    assert mine[1].invite_code is not None
