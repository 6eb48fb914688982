"""Community membership helpers.

Communities only scope leaderboards; none of this touches reading state.
"""
from __future__ import annotations

import logging
import secrets
from dataclasses import dataclass

from sqlalchemy import func
from sqlalchemy.orm import Session

from daily_shloka.core.settings import settings
from daily_shloka.models import ActiveCommunity, Community, CommunityMember
from daily_shloka.models.community import (
    COMMUNITY_PRIVATE,
    COMMUNITY_PUBLIC,
    ROLE_MEMBER,
    ROLE_OWNER,
)
from daily_shloka.services.errors import (
    ConflictError,
    ForbiddenError,
    NotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)

# No 0/O or 1/I so codes survive being read aloud.
INVITE_CODE_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZ23456789"
PUBLIC_LISTING_LIMIT = 50


@dataclass(frozen=True)
class CommunitySummary:
    id: int
    name: str
    type: str
    member_count: int
    invite_code: str | None = None
    role: str | None = None


def generate_invite_code(length: int | None = None) -> str:
    """Return a random invite code drawn from :data:`INVITE_CODE_ALPHABET`."""
    size = length or settings.invite_code_length
    return "".join(secrets.choice(INVITE_CODE_ALPHABET) for _ in range(size))


def _unique_invite_code(db: Session) -> str:
    while True:
        code = generate_invite_code()
        if db.query(Community.id).filter(Community.invite_code == code).first() is None:
            return code


def member_ids(db: Session, community_id: int) -> list[int]:
    """Return the user ids belonging to a community."""
    return [
        row.user_id
        for row in db.query(CommunityMember.user_id)
        .filter(CommunityMember.community_id == community_id)
        .all()
    ]


def _member_count(db: Session, community_id: int) -> int:
    return (
        db.query(func.count())
        .select_from(CommunityMember)
        .filter(CommunityMember.community_id == community_id)
        .scalar()
        or 0
    )


def _membership(db: Session, community_id: int, user_id: int) -> CommunityMember | None:
    return db.get(CommunityMember, (community_id, user_id))


def _set_active(db: Session, user_id: int, community_id: int) -> None:
    active = db.get(ActiveCommunity, user_id)
    if active is None:
        db.add(ActiveCommunity(user_id=user_id, community_id=community_id))
    else:
        active.community_id = community_id


def _add_member(db: Session, community: Community, user_id: int) -> None:
    if _membership(db, community.id, user_id) is not None:
        raise ConflictError("Already a member")
    db.add(CommunityMember(community_id=community.id, user_id=user_id, role=ROLE_MEMBER))
    _set_active(db, user_id, community.id)
    db.commit()
    logger.info("User %s joined community %s", user_id, community.id)


def create_community(db: Session, user_id: int, name: str, community_type: str) -> Community:
    """Create a community owned by ``user_id`` and make it their active one.

    Raises:
        ValidationError: If the name length or type is invalid.
    """
    name = name.strip()
    low, high = settings.community_name_min_length, settings.community_name_max_length
    if not low <= len(name) <= high:
        raise ValidationError(f"Name must be {low}-{high} characters")
    if community_type not in (COMMUNITY_PUBLIC, COMMUNITY_PRIVATE):
        raise ValidationError("Community type must be public or private")

    community = Community(
        name=name,
        type=community_type,
        invite_code=_unique_invite_code(db) if community_type == COMMUNITY_PRIVATE else None,
        created_by=user_id,
    )
    db.add(community)
    db.flush()
    db.add(CommunityMember(community_id=community.id, user_id=user_id, role=ROLE_OWNER))
    _set_active(db, user_id, community.id)
    db.commit()
    db.refresh(community)
    logger.info("User %s created %s community %s", user_id, community_type, community.id)
    return community


def get_user_communities(db: Session, user_id: int) -> list[CommunitySummary]:
    """Return the communities a user belongs to with their role."""
    rows = (
        db.query(Community, CommunityMember.role)
        .join(CommunityMember, CommunityMember.community_id == Community.id)
        .filter(CommunityMember.user_id == user_id)
        .order_by(CommunityMember.joined_at, Community.id)
        .all()
    )
    return [
        CommunitySummary(
            id=community.id,
            name=community.name,
            type=community.type,
            member_count=_member_count(db, community.id),
            invite_code=community.invite_code,
            role=role,
        )
        for community, role in rows
    ]


def get_public_communities(db: Session) -> list[CommunitySummary]:
    """Return the newest public communities with member counts."""
    communities = (
        db.query(Community)
        .filter(Community.type == COMMUNITY_PUBLIC)
        .order_by(Community.id.desc())
        .limit(PUBLIC_LISTING_LIMIT)
        .all()
    )
    return [
        CommunitySummary(
            id=community.id,
            name=community.name,
            type=community.type,
            member_count=_member_count(db, community.id),
        )
        for community in communities
    ]


def join_public_community(db: Session, user_id: int, community_id: int) -> Community:
    """Join a public community.

    Raises:
        NotFoundError: If the community does not exist.
        ForbiddenError: If it is private.
        ConflictError: If the user is already a member.
    """
    community = db.get(Community, community_id)
    if community is None:
        raise NotFoundError("Community not found")
    if community.type != COMMUNITY_PUBLIC:
        raise ForbiddenError("Cannot join private community without invite code")
    _add_member(db, community, user_id)
    return community


def join_by_invite_code(db: Session, user_id: int, invite_code: str) -> Community:
    """Join the community matching ``invite_code`` (case-insensitive)."""
    code = invite_code.strip().upper()
    if not code:
        raise ValidationError("Invite code is required")
    community = db.query(Community).filter(Community.invite_code == code).first()
    if community is None:
        raise NotFoundError("Invalid invite code")
    _add_member(db, community, user_id)
    return community


def leave_community(db: Session, user_id: int, community_id: int) -> None:
    """Leave a community; owners cannot leave their own community."""
    membership = _membership(db, community_id, user_id)
    if membership is None:
        raise NotFoundError("Not a member")
    if membership.role == ROLE_OWNER:
        raise ValidationError("Owner cannot leave. Transfer ownership or delete the community.")

    db.delete(membership)
    active = db.get(ActiveCommunity, user_id)
    if active is not None and active.community_id == community_id:
        db.delete(active)
    db.commit()
    logger.info("User %s left community %s", user_id, community_id)


def get_active_community(db: Session, user_id: int) -> Community | None:
    """Return the community the user last selected, if any."""
    active = db.get(ActiveCommunity, user_id)
    if active is None:
        return None
    return db.get(Community, active.community_id)


def set_active_community(db: Session, user_id: int, community_id: int | None) -> None:
    """Select a community for the social tab, or clear the selection with ``None``."""
    if community_id is None:
        active = db.get(ActiveCommunity, user_id)
        if active is not None:
            db.delete(active)
            db.commit()
        return

    if _membership(db, community_id, user_id) is None:
        raise ForbiddenError("Not a member of this community")
    _set_active(db, user_id, community_id)
    db.commit()
