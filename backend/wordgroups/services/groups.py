from typing import List, Tuple

from flask import current_app
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from wordgroups import db
from wordgroups.errors import InternalFailure, NotFound
from wordgroups.models import Group, Member


def create_group(name: str, member_name: str) -> Tuple[Group, Member]:
    """Create a group together with its first member."""
    group = Group(name=name)
    member = Member(name=member_name, group=group)
    try:
        db.session.add_all([group, member])
        db.session.commit()
    except SQLAlchemyError as exc:
        db.session.rollback()
        current_app.logger.exception(f"[group-create-fail] name={name!r}")
        raise InternalFailure('Failed to create group') from exc
    current_app.logger.info(f"[group-create] group={group.id} code={group.code} member={member.id}")
    return group, member


def _find_member(group_id: int, name: str):
    return Member.query.filter_by(group_id=group_id, name=name).first()


def join_group(code: str, member_name: str) -> Tuple[Group, Member, bool]:
    """Join a group by code.

    A name already taken in the group identifies that member again instead of
    creating a duplicate. Returns ``(group, member, created)``.
    """
    group = Group.query.filter_by(code=code.upper()).first()
    if group is None:
        raise NotFound('Group not found')
    member = _find_member(group.id, member_name)
    if member is not None:
        current_app.logger.info(f"[group-join] group={group.id} member={member.id} returning")
        return group, member, False
    member = Member(name=member_name, group_id=group.id)
    try:
        db.session.add(member)
        db.session.commit()
    except IntegrityError as exc:
        # A concurrent join with the same name committed first
        db.session.rollback()
        member = _find_member(group.id, member_name)
        if member is None:
            current_app.logger.exception(f"[group-join-fail] group={group.id}")
            raise InternalFailure('Failed to join group') from exc
        current_app.logger.info(f"[group-join] group={group.id} member={member.id} returning")
        return group, member, False
    except SQLAlchemyError as exc:
        db.session.rollback()
        current_app.logger.exception(f"[group-join-fail] group={group.id}")
        raise InternalFailure('Failed to join group') from exc
    current_app.logger.info(f"[group-join] group={group.id} member={member.id} new")
    return group, member, True


def leaderboard(group_id: int) -> List[Member]:
    return (
        Member.query
        .filter_by(group_id=group_id)
        .order_by(Member.score.desc(), Member.name.asc())
        .all()
    )
