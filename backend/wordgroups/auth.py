from typing import Optional

from flask_login import current_user

from wordgroups.errors import Forbidden, Unauthenticated
from wordgroups.models import Member


def get_current_member_id() -> Optional[int]:
    """Member id carried by the session cookie, or None."""
    if not current_user or not current_user.is_authenticated:
        return None
    return current_user.id


def require_member(group_id: int, message: Optional[str] = None) -> Member:
    """Return the calling member if they belong to ``group_id``."""
    member_id = get_current_member_id()
    if member_id is None:
        raise Unauthenticated()
    member = Member.query.filter_by(id=member_id, group_id=group_id).first()
    if member is None:
        raise Forbidden(message)
    return member
