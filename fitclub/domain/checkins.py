"""Gym check-in / check-out on top of the single-active-instance guard."""

import logging

from fitclub.errors import ValidationError
from fitclub.models import CheckIn
from fitclub.utils.timeutils import minutes_between, utcnow

from .guard import ActiveInstanceGuard
from .gyms import get_gym
from .memberships import get_active_membership

logger = logging.getLogger(__name__)

check_in_guard = ActiveInstanceGuard(
    CheckIn,
    open_clause=lambda: CheckIn.checked_out_at.is_(None),
    label="Active check-in",
    conflict_message="You are already checked in",
)


def check_in(session, user_id, gym_id, now=None):
    now = now or utcnow()

    membership = get_active_membership(session, user_id)
    if membership is None:
        raise ValidationError("No active membership found")
    if not membership.grants_access_to(gym_id):
        raise ValidationError("You do not have access to this gym")
    get_gym(session, gym_id)

    visit = check_in_guard.open(
        session,
        user_id,
        gym_id=gym_id,
        membership_id=membership.id,
        checked_in_at=now,
    )
    session.commit()
    logger.info(f"User {user_id} checked in at gym {gym_id}")
    return visit


def check_out(session, user_id, check_in_id=None, now=None):
    """Close the caller's open visit (a given one, or whichever is open)."""
    now = now or utcnow()
    visit = check_in_guard.load_open(session, user_id, check_in_id)
    visit = check_in_guard.close(
        session,
        visit,
        {
            "checked_out_at": now,
            "duration_minutes": minutes_between(visit.checked_in_at, now),
        },
    )
    session.commit()
    logger.info(f"User {user_id} checked out of gym {visit.gym_id} after {visit.duration_minutes} min")
    return visit


def current_check_in(session, user_id):
    return check_in_guard.find_open(session, user_id)


def check_in_history(session, user_id, limit=20, offset=0):
    query = session.query(CheckIn).filter(
        CheckIn.user_id == user_id,
        CheckIn.checked_out_at.isnot(None),
    )
    total = query.count()
    rows = query.order_by(CheckIn.checked_in_at.desc()).offset(offset).limit(limit).all()
    return rows, total


def closed_check_ins(session, user_id):
    return (
        session.query(CheckIn)
        .filter(CheckIn.user_id == user_id, CheckIn.checked_out_at.isnot(None))
        .all()
    )
