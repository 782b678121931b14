"""Capacity ledger for scheduled class instances.

Every change to ``ClassSchedule.spots_remaining`` goes through here and is a
single conditional UPDATE, so the decision and the write cannot be split by a
concurrent request.
"""

import logging

from sqlalchemy import update

from fitclub.errors import CapacityInvariantError, NotFoundError, ValidationError
from fitclub.models import ClassSchedule
from fitclub.models.booking import CONFIRMED, WAITLIST
from fitclub.utils.timeutils import utcnow

logger = logging.getLogger(__name__)


def _check_bookable(schedule, now):
    if schedule is None:
        raise NotFoundError("Class schedule")
    if schedule.is_cancelled:
        raise ValidationError("This class has been cancelled")
    if schedule.scheduled_at <= now:
        raise ValidationError("This class has already started")
    return schedule


def _refresh_schedule(session, schedule_id):
    schedule = session.get(ClassSchedule, schedule_id)
    if schedule is not None:
        session.refresh(schedule)


def get_bookable_schedule(session, schedule_id, now=None):
    """Load a schedule that can still take bookings, or raise."""
    return _check_bookable(session.get(ClassSchedule, schedule_id), now or utcnow())


def try_reserve(session, schedule_id, now=None):
    """Claim a seat if one is free.

    Returns ``"confirmed"`` when a seat was taken (``spots_remaining`` was
    decremented) and ``"waitlist"`` otherwise. The schedule row in the session
    is refreshed either way.
    """
    now = now or utcnow()
    schedule = get_bookable_schedule(session, schedule_id, now)

    result = session.execute(
        update(ClassSchedule)
        .where(
            ClassSchedule.id == schedule_id,
            ClassSchedule.spots_remaining > 0,
            ClassSchedule.is_cancelled.is_(False),
            ClassSchedule.scheduled_at > now,
        )
        .values(spots_remaining=ClassSchedule.spots_remaining - 1)
        .execution_options(synchronize_session=False)
    )
    session.refresh(schedule)
    if result.rowcount == 1:
        return CONFIRMED

    # No seat taken: either full, or the schedule changed since it was read.
    _check_bookable(schedule, now)
    return WAITLIST


def release(session, schedule_id):
    """Give back one seat. Refuses to go past the schedule's capacity."""
    result = session.execute(
        update(ClassSchedule)
        .where(
            ClassSchedule.id == schedule_id,
            ClassSchedule.spots_remaining < ClassSchedule.capacity,
        )
        .values(spots_remaining=ClassSchedule.spots_remaining + 1)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount != 1:
        logger.error(f"Capacity release rejected for schedule {schedule_id}: already at capacity or missing")
        raise CapacityInvariantError(
            "Class capacity is inconsistent; the seat could not be released"
        )
    _refresh_schedule(session, schedule_id)


def consume_released_seat(session, schedule_id):
    """Hand a seat freed by ``release`` to a promoted booking.

    Runs in the same transaction as the ``release`` it pairs with, so the seat
    is still free; finding none means a confirmed booking was not counted.
    """
    result = session.execute(
        update(ClassSchedule)
        .where(ClassSchedule.id == schedule_id, ClassSchedule.spots_remaining > 0)
        .values(spots_remaining=ClassSchedule.spots_remaining - 1)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount != 1:
        logger.error(f"No released seat left to promote into on schedule {schedule_id}")
        raise CapacityInvariantError("Class capacity is inconsistent; the waitlist could not be promoted")
    _refresh_schedule(session, schedule_id)
