"""Booking lifecycle: create, cancel, and waitlist promotion.

States per (user, schedule): none -> confirmed | waitlist -> cancelled.
``confirmed -> attended`` belongs to class-completion logic elsewhere.
"""

import logging

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError

from fitclub.errors import CapacityInvariantError, ConflictError, NotFoundError, ValidationError
from fitclub.models import Booking
from fitclub.models.booking import ACTIVE_BOOKING_STATUSES, ATTENDED, CANCELLED, CONFIRMED, WAITLIST
from fitclub.utils.timeutils import utcnow

from . import ledger

logger = logging.getLogger(__name__)

ALREADY_BOOKED = "You already have a booking for this class"


def find_active_booking(session, user_id, schedule_id):
    return (
        session.query(Booking)
        .filter(
            Booking.user_id == user_id,
            Booking.class_schedule_id == schedule_id,
            Booking.status.in_(ACTIVE_BOOKING_STATUSES),
        )
        .first()
    )


def create_booking(session, user_id, schedule_id, now=None):
    now = now or utcnow()

    # time validity first, then duplicate check, then the ledger
    ledger.get_bookable_schedule(session, schedule_id, now)
    if find_active_booking(session, user_id, schedule_id) is not None:
        raise ConflictError(ALREADY_BOOKED)

    status = ledger.try_reserve(session, schedule_id, now)
    booking = Booking(
        user_id=user_id,
        class_schedule_id=schedule_id,
        status=status,
        booked_at=now,
    )
    session.add(booking)
    try:
        session.commit()
    except IntegrityError as exc:
        # a concurrent request created the active booking first; the seat we
        # may have taken is rolled back with it
        session.rollback()
        raise ConflictError(ALREADY_BOOKED) from exc

    logger.info(f"Booking {booking.id} created for user {user_id} on schedule {schedule_id} as {status}")
    return booking


def promote_waitlist(session, schedule_id):
    """Confirm the longest-waiting booking on ``schedule_id``, if any.

    At most one booking is promoted, and it takes the seat the preceding
    ``ledger.release`` freed: one cancellation plus one promotion leaves
    ``spots_remaining`` where it was. Does not commit.
    """
    skipped = []
    while True:
        query = session.query(Booking).filter(
            Booking.class_schedule_id == schedule_id,
            Booking.status == WAITLIST,
        )
        if skipped:
            query = query.filter(Booking.id.notin_(skipped))
        candidate = query.order_by(Booking.booked_at.asc(), Booking.id.asc()).first()
        if candidate is None:
            return None

        result = session.execute(
            update(Booking)
            .where(Booking.id == candidate.id, Booking.status == WAITLIST)
            .values(status=CONFIRMED)
            .execution_options(synchronize_session=False)
        )
        session.refresh(candidate)
        if result.rowcount == 1:
            ledger.consume_released_seat(session, schedule_id)
            logger.info(f"Promoted waitlisted booking {candidate.id} on schedule {schedule_id}")
            return candidate

        # someone else promoted or cancelled it first
        skipped.append(candidate.id)


def cancel_booking(session, user_id, booking_id, now=None):
    """Soft-cancel the caller's booking and hand a freed seat to the waitlist.

    Returns ``(booking, promoted)`` where ``promoted`` may be ``None``.
    """
    now = now or utcnow()
    booking = (
        session.query(Booking)
        .filter(Booking.id == booking_id, Booking.user_id == user_id)
        .first()
    )
    if booking is None:
        raise NotFoundError("Booking")
    if booking.status == CANCELLED:
        raise ValidationError("Booking is already cancelled")
    if booking.status == ATTENDED:
        raise ValidationError("Cannot cancel a completed booking")

    observed_status = booking.status
    result = session.execute(
        update(Booking)
        .where(Booking.id == booking.id, Booking.status == observed_status)
        .values(status=CANCELLED, cancelled_at=now)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount != 1:
        session.rollback()
        raise ConflictError("Booking was changed by another request; please retry")

    promoted = None
    if observed_status == CONFIRMED:
        # release before promotion, in the same transaction
        try:
            ledger.release(session, booking.class_schedule_id)
            promoted = promote_waitlist(session, booking.class_schedule_id)
        except CapacityInvariantError:
            session.rollback()
            raise

    session.commit()
    session.refresh(booking)
    logger.info(f"Booking {booking.id} cancelled by user {user_id} (was {observed_status})")
    return booking, promoted


def list_bookings(session, user_id, status=None, upcoming=False):
    query = session.query(Booking).filter(Booking.user_id == user_id)
    if status:
        query = query.filter(Booking.status == status)
    if upcoming:
        query = query.filter(Booking.status.in_(ACTIVE_BOOKING_STATUSES))
    return query.order_by(Booking.booked_at.desc()).all()
