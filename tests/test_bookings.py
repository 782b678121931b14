from datetime import timedelta

import pytest
from sqlalchemy import update

from fitclub.domain.bookings import ledger, services
from fitclub.errors import CapacityInvariantError, ConflictError, NotFoundError, ValidationError
from fitclub.models import Booking, ClassSchedule
from fitclub.utils.timeutils import utcnow


@pytest.fixture
def members(make_user):
    return [make_user(f"user-{i}") for i in range(1, 5)]


def book(session, user, schedule, minutes):
    # explicit, increasing booking times keep waitlist order deterministic
    return services.create_booking(session, user.id, schedule.id, now=utcnow() + timedelta(minutes=minutes))


def spots(session, schedule):
    session.expire_all()
    return session.get(ClassSchedule, schedule.id).spots_remaining


def test_single_seat_is_handed_down_the_waitlist(session, members, make_schedule):
    schedule = make_schedule(capacity=1)
    first, second, third = members[:3]

    b1 = book(session, first, schedule, 1)
    b2 = book(session, second, schedule, 2)
    b3 = book(session, third, schedule, 3)
    assert (b1.status, b2.status, b3.status) == ("confirmed", "waitlist", "waitlist")
    assert spots(session, schedule) == 0

    cancelled, promoted = services.cancel_booking(session, first.id, b1.id)
    assert cancelled.status == "cancelled"
    assert cancelled.cancelled_at is not None
    assert promoted.id == b2.id
    assert spots(session, schedule) == 0

    _, promoted = services.cancel_booking(session, second.id, b2.id)
    assert promoted.id == b3.id
    assert spots(session, schedule) == 0

    _, promoted = services.cancel_booking(session, third.id, b3.id)
    assert promoted is None
    assert spots(session, schedule) == 1


def test_never_more_confirmed_than_capacity(session, members, make_schedule):
    schedule = make_schedule(capacity=2)
    statuses = [book(session, user, schedule, i).status for i, user in enumerate(members)]

    assert statuses == ["confirmed", "confirmed", "waitlist", "waitlist"]
    assert spots(session, schedule) == 0


def test_waitlist_is_promoted_in_booking_order(session, members, make_schedule):
    schedule = make_schedule(capacity=1)
    holder = book(session, members[0], schedule, 0)
    late = book(session, members[1], schedule, 10)
    early = book(session, members[2], schedule, 5)
    assert late.status == early.status == "waitlist"

    _, promoted = services.cancel_booking(session, members[0].id, holder.id)

    assert promoted.id == early.id
    session.refresh(late)
    assert late.status == "waitlist"


def test_cancelling_waitlisted_booking_keeps_capacity(session, members, make_schedule):
    schedule = make_schedule(capacity=1)
    book(session, members[0], schedule, 0)
    waiting = book(session, members[1], schedule, 1)

    _, promoted = services.cancel_booking(session, members[1].id, waiting.id)

    assert promoted is None
    assert spots(session, schedule) == 0


def test_duplicate_booking_conflicts(session, members, make_schedule):
    schedule = make_schedule(capacity=3)
    book(session, members[0], schedule, 0)

    with pytest.raises(ConflictError) as exc:
        book(session, members[0], schedule, 1)

    assert exc.value.message == "You already have a booking for this class"
    assert spots(session, schedule) == 2


def test_rebooking_after_cancel_is_allowed(session, members, make_schedule):
    schedule = make_schedule(capacity=1)
    first = book(session, members[0], schedule, 0)
    services.cancel_booking(session, members[0].id, first.id)

    again = book(session, members[0], schedule, 1)

    assert again.status == "confirmed"
    assert spots(session, schedule) == 0


def test_concurrent_duplicate_is_stopped_by_unique_index(session, members, make_schedule, monkeypatch):
    schedule = make_schedule(capacity=3)
    book(session, members[0], schedule, 0)
    # the pre-check saw nothing; the insert must still refuse and give the seat back
    monkeypatch.setattr(services, "find_active_booking", lambda *args: None)

    with pytest.raises(ConflictError):
        book(session, members[0], schedule, 1)

    assert spots(session, schedule) == 2
    assert session.query(Booking).count() == 1


def test_double_cancel_is_rejected(session, members, make_schedule):
    schedule = make_schedule(capacity=1)
    booking = book(session, members[0], schedule, 0)
    services.cancel_booking(session, members[0].id, booking.id)

    with pytest.raises(ValidationError) as exc:
        services.cancel_booking(session, members[0].id, booking.id)

    assert exc.value.message == "Booking is already cancelled"
    assert spots(session, schedule) == 1


def test_attended_booking_cannot_be_cancelled(session, members, make_schedule):
    schedule = make_schedule(capacity=1)
    booking = book(session, members[0], schedule, 0)
    booking.status = "attended"
    session.commit()

    with pytest.raises(ValidationError):
        services.cancel_booking(session, members[0].id, booking.id)


def test_cancel_someone_elses_booking_is_not_found(session, members, make_schedule):
    schedule = make_schedule(capacity=1)
    booking = book(session, members[0], schedule, 0)

    with pytest.raises(NotFoundError) as exc:
        services.cancel_booking(session, members[1].id, booking.id)

    assert exc.value.message == "Booking not found"


def test_started_and_cancelled_classes_are_not_bookable(session, members, make_schedule):
    started = make_schedule(starts_in=timedelta(minutes=-5))
    cancelled = make_schedule(is_cancelled=True)

    with pytest.raises(ValidationError, match="already started"):
        book(session, members[0], started, 0)
    with pytest.raises(ValidationError, match="cancelled"):
        book(session, members[0], cancelled, 0)
    with pytest.raises(NotFoundError):
        services.create_booking(session, members[0].id, "missing-schedule")


def test_release_past_capacity_is_rejected(session, make_schedule):
    schedule = make_schedule(capacity=2)

    with pytest.raises(CapacityInvariantError):
        ledger.release(session, schedule.id)

    assert spots(session, schedule) == 2


def test_promotion_skips_a_candidate_taken_concurrently(session, members, make_schedule, monkeypatch):
    schedule = make_schedule(capacity=1)
    holder = book(session, members[0], schedule, 0)
    first_waiting = book(session, members[1], schedule, 1)
    second_waiting = book(session, members[2], schedule, 2)

    real_session = session()
    original_execute = real_session.execute
    booking_updates = {"count": 0}

    def racing_execute(statement, *args, **kwargs):
        if getattr(statement, "is_update", False) and statement.table.name == "bookings":
            booking_updates["count"] += 1
            if booking_updates["count"] == 2:
                # another request cancels the head of the waitlist just before promotion
                original_execute(
                    update(Booking)
                    .where(Booking.id == first_waiting.id)
                    .values(status="cancelled", cancelled_at=utcnow())
                    .execution_options(synchronize_session=False)
                )
        return original_execute(statement, *args, **kwargs)

    monkeypatch.setattr(real_session, "execute", racing_execute)

    _, promoted = services.cancel_booking(session, members[0].id, holder.id)

    assert promoted.id == second_waiting.id
    assert promoted.status == "confirmed"
    assert spots(session, schedule) == 0


def test_list_bookings_filters(session, members, make_schedule):
    confirmed = book(session, members[0], make_schedule(capacity=1), 0)
    cancelled = book(session, members[0], make_schedule(capacity=1), 1)
    services.cancel_booking(session, members[0].id, cancelled.id)

    assert {b.id for b in services.list_bookings(session, members[0].id)} == {confirmed.id, cancelled.id}
    assert [b.id for b in services.list_bookings(session, members[0].id, upcoming=True)] == [confirmed.id]
    assert [b.id for b in services.list_bookings(session, members[0].id, status="cancelled")] == [cancelled.id]
