from datetime import timedelta

import pytest

from fitclub.domain import checkins
from fitclub.errors import ConflictError, NotFoundError, ValidationError
from fitclub.models import CheckIn
from fitclub.utils.timeutils import utcnow


@pytest.fixture
def member(make_user, make_gym, make_membership):
    user = make_user("user-1")
    gym = make_gym("Central")
    make_membership(user, gym)
    return user, gym


def test_check_out_records_rounded_duration(session, member):
    user, gym = member
    start = utcnow() - timedelta(hours=1)

    visit = checkins.check_in(session, user.id, gym.id, now=start)
    closed = checkins.check_out(session, user.id, visit.id, now=start + timedelta(minutes=37))

    assert closed.duration_minutes == 37
    assert closed.checked_out_at == start + timedelta(minutes=37)


@pytest.mark.parametrize("elapsed, expected", [
    (timedelta(minutes=37, seconds=29), 37),
    (timedelta(minutes=37, seconds=30), 38),
    (timedelta(seconds=10), 0),
])
def test_duration_rounds_half_up(session, member, elapsed, expected):
    user, gym = member
    start = utcnow() - timedelta(hours=1)
    checkins.check_in(session, user.id, gym.id, now=start)

    assert checkins.check_out(session, user.id, now=start + elapsed).duration_minutes == expected


def test_second_check_in_conflicts(session, member):
    user, gym = member
    checkins.check_in(session, user.id, gym.id)

    with pytest.raises(ConflictError) as exc:
        checkins.check_in(session, user.id, gym.id)

    assert exc.value.message == "You are already checked in"


def test_concurrent_check_in_is_stopped_by_unique_index(session, member, monkeypatch):
    user, gym = member
    checkins.check_in(session, user.id, gym.id)
    monkeypatch.setattr(checkins.check_in_guard, "find_open", lambda *args: None)

    with pytest.raises(ConflictError):
        checkins.check_in(session, user.id, gym.id)

    assert session.query(CheckIn).filter(CheckIn.checked_out_at.is_(None)).count() == 1


def test_check_in_again_after_check_out(session, member):
    user, gym = member
    checkins.check_in(session, user.id, gym.id)
    checkins.check_out(session, user.id)

    assert checkins.check_in(session, user.id, gym.id).checked_out_at is None


def test_check_in_requires_active_membership(session, make_user, make_gym, make_membership):
    user = make_user("user-2")
    gym = make_gym()
    make_membership(user, gym, status="paused")

    with pytest.raises(ValidationError, match="No active membership found"):
        checkins.check_in(session, user.id, gym.id)


def test_check_in_other_gym_needs_all_location_access(session, member, make_gym, make_user, make_membership):
    user, _ = member
    other = make_gym("Harbour")

    with pytest.raises(ValidationError, match="You do not have access to this gym"):
        checkins.check_in(session, user.id, other.id)

    roamer = make_user("roamer")
    make_membership(roamer, make_gym("Home"), plan_type="vip", access_all_locations=True)
    assert checkins.check_in(session, roamer.id, other.id).gym_id == other.id


def test_check_in_unknown_gym_for_roaming_member(session, make_user, make_gym, make_membership):
    roamer = make_user("roamer")
    make_membership(roamer, make_gym(), access_all_locations=True)

    with pytest.raises(NotFoundError, match="Gym not found"):
        checkins.check_in(session, roamer.id, "no-such-gym")


def test_check_in_rejects_inactive_gym(session, make_user, make_gym, make_membership):
    closed = make_gym("Closed", is_active=False)
    user = make_user("user-2")
    make_membership(user, closed)

    with pytest.raises(NotFoundError, match="Gym not found"):
        checkins.check_in(session, user.id, closed.id)
    assert session.query(CheckIn).count() == 0


def test_check_out_without_open_visit(session, member):
    user, gym = member
    with pytest.raises(NotFoundError, match="Active check-in not found"):
        checkins.check_out(session, user.id)

    visit = checkins.check_in(session, user.id, gym.id)
    checkins.check_out(session, user.id, visit.id)
    with pytest.raises(NotFoundError):
        checkins.check_out(session, user.id, visit.id)


def test_check_out_someone_elses_visit(session, member, make_user, make_membership):
    user, gym = member
    other = make_user("user-9")
    make_membership(other, gym)
    visit = checkins.check_in(session, user.id, gym.id)

    with pytest.raises(NotFoundError):
        checkins.check_out(session, other.id, visit.id)


def test_history_lists_closed_visits_newest_first(session, member):
    user, gym = member
    base = utcnow() - timedelta(days=3)
    for day in range(3):
        start = base + timedelta(days=day)
        checkins.check_in(session, user.id, gym.id, now=start)
        checkins.check_out(session, user.id, now=start + timedelta(minutes=30))
    checkins.check_in(session, user.id, gym.id)

    rows, total = checkins.check_in_history(session, user.id, limit=2)

    assert total == 3
    assert len(rows) == 2
    assert rows[0].checked_in_at > rows[1].checked_in_at
