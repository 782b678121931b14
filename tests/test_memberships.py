from datetime import datetime, timedelta
from decimal import Decimal

import pytest

from fitclub.config import Config
from fitclub.domain import memberships
from fitclub.errors import ValidationError

PRICES = Config.MEMBERSHIP_PLAN_PRICES


def test_basic_to_premium_halfway_through_cycle():
    proration = memberships.compute_proration(29, 49, 15)

    assert proration.current_plan_credit == Decimal("14.50")
    assert proration.new_plan_charge == Decimal("24.50")
    assert proration.net_amount == Decimal("10.00")
    assert proration.days_remaining == 15


def test_downgrade_gives_negative_net():
    assert memberships.compute_proration(99, 29, 10).net_amount == Decimal("-23.33")


def test_proration_rounds_to_cents_half_up():
    # 49 * 1 / 30 = 1.6333..., 29 * 1 / 30 = 0.9666...
    proration = memberships.compute_proration(29, 49, 1)

    assert proration.current_plan_credit == Decimal("0.97")
    assert proration.new_plan_charge == Decimal("1.63")
    assert proration.net_amount == Decimal("0.67")


def test_days_remaining_rounds_up_and_floors_at_zero():
    now = datetime(2026, 10, 14, 12, 0)

    assert memberships.days_remaining_in_cycle(datetime(2026, 10, 29, 12, 0), now) == 15
    assert memberships.days_remaining_in_cycle(datetime(2026, 10, 29, 13, 0), now) == 16
    assert memberships.days_remaining_in_cycle(datetime(2026, 10, 1), now) == 0


def test_upgrade_updates_plan_and_fee(session, make_user, make_gym, make_membership):
    user = make_user("upgrader")
    membership = make_membership(user, make_gym(), plan_type="basic", days_left=15)
    now = datetime.combine(membership.end_date, datetime.min.time()) - timedelta(days=15)

    updated, proration = memberships.upgrade_membership(session, user.id, "premium", PRICES, now=now)

    assert updated.plan_type == "premium"
    assert updated.monthly_fee == Decimal("49")
    assert proration.net_amount == Decimal("10.00")


def test_upgrade_to_same_plan_is_rejected(session, make_user, make_gym, make_membership):
    user = make_user("upgrader")
    make_membership(user, make_gym(), plan_type="premium")

    with pytest.raises(ValidationError, match="already on this plan"):
        memberships.upgrade_membership(session, user.id, "premium", PRICES)


def test_upgrade_without_active_membership(session, make_user):
    user = make_user("nobody")

    with pytest.raises(ValidationError, match="No active membership found"):
        memberships.upgrade_membership(session, user.id, "vip", PRICES)


def test_newest_active_membership_wins(session, make_user, make_gym, make_membership):
    user = make_user("double")
    older = make_membership(user, make_gym(), plan_type="basic")
    newer = make_membership(user, make_gym(), plan_type="vip")
    older.created_at = newer.created_at - timedelta(days=1)
    session.commit()

    assert memberships.get_active_membership(session, user.id).id == newer.id
