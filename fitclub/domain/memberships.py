"""Membership lookups and mid-cycle plan changes."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Mapping, Optional

from sqlalchemy.orm import Session

from fitclub.errors import ValidationError
from fitclub.models import Membership
from fitclub.utils.timeutils import to_naive_utc, utcnow

logger = logging.getLogger(__name__)

CENTS = Decimal("0.01")
ONE_DAY = timedelta(days=1)


@dataclass(frozen=True)
class Proration:
    current_plan_credit: Decimal
    new_plan_charge: Decimal
    net_amount: Decimal
    days_remaining: int

    def to_dict(self):
        return {
            "currentPlanCredit": float(self.current_plan_credit),
            "newPlanCharge": float(self.new_plan_charge),
            "netAmount": float(self.net_amount),
            "daysRemaining": self.days_remaining,
        }


def days_remaining_in_cycle(cycle_end, now: Optional[datetime] = None) -> int:
    """Whole days left until ``cycle_end``, rounded up and never negative."""
    now = to_naive_utc(now or utcnow())
    remaining = (to_naive_utc(cycle_end) - now) / ONE_DAY
    return max(0, math.ceil(remaining))


def compute_proration(current_plan_price, new_plan_price, days_remaining: int, cycle_length_days: int = 30) -> Proration:
    """Credit for the unused part of the current plan against the charge for the new one.

    >>> compute_proration(29, 49, 15).net_amount
    Decimal('10.00')
    """
    if cycle_length_days <= 0:
        raise ValueError("cycle_length_days must be positive")
    days = Decimal(max(0, int(days_remaining)))
    cycle = Decimal(cycle_length_days)
    credit = Decimal(str(current_plan_price)) * days / cycle
    charge = Decimal(str(new_plan_price)) * days / cycle
    return Proration(
        current_plan_credit=credit.quantize(CENTS, rounding=ROUND_HALF_UP),
        new_plan_charge=charge.quantize(CENTS, rounding=ROUND_HALF_UP),
        net_amount=(charge - credit).quantize(CENTS, rounding=ROUND_HALF_UP),
        days_remaining=int(days),
    )


def list_memberships(session: Session, user_id: str):
    return (
        session.query(Membership)
        .filter(Membership.user_id == user_id)
        .order_by(Membership.created_at.desc())
        .all()
    )


def get_active_membership(session: Session, user_id: str) -> Optional[Membership]:
    """Most recently created active membership.

    One active membership per user is assumed but not enforced; when several
    exist the newest wins and the anomaly is logged.
    """
    active = (
        session.query(Membership)
        .filter(Membership.user_id == user_id, Membership.status == "active")
        .order_by(Membership.created_at.desc(), Membership.id.desc())
        .all()
    )
    if len(active) > 1:
        logger.warning(f"User {user_id} has {len(active)} active memberships; using {active[0].id}")
    return active[0] if active else None


def upgrade_membership(session: Session, user_id: str, new_plan_type: str, plan_prices: Mapping[str, float],
                       cycle_length_days: int = 30, now: Optional[datetime] = None):
    """Switch the active membership to ``new_plan_type``.

    Returns ``(membership, proration)``. No money moves here; the proration
    is reported to the caller only.
    """
    now = now or utcnow()
    membership = get_active_membership(session, user_id)
    if membership is None:
        raise ValidationError("No active membership found")
    if membership.plan_type == new_plan_type:
        raise ValidationError("You are already on this plan")
    if new_plan_type not in plan_prices:
        raise ValidationError("Plan type must be basic, premium, or vip")

    previous_plan = membership.plan_type
    current_price = plan_prices.get(previous_plan, 0)
    new_price = plan_prices[new_plan_type]
    days_remaining = days_remaining_in_cycle(membership.end_date, now)
    proration = compute_proration(current_price, new_price, days_remaining, cycle_length_days)

    membership.plan_type = new_plan_type
    membership.monthly_fee = Decimal(str(new_price))
    membership.updated_at = now
    session.commit()

    logger.info(
        f"Membership {membership.id} upgraded for user {user_id} from {previous_plan} to {new_plan_type}; "
        f"prorated amount {proration.net_amount}"
    )
    return membership, proration
