import uuid

from fitclub.extensions import db
from fitclub.utils.timeutils import isoformat, utcnow

PLAN_TYPES = ("basic", "premium", "vip")
MEMBERSHIP_STATUSES = ("active", "paused", "expired", "cancelled")


class Membership(db.Model):
    __tablename__ = "memberships"

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = db.Column(db.String(64), db.ForeignKey("users.id"), nullable=False, index=True)
    gym_id = db.Column(db.String(36), db.ForeignKey("gyms.id"), nullable=False)
    home_gym_id = db.Column(db.String(36), db.ForeignKey("gyms.id"))

    plan_type = db.Column(
        db.String(20),
        db.CheckConstraint("plan_type IN ('basic','premium','vip')", name="ck_memberships_plan_type"),
        nullable=False,
    )
    status = db.Column(
        db.String(20),
        db.CheckConstraint(
            "status IN ('active','paused','expired','cancelled')", name="ck_memberships_status"
        ),
        default="active",
        nullable=False,
        index=True,
    )
    monthly_fee = db.Column(db.Numeric(10, 2))
    start_date = db.Column(db.Date, nullable=False)
    end_date = db.Column(db.Date, nullable=False)  # end of the current billing cycle
    qr_code = db.Column(db.String(255))
    access_all_locations = db.Column(db.Boolean, default=False, nullable=False)
    auto_renew = db.Column(db.Boolean, default=True, nullable=False)

    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    user = db.relationship("User", back_populates="memberships")
    gym = db.relationship("Gym", foreign_keys=[gym_id])

    __table_args__ = (
        db.Index("idx_memberships_user_status", "user_id", "status"),
    )

    @property
    def is_active(self):
        return self.status == "active"

    def grants_access_to(self, gym_id):
        return self.access_all_locations or self.gym_id == gym_id

    def to_dict(self, include_gym=False):
        data = {
            "id": self.id,
            "user_id": self.user_id,
            "gym_id": self.gym_id,
            "home_gym_id": self.home_gym_id,
            "plan_type": self.plan_type,
            "status": self.status,
            "monthly_fee": float(self.monthly_fee) if self.monthly_fee is not None else None,
            "start_date": isoformat(self.start_date),
            "end_date": isoformat(self.end_date),
            "qr_code": self.qr_code,
            "access_all_locations": self.access_all_locations,
            "auto_renew": self.auto_renew,
            "created_at": isoformat(self.created_at),
            "updated_at": isoformat(self.updated_at),
        }
        if include_gym:
            data["gym"] = self.gym.to_dict() if self.gym else None
        return data
