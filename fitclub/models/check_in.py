import uuid

from fitclub.extensions import db
from fitclub.utils.timeutils import isoformat, utcnow


class CheckIn(db.Model):
    __tablename__ = "check_ins"

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = db.Column(db.String(64), db.ForeignKey("users.id"), nullable=False, index=True)
    gym_id = db.Column(db.String(36), db.ForeignKey("gyms.id"), nullable=False)
    membership_id = db.Column(db.String(36), db.ForeignKey("memberships.id"), nullable=False)

    checked_in_at = db.Column(db.DateTime, default=utcnow, nullable=False, index=True)
    checked_out_at = db.Column(db.DateTime)
    duration_minutes = db.Column(db.Integer)  # set once, at check-out

    user = db.relationship("User", back_populates="check_ins")
    gym = db.relationship("Gym")
    membership = db.relationship("Membership")

    __table_args__ = (
        # at most one open visit per user
        db.Index(
            "uq_check_ins_one_open_per_user",
            "user_id",
            unique=True,
            postgresql_where=db.text("checked_out_at IS NULL"),
            sqlite_where=db.text("checked_out_at IS NULL"),
        ),
    )

    @property
    def is_open(self):
        return self.checked_out_at is None

    def to_dict(self, include_gym=False):
        data = {
            "id": self.id,
            "user_id": self.user_id,
            "gym_id": self.gym_id,
            "membership_id": self.membership_id,
            "checked_in_at": isoformat(self.checked_in_at),
            "checked_out_at": isoformat(self.checked_out_at),
            "duration_minutes": self.duration_minutes,
        }
        if include_gym:
            data["gym"] = self.gym.to_dict() if self.gym else None
        return data
