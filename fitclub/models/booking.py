import uuid

from fitclub.extensions import db
from fitclub.utils.timeutils import isoformat, utcnow

CONFIRMED = "confirmed"
WAITLIST = "waitlist"
CANCELLED = "cancelled"
ATTENDED = "attended"

ACTIVE_BOOKING_STATUSES = (CONFIRMED, WAITLIST)
BOOKING_STATUSES = (CONFIRMED, WAITLIST, CANCELLED, ATTENDED)


class Booking(db.Model):
    __tablename__ = "bookings"

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = db.Column(db.String(64), db.ForeignKey("users.id"), nullable=False, index=True)
    class_schedule_id = db.Column(db.String(36), db.ForeignKey("class_schedules.id"), nullable=False, index=True)
    status = db.Column(
        db.String(20),
        db.CheckConstraint(
            "status IN ('confirmed','waitlist','cancelled','attended')", name="ck_bookings_status"
        ),
        nullable=False,
    )
    booked_at = db.Column(db.DateTime, default=utcnow, nullable=False)
    cancelled_at = db.Column(db.DateTime)

    user = db.relationship("User", back_populates="bookings")
    schedule = db.relationship("ClassSchedule", back_populates="bookings")

    __table_args__ = (
        # one live claim per (user, schedule); cancelled rows stay for history
        db.Index(
            "uq_bookings_one_active_per_user_schedule",
            "user_id",
            "class_schedule_id",
            unique=True,
            postgresql_where=db.text("status IN ('confirmed','waitlist')"),
            sqlite_where=db.text("status IN ('confirmed','waitlist')"),
        ),
        db.Index("idx_bookings_waitlist_order", "class_schedule_id", "status", "booked_at"),
    )

    @property
    def is_active(self):
        return self.status in ACTIVE_BOOKING_STATUSES

    def to_dict(self, include_schedule=False):
        data = {
            "id": self.id,
            "user_id": self.user_id,
            "class_schedule_id": self.class_schedule_id,
            "status": self.status,
            "booked_at": isoformat(self.booked_at),
            "cancelled_at": isoformat(self.cancelled_at),
        }
        if include_schedule:
            data["schedule"] = self.schedule.to_dict(include_class=True) if self.schedule else None
        return data
