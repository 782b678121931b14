import uuid

from fitclub.extensions import db
from fitclub.utils.timeutils import isoformat, utcnow


class GymClass(db.Model):
    """A class template (e.g. "Morning Yoga") offered at a gym."""

    __tablename__ = "classes"

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    gym_id = db.Column(db.String(36), db.ForeignKey("gyms.id"), nullable=False, index=True)
    name = db.Column(db.String(150), nullable=False)
    description = db.Column(db.Text)
    category = db.Column(db.String(50), nullable=False, index=True)
    duration_minutes = db.Column(db.Integer, nullable=False, default=60)
    max_capacity = db.Column(db.Integer, nullable=False)
    difficulty = db.Column(db.String(20))
    instructor_name = db.Column(db.String(150))
    is_active = db.Column(db.Boolean, default=True, nullable=False)
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)

    gym = db.relationship("Gym", back_populates="classes")
    schedules = db.relationship("ClassSchedule", back_populates="gym_class", lazy="dynamic")

    def to_dict(self):
        return {
            "id": self.id,
            "gym_id": self.gym_id,
            "name": self.name,
            "description": self.description,
            "category": self.category,
            "duration_minutes": self.duration_minutes,
            "max_capacity": self.max_capacity,
            "difficulty": self.difficulty,
            "instructor_name": self.instructor_name,
            "is_active": self.is_active,
            "created_at": isoformat(self.created_at),
        }


class ClassSchedule(db.Model):
    """One dated occurrence of a class.

    ``spots_remaining`` is only ever changed by the capacity ledger in
    ``fitclub.domain.bookings.ledger``.
    """

    __tablename__ = "class_schedules"

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    gym_id = db.Column(db.String(36), db.ForeignKey("gyms.id"), nullable=False, index=True)
    class_id = db.Column(db.String(36), db.ForeignKey("classes.id"), nullable=False, index=True)
    scheduled_at = db.Column(db.DateTime, nullable=False, index=True)
    capacity = db.Column(db.Integer, nullable=False)
    spots_remaining = db.Column(db.Integer, nullable=False)
    is_cancelled = db.Column(db.Boolean, default=False, nullable=False)

    gym = db.relationship("Gym")
    gym_class = db.relationship("GymClass", back_populates="schedules")
    bookings = db.relationship("Booking", back_populates="schedule", lazy="dynamic")

    __table_args__ = (
        db.CheckConstraint("spots_remaining >= 0", name="ck_class_schedules_spots_non_negative"),
        db.CheckConstraint("spots_remaining <= capacity", name="ck_class_schedules_spots_within_capacity"),
    )

    def __init__(self, **kwargs):
        # a fresh schedule starts with every seat free unless told otherwise
        if "spots_remaining" not in kwargs and "capacity" in kwargs:
            kwargs["spots_remaining"] = kwargs["capacity"]
        super().__init__(**kwargs)

    def to_dict(self, include_class=False):
        data = {
            "id": self.id,
            "gym_id": self.gym_id,
            "class_id": self.class_id,
            "scheduled_at": isoformat(self.scheduled_at),
            "capacity": self.capacity,
            "spots_remaining": self.spots_remaining,
            "is_cancelled": self.is_cancelled,
        }
        if include_class:
            data["classes"] = self.gym_class.to_dict() if self.gym_class else None
        return data
