import uuid

from fitclub.extensions import db
from fitclub.utils.timeutils import isoformat, utcnow

IN_PROGRESS = "in_progress"
COMPLETED = "completed"
CANCELLED = "cancelled"


class WorkoutSession(db.Model):
    __tablename__ = "workout_sessions"

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = db.Column(db.String(64), db.ForeignKey("users.id"), nullable=False, index=True)
    workout_id = db.Column(db.String(36), db.ForeignKey("workouts.id"))
    name = db.Column(db.String(150), nullable=False, default="Quick Workout")
    notes = db.Column(db.Text)

    status = db.Column(
        db.String(20),
        db.CheckConstraint(
            "status IN ('in_progress','completed','cancelled')", name="ck_workout_sessions_status"
        ),
        default=IN_PROGRESS,
        nullable=False,
    )
    started_at = db.Column(db.DateTime, default=utcnow, nullable=False)
    completed_at = db.Column(db.DateTime, index=True)

    # Derived once, when the session is completed
    duration_minutes = db.Column(db.Integer)
    total_sets = db.Column(db.Integer)
    total_reps = db.Column(db.Integer)
    total_volume = db.Column(db.Float)

    user = db.relationship("User", back_populates="workout_sessions")
    workout = db.relationship("Workout")
    logs = db.relationship(
        "WorkoutLog",
        back_populates="session",
        order_by="WorkoutLog.completed_at",
        cascade="all, delete-orphan",
    )

    __table_args__ = (
        db.Index(
            "uq_workout_sessions_one_in_progress_per_user",
            "user_id",
            unique=True,
            postgresql_where=db.text("status = 'in_progress'"),
            sqlite_where=db.text("status = 'in_progress'"),
        ),
        db.Index("idx_workout_sessions_user_completed", "user_id", "completed_at"),
    )

    @property
    def is_open(self):
        return self.status == IN_PROGRESS

    def to_dict(self, include_workout=False, include_logs=False):
        data = {
            "id": self.id,
            "user_id": self.user_id,
            "workout_id": self.workout_id,
            "name": self.name,
            "notes": self.notes,
            "status": self.status,
            "started_at": isoformat(self.started_at),
            "completed_at": isoformat(self.completed_at),
            "duration_minutes": self.duration_minutes,
            "total_sets": self.total_sets,
            "total_reps": self.total_reps,
            "total_volume": self.total_volume,
        }
        if include_workout:
            data["workout"] = self.workout.to_dict() if self.workout else None
        if include_logs:
            data["logs"] = [log.to_dict() for log in self.logs]
        return data
