import uuid

from fitclub.extensions import db
from fitclub.utils.timeutils import isoformat, utcnow


class WorkoutLog(db.Model):
    """One logged set. Rows are append-only."""

    __tablename__ = "workout_logs"

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    session_id = db.Column(db.String(36), db.ForeignKey("workout_sessions.id"), nullable=False, index=True)
    exercise_id = db.Column(db.String(36), db.ForeignKey("exercises.id"), nullable=False)
    set_number = db.Column(db.Integer, nullable=False)
    reps = db.Column(db.Integer)
    weight = db.Column(db.Float)
    duration_seconds = db.Column(db.Float)
    notes = db.Column(db.Text)
    completed_at = db.Column(db.DateTime, default=utcnow, nullable=False)

    session = db.relationship("WorkoutSession", back_populates="logs")
    exercise = db.relationship("Exercise")

    def to_dict(self):
        return {
            "id": self.id,
            "session_id": self.session_id,
            "exercise_id": self.exercise_id,
            "set_number": self.set_number,
            "reps": self.reps,
            "weight": self.weight,
            "duration_seconds": self.duration_seconds,
            "notes": self.notes,
            "completed_at": isoformat(self.completed_at),
        }
