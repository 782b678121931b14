import uuid

from fitclub.extensions import db
from fitclub.utils.timeutils import isoformat, utcnow


class Workout(db.Model):
    """A reusable workout plan; sessions may be started from it."""

    __tablename__ = "workouts"

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = db.Column(db.String(64), db.ForeignKey("users.id"), nullable=False, index=True)
    name = db.Column(db.String(150), nullable=False)
    description = db.Column(db.Text)
    workout_type = db.Column(db.String(50))
    estimated_duration_minutes = db.Column(db.Float, nullable=False)
    difficulty = db.Column(
        db.String(20),
        db.CheckConstraint(
            "difficulty IN ('beginner','intermediate','advanced')", name="ck_workouts_difficulty"
        ),
        nullable=False,
    )
    target_muscles = db.Column(db.JSON, default=list)
    # [{"exercise_id", "order_index", "sets", "reps", "duration", "weight", "rest_seconds", "notes"}]
    exercises = db.Column(db.JSON, default=list)
    is_template = db.Column(db.Boolean, default=False, nullable=False)
    is_public = db.Column(db.Boolean, default=False, nullable=False, index=True)

    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    def to_dict(self):
        return {
            "id": self.id,
            "user_id": self.user_id,
            "name": self.name,
            "description": self.description,
            "workout_type": self.workout_type,
            "estimated_duration_minutes": self.estimated_duration_minutes,
            "difficulty": self.difficulty,
            "target_muscles": self.target_muscles or [],
            "exercises": self.exercises or [],
            "is_template": self.is_template,
            "is_public": self.is_public,
            "created_at": isoformat(self.created_at),
            "updated_at": isoformat(self.updated_at),
        }
