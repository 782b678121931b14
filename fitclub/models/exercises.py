import uuid

from fitclub.extensions import db
from fitclub.utils.timeutils import isoformat, utcnow


class Exercise(db.Model):
    __tablename__ = "exercises"

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = db.Column(db.String(150), nullable=False, index=True)
    description = db.Column(db.Text)
    exercise_type = db.Column(db.String(50), nullable=False)  # strength, cardio, mobility...
    muscle_groups = db.Column(db.JSON, default=list)
    equipment = db.Column(db.JSON, default=list)
    difficulty = db.Column(db.String(20))
    instructions = db.Column(db.JSON, default=list)
    image_url = db.Column(db.String(500))
    video_url = db.Column(db.String(500))
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "exercise_type": self.exercise_type,
            "muscle_groups": self.muscle_groups or [],
            "equipment": self.equipment or [],
            "difficulty": self.difficulty,
            "instructions": self.instructions or [],
            "image_url": self.image_url,
            "video_url": self.video_url,
            "created_at": isoformat(self.created_at),
        }
