import uuid

from fitclub.extensions import db
from fitclub.utils.timeutils import isoformat, utcnow

GOAL_TYPES = ("weight_loss", "muscle_gain", "strength", "endurance", "flexibility", "body_fat", "consistency")


class Goal(db.Model):
    __tablename__ = "goals"

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = db.Column(db.String(64), db.ForeignKey("users.id"), nullable=False, index=True)
    name = db.Column(db.String(100), nullable=False)
    description = db.Column(db.Text)
    type = db.Column(db.String(30), nullable=False)
    target_value = db.Column(db.Float, nullable=False)
    current_value = db.Column(db.Float, nullable=False, default=0)
    unit = db.Column(db.String(20), nullable=False)
    start_date = db.Column(db.Date, nullable=False)
    target_date = db.Column(db.Date, nullable=False)
    status = db.Column(
        db.String(20),
        db.CheckConstraint("status IN ('active','completed','abandoned')", name="ck_goals_status"),
        default="active",
        nullable=False,
    )
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    def to_dict(self):
        return {
            "id": self.id,
            "user_id": self.user_id,
            "name": self.name,
            "description": self.description,
            "type": self.type,
            "target_value": self.target_value,
            "current_value": self.current_value,
            "unit": self.unit,
            "start_date": isoformat(self.start_date),
            "target_date": isoformat(self.target_date),
            "status": self.status,
            "created_at": isoformat(self.created_at),
            "updated_at": isoformat(self.updated_at),
        }
