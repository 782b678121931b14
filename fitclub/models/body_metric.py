import uuid

from fitclub.extensions import db
from fitclub.utils.timeutils import isoformat, utcnow


class BodyMetric(db.Model):
    __tablename__ = "body_metrics"

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = db.Column(db.String(64), db.ForeignKey("users.id"), nullable=False, index=True)
    recorded_at = db.Column(db.DateTime, nullable=False, index=True)
    weight = db.Column(db.Float)
    weight_unit = db.Column(db.String(10), default="kg")
    body_fat = db.Column(db.Float)
    muscle_mass = db.Column(db.Float)
    bmi = db.Column(db.Float)
    measurements = db.Column(db.JSON)  # chest, waist, hips, arms, thighs
    notes = db.Column(db.String(500))
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    __table_args__ = (
        db.Index("idx_body_metrics_user_recorded", "user_id", "recorded_at"),
    )

    def to_dict(self):
        return {
            "id": self.id,
            "user_id": self.user_id,
            "recorded_at": isoformat(self.recorded_at),
            "weight": self.weight,
            "weight_unit": self.weight_unit,
            "body_fat": self.body_fat,
            "muscle_mass": self.muscle_mass,
            "bmi": self.bmi,
            "measurements": self.measurements,
            "notes": self.notes,
            "created_at": isoformat(self.created_at),
            "updated_at": isoformat(self.updated_at),
        }
