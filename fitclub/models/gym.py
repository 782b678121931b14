import uuid

from fitclub.extensions import db
from fitclub.utils.timeutils import isoformat, utcnow


class Gym(db.Model):
    __tablename__ = "gyms"

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = db.Column(db.String(150), nullable=False)
    slug = db.Column(db.String(150), unique=True, nullable=False)
    address = db.Column(db.String(255), nullable=False, default="")
    city = db.Column(db.String(100), nullable=False, default="", index=True)
    country = db.Column(db.String(100), nullable=False, default="")
    phone = db.Column(db.String(40))
    email = db.Column(db.String(255))
    latitude = db.Column(db.Float)
    longitude = db.Column(db.Float)
    description = db.Column(db.Text)
    amenities = db.Column(db.JSON, default=list)
    images = db.Column(db.JSON, default=list)
    opening_hours = db.Column(db.JSON, default=dict)  # {"mon": {"open": "06:00", "close": "22:00"}}
    capacity = db.Column(db.Integer)
    current_occupancy = db.Column(db.Integer, default=0)
    is_active = db.Column(db.Boolean, default=True, nullable=False, index=True)

    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    classes = db.relationship("GymClass", back_populates="gym", lazy="dynamic", cascade="all, delete-orphan")

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "slug": self.slug,
            "address": self.address,
            "city": self.city,
            "country": self.country,
            "phone": self.phone,
            "email": self.email,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "description": self.description,
            "amenities": self.amenities or [],
            "images": self.images or [],
            "opening_hours": self.opening_hours or {},
            "capacity": self.capacity,
            "current_occupancy": self.current_occupancy,
            "is_active": self.is_active,
            "created_at": isoformat(self.created_at),
            "updated_at": isoformat(self.updated_at),
        }
