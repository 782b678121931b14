from fitclub.extensions import db
from fitclub.utils.timeutils import isoformat, utcnow

USERS_TABLE = "users"


class User(db.Model):
    """Profile row for an identity issued by the external provider.

    ``id`` is the provider's subject claim, so there is no password here.
    """

    __tablename__ = USERS_TABLE

    id = db.Column(db.String(64), primary_key=True)
    email = db.Column(db.String(255), nullable=False, index=True)
    full_name = db.Column(db.String(150), nullable=False)
    avatar_url = db.Column(db.String(500))
    phone = db.Column(db.String(40))
    gender = db.Column(
        db.String(10),
        db.CheckConstraint("gender IN ('male','female','other')", name="ck_users_gender"),
    )
    date_of_birth = db.Column(db.Date)
    height_cm = db.Column(db.Float)
    fitness_level = db.Column(
        db.String(20),
        db.CheckConstraint(
            "fitness_level IN ('beginner','intermediate','advanced')", name="ck_users_fitness_level"
        ),
    )
    fitness_goals = db.Column(db.JSON, default=list)
    onboarding_completed = db.Column(db.Boolean, default=False, nullable=False)

    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    memberships = db.relationship("Membership", back_populates="user", lazy="dynamic", cascade="all, delete-orphan")
    check_ins = db.relationship("CheckIn", back_populates="user", lazy="dynamic", cascade="all, delete-orphan")
    bookings = db.relationship("Booking", back_populates="user", lazy="dynamic", cascade="all, delete-orphan")
    workout_sessions = db.relationship(
        "WorkoutSession", back_populates="user", lazy="dynamic", cascade="all, delete-orphan"
    )

    def to_dict(self):
        return {
            "id": self.id,
            "email": self.email,
            "full_name": self.full_name,
            "avatar_url": self.avatar_url,
            "phone": self.phone,
            "gender": self.gender,
            "date_of_birth": isoformat(self.date_of_birth),
            "height_cm": self.height_cm,
            "fitness_level": self.fitness_level,
            "fitness_goals": self.fitness_goals or [],
            "onboarding_completed": self.onboarding_completed,
            "created_at": isoformat(self.created_at),
            "updated_at": isoformat(self.updated_at),
        }
