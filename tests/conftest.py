from datetime import timedelta

import pytest
from flask_jwt_extended import create_access_token

from fitclub import create_app
from fitclub.config import TestingConfig
from fitclub.extensions import db as _db
from fitclub.models import ClassSchedule, Exercise, Gym, GymClass, Membership, User
from fitclub.utils.timeutils import utcnow


@pytest.fixture
def app():
    app = create_app(TestingConfig)
    with app.app_context():
        _db.create_all()
        yield app
        _db.session.remove()
        _db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def session(app):
    return _db.session


@pytest.fixture
def auth_headers(app):
    def make(user_id="user-1", email="member@example.com"):
        token = create_access_token(identity=user_id, additional_claims={"email": email})
        return {"Authorization": f"Bearer {token}"}
    return make


@pytest.fixture
def make_user(session):
    def make(user_id="user-1", email=None):
        user = User(id=user_id, email=email or f"{user_id}@example.com", full_name=user_id.title())
        session.add(user)
        session.commit()
        return user
    return make


@pytest.fixture
def make_gym(session):
    counter = {"n": 0}

    def make(name="Central", latitude=None, longitude=None, **kwargs):
        counter["n"] += 1
        gym = Gym(
            name=name,
            slug=f"{name.lower().replace(' ', '-')}-{counter['n']}",
            latitude=latitude,
            longitude=longitude,
            **kwargs,
        )
        session.add(gym)
        session.commit()
        return gym
    return make


@pytest.fixture
def make_membership(session):
    def make(user, gym, plan_type="basic", status="active", days_left=15, **kwargs):
        today = utcnow().date()
        membership = Membership(
            user_id=user.id,
            gym_id=gym.id,
            plan_type=plan_type,
            status=status,
            monthly_fee=29,
            start_date=today - timedelta(days=30 - days_left),
            end_date=today + timedelta(days=days_left),
            **kwargs,
        )
        session.add(membership)
        session.commit()
        return membership
    return make


@pytest.fixture
def make_schedule(session, make_gym):
    def make(capacity=1, starts_in=timedelta(days=1), gym=None, **kwargs):
        gym = gym or make_gym()
        gym_class = GymClass(gym_id=gym.id, name="Spin", category="cycling", max_capacity=capacity)
        session.add(gym_class)
        session.flush()
        schedule = ClassSchedule(
            gym_id=gym.id,
            class_id=gym_class.id,
            scheduled_at=utcnow() + starts_in,
            capacity=capacity,
            **kwargs,
        )
        session.add(schedule)
        session.commit()
        return schedule
    return make


@pytest.fixture
def make_exercise(session):
    def make(name="Bench Press", exercise_type="strength", muscle_groups=("chest",)):
        exercise = Exercise(name=name, exercise_type=exercise_type, muscle_groups=list(muscle_groups))
        session.add(exercise)
        session.commit()
        return exercise
    return make
