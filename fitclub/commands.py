"""Flask CLI commands: ``flask seed-demo`` and ``flask check-schedules``."""

from collections import defaultdict
from datetime import timedelta

import click

from fitclub.extensions import db
from fitclub.models import ClassSchedule, Exercise, Gym, GymClass
from fitclub.utils.timeutils import start_of_day, utcnow

DEMO_GYM_SLUG = "fitclub-downtown"

DEMO_EXERCISES = [
    {"name": "Barbell Back Squat", "exercise_type": "strength", "muscle_groups": ["quadriceps", "glutes"],
     "equipment": ["barbell"], "difficulty": "intermediate"},
    {"name": "Bench Press", "exercise_type": "strength", "muscle_groups": ["chest", "triceps"],
     "equipment": ["barbell", "bench"], "difficulty": "intermediate"},
    {"name": "Deadlift", "exercise_type": "strength", "muscle_groups": ["hamstrings", "back"],
     "equipment": ["barbell"], "difficulty": "advanced"},
    {"name": "Plank", "exercise_type": "core", "muscle_groups": ["core"],
     "equipment": [], "difficulty": "beginner"},
    {"name": "Rowing Machine", "exercise_type": "cardio", "muscle_groups": ["back", "legs"],
     "equipment": ["rower"], "difficulty": "beginner"},
]


def seed_demo_data(session, days=7, now=None):
    """Create a demo gym with one class scheduled daily at 07:00 and 18:00.

    Returns the gym, or ``None`` when it already exists.
    """
    now = now or utcnow()
    if session.query(Gym).filter_by(slug=DEMO_GYM_SLUG).first() is not None:
        return None

    gym = Gym(
        name="FitClub Downtown",
        slug=DEMO_GYM_SLUG,
        address="1 Main Street",
        city="Springfield",
        country="US",
        latitude=40.7128,
        longitude=-74.0060,
        amenities=["showers", "lockers", "sauna"],
        capacity=150,
    )
    session.add(gym)
    session.flush()

    yoga = GymClass(
        gym_id=gym.id,
        name="Morning Yoga",
        category="yoga",
        duration_minutes=60,
        max_capacity=20,
        difficulty="beginner",
        instructor_name="Alex Rivera",
    )
    session.add(yoga)
    session.flush()

    today = start_of_day(now.date())
    for offset in range(1, days + 1):
        for hour in (7, 18):
            session.add(ClassSchedule(
                gym_id=gym.id,
                class_id=yoga.id,
                scheduled_at=today + timedelta(days=offset, hours=hour),
                capacity=yoga.max_capacity,
            ))

    existing = {name for (name,) in session.query(Exercise.name).all()}
    for data in DEMO_EXERCISES:
        if data["name"] not in existing:
            session.add(Exercise(**data))

    session.commit()
    return gym


def register_commands(app):
    @app.cli.command("seed-demo")
    @click.option("--days", default=7, show_default=True, help="Days of schedules to create.")
    def seed_demo(days):
        """Load a demo gym, class, schedules and exercises."""
        gym = seed_demo_data(db.session, days)
        if gym is None:
            click.echo(f"Demo gym '{DEMO_GYM_SLUG}' already exists.")
            return
        click.echo(f"Created demo gym {gym.id} with {days * 2} schedules.")

    @app.cli.command("check-schedules")
    @click.option("--limit", default=5, show_default=True, help="Upcoming schedules to list.")
    def check_schedules(limit):
        """Summarise class schedules per gym and list the next ones."""
        schedules = db.session.query(ClassSchedule).order_by(ClassSchedule.scheduled_at.asc()).all()
        click.echo(f"Total schedules: {len(schedules)}")

        by_gym = defaultdict(list)
        for schedule in schedules:
            by_gym[schedule.gym_id].append(schedule)
        for gym_id, rows in by_gym.items():
            click.echo(
                f"Gym {gym_id}: {len(rows)} schedules, "
                f"{rows[0].scheduled_at.isoformat()} .. {rows[-1].scheduled_at.isoformat()}"
            )

        now = utcnow()
        upcoming = [s for s in schedules if s.scheduled_at > now and not s.is_cancelled][:limit]
        if not upcoming:
            click.echo("No upcoming schedules.")
        for schedule in upcoming:
            click.echo(
                f"  {schedule.scheduled_at.isoformat()}  {schedule.id}  "
                f"{schedule.spots_remaining}/{schedule.capacity} spots left"
            )
