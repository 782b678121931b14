from fitclub.models import ClassSchedule, GymClass
from fitclub.utils.timeutils import end_of_day, start_of_day, utcnow


def list_classes(session, gym_id=None, category=None):
    query = session.query(GymClass).filter(GymClass.is_active.is_(True))
    if gym_id:
        query = query.filter(GymClass.gym_id == gym_id)
    if category:
        query = query.filter(GymClass.category == category)
    return query.order_by(GymClass.name.asc()).all()


def list_schedules(session, gym_id=None, class_id=None, start_date=None, end_date=None, now=None):
    """Upcoming, non-cancelled schedules, soonest first."""
    now = now or utcnow()
    query = session.query(ClassSchedule).filter(
        ClassSchedule.is_cancelled.is_(False),
        ClassSchedule.scheduled_at >= now,
    )
    if gym_id:
        query = query.filter(ClassSchedule.gym_id == gym_id)
    if class_id:
        query = query.filter(ClassSchedule.class_id == class_id)
    if start_date:
        query = query.filter(ClassSchedule.scheduled_at >= start_of_day(start_date))
    if end_date:
        query = query.filter(ClassSchedule.scheduled_at <= end_of_day(end_date))
    return query.order_by(ClassSchedule.scheduled_at.asc()).all()
