"""Goals and body metrics."""

from fitclub.errors import NotFoundError, ValidationError
from fitclub.models import BodyMetric, Goal
from fitclub.utils.timeutils import to_naive_utc, utcnow

from .stats import metric_trend

TREND_KEYS = {"weightTrend": "weight", "bodyFatTrend": "body_fat"}


def _own(session, model, label, user_id, row_id):
    row = session.query(model).filter(model.id == row_id, model.user_id == user_id).first()
    if row is None:
        raise NotFoundError(label)
    return row


def _check_dates(start_date, target_date):
    if start_date and target_date and target_date <= start_date:
        raise ValidationError("Target date must be after start date")


# goals

def list_goals(session, user_id, status=None):
    query = session.query(Goal).filter(Goal.user_id == user_id)
    if status:
        query = query.filter(Goal.status == status)
    return query.order_by(Goal.created_at.desc()).all()


def get_goal(session, user_id, goal_id):
    return _own(session, Goal, "Goal", user_id, goal_id)


def create_goal(session, user_id, data):
    _check_dates(data.get("start_date"), data.get("target_date"))
    goal = Goal(user_id=user_id, **data)
    session.add(goal)
    session.commit()
    return goal


def update_goal(session, user_id, goal_id, data):
    goal = get_goal(session, user_id, goal_id)
    _check_dates(data.get("start_date", goal.start_date), data.get("target_date", goal.target_date))
    for field, value in data.items():
        setattr(goal, field, value)
    goal.updated_at = utcnow()
    session.commit()
    return goal


def update_goal_progress(session, user_id, goal_id, current_value):
    """Record progress; an active goal that reaches its target is completed."""
    goal = get_goal(session, user_id, goal_id)
    goal.current_value = current_value
    if goal.status == "active" and current_value >= goal.target_value:
        goal.status = "completed"
    goal.updated_at = utcnow()
    session.commit()
    return goal


def delete_goal(session, user_id, goal_id):
    goal = get_goal(session, user_id, goal_id)
    session.delete(goal)
    session.commit()


# body metrics

def list_metrics(session, user_id, limit=20, offset=0):
    query = session.query(BodyMetric).filter(BodyMetric.user_id == user_id)
    total = query.count()
    rows = query.order_by(BodyMetric.recorded_at.desc()).offset(offset).limit(limit).all()
    return rows, total


def get_metric(session, user_id, metric_id):
    return _own(session, BodyMetric, "Body metric", user_id, metric_id)


def create_metric(session, user_id, data):
    data = dict(data)
    data["recorded_at"] = to_naive_utc(data.get("recorded_at")) or utcnow()
    metric = BodyMetric(user_id=user_id, **data)
    session.add(metric)
    session.commit()
    return metric


def update_metric(session, user_id, metric_id, data):
    metric = get_metric(session, user_id, metric_id)
    if "recorded_at" in data:
        data = dict(data, recorded_at=to_naive_utc(data["recorded_at"]))
    for field, value in data.items():
        setattr(metric, field, value)
    metric.updated_at = utcnow()
    session.commit()
    return metric


def delete_metric(session, user_id, metric_id):
    metric = get_metric(session, user_id, metric_id)
    session.delete(metric)
    session.commit()


def metric_trends(session, user_id, days=30, now=None):
    rows = session.query(BodyMetric).filter(BodyMetric.user_id == user_id).all()
    return {key: metric_trend(rows, attr, days, now) for key, attr in TREND_KEYS.items()}
