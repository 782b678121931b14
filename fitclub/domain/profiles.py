import logging

from sqlalchemy.exc import IntegrityError

from fitclub.errors import NotFoundError
from fitclub.models import User
from fitclub.utils.timeutils import utcnow

logger = logging.getLogger(__name__)


def get_profile(session, user_id):
    return session.get(User, user_id)


def ensure_profile(session, auth_user):
    """Return ``(user, created)``, creating the profile row on first sight of a token subject.

    A concurrent first request may insert the same id first; the loser
    rolls back and returns the row the winner stored.
    """
    user = session.get(User, auth_user.id)
    if user is not None:
        return user, False

    email = auth_user.email or ""
    user = User(
        id=auth_user.id,
        email=email,
        full_name=email.split("@")[0] if email else "Member",
        fitness_goals=[],
    )
    session.add(user)
    try:
        session.commit()
    except IntegrityError:
        session.rollback()
        existing = session.get(User, auth_user.id)
        if existing is None:
            raise
        logger.info(f"Profile for user {auth_user.id} was provisioned concurrently")
        return existing, False
    logger.info(f"Provisioned profile for user {auth_user.id}")
    return user, True


def update_profile(session, user_id, data):
    user = session.get(User, user_id)
    if user is None:
        raise NotFoundError("Profile")
    for field, value in data.items():
        setattr(user, field, value)
    user.updated_at = utcnow()
    session.commit()
    return user


def complete_onboarding(session, user_id, data):
    data = dict(data, onboarding_completed=True)
    return update_profile(session, user_id, data)
