from fitclub.domain import profiles
from fitclub.models import User
from fitclub.utils.decorators import AuthUser


def test_first_access_creates_profile(session):
    user, created = profiles.ensure_profile(session, AuthUser(id="new-user", email="ana@example.com"))

    assert created is True
    assert user.full_name == "ana"
    assert profiles.ensure_profile(session, AuthUser(id="new-user", email="ana@example.com"))[1] is False


def test_concurrent_first_access_returns_existing_profile(session, make_user, monkeypatch):
    make_user("new-user", email="first@example.com")
    session.expunge_all()

    real_session = session()
    original_get = real_session.get
    calls = {"n": 0}

    def get_missing_once(*args, **kwargs):
        calls["n"] += 1
        if calls["n"] == 1:
            return None
        return original_get(*args, **kwargs)

    monkeypatch.setattr(real_session, "get", get_missing_once)

    user, created = profiles.ensure_profile(session, AuthUser(id="new-user", email="second@example.com"))

    assert created is False
    assert user.email == "first@example.com"
    assert session.query(User).count() == 1
