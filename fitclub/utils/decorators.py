# fitclub/utils/decorators.py
from dataclasses import dataclass
from functools import wraps

from flask_jwt_extended import get_jwt, get_jwt_identity, verify_jwt_in_request

from fitclub.errors import UnauthorizedError


@dataclass(frozen=True)
class AuthUser:
    id: str
    email: str


def auth_required(view_func):
    """
    Verify the bearer token and pass the caller to the view as ``current_user``.
    Token problems are rendered by the JWT loaders registered in the factory.
    """
    @wraps(view_func)
    def wrapper(*args, **kwargs):
        verify_jwt_in_request()
        user_id = get_jwt_identity()
        if not user_id:
            raise UnauthorizedError("Invalid or expired token")
        claims = get_jwt()
        kwargs["current_user"] = AuthUser(id=str(user_id), email=claims.get("email") or "")
        return view_func(*args, **kwargs)
    return wrapper
