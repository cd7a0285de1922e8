# backend/leettrack/identity.py
from flask_jwt_extended import get_jwt_identity

from . import db
from .errors import NotFound, Unauthenticated
from .models.user import User


def current_user_id() -> int:
    try:
        return int(get_jwt_identity())
    except (TypeError, ValueError):
        raise Unauthenticated("Invalid auth token")


def get_current_user() -> User:
    user = db.session.get(User, current_user_id())
    if not user:
        raise NotFound("user not found")
    return user
