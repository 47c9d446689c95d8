from typing import List, Optional

from flask import current_app

from triviabot import db
from triviabot.errors import NotFound, ValidationError
from triviabot.models import User

MAX_TOP_USERS = 100


def get_users_top(count: Optional[int] = None) -> List[User]:
    """Users with the most points, ties broken by who joined first."""
    if count is None:
        count = int(current_app.config.get('TOP_USERS_DEFAULT', 6))
    if not 1 <= count <= MAX_TOP_USERS:
        raise ValidationError(f'count must be between 1 and {MAX_TOP_USERS}')
    return User.query.order_by(User.points.desc(), User.id.asc()).limit(count).all()


def get_user(user_id: int) -> User:
    user = db.session.get(User, user_id)
    if user is None:
        raise NotFound('User not found')
    return user
