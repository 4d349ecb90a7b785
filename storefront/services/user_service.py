from storefront.errors import ConflictError, NotFoundError, ValidationError
from storefront.extensions import db
from storefront.models.base import utcnow
from storefront.models.user import User
from storefront.services import atomic


def username_taken(username):
    return User.active().filter_by(username=username).first() is not None


def get_user(user_id):
    user = User.active().filter_by(id=user_id).first()
    if not user:
        raise NotFoundError("user", user_id)
    return user


def create_user(data):
    if username_taken(data.username):
        raise ConflictError("username already taken")

    with atomic("create user", conflict_message="username already taken"):
        user = User(
            first_name=data.first_name,
            last_name=data.last_name,
            username=data.username,
            email=data.email,
            is_admin=data.is_admin,
        )
        user.set_password(data.password)
        db.session.add(user)
    return user


def update_user(user_id, data):
    """Apply profile changes; the current password must be supplied."""
    user = get_user(user_id)
    if not user.check_password(data.current_password):
        raise ValidationError("current password is incorrect")

    changes = {k: v for k, v in data.changes().items() if v is not None}
    new_username = changes.get("username")
    if new_username and new_username != user.username and username_taken(new_username):
        raise ConflictError("username already taken")

    with atomic("update user", conflict_message="username already taken"):
        for field, value in changes.items():
            setattr(user, field, value)
        if data.new_password:
            user.set_password(data.new_password)
        user.updated_on = utcnow()
    return user


def archive_user(user_id):
    user = get_user(user_id)
    with atomic("archive user"):
        user.archive()
    return user
