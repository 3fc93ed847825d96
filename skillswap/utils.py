from datetime import datetime, timezone

from flask_jwt_extended import get_jwt_identity


def utcnow():
    """Naive UTC timestamp, the form the DateTime columns store."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def get_current_user_id():
    """Return the token subject, creating the caller's profile on first use."""
    from skillswap import db
    from skillswap.models import Profile

    user_id = str(get_jwt_identity())
    if db.session.get(Profile, user_id) is None:
        db.session.add(Profile(id=user_id))
        db.session.commit()
        print(f"[DEBUG] Created profile for user ID {user_id}.")
    return user_id
