from src.auth.dtos import SessionUser


def resolve_attendee_email(email: str | None, user: SessionUser | None) -> str | None:
    """An explicit ``email`` wins over the signed-in user's address."""
    if email:
        return email
    if user is not None:
        return user.email
    return None
