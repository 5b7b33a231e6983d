"""Identity boundary: turns the authenticated request user into a UserIdentity."""

from rest_framework.request import Request

from events.domain import UserIdentity


def identity_from_request(request: Request) -> UserIdentity | None:
    """Return the caller's identity, or None for anonymous requests.

    The identity is trusted as-is; it is not re-verified downstream.
    """
    user = request.user
    if user is None or not user.is_authenticated:
        return None
    return UserIdentity.from_names(
        user_id=str(user.pk),
        first_name=getattr(user, "first_name", ""),
        last_name=getattr(user, "last_name", ""),
        email=getattr(user, "email", ""),
    )
