"""Helpers for reading the bearer token issued by the SkillSwap API."""

from jose import JWTError, jwt

from notification_sync.domain.entities import UserRole, UserSession

# The API signs ``{"userId": ...}``; other issuers use ``sub`` or ``id``.
_USER_ID_CLAIMS = ("userId", "sub", "id")


def read_token_claims(token: str) -> dict:
    """Return the token claims without verifying the signature.

    The notification service verifies every request; the client only needs the
    claims to know who it is listening for.
    """

    try:
        return jwt.get_unverified_claims(token)
    except JWTError as exc:
        raise ValueError("Could not read token claims") from exc


def session_from_token(token: str, *, role: str | None = None) -> UserSession:
    claims = read_token_claims(token)
    user_id = next(
        (str(claims[name]) for name in _USER_ID_CLAIMS if claims.get(name)),
        None,
    )
    if not user_id:
        raise ValueError("Token does not identify a user")

    role_value = role or claims.get("role")
    try:
        user_role = UserRole(role_value) if role_value else None
    except ValueError:
        user_role = None
    return UserSession(user_id=user_id, token=token, role=user_role)
