"""JWT helpers shared with the authentication service.

Tokens are issued elsewhere; this service only needs to verify them. The
``sub`` claim carries the numeric user id.
"""

from jose import JWTError, jwt

from notifier.config import get_settings

ALGORITHM = "HS256"


def decode_access_token(token: str) -> dict:
    settings = get_settings()
    try:
        return jwt.decode(token, settings.secret_key, algorithms=[ALGORITHM])
    except JWTError as exc:
        raise ValueError("Could not validate credentials") from exc


def user_id_from_token(token: str) -> int:
    """Return the user id carried by ``token`` or raise ``ValueError``."""

    subject = decode_access_token(token).get("sub")
    try:
        user_id = int(subject)
    except (TypeError, ValueError) as exc:
        raise ValueError("Token subject is not a user id") from exc
    if user_id <= 0:
        raise ValueError("Token subject is not a user id")
    return user_id
