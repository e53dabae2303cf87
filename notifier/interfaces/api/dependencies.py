"""FastAPI dependency utilities."""

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer

from notifier.infrastructure.security import user_id_from_token

# Tokens are issued by the authentication service; the URL is informative only.
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/token")


def get_current_user_id(token: str = Depends(oauth2_scheme)) -> int:
    """Return the id of the user authenticated by the bearer token."""

    try:
        return user_id_from_token(token)
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Bearer"},
        ) from exc
