"""Endpoints used by mobile clients to register their push tokens."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from notifier.application.use_cases.notifications import PushTokenRegistry
from notifier.domain.entities import TokenRemovalResult
from notifier.infrastructure.database import get_db
from notifier.interfaces.api.dependencies import get_current_user_id
from notifier.interfaces.api.schemas import PushTokenCreate, PushTokenRead

router = APIRouter(prefix="/push-tokens", tags=["push-tokens"])


@router.get("/", response_model=list[PushTokenRead])
def list_push_tokens(
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
) -> list[PushTokenRead]:
    tokens = PushTokenRegistry(db).tokens_for(user_id)
    return [PushTokenRead.model_validate(token) for token in tokens]


@router.post("/", response_model=PushTokenRead, status_code=status.HTTP_201_CREATED)
def register_push_token(
    token_in: PushTokenCreate,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
) -> PushTokenRead:
    """Register the device token for the authenticated user.

    A token already registered by another account moves to this user.
    """

    try:
        token = PushTokenRegistry(db).register(user_id, token_in.token, token_in.platform)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return PushTokenRead.model_validate(token)


@router.delete("/{token}", status_code=status.HTTP_204_NO_CONTENT)
def unregister_push_token(
    token: str,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
) -> Response:
    result = PushTokenRegistry(db).remove(token, user_id)
    if result is TokenRemovalResult.NOT_FOUND:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Push token not found")
    if result is TokenRemovalResult.FORBIDDEN:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Push token belongs to another user",
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
