"""User profile endpoints for API v1."""

from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from freelance_hub.api.v1._authz import require_admin, requires
from freelance_hub.core.dependencies import CurrentUser, get_db_session
from freelance_hub.schemas.users import UserResponse, UserStatsResponse
from freelance_hub.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=list[UserResponse])
def list_users(_admin: CurrentUser = Depends(require_admin), db: Session = Depends(get_db_session)) -> list[UserResponse]:
    return [UserResponse.model_validate(user) for user in UserService(db).find_all()]


@router.get("/me", response_model=UserResponse)
def get_me(user: CurrentUser = Depends(requires("users.me")), db: Session = Depends(get_db_session)) -> UserResponse:
    return UserResponse.model_validate(UserService(db).get_profile(user.user_id))


@router.get("/stats")
def get_stats(user: CurrentUser = Depends(requires("users.stats")), db: Session = Depends(get_db_session)) -> dict:
    stats = UserService(db).get_stats(user.user_id)
    return {
        "userId": user.user_id,
        "stats": UserStatsResponse.model_validate(stats).model_dump(mode="json", by_alias=True),
        "generatedAt": datetime.now(timezone.utc).isoformat(),
    }
