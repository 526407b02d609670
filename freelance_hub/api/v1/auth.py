"""Auth endpoints for API v1."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from freelance_hub.core.dependencies import get_db_session
from freelance_hub.schemas.auth import CredentialsRequest, TokenResponse
from freelance_hub.services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/signup", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
def signup(payload: CredentialsRequest, db: Session = Depends(get_db_session)) -> TokenResponse:
    token = AuthService(db).signup(email=payload.email, password=payload.password)
    return TokenResponse(access_token=token.access_token, token_type=token.token_type)


@router.post("/signin", response_model=TokenResponse)
def signin(payload: CredentialsRequest, db: Session = Depends(get_db_session)) -> TokenResponse:
    token = AuthService(db).signin(email=payload.email, password=payload.password)
    return TokenResponse(access_token=token.access_token, token_type=token.token_type)
