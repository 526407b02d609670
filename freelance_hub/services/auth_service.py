"""Signup and signin workflows."""

from __future__ import annotations

import logging

from freelance_hub.auth.jwt import AccessToken, create_access_token
from freelance_hub.core.config import Config, get_config
from freelance_hub.core.exceptions import AuthenticationError, ConflictError, ValidationError
from freelance_hub.core.security import hash_password, verify_password
from freelance_hub.models import User, UserRole
from freelance_hub.services.base_service import BaseService
from freelance_hub.utils.validators import is_valid_email

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials."


class AuthService(BaseService):
    def __init__(self, db=None, settings: Config | None = None) -> None:
        super().__init__(db)
        self.settings = settings or get_config()

    def _issue_token(self, user: User) -> AccessToken:
        return create_access_token(
            user_id=user.id,
            email=user.email,
            role=UserRole(user.role).value,
            secret=self.settings.JWT_SECRET,
            ttl_minutes=self.settings.JWT_ACCESS_TTL_MINUTES,
        )

    def signup(self, email: str, password: str, role: UserRole = UserRole.USER) -> AccessToken:
        normalized = email.strip().lower()
        if not is_valid_email(normalized):
            raise ValidationError("email must be a valid email address.")
        if self.db.query(User.id).filter(User.email == normalized).first():
            raise ConflictError("Email already exists.")

        user = User(
            email=normalized,
            hashed_password=hash_password(password, iterations=self.settings.PASSWORD_HASH_ITERATIONS),
            role=role,
        )
        self.db.add(user)
        self.commit(conflict_message="Email already exists.")
        self.db.refresh(user)
        logger.info("auth.signup", extra={"event": "auth.signup", "user_id": user.id})
        return self._issue_token(user)

    def signin(self, email: str, password: str) -> AccessToken:
        user = self.db.query(User).filter(User.email == email.strip().lower()).first()
        if user is None or not verify_password(password, user.hashed_password):
            logger.info("auth.signin.rejected", extra={"event": "auth.signin.rejected"})
            raise AuthenticationError(INVALID_CREDENTIALS)
        return self._issue_token(user)
