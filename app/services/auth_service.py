# app/services/auth_service.py
"""
Registration, login, token refresh and profile lookup.

Login failures never say whether the email or the password was wrong.
"""

from pymongo.asynchronous.database import AsyncDatabase
from werkzeug.security import check_password_hash, generate_password_hash

from app.auth.tokens import generate_access_token, generate_token_pair, verify_refresh_token
from app.config import settings
from app.infrastructure.observability.logging import get_logger
from app.models.api.auth_response import AuthResponse
from app.models.domain.user_domain import (
    EmailNotification,
    NotificationPreferences,
    UserProfile,
)
from app.repositories.base import utcnow
from app.repositories.user_repository import EMAIL_TAKEN_MESSAGE, UserRepository
from app.utils.errors import ConflictError, UnauthorizedError, ValidationError
from app.utils.time_windows import start_of_week
from app.utils.validation import is_valid_email, validate_string_length, validate_timezone

logger = get_logger(__name__)

INVALID_CREDENTIALS_MESSAGE = "Invalid email or password"
MIN_PASSWORD_LENGTH = 8


class AuthService:
    def __init__(self, db: AsyncDatabase):
        self.users = UserRepository(db)

    async def register(
        self, email: str, password: str, name: str, timezone: str = "UTC"
    ) -> AuthResponse:
        if not is_valid_email(email):
            raise ValidationError("Invalid email format")
        validate_string_length("Password", password, min_length=MIN_PASSWORD_LENGTH)
        validate_string_length("Name", name, min_length=1, max_length=200)
        validate_timezone(timezone)

        email = email.lower()
        if await self.users.find_by_email(email):
            raise ConflictError(EMAIL_TAKEN_MESSAGE)

        user = await self.users.insert(
            {
                "email": email,
                "password_hash": generate_password_hash(password),
                "name": name,
                "timezone": timezone,
                "bio": "",
                "skills": [],
                "target_industries": [],
                "target_regions": [],
                "weekly_connection_limit": settings.DEFAULT_WEEKLY_CONNECTION_LIMIT,
                "week_start_date": start_of_week(utcnow(), timezone),
                "linkedin_integration": {"connected": False},
                "notifications": NotificationPreferences(
                    email=EmailNotification(enabled=True, address=email)
                ),
            }
        )

        logger.info("User registered", user_id=user.id)
        tokens = generate_token_pair(user.id)
        return AuthResponse(
            user=user.to_profile(),
            access_token=tokens.access_token,
            refresh_token=tokens.refresh_token,
        )

    async def login(self, email: str, password: str) -> AuthResponse:
        user = await self.users.find_by_email(email or "")
        if user is None or not check_password_hash(user.password_hash, password or ""):
            logger.info("Login rejected")
            raise UnauthorizedError(INVALID_CREDENTIALS_MESSAGE)

        # updatedAt doubles as last-login
        user = await self.users.update(user.id)

        logger.info("User logged in", user_id=user.id)
        tokens = generate_token_pair(user.id)
        return AuthResponse(
            user=user.to_profile(),
            access_token=tokens.access_token,
            refresh_token=tokens.refresh_token,
        )

    @staticmethod
    def refresh_access_token(refresh_token: str) -> str:
        """Mint a new access token for the refresh token's subject. The refresh token is kept."""
        payload = verify_refresh_token(refresh_token)
        return generate_access_token(payload.user_id)

    async def get_profile(self, user_id: str) -> UserProfile:
        user = await self.users.find_by_id(user_id)
        return user.to_profile()
