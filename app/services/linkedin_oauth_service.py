"""
LinkedIn OAuth Service.
Handles authorization URL generation, code exchange, token storage and
refresh-before-use for the user's LinkedIn integration.
"""

import asyncio
from datetime import timedelta
from urllib.parse import urlencode

import httpx
from pymongo.asynchronous.database import AsyncDatabase

from app.config import settings
from app.infrastructure.observability.logging import get_logger
from app.models.api.user_response import LinkedInCallbackResponse
from app.repositories.base import utcnow
from app.repositories.user_repository import UserRepository
from app.services.infrastructure.encryption_service import (
    EncryptionError,
    decrypt,
    encrypt,
    encrypt_oauth_tokens,
)
from app.services.oauth_state_service import OAuthStateService
from app.utils.errors import ExternalServiceError

logger = get_logger(__name__)

# OAuth configuration
LINKEDIN_AUTH_URL = "https://www.linkedin.com/oauth/v2/authorization"
LINKEDIN_TOKEN_URL = "https://www.linkedin.com/oauth/v2/accessToken"
LINKEDIN_USERINFO_URL = "https://api.linkedin.com/v2/userinfo"
LINKEDIN_SCOPES = "openid profile email w_member_social"

# Request timeouts and retry configuration
REQUEST_TIMEOUT = 10  # seconds
MAX_RETRIES = 3
BACKOFF_FACTOR = 2  # 2, 4 seconds
RETRY_STATUS_CODES = {429, 500, 502, 503, 504}


class LinkedInOAuthService:
    """
    Service for LinkedIn OAuth 2.0 operations.

    Tokens are encrypted before they are written to the user document; the
    plaintext only exists in memory while a request is being served.
    """

    def __init__(
        self,
        db: AsyncDatabase,
        state_service: OAuthStateService | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.users = UserRepository(db)
        self.states = state_service or OAuthStateService()
        self.transport = transport
        self.client_id = settings.LINKEDIN_CLIENT_ID or ""
        self.client_secret = settings.LINKEDIN_CLIENT_SECRET or ""
        self.redirect_uri = settings.linkedin_redirect_uri()

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=REQUEST_TIMEOUT, transport=self.transport)

    async def _post_with_retry(self, data: dict, operation: str) -> httpx.Response:
        """POST a form to the token endpoint, retrying transient statuses and network errors."""
        headers = {"Content-Type": "application/x-www-form-urlencoded"}

        async with self._client() as client:
            for attempt in range(1, MAX_RETRIES + 1):
                try:
                    response = await client.post(LINKEDIN_TOKEN_URL, data=data, headers=headers)
                except httpx.RequestError as exc:
                    if attempt == MAX_RETRIES:
                        logger.error(
                            "LinkedIn OAuth request failed",
                            operation=operation,
                            error=str(exc),
                            error_type=type(exc).__name__,
                        )
                        raise ExternalServiceError(f"LinkedIn {operation} failed") from exc
                    wait_time = BACKOFF_FACTOR**attempt
                    logger.warning(
                        "LinkedIn OAuth request error, retrying",
                        operation=operation,
                        attempt=attempt,
                        wait_time=wait_time,
                        error=str(exc),
                    )
                    await asyncio.sleep(wait_time)
                    continue

                if response.status_code in RETRY_STATUS_CODES and attempt < MAX_RETRIES:
                    wait_time = BACKOFF_FACTOR**attempt
                    logger.warning(
                        "LinkedIn OAuth transient status",
                        operation=operation,
                        status_code=response.status_code,
                        attempt=attempt,
                        wait_time=wait_time,
                    )
                    await asyncio.sleep(wait_time)
                    continue

                return response

        raise ExternalServiceError(f"LinkedIn {operation} failed")

    def _token_payload(self, response: httpx.Response, operation: str) -> dict:
        if not response.is_success:
            logger.error(
                "LinkedIn token endpoint rejected request",
                operation=operation,
                status_code=response.status_code,
            )
            raise ExternalServiceError(f"LinkedIn {operation} failed")

        try:
            payload = response.json()
        except ValueError as e:
            raise ExternalServiceError(f"LinkedIn {operation} returned invalid JSON") from e

        if not payload.get("access_token"):
            raise ExternalServiceError(f"LinkedIn {operation} returned no access token")
        return payload

    @staticmethod
    def _expires_at(payload: dict):
        return utcnow() + timedelta(seconds=int(payload.get("expires_in") or 0))

    async def get_authorization_url(self, user_id: str) -> str:
        """Build the LinkedIn consent URL with a fresh state bound to ``user_id``."""
        state = await self.states.generate_state(user_id)
        params = {
            "response_type": "code",
            "client_id": self.client_id,
            "redirect_uri": self.redirect_uri,
            "state": state,
            "scope": LINKEDIN_SCOPES,
        }
        logger.info("LinkedIn authorization URL generated", user_id=user_id)
        return f"{LINKEDIN_AUTH_URL}?{urlencode(params)}"

    async def exchange_code(self, code: str) -> dict:
        response = await self._post_with_retry(
            {
                "grant_type": "authorization_code",
                "code": code,
                "client_id": self.client_id,
                "client_secret": self.client_secret,
                "redirect_uri": self.redirect_uri,
            },
            "code exchange",
        )
        return self._token_payload(response, "code exchange")

    async def refresh_token(self, refresh_token: str) -> dict:
        response = await self._post_with_retry(
            {
                "grant_type": "refresh_token",
                "refresh_token": refresh_token,
                "client_id": self.client_id,
                "client_secret": self.client_secret,
            },
            "token refresh",
        )
        return self._token_payload(response, "token refresh")

    async def fetch_profile(self, access_token: str) -> dict:
        async with self._client() as client:
            try:
                response = await client.get(
                    LINKEDIN_USERINFO_URL, headers={"Authorization": f"Bearer {access_token}"}
                )
            except httpx.RequestError as e:
                raise ExternalServiceError("Failed to fetch LinkedIn profile") from e

        if not response.is_success:
            logger.error("LinkedIn userinfo request failed", status_code=response.status_code)
            raise ExternalServiceError("Failed to fetch LinkedIn profile")
        return response.json()

    async def handle_callback(
        self, code: str, state: str, user_id: str | None = None
    ) -> LinkedInCallbackResponse:
        """
        Complete the authorization-code flow: consume the state, exchange the
        code, read the profile and store the encrypted tokens.
        """
        owner_id = await self.states.consume_state(state, expected_user_id=user_id)

        tokens = await self.exchange_code(code)
        profile = await self.fetch_profile(tokens["access_token"])
        encrypted_access, encrypted_refresh = encrypt_oauth_tokens(
            tokens["access_token"], tokens.get("refresh_token")
        )

        user = await self.users.update(
            owner_id,
            {
                "linkedin_integration.connected": True,
                "linkedin_integration.access_token": encrypted_access,
                "linkedin_integration.refresh_token": encrypted_refresh,
                "linkedin_integration.expires_at": self._expires_at(tokens),
                "linkedin_integration.linkedin_id": profile.get("sub"),
                "linkedin_integration.profile_url": profile.get("profile"),
            },
        )

        logger.info(
            "LinkedIn account connected",
            user_id=owner_id,
            has_refresh_token=bool(encrypted_refresh),
        )
        return LinkedInCallbackResponse(
            success=True,
            linkedin_id=user.linkedin_integration.linkedin_id,
            profile_url=user.linkedin_integration.profile_url,
        )

    async def disconnect(self, user_id: str) -> None:
        await self.users.update(
            user_id,
            {
                "linkedin_integration.connected": False,
                "linkedin_integration.access_token": None,
                "linkedin_integration.refresh_token": None,
                "linkedin_integration.expires_at": None,
                "linkedin_integration.linkedin_id": None,
                "linkedin_integration.profile_url": None,
            },
        )
        logger.info("LinkedIn account disconnected", user_id=user_id)

    async def get_access_token(self, user_id: str) -> str | None:
        """
        Plaintext access token for calling LinkedIn, refreshed first when expired.

        Returns None when the user is not connected, or when the token expired
        and cannot be refreshed.
        """
        user = await self.users.find_by_id(user_id)
        integration = user.linkedin_integration
        if not integration.connected or not integration.access_token:
            return None

        if integration.expires_at is None or integration.expires_at > utcnow():
            return decrypt(integration.access_token)

        if not integration.refresh_token:
            logger.info("LinkedIn token expired without refresh token", user_id=user_id)
            return None

        try:
            tokens = await self.refresh_token(decrypt(integration.refresh_token))
        except (ExternalServiceError, EncryptionError) as e:
            logger.warning("Failed to refresh LinkedIn token", user_id=user_id, error=str(e))
            return None

        fields = {
            "linkedin_integration.access_token": encrypt(tokens["access_token"]),
            "linkedin_integration.expires_at": self._expires_at(tokens),
        }
        if tokens.get("refresh_token"):
            fields["linkedin_integration.refresh_token"] = encrypt(tokens["refresh_token"])
        await self.users.update(user_id, fields)

        logger.info("LinkedIn token refreshed", user_id=user_id)
        return tokens["access_token"]
