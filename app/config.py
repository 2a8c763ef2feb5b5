import hashlib
import hmac
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_PATH = Path(__file__).resolve().parent.parent / ".env.local"


class Settings(BaseSettings):
    # Environment settings
    environment: str = "development"
    debug: bool = False
    LOG_LEVEL: str = "INFO"

    # MongoDB settings
    MONGODB_URI: str = "mongodb://localhost:27017"
    MONGODB_DB_NAME: str = "jobsearch"
    MONGODB_MIN_POOL_SIZE: int = 2
    MONGODB_MAX_POOL_SIZE: int = 10
    MONGODB_SERVER_SELECTION_TIMEOUT_MS: int = 5000

    # Redis settings (OAuth state)
    REDIS_URL: str = "redis://localhost:6379/0"

    # JWT settings
    JWT_SECRET: str | None = None
    JWT_REFRESH_SECRET: str | None = None
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 15
    REFRESH_TOKEN_EXPIRE_DAYS: int = 7

    ENCRYPTION_KEY: str | None = None

    # OpenAI settings
    OPENAI_API_KEY: str | None = None
    OPENAI_MODEL: str = "gpt-4o-mini"
    OPENAI_TIMEOUT_SECONDS: float = 30.0

    # LinkedIn OAuth settings
    LINKEDIN_CLIENT_ID: str | None = None
    LINKEDIN_CLIENT_SECRET: str | None = None
    LINKEDIN_REDIRECT_URI: str | None = None

    CORS_ORIGINS: list[str] = ["http://localhost:5173", "http://localhost:3000"]

    # Quotas
    DEFAULT_WEEKLY_CONNECTION_LIMIT: int = 100
    OAUTH_STATE_TTL_SECONDS: int = 3600

    model_config = SettingsConfigDict(
        env_file=str(ENV_PATH),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    def refresh_secret(self) -> str | None:
        """
        Secret for refresh tokens.

        Without a dedicated JWT_REFRESH_SECRET the key is derived from JWT_SECRET,
        so access and refresh tokens never verify against the same key.
        """
        if self.JWT_REFRESH_SECRET:
            return self.JWT_REFRESH_SECRET
        if self.JWT_SECRET:
            return hmac.new(self.JWT_SECRET.encode(), b"refresh-token", hashlib.sha256).hexdigest()
        return None

    def linkedin_redirect_uri(self) -> str:
        """Get LinkedIn OAuth redirect URI with fallback."""
        if self.LINKEDIN_REDIRECT_URI:
            return self.LINKEDIN_REDIRECT_URI
        # Default for local development
        return "http://localhost:8000/api/v1/linkedin/callback"

    def get_mongo_client_config(self) -> dict:
        """
        Get MongoDB client configuration.
        Adjust environment-specific settings based on self.environment.
        """
        config = {
            "minPoolSize": self.MONGODB_MIN_POOL_SIZE,
            "maxPoolSize": self.MONGODB_MAX_POOL_SIZE,
            "serverSelectionTimeoutMS": self.MONGODB_SERVER_SELECTION_TIMEOUT_MS,
            "retryWrites": True,
            "retryReads": True,
        }

        if self.environment == "development":
            # More conservative for local development
            config.update({"minPoolSize": 1, "maxPoolSize": 5})

        return config


settings = Settings()
