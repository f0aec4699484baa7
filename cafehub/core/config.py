"""
cafehub/core/config.py

Purpose: Application configuration

- Loads environment variables (and .env)
- Centralizes MongoDB and Firebase credentials
- Validates configuration on startup
- Environment-specific settings
"""

from urllib.parse import quote_plus

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional, Literal


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Environment
    ENVIRONMENT: Literal["development", "staging", "production"] = "development"

    # MongoDB
    MONGODB_URL: Optional[str] = Field(
        default=None,
        description="Full MongoDB connection URI (overrides DB_USER/DB_PASS/MONGODB_HOST)"
    )
    DB_USER: Optional[str] = Field(
        default=None,
        description="MongoDB username used to assemble the connection URI"
    )
    DB_PASS: Optional[str] = Field(
        default=None,
        description="MongoDB password used to assemble the connection URI"
    )
    MONGODB_HOST: str = Field(
        default="localhost:27017",
        description="MongoDB host; an Atlas cluster host switches to mongodb+srv"
    )
    MONGODB_DB_NAME: str = Field(
        default="cafeHubDB",
        description="MongoDB database name"
    )
    COFFEES_COLLECTION: str = Field(default="coffees")
    USERS_COLLECTION: str = Field(default="users")

    # Firebase
    FIREBASE_CREDENTIALS_PATH: Optional[str] = Field(
        default=None,
        description="Path to the Firebase service-account JSON file"
    )
    FIREBASE_PROJECT_ID: Optional[str] = Field(
        default=None,
        description="Firebase project id (falls back to the credential's project)"
    )

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = Field(default=3000, description="HTTP port")
    DEBUG: bool = Field(default=False, description="Enable debug mode")
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )
    CORS_ORIGINS: list = Field(
        default=["*"],
        description="Allowed CORS origins"
    )
    SLOW_REQUEST_SECONDS: float = 5.0

    @property
    def mongodb_uri(self) -> Optional[str]:
        """
        Connection URI used by the Motor client.

        MONGODB_URL wins when set. Otherwise the URI is assembled from
        DB_USER/DB_PASS/MONGODB_HOST, using the SRV scheme for Atlas hosts.
        """
        if self.MONGODB_URL:
            # Fix URL encoding for special characters
            return self.MONGODB_URL.replace("%%", "%25")

        if not self.DB_USER or not self.DB_PASS:
            return f"mongodb://{self.MONGODB_HOST}"

        scheme = "mongodb+srv" if self.MONGODB_HOST.endswith(".mongodb.net") else "mongodb"
        credentials = f"{quote_plus(self.DB_USER)}:{quote_plus(self.DB_PASS)}"
        return f"{scheme}://{credentials}@{self.MONGODB_HOST}/?retryWrites=true&w=majority"

    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT == "development"

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"


# Global settings instance
settings = Settings()


def validate_settings(current: Optional[Settings] = None):
    """
    Validates critical settings on application startup.
    Raises ValueError if any required setting is missing or invalid.
    """
    current = current or settings
    errors = []

    if not current.MONGODB_URL and bool(current.DB_USER) != bool(current.DB_PASS):
        errors.append("DB_USER and DB_PASS must be set together")

    if not current.MONGODB_DB_NAME:
        errors.append("MONGODB_DB_NAME is required")

    if current.is_production and not current.FIREBASE_CREDENTIALS_PATH:
        errors.append("FIREBASE_CREDENTIALS_PATH is required in production")

    if errors:
        raise ValueError(f"Configuration validation failed: {', '.join(errors)}")

    return True
