"""Application configuration."""

import os
from functools import lru_cache

from dotenv import load_dotenv

# Load environment variables
load_dotenv()


def _env_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() == "true"


class Settings:
    """Application settings loaded from environment variables."""

    def __init__(self):
        """Initialize settings from environment variables."""
        # API Settings
        self.api_title: str = os.getenv("API_TITLE", "Subjects API")
        self.api_version: str = os.getenv("API_VERSION", "0.1.0")
        self.debug: bool = _env_bool("DEBUG")
        self.environment: str = os.getenv("ENVIRONMENT", "development").lower()
        self.log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()

        # Server Settings
        self.host: str = os.getenv("HOST", "0.0.0.0")
        self.port: int = int(os.getenv("PORT", "8000"))

        # Database Settings
        self.mongo_url: str = os.getenv("MONGO_URL", "mongodb://localhost:27017")
        self.mongo_db: str = os.getenv("MONGO_DB", "subjects")
        self.mongo_timeout_ms: int = int(os.getenv("MONGO_TIMEOUT_MS", "5000"))
        self.subjects_collection: str = os.getenv("SUBJECTS_COLLECTION", "subjects")
        self.users_collection: str = os.getenv("USERS_COLLECTION", "users")

        # Behaviour
        self.unresolved_users: str = os.getenv("UNRESOLVED_USERS", "drop").lower()
        self.strict_errors: bool = _env_bool("STRICT_ERRORS")

        if self.unresolved_users not in ("drop", "placeholder"):
            raise ValueError(
                f"UNRESOLVED_USERS must be 'drop' or 'placeholder', "
                f"got {self.unresolved_users!r}"
            )

    @property
    def is_production(self) -> bool:
        """Whether the application runs in production mode."""
        return self.environment == "production"


@lru_cache
def get_settings() -> Settings:
    """Return the process settings, created on first use."""
    return Settings()
