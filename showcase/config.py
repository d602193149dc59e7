from pydantic_settings import BaseSettings
from functools import lru_cache
from typing import List, Optional


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    The store credential pair (DATABASE_URL + STORAGE_PUBLIC_URL) is optional:
    when either is missing the app still starts, but every data operation
    answers with a "refresh the page" error instead of touching the store.
    """

    # Relational store + object storage (both required for data access)
    database_url: Optional[str] = None
    storage_public_url: Optional[str] = None

    # Object storage configuration
    storage_backend: str = "local"
    storage_local_path: str = "./data/storage"
    photo_bucket: str = "vehicle-photos"

    # Salesperson upload gate (shared code, not a security boundary)
    upload_code: str = "upload123"
    upload_bypass_code: Optional[str] = None

    # Inquiry notification side-channel
    notification_url: Optional[str] = None
    notification_token: Optional[str] = None
    notification_timeout: float = 10.0

    # CORS configuration
    cors_origins: str = "http://localhost:3000,http://localhost:5173"

    rate_limit_enabled: bool = True
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        case_sensitive = False

    @property
    def store_configured(self) -> bool:
        """True when both halves of the store credential pair are present."""
        return bool(self.database_url) and bool(self.storage_public_url)

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS origins from comma-separated string."""
        return [origin.strip() for origin in self.cors_origins.split(",")]


@lru_cache()
def get_settings():
    """Get cached settings instance."""
    try:
        return Settings()
    except Exception:
        print("\n" + "="*70)
        print("ERROR: Failed to load configuration!")
        print("="*70)
        print("\nInvalid environment variables.")
        print("\nThe showcase reads the following variables (see .env.example):")
        print("  - DATABASE_URL (store connection, e.g. postgresql://...)")
        print("  - STORAGE_PUBLIC_URL (base URL photos are served from)")
        print("  - STORAGE_LOCAL_PATH (optional, defaults to ./data/storage)")
        print("  - UPLOAD_CODE (optional, salesperson upload code)")
        print("  - NOTIFICATION_URL / NOTIFICATION_TOKEN (optional)")
        print("  - CORS_ORIGINS (optional, defaults to localhost)")
        print("="*70)
        raise
