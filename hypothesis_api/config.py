"""Client settings via environment variables."""
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

DEVELOPMENT_API_URL = "http://localhost:4000/api"
PRODUCTION_API_URL = "https://api.hypothesis.app"
API_VERSION = "v1"


class ClientSettings(BaseSettings):
    """Configuration read from HYPOTHESIS_* variables or a .env file."""

    model_config = SettingsConfigDict(
        env_prefix="HYPOTHESIS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    api_key: Optional[str] = None

    # Point at PRODUCTION_API_URL for released builds
    api_url: str = DEVELOPMENT_API_URL

    debug: bool = False

    # Seconds, handed to requests as-is
    timeout: float = 30

    max_retries: int = 0
