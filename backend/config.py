"""Backend configuration loaded from environment variables."""

from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from .env file."""

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    # Qiita
    qiita_access_token: str = ""
    qiita_api_url: str = "https://qiita.com/api/v2"

    # Draft storage
    drafts_dir: Path = Path("drafts")

    # HTTP server
    host: str = "0.0.0.0"
    port: int = 3001
    cors_origins: list[str] = ["*"]

    log_level: str = "INFO"

    @property
    def items_url(self) -> str:
        """Endpoint that creates a Qiita item."""
        return f"{self.qiita_api_url.rstrip('/')}/items"


settings = Settings()
