from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from urllib.parse import unquote


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


def _env_list(name: str, default: str) -> list[str]:
    return [part.strip() for part in os.getenv(name, default).split(",") if part.strip()]


@dataclass
class Settings:
    app_name: str = os.getenv("APP_NAME", "AutoApply")
    environment: str = os.getenv("ENV", "development")
    database_url: str = os.getenv("DATABASE_URL", "sqlite:///./db/autoapply.db")
    session_secret: str = os.getenv("SESSION_SECRET", "autoapply-dev-secret")
    session_ttl_days: int = int(os.getenv("SESSION_TTL_DAYS", "30"))
    session_cookie_name: str = os.getenv("SESSION_COOKIE_NAME", "session_id")
    session_cookie_secure: bool = _env_flag("SESSION_COOKIE_SECURE", "true" if os.getenv("ENV") == "production" else "false")
    linkedin_client_id: str = os.getenv("LINKEDIN_CLIENT_ID", "")
    linkedin_client_secret: str = os.getenv("LINKEDIN_CLIENT_SECRET", "")
    linkedin_redirect_uri: str = os.getenv("LINKEDIN_REDIRECT_URI", "http://localhost:8000/api/linkedin/callback")
    linkedin_scope: str = os.getenv("LINKEDIN_SCOPE", "openid profile email")
    linkedin_token_ttl_days: int = int(os.getenv("LINKEDIN_TOKEN_TTL_DAYS", "60"))
    linkedin_timeout_seconds: float = float(os.getenv("LINKEDIN_TIMEOUT_SECONDS", "10"))
    seed_demo_data: bool = _env_flag("SEED_DEMO_DATA")
    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()
    log_format: str = os.getenv("LOG_FORMAT", "console").lower()
    cors_origins: list[str] = field(
        default_factory=lambda: _env_list(
            "CORS_ORIGINS",
            "http://localhost,http://localhost:5173,http://localhost:8000,http://127.0.0.1:8000",
        )
    )

    @property
    def linkedin_configured(self) -> bool:
        return bool(self.linkedin_client_id and self.linkedin_client_secret)

    def ensure_directories(self) -> None:
        self._ensure_sqlite_directory()

    def _ensure_sqlite_directory(self) -> None:
        if not self.database_url.startswith("sqlite:///"):
            return
        raw_path = self.database_url.replace("sqlite:///", "", 1)
        if not raw_path or raw_path == ":memory:":
            return
        db_path = Path(unquote(raw_path))
        if not db_path.is_absolute():
            db_path = Path(".") / db_path
        db_path.parent.mkdir(parents=True, exist_ok=True)


settings = Settings()
