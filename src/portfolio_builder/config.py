"""Application configuration loaded from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

_DEFAULT_MAX_UPLOAD_BYTES = 5 * 1024 * 1024


def _env(key: str, default: str = "") -> str:
    return os.environ.get(key, default)


def _env_int(key: str, default: int) -> int:
    value = _env(key)
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{key} must be an integer, got {value!r}") from None


@dataclass(frozen=True)
class AppConfig:
    env: str = field(default_factory=lambda: _env("APP_ENV", "development"))
    log_level: str = field(default_factory=lambda: _env("LOG_LEVEL", "INFO"))
    host: str = field(default_factory=lambda: _env("HOST", "127.0.0.1"))
    port: int = field(default_factory=lambda: _env_int("PORT", 3000))

    @property
    def is_development(self) -> bool:
        return self.env == "development"


@dataclass(frozen=True)
class StorageConfig:
    public_dir: Path = field(
        default_factory=lambda: Path(_env("PORTFOLIO_PUBLIC_DIR", "public"))
    )
    dist_dir: Path = field(default_factory=lambda: Path(_env("PORTFOLIO_DIST_DIR", "dist")))
    data_file: Path = field(
        default_factory=lambda: Path(_env("PORTFOLIO_DATA_FILE", "portfolio-data.json"))
    )
    sessions_dir: Path = field(
        default_factory=lambda: Path(_env("PORTFOLIO_SESSIONS_DIR", ".sessions"))
    )
    upload_dir: Path = field(
        default_factory=lambda: Path(_env("PORTFOLIO_UPLOAD_DIR", "public/uploads"))
    )
    max_upload_bytes: int = field(
        default_factory=lambda: _env_int("MAX_UPLOAD_BYTES", _DEFAULT_MAX_UPLOAD_BYTES)
    )


@dataclass(frozen=True)
class NetlifyConfig:
    token: str = field(
        default_factory=lambda: _env("NETLIFY_TOKEN") or _env("NETLIFY_AUTH_TOKEN")
    )
    site_name: str = field(
        default_factory=lambda: _env("NETLIFY_SITE_NAME", "adventure-portfolio-builder")
    )
    deploy_mode: str = field(default_factory=lambda: _env("NETLIFY_DEPLOY_MODE", "api"))
    api_url: str = field(
        default_factory=lambda: _env("NETLIFY_API_URL", "https://api.netlify.com/api/v1")
    )
    cli: str = field(default_factory=lambda: _env("NETLIFY_CLI", "netlify"))

    @property
    def is_configured(self) -> bool:
        return bool(self.token)


@dataclass(frozen=True)
class EditorConfig:
    autosave_delay_ms: int = field(default_factory=lambda: _env_int("AUTOSAVE_DELAY_MS", 1000))
    preview_delay_ms: int = field(default_factory=lambda: _env_int("PREVIEW_DELAY_MS", 500))
    session_idle_seconds: int = field(
        default_factory=lambda: _env_int("SESSION_IDLE_SECONDS", 30 * 60)
    )

    @property
    def autosave_delay(self) -> float:
        return self.autosave_delay_ms / 1000

    @property
    def preview_delay(self) -> float:
        return self.preview_delay_ms / 1000


@dataclass(frozen=True)
class Settings:
    app: AppConfig = field(default_factory=AppConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    netlify: NetlifyConfig = field(default_factory=NetlifyConfig)
    editor: EditorConfig = field(default_factory=EditorConfig)


def load_settings() -> Settings:
    """Load settings from the environment, reading a local ``.env`` first if present."""
    load_dotenv()
    return Settings()
