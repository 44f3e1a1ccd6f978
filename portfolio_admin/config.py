# portfolio_admin/config.py
from __future__ import annotations
from pathlib import Path
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

_PROJECT_ROOT = Path(__file__).resolve().parents[1]  # .../portfolio-admin

class Settings(BaseSettings):
    # App
    app_name: str = Field(default="PortfolioAdmin", alias="APP_NAME")
    env: str = Field(default="development", alias="ENV")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Storage (relative paths are resolved from project root)
    upload_dir: str = Field(default="uploads", alias="UPLOAD_DIR")
    upload_url_prefix: str = "/uploads"

    # DB
    database_url: str = Field(default="sqlite:///./portfolio.db", alias="DATABASE_URL")

    # Auth (tokens are minted by the login service; we only verify them)
    jwt_secret_key: str = Field(default="change_me_please", alias="JWT_SECRET_KEY")
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    access_token_expire_minutes: int = Field(default=60, alias="ACCESS_TOKEN_EXPIRE_MINUTES")

    # .env loader
    model_config = SettingsConfigDict(env_file=".env", extra="ignore", populate_by_name=True)

    @property
    def is_development(self) -> bool:
        return self.env.lower() in {"dev", "development"}

    # Helpers to get absolute Paths
    @property
    def upload_path(self) -> Path:
        p = Path(self.upload_dir)
        return p if p.is_absolute() else (_PROJECT_ROOT / p)

settings = Settings()
