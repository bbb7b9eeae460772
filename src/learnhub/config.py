from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Config(BaseSettings):
    """Application configuration loaded from environment variables."""

    database_url: str
    host: str
    port: int
    debug: bool
    secret_key: str  # HMAC key for signing bearer tokens, required
    cors_origins: list[str] = []
    session_idle_minutes: int = Field(60, gt=0)  # Idle time before a session expires
    token_lifetime_hours: int | None = Field(24, ge=0)  # Absolute lifetime of the signed token, None or 0 disables it
    session_sweep_interval_seconds: int = Field(60, ge=0)  # 0 disables the periodic sweep
    # Build metadata injected during Docker build via environment variables
    git_commit_hash: str = "unknown"
    build_time: str = "unknown"

    model_config = {
        "env_file": [".env"],
        "env_prefix": "LEARNHUB_",
        "extra": "ignore",
    }

    @field_validator("secret_key")
    @classmethod
    def secret_key_not_empty(cls, value: str) -> str:
        if not value:
            raise ValueError("secret_key must not be empty")
        return value
