"""Application settings loaded from environment / .env file."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Database ──────────────────────────────────────────
    database_url: str = "sqlite+aiosqlite:///./bots.db"

    # ── Inference provider ────────────────────────────────
    hf_api_key: str = ""  # empty disables the inference step
    inference_url: str = "https://api-inference.huggingface.co/models/google/flan-t5-small"
    inference_timeout: float = 120.0
    inference_max_new_tokens: int = 200

    # ── HTTP ──────────────────────────────────────────────
    allowed_origins: str = "*"
    public_dir: str = "public"
    host: str = "0.0.0.0"
    port: int = 3000

    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    return Settings()
