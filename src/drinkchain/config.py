"""Application settings, read from the environment and an optional ``.env`` file."""
from __future__ import annotations

from pathlib import Path

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    OPENAI_API_KEY: SecretStr | None = None
    OPENAI_MODEL_SYNTHESIS: str = "gpt-4o-mini"
    OPENAI_TIMEOUT: float = 60.0

    DATA_DIR: Path = Path("data")
    DATABASE_URL: str = "sqlite:///data/drinkchain.db"
    STRATEGY_STORE_KEY: str = "drinkchain_strategies"

    API_BASE_URL: str = "http://127.0.0.1:8000"
    LOG_LEVEL: str = "INFO"

    @property
    def data_dir(self) -> Path:
        return self.DATA_DIR


settings = Settings()
