from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_env: str = Field(default="dev", alias="APP_ENV")
    app_host: str = Field(default="0.0.0.0", alias="APP_HOST")
    app_port: int = Field(default=8000, alias="APP_PORT")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    telegram_bot_token: str = Field(default="", alias="TELEGRAM_BOT_TOKEN")

    redis_url: str = Field(default="redis://localhost:6379/0", alias="REDIS_URL")
    session_key_prefix: str = Field(default="lexiquiz", alias="SESSION_KEY_PREFIX")
    session_ttl_seconds: int = Field(default=86400, alias="SESSION_TTL_SECONDS")

    google_sheets_id: str = Field(default="", alias="GOOGLE_SHEETS_ID")
    google_service_account_json: str = Field(default="", alias="GOOGLE_SERVICE_ACCOUNT_JSON")
    pool_cache_ttl_seconds: int = Field(default=300, alias="POOL_CACHE_TTL_SECONDS")

    ai_api_key: str = Field(default="", alias="AI_API_KEY")
    ai_api_base_url: str = Field(default="https://api.openai.com/v1", alias="AI_API_BASE_URL")
    ai_model: str = Field(default="gpt-4o-mini", alias="AI_MODEL")
    ai_timeout_ms: int = Field(default=15000, alias="AI_TIMEOUT_MS")
    ai_temperature: float = Field(default=0.9, alias="AI_TEMPERATURE")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
