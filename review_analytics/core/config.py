from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./reviews.db"
    SECRET_KEY: str = "secret"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24
    AI_API_KEY: str | None = None
    AI_API_BASE_URL: str = "https://generativelanguage.googleapis.com/v1beta/openai/"
    AI_MODEL: str = "gemini-2.0-flash"
    AI_TEMPERATURE: float = 0.3
    AI_MAX_TOKENS: int = 2048
    AI_CONCURRENCY: int = 3
    DEFAULT_LANGUAGE: str = "javascript"
    DASHBOARD_TIMEZONE: str = "UTC"
    HISTORY_MAX_PAGE_SIZE: int = 100
    LOG_LEVEL: str = "INFO"
    SERVICE_NAME: str = "Code Review Assistant API"
    SERVICE_VERSION: str = "1.0.0"

    model_config = SettingsConfigDict(env_file=".env")


settings = Settings()
