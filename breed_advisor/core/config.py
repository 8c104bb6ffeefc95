import os

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    GEMINI_API_KEY: str = os.environ.get("GEMINI_API_KEY", "")
    JWT_SECRET_KEY: str = os.environ.get("JWT_SECRET_KEY", "")
    NARRATIVE_MODEL: str = "gemini-2.5-flash"
    NARRATIVE_TIMEOUT_SECONDS: float = 30.0
    BREED_CATALOG_PATH: str = ""
    LOG_LEVEL: str = "INFO"


settings = Settings()
