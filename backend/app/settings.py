from functools import lru_cache
from typing import Literal
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    ENV: str = "local"
    DB_HOST: str = "db"
    DB_PORT: int = 5432
    DB_USER: str = "postgres"
    DB_PASSWORD: str = "postgres"
    DB_NAME: str = "liftlog"
    # Full SQLAlchemy URL; wins over the DB_* parts (e.g. sqlite:///./workouts.db)
    DB_URL: str | None = None
    DB_AUTO_CREATE: bool = False

    # Interpreter (Anthropic Messages API)
    ANTHROPIC_API_KEY: str | None = None
    ANTHROPIC_MODEL: str = "claude-haiku-4-5-20251001"
    INTERPRETER_MAX_TOKENS: int = 1024
    INTERPRETER_TIMEOUT_SECONDS: float = 30.0
    WEIGHT_POLICY: Literal["sum", "leading"] = "sum"

    # SMS submissions: comma separated phone numbers, empty = accept all
    ALLOWED_PHONES: str = ""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def DATABASE_URL(self) -> str:
        if self.DB_URL:
            return self.DB_URL
        return (
            f"postgresql+psycopg://{self.DB_USER}:{self.DB_PASSWORD}"
            f"@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
        )

    @property
    def allowed_phones(self) -> frozenset[str]:
        return frozenset(p.strip() for p in self.ALLOWED_PHONES.split(",") if p.strip())

@lru_cache
def get_settings() -> Settings:
    return Settings()
