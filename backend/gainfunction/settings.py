from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    ENV: str = "local"

    # Local store
    DATABASE_URL: str = "sqlite:///./gain_function_database.db"
    SCHEMA_VERSION: int = 1              # bump to force a destructive rebuild
    SEED_EXERCISES: bool = True
    SQL_ECHO: bool = False

    LOG_LEVEL: str = "INFO"
    ALLOW_ORIGINS: str = "*"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def is_sqlite(self) -> bool:
        return self.DATABASE_URL.startswith("sqlite")

@lru_cache
def get_settings() -> Settings:
    return Settings()
