from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False  # True for production (structured JSON), False for dev (colored)

    # Rule translation
    APPLY_CONDITIONAL_RULES: bool = True  # Translate when()/unless() rules too
    PROPAGATE_PARAMETER_CONSTRAINTS: bool = False  # Not supported, fails loudly when enabled

    class Config:
        env_prefix = "OPENAPI_VALIDATION_"
        env_file = ".env"
        extra = "ignore"


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
