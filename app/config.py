from pydantic_settings import BaseSettings
from functools import lru_cache

class Settings(BaseSettings):
    # AI gateway settings
    AI_GATEWAY_API_KEY: str = ""
    AI_GATEWAY_URL: str = "https://ai.gateway.lovable.dev/v1/chat/completions"
    AI_MODEL: str = "google/gemini-2.5-flash"
    AI_TIMEOUT_SECONDS: float = 60.0

    # Logging settings
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        extra = "ignore"

@lru_cache()
def get_settings():
    return Settings()
