"""
Application configuration loader and it handles:
- Environment variables
- Capability backend selection (storage, cache, broker)
- Token signing configuration
- Server configuration

And, the main purpose:
Central place for system configuration.
"""


from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite+aiosqlite:///./feedback.db"

    # Capabilities
    STORAGE_BACKEND: str = "sql"  # sql | memory
    CACHE_BACKEND: str = "memory"  # redis | memory
    BROKER_BACKEND: str = "memory"  # sns | memory

    REDIS_URL: str = "redis://localhost:6379/0"
    CACHE_TTL_SECONDS: int = 60

    SNS_TOPIC_ARN: str = ""
    SNS_REGION: str = "us-east-1"

    # Tokens
    SECRET: str = "dev-secret-change-me-0123456789abcdef"
    TOKEN_DEFAULT_MINUTES: int = 10
    TOKEN_MAX_MINUTES: int = 1440

    PAGE_DEFAULT_LIMIT: int = 10
    PAGE_MAX_LIMIT: int = 1000

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8080
    SHUTDOWN_GRACE_SECONDS: int = 5
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        extra = "ignore"

settings = Settings()
