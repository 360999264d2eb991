from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # App
    app_host: str = "0.0.0.0"
    app_port: int = 8080
    debug: bool = False
    log_level: str = "INFO"
    cors_origins: list[str] = ["*"]
    public_base_url: str = "http://localhost:8080"

    ENVIRONMENT: str = "Production"

    # Store (Supabase REST)
    supabase_url: str = ""
    supabase_api_key: str = ""
    request_timeout: float = 10.0

    # Email (Resend) - if unset, emails are written to the log instead
    resend_api_key: str = ""
    from_name: str = "Jemima & Marko Wedding"
    from_email: str = "wedding@jemarko.com"
    couple_names: str = "Jemima & Marko"

    # Admin
    admin_email: str = ""
    admin_api_key: str = ""

    # Fire-and-forget notifications
    background_max_pending: int = 100

    SENTRY_DSN: str = ""
    SENTRY_TRACES_SAMPLE_RATE: float = 0.0
    SENTRY_PROFILES_SAMPLE_RATE: float = 0.0

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
