from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    environment: str = "development"
    log_level: str = "INFO"

    # REST backend
    api_base_url: str = "http://localhost:8080"
    api_timeout_seconds: float = 30.0
    api_token: str = ""  # optional, sent as Bearer

    # Local settings store (company info + listing curation)
    settings_store_path: str = "data/app_settings.json"

    # Business defaults
    reservation_default_days: int = 7
    recent_activity_days: int = 7
    top_performers_limit: int = 3

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


_settings: Settings | None = None


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reload_settings() -> Settings:
    """Force reload settings from .env (called on module reload by uvicorn --reload)."""
    global _settings
    _settings = None
    return get_settings()
