# backend/lumina/core/config.py

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    app_env: str = "dev"
    log_level: str = "INFO"

    # comma-separated allowlist, falls back to frontend_url
    cors_origins: str = ""
    frontend_url: str = "http://localhost:3000"

    # load the mock inventory into the in-memory store on startup
    seed_demo_data: bool = True

    # export
    export_prefix: str = "inventory"
    currency_symbol: str = "₱"

    # text generation (Gemini REST API)
    gemini_api_key: str = ""
    gemini_model: str = "gemini-2.5-flash"
    gemini_api_url: str = "https://generativelanguage.googleapis.com/v1beta"
    gemini_timeout: float = 30.0

    class Config:
        env_file = ".env"
        case_sensitive = False


settings = Settings()


def get_settings() -> Settings:
    return settings
