"""
Application configuration using Pydantic settings.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    # App
    app_name: str = "Catalog"
    log_level: str = "INFO"

    # Database
    database_url: str = "sqlite:///./data/catalog.sqlite"

    # Media store
    media_root: str = "./data/media"
    media_base_url: str = "/media"

    # Listing
    default_page_size: int = 20
    max_page_size: int = 100

    # Server
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    frontend_url: str = "http://localhost:5173"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False
    )


# Global settings instance
settings = Settings()
