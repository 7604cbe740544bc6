"""Configuration management using pydantic-settings."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # API Settings
    api_title: str = Field(
        default="Coder Artifacts",
        description="API title",
    )
    api_version: str = Field(
        default="0.1.0",
        description="API version (also advertised on the agent card)",
    )
    host: str = Field(
        default="0.0.0.0",
        description="Bind address for the API server",
    )
    port: int = Field(
        default=41250,
        description="Port for the API server",
    )
    cors_origins: list[str] = Field(
        default=["*"],
        description="Allowed CORS origins",
    )

    # Extraction
    max_input_chars: int = Field(
        default=1_000_000,
        description="Largest response text accepted by the API",
    )

    # File writing
    output_dir: str = Field(
        default="generated",
        description="Default directory for files written by the CLI",
    )
    overwrite_files: bool = Field(
        default=False,
        description="Overwrite existing files when writing artifacts",
    )

    # Observability
    log_level: str = Field(
        default="INFO",
        description="Log level (DEBUG, INFO, WARNING, ERROR)",
    )
    log_json: bool = Field(
        default=True,
        description="Enable JSON structured logging",
    )
    service_name: str = Field(
        default="coder-artifacts",
        description="Service name reported in logs",
    )
    service_environment: str = Field(
        default="development",
        description="Deployment environment (development, staging, production)",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
