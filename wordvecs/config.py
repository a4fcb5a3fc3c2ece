"""Centralized configuration using Pydantic BaseSettings"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppConfig(BaseSettings):
    """Application configuration with environment variable support"""

    # Model file
    vectors_path: str = Field(
        default="./data/vectors.bin", description="Path to a word2vec binary model file"
    )
    load_limit: int = Field(
        default=100_000, ge=0, description="Maximum number of entries to load from the model"
    )
    progress_interval: int = Field(
        default=5000, ge=1, description="Log load progress every N entries"
    )

    # Query
    neighbor_count: int = Field(
        default=50,
        ge=1,
        le=1000,
        description="Default number of neighbors returned by vocabulary queries",
    )

    # Logging
    log_level: str = Field(default="INFO", description="Root log level for the CLI")

    # OpenTelemetry
    otel_logging_enabled: bool = Field(default=False, description="Enable OpenTelemetry logging")
    otel_tracing_enabled: bool = Field(default=False, description="Enable OpenTelemetry tracing")
    otel_endpoint: str = Field(
        default="http://localhost:4318",
        description="OpenTelemetry collector endpoint (HTTP/protobuf)",
    )
    otel_service_name: str = Field(default="wordvecs", description="Service name for OpenTelemetry")
    otel_service_version: str = Field(
        default="0.1.0", description="Service version for OpenTelemetry"
    )
    otel_log_full_results: bool = Field(
        default=False,
        description="Include full query results in telemetry logs",
    )

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )


# Global config instance
config = AppConfig()
