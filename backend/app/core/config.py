"""
Zairyo Configuration
====================

Centralized application settings.
"""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    # App info
    app_name: str = "Zairyo"
    app_version: str = "1.0.0"
    debug: bool = False

    # Data paths (relative to backend/ directory)
    recipes_data_path: str = "data/recipes.json"
    trace_log_path: str = "logs/traces.jsonl"

    # External recipe source (TheMealDB)
    enable_external: bool = False
    external_api_base: str = "https://www.themealdb.com/api/json/v1/1"
    external_max_results: int = 5
    external_timeout: float = 10.0

    # Vision backends
    vision_provider: Literal["openai", "gemini"] = "openai"
    openai_api_key: str = ""
    openai_vision_model: str = "gpt-4o-mini"
    gemini_api_key: str = ""
    gemini_model: str = "gemini-1.5-flash"
    gemini_api_base: str = "https://generativelanguage.googleapis.com/v1beta"
    vision_timeout: float = 30.0

    # Detection settings
    local_analysis_delay: float = 1.5
    detect_max_terms: int = 20

    # API settings
    api_host: str = "0.0.0.0"
    api_port: int = 5000
    api_prefix: str = "/api"

    # CORS
    cors_origins: list = ["*"]
    cors_allow_credentials: bool = False  # Must be False with wildcard origins
    cors_allow_methods: list = ["*"]
    cors_allow_headers: list = ["*"]

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
