"""Application configuration."""

import os
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")

DEFAULT_TACO_JSON_URL = (
    "https://raw.githubusercontent.com/marcelosanto/tabela_taco/main/"
    "tabela_alimentos.json"
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    openai_api_key: str | None = None
    openai_model: str = "gpt-4.1-mini"
    openai_store: bool = False
    extraction_timeout_seconds: float = 10.0
    extraction_retry_attempts: int = 1
    extraction_retry_delay_seconds: float = 0.5
    composition_source: Literal["taco_json", "supabase"] = "taco_json"
    taco_json_url: str = DEFAULT_TACO_JSON_URL
    taco_lookup_url: str | None = None
    supabase_url: str | None = None
    supabase_service_key: str | None = None
    supabase_composition_table: str = "taco_foods"
    composition_ttl_seconds: int = 3600
    composition_timeout_seconds: float = 15.0
    include_extra_foods: bool = True
    search_limit: int = 15
    max_sessions: int = 1000
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )
