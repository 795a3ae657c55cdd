"""Application settings using Pydantic Settings."""

from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Database
    database_url: str = Field(
        default="sqlite:///bidsmart.db",
        description="SQLAlchemy database URL",
    )
    db_pool_size: int = Field(default=5, ge=1, le=20, description="Connection pool size")
    db_pool_max_overflow: int = Field(
        default=10, ge=0, le=50, description="Max overflow connections"
    )

    # Firecrawl (scrape/search provider)
    firecrawl_api_key: str = Field(default="", description="Firecrawl API key")
    firecrawl_base_url: str = Field(
        default="https://api.firecrawl.dev/v1", description="Firecrawl API base URL"
    )
    firecrawl_timeout_seconds: Optional[float] = Field(
        default=None, description="HTTP timeout for Firecrawl calls (None = wait indefinitely)"
    )

    # Summarization model (OpenAI-compatible gateway)
    ai_api_key: str = Field(default="", description="API key for the extraction model")
    ai_base_url: Optional[str] = Field(
        default="https://ai.gateway.lovable.dev/v1",
        description="OpenAI-compatible endpoint; None uses the OpenAI default",
    )
    ai_model: str = Field(default="google/gemini-2.5-flash", description="LLM model for extraction")
    ai_temperature: float = Field(
        default=0.1, ge=0.0, le=2.0, description="LLM temperature"
    )

    # Extraction limits
    scrape_markdown_limit: int = Field(
        default=8000, ge=500, description="Max markdown chars sent to the model for a scrape"
    )
    search_content_limit: int = Field(
        default=12000, ge=500, description="Max aggregated search chars sent to the model"
    )
    search_result_snippet_limit: int = Field(
        default=2000, ge=100, description="Max chars kept per search result"
    )
    raw_markdown_preview_limit: int = Field(
        default=2000, ge=0, description="Max markdown chars echoed back to the caller"
    )
    search_default_limit: int = Field(
        default=10, ge=1, le=50, description="Default number of search results"
    )
    search_lang: str = Field(default="zh-cn", description="Search language")
    search_country: str = Field(default="cn", description="Search country")

    # Deadlines
    upcoming_days: int = Field(
        default=7, ge=1, description="Window for the upcoming-deadline list"
    )
    urgent_days: int = Field(
        default=3, ge=0, description="Days left at or below which a deadline is urgent"
    )

    # HTTP
    cors_allow_origins: str = Field(
        default="*", description="Comma separated list of allowed CORS origins"
    )

    # Logging
    log_level: str = Field(
        default="INFO", description="Logging level (DEBUG, INFO, WARNING, ERROR)"
    )
    log_file: Optional[Path] = Field(
        default=None, description="Optional log file path"
    )


# Singleton settings instance
settings = Settings()
