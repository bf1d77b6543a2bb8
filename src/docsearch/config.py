from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppConfig(BaseModel):
    """Application-specific configuration values."""

    name: str = "docsearch"
    log_level: str = "INFO"
    # Transport settings for FastMCP: "stdio" (default), "http", or "sse"
    transport: Literal["stdio", "http", "sse"] = "stdio"
    host: str = "127.0.0.1"
    port: int = 8000


class SearchConfig(BaseModel):
    """Query-time behaviour of the search adapter."""

    # Caps both the matched documents and the returned hits
    max_hits: int = Field(default=8)
    base_url: str = "/"


class IndexConfig(BaseModel):
    """Locations of the prebuilt corpus and full-text index."""

    corpus_path: Optional[str] = None  # JSON list/object of search documents
    index_dir: Optional[str] = None  # Whoosh index directory
    index_name: str = "MAIN"


class Settings(BaseSettings):
    """Top-level settings loaded from environment variables and .env only."""

    model_config = SettingsConfigDict(
        env_prefix="DOCSEARCH_",
        env_nested_delimiter="__",
        env_file=".env",
        extra="ignore",
    )

    app: AppConfig = AppConfig()
    search: SearchConfig = SearchConfig()
    index: IndexConfig = IndexConfig()


def load_settings() -> Settings:
    """Load settings from environment variables and .env only."""
    return Settings()  # type: ignore[call-arg]
