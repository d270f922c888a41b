"""Application settings using Pydantic Settings."""

import json
from functools import lru_cache
from typing import Annotated

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    """Global settings loaded from SKILLROUTER_* environment variables / .env file."""

    # Skill sources
    skills_dirs: Annotated[list[str], NoDecode] = Field(
        default_factory=list,
        description="Extra skill directories, loaded after the bundled ones",
    )
    include_bundled: bool = Field(default=True, description="Load the skills shipped with the package")
    guide_path: str | None = Field(
        default=None,
        description="Markdown file holding the routing table (bundled GUIDE.md if unset)",
    )

    # Routing
    max_skills: int = Field(default=5, ge=1, description="Max keyword-matched skills per route")

    # Live guidelines
    fetch_timeout: int = Field(default=15, description="HTTP timeout for guideline fetches in seconds")
    fetch_max_retries: int = Field(default=2, ge=0, description="Retries after the first failed fetch")
    fetch_retry_delay: float = Field(default=0.5, description="Initial delay between retries in seconds")
    guideline_cache_ttl: int = Field(default=3600, description="Seconds a fetched guideline stays cached")
    guideline_cache_size: int = Field(default=128, ge=1, description="Max cached guideline documents")

    # Runtime
    log_level: str = "INFO"
    api_host: str = "127.0.0.1"
    api_port: int = 8077

    model_config = SettingsConfigDict(
        env_prefix="SKILLROUTER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("skills_dirs", mode="before")
    @classmethod
    def split_dirs(cls, v):
        """Accept a comma-separated string as well as a JSON list."""
        if isinstance(v, str):
            if v.strip().startswith("["):
                return json.loads(v)
            return [part.strip() for part in v.split(",") if part.strip()]
        return v

    @field_validator("log_level")
    @classmethod
    def upper_level(cls, v: str) -> str:
        return v.upper()


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
