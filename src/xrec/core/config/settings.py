"""Application settings loaded from environment variables."""

from __future__ import annotations

from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings

HTTP_TRANSPORT = "streamable-http"


class Settings(BaseSettings):
    """Extension recommender server configuration."""

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    # Server
    # stdio for a client-launched subprocess, streamable-http for a shared
    # instance. HTTP binds loopback unless xrec_allow_insecure_bind is set.
    xrec_transport: Literal["stdio", "streamable-http"] = "stdio"
    xrec_host: str = "127.0.0.1"
    xrec_port: int = 8003
    xrec_log_level: Literal["debug", "info", "warning", "error"] = "info"
    xrec_allow_insecure_bind: bool = False

    # Catalog
    # Empty means the sample catalog bundled under xrec/data/catalog/
    catalog_dir: str = ""

    # Ranking
    default_max_results: int = 20
    blend_quality: bool = True
    enable_context_scoring: bool = True
    enable_similarity_scoring: bool = True

    @field_validator("xrec_log_level", mode="before")
    @classmethod
    def lowercase_log_level(cls, value: object) -> object:
        return value.lower() if isinstance(value, str) else value


def get_settings() -> Settings:
    """Create and return a Settings instance."""
    return Settings()
