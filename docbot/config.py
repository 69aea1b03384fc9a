"""
Application configuration loaded from environment variables.
"""

from __future__ import annotations

import logging
from typing import Any, Dict

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Centralised application settings."""

    model_config = SettingsConfigDict(
        env_file=(".env",),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    openai_api_key: SecretStr | None = Field(default=None, alias="OPENAI_API_KEY")
    llm_model_name: str = Field(default="gpt-4.1-mini", alias="LLM_MODEL_NAME")
    embedding_model_name: str = Field(default="text-embedding-3-small", alias="EMBEDDING_MODEL_NAME")

    vector_store_backend: str = Field(default="file", alias="VECTOR_STORE_BACKEND")
    vector_store_path: str = Field(default="./data", alias="VECTOR_STORE_PATH")
    vector_store_name: str = Field(default="neuron", alias="VECTOR_STORE_NAME")
    vector_store_ext: str = Field(default=".store", alias="VECTOR_STORE_EXT")
    top_k: int = Field(default=4, ge=0, alias="TOP_K")

    documents_dir: str = Field(default="./kb", alias="DOCUMENTS_DIR")
    default_source_label: str = Field(default="user_manuals", alias="DEFAULT_SOURCE_LABEL")
    # File name -> "source" metadata label, e.g. {"Drylab.pdf": "drylab"}
    source_labels: Dict[str, str] = Field(default_factory=dict, alias="SOURCE_LABELS")

    relevance_threshold: float = Field(default=0.0, alias="RELEVANCE_THRESHOLD")

    chunk_size_chars: int = Field(default=1000, gt=0, alias="CHUNK_SIZE_CHARS")
    chunk_word_overlap: int = Field(default=0, ge=0, alias="CHUNK_WORD_OVERLAP")
    chunk_separator: str = Field(default=".", alias="CHUNK_SEPARATOR")

    admin_token: SecretStr | None = Field(default=None, alias="ADMIN_TOKEN")

    app_host: str = Field(default="0.0.0.0", alias="APP_HOST")
    app_port: int = Field(default=8000, alias="APP_PORT")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")


settings = Settings()


def setup_logging() -> logging.Logger:
    """
    Configure base logging for the app.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="[%(asctime)s] [%(levelname)s] %(name)s - %(message)s",
    )
    return logging.getLogger("docbot")


def public_settings() -> Dict[str, Any]:
    """
    Return settings without secrets for safe logging/inspection.
    """
    return settings.model_dump(
        exclude={"openai_api_key", "admin_token"},
        exclude_none=True,
    )


__all__ = ["Settings", "settings", "setup_logging", "public_settings"]
