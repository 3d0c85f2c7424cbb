"""Application configuration loaded from environment variables."""

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Central configuration for the pdfdesk application."""

    # Storage
    storage_base_path: str = Field(default="data/", description="Base path for file storage")
    pdf_directory: str = Field(default="pdfs", description="Managed PDF library, relative to the base path")
    cache_directory: str = Field(default="cache", description="Picked source files, relative to the base path")

    # Signatures
    signature_backend: Literal["file", "redis", "memory"] = Field(
        default="file", description="Key-value backend holding saved signatures"
    )
    signature_store_file: str = Field(
        default="signatures.json", description="JSON file used by the file backend, relative to the base path"
    )
    signatures_key: str = Field(default="saved_signatures", description="Key of the signature record")
    redis_url: str = Field(default="redis://localhost:6379/0", description="Redis connection URL")

    # Page counting
    default_page_count: int = Field(default=5, ge=1, description="Page count assumed for a picked PDF")
    detect_page_count: bool = Field(
        default=False, description="Read the real page count with pypdf instead of assuming the default"
    )

    # Rendering
    render_timeout_ms: int = Field(default=30000, description="Timeout for loading HTML into the renderer")

    # API
    api_host: str = Field(default="127.0.0.1", description="API host")
    api_port: int = Field(default=8000, description="API port")
    log_level: str = Field(default="INFO", description="Root log level")

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "case_sensitive": False}

    @property
    def base_path(self) -> Path:
        return Path(self.storage_base_path)

    @property
    def pdf_dir(self) -> Path:
        return self.base_path / self.pdf_directory

    @property
    def cache_dir(self) -> Path:
        return self.base_path / self.cache_directory

    @property
    def signature_file(self) -> Path:
        return self.base_path / self.signature_store_file


# Singleton instance
settings = Settings()
