"""
Configuration management for ZeroApp Builder.

Provides centralized, type-safe configuration with environment variable overrides
and sensible defaults for the renderer, storage, signing and HTTP server.
"""

from __future__ import annotations

import os
import tempfile
from functools import lru_cache
from pathlib import Path
from typing import Literal

from dotenv import load_dotenv
from pydantic import BaseModel, Field

# Load .env file if it exists (looks in cwd and parent directories)
load_dotenv()


class ServerConfig(BaseModel):
    """HTTP server configuration."""

    host: str = Field(default="0.0.0.0", description="Bind address")
    port: int = Field(default=5000, ge=1, le=65535, description="Bind port")
    cors_origins: list[str] = Field(default_factory=lambda: ["*"], description="Allowed CORS origins")
    max_upload_bytes: int = Field(
        default=10 * 1024 * 1024, ge=1024, description="Upper bound for uploaded keystores and icons"
    )


class StorageConfig(BaseModel):
    """Storage configuration for generated projects and artifacts."""

    backend: Literal["local"] = Field(default="local", description="Storage backend")
    base_path: Path = Field(
        default_factory=lambda: Path(tempfile.gettempdir()) / "zeroapp-builder",
        description="Base path for local storage",
    )
    projects_prefix: str = Field(default="projects", description="Key prefix for generated source trees")
    keystores_prefix: str = Field(default="keystores", description="Key prefix for generated keystores")
    output_prefix: str = Field(default="output", description="Key prefix for packaged artifacts")
    uploads_prefix: str = Field(default="uploads", description="Key prefix for uploaded files")


class RenderConfig(BaseModel):
    """UI tree renderer configuration."""

    max_depth: int = Field(
        default=32, ge=1, le=512, description="Deepest container nesting rendered before children are omitted"
    )


class SigningConfig(BaseModel):
    """Keystore generation configuration."""

    keytool_path: str = Field(default="keytool", description="keytool executable")
    key_alias: str = Field(default="app_key", description="Alias of the generated key")
    key_size: int = Field(default=2048, ge=1024, description="RSA key size")
    validity_days: int = Field(default=10000, ge=1, description="Certificate validity")
    distinguished_name: str = Field(
        default="CN=ZeroApp Builder, OU=Development, O=ZeroApp, L=Unknown, ST=Unknown, C=US",
        description="Certificate subject",
    )
    timeout_seconds: float = Field(default=60.0, gt=0, description="keytool timeout")
    allow_simulated: bool = Field(
        default=True, description="Write a placeholder keystore when keytool cannot produce one"
    )


class Config(BaseModel):
    """Root configuration for ZeroApp Builder."""

    project_name: str = Field(default="ZeroApp Builder", description="Project identifier")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", description="Logging level"
    )
    server: ServerConfig = Field(default_factory=ServerConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    render: RenderConfig = Field(default_factory=RenderConfig)
    signing: SigningConfig = Field(default_factory=SigningConfig)

    model_config = {"extra": "ignore"}

    @classmethod
    def from_env(cls) -> Config:
        """Create configuration from environment variables."""
        storage = StorageConfig()
        if os.environ.get("ZEROAPP_STORAGE_PATH"):
            storage.base_path = Path(os.environ["ZEROAPP_STORAGE_PATH"])

        return cls(
            log_level=os.environ.get("ZEROAPP_LOG_LEVEL", "INFO"),  # type: ignore
            server=ServerConfig(
                host=os.environ.get("ZEROAPP_HOST", "0.0.0.0"),
                port=int(os.environ.get("PORT", os.environ.get("ZEROAPP_PORT", "5000"))),
            ),
            storage=storage,
            render=RenderConfig(
                max_depth=int(os.environ.get("ZEROAPP_RENDER_MAX_DEPTH", "32")),
            ),
            signing=SigningConfig(
                keytool_path=os.environ.get("ZEROAPP_KEYTOOL", "keytool"),
                allow_simulated=os.environ.get("ZEROAPP_ALLOW_SIMULATED_KEYSTORE", "true").lower() == "true",
            ),
        )


@lru_cache(maxsize=1)
def get_config() -> Config:
    """Get cached configuration instance."""
    return Config.from_env()
