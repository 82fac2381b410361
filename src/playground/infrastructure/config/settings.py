"""
Application configuration

Loaded from environment variables (and ``.env``) with pydantic-settings.
"""
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ============== Application ==============
    app_name: str = Field(default="Sandbox Playground")
    app_version: str = Field(default="0.1.0")
    environment: str = Field(default="development")
    debug: bool = Field(default=False)
    ping_message: str = Field(default="ping")

    # ============== Server ==============
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8080, ge=1, le=65535)
    cors_origins: list[str] = Field(default=["*"])

    # ============== Item store ==============
    data_dir: Path = Field(default=Path("data"))

    # ============== Node.js engines ==============
    node_binary: str = Field(default="node")
    node_flags: list[str] = Field(default=["--disallow-code-generation-from-strings"])
    typescript_module: str = Field(default="typescript", description="require() path of the TypeScript compiler")
    pyodide_module: str = Field(default="pyodide", description="require() path of the pyodide package")
    pyodide_index_url: Optional[str] = Field(default=None, description="Override for pyodide indexURL")

    # ============== Execution budgets ==============
    script_timeout_ms: int = Field(default=1000, ge=1)
    script_outer_timeout_ms: int = Field(default=1200, ge=1)
    process_grace_ms: int = Field(default=250, ge=0, description="Allowance past the outer budget before the script host is killed")
    process_startup_timeout_seconds: float = Field(default=5.0, gt=0, description="Time node may take to start before budgets apply")
    transpile_timeout_seconds: float = Field(default=10.0, gt=0)
    python_load_timeout_seconds: float = Field(default=60.0, gt=0)
    python_timeout_seconds: float = Field(default=10.0, gt=0)
    python_capture_output: bool = Field(default=True, description="Fold Python stdout/stderr into logs")

    # ============== Remote judge ==============
    judge_base_url: str = Field(default="https://ce.judge0.com")
    judge_api_key: str = Field(default="")
    judge_api_host: str = Field(default="")
    judge_timeout_seconds: float = Field(default=30.0, gt=0)
    judge_connect_timeout_seconds: float = Field(default=5.0, gt=0)
    judge_catalog_ttl_seconds: float = Field(default=6 * 60 * 60, gt=0)

    # ============== GitHub ==============
    github_api_url: str = Field(default="https://api.github.com")
    github_timeout_seconds: float = Field(default=30.0, gt=0)

    # ============== Logging ==============
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="text")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in allowed:
            raise ValueError(f"log_level must be one of {allowed}")
        return v.upper()

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        allowed = {"json", "text"}
        if v not in allowed:
            raise ValueError(f"log_format must be one of {allowed}")
        return v

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        allowed = {"development", "staging", "production", "test"}
        if v not in allowed:
            raise ValueError(f"environment must be one of {allowed}")
        return v

    @property
    def items_file(self) -> Path:
        return self.data_dir / "items.json"


@lru_cache()
def get_settings() -> Settings:
    """
    Return the settings singleton.

    Cached so the environment is read only once per process.
    """
    return Settings()
