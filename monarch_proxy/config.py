"""
Configuration management for the Monarch transactions proxy.
"""

import os
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, field_validator


BASE_DIR: Path = Path(__file__).parent.parent

# Level names both stdlib logging and uvicorn accept
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class Settings(BaseModel):
    """Proxy server configuration. Read once at startup, never mutated."""

    model_config = ConfigDict(frozen=True)

    # Server
    API_TITLE: str = "Monarch Transactions Proxy"
    API_DESCRIPTION: str = "Relays transaction summary queries to the Monarch GraphQL API"
    API_VERSION: str = "1.0.0"
    HOST: str = "0.0.0.0"
    PORT: int = 3000

    # CORS
    CORS_ORIGINS: List[str] = ["*"]

    # Proxy secret callers must send as x-api-key
    PROXY_API_KEY: Optional[str] = None

    # Upstream request timeout in seconds (None = wait indefinitely)
    UPSTREAM_TIMEOUT: Optional[float] = 30.0

    LOG_LEVEL: str = "INFO"

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def check_log_level(cls, value: str) -> str:
        level = str(value).strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(
                f"LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, got {value!r}"
            )
        return level

    @classmethod
    def from_env(cls, env_file: Optional[Path] = None) -> "Settings":
        """
        Build settings from environment variables.

        Values in a ``.env`` file at the repository root are loaded first;
        variables already set in the process environment win.
        """
        load_dotenv(env_file or BASE_DIR / ".env")

        values = {}
        if os.getenv("PROXY_API_KEY"):
            values["PROXY_API_KEY"] = os.environ["PROXY_API_KEY"]
        if os.getenv("HOST"):
            values["HOST"] = os.environ["HOST"]
        if os.getenv("PORT"):
            values["PORT"] = int(os.environ["PORT"])
        if os.getenv("LOG_LEVEL"):
            values["LOG_LEVEL"] = os.environ["LOG_LEVEL"]
        if os.getenv("CORS_ORIGINS"):
            values["CORS_ORIGINS"] = [
                origin.strip()
                for origin in os.environ["CORS_ORIGINS"].split(",")
                if origin.strip()
            ]

        timeout = os.getenv("UPSTREAM_TIMEOUT")
        if timeout is not None:
            # 0 or empty disables the timeout
            seconds = float(timeout) if timeout.strip() else 0.0
            values["UPSTREAM_TIMEOUT"] = seconds if seconds > 0 else None

        return cls(**values)
