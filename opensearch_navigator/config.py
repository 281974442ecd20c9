"""
Application settings.

Values come from the environment; a local .env file is loaded first.
"""

import os
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel


load_dotenv()


def _default_aws_path(name: str) -> str:
    return str(Path.home() / ".aws" / name)


class Settings(BaseModel):
    """Navigator configuration."""
    
    default_region: str = "us-east-1"
    request_timeout: float = 30.0
    log_level: str = "INFO"
    debounce_seconds: float = 0.4
    shared_credentials_file: str = _default_aws_path("credentials")
    config_file: str = _default_aws_path("config")
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    
    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from environment variables, falling back to defaults."""
        defaults = cls()
        return cls(
            default_region=os.getenv("NAVIGATOR_REGION", defaults.default_region),
            request_timeout=float(os.getenv("NAVIGATOR_TIMEOUT", defaults.request_timeout)),
            log_level=os.getenv("NAVIGATOR_LOG_LEVEL", defaults.log_level),
            debounce_seconds=float(
                os.getenv("NAVIGATOR_DEBOUNCE_SECONDS", defaults.debounce_seconds)
            ),
            shared_credentials_file=os.getenv(
                "AWS_SHARED_CREDENTIALS_FILE", defaults.shared_credentials_file
            ),
            config_file=os.getenv("AWS_CONFIG_FILE", defaults.config_file),
            api_host=os.getenv("API_HOST", defaults.api_host),
            api_port=int(os.getenv("API_PORT", defaults.api_port)),
        )


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return Settings.from_env()
