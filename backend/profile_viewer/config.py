"""Configuration for the profile viewer.

Non-secret settings come from ``config.yaml`` (next to the package, or the file
named by ``PROFILE_VIEWER_CONFIG``). The Proxycurl API key is read from the
environment only, after loading ``.env``.
"""

import os
from pathlib import Path
from typing import Dict, Optional

import dotenv
import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from .logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent.parent / "config.yaml"
API_KEY_ENV = "PROXYCURL_API_KEY"
CONFIG_PATH_ENV = "PROFILE_VIEWER_CONFIG"
VERBOSE_ENV = "PROFILE_VIEWER_VERBOSE"

DEFAULT_PARAMS = {
    "fallback_to_cache": "on-error",
    "use_cache": "if-present",
    "skills": "include",
    "personal_email": "include",
    "personal_contact_number": "include",
    "twitter_profile_id": "include",
    "facebook_profile_id": "include",
    "github_profile_id": "include",
    "extra": "include",
}


class ProxycurlConfig(BaseModel):
    """Outbound profile API settings."""

    endpoint: str = Field(default="https://nubela.co/proxycurl/api/v2/linkedin")
    timeout_seconds: float = Field(default=30.0, gt=0, le=300)
    params: Dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_PARAMS))

    @field_validator("endpoint")
    @classmethod
    def validate_endpoint(cls, v: str) -> str:
        v = v.strip()
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"endpoint must be an http(s) URL, got {v!r}")
        return v


class ServerConfig(BaseModel):
    host: str = "0.0.0.0"
    port: int = Field(default=8000, ge=1, le=65535)


class LoggingConfig(BaseModel):
    verbose: bool = False


class Settings(BaseModel):
    """Application settings."""

    proxycurl: ProxycurlConfig = Field(default_factory=ProxycurlConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    api_key: Optional[str] = Field(
        default=None, description="Proxycurl bearer token (from the environment)"
    )

    @field_validator("api_key")
    @classmethod
    def validate_api_key(cls, v: Optional[str]) -> Optional[str]:
        if v is not None:
            v = v.strip()
            if not v:
                return None
        return v

    @property
    def api_key_set(self) -> bool:
        return self.api_key is not None


def _read_yaml(path: Path) -> dict:
    with open(path, "r") as f:
        data = yaml.safe_load(f)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"{path} must contain a mapping at the top level")
    return data


def load_settings(config_path: Optional[Path] = None) -> Settings:
    """Load settings from YAML and the environment.

    Falls back to the built-in defaults if the YAML file cannot be read or
    does not validate.

    Args:
        config_path: YAML file to read. Defaults to ``PROFILE_VIEWER_CONFIG``
            or the ``config.yaml`` shipped beside the package.

    Returns:
        Settings instance
    """
    dotenv.load_dotenv()

    if config_path is None:
        config_path = Path(os.getenv(CONFIG_PATH_ENV) or DEFAULT_CONFIG_PATH)

    api_key = os.getenv(API_KEY_ENV)

    try:
        data = _read_yaml(config_path)
        settings = Settings(**{**data, "api_key": api_key})
    except (OSError, yaml.YAMLError, ValueError, ValidationError) as e:
        logger.warning(
            f"Failed to load config from {config_path}, falling back to default values: {e!r}"
        )
        settings = Settings(api_key=api_key)

    if os.getenv(VERBOSE_ENV, "").lower() in ("1", "true", "yes"):
        settings.logging.verbose = True

    return settings
