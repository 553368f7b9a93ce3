# products_api/config.py
"""
Environment-driven settings for the products service.

Every value has a default so the service starts with no configuration;
override through environment variables before calling ``load_settings``.
"""

import os
from dataclasses import dataclass
from typing import Optional


def _env_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes"}


@dataclass
class Settings:
    project_name: str = "Products API"
    api_version: str = "1.0.0"
    host: str = "0.0.0.0"
    port: int = 3000
    api_key: str = "mysecretapikey"
    api_key_header: str = "x-api-key"
    log_level: str = "INFO"
    log_file: Optional[str] = None
    debug: bool = False


def load_settings() -> Settings:
    """Build ``Settings`` from the current environment."""
    return Settings(
        project_name=os.getenv("PROJECT_NAME", "Products API"),
        api_version=os.getenv("API_VERSION", "1.0.0"),
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "3000")),
        api_key=os.getenv("API_KEY", "mysecretapikey"),
        api_key_header=os.getenv("API_KEY_HEADER", "x-api-key").lower(),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        log_file=os.getenv("LOG_FILE") or None,
        debug=_env_bool("DEBUG"),
    )
