"""
Configuration and shared utilities for the AIDOI portal.

Precedence: environment (incl. .env) > portal.yaml > defaults.
"""

import logging
import os
import yaml
from pathlib import Path
from typing import Optional
from dataclasses import dataclass, fields
from dotenv import load_dotenv
from rich.logging import RichHandler

load_dotenv()

PORTAL_CONFIG = Path("portal.yaml")

# env var -> PortalConfig field
_ENV_KEYS = {
    "AIDOI_API_URL": "api_base_url",
    "AIDOI_REQUEST_TIMEOUT": "request_timeout",
    "AIDOI_TOKEN_COOKIE": "token_cookie",
    "AIDOI_PORTAL_PORT": "port",
    "AIDOI_LOG_LEVEL": "log_level",
    "AIDOI_PAGE_SIZE": "page_size",
}


@dataclass
class PortalConfig:
    """Settings for the portal and its backend connection."""
    api_base_url: str = "http://localhost:8080/api"
    request_timeout: float = 10.0
    token_cookie: str = "aidoi_token"
    cookie_max_age_days: int = 7
    port: int = 5001
    log_level: str = "INFO"
    page_size: int = 10

    @property
    def cookie_max_age(self) -> int:
        """Cookie lifetime in seconds."""
        return self.cookie_max_age_days * 24 * 60 * 60


def _coerce(name: str, value):
    """Cast a raw env/yaml value to the field's declared type."""
    default = getattr(PortalConfig, name)
    if isinstance(default, bool):
        return str(value).lower() in ("1", "true", "yes")
    if isinstance(default, int):
        return int(value)
    if isinstance(default, float):
        return float(value)
    return str(value)


def load_yaml_config(path: Optional[Path] = None) -> dict:
    """Load YAML overrides. Missing file means no overrides."""
    path = Path(path or os.environ.get("AIDOI_PORTAL_CONFIG") or PORTAL_CONFIG)
    if path.exists():
        with open(path) as f:
            return yaml.safe_load(f) or {}
    return {}


def load_config(path: Optional[Path] = None, env: Optional[dict] = None) -> PortalConfig:
    """Build the effective config."""
    env = os.environ if env is None else env
    known = {f.name for f in fields(PortalConfig)}

    values = {}
    for key, value in load_yaml_config(path).items():
        if key in known:
            values[key] = _coerce(key, value)

    for env_key, name in _ENV_KEYS.items():
        if env.get(env_key):
            values[name] = _coerce(name, env[env_key])

    return PortalConfig(**values)


def configure_logging(level: str = "INFO") -> None:
    """Route stdlib logging through rich."""
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
        force=True,
    )
