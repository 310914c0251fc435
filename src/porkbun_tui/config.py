"""
porkbun-tui configuration

API endpoints, cache location, UI tunables and logging live here.
Environment variables override defaults. Credentials are loaded separately
by load_credentials() because their absence is a fatal startup error.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml

logger = logging.getLogger(__name__)

APP_NAME = "porkbun-tui"


class ConfigError(Exception):
    """Missing or partial registrar credentials."""
    pass


def _default_cache_dir() -> Path:
    override = os.getenv("PORKBUN_TUI_CACHE_DIR")
    if override:
        return Path(override).expanduser()
    return Path.home() / ".cache" / APP_NAME


@dataclass
class APIConfig:
    """Registrar HTTP settings"""
    base_url: str = os.getenv("PORKBUN_API_URL", "https://api.porkbun.com/api/json/v3")
    timeout_seconds: float = float(os.getenv("PORKBUN_TIMEOUT", "30.0"))
    page_size: int = 1000  # domain/listAll returns at most this many per call


@dataclass
class CacheConfig:
    """Where fetched snapshots are written"""
    directory: Path = field(default_factory=_default_cache_dir)
    domains_file: str = "domains.json"
    pricing_file: str = "pricing.json"


@dataclass
class UIConfig:
    """Dashboard behavior"""
    spinner_interval_seconds: float = float(os.getenv("PORKBUN_TUI_SPINNER", "0.1"))
    availability_history: int = 10
    nameserver_fields: int = 4
    demo_mode: bool = os.getenv("PORKBUN_TUI_DEMO", "").lower() in ("1", "true", "yes")


@dataclass
class LogConfig:
    """Logging goes to a file; the terminal belongs to the UI"""
    level: str = os.getenv("PORKBUN_TUI_LOG_LEVEL", "WARNING").upper()
    file: Optional[Path] = None

    def resolve_file(self, cache_dir: Path) -> Path:
        override = os.getenv("PORKBUN_TUI_LOG_FILE")
        if override:
            return Path(override).expanduser()
        return self.file or cache_dir / f"{APP_NAME}.log"


@dataclass
class Config:
    """Master config; import this"""
    api: APIConfig = field(default_factory=APIConfig)
    cache: CacheConfig = field(default_factory=CacheConfig)
    ui: UIConfig = field(default_factory=UIConfig)
    log: LogConfig = field(default_factory=LogConfig)

    @property
    def log_file(self) -> Path:
        return self.log.resolve_file(self.cache.directory)


@dataclass
class Credentials:
    """Opaque registrar key pair."""
    api_key: str
    secret_key: str

    def as_payload(self) -> dict:
        return {"apikey": self.api_key, "secretapikey": self.secret_key}


CREDENTIALS_HELP = """\
Set your Porkbun API credentials:
  export PORKBUN_API_KEY=pk1_xxx
  export PORKBUN_SECRET_KEY=sk1_xxx

Or create ~/.config/porkbun-tui/config.yaml:
  api_key: pk1_xxx
  secret_key: sk1_xxx

Get your API keys at: https://porkbun.com/account/api"""


def config_file_path() -> Optional[Path]:
    """
    Locate the credentials file.

    $XDG_CONFIG_HOME/porkbun-tui/config.yaml is checked first, then
    ~/.config/porkbun-tui/config.yaml. Returns None when neither exists.
    """
    xdg = os.getenv("XDG_CONFIG_HOME")
    if xdg:
        path = Path(xdg) / APP_NAME / "config.yaml"
        if path.is_file():
            return path

    path = Path.home() / ".config" / APP_NAME / "config.yaml"
    if path.is_file():
        return path

    return None


def _load_file(path: Path) -> dict:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        logger.warning("Ignoring unreadable config file %s: %s", path, e)
        return {}

    if not isinstance(data, dict):
        logger.warning("Ignoring config file %s: expected a mapping", path)
        return {}
    return data


def load_credentials(path: Optional[Path] = None) -> Credentials:
    """
    Load the API key pair.

    Environment variables take precedence; any value they leave empty is
    filled from the YAML config file.

    Args:
        path: Explicit config file (defaults to config_file_path())

    Returns:
        Credentials with both keys set

    Raises:
        ConfigError: If either key is still missing
    """
    api_key = os.getenv("PORKBUN_API_KEY", "")
    secret_key = os.getenv("PORKBUN_SECRET_KEY", "")

    if not (api_key and secret_key):
        path = path or config_file_path()
        if path is not None:
            data = _load_file(path)
            api_key = api_key or str(data.get("api_key") or "")
            secret_key = secret_key or str(data.get("secret_key") or "")

    if not (api_key and secret_key):
        raise ConfigError(
            "missing API credentials. Set PORKBUN_API_KEY and PORKBUN_SECRET_KEY "
            "environment variables, or create ~/.config/porkbun-tui/config.yaml"
        )

    return Credentials(api_key=api_key, secret_key=secret_key)


# Singleton
config = Config()
