"""
porkbun-tui: terminal dashboard for Porkbun domains.

Browse domains, DNS records and nameservers, check availability, and see
renewal costs and expirations at a glance.
"""

__version__ = "0.1.0"

from .app import App, ViewName
from .cache import CacheError, DecodeError, SnapshotCache
from .config import ConfigError, Credentials, config, load_credentials
from .models import AvailabilityResult, DNSRecord, Domain, TLDPricing
from .registrar import FetchError, PorkbunClient, RegistrarClient

__all__ = [
    # Controller
    "App",
    "ViewName",
    # Models
    "Domain",
    "DNSRecord",
    "TLDPricing",
    "AvailabilityResult",
    # Registrar
    "RegistrarClient",
    "PorkbunClient",
    "FetchError",
    # Cache
    "SnapshotCache",
    "CacheError",
    "DecodeError",
    # Config
    "config",
    "Credentials",
    "ConfigError",
    "load_credentials",
]
