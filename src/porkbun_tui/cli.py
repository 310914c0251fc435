"""
Command-line entry point for porkbun-tui

Parses the (tiny) flag surface, sets up file logging, loads credentials
and cached snapshots, then hands over to the terminal frontend.
"""

import argparse
import logging
import sys
from typing import Any, Callable, Optional

from . import __version__, terminal
from .app import App
from .cache import CacheError, SnapshotCache
from .config import APP_NAME, CREDENTIALS_HELP, ConfigError, config, load_credentials
from .registrar import PorkbunClient

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

SHORTCUTS = """\
Keyboard shortcuts:
  j/k, ↑/↓     Navigate lists
  Enter        Select / expand
  Esc          Go back
  /            Search/filter domains
  d            View DNS records
  n            View/edit nameservers
  t            TLD breakdown (costs)
  c            Calendar view (expirations)
  a            Check domain availability
  r            Refresh data
  ?            Show help
  q            Quit

Demo mode (no credentials needed): PORKBUN_TUI_DEMO=1 porkbun-tui
Cache: ~/.cache/porkbun-tui/"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=APP_NAME,
        description="Terminal UI for managing Porkbun domains",
        epilog=f"Configuration:\n{CREDENTIALS_HELP}\n\n{SHORTCUTS}",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-v", "--version",
        action="version",
        version=f"{APP_NAME} {__version__}",
    )
    return parser


def setup_logging() -> None:
    """Send logs to a file; stderr would draw over the UI."""
    level = getattr(logging, config.log.level, logging.WARNING)
    path = config.log_file
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        logging.basicConfig(filename=str(path), level=level, format=LOG_FORMAT)
    except OSError:
        logging.getLogger().addHandler(logging.NullHandler())


def open_cache() -> Optional[SnapshotCache]:
    try:
        return SnapshotCache.default()
    except CacheError as e:
        print(f"Warning: could not initialize cache: {e}", file=sys.stderr)
        logger.warning("Cache disabled: %s", e)
        return None


def load_snapshot(load: Callable[[], tuple[Any, Any]], empty: Any, what: str) -> tuple[Any, Any]:
    """Read one snapshot; a broken one is logged and treated as absent."""
    try:
        return load()
    except CacheError as e:
        logger.warning("Ignoring cached %s: %s", what, e)
        return empty, None


def build_app() -> App:
    """
    Assemble the controller from config, credentials and cache.

    Raises:
        ConfigError: If credentials are missing outside demo mode
    """
    if config.ui.demo_mode:
        return App(demo_mode=True)

    credentials = load_credentials()
    cache = open_cache()

    domains, updated_at = [], None
    pricing = {}
    if cache is not None:
        domains, updated_at = load_snapshot(cache.load_domains, [], "domains")
        pricing, _ = load_snapshot(cache.load_pricing, {}, "pricing")

    return App(
        registrar=PorkbunClient(credentials),
        cache=cache,
        domains=domains,
        pricing=pricing,
        domains_updated_at=updated_at,
    )


def main(argv: Optional[list[str]] = None) -> None:
    """Main CLI entry point."""
    build_parser().parse_args(argv)
    setup_logging()

    try:
        app = build_app()
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        print(f"\n{CREDENTIALS_HELP}", file=sys.stderr)
        sys.exit(1)

    logger.info("Starting %s %s", APP_NAME, __version__)
    try:
        terminal.run(app)
    except Exception as e:
        logger.exception("Run loop failed")
        print(f"Error running app: {e}", file=sys.stderr)
        sys.exit(1)
    logger.info("Exited cleanly")


if __name__ == "__main__":
    main()
