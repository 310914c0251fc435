"""
Snapshot cache

Keeps the last fetched domain list and price sheet on disk so the next
start can render immediately while a live refresh runs. Writes are
best-effort overwrites; there is no locking between processes.
"""

import json
import logging
import os
import tempfile
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

from .config import config
from .models import Domain, TLDPricing

logger = logging.getLogger(__name__)


class CacheError(Exception):
    """Snapshot could not be read or written."""
    pass


class DecodeError(CacheError):
    """Snapshot file exists but its content is malformed."""
    pass


class SnapshotCache:
    """
    JSON snapshots under a single directory.

    Each file holds {"data": ..., "updated_at": <ISO-8601>}.
    """

    def __init__(self, directory: Path):
        self.directory = Path(directory)
        self.domains_path = self.directory / config.cache.domains_file
        self.pricing_path = self.directory / config.cache.pricing_file

    @classmethod
    def default(cls) -> "SnapshotCache":
        """
        Cache in the configured directory (~/.cache/porkbun-tui by default).

        Raises:
            CacheError: If the directory cannot be created
        """
        directory = config.cache.directory
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise CacheError(f"could not create cache directory {directory}: {e}") from e
        return cls(directory)

    def _read(self, path: Path) -> tuple[Optional[Any], Optional[datetime]]:
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None, None
        except UnicodeDecodeError as e:
            raise DecodeError(f"malformed snapshot {path}: {e}") from e
        except OSError as e:
            raise CacheError(f"could not read {path}: {e}") from e

        try:
            payload = json.loads(text)
            data = payload["data"]
            stamp = payload.get("updated_at")
            updated_at = datetime.fromisoformat(stamp) if stamp else None
        except (ValueError, KeyError, TypeError) as e:
            raise DecodeError(f"malformed snapshot {path}: {e}") from e

        return data, updated_at

    def _write(self, path: Path, data: Any) -> None:
        payload = {"data": data, "updated_at": datetime.now().isoformat()}
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            fd, tmp = tempfile.mkstemp(dir=self.directory, prefix=f".{path.name}.")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(payload, f, indent=2)
                os.replace(tmp, path)
            except BaseException:
                if os.path.exists(tmp):
                    os.unlink(tmp)
                raise
        except OSError as e:
            raise CacheError(f"could not write {path}: {e}") from e

    def load_domains(self) -> tuple[list[Domain], Optional[datetime]]:
        """
        Load the cached domain list.

        Returns:
            (domains, updated_at); ([], None) when there is no snapshot

        Raises:
            DecodeError: If the snapshot is malformed
            CacheError: On other read failures
        """
        data, updated_at = self._read(self.domains_path)
        if data is None:
            return [], None
        if not isinstance(data, list):
            raise DecodeError(f"malformed snapshot {self.domains_path}: expected a list")
        try:
            domains = [Domain.from_dict(item) for item in data]
        except (KeyError, TypeError, ValueError) as e:
            raise DecodeError(f"malformed snapshot {self.domains_path}: {e}") from e
        return domains, updated_at

    def save_domains(self, domains: list[Domain]) -> None:
        self._write(self.domains_path, [d.to_dict() for d in domains])

    def load_pricing(self) -> tuple[dict[str, TLDPricing], Optional[datetime]]:
        """
        Load the cached price sheet.

        Returns:
            (pricing, updated_at); ({}, None) when there is no snapshot

        Raises:
            DecodeError: If the snapshot is malformed
            CacheError: On other read failures
        """
        data, updated_at = self._read(self.pricing_path)
        if data is None:
            return {}, None
        if not isinstance(data, dict):
            raise DecodeError(f"malformed snapshot {self.pricing_path}: expected a mapping")
        try:
            pricing = {tld: TLDPricing.from_dict(item) for tld, item in data.items()}
        except (KeyError, TypeError, ValueError) as e:
            raise DecodeError(f"malformed snapshot {self.pricing_path}: {e}") from e
        return pricing, updated_at

    def save_pricing(self, pricing: dict[str, TLDPricing]) -> None:
        self._write(self.pricing_path, {tld: p.to_dict() for tld, p in pricing.items()})

    def clear(self) -> None:
        """Remove both snapshots; missing files are fine."""
        for path in (self.domains_path, self.pricing_path):
            try:
                path.unlink()
            except FileNotFoundError:
                continue
            except OSError as e:
                raise CacheError(f"could not remove {path}: {e}") from e
