import os
import re
from dataclasses import dataclass

from exceptions import ConfigurationError

_HEX_ID = re.compile(r"([a-f0-9]{32})", re.IGNORECASE)


def normalize_database_id(value: str) -> str:
    """Reduce a pasted database URL or dashed UUID to the bare 32-char hex id."""
    trimmed = (value or "").strip()
    match = _HEX_ID.search(trimmed)
    if match:
        return match.group(1).lower()
    return trimmed.replace("-", "").lower()


@dataclass
class _Settings:
    proxy_url: str = ""
    database_id: str = ""
    timeout: float = 10.0

    @property
    def base_url(self) -> str:
        return self.proxy_url.strip().rstrip("/")

    @property
    def normalized_database_id(self) -> str:
        return normalize_database_id(self.database_id)

    def require(self) -> None:
        if not self.proxy_url.strip() or not self.database_id.strip():
            raise ConfigurationError("Enter proxy URL and database ID above, then Sync.")


def get_settings(**overrides) -> _Settings:
    settings = _Settings(
        proxy_url=os.getenv("NOTION_PROXY_URL", ""),
        database_id=os.getenv("NOTION_DATABASE_ID", ""),
        timeout=float(os.getenv("NOTION_SYNC_TIMEOUT", "10.0")),
    )
    for key, value in overrides.items():
        if value is not None:
            setattr(settings, key, value)
    return settings


__all__ = ["get_settings", "normalize_database_id", "_Settings"]
