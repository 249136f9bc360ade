"""Application configuration read from environment variables."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

# Input ranges enforced by the form layer
LOAN_PERCENTAGE_RANGE = (0.0, 100.0)
BASE_RATE_RANGE = (0.0, 20.0)
YEARS_RANGE = (1, 50)
BONUS_VALUE_RANGE = (0.0, 5.0)

# Defaults for a freshly added offer
DEFAULT_HOUSE_PRICE = 250000.0
DEFAULT_LOAN_PERCENTAGE = 80.0
DEFAULT_BASE_RATE = 3.0
DEFAULT_YEARS = 30
DEFAULT_BONUS_VALUE = 0.1
DEFAULT_BANK_NAMES = ("Bank A", "Bank B")

# Storage configuration
DEFAULT_CACHE_DIR = Path.home() / ".cache" / "mortgage-offer-comparison"
DEFAULT_REMOTE_TABLE = "mortgage_offers"
DEFAULT_RECORD_ID = "shared"  # single shared document
REMOTE_TIMEOUT_SECONDS = 10

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass(frozen=True)
class Settings:
    """Snapshot of the environment-driven settings."""

    cache_dir: Path
    remote_url: str | None
    remote_key: str | None
    remote_table: str
    record_id: str
    log_level: str

    @property
    def remote_enabled(self) -> bool:
        """Remote storage needs both a URL and a key."""
        return bool(self.remote_url and self.remote_key)


def get_settings() -> Settings:
    """Read settings from the environment."""
    cache_dir = os.environ.get("MORTGAGE_COMPARE_CACHE_DIR")
    return Settings(
        cache_dir=Path(cache_dir) if cache_dir else DEFAULT_CACHE_DIR,
        remote_url=os.environ.get("MORTGAGE_COMPARE_REMOTE_URL") or None,
        remote_key=os.environ.get("MORTGAGE_COMPARE_REMOTE_KEY") or None,
        remote_table=os.environ.get("MORTGAGE_COMPARE_REMOTE_TABLE", DEFAULT_REMOTE_TABLE),
        record_id=os.environ.get("MORTGAGE_COMPARE_RECORD_ID", DEFAULT_RECORD_ID),
        log_level=os.environ.get("MORTGAGE_COMPARE_LOG_LEVEL", "INFO").upper(),
    )


def configure_logging(settings: Settings | None = None) -> None:
    """Configure root logging once for the application."""
    settings = settings or get_settings()
    level = getattr(logging, settings.log_level, logging.INFO)
    logging.basicConfig(level=level, format=LOG_FORMAT)
