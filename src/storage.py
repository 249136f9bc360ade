"""Saving and loading the offer collection.

The collection is stored as a single JSON document, in a local cache file
and optionally in a remote REST table under a fixed record id. Remote
storage is best effort: failures are logged and reported, never raised
into the calculation code.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, List

import requests

from .config import (
    DEFAULT_BANK_NAMES,
    DEFAULT_BASE_RATE,
    DEFAULT_HOUSE_PRICE,
    DEFAULT_LOAN_PERCENTAGE,
    DEFAULT_RECORD_ID,
    DEFAULT_REMOTE_TABLE,
    DEFAULT_YEARS,
    REMOTE_TIMEOUT_SECONDS,
    Settings,
)
from .offers import Bonus, Offer, create_offer, new_id

logger = logging.getLogger(__name__)

DOCUMENT_VERSION = "1.0"
LOCAL_FILENAME = "offers.json"


class StorageError(RuntimeError):
    """Raised when a store cannot read or write the offer document."""


def bonus_to_dict(bonus: Bonus) -> dict:
    """Convert Bonus to serializable dictionary."""
    return {
        "id": bonus.id,
        "label": bonus.label,
        "value": bonus.value,
        "active": bonus.active,
        "details": bonus.details,
    }


def dict_to_bonus(data: dict) -> Bonus:
    """Convert dictionary to Bonus."""
    if not isinstance(data, dict):
        raise ValueError(f"Expected a bonus object, got {type(data).__name__}")
    return Bonus(
        id=str(data.get("id") or new_id()),
        label=data.get("label", ""),
        value=data.get("value", 0),
        active=bool(data.get("active", True)),
        details=data.get("details") or "",
    )


def offer_to_dict(offer: Offer) -> dict:
    """Convert Offer to serializable dictionary."""
    return {
        "id": offer.id,
        "bankName": offer.bank_name,
        "housePrice": offer.house_price,
        "loanPercentage": offer.loan_percentage,
        "baseRate": offer.base_rate,
        "years": offer.years,
        "extraCost": offer.extra_cost,
        "bonuses": [bonus_to_dict(b) for b in offer.bonuses],
    }


def dict_to_offer(data: dict) -> Offer:
    """Convert dictionary to Offer."""
    if not isinstance(data, dict):
        raise ValueError(f"Expected an offer object, got {type(data).__name__}")
    bonuses = data.get("bonuses", [])
    if not isinstance(bonuses, list):
        raise ValueError(f"Expected a list of bonuses, got {type(bonuses).__name__}")
    return Offer(
        id=str(data.get("id") or new_id()),
        bank_name=data.get("bankName", ""),
        house_price=float(data.get("housePrice", DEFAULT_HOUSE_PRICE)),
        loan_percentage=float(data.get("loanPercentage", DEFAULT_LOAN_PERCENTAGE)),
        base_rate=float(data.get("baseRate", DEFAULT_BASE_RATE)),
        years=int(data.get("years", DEFAULT_YEARS)),
        extra_cost=float(data.get("extraCost") or 0),
        bonuses=[dict_to_bonus(b) for b in bonuses],
    )


def offers_to_document(offers: List[Offer]) -> dict:
    """Serialize the offer collection to a single document."""
    return {
        "version": DOCUMENT_VERSION,
        "offers": [offer_to_dict(o) for o in offers],
    }


def document_to_offers(document: Any) -> List[Offer]:
    """Deserialize a document; a bare list of offers is also accepted."""
    if isinstance(document, list):
        items = document
    elif isinstance(document, dict):
        items = document.get("offers", [])
        if not isinstance(items, list):
            raise ValueError(f"Expected a list of offers, got {type(items).__name__}")
    else:
        raise ValueError(f"Unexpected document type: {type(document).__name__}")
    return [dict_to_offer(item) for item in items]


def default_offers() -> List[Offer]:
    """Offers shown on first start."""
    return [create_offer(name) for name in DEFAULT_BANK_NAMES]


def same_content(first: List[Offer], second: List[Offer]) -> bool:
    """Deep equality of the serialized collections."""
    return offers_to_document(first) == offers_to_document(second)


class LocalOfferStore:
    """Keeps the offer document in a JSON file."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def load(self) -> List[Offer] | None:
        """Load offers, or None when the file is missing or unreadable."""
        if not self.path.exists():
            return None

        try:
            with open(self.path) as f:
                document = json.load(f)
            return document_to_offers(document)
        except (OSError, json.JSONDecodeError, KeyError, ValueError, TypeError) as e:
            logger.warning("Ignoring unreadable offer cache %s: %s", self.path, e)
            return None

    def save(self, offers: List[Offer]) -> None:
        """Write offers to the cache file."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        document = offers_to_document(offers)
        document["updated_at"] = datetime.now().isoformat()

        with open(self.path, "w") as f:
            json.dump(document, f, indent=2)

    def clear(self) -> None:
        """Delete the cache file."""
        if self.path.exists():
            self.path.unlink()


class RemoteOfferStore:
    """Keeps the offer document in a REST table row keyed by a fixed id.

    The table is expected to expose ``id`` (text), ``data`` (JSON) and
    ``updated_at`` (timestamp) columns through a PostgREST-style endpoint.
    """

    def __init__(
        self,
        url: str,
        api_key: str,
        table: str = DEFAULT_REMOTE_TABLE,
        record_id: str = DEFAULT_RECORD_ID,
        timeout: float = REMOTE_TIMEOUT_SECONDS,
    ):
        self.endpoint = f"{url.rstrip('/')}/rest/v1/{table}"
        self.record_id = record_id
        self.timeout = timeout
        self.headers = {
            "apikey": api_key,
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        }

    def load(self) -> List[Offer] | None:
        """Fetch the remote offers, or None when no record exists yet.

        Raises:
            StorageError: If the request fails or returns malformed data
        """
        params = {"id": f"eq.{self.record_id}", "select": "data"}

        try:
            response = requests.get(
                self.endpoint, params=params, headers=self.headers, timeout=self.timeout
            )
            response.raise_for_status()
            rows = response.json()
        except requests.RequestException as e:
            raise StorageError(f"Failed to load offers from remote store: {e}") from e
        except ValueError as e:
            raise StorageError(f"Remote store returned invalid JSON: {e}") from e

        if not rows:
            return None

        try:
            return document_to_offers(rows[0]["data"])
        except (KeyError, TypeError, ValueError) as e:
            raise StorageError(f"Malformed remote offer document: {e}") from e

    def save(self, offers: List[Offer]) -> None:
        """Upsert the offer document.

        Raises:
            StorageError: If the request fails
        """
        payload = {
            "id": self.record_id,
            "data": offers_to_document(offers),
            "updated_at": datetime.now().isoformat(),
        }
        headers = {**self.headers, "Prefer": "resolution=merge-duplicates"}

        try:
            response = requests.post(
                self.endpoint, json=payload, headers=headers, timeout=self.timeout
            )
            response.raise_for_status()
        except requests.RequestException as e:
            raise StorageError(f"Failed to save offers to remote store: {e}") from e


@dataclass
class SaveResult:
    """Outcome of a save; remote_error is set when the remote write failed."""

    local_saved: bool
    remote_saved: bool
    remote_error: str | None = None

    @property
    def ok(self) -> bool:
        """True when every configured store was written."""
        return self.local_saved and self.remote_error is None


class OfferRepository:
    """Loads and saves offers through the local cache and optional remote store."""

    def __init__(self, local: LocalOfferStore, remote: RemoteOfferStore | None = None):
        self.local = local
        self.remote = remote

    @classmethod
    def from_settings(cls, settings: Settings) -> OfferRepository:
        """Build a repository from environment settings."""
        local = LocalOfferStore(settings.cache_dir / LOCAL_FILENAME)
        remote = None
        if settings.remote_enabled:
            remote = RemoteOfferStore(
                settings.remote_url,
                settings.remote_key,
                table=settings.remote_table,
                record_id=settings.record_id,
            )
        return cls(local, remote)

    def load(self) -> List[Offer]:
        """Load offers from remote, then local cache, then defaults."""
        if self.remote is not None:
            try:
                offers = self.remote.load()
                if offers is not None:
                    logger.info("Loaded %d offers from remote store", len(offers))
                    return offers
            except StorageError as e:
                logger.warning("Remote load failed, using local cache: %s", e)

        offers = self.local.load()
        if offers is not None:
            logger.info("Loaded %d offers from local cache", len(offers))
            return offers

        logger.info("No saved offers, starting with defaults")
        return default_offers()

    def save(self, offers: List[Offer]) -> SaveResult:
        """Save locally, then remotely when configured."""
        local_saved = True
        try:
            self.local.save(offers)
        except OSError as e:
            logger.warning("Could not write local offer cache: %s", e)
            local_saved = False

        if self.remote is None:
            return SaveResult(local_saved=local_saved, remote_saved=False)

        try:
            self.remote.save(offers)
        except StorageError as e:
            logger.warning("Remote save failed: %s", e)
            return SaveResult(local_saved=local_saved, remote_saved=False, remote_error=str(e))

        return SaveResult(local_saved=local_saved, remote_saved=True)

    @staticmethod
    def reconcile(current: List[Offer], incoming: List[Offer]) -> List[Offer]:
        """Apply a change notification with last-writer-wins.

        Returns ``incoming`` when its content differs from ``current``,
        otherwise ``current`` unchanged.
        """
        if same_content(current, incoming):
            return current
        logger.info("Applying remote change to %d offers", len(incoming))
        return incoming


def export_offers(offers: List[Offer], filepath: str) -> None:
    """Export offers to a JSON file."""
    document = offers_to_document(offers)
    document["exported_at"] = datetime.now().isoformat()

    with open(filepath, "w") as f:
        json.dump(document, f, indent=2)


def import_offers(filepath: str) -> List[Offer]:
    """Import offers from a JSON file."""
    with open(filepath) as f:
        document = json.load(f)

    return document_to_offers(document)
