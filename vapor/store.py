"""
Bookkeeping for derived vapor addresses.

The derivation core never persists anything.  Callers that want to keep
secrets around (so deposits can later be condensed) inject a
``VaporStore``.  Records carry a small lifecycle::

    pending ──deposit seen──▶ deposited ──proof settled──▶ condensed

Backups use the same JSON layout as the browser wallet
(``vaporAddress``, ``recipientAddress``, ``secretHex`` …), so exported
files can be moved between the two.
"""

from __future__ import annotations

import json
import logging
import math
import threading
import time
import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass, fields, replace
from enum import Enum
from typing import Any, Dict, List, Optional

from .address import VaporAddressResult
from .errors import StoreError

logger = logging.getLogger(__name__)


class VaporStatus(str, Enum):
    PENDING = "pending"
    DEPOSITED = "deposited"
    CONDENSED = "condensed"


# python attribute  ↔  backup JSON key
_JSON_KEYS = {
    "id": "id",
    "vapor_address": "vaporAddress",
    "recipient_address": "recipientAddress",
    "secret_hex": "secretHex",
    "created_at": "createdAt",
    "amount": "amount",
    "deposit_tx_id": "depositTxId",
    "status": "status",
}


@dataclass(frozen=True)
class StoredVaporAddress:
    """One persisted vapor address.  ``created_at`` is unix milliseconds."""

    id: str
    vapor_address: str
    recipient_address: str
    secret_hex: str
    created_at: int
    amount: Optional[float] = None
    deposit_tx_id: Optional[str] = None
    status: VaporStatus = VaporStatus.PENDING

    def __post_init__(self) -> None:
        object.__setattr__(self, "status", VaporStatus(self.status))

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        for attr, key in _JSON_KEYS.items():
            value = getattr(self, attr)
            if value is None:
                continue
            out[key] = value.value if isinstance(value, VaporStatus) else value
        return out

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> StoredVaporAddress:
        kwargs = {attr: data[key] for attr, key in _JSON_KEYS.items() if key in data}
        return cls(**kwargs)


class VaporStore(ABC):
    """
    Storage interface keyed by record id and queryable by owner
    (recipient address).

    Subclasses implement the five primitives; lifecycle helpers and the
    JSON backup format are shared.
    """

    # ── primitives ─────────────────────────────────────────────────────

    @abstractmethod
    def put(self, record: StoredVaporAddress) -> None:
        """Insert or replace *record* by its id."""

    @abstractmethod
    def get(self, record_id: str) -> Optional[StoredVaporAddress]:
        ...

    @abstractmethod
    def list(self) -> List[StoredVaporAddress]:
        """All records in insertion order."""

    @abstractmethod
    def delete(self, record_id: str) -> bool:
        ...

    @abstractmethod
    def clear(self) -> None:
        ...

    # ── queries ────────────────────────────────────────────────────────

    def list_for_owner(self, owner: str) -> List[StoredVaporAddress]:
        return [r for r in self.list() if r.recipient_address == owner]

    def active_for_owner(self, owner: str) -> List[StoredVaporAddress]:
        """Records for *owner* that have not been condensed yet."""
        return [
            r for r in self.list_for_owner(owner)
            if r.status is not VaporStatus.CONDENSED
        ]

    # ── lifecycle ──────────────────────────────────────────────────────

    def save_result(
        self,
        result: VaporAddressResult,
        amount: Optional[float] = None,
    ) -> StoredVaporAddress:
        """Persist a derivation result as a new ``pending`` record."""
        record = StoredVaporAddress(
            id=str(uuid.uuid4()),
            vapor_address=result.address,
            recipient_address=result.recipient,
            secret_hex=result.secret_hex,
            created_at=int(time.time() * 1000),
            amount=amount,
        )
        self.put(record)
        logger.info("stored vapor address %s for %s", record.vapor_address, record.recipient_address)
        return record

    def update(self, record_id: str, **changes: Any) -> Optional[StoredVaporAddress]:
        """
        Apply *changes* to a record.  Returns the new record, or ``None``
        if *record_id* is unknown.
        """
        allowed = {f.name for f in fields(StoredVaporAddress)} - {"id"}
        unknown = set(changes) - allowed
        if unknown:
            raise ValueError(f"cannot update fields: {sorted(unknown)}")

        record = self.get(record_id)
        if record is None:
            return None
        updated = replace(record, **changes)
        self.put(updated)
        return updated

    def mark_deposited(
        self,
        record_id: str,
        amount: float,
        tx_id: Optional[str] = None,
    ) -> Optional[StoredVaporAddress]:
        """Record a deposit; *amount* must be a positive number."""
        if math.isnan(amount) or amount <= 0:
            raise ValueError(f"deposit amount must be positive, got {amount}")
        changes: Dict[str, Any] = {"amount": amount, "status": VaporStatus.DEPOSITED}
        if tx_id is not None:
            changes["deposit_tx_id"] = tx_id
        return self.update(record_id, **changes)

    def mark_condensed(self, record_id: str) -> bool:
        return self.update(record_id, status=VaporStatus.CONDENSED) is not None

    # ── backup ─────────────────────────────────────────────────────────

    def export_json(self) -> str:
        return json.dumps([r.to_dict() for r in self.list()], indent=2)

    def import_json(self, text: str) -> int:
        """
        Merge records from a backup, skipping vapor addresses that are
        already present.  Returns the number of records added.
        """
        try:
            items = json.loads(text)
            if not isinstance(items, list):
                raise TypeError("backup must be a JSON list")
            imported = [StoredVaporAddress.from_dict(item) for item in items]
        except (ValueError, TypeError, KeyError) as exc:
            raise StoreError(f"malformed vapor address backup: {exc}") from exc

        known = {r.vapor_address for r in self.list()}
        added = 0
        for record in imported:
            if record.vapor_address in known:
                continue
            self.put(record)
            known.add(record.vapor_address)
            added += 1

        logger.info("imported %d of %d vapor addresses", added, len(imported))
        return added


class MemoryVaporStore(VaporStore):
    """Dict-backed store; each primitive holds a lock."""

    def __init__(self) -> None:
        self._records: Dict[str, StoredVaporAddress] = {}
        self._lock = threading.Lock()

    def put(self, record: StoredVaporAddress) -> None:
        with self._lock:
            self._records[record.id] = record

    def get(self, record_id: str) -> Optional[StoredVaporAddress]:
        with self._lock:
            return self._records.get(record_id)

    def list(self) -> List[StoredVaporAddress]:
        with self._lock:
            return list(self._records.values())

    def delete(self, record_id: str) -> bool:
        with self._lock:
            return self._records.pop(record_id, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._records.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)
