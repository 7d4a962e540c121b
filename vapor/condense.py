"""
Cosmetic progress sequence shown while vapor deposits are "condensed".

Nothing here is cryptographic.  The real settlement (Merkle accumulator
plus a zero-knowledge proof of the secret) is an external service; this
module only replays a fixed list of labelled steps with a delay between
them and then flips the selected store records to ``condensed``.  It
must never be wired into the derivation path.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional

from .config import CondenseConfig
from .store import StoredVaporAddress, VaporStatus, VaporStore

logger = logging.getLogger(__name__)

CONDENSE_STEPS = (
    "Loading witness data",
    "Generating ZK circuit",
    "Computing proof",
    "Verifying locally",
    "Submitting to chain",
)


@dataclass(frozen=True)
class CondenseProgress:
    """Snapshot handed to the progress callback before each step."""

    index: int
    total: int
    label: str

    @property
    def fraction(self) -> float:
        return self.index / self.total if self.total else 1.0


def _is_condensable(record: Optional[StoredVaporAddress]) -> bool:
    return (
        record is not None
        and record.status is not VaporStatus.CONDENSED
        and record.amount is not None
        and record.amount > 0
    )


def simulate_condense(
    store: VaporStore,
    record_ids: Iterable[str],
    config: Optional[CondenseConfig] = None,
    on_step: Optional[Callable[[CondenseProgress], None]] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> List[str]:
    """
    Play the fake proof-generation steps, then mark *record_ids* as
    condensed.  Returns the ids that were marked.

    Only known, not yet condensed records with a positive deposit amount
    take part.  When none are left the call returns immediately without
    showing any step.
    """
    ids = list(record_ids)
    eligible = [rid for rid in ids if _is_condensable(store.get(rid))]
    if not eligible:
        return []
    config = config or CondenseConfig()

    total = len(CONDENSE_STEPS)
    for index, label in enumerate(CONDENSE_STEPS):
        progress = CondenseProgress(index=index, total=total, label=label)
        logger.debug("condense step %d/%d: %s", index + 1, total, label)
        if on_step is not None:
            on_step(progress)
        sleep(config.step_delay_sec)

    condensed = [rid for rid in eligible if store.mark_condensed(rid)]
    logger.info("condensed %d of %d vapor addresses", len(condensed), len(ids))
    return condensed
