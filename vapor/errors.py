"""
Error taxonomy for vapor address derivation.

Each error also derives from the matching built-in so callers that only
care about the broad category can catch ``ValueError``,
``ZeroDivisionError`` or ``RuntimeError``.
"""

from __future__ import annotations


class VaporError(Exception):
    """Base class for every error raised by this package."""


class InvalidRecipient(VaporError, ValueError):
    """Recipient key is not base58 or does not decode to 32 bytes."""


class NoSquareRoot(VaporError, ValueError):
    """Value is a quadratic non-residue modulo the field prime."""


class NoInverse(VaporError, ZeroDivisionError):
    """Value is congruent to zero and has no multiplicative inverse."""


class AddressGenerationFailed(VaporError, RuntimeError):
    """Rejection sampling ran out of attempts without finding a point."""

    def __init__(self, attempts: int) -> None:
        super().__init__(
            f"no valid curve point found after {attempts} attempts"
        )
        self.attempts = attempts


class StoreError(VaporError):
    """Malformed backup data handed to a vapor address store."""
