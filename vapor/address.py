"""
Vapor address derivation and validation.

A vapor address is an ed25519 point that nobody holds a private key for.
It is obtained by hashing the recipient's public key together with a
fresh secret to an *x*-coordinate and solving the curve equation for *y*
(hash-to-curve by rejection sampling):

    s  ←$ [0, r)
    x  = H(R₀, R₁, s)  mod p        (R₀, R₁ = packed recipient key)
    y  = √((1 + x²) / (1 - d·x²))   retry with new s if no root exists

Nobody knows a scalar *k* with  k·B = (x, y),  so funds sent there can
only be released by proving knowledge of *s* for that recipient.

Usage
-----
::

    from vapor import generate_vapor_address, validate_vapor_address

    result = generate_vapor_address("11111111111111111111111111111111")
    assert validate_vapor_address(result.address)
    print(result.address, result.secret_hex)
"""

from __future__ import annotations

import logging
import secrets
import string
from dataclasses import dataclass
from typing import Callable, Optional, Sequence, Union

import base58

from .curve import CurvePoint, decompress, recover_y
from .errors import (
    AddressGenerationFailed,
    InvalidRecipient,
    NoInverse,
    NoSquareRoot,
)
from .field import BN254_R, ED25519_P, Fr
from .hash import field_hash
from .packing import pack_bytes

logger = logging.getLogger(__name__)

MAX_ATTEMPTS = 100
PUBLIC_KEY_BYTES = 32
SECRET_HEX_DIGITS = 64

# b58decode strips trailing whitespace, so the alphabet is checked up front.
_B58_CHARS = frozenset(base58.BITCOIN_ALPHABET.decode("ascii"))


# ── results ─────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class VaporAddressResult:
    """A freshly derived vapor address and the secret that binds it."""

    address: str
    address_bytes: bytes
    secret: Fr
    secret_hex: str
    recipient: str


@dataclass(frozen=True)
class SearchOutcome:
    """
    Tagged result of the bounded point search.

    ``found`` is ``False`` once ``attempts`` reached the bound; the point
    fields are then ``None``.
    """

    found: bool
    attempts: int
    point: Optional[CurvePoint] = None
    secret: Optional[Fr] = None
    encoded: Optional[bytes] = None


# ── encoding helpers ────────────────────────────────────────────────────

def decode_public_key(text: str) -> bytes:
    """Base58-decode a wallet key; raises ``InvalidRecipient`` unless 32 bytes."""
    if not isinstance(text, str):
        raise InvalidRecipient(f"expected base58 string, got {type(text).__name__}")
    if not text or not set(text) <= _B58_CHARS:
        raise InvalidRecipient(f"not a base58 string: {text!r}")
    try:
        raw = base58.b58decode(text)
    except ValueError as exc:
        raise InvalidRecipient(f"not a base58 string: {text!r}") from exc
    if len(raw) != PUBLIC_KEY_BYTES:
        raise InvalidRecipient(
            f"recipient must decode to {PUBLIC_KEY_BYTES} bytes, got {len(raw)}"
        )
    return raw


def secret_to_hex(secret: Union[int, Fr]) -> str:
    """``0x`` + 64 lowercase hex digits, big-endian, zero-padded."""
    v = int(secret)
    if not 0 <= v < BN254_R:
        raise ValueError("secret is outside the BN254 scalar field")
    return "0x" + format(v, f"0{SECRET_HEX_DIGITS}x")


def hex_to_secret(text: str) -> Fr:
    """Inverse of ``secret_to_hex``; the ``0x`` prefix is optional."""
    digits = text[2:] if text[:2].lower() == "0x" else text
    if not 0 < len(digits) <= SECRET_HEX_DIGITS:
        raise ValueError(f"expected 1..{SECRET_HEX_DIGITS} hex digits")
    if any(c not in string.hexdigits for c in digits):
        raise ValueError(f"not a hex string: {text!r}")
    v = int(digits, 16)
    if v >= BN254_R:
        raise ValueError("secret is outside the BN254 scalar field")
    return Fr(v)


def _random_bit() -> int:
    return secrets.randbits(1)


# ── derivation ──────────────────────────────────────────────────────────

def search_vapor_point(
    recipient_fields: Sequence[int],
    max_attempts: int = MAX_ATTEMPTS,
    draw_secret: Callable[[], Fr] = Fr.random,
    draw_bit: Callable[[], int] = _random_bit,
) -> SearchOutcome:
    """
    Bounded rejection sampling for a curve point bound to a recipient.

    Each attempt draws a secret, hashes it with the first two packed
    recipient elements and tries to solve for *y*.  A non-residue (about
    half of all candidates) just moves on to the next attempt.  The sign
    of *y* is chosen with one random bit; neither sign has a known
    discrete log.

    Never raises for an unlucky run: exhaustion is reported as
    ``SearchOutcome(found=False, attempts=max_attempts)``.
    """
    if max_attempts < 0:
        raise ValueError("max_attempts must be non-negative")
    if len(recipient_fields) < 2:
        raise ValueError("need at least two packed recipient elements")
    r0, r1 = recipient_fields[0], recipient_fields[1]

    for attempt in range(1, max_attempts + 1):
        secret = draw_secret()
        x = field_hash((r0, r1, secret)).value % ED25519_P
        try:
            y = recover_y(x)
        except (NoSquareRoot, NoInverse):
            continue

        if draw_bit():
            y = (ED25519_P - y) % ED25519_P

        point = CurvePoint(x, y)
        encoded = point.to_bytes()
        if decompress(encoded) != point:
            logger.warning("point failed round-trip check on attempt %d", attempt)
            continue

        logger.debug("vapor point found after %d attempt(s)", attempt)
        return SearchOutcome(
            found=True,
            attempts=attempt,
            point=point,
            secret=secret,
            encoded=encoded,
        )

    logger.warning("no vapor point found after %d attempts", max_attempts)
    return SearchOutcome(found=False, attempts=max_attempts)


def generate_vapor_address(
    recipient: str,
    max_attempts: int = MAX_ATTEMPTS,
) -> VaporAddressResult:
    """
    Derive a new vapor address for *recipient* (base58 public key).

    Raises
    ------
    InvalidRecipient
        If *recipient* is not base58 or not 32 bytes.
    AddressGenerationFailed
        If every attempt was rejected (≈ 2^-100 for the default bound).
    """
    recipient_fields = pack_bytes(decode_public_key(recipient))

    outcome = search_vapor_point(recipient_fields, max_attempts)
    if not outcome.found:
        raise AddressGenerationFailed(outcome.attempts)

    return VaporAddressResult(
        address=base58.b58encode(outcome.encoded).decode("ascii"),
        address_bytes=outcome.encoded,
        secret=outcome.secret,
        secret_hex=secret_to_hex(outcome.secret),
        recipient=recipient,
    )


# ── validation ──────────────────────────────────────────────────────────

def validate_vapor_address(address: str) -> bool:
    """
    ``True`` iff *address* base58-decodes to a valid compressed ed25519
    point.

    This is a syntactic check only: it does not prove the point was
    derived from any particular (recipient, secret) pair.
    """
    if not isinstance(address, str) or not set(address) <= _B58_CHARS:
        return False
    try:
        raw = base58.b58decode(address)
    except ValueError:
        return False
    if len(raw) != PUBLIC_KEY_BYTES:
        return False
    return decompress(raw) is not None
