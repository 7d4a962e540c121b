"""
ed25519 point arithmetic needed for vapor addresses.

Only the curve equation and the 32-byte point encoding are implemented;
no group law is needed because vapor points are never added or
multiplied.  The curve is the twisted Edwards form

    -x² + y² = 1 + d·x²·y²   over  F_p,  p = 2^255 - 19

and points are encoded as in RFC 8032 §5.1.2: little-endian *y* with the
parity of *x* in the top bit of the last byte.  No subgroup check is
performed on decode: a vapor address only needs to be a valid curve
point, which is also all a Solana ``is_on_curve`` check looks at.

References
----------
- RFC 8032 §5.1  Ed25519 parameters and point encoding
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .errors import NoInverse, NoSquareRoot
from .field import ED25519_P, mod_inverse, mod_sqrt

# ── ed25519 constants ───────────────────────────────────────────────────
ED25519_D = 37095705934669439343138083508754565189542113879843219016388785533085940283555
COMPRESSED_BYTES = 32
_SIGN_BIT = 0x80
_Y_MASK = (1 << 255) - 1


@dataclass(frozen=True)
class CurvePoint:
    """Affine ed25519 point with canonical coordinates in [0, p)."""

    x: int
    y: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "x", self.x % ED25519_P)
        object.__setattr__(self, "y", self.y % ED25519_P)

    def is_on_curve(self) -> bool:
        return is_on_curve(self.x, self.y)

    def to_bytes(self) -> bytes:
        return compress(self.x, self.y)

    @classmethod
    def from_bytes(cls, data: bytes) -> CurvePoint:
        point = decompress(data)
        if point is None:
            raise ValueError("bytes do not encode an ed25519 point")
        return point


def is_on_curve(x: int, y: int) -> bool:
    """Check  -x² + y² - 1 - d·x²·y²  ≡ 0 (mod p)."""
    p = ED25519_P
    x2 = x * x % p
    y2 = y * y % p
    return (y2 - x2 - 1 - ED25519_D * x2 % p * y2) % p == 0


def recover_y(x: int) -> int:
    """
    Solve the curve equation for *y* given *x*:

        y² = (1 + x²) / (1 - d·x²)

    Returns one of the two roots.  Roughly half of all *x* values have no
    solution.

    Raises
    ------
    NoInverse
        If  1 - d·x² ≡ 0  (cannot happen for ed25519 since *d* is a
        non-square, but the check is kept).
    NoSquareRoot
        If  y²  is a quadratic non-residue.
    """
    p = ED25519_P
    x2 = x * x % p
    num = (1 + x2) % p
    den = (1 - ED25519_D * x2) % p
    y2 = num * mod_inverse(den, p) % p
    return mod_sqrt(y2, p)


def compress(x: int, y: int) -> bytes:
    """Encode  (x, y)  as 32 bytes: little-endian *y*, sign bit = x mod 2."""
    x %= ED25519_P
    y %= ED25519_P
    out = bytearray(y.to_bytes(COMPRESSED_BYTES, "little"))
    if x & 1:
        out[-1] |= _SIGN_BIT
    return bytes(out)


def decompress(data: bytes) -> Optional[CurvePoint]:
    """
    Decode 32 bytes to a ``CurvePoint``.

    Returns ``None`` when *y* is not canonical (≥ p) or no *x* exists for
    it.  Raises ``ValueError`` if *data* is not exactly 32 bytes.
    """
    if len(data) != COMPRESSED_BYTES:
        raise ValueError(f"need {COMPRESSED_BYTES} bytes, got {len(data)}")

    p = ED25519_P
    sign = data[-1] >> 7
    y = int.from_bytes(data, "little") & _Y_MASK
    if y >= p:
        return None

    # x² = (y² - 1) / (d·y² + 1)
    y2 = y * y % p
    num = (y2 - 1) % p
    den = (ED25519_D * y2 + 1) % p
    try:
        x = mod_sqrt(num * mod_inverse(den, p) % p, p)
    except (NoInverse, NoSquareRoot):
        return None

    if x & 1 != sign:
        x = (p - x) % p
    return CurvePoint(x, y)
