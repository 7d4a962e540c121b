"""
Prime-field arithmetic for vapor address derivation.

Two fields are in play:

- ``Fr``: the BN254 scalar field (modulus ``BN254_R``).  Secrets and the
  sponge hash live here so that they can be consumed by a BN254 circuit.
- ``Fp``: the ed25519 base field (modulus ``ED25519_P = 2^255 - 19``).
  Curve point coordinates live here.

The free functions ``mod_inverse`` / ``mod_sqrt`` / ``legendre_symbol``
operate on plain integers; ``FieldElement`` wraps them with operators.
Every input is reduced into ``[0, modulus)`` before use and every result
is returned in that range.

References
----------
- Bernstein et al. (2012). "High-speed high-security signatures."
  §5, square roots for  p ≡ 5 (mod 8).
- RFC 8032 §5.1.3  decoding (square-root recovery step)
"""

from __future__ import annotations

import secrets
from typing import Callable, Union

from .errors import NoInverse, NoSquareRoot

# ── field moduli ────────────────────────────────────────────────────────
BN254_R = 21888242871839275222246405745257275088548364400416034343698204186575808495617
ED25519_P = 2**255 - 19
FIELD_BYTES = 32


# ── integer primitives ──────────────────────────────────────────────────
def mod_inverse(a: int, m: int) -> int:
    """
    Multiplicative inverse of *a* modulo *m* via the extended Euclidean
    algorithm.

    Raises ``NoInverse`` if  a ≡ 0 (mod m)  or  gcd(a, m) ≠ 1.
    """
    a %= m
    if a == 0:
        raise NoInverse(f"0 has no inverse modulo {m}")

    old_r, r = a, m
    old_s, s = 1, 0
    while r:
        q = old_r // r
        old_r, r = r, old_r - q * r
        old_s, s = s, old_s - q * s

    if old_r != 1:
        raise NoInverse(f"{a} is not invertible modulo {m}")
    return old_s % m


def legendre_symbol(n: int, p: int) -> int:
    """Euler's criterion  n^((p-1)/2) mod p,  mapped to {-1, 0, 1}."""
    n %= p
    if n == 0:
        return 0
    return 1 if pow(n, (p - 1) // 2, p) == 1 else -1


def mod_sqrt(n: int, p: int) -> int:
    r"""
    Square root of *n* modulo a prime  p ≡ 5 (mod 8).

    Candidate  r = n^((p+3)/8).  Then  r² = ±n;  the ``-n`` case is fixed
    by multiplying with  √-1 = 2^((p-1)/4).  Which of the two roots is
    returned is unspecified; callers pick the sign themselves.

    Raises
    ------
    ValueError
        If  p mod 8 ≠ 5.
    NoSquareRoot
        If *n* is a quadratic non-residue.
    """
    if p % 8 != 5:
        raise ValueError(f"mod_sqrt requires p ≡ 5 (mod 8), got p mod 8 = {p % 8}")
    n %= p
    if n == 0:
        return 0
    if legendre_symbol(n, p) != 1:
        raise NoSquareRoot(f"{n:#x} is not a quadratic residue")

    root = pow(n, (p + 3) // 8, p)
    if root * root % p == n:
        return root

    root = root * pow(2, (p - 1) // 4, p) % p
    if root * root % p == n:
        return root

    raise NoSquareRoot(f"square root correction failed for {n:#x}")


# ── FieldElement ────────────────────────────────────────────────────────
IntLike = Union[int, "FieldElement"]


class FieldElement:
    """
    Element of a prime field  Z_m.  Concrete fields set ``MODULUS``.

    Elements of different fields never mix: ``Fr(1) + Fp(1)`` raises
    ``TypeError``.  Plain ``int`` operands are reduced into the field.
    """

    __slots__ = ("_v",)

    MODULUS: int

    def __init__(self, value: int) -> None:
        self._v = int(value) % self.MODULUS

    # constructors -----------------------------------------------------------
    @classmethod
    def zero(cls):
        return cls(0)

    @classmethod
    def one(cls):
        return cls(1)

    @classmethod
    def random(cls, randbytes: Callable[[int], bytes] = secrets.token_bytes):
        """
        Uniform in [0, m) via rejection sampling.

        Draws ``bit_length(m)`` bits and retries on values ≥ m, so there is
        no modulo bias.
        """
        nbits = cls.MODULUS.bit_length()
        nbytes = (nbits + 7) // 8
        mask = (1 << nbits) - 1
        while True:
            c = int.from_bytes(randbytes(nbytes), "big") & mask
            if c < cls.MODULUS:
                return cls(c)

    @classmethod
    def from_bytes_le(cls, data: bytes):
        """Parse little-endian bytes; values ≥ m are rejected."""
        v = int.from_bytes(data, "little")
        if v >= cls.MODULUS:
            raise ValueError("field element out of range")
        return cls(v)

    # serialisation ----------------------------------------------------------
    def to_bytes_le(self, length: int = FIELD_BYTES) -> bytes:
        return self._v.to_bytes(length, "little")

    @property
    def value(self) -> int:
        return self._v

    def is_zero(self) -> bool:
        return self._v == 0

    def is_odd(self) -> bool:
        return self._v & 1 == 1

    # arithmetic -------------------------------------------------------------
    def _coerce(self, o: object):
        if isinstance(o, FieldElement):
            if type(o) is not type(self):
                raise TypeError(
                    f"cannot mix {type(self).__name__} and {type(o).__name__}"
                )
            return o._v
        if isinstance(o, int):
            return o % self.MODULUS
        return None

    def __add__(self, o: IntLike):
        v = self._coerce(o)
        if v is None:
            return NotImplemented
        return type(self)(self._v + v)

    __radd__ = __add__

    def __sub__(self, o: IntLike):
        v = self._coerce(o)
        if v is None:
            return NotImplemented
        return type(self)(self._v - v)

    def __rsub__(self, o: IntLike):
        v = self._coerce(o)
        if v is None:
            return NotImplemented
        return type(self)(v - self._v)

    def __mul__(self, o: IntLike):
        v = self._coerce(o)
        if v is None:
            return NotImplemented
        return type(self)(self._v * v)

    __rmul__ = __mul__

    def __neg__(self):
        return type(self)(-self._v)

    def __truediv__(self, o: IntLike):
        v = self._coerce(o)
        if v is None:
            return NotImplemented
        return self * type(self)(mod_inverse(v, self.MODULUS))

    def __pow__(self, e: int):
        if e < 0:
            return self.inv() ** (-e)
        return type(self)(pow(self._v, e, self.MODULUS))

    def inv(self):
        """Multiplicative inverse; raises ``NoInverse`` for zero."""
        return type(self)(mod_inverse(self._v, self.MODULUS))

    def sqrt(self):
        """A square root (see ``mod_sqrt``); raises ``NoSquareRoot``."""
        return type(self)(mod_sqrt(self._v, self.MODULUS))

    def is_square(self) -> bool:
        return legendre_symbol(self._v, self.MODULUS) != -1

    # comparison / hashing ---------------------------------------------------
    def __eq__(self, o: object) -> bool:
        if isinstance(o, FieldElement):
            return type(o) is type(self) and self._v == o._v
        if isinstance(o, int):
            return self._v == o % self.MODULUS
        return False

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._v))

    def __int__(self) -> int:
        return self._v

    def __index__(self) -> int:
        return self._v

    def __bool__(self) -> bool:
        return self._v != 0

    def __repr__(self) -> str:
        h = hex(self._v)
        name = type(self).__name__
        return f"{name}(0x{h[2:10]}…)" if len(h) > 14 else f"{name}({h})"


class Fr(FieldElement):
    """BN254 scalar field: secrets and sponge state."""

    __slots__ = ()
    MODULUS = BN254_R


class Fp(FieldElement):
    """ed25519 base field: point coordinates."""

    __slots__ = ()
    MODULUS = ED25519_P
