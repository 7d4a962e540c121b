"""
vapor: unspendable one-time deposit addresses on ed25519.

A *vapor address* is a valid ed25519 point for which no private key is
known.  It is derived from a recipient's wallet key and a fresh secret:

- **field-native hash** over the BN254 scalar field (x^5 sponge)
- **hash-to-curve** by rejection sampling on the x-coordinate
- **RFC 8032 point encoding** (little-endian y + sign bit of x)

Funds sent to a vapor address can only be released later by proving
knowledge of the secret for that recipient; that settlement layer is
external to this package.

Quick start
-----------
::

    from vapor import generate_vapor_address, validate_vapor_address

    result = generate_vapor_address("11111111111111111111111111111111")
    assert validate_vapor_address(result.address)
    print(result.address, result.secret_hex)
"""

__version__ = "0.1.0"

# ── field arithmetic ────────────────────────────────────────────────────
from .field import (
    Fr,
    Fp,
    FieldElement,
    BN254_R,
    ED25519_P,
    mod_inverse,
    mod_sqrt,
    legendre_symbol,
)

# ── hashing / packing ───────────────────────────────────────────────────
from .hash import field_hash, HASH_VERSION, ROUND_CONSTANTS
from .packing import pack_bytes

# ── curve ───────────────────────────────────────────────────────────────
from .curve import (
    CurvePoint,
    ED25519_D,
    compress,
    decompress,
    recover_y,
    is_on_curve,
)

# ── derivation ──────────────────────────────────────────────────────────
from .address import (
    MAX_ATTEMPTS,
    VaporAddressResult,
    SearchOutcome,
    search_vapor_point,
    generate_vapor_address,
    validate_vapor_address,
    secret_to_hex,
    hex_to_secret,
    decode_public_key,
)

# ── errors ──────────────────────────────────────────────────────────────
from .errors import (
    VaporError,
    InvalidRecipient,
    NoSquareRoot,
    NoInverse,
    AddressGenerationFailed,
    StoreError,
)

# ── bookkeeping (outside the cryptographic path) ────────────────────────
from .store import VaporStatus, StoredVaporAddress, VaporStore, MemoryVaporStore
from .condense import CONDENSE_STEPS, CondenseProgress, simulate_condense
from .config import VaporConfig, DeriverConfig, CondenseConfig, LogConfig

__all__ = [
    # version
    "__version__",
    # field
    "Fr", "Fp", "FieldElement", "BN254_R", "ED25519_P",
    "mod_inverse", "mod_sqrt", "legendre_symbol",
    # hashing
    "field_hash", "HASH_VERSION", "ROUND_CONSTANTS", "pack_bytes",
    # curve
    "CurvePoint", "ED25519_D", "compress", "decompress", "recover_y",
    "is_on_curve",
    # derivation
    "MAX_ATTEMPTS", "VaporAddressResult", "SearchOutcome",
    "search_vapor_point", "generate_vapor_address", "validate_vapor_address",
    "secret_to_hex", "hex_to_secret", "decode_public_key",
    # errors
    "VaporError", "InvalidRecipient", "NoSquareRoot", "NoInverse",
    "AddressGenerationFailed", "StoreError",
    # bookkeeping
    "VaporStatus", "StoredVaporAddress", "VaporStore", "MemoryVaporStore",
    "CONDENSE_STEPS", "CondenseProgress", "simulate_condense",
    "VaporConfig", "DeriverConfig", "CondenseConfig", "LogConfig",
]
