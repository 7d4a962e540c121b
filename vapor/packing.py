"""Pack raw bytes into BN254 field elements."""

from __future__ import annotations

from typing import List

# 31 bytes = 248 bits < log2(r) ≈ 253.6, so every chunk is already canonical.
CHUNK_SIZE = 31


def pack_bytes(data: bytes) -> List[int]:
    """
    Split *data* into 31-byte little-endian integers.

    A short final chunk is zero-padded, which for little-endian simply
    leaves its high bytes clear.  A 32-byte public key therefore packs to
    two elements: bytes 0..30 and byte 31.
    """
    return [
        int.from_bytes(data[i:i + CHUNK_SIZE], "little")
        for i in range(0, len(data), CHUNK_SIZE)
    ]
