"""
Shared fixtures for vapor tests.
"""

import base58
import pytest

from vapor.address import generate_vapor_address
from vapor.store import MemoryVaporStore


@pytest.fixture
def zero_recipient() -> str:
    """Base58 encoding of 32 zero bytes (the system program id)."""
    return base58.b58encode(bytes(32)).decode("ascii")


@pytest.fixture
def recipient() -> str:
    """A non-trivial 32-byte recipient key."""
    return base58.b58encode(bytes(range(1, 33))).decode("ascii")


@pytest.fixture
def vapor_result(recipient):
    return generate_vapor_address(recipient)


@pytest.fixture
def store() -> MemoryVaporStore:
    return MemoryVaporStore()
