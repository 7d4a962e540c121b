"""
Concurrent derivation and bookkeeping tests.
"""

from concurrent.futures import ThreadPoolExecutor

from vapor.address import generate_vapor_address, validate_vapor_address
from vapor.store import MemoryVaporStore


class TestConcurrentDerivation:

    def test_threads_yield_distinct_valid_addresses(self, recipient):
        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(
                lambda _: generate_vapor_address(recipient), range(200),
            ))

        assert len({r.secret for r in results}) == 200
        assert len({r.address for r in results}) == 200
        assert all(validate_vapor_address(r.address) for r in results)
        assert all(r.recipient == recipient for r in results)


class TestConcurrentStore:

    def test_parallel_save_result(self, recipient):
        store = MemoryVaporStore()
        results = [generate_vapor_address(recipient) for _ in range(50)]

        with ThreadPoolExecutor(max_workers=8) as pool:
            records = list(pool.map(store.save_result, results))

        assert len(store) == 50
        assert len({r.id for r in records}) == 50
        assert {r.vapor_address for r in store.list_for_owner(recipient)} == {
            r.address for r in results
        }

    def test_parallel_derive_and_save(self, recipient):
        store = MemoryVaporStore()

        def derive_and_save(_):
            return store.save_result(generate_vapor_address(recipient))

        with ThreadPoolExecutor(max_workers=8) as pool:
            records = list(pool.map(derive_and_save, range(64)))

        assert len(store) == 64
        assert len({r.vapor_address for r in records}) == 64
        assert all(store.get(r.id) == r for r in records)
