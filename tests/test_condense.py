"""
Fake condense progress tests.
"""

from vapor.condense import CONDENSE_STEPS, CondenseProgress, simulate_condense
from vapor.config import CondenseConfig
from vapor.store import VaporStatus


def _no_sleep(seconds):
    pass


class TestSimulateCondense:

    def test_steps_then_condensed(self, store, vapor_result):
        record = store.save_result(vapor_result, amount=1.0)
        seen, slept = [], []

        done = simulate_condense(
            store,
            [record.id],
            CondenseConfig(step_delay_sec=0.25),
            on_step=seen.append,
            sleep=slept.append,
        )

        assert done == [record.id]
        assert [p.label for p in seen] == list(CONDENSE_STEPS)
        assert [p.index for p in seen] == list(range(len(CONDENSE_STEPS)))
        assert slept == [0.25] * len(CONDENSE_STEPS)
        assert store.get(record.id).status is VaporStatus.CONDENSED

    def test_unknown_ids_skipped(self, store, vapor_result):
        record = store.save_result(vapor_result)
        store.mark_deposited(record.id, 2.0)
        done = simulate_condense(store, [record.id, "missing"], sleep=_no_sleep)
        assert done == [record.id]

    def test_pending_without_amount_not_condensed(self, store, vapor_result):
        record = store.save_result(vapor_result)
        slept = []
        assert simulate_condense(store, [record.id], sleep=slept.append) == []
        assert slept == []
        assert store.get(record.id).status is VaporStatus.PENDING

    def test_already_condensed_not_replayed(self, store, vapor_result):
        record = store.save_result(vapor_result, amount=1.0)
        store.mark_condensed(record.id)
        slept = []
        assert simulate_condense(store, [record.id], sleep=slept.append) == []
        assert slept == []

    def test_mixed_selection_keeps_only_funded(self, store, vapor_result):
        funded = store.save_result(vapor_result, amount=3.0)
        empty = store.save_result(vapor_result)
        done = simulate_condense(store, [funded.id, empty.id], sleep=_no_sleep)
        assert done == [funded.id]
        assert store.get(empty.id).status is VaporStatus.PENDING

    def test_empty_selection(self, store):
        slept = []
        assert simulate_condense(store, [], sleep=slept.append) == []
        assert slept == []

    def test_default_delay(self, store, vapor_result):
        record = store.save_result(vapor_result, amount=0.5)
        slept = []
        simulate_condense(store, [record.id], sleep=slept.append)
        assert slept == [1.5] * len(CONDENSE_STEPS)


class TestCondenseProgress:

    def test_fraction(self):
        assert CondenseProgress(index=0, total=5, label="x").fraction == 0.0
        assert CondenseProgress(index=4, total=5, label="x").fraction == 0.8
        assert CondenseProgress(index=0, total=0, label="x").fraction == 1.0
