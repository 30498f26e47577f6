"""
Unit tests for per-file locking of repository writes.
"""

import threading
import time
from concurrent.futures import ThreadPoolExecutor

from botconfig.datastore.locks import file_lock, get_file_lock
from botconfig.domain.models import StrategyConfig
from botconfig.repository.results import ResultStatus
from botconfig.repository.strategies import StrategyConfigRepository

from conftest import STRATEGIES_DATA, STRATEGIES_SCHEMA, FakeDocumentStore, make_strategies_document


class SlowStore(FakeDocumentStore):
    """Fake store that widens the window between load and save."""

    def load(self, document_type, data_path, schema_path):
        document = super().load(document_type, data_path, schema_path)
        time.sleep(0.01)
        return document


class TestFileLock:
    """Tests for the lock registry."""

    def test_same_path_same_lock(self, tmp_path):
        """Test that equivalent paths share one lock."""
        path = tmp_path / "strategies.yaml"
        assert get_file_lock(path) is get_file_lock(str(tmp_path / "." / "strategies.yaml"))

    def test_different_paths_different_locks(self, tmp_path):
        """Test that each data file has its own lock."""
        assert get_file_lock(tmp_path / "a.yaml") is not get_file_lock(tmp_path / "b.yaml")

    def test_reentrant(self, tmp_path):
        """Test that the holder can take the lock again."""
        path = tmp_path / "a.yaml"
        with file_lock(path):
            with file_lock(path):
                pass


class TestConcurrentWrites:
    """Tests that concurrent mutations on one file do not lose updates."""

    def test_concurrent_creates_all_survive(self):
        """Test that every concurrent create of a distinct id is persisted."""
        store = SlowStore()
        store.put(STRATEGIES_DATA, make_strategies_document())
        repo = StrategyConfigRepository(store, STRATEGIES_DATA, STRATEGIES_SCHEMA)
        ids = [f"strategy-{n}" for n in range(8)]
        barrier = threading.Barrier(len(ids))

        def create(strategy_id):
            barrier.wait()
            return repo.create(StrategyConfig(id=strategy_id, name=strategy_id, class_name="x.Algo")).status

        with ThreadPoolExecutor(max_workers=len(ids)) as pool:
            statuses = list(pool.map(create, ids))

        assert statuses == [ResultStatus.OK] * len(ids)
        stored = {s.id for s in repo.find_all()}
        assert set(ids) <= stored
        assert len(stored) == len(ids) + 1

    def test_concurrent_creates_same_id_one_wins(self):
        """Test that racing creates of one id yield exactly one success."""
        store = SlowStore()
        store.put(STRATEGIES_DATA, make_strategies_document())
        repo = StrategyConfigRepository(store, STRATEGIES_DATA, STRATEGIES_SCHEMA)
        workers = 6
        barrier = threading.Barrier(workers)

        def create(_):
            barrier.wait()
            return repo.create(StrategyConfig(id="contested", name="C", class_name="x.Algo")).status

        with ThreadPoolExecutor(max_workers=workers) as pool:
            statuses = list(pool.map(create, range(workers)))

        assert statuses.count(ResultStatus.OK) == 1
        assert statuses.count(ResultStatus.CONFLICT) == workers - 1
        assert [s.id for s in repo.find_all()].count("contested") == 1
