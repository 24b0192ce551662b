"""Concurrent store creation against one mall on a file-backed SQLite database."""

import threading
import time

import pytest
from sqlalchemy.orm import sessionmaker

from mall_manager.database import Base, create_db_engine
from mall_manager.errors import CapacityExceededError
from mall_manager.repositories import StoreRepository
from mall_manager.services import mall_service, store_service


@pytest.fixture
def file_session_factory(tmp_path):
    engine = create_db_engine(f"sqlite:///{tmp_path / 'malls.sqlite3'}")
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
    engine.dispose()


def test_concurrent_creations_do_not_exceed_capacity(file_session_factory, monkeypatch):
    with file_session_factory() as db:
        mall = mall_service.create_mall(db, "Small Mall", "Vancouver", capacity=1)

    count_by_mall = StoreRepository.count_by_mall

    def slow_count(self, mall_id):
        # Widen the gap between the capacity check and the insert
        count = count_by_mall(self, mall_id)
        time.sleep(0.2)
        return count

    monkeypatch.setattr(StoreRepository, "count_by_mall", slow_count)

    barrier = threading.Barrier(2)
    results = []

    def create(name):
        barrier.wait()
        with file_session_factory() as db:
            try:
                store_service.create_store(db, name, "Food", mall.id)
                results.append("created")
            except CapacityExceededError:
                results.append("full")

    threads = [threading.Thread(target=create, args=(name,)) for name in ("First", "Second")]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=10)

    assert sorted(results) == ["created", "full"]
    with file_session_factory() as db:
        assert len(mall_service.list_stores(db, mall.id)) == 1
        assert mall_service.get_mall(db, mall.id).revenue == 1000
