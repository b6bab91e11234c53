from pathlib import Path

import pytest

from votoclaro.core.repository import ElectionRepository
from votoclaro.core.storage import FileKeyValueStore, MemoryKeyValueStore


@pytest.fixture()
def store() -> MemoryKeyValueStore:
    return MemoryKeyValueStore()


@pytest.fixture()
def repository(store: MemoryKeyValueStore) -> ElectionRepository:
    return ElectionRepository(store).init()


@pytest.fixture()
def file_repository(tmp_path: Path) -> ElectionRepository:
    return ElectionRepository(FileKeyValueStore(tmp_path / "data")).init()
