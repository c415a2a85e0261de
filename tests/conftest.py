import pytest
import polydoc
import polydoc.config as cfg
from polydoc.store.memory_store import MemoryStore


class RecordingStore(MemoryStore):
    def __init__(self):
        super().__init__()
        self.lookups = []

    def get(self, namespace, entity, key):
        self.lookups.append(('get', entity, key))
        return super().get(namespace, entity, key)

    def get_many(self, namespace, entity, keys):
        self.lookups.append(('get_many', entity, list(keys)))
        return super().get_many(namespace, entity, keys)

    def find(self, namespace, entity, attribute, value):
        self.lookups.append(('find', entity, attribute, value))
        return super().find(namespace, entity, attribute, value)


@pytest.fixture(autouse=True)
def reset_config():
    cfg.reset()
    yield
    cfg.reset()

@pytest.fixture
def store():
    store = RecordingStore()
    polydoc.connect(store=store)
    yield store
    polydoc.disconnect()
