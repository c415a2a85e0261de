import logging
import polydoc.config as cfg
from polydoc.errors import NotConnectedError
from polydoc.store import Store

logger = logging.getLogger(__name__)

MEMORY = 'memory'
POLYPHENY = 'polypheny'


class Connection:
    """Stores opened per named context; documents pick theirs through ``Document.context``."""

    def __init__(self):
        self._stores: dict[str, Store] = {}

    def start(self, context: str = None, store: Store = None, backend: str = None, **options) -> Store:
        context = context or cfg.get(cfg.DEFAULT_CONTEXT)
        if store is None:
            store = _create_store(backend or cfg.get(cfg.DEFAULT_BACKEND), **options)
        elif options:
            raise ValueError("Backend options cannot be combined with an explicit store.")

        if context in self._stores:
            logger.debug(f"Replacing the store of context {context}.")
            self.close(context)

        store.open()
        self._stores[context] = store
        logger.debug(f"Context {context} connected to {type(store).__name__}.")
        return store

    def store(self, context: str = None) -> Store:
        context = context or cfg.get(cfg.DEFAULT_CONTEXT)
        store = self._stores.get(context)
        if store is None:
            message = f'No store connected for context "{context}", call polydoc.connect() first'
            logger.error(message)
            raise NotConnectedError(message)
        return store

    def close(self, context: str = None):
        context = context or cfg.get(cfg.DEFAULT_CONTEXT)
        store = self._stores.pop(context, None)
        if store is not None:
            store.close()
            logger.debug(f"Context {context} disconnected.")

    def close_all(self):
        for context in list(self._stores):
            self.close(context)

    def contexts(self):
        return list(self._stores)


def _create_store(backend: str, **options) -> Store:
    if backend == MEMORY:
        from polydoc.store.memory_store import MemoryStore
        return MemoryStore(**options)
    if backend == POLYPHENY:
        from polydoc.store.document_store import PolyphenyStore
        return PolyphenyStore(**options)
    raise ValueError(f"Unknown store backend '{backend}'.")

_conn = None

def conn() -> Connection:
    global _conn
    if _conn is None:
        _conn = Connection()
    return _conn

def connect(context: str = None, store: Store = None, backend: str = None, **options) -> Store:
    """
    Open a store for ``context`` (the configured default context if omitted).

        polydoc.connect(backend='memory')
        polydoc.connect(address=('localhost', 20590), use_docker=True)

    Options are passed on to the store of the chosen backend.
    """
    return conn().start(context, store=store, backend=backend, **options)

def disconnect(context: str = None):
    conn().close(context)
