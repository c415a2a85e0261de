import json
import logging
import polypheny
import polydoc.config as cfg
import polydoc.docker as docker
from polydoc.constants import KEY_FIELD
from polydoc.store import Store

logger = logging.getLogger(__name__)


class PolyphenyStore(Store):
    """
    Store on the document model of Polypheny.

    Every entity is a collection in a document namespace; documents carry
    their key in ``_id``. Collections are created on first use. Polypheny
    can filter on any document field, so ``indices`` need no bookkeeping.
    """

    def __init__(
            self,
            address=None,
            user: str = None,
            password: str = None,
            transport: str = None,
            use_docker: bool = False,
            stop_container: bool = False,
            remove_container: bool = False
        ):
        self._address = address or cfg.get(cfg.DEFAULT_ADDRESS)
        self._user = user if user is not None else cfg.get(cfg.DEFAULT_USER)
        self._password = password if password is not None else cfg.get(cfg.DEFAULT_PASS)
        self._transport = transport or cfg.get(cfg.DEFAULT_TRANSPORT)
        self._use_docker = use_docker
        self._stop_container = stop_container
        self._remove_container = remove_container

        self._conn = None
        self._cursor = None
        self._namespaces = set()
        self._entities = set()

    def open(self):
        if self._conn is not None:
            return self
        cfg.lock()

        if self._use_docker:
            docker._deploy_polypheny()

        self._conn = polypheny.connect(
            self._address,
            username=self._user,
            password=self._password,
            transport=self._transport
        )
        self._cursor = self._conn.cursor()
        logger.debug(f"Connected to Polypheny at {self._address}.")
        return self

    def close(self):
        if self._cursor:
            self._cursor.close()
        if self._conn:
            self._conn.close()
        self._cursor = None
        self._conn = None
        self._namespaces.clear()
        self._entities.clear()

        if self._use_docker:
            container_name = cfg.get(cfg.POLYPHENY_CONTAINER_NAME)
            if self._remove_container:
                docker._remove_container_by_name(container_name)
            elif self._stop_container:
                docker._stop_container_by_name(container_name)
        cfg.unlock()
        logger.debug(f"Disconnected from Polypheny at {self._address}.")

    def _throw_if_not_open(self):
        if self._conn is None:
            message = 'The Polypheny store must be opened before it is used'
            logger.error(message)
            raise RuntimeError(message)

    def _ensure_entity(self, namespace, entity):
        if (namespace, entity) in self._entities:
            return

        if namespace not in self._namespaces:
            self._cursor.execute(f'CREATE DOCUMENT NAMESPACE IF NOT EXISTS "{namespace}"')
            self._namespaces.add(namespace)
            logger.debug(f"Created document namespace {namespace} if absent.")

        try:
            self._execute(namespace, f'db.createCollection({json.dumps(entity)})')
            logger.debug(f"Created collection {namespace}.{entity}.")
        except polypheny.Error as e:
            # raised when the collection is already present
            logger.debug(f"Collection {namespace}.{entity} not created: {e}")
        self._conn.commit()
        self._entities.add((namespace, entity))

    def _execute(self, namespace, statement, fetch=False):
        self._cursor.executeany('mongo', statement, namespace=namespace)
        if fetch:
            return self._cursor.fetchall()
        return

    def _query(self, namespace, entity, condition: dict):
        self._throw_if_not_open()
        self._ensure_entity(namespace, entity)
        rows = self._execute(namespace, f'db.{entity}.find({json.dumps(condition)})', fetch=True)
        return [_split(_decode(row)) for row in rows or []]

    def put(self, namespace, entity, key, document, indices=None):
        self._throw_if_not_open()
        self._ensure_entity(namespace, entity)
        document = dict(document)
        document[KEY_FIELD] = key
        self._execute(namespace, f'db.{entity}.deleteMany({json.dumps({KEY_FIELD: key})})')
        self._execute(namespace, f'db.{entity}.insertOne({json.dumps(document)})')
        self._conn.commit()
        logger.debug(f"Stored {namespace}.{entity} {key}.")

    def get(self, namespace, entity, key):
        rows = self._query(namespace, entity, {KEY_FIELD: key})
        return rows[0][1] if rows else None

    def get_many(self, namespace, entity, keys):
        if not keys:
            return []
        found = dict(self._query(namespace, entity, {KEY_FIELD: {'$in': list(dict.fromkeys(keys))}}))
        return [(key, found[key]) for key in keys if key in found]

    def find(self, namespace, entity, attribute, value):
        return self._query(namespace, entity, {attribute: value})

    def keys(self, namespace, entity):
        return [key for key, _ in self._query(namespace, entity, {})]

    def delete(self, namespace, entity, key):
        self._throw_if_not_open()
        self._ensure_entity(namespace, entity)
        self._execute(namespace, f'db.{entity}.deleteMany({json.dumps({KEY_FIELD: key})})')
        self._conn.commit()
        logger.debug(f"Deleted {namespace}.{entity} {key}.")


def _decode(row) -> dict:
    if isinstance(row, (list, tuple)) and len(row) == 1:
        row = row[0]
    if isinstance(row, (str, bytes)):
        row = json.loads(row)
    return dict(row)

def _split(document: dict):
    key = document.pop(KEY_FIELD)
    return key, document
