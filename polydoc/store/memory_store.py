import logging
from collections import defaultdict
from copy import deepcopy
from polydoc.store import Store

logger = logging.getLogger(__name__)


class MemoryStore(Store):
    def __init__(self):
        self._documents = defaultdict(dict)
        # (namespace, entity, attribute) -> value -> ordered keys
        self._indices = defaultdict(lambda: defaultdict(dict))
        self._indexed = defaultdict(dict)

    def put(self, namespace, entity, key, document, indices=None):
        bucket = (namespace, entity)
        self._unindex(bucket, key)
        self._documents[bucket][key] = deepcopy(document)
        indices = dict(indices or {})
        for attribute, value in indices.items():
            self._indices[(namespace, entity, attribute)][value][key] = None
        self._indexed[bucket][key] = indices
        logger.debug(f"Stored {namespace}.{entity} {key}.")

    def get(self, namespace, entity, key):
        document = self._documents[(namespace, entity)].get(key)
        return deepcopy(document) if document is not None else None

    def get_many(self, namespace, entity, keys):
        return self._fetch(namespace, entity, keys)

    def find(self, namespace, entity, attribute, value):
        matches = self._indices[(namespace, entity, attribute)].get(value, {})
        return self._fetch(namespace, entity, list(matches))

    def keys(self, namespace, entity):
        return list(self._documents[(namespace, entity)].keys())

    def delete(self, namespace, entity, key):
        bucket = (namespace, entity)
        self._unindex(bucket, key)
        self._indexed[bucket].pop(key, None)
        self._documents[bucket].pop(key, None)
        logger.debug(f"Deleted {namespace}.{entity} {key}.")

    def clear(self):
        self._documents.clear()
        self._indices.clear()
        self._indexed.clear()

    def _fetch(self, namespace, entity, keys):
        documents = self._documents[(namespace, entity)]
        return [(key, deepcopy(documents[key])) for key in keys if key in documents]

    def _unindex(self, bucket, key):
        namespace, entity = bucket
        for attribute, value in self._indexed[bucket].get(key, {}).items():
            self._indices[(namespace, entity, attribute)][value].pop(key, None)
