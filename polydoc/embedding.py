from copy import deepcopy


class EmbeddingStore:
    """
    Raw state of the embedded objects of one model instance.

    An ``embed`` entry is a single attribute mapping, an ``embed_collection``
    entry an ordered list of them. Entries only exist once assigned or loaded
    and are written back together with the owner.
    """

    def __init__(self, data: dict = None):
        self._entries = {}
        if data:
            self.load(data)

    def has(self, name) -> bool:
        return name in self._entries

    def get(self, name):
        return self._entries.get(name)

    def assign(self, name, mapping):
        self._entries[name] = deepcopy(mapping)

    def append(self, name, mapping):
        entries = list(self._entries.get(name) or [])
        entries.append(deepcopy(mapping))
        self._entries[name] = entries

    def load(self, data: dict):
        self._entries = deepcopy(dict(data))

    def clear(self):
        self._entries.clear()

    def to_dict(self) -> dict:
        return deepcopy(self._entries)

    def names(self):
        return list(self._entries.keys())

    def __contains__(self, name):
        return name in self._entries

    def __len__(self):
        return len(self._entries)

    def __repr__(self):
        return f"<EmbeddingStore {self.names()}>"
