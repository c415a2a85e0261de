class _Unresolved:
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self):
        return False

    def __repr__(self):
        return 'UNRESOLVED'

UNRESOLVED = _Unresolved()


class MemoCache:
    """
    Resolved association values of one model instance.

    Every declared association owns one slot, which is either ``UNRESOLVED``
    or holds the resolved document (or list of documents). Slots are only
    ever invalidated by the raw writer paired with the association.
    """

    def __init__(self):
        self._slots = {}

    def get(self, name):
        return self._slots.get(name, UNRESOLVED)

    def is_resolved(self, name) -> bool:
        return self._slots.get(name, UNRESOLVED) is not UNRESOLVED

    def set(self, name, value):
        self._slots[name] = value
        return value

    def invalidate(self, name):
        self._slots.pop(name, None)

    def clear(self):
        self._slots.clear()

    def resolved_names(self):
        return [name for name, value in self._slots.items() if value is not UNRESOLVED]

    def __repr__(self):
        return f"<MemoCache {self.resolved_names()}>"
