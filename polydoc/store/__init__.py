from abc import ABC, abstractmethod


class Store(ABC):
    """
    Key-value document store backing the models.

    Documents are flat mappings addressed by (namespace, entity, key).
    ``indices`` passed to ``put`` name the attribute values ``find`` must be
    able to match by equality.
    """

    def open(self):
        return self

    def close(self):
        pass

    def __enter__(self):
        return self.open()

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    @abstractmethod
    def put(self, namespace: str, entity: str, key: str, document: dict, indices: dict = None):
        ...

    @abstractmethod
    def get(self, namespace: str, entity: str, key: str):
        ...

    @abstractmethod
    def get_many(self, namespace: str, entity: str, keys: list) -> list:
        ...

    @abstractmethod
    def find(self, namespace: str, entity: str, attribute: str, value) -> list:
        ...

    @abstractmethod
    def keys(self, namespace: str, entity: str) -> list:
        ...

    @abstractmethod
    def delete(self, namespace: str, entity: str, key: str):
        ...
