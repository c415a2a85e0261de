import logging
import uuid as uuidlib
import weakref
from copy import deepcopy
from typing import Any, Type, TypeVar
import polydoc.config as cfg
from polydoc.embedding import EmbeddingStore
from polydoc.errors import DocumentNotFoundError, IndexNotFoundError
from polydoc.memo import MemoCache
from polydoc.schema import association
from polydoc.schema.attribute import Attribute, BOTH, _declare_index
from polydoc.schema.model_registry import register_model

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ResultSet(list):
    def first(self):
        return self[0] if self else None


class Model:
    _abstract = True
    _declared_attributes: dict = {}
    _indices: set = set()
    _associations: dict = {}
    _embedding_names: list = []

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        if cls.__dict__.get('_abstract', False):
            return
        register_model(cls)

    def __init__(self, **attributes):
        self._id = None
        self._attributes = {}
        self._memo = MemoCache()
        self._embedding = EmbeddingStore()
        self._assign(attributes)

    @property
    def id(self):
        return self._id

    @property
    def attributes(self) -> dict[str, Any]:
        return deepcopy(self._attributes)

    def embeddable(self) -> bool:
        return False

    def update_attributes(self, **attributes):
        self._assign(attributes)
        return self

    def _assign(self, attributes: dict):
        # every value is checked before the first one is written
        for name, value in attributes.items():
            if name in self._associations:
                self._associations[name]._check_assignment(self, value)
            elif name not in self._declared_attributes:
                raise AttributeError(f"{type(self).__name__} has no attribute '{name}'")

        for name, value in attributes.items():
            if name in self._associations:
                self._associations[name]._assign(self, value)
            else:
                self._declared_attributes[name]._write(self, value)

    def _load(self, data: dict):
        data = deepcopy(data)
        embedding = {name: data.pop(name) for name in self._embedding_names if name in data}
        self._attributes = data
        self._embedding.load(embedding)
        self._memo.clear()

    def _to_document(self) -> dict[str, Any]:
        for embedded in self._associations.values():
            embedded._sync(self)
        document = deepcopy(self._attributes)
        document.update(self._embedding.to_dict())
        return document

    # declaration builders, equivalent to the class body forms

    @classmethod
    def attribute(cls, name: str, accessors: str = BOTH, indexed: bool = False):
        attribute = Attribute(accessors, indexed)
        setattr(cls, name, attribute)
        attribute.__set_name__(cls, name)
        return attribute

    @classmethod
    def index(cls, name: str):
        if name not in cls._declared_attributes:
            raise AttributeError(f"Cannot index undeclared attribute '{name}' of {cls.__name__}")
        _declare_index(cls, name)

    @classmethod
    def reference(cls, name: str, target_model):
        return association.reference(cls, name, target_model)

    @classmethod
    def referenced(cls, name: str, target_model, reverse: str = None):
        return association.referenced(cls, name, target_model, reverse)

    @classmethod
    def collection(cls, name: str, target_model, reverse: str = None):
        return association.collection(cls, name, target_model, reverse)

    @classmethod
    def embed(cls, name: str, target_model):
        return association.embed(cls, name, target_model)

    @classmethod
    def embed_collection(cls, name: str, target_model):
        return association.embed_collection(cls, name, target_model)

    def __repr__(self):
        return f"<{self.__class__.__name__} {self._attributes}>"


class Embedded(Model):
    """
    Object stored inline in its parent document.

    The parent is held through a weak reference; an embedded object has no
    identity and no storage of its own.
    """
    _abstract = True

    def __init__(self, **attributes):
        self._parent = None
        super().__init__(**attributes)

    def embeddable(self) -> bool:
        return True

    @property
    def parent(self):
        return self._parent() if self._parent is not None else None

    @parent.setter
    def parent(self, value):
        self._parent = weakref.ref(value) if value is not None else None

    @property
    def attributes(self) -> dict[str, Any]:
        return self._to_document()

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return other.attributes == self.attributes

    __hash__ = None


class Document(Model):
    _abstract = True
    entity_name: str = None
    namespace_name: str = None
    context: str = None

    @classmethod
    def _entity(cls) -> str:
        return cls.entity_name or cls.__name__

    @classmethod
    def _namespace(cls) -> str:
        return cls.namespace_name or cfg.get(cfg.DEFAULT_NAMESPACE)

    @classmethod
    def _store(cls):
        from polydoc.connection import conn
        return conn().store(cls.context or cfg.get(cfg.DEFAULT_CONTEXT))

    @classmethod
    def _from_document(cls: Type[T], key, data: dict) -> T:
        obj = cls.__new__(cls)
        Model.__init__(obj)
        obj._id = key
        obj._load(data)
        return obj

    @classmethod
    def create(cls: Type[T], **attributes) -> T:
        return cls(**attributes).save()

    @classmethod
    def get(cls: Type[T], key) -> T:
        if key is None:
            return None
        data = cls._store().get(cls._namespace(), cls._entity(), key)
        if data is None:
            return None
        return cls._from_document(key, data)

    @classmethod
    def find(cls, attribute: str, value) -> ResultSet:
        if attribute not in cls._indices:
            logger.error(f"Query on {cls.__name__}.{attribute} which is not indexed.")
            raise IndexNotFoundError(cls, attribute)
        rows = cls._store().find(cls._namespace(), cls._entity(), attribute, value)
        return ResultSet(cls._from_document(key, data) for key, data in rows)

    @classmethod
    def all(cls, keys=None) -> ResultSet:
        store = cls._store()
        if keys is None:
            keys = store.keys(cls._namespace(), cls._entity())
        rows = store.get_many(cls._namespace(), cls._entity(), list(keys))
        return ResultSet(cls._from_document(key, data) for key, data in rows)

    def save(self):
        if self._id is None:
            self._id = str(uuidlib.uuid4())
        indices = {name: self._attributes.get(name) for name in self._indices}
        self._store().put(self._namespace(), self._entity(), self._id, self._to_document(), indices)
        logger.debug(f"Saved {self.__class__.__name__} {self._id}.")
        return self

    def reload(self):
        if self._id is None:
            message = f"Cannot reload {self.__class__.__name__} which was never saved."
            logger.error(message)
            raise DocumentNotFoundError(message)
        data = self._store().get(self._namespace(), self._entity(), self._id)
        if data is None:
            message = f"{self.__class__.__name__} {self._id} no longer exists."
            logger.error(message)
            raise DocumentNotFoundError(message)
        self._load(data)
        logger.debug(f"Reloaded {self.__class__.__name__} {self._id}.")
        return self

    def delete(self):
        if self._id is not None:
            self._store().delete(self._namespace(), self._entity(), self._id)
            logger.debug(f"Deleted {self.__class__.__name__} {self._id}.")
        return self

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        if self._id is None or other._id is None:
            return self is other
        return self._id == other._id

    def __hash__(self):
        return hash((type(self), self._id)) if self._id is not None else object.__hash__(self)

    def __repr__(self):
        return f"<{self.__class__.__name__} {self._id} {self._attributes}>"
