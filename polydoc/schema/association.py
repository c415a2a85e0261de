import logging
from collections.abc import Mapping
from polydoc.constants import ID_SUFFIX, IDS_SUFFIX, ADD_SUFFIX
from polydoc.errors import InvalidClassError, NotEmbeddableError
from polydoc.memo import UNRESOLVED
from polydoc.schema import resolvers
from polydoc.schema.attribute import KeyAttribute, KeyListAttribute, _class_table
from polydoc.schema.model_registry import resolve_model
from polydoc.schema.naming import to_reference

logger = logging.getLogger(__name__)

REFERENCE = 'reference'
REFERENCED = 'referenced'
COLLECTION = 'collection'
EMBED = 'embed'
EMBED_COLLECTION = 'embed_collection'


class Association:
    kind: str = None

    def __init__(self, target_model):
        self.target_name = target_model
        self._key = None
        self._owner_class = None
        self._resolved_target = None

    def __set_name__(self, owner, name):
        self._key = name
        self._owner_class = owner
        _class_table(owner, '_associations', dict)[name] = self
        self._install(owner)

    def _install(self, owner):
        pass

    @property
    def name(self):
        return self._key

    @property
    def owner_class(self):
        return self._owner_class

    def target_model(self):
        if self._resolved_target is None:
            if self._owner_class is None:
                raise RuntimeError(f"{self!r} is not bound to a model")
            self._resolved_target = resolve_model(self._owner_class, self.target_name)
        return self._resolved_target

    def __get__(self, instance, owner):
        if instance is None:
            return self
        value = instance._memo.get(self._key)
        if value is not UNRESOLVED:
            return value
        return self._resolve(instance)

    def __set__(self, instance, value):
        self._reject_assignment(instance)

    def _check_assignment(self, instance, value):
        self._reject_assignment(instance)

    def _reject_assignment(self, instance):
        raise AttributeError(f"Association '{self._key}' of {type(instance).__name__} cannot be assigned")

    def _assign(self, instance, value):
        setattr(instance, self._key, value)

    def _resolve(self, instance):
        raise NotImplementedError

    def _sync(self, instance):
        pass

    def _check_class(self, obj):
        target = self.target_model()
        if type(obj) is not target:
            logger.error(f"Rejected {type(obj).__name__} for {self._owner_class.__name__}.{self._key}, expected {target.__name__}.")
            raise InvalidClassError(obj, target)

    def _check_embeddable(self, obj):
        embeddable = getattr(obj, 'embeddable', None)
        if not (callable(embeddable) and embeddable()):
            logger.error(f"Rejected non embeddable {type(obj).__name__} for {self._owner_class.__name__}.{self._key}.")
            raise NotEmbeddableError(obj)

    def _install_adder(self, owner):
        association = self

        def add(instance, obj):
            association.add(instance, obj)

        add.__name__ = f"{self._key}{ADD_SUFFIX}"
        add.__qualname__ = f"{owner.__qualname__}.{add.__name__}"
        add.__doc__ = f"Append an object to '{self._key}'."
        setattr(owner, add.__name__, add)

    def __repr__(self):
        target = getattr(self.target_name, '__name__', self.target_name)
        return f"<{type(self).__name__} {self._key} target={target}>"


class Reference(Association):
    """
    Singular foreign key. Declares the indexed attribute ``<name>_id``.

        class Comment(Document):
            post = Reference('Post')

        comment.post = post     # comment.post_id == post.id
        comment.post_id = None  # comment.post is None, no lookup
    """
    kind = REFERENCE

    @property
    def key_name(self):
        return f"{self._key}{ID_SUFFIX}"

    def _install(self, owner):
        key = KeyAttribute(self._key)
        setattr(owner, self.key_name, key)
        key.__set_name__(owner, self.key_name)

    def _resolve(self, instance):
        key = instance._attributes.get(self.key_name)
        if key is None:
            return None
        document = resolvers.resolve_reference(self.target_model(), key)
        if document is not None:
            instance._memo.set(self._key, document)
        return document

    def _check_assignment(self, instance, obj):
        if obj is not None:
            self._check_class(obj)

    def __set__(self, instance, obj):
        self._check_assignment(instance, obj)
        setattr(instance, self.key_name, obj.id if obj is not None else None)
        instance._memo.set(self._key, obj)


class Referenced(Association):
    """Read only reverse lookup through the ``<reverse>_id`` index of the target."""
    kind = REFERENCED

    def __init__(self, target_model, reverse: str = None):
        super().__init__(target_model)
        self._reverse = reverse

    @property
    def reverse_name(self):
        return self._reverse or to_reference(self._owner_class.__name__)

    def __get__(self, instance, owner):
        if instance is None:
            return self
        if instance.id is None:
            return None
        return super().__get__(instance, owner)

    def _resolve(self, instance):
        document = resolvers.resolve_referenced(self.target_model(), self.reverse_name, instance.id)
        if document is not None:
            instance._memo.set(self._key, document)
        return document


class Collection(Association):
    """
    To-many association kept as the ordered id list ``<name>_ids``.

    Membership is local to the owner: ``reverse`` is recorded for
    documentation and plays no part in resolution.
    """
    kind = COLLECTION

    def __init__(self, target_model, reverse: str = None):
        super().__init__(target_model)
        self._reverse = reverse

    @property
    def reverse_name(self):
        return self._reverse or to_reference(self._owner_class.__name__)

    @property
    def key_name(self):
        return f"{self._key}{IDS_SUFFIX}"

    def _install(self, owner):
        keys = KeyListAttribute(self._key)
        setattr(owner, self.key_name, keys)
        keys.__set_name__(owner, self.key_name)
        self._install_adder(owner)

    def __get__(self, instance, owner):
        if instance is None:
            return self
        if instance.id is None:
            return []
        return super().__get__(instance, owner)

    def _resolve(self, instance):
        documents = resolvers.resolve_collection(self.target_model(), instance._attributes.get(self.key_name))
        return instance._memo.set(self._key, documents)

    def add(self, instance, obj):
        self._check_class(obj)
        keys = list(instance._attributes.get(self.key_name) or [])
        keys.append(obj.id)
        instance._attributes[self.key_name] = keys
        cached = instance._memo.get(self._key)
        if cached is not UNRESOLVED:
            cached.append(obj)


class Embed(Association):
    """Single embedded object, stored inline in the owner under ``<name>``."""
    kind = EMBED

    def _install(self, owner):
        names = _class_table(owner, '_embedding_names', list)
        if self._key not in names:
            names.append(self._key)

    def _build(self, instance, mapping):
        obj = self.target_model()(**mapping)
        obj.parent = instance
        return obj

    def _resolve(self, instance):
        if not instance._embedding.has(self._key):
            return None
        return instance._memo.set(self._key, self._build(instance, instance._embedding.get(self._key)))

    def __set__(self, instance, obj):
        self._check_embeddable(obj)
        instance._embedding.assign(self._key, obj.attributes)
        obj.parent = instance
        instance._memo.set(self._key, obj)

    def _check_assignment(self, instance, value):
        # raw mappings are entries as read back from storage
        if not isinstance(value, Mapping):
            self._check_embeddable(value)

    def _assign(self, instance, value):
        if isinstance(value, Mapping):
            instance._embedding.assign(self._key, value)
            instance._memo.invalidate(self._key)
        else:
            self.__set__(instance, value)

    def _sync(self, instance):
        obj = instance._memo.get(self._key)
        if obj is not UNRESOLVED and obj is not None:
            instance._embedding.assign(self._key, obj.attributes)


class EmbedCollection(Embed):
    """Ordered, grow-only list of embedded objects stored inline under ``<name>``."""
    kind = EMBED_COLLECTION

    def _install(self, owner):
        super()._install(owner)
        self._install_adder(owner)

    def _resolve(self, instance):
        if not instance._embedding.has(self._key):
            return []
        objects = [self._build(instance, mapping) for mapping in instance._embedding.get(self._key)]
        return instance._memo.set(self._key, objects)

    def __set__(self, instance, value):
        self._reject_assignment(instance)

    def _check_assignment(self, instance, value):
        if not isinstance(value, (list, tuple)):
            self._check_embeddable(value)
        for item in value:
            if not isinstance(item, Mapping):
                self._check_embeddable(item)

    def _assign(self, instance, value):
        if all(isinstance(item, Mapping) for item in value):
            instance._embedding.assign(self._key, list(value))
            instance._memo.invalidate(self._key)
            return
        for item in value:
            self.add(instance, self._build(instance, item) if isinstance(item, Mapping) else item)

    def add(self, instance, obj):
        self._check_embeddable(obj)
        obj.parent = instance
        cached = instance._memo.get(self._key)
        if cached is not UNRESOLVED:
            cached.append(obj)
        instance._embedding.append(self._key, obj.attributes)

    def _sync(self, instance):
        objects = instance._memo.get(self._key)
        if objects is not UNRESOLVED:
            instance._embedding.assign(self._key, [obj.attributes for obj in objects])


def _declare(owner, name, association):
    setattr(owner, name, association)
    association.__set_name__(owner, name)
    logger.debug(f"Declared {association.kind} {owner.__name__}.{name}.")
    return association

def reference(owner, name, target_model):
    return _declare(owner, name, Reference(target_model))

def referenced(owner, name, target_model, reverse: str = None):
    return _declare(owner, name, Referenced(target_model, reverse))

def collection(owner, name, target_model, reverse: str = None):
    return _declare(owner, name, Collection(target_model, reverse))

def embed(owner, name, target_model):
    return _declare(owner, name, Embed(target_model))

def embed_collection(owner, name, target_model):
    return _declare(owner, name, EmbedCollection(target_model))
