READER = 'reader'
BOTH = 'both'
_ACCESSORS = (READER, BOTH)

def _class_table(owner, table_name, factory):
    # per-class copy of an inherited declaration table
    if table_name not in owner.__dict__:
        inherited = getattr(owner, table_name, None)
        setattr(owner, table_name, factory(inherited) if inherited is not None else factory())
    return owner.__dict__[table_name]

def _declare_index(owner, name):
    _class_table(owner, '_indices', set).add(name)


class Attribute:
    def __init__(self, accessors: str = BOTH, indexed: bool = False):
        if accessors not in _ACCESSORS:
            raise ValueError(f"accessors must be one of {_ACCESSORS}, got '{accessors}'")
        self._accessors = accessors
        self._indexed = indexed
        self._name = None
        self._owner_class = None

    def __set_name__(self, owner, name):
        self._name = name
        self._owner_class = owner
        _class_table(owner, '_declared_attributes', dict)[name] = self
        if self._indexed:
            _declare_index(owner, name)

    @property
    def name(self):
        return self._name

    @property
    def writable(self):
        return self._accessors == BOTH

    def __get__(self, instance, owner):
        if instance is None:
            return self
        return instance._attributes.get(self._name)

    def __set__(self, instance, value):
        if not self.writable:
            raise AttributeError(f"Attribute '{self._name}' of {type(instance).__name__} is read-only")
        self._write(instance, value)

    def _write(self, instance, value):
        instance._attributes[self._name] = value

    def __repr__(self):
        return f"<Attribute {self._name} accessors={self._accessors} indexed={self._indexed}>"


class KeyAttribute(Attribute):
    """Raw ``<name>_id`` of a reference; writing it drops the memoized document."""

    def __init__(self, association_name: str, indexed: bool = True):
        super().__init__(READER, indexed)
        self._association_name = association_name

    def __set__(self, instance, value):
        self._write(instance, value)

    def _write(self, instance, value):
        instance._memo.invalidate(self._association_name)
        super()._write(instance, value)


class KeyListAttribute(KeyAttribute):
    """Raw ordered ``<name>_ids`` of a collection."""

    def __init__(self, association_name: str):
        super().__init__(association_name, indexed=False)

    def __get__(self, instance, owner):
        if instance is None:
            return self
        return list(instance._attributes.get(self._name) or [])

    def _write(self, instance, value):
        super()._write(instance, list(value) if value is not None else None)
