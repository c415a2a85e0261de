class PolydocError(Exception):
    pass


class InvalidClassError(PolydocError, TypeError):
    def __init__(self, obj, expected=None):
        self.object = obj
        self.expected = expected
        if expected is None:
            message = f"{obj!r} is not of the declared class"
        else:
            message = f"{obj!r} is not a {getattr(expected, '__name__', expected)}"
        super().__init__(message)


class NotEmbeddableError(PolydocError, TypeError):
    def __init__(self, obj):
        self.object = obj
        super().__init__(f"{obj!r} is not an embeddable object")


class ModelNotFoundError(PolydocError, LookupError):
    pass


class IndexNotFoundError(PolydocError, ValueError):
    def __init__(self, model, attribute):
        self.model = model
        self.attribute = attribute
        super().__init__(f"Index '{attribute}' is not defined on {model.__name__}")


class DocumentNotFoundError(PolydocError, LookupError):
    pass


class NotConnectedError(PolydocError, RuntimeError):
    pass
