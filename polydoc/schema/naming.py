import re

_NAMESPACE_PREFIX = re.compile(r'^(?:.*(?:\.|::))*(.*)$')
_WORD_BOUNDARY = re.compile(r'([a-z\d])([A-Z])')

def to_reference(class_name: str) -> str:
    """Default reverse attribute name for a model: ``blog.WeirdPost`` -> ``weird_post``."""
    name = _NAMESPACE_PREFIX.match(class_name).group(1)
    return _WORD_BOUNDARY.sub(r'\1_\2', name).lower()
