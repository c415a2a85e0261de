import logging
import polydoc.constants as cst

logger = logging.getLogger(__name__)

DEFAULT_NAMESPACE = 'default_namespace'
DEFAULT_CONTEXT = 'default_context'
DEFAULT_BACKEND = 'default_backend'
DEFAULT_ADDRESS = 'default_address'
DEFAULT_USER = 'default_user'
DEFAULT_PASS = 'default_pass'
DEFAULT_TRANSPORT = 'default_transport'
POLYPHENY_CONTAINER_NAME = 'polypheny_container_name'
POLYPHENY_IMAGE_NAME = 'polypheny_image_name'
POLYPHENY_PORTS = 'polypheny_ports'

_defaults = {
    DEFAULT_NAMESPACE: cst.DEFAULT_NAMESPACE,
    DEFAULT_CONTEXT: cst.DEFAULT_CONTEXT,
    DEFAULT_BACKEND: cst.DEFAULT_BACKEND,
    DEFAULT_ADDRESS: cst.DEFAULT_ADDRESS,
    DEFAULT_USER: cst.DEFAULT_USER,
    DEFAULT_PASS: cst.DEFAULT_PASS,
    DEFAULT_TRANSPORT: cst.DEFAULT_TRANSPORT,
    POLYPHENY_CONTAINER_NAME: cst.POLYPHENY_CONTAINER_NAME,
    POLYPHENY_IMAGE_NAME: cst.POLYPHENY_IMAGE_NAME,
    POLYPHENY_PORTS: cst.POLYPHENY_PORTS,
}

_values = dict(_defaults)
_locked = False

def get(key: str):
    if key not in _values:
        raise KeyError(f"Unknown configuration key '{key}'.")
    return _values[key]

def set(key: str, value):
    if _locked:
        message = f"Configuration is locked while a store is open; '{key}' cannot be changed."
        logger.error(message)
        raise RuntimeError(message)
    if key not in _defaults:
        raise KeyError(f"Unknown configuration key '{key}'.")
    _values[key] = value

def lock():
    global _locked
    _locked = True

def unlock():
    global _locked
    _locked = False

def is_locked() -> bool:
    return _locked

def reset():
    global _locked
    _values.clear()
    _values.update(_defaults)
    _locked = False
