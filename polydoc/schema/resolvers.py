import logging
from polydoc.constants import ID_SUFFIX

logger = logging.getLogger(__name__)

def resolve_reference(model, key):
    if key is None:
        return None
    logger.debug(f"Fetching {model.__name__} {key}.")
    return model.get(key)

def resolve_referenced(model, reverse_name, key):
    if key is None:
        return None
    index_name = f"{reverse_name}{ID_SUFFIX}"
    logger.debug(f"Querying {model.__name__} by {index_name} = {key}.")
    return model.find(index_name, key).first()

def resolve_collection(model, keys):
    keys = list(keys or [])
    if not keys:
        return []
    logger.debug(f"Fetching {len(keys)} {model.__name__} documents.")
    return list(model.all(keys))
