import logging
from polydoc.errors import ModelNotFoundError

logger = logging.getLogger(__name__)

_registered_models = {}

def register_model(model):
    qualified_name = _qualified_name(model)
    previous = _registered_models.get(qualified_name)
    if previous is not None and previous is not model:
        logger.debug(f"Model {qualified_name} redefined, replacing the registered class.")
    _registered_models[qualified_name] = model

def unregister_model(model):
    qualified_name = _qualified_name(model)
    if _registered_models.get(qualified_name) is model:
        del _registered_models[qualified_name]

def _get_registered_models():
    return list(_registered_models.values())

def _qualified_name(model):
    return f"{model.__module__}.{model.__qualname__}"

def _enclosing_scopes(owner):
    # innermost first: module.Outer.Inner -> module.Outer, module
    parts = owner.__qualname__.split('.')[:-1]
    scopes = []
    while parts:
        scopes.append(f"{owner.__module__}.{'.'.join(parts)}")
        parts.pop()
    scopes.append(owner.__module__)
    return scopes

def resolve_model(owner, target):
    """
    Resolve ``target`` as seen from the class ``owner``.

    Classes are returned unchanged. Names are looked up in the enclosing
    scopes of ``owner`` from the innermost outwards, then as an absolute
    qualified name, then by class name across every registered model.
    """
    if isinstance(target, type):
        return target

    for scope in _enclosing_scopes(owner):
        model = _registered_models.get(f"{scope}.{target}")
        if model is not None:
            logger.debug(f"Resolved model {target} from {owner.__qualname__} in scope {scope}.")
            return model

    model = _registered_models.get(target)
    if model is not None:
        return model

    candidates = [m for m in _registered_models.values() if m.__name__ == target]
    if len(candidates) == 1:
        logger.debug(f"Resolved model {target} from {owner.__qualname__} in global scope.")
        return candidates[0]

    if candidates:
        names = ', '.join(sorted(_qualified_name(m) for m in candidates))
        message = f"Model name '{target}' used by {owner.__qualname__} is ambiguous: {names}"
    else:
        message = f"Model '{target}' used by {owner.__qualname__} is not defined"
    logger.error(message)
    raise ModelNotFoundError(message)

def check_associations():
    """Resolve the target of every declared association, failing on the first unresolvable one."""
    for model in _get_registered_models():
        for association in model._associations.values():
            association.target_model()
