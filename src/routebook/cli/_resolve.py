"""Service import resolution: resolves ``"module:attribute"`` strings.

Shared by ``routebook docs`` and ``routebook routes``.
"""

import importlib

from routebook.service import Service


def resolve_service(import_string: str) -> Service:
    """Resolve an import string to a ``Service`` instance.

    Accepts ``"module:attribute"`` format. When the attribute portion
    is omitted, defaults to ``"service"``. If the resolved object is a
    callable other than a Service, it is called as a factory.

    Raises:
        ModuleNotFoundError: If the module cannot be imported.
        AttributeError: If the attribute does not exist on the module.
        TypeError: If the resolved object is not a ``Service``.
    """
    module_path, _, attr_name = import_string.partition(":")
    if not attr_name:
        attr_name = "service"

    module = importlib.import_module(module_path)
    obj = getattr(module, attr_name)

    if callable(obj) and not isinstance(obj, Service):
        try:
            obj = obj()
        except Exception as exc:
            msg = f"Factory function {import_string!r} raised an error: {exc}"
            raise TypeError(msg) from exc

    if not isinstance(obj, Service):
        msg = f"{import_string!r} resolved to {type(obj).__name__}, not a routebook.Service"
        raise TypeError(msg)

    return obj
