"""Dispatcher import resolution — resolves ``"module:attribute"`` strings."""

import importlib

from perch.dispatcher import Dispatcher


def resolve_dispatcher(import_string: str) -> Dispatcher:
    """Resolve an import string to a perch Dispatcher instance.

    Accepts ``"module:attribute"`` format. When the attribute portion is
    omitted, defaults to ``"dispatcher"``. If the resolved object is a
    callable other than a Dispatcher, it is called as a factory.

    Raises:
        ModuleNotFoundError: If the module cannot be imported.
        AttributeError: If the attribute does not exist on the module.
        TypeError: If the resolved object is not a Dispatcher or factory.
    """
    module_path, _, attr_name = import_string.partition(":")
    if not attr_name:
        attr_name = "dispatcher"

    module = importlib.import_module(module_path)
    obj = getattr(module, attr_name)

    if callable(obj) and not isinstance(obj, Dispatcher):
        try:
            obj = obj()
        except Exception as exc:
            msg = f"Factory function {import_string!r} raised an error: {exc}"
            raise TypeError(msg) from exc

    if not isinstance(obj, Dispatcher):
        msg = f"{import_string!r} resolved to {type(obj).__name__}, not a perch.Dispatcher"
        raise TypeError(msg)

    return obj
