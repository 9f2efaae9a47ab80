"""
Tag tables.

Every lookup table in psd_layout, from descriptor OSTypes to the
per-family effect decoders, is a plain dict filled by a decorator::

    DECODERS, register = new_registry(attribute="tag")

    @register(Tag.GAUSSIAN_BLUR)
    def _gaussian_blur(block):
        ...
"""

from typing import Any, Callable, Dict, Optional, Tuple


def new_registry(attribute: Optional[str] = None) -> Tuple[Dict[Any, Any], Callable]:
    """
    Create a table and its registering decorator.

    :param attribute: when given, the key is also stored on each registered
        object under this attribute name.
    :return: `(table, register)` tuple.
    """
    table: Dict[Any, Any] = {}

    def register(key: Any) -> Callable:
        def decorator(obj: Any) -> Any:
            table[key] = obj
            if attribute:
                setattr(obj, attribute, key)
            return obj

        return decorator

    return table, register
