"""
Validation and conversion functions for attrs.
"""

import logging
from typing import Any, Callable

from attrs import define
from attrs.validators import in_

logger = logging.getLogger(__name__)

__all__ = ["in_", "range_", "clamp"]


@define(repr=False, frozen=True)
class _RangeValidator:
    minimum: Any
    maximum: Any

    def __call__(self, inst: Any, attr: Any, value: Any) -> None:
        try:
            in_range = self.minimum <= value and value <= self.maximum
        except TypeError:
            in_range = False

        if not in_range:
            raise ValueError(
                "'{name}' must be in range [{minimum!r}, {maximum!r}]: {value!r}".format(
                    name=attr.name,
                    minimum=self.minimum,
                    maximum=self.maximum,
                    value=value,
                )
            )

    def __repr__(self) -> str:
        return "<range_ validator with [{minimum!r}, {maximum!r}]>".format(
            minimum=self.minimum, maximum=self.maximum
        )


def range_(minimum: Any, maximum: Any) -> _RangeValidator:
    """
    A validator that raises a :exc:`ValueError` if the initializer is called
    with a value that does not belong in the [minimum, maximum] range. The
    check is performed using ``minimum <= value and value <= maximum``
    """
    return _RangeValidator(minimum, maximum)


def clamp(minimum: float, maximum: float) -> Callable[[Any], float]:
    """
    A converter that coerces the value to `float` and clamps it into the
    [minimum, maximum] range.

    Non-numeric values raise :exc:`TypeError` or :exc:`ValueError` from
    ``float()``. A warning is logged when the value had to be clamped.
    """

    def converter(value: Any) -> float:
        value = float(value)
        if value != value:
            raise ValueError("NaN is not a valid parameter value")
        clamped = min(max(value, minimum), maximum)
        if clamped != value:
            logger.warning(
                "Value %r out of range [%r, %r], clamped to %r",
                value,
                minimum,
                maximum,
                clamped,
            )
        return clamped

    return converter
