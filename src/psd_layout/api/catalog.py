"""
Effect catalog.

A catalog holds the effects of one family attached to a layer, in insertion
order. Lookups go through a kind to index-list mapping so that queries do
not scan the whole list.

Example::

    catalog = EffectCatalog(EffectFamily.STYLE)
    catalog.add_effect(DropShadow())

    catalog.has_effect(DropShadow)
    catalog.get_effect(StyleKind.DROP_SHADOW)
    catalog.get_effects("dropshadow")
"""

import logging
from enum import Enum
from typing import Any, Dict, Iterable, Iterator, List, Optional

from psd_layout.api.adjustments import ADJUSTMENT_VARIANTS
from psd_layout.api.effects import STYLE_VARIANTS, Effect
from psd_layout.api.smart_filters import FILTER_VARIANTS
from psd_layout.constants import EffectFamily

logger = logging.getLogger(__name__)

_VARIANTS = {
    EffectFamily.ADJUSTMENT: ADJUSTMENT_VARIANTS,
    EffectFamily.STYLE: STYLE_VARIANTS,
    EffectFamily.SMART_FILTER: FILTER_VARIANTS,
}


class EffectCatalog:
    """
    List-like catalog of effects of a single family.

    Later effects never replace earlier ones of the same kind;
    :py:meth:`get_effect` always returns the first match.

    :param family: :py:class:`~psd_layout.constants.EffectFamily`.
    :param effects: optional initial effects.
    """

    def __init__(self, family: EffectFamily, effects: Iterable[Effect] = ()):
        self._family = EffectFamily(family)
        self._items: List[Effect] = []
        self._index: Dict[Enum, List[int]] = {}
        for effect in effects:
            self.add_effect(effect)

    @property
    def family(self) -> EffectFamily:
        """Effect family of this catalog."""
        return self._family

    def add_effect(self, effect: Effect) -> None:
        """
        Append an effect.

        :raise TypeError: if the effect belongs to another family.
        """
        if getattr(effect, "family", None) != self._family:
            raise TypeError(
                "Cannot add %r to a %s catalog" % (effect, self._family.value)
            )
        self._index.setdefault(effect.kind, []).append(len(self._items))
        self._items.append(effect)

    def get_effect(self, kind: Any) -> Optional[Effect]:
        """
        Get the first effect of the given kind.

        :param kind: kind enum, variant class, or variant name such as
            `DropShadow` (case-insensitive).
        :return: effect or `None`.
        """
        indices = self._index.get(self._resolve(kind))
        if not indices:
            return None
        return self._items[indices[0]]

    def get_effects(self, kind: Any) -> List[Effect]:
        """
        Get all the effects of the given kind in insertion order.
        """
        return [self._items[i] for i in self._index.get(self._resolve(kind), [])]

    def has_effect(self, kind: Any) -> bool:
        """Whether an effect of the given kind exists."""
        return self.get_effect(kind) is not None

    @property
    def has_any_effects(self) -> bool:
        """Whether the catalog contains any effect."""
        return len(self._items) > 0

    def find(self, name: str, enabled: bool = True) -> Iterator[Effect]:
        """Iterate effect items by name.

        :param name: Effect name, e.g. `DropShadow` or `GaussianBlur`.
        :param enabled: If true, only return enabled effects.
        """
        try:
            effects = self.get_effects(name)
        except KeyError:
            logger.debug("Effect class not found for name=%r", name)
            return
        for effect in effects:
            if enabled and not effect.enabled:
                continue
            yield effect

    def kinds(self) -> List[Enum]:
        """Distinct kinds present, in order of first appearance."""
        return list(self._index.keys())

    def _resolve(self, kind: Any) -> Enum:
        variants = _VARIANTS[self._family]
        if isinstance(kind, type):
            kind = getattr(kind, "kind", kind)
        if isinstance(kind, str):
            lookup = {k.value.lower(): k for k in variants}
            resolved = lookup.get(kind.lower())
            if resolved is None:
                raise KeyError(
                    "Unknown %s effect name %r" % (self._family.value, kind)
                )
            return resolved
        if kind not in variants:
            raise TypeError(
                "%r is not a %s effect kind" % (kind, self._family.value)
            )
        return kind

    def __len__(self) -> int:
        return self._items.__len__()

    def __iter__(self) -> Iterator[Effect]:
        return self._items.__iter__()

    def __getitem__(self, key: int) -> Effect:
        return self._items.__getitem__(key)

    def __bool__(self) -> bool:
        return self.has_any_effects

    def __repr__(self) -> str:
        return "%s(%s)" % (
            self.__class__.__name__,
            " ".join(x.name for x in self),
        )

    def _repr_pretty_(self, p: Any, cycle: bool) -> None:
        if cycle:
            p.text(self.__repr__())
            return
        with p.group(2, "%s(" % self._family.value, ")"):
            for idx, effect in enumerate(self):
                if idx:
                    p.text(",")
                p.breakable()
                p.text(repr(effect))
