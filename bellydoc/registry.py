"""Registry of widget builders and named slots of built content."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Hashable, Iterable, List, Optional, Set

from .params import Params

__all__ = ["WidgetData", "WidgetRegistry", "Slots"]


@dataclass
class WidgetData:
    """What markup collects for one widget before it is built."""

    entity: Hashable
    children: List[Hashable] = field(default_factory=list)
    params: Params = field(default_factory=Params)


@dataclass(frozen=True)
class _Entry:
    builder: Callable[..., Any]
    default_styles: str


class WidgetRegistry:
    """Thread-safe mapping of tag names to widget builders."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._entries: Dict[str, _Entry] = {}

    def register(
        self, name: str, builder: Callable[..., Any], default_styles: str = ""
    ) -> None:
        """Register ``builder`` under the tag ``name``, replacing any earlier one."""
        with self._lock:
            self._entries[name] = _Entry(builder, default_styles)

    def get(self, name: str) -> Optional[Callable[..., Any]]:
        """The builder registered for ``name``, or ``None``."""
        with self._lock:
            entry = self._entries.get(name)
        return None if entry is None else entry.builder

    def has(self, name: str) -> bool:
        with self._lock:
            return name in self._entries

    def default_styles(self, parser: Any) -> List[Any]:
        """Parse every widget's default styles and return all rules in order.

        ``parser`` is either a callable taking the style source or an object
        with a ``parse`` method doing the same; it returns an iterable of rules.
        """
        parse = getattr(parser, "parse", parser)
        with self._lock:
            sources = [entry.default_styles for entry in self._entries.values()]
        rules: List[Any] = []
        for source in sources:
            rules.extend(parse(source))
        return rules

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


class Slots:
    """Thread-safe store of entities built for named slots."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._slots: Dict[str, List[Hashable]] = {}

    def insert(self, tag: str, entities: Iterable[Hashable]) -> None:
        """Store ``entities`` under ``tag``, replacing what was there."""
        with self._lock:
            self._slots[tag] = list(entities)

    def remove(self, tag: str) -> Optional[List[Hashable]]:
        """Remove and return the entities under ``tag``, or ``None``."""
        with self._lock:
            return self._slots.pop(tag, None)

    def keys(self) -> Set[str]:
        with self._lock:
            return set(self._slots)