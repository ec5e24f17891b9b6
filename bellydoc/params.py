"""Widget parameters collected from markup attributes."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, Optional, Set, Tuple

from .variant import Variant, VariantKind

__all__ = [
    "ParamsError",
    "ParamTarget",
    "Param",
    "StyleParams",
    "Params",
]

log = logging.getLogger(__name__)

_CLASS_PREFIX = "c:"
_STYLE_PREFIX = "s:"

_TAG_PARAMS = "params"
_TAG_CLASS = "class"
_TAG_ID = "id"


class ParamsError(TypeError):
    """Raised when a parameter holds a value of the wrong kind."""


class ParamTarget(enum.Enum):
    """Where a parameter ends up once added to :class:`Params`."""

    PARAM = "param"
    STYLE = "style"
    CLASS = "class"


def _to_variant(value: Any) -> Variant:
    if isinstance(value, Variant):
        return value
    if isinstance(value, str):
        return Variant.string(value)
    if isinstance(value, bool):
        return Variant(VariantKind.BOOL, value)
    return Variant.boxed(value)


@dataclass
class Param:
    """A single named parameter with its value and target."""

    name: str
    value: Variant = field(default_factory=Variant)
    target: ParamTarget = ParamTarget.PARAM

    @classmethod
    def parse(cls, name: str, value: Any) -> "Param":
        """Build a parameter, honouring the ``c:`` and ``s:`` name prefixes."""
        if name.startswith(_CLASS_PREFIX):
            return cls(name[len(_CLASS_PREFIX):], Variant(), ParamTarget.CLASS)
        if name.startswith(_STYLE_PREFIX):
            return cls(name[len(_STYLE_PREFIX):], _to_variant(value), ParamTarget.STYLE)
        return cls(name, _to_variant(value), ParamTarget.PARAM)

    @classmethod
    def from_commands(cls, name: str, commands: Callable[[Any], None]) -> "Param":
        return cls(name, Variant.commands(commands), ParamTarget.PARAM)

    @classmethod
    def style(cls, name: str, value: Any) -> "Param":
        return cls(name, _to_variant(value), ParamTarget.STYLE)

    def take(self, typ: Any) -> Optional[Any]:
        """Move the value out if it is of type ``typ``; the value is left empty."""
        return self.take_variant().take(typ)

    def take_variant(self) -> Variant:
        """Move the whole variant out, leaving an empty one behind."""
        value, self.value = self.value, Variant()
        return value


class StyleParams(Dict[str, Variant]):
    """Style values defined inline on an element, keyed by property name."""

    def transform(
        self, func: Callable[[str, Variant], Iterable[Tuple[str, Any]]]
    ) -> Dict[str, Any]:
        """Map every style through ``func``, which yields ``(name, property)`` pairs."""
        styles: Dict[str, Any] = {}
        for tag, variant in self.items():
            for name, prop in func(tag, variant):
                styles[name] = prop
        return styles


@dataclass
class Params:
    """Classes, styles and plain parameters of one element."""

    defined_classes: Set[str] = field(default_factory=set)
    defined_styles: StyleParams = field(default_factory=StyleParams)
    rest: Dict[str, Param] = field(default_factory=dict)

    def insert(self, name: str, value: Any) -> None:
        self.add(Param.parse(name, value))

    def add(self, param: Param) -> None:
        """Add a parameter, routing it to classes, styles or the rest."""
        if param.name == _TAG_PARAMS:
            incoming = param.take(Params)
            if incoming is None:
                raise ParamsError("params should be of type Params.")
            current = Params(self.defined_classes, self.defined_styles, self.rest)
            incoming.merge(current)
            self.defined_classes = incoming.defined_classes
            self.defined_styles = incoming.defined_styles
            self.rest = incoming.rest
            return
        if param.name == _TAG_CLASS and param.value.kind is VariantKind.STRING:
            self.defined_classes.update(param.value.value.split())
            return
        if param.target is ParamTarget.PARAM:
            self.rest[param.name] = param
        elif param.target is ParamTarget.STYLE:
            self.defined_styles[param.name] = param.value
        else:
            self.defined_classes.add(param.name)

    def merge(self, other: "Params") -> None:
        """Merge ``other`` into these params; its values win."""
        self.defined_classes.update(other.defined_classes)
        self.defined_styles.update(other.defined_styles)
        for name, param in other.rest.items():
            existing = self.rest.get(name)
            if existing is not None:
                existing.value.merge(param.value)
            else:
                self.rest[name] = param
        other.rest = {}

    def commands(self, name: str) -> Optional[Callable[[Any], None]]:
        """Remove and return the commands stored under ``name``."""
        param = self.rest.pop(name, None)
        if param is None or param.value.kind is not VariantKind.COMMANDS:
            return None
        return param.take_variant().value

    def classes(self) -> Set[str]:
        classes, self.defined_classes = self.defined_classes, set()
        return classes

    def styles(self) -> StyleParams:
        styles, self.defined_styles = self.defined_styles, StyleParams()
        return styles

    def id(self) -> Optional[str]:
        return self.drop(_TAG_ID, str)

    def get(self, key: str, typ: Any) -> Optional[Any]:
        param = self.rest.get(key)
        return None if param is None else param.value.get(typ)

    def get_variant(self, key: str) -> Optional[Variant]:
        param = self.rest.get(key)
        return None if param is None else param.value

    def drop(self, key: str, typ: Any) -> Optional[Any]:
        param = self.rest.pop(key, None)
        return None if param is None else param.take(typ)

    def drop_variant(self, key: str) -> Optional[Variant]:
        param = self.rest.pop(key, None)
        return None if param is None else param.take_variant()

    def drop_or_default(self, key: str, default: Any) -> Any:
        value = self.drop(key, type(default))
        return default if value is None else value

    def apply_commands(self, for_param: str, target: Any) -> None:
        commands = self.commands(for_param)
        if commands is not None:
            commands(target)

    def try_get(self, param: str, converter: Callable[[Variant], Any]) -> Optional[Any]:
        """Remove ``param`` and convert it; a failed conversion is logged and gives ``None``."""
        variant = self.drop_variant(param)
        if variant is None:
            return None
        try:
            return converter(variant)
        except (ValueError, TypeError) as exc:
            log.error("Invalid value for '%s' param: %s", param, exc)
            return None