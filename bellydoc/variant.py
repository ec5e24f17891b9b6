"""Dynamically typed values passed as widget parameters."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional, TypeVar

__all__ = [
    "VariantError",
    "VariantKind",
    "Variant",
    "as_string",
    "as_float",
    "as_u8",
    "as_bool",
    "JustifyContent",
    "justify_content_from",
]

log = logging.getLogger(__name__)

T = TypeVar("T")

_EXACT_TYPES = (bool, int, float, str)

_TRUE_WORDS = frozenset({"yes", "Yes", "YES", "true", "True", "TRUE"})
_FALSE_WORDS = frozenset({"no", "No", "NO", "false", "FALSE"})


class VariantError(ValueError):
    """Raised when a variant cannot be converted to the requested value."""


class VariantKind(enum.Enum):
    """What a :class:`Variant` holds."""

    UNDEFINED = "Undefined"
    BOOL = "Bool"
    STRING = "String"
    ENTITY = "Entity"
    STYLE = "Style"
    PROPERTY = "Property"
    COMMANDS = "Commands"
    ELEMENTS = "Elements"
    PARAMS = "Params"
    BOXED = "Any"


def _matches(value: Any, typ: Any) -> bool:
    # Primitive types are matched exactly so that True never passes for an int.
    if typ in _EXACT_TYPES:
        return type(value) is typ
    return isinstance(value, typ)


@dataclass
class Variant:
    """A tagged value; an empty variant is ``Variant()``."""

    kind: VariantKind = VariantKind.UNDEFINED
    value: Any = None

    @classmethod
    def string(cls, value: Any) -> "Variant":
        return cls(VariantKind.STRING, str(value))

    @classmethod
    def boxed(cls, value: Any) -> "Variant":
        return cls(VariantKind.BOXED, value)

    @classmethod
    def style(cls, value: Any) -> "Variant":
        return cls(VariantKind.STYLE, value)

    @classmethod
    def commands(cls, func: Callable[[Any], None]) -> "Variant":
        return cls(VariantKind.COMMANDS, func)

    @classmethod
    def params(cls, params: Any) -> "Variant":
        return cls(VariantKind.PARAMS, params)

    @property
    def is_undefined(self) -> bool:
        return self.kind is VariantKind.UNDEFINED

    def holds(self, typ: Any) -> bool:
        """Whether the held value is of type ``typ``."""
        if self.kind is VariantKind.UNDEFINED:
            return False
        return _matches(self.value, typ)

    def get(self, typ: Any) -> Optional[Any]:
        """The held value if it is of type ``typ``, else ``None``."""
        return self.value if self.holds(typ) else None

    def take(self, typ: Any) -> Optional[Any]:
        """Move the value out, leaving the variant undefined."""
        result = self.get(typ)
        if result is None and self.kind is VariantKind.BOXED:
            log.error("Can't cast %r to %s", self, getattr(typ, "__name__", typ))
        self.kind = VariantKind.UNDEFINED
        self.value = None
        return result

    def merge(self, other: "Variant") -> None:
        """Combine ``other`` into this variant in place."""
        if self.kind is VariantKind.COMMANDS and other.kind is VariantKind.COMMANDS:
            first, second = self.value, other.value

            def combined(target: Any) -> None:
                first(target)
                second(target)

            self.value = combined
        elif self.kind is VariantKind.PARAMS and other.kind is VariantKind.PARAMS:
            self.value.merge(other.value)
        else:
            self.kind = other.kind
            self.value = other.value

    def get_or_parse(self, typ: type, parser: Optional[Callable[[str], Any]] = None) -> Any:
        """Return a held ``typ`` value, or parse a held string with ``parser``."""
        parse = parser if parser is not None else typ
        if self.kind is VariantKind.STRING:
            return _parse(parse, self.value)
        if self.kind is VariantKind.BOXED:
            if _matches(self.value, typ):
                return self.value
            if isinstance(self.value, str):
                return _parse(parse, self.value)
        raise VariantError(f"Invalid value for {getattr(typ, '__name__', typ)}")

    def __repr__(self) -> str:
        if self.kind is VariantKind.UNDEFINED:
            return "Variant::Undefined"
        if self.kind in (VariantKind.BOOL, VariantKind.STRING, VariantKind.ENTITY,
                         VariantKind.STYLE, VariantKind.PARAMS):
            return f"Variant::{self.kind.value}({self.value!r})"
        return f"Variant::{self.kind.value}"


def _parse(parse: Callable[[str], Any], text: str) -> Any:
    try:
        return parse(text)
    except (ValueError, TypeError) as exc:
        raise VariantError(str(exc)) from exc


def as_string(variant: Variant) -> str:
    """Convert to a string; an undefined variant is the empty string."""
    if variant.kind is VariantKind.UNDEFINED:
        return ""
    if variant.kind in (VariantKind.STRING, VariantKind.BOXED) and isinstance(variant.value, str):
        return variant.value
    raise VariantError("Not a valid String")


def as_float(variant: Variant) -> float:
    """Convert to a float, parsing strings."""
    if variant.kind is VariantKind.STRING:
        try:
            return float(variant.value)
        except ValueError:
            raise VariantError(f"Can't parse {variant.value!r} as f32") from None
    value = variant.get(float)
    if value is None:
        raise VariantError("Can't cast Variant to f32")
    return value


def as_u8(variant: Variant) -> int:
    """Convert to an integer in 0..=255, parsing strings."""
    if variant.kind is VariantKind.STRING:
        try:
            value = int(variant.value)
        except ValueError:
            raise VariantError(f"Can't parse {variant.value!r} as u8") from None
        if not 0 <= value <= 255:
            raise VariantError(f"Can't parse {variant.value!r} as u8")
        return value
    value = variant.get(int)
    if value is None or not 0 <= value <= 255:
        raise VariantError("Can't cast Variant to u8")
    return value


def as_bool(variant: Variant) -> bool:
    """Convert to a bool; accepts yes/no and true/false words."""
    kind = variant.kind
    if kind is VariantKind.UNDEFINED:
        return False
    if kind is VariantKind.BOOL:
        return bool(variant.value)
    if kind is VariantKind.STRING:
        if variant.value in _TRUE_WORDS:
            return True
        if variant.value in _FALSE_WORDS:
            return False
    if kind is VariantKind.BOXED and type(variant.value) is bool:
        return variant.value
    raise VariantError(f"Can't extract bool from {variant!r}")


class JustifyContent(enum.Enum):
    """Main-axis alignment of flex children."""

    FLEX_START = "flex-start"
    FLEX_END = "flex-end"
    CENTER = "center"
    SPACE_BETWEEN = "space-between"
    SPACE_AROUND = "space-around"
    SPACE_EVENLY = "space-evenly"

    @classmethod
    def parse(cls, value: str) -> "JustifyContent":
        try:
            return cls(value)
        except ValueError:
            raise VariantError(f"Can't parse `{value}` as JustifyContent") from None


def justify_content_from(variant: Variant) -> JustifyContent:
    """Read a :class:`JustifyContent` from a string or held value."""
    if variant.kind is VariantKind.STRING:
        return JustifyContent.parse(variant.value)
    value = variant.get(JustifyContent)
    if value is None:
        raise VariantError("Invalid value for JustifyContent")
    return value