"""Parsing of element markup into a tree of elements, text and slots."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Tuple, Union
from xml.parsers import expat

from .registry import WidgetRegistry

__all__ = ["EmlParseError", "EmlText", "EmlSlot", "EmlElement", "EmlNode", "parse"]

NS_STYLE = "s"
_NS_SKIP = "skip"
_PREFIX = f'<skip:root xmlns:skip="skip" xmlns:{NS_STYLE}="{NS_STYLE}">\n'
_SUFFIX = "\n</skip:root>"
_LINE_OFFSET = 1

StyleValidator = Callable[[str, str], None]


class EmlParseError(ValueError):
    """Raised when markup cannot be turned into an element tree.

    The message names the problem, the line and column in the source, and
    shows the offending line with a caret under the column.
    """

    def __init__(self, message: str, row: int, column: int) -> None:
        super().__init__(message)
        self.row = row
        self.column = column


@dataclass
class EmlText:
    """A run of text with its whitespace collapsed."""

    text: str


@dataclass
class EmlSlot:
    """Content meant to replace the named slot of a widget."""

    name: str
    children: List["EmlNode"] = field(default_factory=list)


@dataclass
class EmlElement:
    """A widget tag with its attributes and children."""

    name: str
    params: Dict[str, str] = field(default_factory=dict)
    children: List["EmlNode"] = field(default_factory=list)


EmlNode = Union[EmlElement, EmlText, EmlSlot]


@dataclass
class _Attr:
    namespace: Optional[str]
    name: str
    value: str
    pos: Tuple[int, int]


@dataclass
class _Node:
    kind: str
    pos: Tuple[int, int]
    name: str = ""
    namespace: Optional[str] = None
    text: str = ""
    attrs: List[_Attr] = field(default_factory=list)
    children: List["_Node"] = field(default_factory=list)


class _Failure(Exception):
    def __init__(self, message: str, pos: Tuple[int, int]) -> None:
        super().__init__(message)
        self.message = message
        self.pos = pos


class _TreeBuilder:
    """Builds a position-annotated node tree with expat."""

    def __init__(self, data: str) -> None:
        self.data = data
        self.raw = data.encode("utf-8")
        self.root = _Node("root", (1, 1))
        self.stack: List[_Node] = [self.root]
        self.parser = expat.ParserCreate(namespace_separator=" ")
        self.parser.namespace_prefixes = True
        self.parser.ordered_attributes = True
        self.parser.buffer_text = True
        self.parser.StartElementHandler = self._start
        self.parser.EndElementHandler = self._end
        self.parser.CharacterDataHandler = self._chars
        self.parser.CommentHandler = self._comment
        self.parser.ProcessingInstructionHandler = self._pi

    def build(self) -> _Node:
        try:
            self.parser.Parse(self.raw, True)
        except expat.ExpatError as exc:
            pos = self._pos_from_line(exc.lineno, exc.offset)
            raise _Failure(expat.ErrorString(exc.code), pos) from None
        return self.root

    def _char_offset(self) -> int:
        index = self.parser.CurrentByteIndex
        return len(self.raw[:index].decode("utf-8", "replace"))

    def _pos_from_offset(self, offset: int) -> Tuple[int, int]:
        row = self.data.count("\n", 0, offset) + 1
        line_start = self.data.rfind("\n", 0, offset) + 1
        return row, offset - line_start + 1

    def _pos_from_line(self, lineno: int, byte_col: int) -> Tuple[int, int]:
        lines = self.raw.split(b"\n")
        line = lines[lineno - 1] if 0 < lineno <= len(lines) else b""
        return lineno, len(line[:byte_col].decode("utf-8", "replace")) + 1

    @staticmethod
    def _split(name: str) -> Tuple[Optional[str], str, Optional[str]]:
        parts = name.split(" ")
        if len(parts) == 3:
            return parts[0], parts[1], parts[2]
        if len(parts) == 2:
            return parts[0], parts[1], None
        return None, name, None

    def _attr_pos(self, qname: str, start: int, fallback: Tuple[int, int]) -> Tuple[int, int]:
        pattern = re.compile(rf"(?<![\w.:-]){re.escape(qname)}\s*=")
        found = pattern.search(self.data, start)
        return self._pos_from_offset(found.start()) if found else fallback

    def _start(self, name: str, attributes: List[str]) -> None:
        offset = self._char_offset()
        pos = self._pos_from_offset(offset)
        namespace, local, _ = self._split(name)
        node = _Node("element", pos, name=local, namespace=namespace)
        for raw_name, value in zip(attributes[::2], attributes[1::2]):
            attr_ns, attr_local, attr_prefix = self._split(raw_name)
            qname = f"{attr_prefix}:{attr_local}" if attr_prefix else attr_local
            node.attrs.append(
                _Attr(attr_ns, attr_local, value, self._attr_pos(qname, offset, pos))
            )
        self.stack[-1].children.append(node)
        self.stack.append(node)

    def _end(self, name: str) -> None:
        self.stack.pop()

    def _chars(self, text: str) -> None:
        children = self.stack[-1].children
        if children and children[-1].kind == "text":
            children[-1].text += text
        else:
            pos = self._pos_from_offset(self._char_offset())
            children.append(_Node("text", pos, text=text))

    def _comment(self, text: str) -> None:
        pos = self._pos_from_offset(self._char_offset())
        self.stack[-1].children.append(_Node("comment", pos, text=text))

    def _pi(self, target: str, data: str) -> None:
        pos = self._pos_from_offset(self._char_offset())
        self.stack[-1].children.append(_Node("pi", pos, name=target, text=data))


def _collapse(text: str) -> str:
    return " ".join(text.split())


def _format_error(message: str, row: int, col: int, data: str) -> str:
    msg = f"{message} at {row - _LINE_OFFSET}:{col}"
    msglen = len(msg)
    lineidx = row - 1 if row > 0 else row
    lines = data.split("\n")
    line = lines[lineidx].rstrip("\r") if lineidx < len(lines) else ""
    linelen = len(line)
    suffix0 = linelen - msglen + 1 if linelen > msglen else 1
    suffix1 = 2 if linelen > msglen else msglen - linelen + 2
    suffix2 = max(max(linelen, msglen) - col + 1, 0)
    return (
        f"{msg} {'-' * suffix0}.\n"
        f"{line}{' ' * suffix1}|\n"
        f"{' ' * col}^{'-' * suffix2}`\n"
    )


class _Walker:
    def __init__(self, registry: WidgetRegistry, validate_style: Optional[StyleValidator]):
        self.registry = registry
        self.validate_style = validate_style

    def root(self, node: _Node) -> EmlNode:
        if node.kind == "root" or node.namespace == _NS_SKIP:
            elements = [child for child in node.children if child.kind == "element"]
            if len(elements) != 1:
                raise _Failure(
                    "Invalid document structure: Node should has exactly one child",
                    node.pos,
                )
            return self.root(elements[0])
        return self.walk(node)

    def walk(self, node: _Node) -> EmlNode:
        if node.kind == "text":
            return EmlText(_collapse(node.text))
        if node.kind == "element" and node.name == "slot":
            return self._slot(node)
        if node.kind == "element":
            return self._element(node)
        if node.kind == "comment":
            description = f"Comment({node.text!r})"
        else:
            description = f"PI({node.name!r})"
        raise _Failure(
            f"Invalid document structure: Invalid element: {description}", node.pos
        )

    def _slot(self, node: _Node) -> EmlSlot:
        name = next(
            (a.value for a in node.attrs if a.namespace is None and a.name == "replace"),
            None,
        )
        if name is None:
            raise _Failure(
                "Invalid element: <slot> tag should have 'for' attribute.", node.pos
            )
        return EmlSlot(name, [self.walk(child) for child in node.children])

    def _element(self, node: _Node) -> EmlElement:
        if not self.registry.has(node.name):
            raise _Failure(f"Invalid element: {node.name}", node.pos)
        element = EmlElement(node.name)
        for attr in node.attrs:
            if attr.namespace is not None:
                if attr.namespace == NS_STYLE and self.validate_style is not None:
                    try:
                        self.validate_style(attr.name, attr.value)
                    except ValueError as exc:
                        raise _Failure(
                            f"Invalid value for {NS_STYLE}:{attr.name} attribute: {exc}",
                            attr.pos,
                        ) from None
                key = f"{attr.namespace}:{attr.name}"
            else:
                key = attr.name
            element.params[key] = attr.value
        for child in node.children:
            if child.kind == "text":
                text = _collapse(child.text)
                if text:
                    element.children.append(EmlText(text))
            elif child.kind == "element":
                element.children.append(self.walk(child))
        return element


def parse(
    source: str,
    registry: WidgetRegistry,
    validate_style: Optional[StyleValidator] = None,
) -> EmlNode:
    """Parse markup holding exactly one top-level element.

    Every tag must be registered in ``registry``. ``validate_style`` is called
    with the name and value of each ``s:`` attribute and raises ``ValueError``
    for an invalid value. Errors are raised as :class:`EmlParseError`.
    """
    data = _PREFIX + source + _SUFFIX
    try:
        tree = _TreeBuilder(data).build()
        return _Walker(registry, validate_style).root(tree)
    except _Failure as failure:
        row, col = failure.pos
        raise EmlParseError(
            _format_error(failure.message, row, col, data), row - _LINE_OFFSET, col
        ) from None