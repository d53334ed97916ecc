from __future__ import annotations
import json
import re
import xml.etree.ElementTree as ET
from typing import Any, Dict, List, Optional, TextIO

from core.exceptions import FormatterError, NodeTraversalAbort
from core.models import Node, Task
from visitor.descriptor import VisitorDescriptor
from visitor.traverser import traverse
from visitor.visitor import Visitor


class Formatter:
    """Serializa un árbol ya recorrido/filtrado a `out`."""
    name = ""

    def __init__(self, max_depth: Optional[int] = None):
        self.max_depth = max_depth

    def format(self, node: Node, out: TextIO) -> None:
        raise NotImplementedError


class _TreeWriter(Visitor):
    """
    Visitor base de los formatters: lleva la profundidad actual.

    Con max_depth, los nodos más profundos se descartan abortando su subárbol
    en enter (antes de escribir nada, así exit no llega a llamarse).
    """

    def __init__(self, max_depth: Optional[int] = None):
        super().__init__(VisitorDescriptor.visit_all())
        self.max_depth = max_depth
        self.depth = 0

    def enter(self, node: Node) -> None:
        if self.max_depth is not None and self.depth >= self.max_depth:
            raise NodeTraversalAbort()
        self.open(node)
        self.depth += 1

    def exit(self, node: Node) -> None:
        self.depth -= 1
        self.close(node)

    def open(self, node: Node) -> None:
        pass

    def close(self, node: Node) -> None:
        pass


# ---------- text ----------
class _TextWriter(_TreeWriter):
    INDENT = "  "

    def __init__(self, out: TextIO, max_depth: Optional[int] = None):
        super().__init__(max_depth)
        self.out = out

    def open(self, node: Node) -> None:
        pad = self.INDENT * self.depth
        if isinstance(node, Task):
            mark = "[x]" if node.is_done else "[ ]"
            line = f"{pad}- {mark} {node.title}"
            if node.due_date:
                line += f" (due {node.due_date})"
            if node.priority:
                line += f" !{node.priority}"
        else:
            line = f"{pad}{node.type.capitalize()}: {node.name}"
        self.out.write(line + "\n")


class TextFormatter(Formatter):
    name = "text"

    def format(self, node: Node, out: TextIO) -> None:
        traverse(_TextWriter(out, self.max_depth), node)


# ---------- xml ----------
# caracteres no permitidos en XML 1.0
_XML_ILLEGAL = re.compile("[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]")


def _attr(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return _XML_ILLEGAL.sub("", str(value))


class _XMLBuilder(_TreeWriter):
    def __init__(self, max_depth: Optional[int] = None):
        super().__init__(max_depth)
        self.root: Optional[ET.Element] = None
        self.stack: List[ET.Element] = []

    def open(self, node: Node) -> None:
        attrs = {k: _attr(v) for k, v in node.to_dict().items() if k != "type" and v is not None}
        if self.stack:
            elem = ET.SubElement(self.stack[-1], node.type, attrs)
        else:
            elem = ET.Element(node.type, attrs)
            self.root = elem
        self.stack.append(elem)

    def close(self, node: Node) -> None:
        self.stack.pop()


class XMLFormatter(Formatter):
    name = "xml"

    def format(self, node: Node, out: TextIO) -> None:
        builder = _XMLBuilder(self.max_depth)
        traverse(builder, node)
        if builder.root is None:
            return
        ET.indent(builder.root)
        out.write(ET.tostring(builder.root, encoding="unicode"))
        out.write("\n")


# ---------- json ----------
class _JSONBuilder(_TreeWriter):
    def __init__(self, max_depth: Optional[int] = None):
        super().__init__(max_depth)
        self.root: Optional[Dict[str, Any]] = None
        self.stack: List[Dict[str, Any]] = []

    def open(self, node: Node) -> None:
        data = node.to_dict()
        data["children"] = []
        if self.stack:
            self.stack[-1]["children"].append(data)
        else:
            self.root = data
        self.stack.append(data)

    def close(self, node: Node) -> None:
        self.stack.pop()


class JSONFormatter(Formatter):
    name = "json"

    def __init__(self, max_depth: Optional[int] = None, indent: int = 2):
        super().__init__(max_depth)
        self.indent = indent

    def format(self, node: Node, out: TextIO) -> None:
        builder = _JSONBuilder(self.max_depth)
        traverse(builder, node)
        if builder.root is None:
            return
        json.dump(builder.root, out, indent=self.indent, ensure_ascii=False)
        out.write("\n")


FORMATTERS = {f.name: f for f in (TextFormatter, XMLFormatter, JSONFormatter)}


def get_formatter(name: str, **options) -> Formatter:
    try:
        cls = FORMATTERS[name.lower()]
    except KeyError:
        raise FormatterError(f"Unknown format {name!r}, expected one of: {', '.join(sorted(FORMATTERS))}") from None
    return cls(**options)
