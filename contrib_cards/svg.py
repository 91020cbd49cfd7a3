"""
A small SVG document builder.

Cards are assembled as an ordered list of typed drawing primitives and only
turned into markup at the end by `Document.render()`, which feeds them through
an embedded Jinja2 template. All attribute values and text nodes go through
Jinja2 autoescaping, so repository names and other external strings can be
placed into a card as-is.

Extra presentation attributes (fill, stroke, font-size, ...) are given through
each primitive's `attrs` mapping; underscores in keys become hyphens, so
`stroke_width=1` and `"stroke-width": 1` are equivalent.
"""
from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, Iterable, List, Optional, Tuple

from jinja2 import Template

Attributes = List[Tuple[str, str]]


def format_value(v: Any) -> str:
    """Format a number for an attribute: integral floats lose their '.0'."""
    if isinstance(v, float):
        return ("%.2f" % v).rstrip("0").rstrip(".")
    return str(v)


def _attributes(el: Any, names: Iterable[str]) -> Attributes:
    out = []
    for name in names:
        v = getattr(el, name)
        if v is not None:
            out.append((name.replace("_", "-"), format_value(v)))
    for key, v in el.attrs.items():
        if v is not None:
            out.append((key.replace("_", "-"), format_value(v)))
    return out


# ---------------------------
# Primitives
# ---------------------------
@dataclass
class Rect:
    x: Optional[float] = None
    y: Optional[float] = None
    width: float = 0
    height: float = 0
    rx: Optional[float] = None
    ry: Optional[float] = None
    attrs: Dict[str, Any] = field(default_factory=dict)
    tag: ClassVar[str] = "rect"

    def attributes(self) -> Attributes:
        return _attributes(self, ("x", "y", "width", "height", "rx", "ry"))


@dataclass
class Text:
    x: float
    y: float
    text: str
    attrs: Dict[str, Any] = field(default_factory=dict)
    tag: ClassVar[str] = "text"

    def attributes(self) -> Attributes:
        return _attributes(self, ("x", "y"))


@dataclass
class Line:
    x1: float
    y1: float
    x2: float
    y2: float
    attrs: Dict[str, Any] = field(default_factory=dict)
    tag: ClassVar[str] = "line"

    def attributes(self) -> Attributes:
        return _attributes(self, ("x1", "y1", "x2", "y2"))


@dataclass
class Circle:
    cx: float
    cy: float
    r: float
    attrs: Dict[str, Any] = field(default_factory=dict)
    tag: ClassVar[str] = "circle"

    def attributes(self) -> Attributes:
        return _attributes(self, ("cx", "cy", "r"))


@dataclass
class Ellipse:
    cx: float
    cy: float
    rx: float
    ry: float
    attrs: Dict[str, Any] = field(default_factory=dict)
    tag: ClassVar[str] = "ellipse"

    def attributes(self) -> Attributes:
        return _attributes(self, ("cx", "cy", "rx", "ry"))


@dataclass
class Path:
    d: str
    attrs: Dict[str, Any] = field(default_factory=dict)
    tag: ClassVar[str] = "path"

    def attributes(self) -> Attributes:
        return _attributes(self, ("d",))


@dataclass
class Group:
    children: List[Any] = field(default_factory=list)
    attrs: Dict[str, Any] = field(default_factory=dict)
    tag: ClassVar[str] = "g"

    def add(self, el: Any) -> Any:
        self.children.append(el)
        return el

    def attributes(self) -> Attributes:
        return _attributes(self, ())


@dataclass
class Icon:
    """A nested <svg> viewport, used to scale 16x16 octicon paths."""
    width: float
    height: float
    view_box: str
    children: List[Any] = field(default_factory=list)
    attrs: Dict[str, Any] = field(default_factory=dict)
    tag: ClassVar[str] = "svg"

    def attributes(self) -> Attributes:
        out = [("width", format_value(self.width)), ("height", format_value(self.height)), ("viewBox", self.view_box)]
        return out + _attributes(self, ())


@dataclass
class ClipPath:
    id: str
    children: List[Any] = field(default_factory=list)
    attrs: Dict[str, Any] = field(default_factory=dict)
    tag: ClassVar[str] = "clipPath"

    def attributes(self) -> Attributes:
        return _attributes(self, ("id",))


@dataclass
class Mask:
    id: str
    children: List[Any] = field(default_factory=list)
    attrs: Dict[str, Any] = field(default_factory=dict)
    tag: ClassVar[str] = "mask"

    def attributes(self) -> Attributes:
        return _attributes(self, ("id",))


# ---------------------------
# Jinja2 template (embedded)
# ---------------------------
DOCUMENT_TEMPLATE = """\
{% macro element(el, depth) %}{{ "  " * depth }}<{{ el.tag }}{% for name, value in el.attributes() %} {{ name }}="{{ value }}"{% endfor %}{% if el.children %}>
{% for child in el.children %}{{ element(child, depth + 1) }}{% endfor %}{{ "  " * depth }}</{{ el.tag }}>
{% elif el.text is string %}>{{ el.text }}</{{ el.tag }}>
{% else %}/>
{% endif %}{% endmacro -%}
<svg xmlns="http://www.w3.org/2000/svg"{% for name, value in doc.attributes() %} {{ name }}="{{ value }}"{% endfor %}>
{% if doc.style %}  <style>{{ doc.style }}</style>
{% endif %}{% if doc.defs %}  <defs>
{% for el in doc.defs %}{{ element(el, 2) }}{% endfor %}  </defs>
{% endif %}{% for el in doc.elements %}{{ element(el, 1) }}{% endfor %}</svg>
"""


def render_template(template_str: str, ctx: dict) -> str:
    tpl = Template(template_str, autoescape=True)
    return tpl.render(**ctx)


class Document:
    """
    An SVG document: root attributes, an optional CSS block, definitions
    (clip paths, masks) and the drawing primitives in paint order.
    """

    def __init__(self, width: float, height: float, attrs: Optional[Dict[str, Any]] = None):
        self.width = width
        self.height = height
        self.attrs = dict(attrs or {})
        self.style: Optional[str] = None
        self.defs: List[Any] = []
        self.elements: List[Any] = []

    def add(self, el: Any) -> Any:
        self.elements.append(el)
        return el

    def define(self, el: Any) -> Any:
        self.defs.append(el)
        return el

    def attributes(self) -> Attributes:
        out = [
            ("width", format_value(self.width)),
            ("height", format_value(self.height)),
            ("viewBox", f"0 0 {format_value(self.width)} {format_value(self.height)}"),
        ]
        return out + _attributes(self, ())

    def walk(self) -> Iterable[Any]:
        """Yield every primitive (definitions first), depth first."""
        stack = list(reversed(self.defs + self.elements))
        while stack:
            el = stack.pop()
            yield el
            stack.extend(reversed(getattr(el, "children", [])))

    def render(self) -> str:
        return render_template(DOCUMENT_TEMPLATE, {"doc": self})
