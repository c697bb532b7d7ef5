"""
Module: canvas

Purpose: Retained drawing surface that chart views render into.

Key Components:
- Element: one drawn shape with its SVG attributes and hover overrides
- Tooltip: the single floating tooltip owned by a canvas
- Canvas: ordered element tree with clear/draw/emphasis and SVG export

Architecture Notes:
- The canvas only holds what was drawn; geometry is recomputed elsewhere
- Emphasis is an overlay on an element's attributes, so clearing it
  restores the drawn state exactly
- to_svg() renders through a Jinja2 inline template
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from jinja2 import Environment, select_autoescape

from statcharts.charts.primitives import ChartGeometry, Primitive, ShapeKind
from statcharts.config import Theme

logger = logging.getLogger(__name__)

TOOLTIP_OFFSET = (10.0, 10.0)


# =============================================================================
# ELEMENTS
# =============================================================================


@dataclass
class Element:
    """A drawn shape as it sits on the canvas."""

    id: str
    tag: str
    group: str
    attrs: dict[str, Any]
    text: str = ""
    emphasis: dict[str, Any] = field(default_factory=dict)
    emphasis_ms: int = 0

    @property
    def effective_attrs(self) -> dict[str, Any]:
        """Drawn attributes with any hover overrides applied."""
        return {**self.attrs, **self.emphasis}

    @property
    def is_emphasized(self) -> bool:
        return bool(self.emphasis)


def _geometry_attrs(primitive: Primitive) -> dict[str, Any]:
    kind = primitive.kind
    if kind is ShapeKind.RECT:
        return {"x": primitive.x, "y": primitive.y, "width": primitive.width, "height": primitive.height}
    if kind is ShapeKind.CIRCLE:
        return {"cx": primitive.x, "cy": primitive.y, "r": primitive.radius}
    if kind is ShapeKind.LINE:
        return {"x1": primitive.x, "y1": primitive.y, "x2": primitive.x2, "y2": primitive.y2}
    if kind is ShapeKind.PATH:
        return {"d": primitive.path}
    return {"x": primitive.x, "y": primitive.y}


def element_from_primitive(primitive: Primitive) -> Element:
    """Translate a primitive into SVG attributes."""
    attrs = _geometry_attrs(primitive)
    if primitive.fill is not None:
        attrs["fill"] = primitive.fill
    if primitive.stroke is not None:
        attrs["stroke"] = primitive.stroke
    attrs.update(primitive.style)
    return Element(
        id=primitive.id,
        tag=primitive.kind.value,
        group=primitive.group,
        attrs=attrs,
        text=primitive.text,
    )


@dataclass
class Tooltip:
    """Floating tooltip; at most one per canvas."""

    visible: bool = False
    x: float = 0.0
    y: float = 0.0
    lines: tuple[str, ...] = ()

    def show(self, lines: tuple[str, ...], x: float, y: float) -> None:
        self.lines = lines
        self.visible = True
        self.move(x, y)

    def move(self, x: float, y: float) -> None:
        """Place the tooltip just below and right of the pointer."""
        self.x = x + TOOLTIP_OFFSET[0]
        self.y = y + TOOLTIP_OFFSET[1]

    def hide(self) -> None:
        self.visible = False
        self.lines = ()


# =============================================================================
# CANVAS
# =============================================================================


class Canvas:
    """Retained element tree owned by one chart view.

    Attributes:
        width: Width of the drawing surface in pixels
        height: Height of the drawing surface in pixels
        theme: Colours and fonts used for the document and tooltip
        tooltip: The canvas's single tooltip
    """

    def __init__(self, width: float = 0.0, height: float = 0.0, *, theme: Theme | None = None) -> None:
        self.width = width
        self.height = height
        self.theme = theme or Theme()
        self.tooltip = Tooltip()
        self._elements: list[Element] = []
        self._by_id: dict[str, Element] = {}
        self._attached = True

    @property
    def attached(self) -> bool:
        """False once the canvas has been disposed."""
        return self._attached

    @property
    def elements(self) -> list[Element]:
        """Drawn elements in draw order."""
        return list(self._elements)

    def __len__(self) -> int:
        return len(self._elements)

    def get(self, element_id: str) -> Element | None:
        return self._by_id.get(element_id)

    def clear(self) -> None:
        """Remove every element and hide the tooltip."""
        self._elements.clear()
        self._by_id.clear()
        self.tooltip.hide()

    def draw(self, geometry: ChartGeometry) -> None:
        """Append the primitives of a geometry, in order."""
        self.width, self.height = geometry.width, geometry.height
        for primitive in geometry.primitives:
            element = element_from_primitive(primitive)
            self._elements.append(element)
            self._by_id[element.id] = element
        logger.debug(f"Drew {len(geometry.primitives)} {geometry.chart_type.value} elements")

    def set_emphasis(self, element_id: str, overrides: dict[str, Any], duration_ms: int = 0) -> None:
        """Overlay hover attributes on an element."""
        element = self._by_id.get(element_id)
        if element is None:
            logger.debug(f"No element {element_id!r} to emphasize")
            return
        element.emphasis = dict(overrides)
        element.emphasis_ms = duration_ms

    def clear_emphasis(self, element_id: str, duration_ms: int = 0) -> None:
        """Drop hover attributes, restoring the drawn state."""
        element = self._by_id.get(element_id)
        if element is None:
            return
        element.emphasis = {}
        element.emphasis_ms = duration_ms

    def dispose(self) -> None:
        """Detach the canvas; later rebuilds are skipped."""
        self.clear()
        self._attached = False

    # -------------------------------------------------------------------------
    # SVG export
    # -------------------------------------------------------------------------

    def to_svg(self) -> str:
        """Serialize the current elements (and tooltip) as an SVG document."""
        env = get_template_env()
        template = env.from_string(_get_svg_template())
        return template.render(
            width=self.width,
            height=self.height,
            theme=self.theme,
            elements=self._elements,
            tooltip=self.tooltip,
        )

    def save_svg(self, output_path: Path | str) -> None:
        """Write to_svg() to a file, creating parent directories."""
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "w", encoding="utf-8") as f:
            f.write(self.to_svg())
        logger.info(f"Saved SVG to {output_path}")


# =============================================================================
# TEMPLATES
# =============================================================================


def _format_attr(value: Any) -> str:
    """SVG attribute text; floats keep up to three decimals."""
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, float):
        text = f"{value:.3f}".rstrip("0").rstrip(".")
        return "0" if text == "-0" else text
    return str(value)


def get_template_env() -> Environment:
    """Get Jinja2 environment for SVG templates.

    Returns:
        Jinja2 Environment with the svg_attr filter registered
    """
    env = Environment(
        autoescape=select_autoescape(["html", "xml"], default_for_string=True),
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["svg_attr"] = _format_attr
    return env


def _get_svg_template() -> str:
    """Get the SVG document template."""
    return """<svg xmlns="http://www.w3.org/2000/svg" width="{{ width|svg_attr }}" height="{{ height|svg_attr }}" viewBox="0 0 {{ width|svg_attr }} {{ height|svg_attr }}" font-family="{{ theme.font_family }}">
{% if theme.background != "none" %}
  <rect width="100%" height="100%" fill="{{ theme.background }}"/>
{% endif %}
{% for el in elements %}
  <{{ el.tag }} id="{{ el.id }}"{% if el.group %} class="{{ el.group }}"{% endif %}{% for name, value in el.effective_attrs.items() %} {{ name }}="{{ value|svg_attr }}"{% endfor %}{% if el.tag == "text" %}>{{ el.text }}</text>{% else %}/>{% endif %}

{% endfor %}
{% if tooltip.visible %}
  <g class="tooltip" transform="translate({{ tooltip.x|svg_attr }},{{ tooltip.y|svg_attr }})">
    <rect width="160" height="{{ 8 + 16 * tooltip.lines|length }}" rx="4" fill="{{ theme.tooltip_background }}" stroke="{{ theme.tooltip_border }}"/>
{% for line in tooltip.lines %}
    <text x="8" y="{{ 16 * loop.index }}" fill="{{ theme.tooltip_text_color }}" font-size="{{ theme.font_size }}px">{{ line }}</text>
{% endfor %}
  </g>
{% endif %}
</svg>
"""
