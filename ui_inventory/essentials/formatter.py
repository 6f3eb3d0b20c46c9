"""Visual essentials — turn style primitives into an ordered table of rows.

Colors are hex-first (hex8, else the raw computed value). Box-model values
collapse with CSS shorthand rules. A property that is missing or empty
produces no row.
"""

from __future__ import annotations

from typing import Callable, Optional

from ui_inventory.models.capture import StylePrimitives
from ui_inventory.models.viewer import Section, VisualEssentials, VisualEssentialsRow

SECTION_ORDER: tuple[Section, ...] = ("Text", "Surface", "Spacing", "State")


def format_four_sided(first: str, second: str, third: str, fourth: str) -> str:
    """Collapse four side (or corner) values the way CSS shorthand does.

    Values are given in canonical order: top right bottom left for sides,
    top-left top-right bottom-right bottom-left for corners.
    """
    if first == second == third == fourth:
        return first
    if first == third and second == fourth:
        return f"{first} {second}"
    return f"{first} {second} {third} {fourth}"


def _color_row(label: str, section: Section, color) -> Optional[VisualEssentialsRow]:
    if color is None or not color.display:
        return None
    return VisualEssentialsRow(section=section, label=label, value=color.display, hex8=color.hex8 or None)


def _text_row(label: str, value) -> Optional[VisualEssentialsRow]:
    if value is None or value == "":
        return None
    return VisualEssentialsRow(section="Text", label=label, value=str(value))


def _text_color(p: StylePrimitives) -> Optional[VisualEssentialsRow]:
    return _color_row("Text color", "Text", p.color)


def _typography(label: str, attr: str) -> Callable[[StylePrimitives], Optional[VisualEssentialsRow]]:
    def build(p: StylePrimitives) -> Optional[VisualEssentialsRow]:
        if p.typography is None:
            return None
        return _text_row(label, getattr(p.typography, attr))
    return build


def _background(p: StylePrimitives) -> Optional[VisualEssentialsRow]:
    return _color_row("Background", "Surface", p.background_color)


def _border_width(p: StylePrimitives) -> Optional[VisualEssentialsRow]:
    if not p.has_border():
        return None
    b = p.border_width
    return VisualEssentialsRow(
        section="Surface",
        label="Border width",
        value=format_four_sided(b.top, b.right, b.bottom, b.left),
    )


def _border_color(p: StylePrimitives) -> Optional[VisualEssentialsRow]:
    # Only alongside a visible border width
    if not p.has_border() or p.border_color is None:
        return None
    top = p.border_color.top
    if top is None or not top.display:
        return None
    sides = [p.border_color.side(name).display for name in ("top", "right", "bottom", "left")]
    return VisualEssentialsRow(
        section="Surface",
        label="Border color",
        value=format_four_sided(*sides),
        hex8=top.hex8 or None,
    )


def _radius(p: StylePrimitives) -> Optional[VisualEssentialsRow]:
    if p.radius is None:
        return None
    r = p.radius
    return VisualEssentialsRow(
        section="Surface",
        label="Radius",
        value=format_four_sided(r.top_left, r.top_right, r.bottom_right, r.bottom_left),
    )


def _shadow(p: StylePrimitives) -> Optional[VisualEssentialsRow]:
    if p.shadow is None or not p.shadow.box_shadow_raw:
        return None
    return VisualEssentialsRow(section="Surface", label="Shadow", value=p.shadow.box_shadow_raw)


def _padding(p: StylePrimitives) -> Optional[VisualEssentialsRow]:
    if p.spacing is None:
        return None
    s = p.spacing
    return VisualEssentialsRow(
        section="Spacing",
        label="Padding",
        value=format_four_sided(s.padding_top, s.padding_right, s.padding_bottom, s.padding_left),
    )


def _margin(p: StylePrimitives) -> Optional[VisualEssentialsRow]:
    if p.margin is None:
        return None
    m = p.margin
    return VisualEssentialsRow(
        section="Spacing",
        label="Margin",
        value=format_four_sided(m.margin_top, m.margin_right, m.margin_bottom, m.margin_left),
    )


def _gap(p: StylePrimitives) -> Optional[VisualEssentialsRow]:
    if p.gap is None:
        return None
    return VisualEssentialsRow(section="Spacing", label="Gap", value=f"{p.gap.row_gap} / {p.gap.column_gap}")


# Row order is part of the output contract.
ROW_BUILDERS: tuple[Callable[[StylePrimitives], Optional[VisualEssentialsRow]], ...] = (
    _text_color,
    _typography("Font family", "font_family"),
    _typography("Font size", "font_size"),
    _typography("Font weight", "font_weight"),
    _typography("Line height", "line_height"),
    _background,
    _border_width,
    _border_color,
    _radius,
    _shadow,
    _padding,
    _margin,
    _gap,
)


def derive_visual_essentials(primitives: Optional[StylePrimitives]) -> VisualEssentials:
    """Rows for one capture's primitives, in display order."""
    if primitives is None:
        return VisualEssentials()
    rows = [row for row in (build(primitives) for build in ROW_BUILDERS) if row is not None]
    return VisualEssentials(rows=tuple(rows))


def group_rows_by_section(
    rows: tuple[VisualEssentialsRow, ...] | list[VisualEssentialsRow],
) -> list[tuple[Section, list[VisualEssentialsRow]]]:
    """Non-empty sections in Text, Surface, Spacing, State order."""
    grouped = []
    for section in SECTION_ORDER:
        section_rows = [row for row in rows if row.section == section]
        if section_rows:
            grouped.append((section, section_rows))
    return grouped
