"""Style catalog — fold per-capture style observations into deduplicated styles.

A style is identified structurally by its (token, value, kind) triple: two
observations with equal triples are the same style no matter which capture or
component they came from. The usage count of a style is the number of
(capture, property) pairs that produced its triple.
"""

from __future__ import annotations

import hashlib
import logging
import re
from collections import Counter
from dataclasses import dataclass
from typing import Callable, Iterable, Optional

from ui_inventory.models.capture import CaptureRecord, ColorPrimitive, StylePrimitives
from ui_inventory.models.viewer import NO_TOKEN, ViewerStyle
from ui_inventory.url_utils import source_label_from_url

logger = logging.getLogger(__name__)

DESIGN_SYSTEM_SOURCE = "Design System"

_VAR_TOKEN = re.compile(r"var\(\s*(--[A-Za-z0-9_-]+)")


@dataclass(frozen=True)
class StyleObservation:
    """One CSS property value seen on one capture."""

    capture_id: str
    url: str
    property_name: str
    kind: str
    value: str
    token: str = NO_TOKEN

    @property
    def triple(self) -> tuple[str, str, str]:
        return (self.token, self.value, self.kind)


def _color(color: Optional[ColorPrimitive]) -> str:
    return color.display if color else ""


def _border_color(side: str) -> Callable[[StylePrimitives], str]:
    def getter(p: StylePrimitives) -> str:
        if p.border_color is None:
            return ""
        return _color(p.border_color.side(side))
    return getter


def _attr(group: str, name: str) -> Callable[[StylePrimitives], str]:
    def getter(p: StylePrimitives) -> str:
        holder = getattr(p, group)
        if holder is None:
            return ""
        value = getattr(holder, name)
        return "" if value is None else str(value)
    return getter


def _box_shadow(p: StylePrimitives) -> str:
    raw = p.shadow.box_shadow_raw if p.shadow else ""
    return "" if raw.strip() == "none" else raw


# (property, kind, getter, only when a border is visible)
STYLE_PROPERTIES: tuple[tuple[str, str, Callable[[StylePrimitives], str], bool], ...] = (
    ("color", "color", lambda p: _color(p.color), False),
    ("backgroundColor", "color", lambda p: _color(p.background_color), False),
    ("borderTopColor", "color", _border_color("top"), True),
    ("borderRightColor", "color", _border_color("right"), True),
    ("borderBottomColor", "color", _border_color("bottom"), True),
    ("borderLeftColor", "color", _border_color("left"), True),
    ("fontFamily", "typography", _attr("typography", "font_family"), False),
    ("fontSize", "typography", _attr("typography", "font_size"), False),
    ("fontWeight", "typography", _attr("typography", "font_weight"), False),
    ("lineHeight", "typography", _attr("typography", "line_height"), False),
    ("paddingTop", "spacing", _attr("spacing", "padding_top"), False),
    ("paddingRight", "spacing", _attr("spacing", "padding_right"), False),
    ("paddingBottom", "spacing", _attr("spacing", "padding_bottom"), False),
    ("paddingLeft", "spacing", _attr("spacing", "padding_left"), False),
    ("marginTop", "spacing", _attr("margin", "margin_top"), False),
    ("marginRight", "spacing", _attr("margin", "margin_right"), False),
    ("marginBottom", "spacing", _attr("margin", "margin_bottom"), False),
    ("marginLeft", "spacing", _attr("margin", "margin_left"), False),
    ("rowGap", "spacing", _attr("gap", "row_gap"), False),
    ("columnGap", "spacing", _attr("gap", "column_gap"), False),
    ("borderTopWidth", "border", _attr("border_width", "top"), True),
    ("borderRightWidth", "border", _attr("border_width", "right"), True),
    ("borderBottomWidth", "border", _attr("border_width", "bottom"), True),
    ("borderLeftWidth", "border", _attr("border_width", "left"), True),
    ("boxShadow", "shadow", _box_shadow, False),
    ("radiusTopLeft", "border", _attr("radius", "top_left"), False),
    ("radiusTopRight", "border", _attr("radius", "top_right"), False),
    ("radiusBottomRight", "border", _attr("radius", "bottom_right"), False),
    ("radiusBottomLeft", "border", _attr("radius", "bottom_left"), False),
)

STYLE_KINDS = {prop: kind for prop, kind, _, _ in STYLE_PROPERTIES}


def infer_style_kind(property_name: str) -> str:
    """Style kind for a property key, "unknown" for keys outside the catalog."""
    if property_name in STYLE_KINDS:
        return STYLE_KINDS[property_name]
    if property_name == "borderColor":
        return "color"
    return "unknown"


def _token_keys(property_name: str) -> tuple[str, ...]:
    # Per-side border colors share the single "borderColor" evidence key
    if property_name.startswith("border") and property_name.endswith("Color"):
        return (property_name, "borderColor")
    return (property_name,)


def tokens_in_value(value: Optional[str]) -> list[str]:
    """All var(--token) references in a CSS value, in order, without repeats."""
    seen: list[str] = []
    for token in _VAR_TOKEN.findall(value or ""):
        if token not in seen:
            seen.append(token)
    return seen


def extract_token(property_name: str, capture: CaptureRecord) -> str:
    """Design token a property resolves from, or "—" when none is known.

    Token usage evidence wins; otherwise the first var() in the property's
    authored source or authored value is used.
    """
    keys = _token_keys(property_name)
    styles = capture.styles

    if styles.tokens is not None:
        for key in keys:
            for usage in styles.tokens.used:
                if usage.property == key and usage.token:
                    return usage.token

    for key in keys:
        candidates = [styles.primitives.sources.get(key)]
        if styles.author is not None and key in styles.author.properties:
            candidates.append(styles.author.properties[key].authored_value)
        for candidate in candidates:
            found = tokens_in_value(candidate)
            if found:
                return found[0]
    return NO_TOKEN


def extract_style_observations(capture: CaptureRecord) -> list[StyleObservation]:
    """Every individually meaningful style property of one capture."""
    primitives = capture.primitives
    border_visible = primitives.has_border()
    observations = []
    for prop, kind, getter, needs_border in STYLE_PROPERTIES:
        if needs_border and not border_visible:
            continue
        value = getter(primitives).strip()
        if not value:
            continue
        observations.append(
            StyleObservation(
                capture_id=capture.id,
                url=capture.url,
                property_name=prop,
                kind=kind,
                value=value,
                token=extract_token(prop, capture),
            )
        )
    return observations


def generate_style_id(token: str, value: str, kind: str) -> str:
    """Stable style id from the structural triple."""
    digest = hashlib.sha256(f"{kind}|{token}|{value}".encode("utf-8")).hexdigest()
    return f"style_{digest[:12]}"


def infer_style_source(observation: StyleObservation) -> str:
    if observation.token != NO_TOKEN:
        return DESIGN_SYSTEM_SOURCE
    return source_label_from_url(observation.url)


def derive_style_inventory(captures: Iterable[CaptureRecord]) -> list[ViewerStyle]:
    """Deduplicated style list with usage counts, most used first."""
    observations = [obs for capture in captures for obs in extract_style_observations(capture)]
    if not observations:
        return []

    counts = Counter(obs.triple for obs in observations)
    first_seen: dict[tuple[str, str, str], StyleObservation] = {}
    for obs in observations:
        first_seen.setdefault(obs.triple, obs)

    styles = [
        ViewerStyle(
            id=generate_style_id(*triple),
            token=triple[0],
            value=triple[1],
            kind=triple[2],
            usage_count=count,
            source=infer_style_source(first_seen[triple]),
        )
        for triple, count in counts.items()
    ]
    styles.sort(key=lambda s: (-s.usage_count, s.kind, s.value, s.token))
    logger.debug("Derived %d styles from %d observations", len(styles), len(observations))
    return styles


def find_style(style_id: str, styles: Iterable[ViewerStyle]) -> Optional[ViewerStyle]:
    for style in styles:
        if style.id == style_id:
            return style
    return None
