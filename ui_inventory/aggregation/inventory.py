"""Capture aggregation — project raw captures into component and style views.

Every function here is a pure query over the full capture list supplied by
the caller. Unknown ids and empty inputs give empty results; nothing raises.
"""

from __future__ import annotations

import logging
from typing import Iterable, Mapping, Optional, Sequence

from ui_inventory.aggregation.classify import UNKNOWN_CATEGORY, classify_capture
from ui_inventory.catalog.styles import extract_style_observations, find_style
from ui_inventory.identity.signature import derive_component_key
from ui_inventory.models.capture import CaptureRecord, ElementCore
from ui_inventory.models.viewer import (
    Classification,
    ComponentOverride,
    ViewerComponent,
    ViewerComponentCapture,
    ViewerStyle,
    ViewerStyleLocation,
    ViewerStyleRelatedComponent,
)
from ui_inventory.url_utils import source_label_from_url

logger = logging.getLogger(__name__)

DEFAULT_STATUS = "Unknown"
FALLBACK_CATEGORY = "Layout"


def infer_category(element: ElementCore) -> str:
    """Fixed category taxonomy, "Layout" as the fallback."""
    tag = element.tag_name.lower()
    role = (element.role or "").lower()

    if tag == "region":
        return "Screenshots"
    if tag in ("button", "a") or role in ("button", "link"):
        return "Actions"
    if tag in ("input", "select", "textarea") or role in ("textbox", "combobox", "checkbox", "radio"):
        return "Forms"
    if tag == "nav" or role == "navigation":
        return "Navigation"
    if role in ("alert", "status"):
        return "Feedback"
    if tag in ("img", "video", "svg") or role == "img":
        return "Media"
    return FALLBACK_CATEGORY


def default_component_name(element: ElementCore, classification: Optional[Classification] = None) -> str:
    if element.intent.accessible_name:
        return element.intent.accessible_name
    if element.text_preview:
        return element.text_preview
    if classification is not None:
        return classification.display_name
    tag = element.tag_name.lower() or "element"
    return f"{tag} ({element.role})" if element.role else tag


def default_component_category(element: ElementCore, classification: Classification) -> str:
    """Fixed taxonomy, refined by the classifier where it falls back to Layout."""
    category = infer_category(element)
    if category == FALLBACK_CATEGORY and classification.category != UNKNOWN_CATEGORY:
        return classification.category
    return category


def default_component_type(element: ElementCore, classification: Classification) -> str:
    if element.role:
        return element.role
    if classification.type_key != "element":
        return classification.type_key
    return element.tag_name.lower()


def _present(value: Optional[str]) -> Optional[str]:
    # Blank override fields do not replace derived values
    return value if value and value.strip() else None


def _group_by_key(captures: Iterable[CaptureRecord]) -> dict[str, list[CaptureRecord]]:
    groups: dict[str, list[CaptureRecord]] = {}
    for capture in captures:
        groups.setdefault(derive_component_key(capture), []).append(capture)
    return groups


def derive_component_inventory(
    captures: Sequence[CaptureRecord],
    overrides: Optional[Mapping[str, ComponentOverride]] = None,
) -> list[ViewerComponent]:
    """One component per distinct component key, most captured first.

    Overrides replace derived defaults field by field when present; they
    never change which captures belong to a component.
    """
    overrides = overrides or {}
    components = []
    for key, group in _group_by_key(captures).items():
        element = group[0].element
        classification = classify_capture(group[0])
        override = overrides.get(key) or ComponentOverride()
        components.append(
            ViewerComponent(
                id=key,
                name=_present(override.display_name) or default_component_name(element, classification),
                category=_present(override.category_override) or default_component_category(element, classification),
                type=_present(override.type_override) or default_component_type(element, classification),
                status=_present(override.status_override) or DEFAULT_STATUS,
                source=source_label_from_url(group[0].url),
                captures_count=len(group),
            )
        )

    components.sort(key=lambda c: (-c.captures_count, c.name, c.id))
    logger.debug("Derived %d components from %d captures", len(components), len(captures))
    return components


def derive_component_captures(
    component_key: str, captures: Iterable[CaptureRecord]
) -> list[ViewerComponentCapture]:
    """Captures belonging to one component, in input order, duplicates kept."""
    return [
        ViewerComponentCapture(
            id=capture.id,
            url=capture.url,
            screenshot_blob_id=capture.screenshot_blob_id,
            html_structure=capture.element.outer_html,
            created_at=capture.created_at,
        )
        for capture in captures
        if derive_component_key(capture) == component_key
    ]


def unique_by_url(component_captures: Iterable[ViewerComponentCapture]) -> list[ViewerComponentCapture]:
    """Keep the first capture for each URL (the Source list)."""
    seen: set[str] = set()
    unique = []
    for capture in component_captures:
        if capture.url in seen:
            continue
        seen.add(capture.url)
        unique.append(capture)
    return unique


def pick_representative_capture(captures: Sequence[CaptureRecord]) -> Optional[CaptureRecord]:
    """Most recent capture; the earliest in input order wins a tie."""
    best: Optional[CaptureRecord] = None
    for capture in captures:
        if best is None or capture.created_at > best.created_at:
            best = capture
    return best


def captures_for_component(component_key: str, captures: Iterable[CaptureRecord]) -> list[CaptureRecord]:
    return [c for c in captures if derive_component_key(c) == component_key]


def _style_uses(style: ViewerStyle, capture: CaptureRecord) -> int:
    triple = (style.token, style.value, style.kind)
    return sum(1 for obs in extract_style_observations(capture) if obs.triple == triple)


def derive_style_locations(
    style_id: str,
    captures: Iterable[CaptureRecord],
    styles: Iterable[ViewerStyle],
) -> list[ViewerStyleLocation]:
    """One location per capture using the style, with per-capture use counts."""
    style = find_style(style_id, styles)
    if style is None:
        return []

    locations = []
    for capture in captures:
        uses = _style_uses(style, capture)
        if uses == 0:
            continue
        locations.append(
            ViewerStyleLocation(
                id=capture.id,
                url=capture.url,
                source_label=source_label_from_url(capture.url),
                uses=uses,
                screenshot_blob_id=capture.screenshot_blob_id,
            )
        )
    return locations


def derive_related_components_for_style(
    style_id: str,
    captures: Iterable[CaptureRecord],
    components: Iterable[ViewerComponent],
    styles: Iterable[ViewerStyle],
) -> list[ViewerStyleRelatedComponent]:
    """Distinct components whose captures use the style, first-seen order."""
    style = find_style(style_id, styles)
    if style is None:
        return []

    keys: list[str] = []
    for capture in captures:
        if _style_uses(style, capture) == 0:
            continue
        key = derive_component_key(capture)
        if key not in keys:
            keys.append(key)

    by_id = {component.id: component for component in components}
    related = []
    for key in keys:
        component = by_id.get(key)
        if component is None:
            logger.debug("Style %s used by component %s outside the component list", style_id, key)
            continue
        related.append(
            ViewerStyleRelatedComponent(
                component_id=component.id,
                name=component.name,
                category=component.category,
                type=component.type,
            )
        )
    return related
