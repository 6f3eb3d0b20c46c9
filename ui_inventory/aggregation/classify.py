"""Capture classification — functional category, type key and a readable name.

Signals are checked in priority order: role, then tag, then input type. The
first matching rule wins.
"""

from __future__ import annotations

import re
from typing import Optional

from ui_inventory.models.capture import CaptureRecord
from ui_inventory.models.viewer import Classification

UNKNOWN_CATEGORY = "Unknown"

BASE_CONFIDENCE = 50
LABEL_MAX_LENGTH = 60

BUTTON_INPUT_TYPES = frozenset({"button", "submit", "reset"})
TEXT_INPUT_TYPES = frozenset({"", "text", "email", "search", "url", "tel", "password", "number"})
DATE_INPUT_TYPES = frozenset({"date", "datetime-local", "month", "time", "week"})
HEADING_TAGS = frozenset({"h1", "h2", "h3", "h4", "h5", "h6"})
LANDMARK_ROLES = frozenset({"main", "banner", "contentinfo", "complementary"})

# Roles that classify on their own: role -> (category, type key)
ROLE_ONLY_RULES = {
    "switch": ("Forms", "switch"),
    "tablist": ("Navigation", "tabs"),
    "tab": ("Navigation", "tab"),
    "menu": ("Navigation", "menu"),
    "menubar": ("Navigation", "menu"),
    "menuitem": ("Navigation", "menuItem"),
    "tree": ("Navigation", "tree"),
    "treeitem": ("Navigation", "treeItem"),
}

_WHITESPACE = re.compile(r"\s+")
_CAPITAL = re.compile(r"([A-Z])")


def title_case(type_key: str) -> str:
    """Type key to words: textInput -> Text Input."""
    words = _CAPITAL.sub(r" \1", type_key).split()
    return " ".join(word[:1].upper() + word[1:].lower() for word in words)


def best_label(capture: CaptureRecord) -> str:
    """First non-blank label candidate, whitespace collapsed and cut to 60 chars."""
    element = capture.element
    attributes = element.attributes
    candidates = (
        element.intent.accessible_name,
        attributes.get("aria-label"),
        attributes.get("placeholder"),
        attributes.get("alt"),
        attributes.get("title"),
        element.text_preview,
    )
    for candidate in candidates:
        if not isinstance(candidate, str):
            continue
        label = _WHITESPACE.sub(" ", candidate).strip()
        if label:
            if len(label) > LABEL_MAX_LENGTH:
                return label[: LABEL_MAX_LENGTH - 3] + "..."
            return label
    return ""


def _is_true(value) -> bool:
    return value is True or value == "true"


def _match_rule(
    tag: str,
    role: str,
    input_type: str,
    href: Optional[str],
    aria_modal,
) -> tuple[str, str, int]:
    """(category, type key, confidence) for the first matching rule."""
    # Actions
    if role == "button" or tag == "button" or (tag == "input" and input_type in BUTTON_INPUT_TYPES):
        return "Actions", "button", BASE_CONFIDENCE + (30 if role == "button" else 15)
    if "button" in tag:
        # Custom elements such as <ui-button>
        return "Actions", "button", 40
    if role == "link" or (tag == "a" and href):
        return "Actions", "link", BASE_CONFIDENCE + (30 if role == "link" else 15)

    # Forms
    if tag == "fieldset":
        return "Forms", "fieldset", BASE_CONFIDENCE + 20
    if role == "textbox" or (tag == "input" and input_type in TEXT_INPUT_TYPES):
        return "Forms", "textInput", BASE_CONFIDENCE + (30 if role == "textbox" else 10)
    if tag == "input" and input_type in DATE_INPUT_TYPES:
        return "Forms", "dateInput", BASE_CONFIDENCE + 10
    if tag == "input" and input_type == "file":
        return "Forms", "fileUpload", BASE_CONFIDENCE + 10
    if tag == "textarea":
        return "Forms", "textarea", BASE_CONFIDENCE + 15
    if role == "combobox" or tag == "select":
        return "Forms", "select", BASE_CONFIDENCE + (30 if role == "combobox" else 15)
    if role == "checkbox" or (tag == "input" and input_type == "checkbox"):
        return "Forms", "checkbox", BASE_CONFIDENCE + (30 if role == "checkbox" else 10)
    if role == "radio" or (tag == "input" and input_type == "radio"):
        return "Forms", "radio", BASE_CONFIDENCE + (30 if role == "radio" else 10)

    # Navigation
    if role == "navigation" or tag == "nav":
        return "Navigation", "navigation", BASE_CONFIDENCE + (30 if role == "navigation" else 15)
    if role in ROLE_ONLY_RULES:
        category, type_key = ROLE_ONLY_RULES[role]
        return category, type_key, BASE_CONFIDENCE + 30

    # Content
    if role == "heading" or tag in HEADING_TAGS:
        return "Content", "heading", BASE_CONFIDENCE + (30 if role == "heading" else 15)
    if tag == "p":
        return "Content", "paragraph", BASE_CONFIDENCE + 15
    if role == "list" or tag in ("ul", "ol"):
        return "Content", "list", BASE_CONFIDENCE + (30 if role == "list" else 15)
    if role == "listitem" or tag == "li":
        return "Content", "listItem", BASE_CONFIDENCE + (30 if role == "listitem" else 15)
    if tag in ("span", "label"):
        return "Content", "text", BASE_CONFIDENCE + 10

    # Media
    if role == "img" or tag == "img":
        return "Media", "image", BASE_CONFIDENCE + (30 if role == "img" else 15)
    if tag == "svg":
        return "Media", "icon", BASE_CONFIDENCE + 15
    if tag == "video":
        return "Media", "video", BASE_CONFIDENCE + 15

    # Feedback
    if role == "alert":
        return "Feedback", "alert", BASE_CONFIDENCE + 30
    if role == "dialog" or _is_true(aria_modal):
        return "Feedback", "modal", BASE_CONFIDENCE + 30
    if role == "tooltip":
        return "Feedback", "tooltip", BASE_CONFIDENCE + 30

    # Layout
    if role == "separator" or tag == "hr":
        return "Layout", "divider", BASE_CONFIDENCE + (30 if role == "separator" else 15)
    if role in LANDMARK_ROLES:
        return "Layout", "landmark", BASE_CONFIDENCE + 30

    return UNKNOWN_CATEGORY, "element", BASE_CONFIDENCE - 20


def classify_capture(capture: CaptureRecord) -> Classification:
    """Classify a capture into a functional category, type key and display name."""
    element = capture.element
    tag = element.tag_name.lower()
    role = (element.role or "").lower()

    # Region and viewport screenshots
    if tag == "region":
        display_name = (capture.display_name or "").strip() or "Region"
        is_viewport = display_name.lower() == "viewport"
        return Classification(
            category="Screenshots",
            type_key="viewport" if is_viewport else "region",
            display_name=display_name,
            confidence=95,
        )

    attributes = element.attributes
    input_type = str(element.intent.input_type or attributes.get("type") or "").lower()
    href = element.intent.href or attributes.get("href")
    aria_modal = attributes.get("aria-modal", attributes.get("ariaModal"))

    category, type_key, confidence = _match_rule(tag, role, input_type, href, aria_modal)
    confidence = max(0, min(100, confidence))

    label = best_label(capture)
    display_name = f'{title_case(type_key)} · "{label}"' if label else title_case(type_key)
    return Classification(
        category=category,
        type_key=type_key,
        display_name=display_name,
        confidence=confidence,
    )
