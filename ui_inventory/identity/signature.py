"""Component identity — derive a stable component key from a capture.

The signature only uses structural attributes (tag, role, accessible name and
form context). Timestamps, screenshots and style values are left out so that
every interaction state of one on-page element (default, hover, focus ...)
lands under the same key.
"""

from __future__ import annotations

import hashlib

from ui_inventory.models.capture import CaptureRecord

KEY_PREFIX = "comp_"
KEY_DIGEST_LENGTH = 16

FORM_TAGS = frozenset({"input", "textarea", "select"})

IMPLICIT_ROLES = {
    "button": "button",
    "a": "link",
    "input": "textbox",
    "select": "combobox",
    "textarea": "textbox",
    "img": "img",
    "nav": "navigation",
    "main": "main",
    "header": "banner",
    "footer": "contentinfo",
    "aside": "complementary",
    "form": "form",
    "article": "article",
    "section": "region",
    "h1": "heading",
    "h2": "heading",
    "h3": "heading",
    "h4": "heading",
    "h5": "heading",
    "h6": "heading",
}


def infer_role_from_tag(tag_name: str) -> str:
    """Implicit ARIA role for a tag, "generic" when it has none."""
    return IMPLICIT_ROLES.get(tag_name.lower(), "generic")


def _form_context(capture: CaptureRecord) -> str:
    # id > name > placeholder
    element = capture.element
    for candidate in (
        element.id,
        element.attributes.get("name"),
        element.attributes.get("placeholder"),
    ):
        if candidate:
            return str(candidate)
    return ""


def build_component_signature(capture: CaptureRecord) -> str:
    """Build the deterministic signature string used for grouping."""
    element = capture.element
    tag_name = element.tag_name.lower()

    # Region/viewport screenshots are never grouped
    if tag_name == "region":
        return f"region|{capture.id}"

    role = element.role or infer_role_from_tag(tag_name)
    accessible_name = element.intent.accessible_name or element.text_preview or ""

    parts = [tag_name, role, accessible_name]
    if tag_name in FORM_TAGS:
        context = _form_context(capture)
        if context:
            parts.append(context)
    return "|".join(parts)


def hash_signature(signature: str) -> str:
    """Hash a signature into a fixed-format component key ("comp_" + 16 hex)."""
    digest = hashlib.sha256(signature.encode("utf-8")).hexdigest()
    return f"{KEY_PREFIX}{digest[:KEY_DIGEST_LENGTH]}"


def derive_component_key(capture: CaptureRecord) -> str:
    """Signature + hash in one step."""
    return hash_signature(build_component_signature(capture))
