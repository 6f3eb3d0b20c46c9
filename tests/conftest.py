"""Pytest configuration and shared fixtures."""

import copy
import json
from pathlib import Path
from typing import Any, Callable

import pytest

from ui_inventory.models.capture import CaptureRecord, StylePrimitives


def _merge(base: dict, extra: dict) -> dict:
    for key, value in extra.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            _merge(base[key], value)
        else:
            base[key] = value
    return base


BASE_CAPTURE: dict[str, Any] = {
    "id": "cap_1",
    "sessionId": "session_1",
    "url": "https://example.com/dashboard",
    "createdAt": 1_700_000_000_000,
    "element": {
        "tagName": "BUTTON",
        "role": None,
        "textPreview": "Save",
        "outerHTML": '<button class="btn">Save</button>',
        "intent": {"accessibleName": "Save"},
    },
    "styles": {
        "primitives": {
            "color": {"raw": "rgb(255, 255, 255)", "hex8": "#FFFFFFFF"},
            "backgroundColor": {"raw": "rgb(51, 102, 255)", "hex8": "#3366FFFF"},
            "typography": {
                "fontFamily": "Inter, sans-serif",
                "fontSize": "14px",
                "fontWeight": "600",
                "lineHeight": "20px",
            },
            "borderWidth": {"top": "0px", "right": "0px", "bottom": "0px", "left": "0px"},
            "radius": {"topLeft": "6px", "topRight": "6px", "bottomRight": "6px", "bottomLeft": "6px"},
            "shadow": {"boxShadowRaw": "none", "shadowPresence": "none"},
            "spacing": {
                "paddingTop": "8px",
                "paddingRight": "16px",
                "paddingBottom": "8px",
                "paddingLeft": "16px",
            },
        },
    },
    "screenshot": {"screenshotBlobId": "blob_1", "mimeType": "image/webp", "width": 120, "height": 40},
}


# ============================================================================
# Capture Fixtures
# ============================================================================


@pytest.fixture
def make_capture() -> Callable[..., CaptureRecord]:
    """Factory building a CaptureRecord from the base capture plus overrides.

    Nested dicts are merged; any other value replaces the base value.
    """

    def _make(**overrides: Any) -> CaptureRecord:
        data = _merge(copy.deepcopy(BASE_CAPTURE), overrides)
        return CaptureRecord.model_validate(data)

    return _make


@pytest.fixture
def make_primitives() -> Callable[..., StylePrimitives]:
    """Factory building bare StylePrimitives from camelCase keyword arguments."""

    def _make(**fields: Any) -> StylePrimitives:
        return StylePrimitives.model_validate(fields)

    return _make


@pytest.fixture
def button_capture(make_capture) -> CaptureRecord:
    return make_capture()


@pytest.fixture
def mixed_captures(make_capture) -> list[CaptureRecord]:
    """Two captures of the Save button, one of a Docs link and one text input."""
    return [
        make_capture(id="cap_save_1"),
        make_capture(
            id="cap_save_2",
            url="https://example.com/settings",
            createdAt=1_700_000_500_000,
            styles={"evidence": {"method": "cdp", "state": "hover", "capturedAt": 1_700_000_500_000}},
        ),
        make_capture(
            id="cap_docs",
            url="https://example.com/",
            element={
                "tagName": "a",
                "textPreview": "Docs",
                "intent": {"accessibleName": "Docs", "href": "/docs"},
            },
        ),
        make_capture(
            id="cap_email",
            element={
                "tagName": "input",
                "textPreview": "",
                "intent": {"accessibleName": None, "inputType": "email"},
                "attributes": {"name": "email", "placeholder": "you@example.com"},
            },
        ),
    ]


@pytest.fixture
def captures_file(tmp_path: Path) -> Path:
    """A captures export on disk with one override."""
    first = copy.deepcopy(BASE_CAPTURE)
    second = copy.deepcopy(BASE_CAPTURE)
    second["id"] = "cap_2"
    second["url"] = "https://example.com/settings"
    path = tmp_path / "captures.json"
    path.write_text(json.dumps({"captures": [first, second, {"url": "no id here"}], "overrides": {}}))
    return path


@pytest.fixture
def capture_data() -> dict[str, Any]:
    """A fresh copy of the raw camelCase base capture."""
    return copy.deepcopy(BASE_CAPTURE)
