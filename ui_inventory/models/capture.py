"""Capture record data structures produced by the extension's capture pipeline.

Records arrive as camelCase JSON; every model accepts both the camelCase
aliases and the snake_case field names.
"""

from __future__ import annotations

import re
from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from ui_inventory.url_utils import MISSING_URL, normalize_url

BORDER_SIDES = ("top", "right", "bottom", "left")

_LEADING_NUMBER = re.compile(r"^\s*(-?\d+(?:\.\d+)?|-?\.\d+)")


class CaptureModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Rgba(CaptureModel):
    r: int = 0
    g: int = 0
    b: int = 0
    a: float = 1.0


class ColorPrimitive(CaptureModel):
    raw: str = ""
    rgba: Optional[Rgba] = None
    hex8: Optional[str] = None  # canonical #RRGGBBAA, best-effort

    @property
    def display(self) -> str:
        """Hex-first display value; empty when neither form is known."""
        return self.hex8 or self.raw or ""


class TypographyPrimitive(CaptureModel):
    font_family: str = ""
    font_size: str = ""
    font_weight: Union[str, int, float, None] = ""
    line_height: str = ""

    @field_validator("font_weight")
    @classmethod
    def integral_weight(cls, v: Any) -> Any:
        # 600.0 -> 600 so the weight prints as "600"
        if isinstance(v, float) and v.is_integer():
            return int(v)
        return v


class BorderWidthPrimitive(CaptureModel):
    top: str = "0px"
    right: str = "0px"
    bottom: str = "0px"
    left: str = "0px"


class BorderColorPrimitive(CaptureModel):
    """Per-side border colors.

    Both the legacy single-color shape (``{"raw": ..., "hex8": ...}``) and the
    per-side shape are folded into this one representation at validation
    time. ``form`` remembers which shape was received.
    """

    form: Literal["single", "per_side"] = "per_side"
    top: Optional[ColorPrimitive] = None
    right: Optional[ColorPrimitive] = None
    bottom: Optional[ColorPrimitive] = None
    left: Optional[ColorPrimitive] = None

    @model_validator(mode="before")
    @classmethod
    def normalize_shape(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        if any(side in data for side in BORDER_SIDES):
            return {"form": "per_side", **data}
        if "raw" in data or "hex8" in data or "rgba" in data:
            color = {k: data[k] for k in ("raw", "hex8", "rgba") if k in data}
            return {"form": "single", **{side: color for side in BORDER_SIDES}}
        return data

    def side(self, name: str) -> Optional[ColorPrimitive]:
        """Return a side's color, falling back to the top side."""
        color = getattr(self, name)
        if color is not None and color.display:
            return color
        return self.top


class RadiusPrimitive(CaptureModel):
    top_left: str = "0px"
    top_right: str = "0px"
    bottom_right: str = "0px"
    bottom_left: str = "0px"


class ShadowPrimitive(CaptureModel):
    box_shadow_raw: str = ""
    shadow_presence: Literal["none", "some"] = "none"
    shadow_layer_count: Optional[int] = None


class SpacingPrimitive(CaptureModel):
    padding_top: str = "0px"
    padding_right: str = "0px"
    padding_bottom: str = "0px"
    padding_left: str = "0px"


class MarginPrimitive(CaptureModel):
    margin_top: str = "0px"
    margin_right: str = "0px"
    margin_bottom: str = "0px"
    margin_left: str = "0px"


class GapPrimitive(CaptureModel):
    row_gap: str = "normal"
    column_gap: str = "normal"


class StylePrimitives(CaptureModel):
    color: Optional[ColorPrimitive] = None
    background_color: Optional[ColorPrimitive] = None
    typography: Optional[TypographyPrimitive] = None
    border_width: Optional[BorderWidthPrimitive] = None
    border_color: Optional[BorderColorPrimitive] = None
    radius: Optional[RadiusPrimitive] = None
    shadow: Optional[ShadowPrimitive] = None
    spacing: Optional[SpacingPrimitive] = None
    margin: Optional[MarginPrimitive] = None
    gap: Optional[GapPrimitive] = None
    opacity: Optional[float] = None
    sources: dict[str, str] = Field(default_factory=dict)  # property -> authored source, may hold var(--x)

    @field_validator("sources", mode="before")
    @classmethod
    def empty_sources(cls, v: Any) -> Any:
        return {} if v is None else v

    def has_border(self) -> bool:
        """True when at least one side has a border width above zero."""
        if self.border_width is None:
            return False
        return any(
            px_number(getattr(self.border_width, side)) > 0 for side in BORDER_SIDES
        )


def px_number(value: Any) -> float:
    """Leading numeric part of a CSS length ("1.5px" -> 1.5); 0 when unparseable."""
    match = _LEADING_NUMBER.match(str(value if value is not None else ""))
    return float(match.group(1)) if match else 0.0


class AuthorStyleProvenance(CaptureModel):
    selector_text: str = ""
    style_sheet_url: Optional[str] = None
    origin: Optional[str] = None


class AuthorStylePropertyEvidence(CaptureModel):
    authored_value: Optional[str] = None
    resolved_value: Optional[str] = None
    provenance: list[AuthorStyleProvenance] = Field(default_factory=list)


class AuthorStyleEvidence(CaptureModel):
    properties: dict[str, AuthorStylePropertyEvidence] = Field(default_factory=dict)


class TokenUsageEvidence(CaptureModel):
    property: str
    token: str
    resolved_value: Optional[str] = None


class TokenDefinitionEvidence(CaptureModel):
    token: str
    defined_value: Optional[str] = None
    selector_text: str = ""
    style_sheet_url: Optional[str] = None
    origin: Optional[str] = None


class TokenEvidence(CaptureModel):
    used: list[TokenUsageEvidence] = Field(default_factory=list)
    definitions: list[TokenDefinitionEvidence] = Field(default_factory=list)


class StyleEvidenceMeta(CaptureModel):
    method: Literal["cdp", "computed"] = "computed"
    cdp_error: Optional[str] = None
    state: Optional[str] = None  # default, hover, active, focus, disabled, open
    captured_at: Optional[int] = None


class CaptureStyles(CaptureModel):
    primitives: StylePrimitives = Field(default_factory=StylePrimitives)
    author: Optional[AuthorStyleEvidence] = None
    evidence: Optional[StyleEvidenceMeta] = None
    tokens: Optional[TokenEvidence] = None


class ElementIntent(CaptureModel):
    accessible_name: Optional[str] = None
    input_type: Optional[str] = None
    href: Optional[str] = None
    disabled: Optional[bool] = None
    aria_disabled: Optional[bool] = None
    checked: Optional[bool] = None
    aria_checked: Optional[bool] = None


class ElementCore(CaptureModel):
    tag_name: str = ""
    role: Optional[str] = None
    id: Optional[str] = None
    class_list: list[str] = Field(default_factory=list)
    text_preview: str = ""
    outer_html: Optional[str] = Field(default=None, alias="outerHTML")
    attributes: dict[str, Any] = Field(default_factory=dict)
    intent: ElementIntent = Field(default_factory=ElementIntent)

    @field_validator("intent", mode="before")
    @classmethod
    def default_intent(cls, v: Any) -> Any:
        return {} if v is None else v

    @field_validator("text_preview", "tag_name", mode="before")
    @classmethod
    def empty_when_null(cls, v: Any) -> Any:
        return "" if v is None else v


class ScreenshotRef(CaptureModel):
    screenshot_blob_id: str
    mime_type: str = "image/webp"
    width: int = 0
    height: int = 0


class CaptureScope(CaptureModel):
    nearest_landmark_role: Optional[str] = None


class CaptureRecord(CaptureModel):
    id: str
    session_id: Optional[str] = None
    project_id: Optional[str] = None
    url: str = MISSING_URL
    created_at: int = 0  # ms since epoch
    element: ElementCore = Field(default_factory=ElementCore)
    styles: CaptureStyles = Field(default_factory=CaptureStyles)
    screenshot: Optional[ScreenshotRef] = None
    scope: Optional[CaptureScope] = None
    is_draft: Optional[bool] = None
    display_name: Optional[str] = None  # region captures only

    @field_validator("url", mode="before")
    @classmethod
    def normalize_missing_url(cls, v: Any) -> Any:
        if v is None or isinstance(v, str):
            return normalize_url(v)
        return v

    @field_validator("element", "styles", mode="before")
    @classmethod
    def empty_when_missing(cls, v: Any) -> Any:
        return {} if v is None else v

    @property
    def screenshot_blob_id(self) -> Optional[str]:
        return self.screenshot.screenshot_blob_id if self.screenshot else None

    @property
    def primitives(self) -> StylePrimitives:
        return self.styles.primitives
