"""Derived inventory view models.

None of these are persisted; they are recomputed from the capture set on
every query.
"""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

NO_TOKEN = "—"

Section = Literal["Text", "Surface", "Spacing", "State"]


class ViewModel(BaseModel):
    model_config = ConfigDict(frozen=True)


class ComponentOverride(BaseModel):
    """User-maintained identity override for one component key."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    display_name: Optional[str] = None
    category_override: Optional[str] = None
    type_override: Optional[str] = None
    status_override: Optional[str] = None


class Classification(ViewModel):
    """Functional classification of one capture."""

    category: str  # Actions, Forms, Navigation, Content, Feedback, Media, Layout, Screenshots, Unknown
    type_key: str  # e.g. "button", "textInput"
    display_name: str
    confidence: int = 50  # 0-100, debug only


class ViewerComponent(ViewModel):
    id: str  # component key
    name: str
    category: str
    type: str
    status: str = "Unknown"  # Canonical, Variant, Unknown
    source: str = ""
    captures_count: int = 0


class ViewerStyle(ViewModel):
    id: str
    token: str = NO_TOKEN
    value: str
    kind: str  # color, typography, spacing, border, shadow
    usage_count: int = 0
    source: str = ""


class ViewerComponentCapture(ViewModel):
    id: str
    url: str
    screenshot_blob_id: Optional[str] = None
    html_structure: Optional[str] = None
    created_at: int = 0


class ViewerStyleLocation(ViewModel):
    id: str  # capture id
    url: str
    source_label: str
    uses: int
    screenshot_blob_id: Optional[str] = None


class ViewerStyleRelatedComponent(ViewModel):
    component_id: str
    name: str
    category: str
    type: str


class TokenTraceStep(ViewModel):
    token: str
    resolved_value: Optional[str] = None
    defined_value: Optional[str] = None
    selector_text: Optional[str] = None
    style_sheet_url: Optional[str] = None


class TokenTrace(ViewModel):
    property: str
    authored_value: Optional[str] = None
    resolved_value: Optional[str] = None
    steps: tuple[TokenTraceStep, ...] = ()
    truncated: bool = False


class VisualEssentialsRow(ViewModel):
    section: Section
    label: str
    value: str
    hex8: Optional[str] = None
    # Evidence, only ever filled for color rows
    property: Optional[str] = None
    authored_value: Optional[str] = None
    token: Optional[str] = None
    trace: Optional[TokenTrace] = None


class EvidenceSummary(ViewModel):
    method: Literal["cdp", "computed"]
    cdp_error: Optional[str] = None
    state: Optional[str] = None
    note: Optional[str] = None


class VisualEssentials(ViewModel):
    rows: tuple[VisualEssentialsRow, ...] = Field(default_factory=tuple)
    evidence: Optional[EvidenceSummary] = None
