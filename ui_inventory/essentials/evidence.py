"""Authored-style evidence for visual essentials rows."""

from __future__ import annotations

import logging
from typing import Optional

from ui_inventory.catalog.styles import tokens_in_value
from ui_inventory.essentials.formatter import derive_visual_essentials
from ui_inventory.essentials.token_trace import DEFAULT_MAX_DEPTH, build_token_trace
from ui_inventory.models.capture import (
    AuthorStyleEvidence,
    CaptureRecord,
    StyleEvidenceMeta,
    TokenEvidence,
)
from ui_inventory.models.viewer import EvidenceSummary, VisualEssentials, VisualEssentialsRow

logger = logging.getLogger(__name__)

# Only these rows carry authored/token evidence
TRACED_ROWS = {
    "Text color": "color",
    "Background": "backgroundColor",
    "Border color": "borderColor",
}

COMPUTED_FALLBACK_NOTE = (
    "Authored styles were not available for this capture; "
    "values are post-cascade computed styles."
)


def _with_evidence(
    row: VisualEssentialsRow,
    author: Optional[AuthorStyleEvidence],
    tokens: Optional[TokenEvidence],
    max_depth: int,
) -> VisualEssentialsRow:
    property_name = TRACED_ROWS.get(row.label)
    if property_name is None:
        return row

    prop_evidence = author.properties.get(property_name) if author else None
    authored_value = prop_evidence.authored_value if prop_evidence else None
    resolved_value = (prop_evidence.resolved_value if prop_evidence else None) or row.value

    trace = None
    if tokens is not None:
        trace = build_token_trace(
            property_name,
            authored_value,
            resolved_value,
            tokens.used,
            tokens.definitions,
            max_depth=max_depth,
        )

    token = None
    if trace is not None and trace.steps:
        token = trace.steps[0].token
    elif tokens is not None:
        token = next((u.token for u in tokens.used if u.property == property_name), None)
    if token is None:
        found = tokens_in_value(authored_value)
        token = found[0] if found else None

    if authored_value is None and token is None:
        return row
    return row.model_copy(
        update={
            "property": property_name,
            "authored_value": authored_value,
            "token": token,
            "trace": trace,
        }
    )


def attach_style_evidence(
    essentials: VisualEssentials,
    author: Optional[AuthorStyleEvidence],
    tokens: Optional[TokenEvidence],
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> VisualEssentials:
    """Attach authored values and token traces to the color rows."""
    if author is None and tokens is None:
        return essentials
    rows = tuple(_with_evidence(row, author, tokens, max_depth) for row in essentials.rows)
    return essentials.model_copy(update={"rows": rows})


def summarize_evidence_method(meta: Optional[StyleEvidenceMeta]) -> Optional[EvidenceSummary]:
    """How the authored evidence was obtained, with a note for the computed fallback."""
    if meta is None:
        return None
    note = None
    if meta.method == "computed":
        note = COMPUTED_FALLBACK_NOTE
        if meta.cdp_error:
            note = f"{note} Inspector error: {meta.cdp_error}"
    return EvidenceSummary(method=meta.method, cdp_error=meta.cdp_error, state=meta.state, note=note)


def _state_rows(capture: CaptureRecord) -> list[VisualEssentialsRow]:
    rows = []
    evidence = capture.styles.evidence
    if evidence is not None and evidence.state:
        rows.append(VisualEssentialsRow(section="State", label="Interaction state", value=evidence.state))
    intent = capture.element.intent
    disabled = intent.disabled if intent.disabled is not None else intent.aria_disabled
    if disabled is not None:
        rows.append(VisualEssentialsRow(section="State", label="Disabled", value="Yes" if disabled else "No"))
    checked = intent.checked if intent.checked is not None else intent.aria_checked
    if checked is not None:
        rows.append(VisualEssentialsRow(section="State", label="Checked", value="Yes" if checked else "No"))
    return rows


def derive_capture_visual_essentials(
    capture: CaptureRecord, max_depth: int = DEFAULT_MAX_DEPTH
) -> VisualEssentials:
    """Visual essentials of one representative capture, evidence included."""
    styles = capture.styles
    essentials = derive_visual_essentials(styles.primitives)
    essentials = attach_style_evidence(essentials, styles.author, styles.tokens, max_depth)
    state_rows = _state_rows(capture)
    logger.debug(
        "Capture %s: %d rows, %d state rows", capture.id, len(essentials.rows), len(state_rows)
    )
    return essentials.model_copy(
        update={
            "rows": essentials.rows + tuple(state_rows),
            "evidence": summarize_evidence_method(styles.evidence),
        }
    )
