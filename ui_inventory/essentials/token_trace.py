"""Design-token tracing for authored values such as ``var(--a, var(--b))``."""

from __future__ import annotations

from typing import Iterable, Optional

from ui_inventory.catalog.styles import tokens_in_value
from ui_inventory.models.capture import TokenDefinitionEvidence, TokenUsageEvidence
from ui_inventory.models.viewer import TokenTrace, TokenTraceStep

DEFAULT_MAX_DEPTH = 6


def pick_best_definition(
    token: str,
    definitions: Iterable[TokenDefinitionEvidence],
    preferred_style_sheet_url: Optional[str] = None,
) -> Optional[TokenDefinitionEvidence]:
    """Definition from the preferred stylesheet if any, else the first one."""
    matches = [d for d in definitions if d.token == token]
    if not matches:
        return None
    if preferred_style_sheet_url:
        for definition in matches:
            if definition.style_sheet_url == preferred_style_sheet_url:
                return definition
    return matches[0]


def build_token_trace(
    property_name: str,
    authored_value: Optional[str],
    resolved_value: Optional[str],
    used: Iterable[TokenUsageEvidence],
    definitions: Iterable[TokenDefinitionEvidence] = (),
    max_depth: int = DEFAULT_MAX_DEPTH,
    preferred_style_sheet_url: Optional[str] = None,
) -> Optional[TokenTrace]:
    """Chain of tokens behind an authored value, or None without var() usage.

    Steps start with the authored tokens in order, then follow the first
    var() of each step's definition (``--brand -> --blue-500``).
    """
    if not authored_value or "var(--" not in authored_value:
        return None
    direct = tokens_in_value(authored_value)
    if not direct:
        return None

    definitions = list(definitions)
    resolved_by_token: dict[str, Optional[str]] = {}
    for usage in used:
        if usage.property == property_name:
            resolved_by_token.setdefault(usage.token, usage.resolved_value)

    steps: list[TokenTraceStep] = []
    visited: set[str] = set()
    truncated = False

    def push(token: str) -> None:
        visited.add(token)
        definition = pick_best_definition(token, definitions, preferred_style_sheet_url)
        steps.append(
            TokenTraceStep(
                token=token,
                resolved_value=resolved_by_token.get(token),
                defined_value=definition.defined_value if definition else None,
                selector_text=definition.selector_text if definition else None,
                style_sheet_url=definition.style_sheet_url if definition else None,
            )
        )

    for token in direct:
        if len(steps) >= max_depth:
            truncated = True
            break
        push(token)

    i = 0
    while i < len(steps):
        if len(steps) >= max_depth:
            truncated = True
            break
        chained = tokens_in_value(steps[i].defined_value)
        if chained and chained[0] not in visited:
            push(chained[0])
        i += 1

    return TokenTrace(
        property=property_name,
        authored_value=authored_value,
        resolved_value=resolved_value,
        steps=tuple(steps),
        truncated=truncated,
    )


def trace_hint(trace: Optional[TokenTrace], authored_value: Optional[str] = None) -> Optional[str]:
    """Short one-line summary of a trace for display next to a value."""
    if trace is not None and trace.steps:
        tokens = [step.token for step in trace.steps]
        if len(tokens) <= 3:
            return " → ".join(tokens)
        return f"{tokens[0]} → … → {tokens[-1]}"
    if authored_value and "var(--" in authored_value:
        return authored_value
    return None
