"""Read exported captures and identity overrides from disk."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from ui_inventory.models.capture import CaptureRecord
from ui_inventory.models.viewer import ComponentOverride

logger = logging.getLogger(__name__)


def parse_captures(items: list[Any]) -> list[CaptureRecord]:
    """Validate raw capture dicts, skipping the ones that are malformed."""
    captures = []
    for index, item in enumerate(items):
        try:
            captures.append(CaptureRecord.model_validate(item))
        except ValidationError as e:
            logger.warning("Skipping malformed capture at index %d: %s", index, e.errors()[0]["msg"])
    return captures


def parse_overrides(data: dict[str, Any]) -> dict[str, ComponentOverride]:
    overrides = {}
    for key, item in data.items():
        try:
            overrides[key] = ComponentOverride.model_validate(item)
        except ValidationError as e:
            logger.warning("Skipping malformed override for %s: %s", key, e.errors()[0]["msg"])
    return overrides


def _read_json(path: Path) -> Any:
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")
    with open(path) as f:
        return json.load(f)


def load_captures(path: str | Path) -> tuple[list[CaptureRecord], dict[str, ComponentOverride]]:
    """Load a captures export.

    Accepts either a bare list of captures or an object with ``captures``
    and optional ``overrides`` keys.
    """
    data = _read_json(Path(path))
    if isinstance(data, list):
        items, raw_overrides = data, {}
    elif isinstance(data, dict):
        items = data.get("captures") or []
        raw_overrides = data.get("overrides") or {}
    else:
        logger.warning("Unexpected captures file layout in %s", path)
        return [], {}

    captures = parse_captures(items)
    overrides = parse_overrides(raw_overrides) if isinstance(raw_overrides, dict) else {}
    logger.info("Loaded %d captures (%d skipped) from %s", len(captures), len(items) - len(captures), path)
    return captures, overrides


def load_overrides(path: str | Path) -> dict[str, ComponentOverride]:
    """Load identity overrides keyed by component key."""
    data = _read_json(Path(path))
    if not isinstance(data, dict):
        logger.warning("Overrides file %s is not an object; ignoring it", path)
        return {}
    return parse_overrides(data)
