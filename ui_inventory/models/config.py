"""Configuration model for the inventory tools."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, field_validator


class InventoryConfig(BaseModel):
    # Inputs
    captures_path: str = "captures.json"
    overrides_path: Optional[str] = None

    # Evidence
    token_trace_max_depth: int = 6

    # Display
    table_limit: int = 200

    @field_validator("token_trace_max_depth", "table_limit")
    @classmethod
    def positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("must be at least 1")
        return v

    @classmethod
    def load(cls, path: str | Path) -> "InventoryConfig":
        """Load config from a JSON file."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
        with open(path) as f:
            data = json.load(f)
        return cls(**data)

    def save(self, path: str | Path) -> None:
        """Save config to a JSON file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            json.dump(self.model_dump(), f, indent=2)
