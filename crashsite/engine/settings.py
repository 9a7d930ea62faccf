"""Runtime settings for the generator entry point."""
from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional


@dataclass
class GenerationSettings:
    """World generation options read from the ``worldGeneration`` block."""

    map_size: str = "medium"
    seed: Optional[int] = None
    output: Path = Path("world.json")
    preview: Optional[Path] = None
    biomes_path: Optional[Path] = None
    structures_path: Optional[Path] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GenerationSettings":
        seed = data.get("seed")
        preview = data.get("preview")
        biomes_path = data.get("biomes")
        structures_path = data.get("structures")
        return cls(
            map_size=str(data.get("mapSize", "medium")),
            seed=int(seed) if seed is not None else None,
            output=Path(data.get("output", "world.json")),
            preview=Path(preview) if preview else None,
            biomes_path=Path(biomes_path) if biomes_path else None,
            structures_path=Path(structures_path) if structures_path else None,
        )

    @classmethod
    def from_settings(cls, settings_path: Path) -> "GenerationSettings":
        if not settings_path.exists():
            return cls()
        try:
            data = json.loads(settings_path.read_text())
        except json.JSONDecodeError:
            return cls()
        block = data.get("worldGeneration", {})
        if not isinstance(block, dict):
            return cls()
        return cls.from_dict(block)


__all__ = ["GenerationSettings"]
