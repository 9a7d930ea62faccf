"""Render a generated world to a PNG minimap.

Usage: python tools/render_world_preview.py [map_size] [seed] [output.png]
"""
from __future__ import annotations

import sys
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[1]))

import pygame

from crashsite.engine.logger import GameLogger, LoggerConfig
from crashsite.world.generator import WorldGenerator
from crashsite.world.preview import render_preview


def main(argv: list[str]) -> None:
    map_size = argv[0] if len(argv) > 0 else "medium"
    seed = int(argv[1]) if len(argv) > 1 else None
    output = Path(argv[2]) if len(argv) > 2 else Path(f"world_{map_size}.png")

    generator = WorldGenerator(logger=GameLogger(LoggerConfig(channels={"generator": True})))
    world = generator.generate(map_size, seed)
    surface = render_preview(world, generator.biomes(), generator.structures(), scale=0.25)
    pygame.image.save(surface, str(output))
    print(f"Saved {world.map_size.name} preview for seed {world.seed} to {output}")


if __name__ == "__main__":
    main(sys.argv[1:])
