"""Entry point: generate a world from settings.json and write it to disk."""
from __future__ import annotations

from pathlib import Path

import pygame

from crashsite.engine.logger import init_logger
from crashsite.engine.settings import GenerationSettings
from crashsite.world.catalog import BIOMES, STRUCTURES, BiomeCatalog, StructureCatalog
from crashsite.world.generator import WorldGenerator
from crashsite.world.preview import render_preview


SETTINGS_PATH = Path("settings.json")


def main() -> None:
    settings = GenerationSettings.from_settings(SETTINGS_PATH)
    logger = init_logger(SETTINGS_PATH)
    log = logger.channel("generator")

    biomes = BiomeCatalog.load(settings.biomes_path) if settings.biomes_path else BIOMES
    structures = StructureCatalog.load(settings.structures_path) if settings.structures_path else STRUCTURES
    generator = WorldGenerator(biomes=biomes, structures=structures, logger=logger)

    world = generator.generate(settings.map_size, settings.seed)
    settings.output.parent.mkdir(parents=True, exist_ok=True)
    settings.output.write_text(world.to_json())
    log.info("Wrote %s world (seed %d) to %s", world.map_size.id, world.seed, settings.output)

    if settings.preview:
        surface = render_preview(world, biomes, structures)
        settings.preview.parent.mkdir(parents=True, exist_ok=True)
        pygame.image.save(surface, str(settings.preview))
        log.info("Wrote preview to %s", settings.preview)


if __name__ == "__main__":
    main()
