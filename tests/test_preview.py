import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

import pygame
import pytest

from crashsite.world import generate_world
from crashsite.world.preview import render_preview


def test_preview_surface_matches_scaled_map() -> None:
    world = generate_world("small", 3)
    surface = render_preview(world)
    assert isinstance(surface, pygame.Surface)
    assert surface.get_size() == (128, 96)


def test_preview_paints_biome_colours() -> None:
    world = generate_world("small", 3)
    surface = render_preview(world, scale=0.25)
    # Bottom-right corner pixel.
    pixel = tuple(surface.get_at((255, 191)))[:3]
    assert surface.get_size() == (256, 192)
    assert pixel != (0, 0, 0)


def test_preview_rejects_bad_scale() -> None:
    world = generate_world("small", 3)
    with pytest.raises(ValueError):
        render_preview(world, scale=0)
