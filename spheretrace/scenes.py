"""Built-in scenes."""

from __future__ import annotations

from .vec3 import Point3
from .color import frgb
from .shapes import Sphere, HittableList
from .materials import Diffuse, Metal, Glass


def default_scene() -> HittableList:
    """Create the demo scene: one sphere of each material on a large ground sphere."""
    world = HittableList()

    ground = Diffuse(frgb(0.8, 0.8, 0.0))
    world.add(Sphere(Point3(0, -100.5, -1), 100.0, ground))

    # Center sphere - diffuse
    world.add(Sphere(Point3(0, 0, -1), 0.5, Diffuse(frgb(0.1, 0.2, 0.5))))

    # Left sphere - glass
    world.add(Sphere(Point3(-1, 0, -1), 0.5, Glass(1.5)))

    # Right sphere - brushed metal
    world.add(Sphere(Point3(1, 0, -1), 0.5, Metal(frgb(0.8, 0.6, 0.2), 0.3)))

    return world
