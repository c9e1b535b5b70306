"""
Renderer module - the heart of the ray tracer.

Implements:
- Path tracing as a bounded bounce loop
- Stochastic antialiasing with per-pixel sample accumulation
- Optional multi-threaded row rendering with independent random streams
"""

from __future__ import annotations
import logging
import math
import os
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, Optional

import numpy as np

from .color import FRGBA, SampledColor, frgb, BLACK, WHITE
from .ray import Ray
from .camera import Camera
from .image import Image
from .shapes import Hittable
from .scenes import default_scene

logger = logging.getLogger(__name__)

# Hits closer than this are ignored so a scattered ray does not re-hit the
# surface it just left because of floating point error.
T_MIN = 0.001

SKY_BLUE = frgb(0.5, 0.7, 1.0)


@dataclass
class RenderSettings:
    """Configuration for the renderer."""
    image_width: int = 400
    aspect_ratio: float = 16.0 / 9.0
    samples_per_pixel: int = 50
    max_depth: int = 50
    num_threads: int = 1  # 0 = auto-detect
    seed: Optional[int] = None  # None = fresh OS entropy

    def __post_init__(self):
        if self.num_threads == 0:
            self.num_threads = os.cpu_count() or 4

    @property
    def image_height(self) -> int:
        return int(self.image_width / self.aspect_ratio)

    def validate(self) -> None:
        """Check the settings describe a renderable image.

        Raises:
            ValueError: On any degenerate value
        """
        if self.aspect_ratio <= 0:
            raise ValueError(f"aspect_ratio must be positive, got {self.aspect_ratio}")
        # Pixel coordinates are normalized by (width - 1) and (height - 1)
        if self.image_width < 2 or self.image_height < 2:
            raise ValueError(
                f"Image must be at least 2x2 pixels, got {self.image_width}x{self.image_height}"
            )
        if self.samples_per_pixel < 1:
            raise ValueError(f"samples_per_pixel must be at least 1, got {self.samples_per_pixel}")
        if self.max_depth < 1:
            raise ValueError(f"max_depth must be at least 1, got {self.max_depth}")
        if self.num_threads < 1:
            raise ValueError(f"num_threads must be at least 1, got {self.num_threads}")


def background(ray: Ray) -> FRGBA:
    """Sky gradient: white looking down, sky blue looking up."""
    unit_direction = ray.direction.normalize()
    t = 0.5 * (unit_direction.y + 1.0)
    return WHITE.lerp(t, SKY_BLUE)


def ray_color(ray: Ray, scene: Hittable, max_depth: int, rng) -> FRGBA:
    """Compute the color seen along a ray using path tracing.

    The ray bounces at most ``max_depth`` times. Each scatter multiplies the
    running color by the material attenuation; escaping to the sky returns
    the running color times the background. Absorption, or running out of
    bounces, yields black.

    Args:
        ray: The ray to trace
        scene: The scene to trace against
        max_depth: Maximum number of bounces
        rng: Random source with a ``random()`` method returning [0, 1)

    Returns:
        The computed color for this ray
    """
    throughput = WHITE

    for _ in range(max_depth):
        hit_record = scene.hit(ray, T_MIN, math.inf)
        if hit_record is None:
            return throughput * background(ray)

        scatter_result = hit_record.scatter(ray, rng)
        if scatter_result is None:
            return BLACK

        throughput = throughput * scatter_result.attenuation
        ray = scatter_result.scattered_ray

    return BLACK


class Renderer:
    """Path tracing renderer."""

    def __init__(self, settings: RenderSettings = None):
        """Create a renderer with the given settings.

        Args:
            settings: Render configuration (uses defaults if None)
        """
        self.settings = settings if settings else RenderSettings()
        self._progress_callback: Optional[Callable[[float], None]] = None

    def set_progress_callback(self, callback: Callable[[float], None]) -> None:
        """Set a callback function for progress updates.

        Args:
            callback: Function that takes progress as float (0.0 to 1.0)
        """
        self._progress_callback = callback

    def render(self, scene: Hittable, camera: Camera, rng=None) -> Image:
        """Render the scene into a new image.

        Rows are rendered top first. Without ``rng`` every row gets its own
        generator spawned from ``settings.seed``, so a seeded render is the
        same for any thread count. Passing ``rng`` renders sequentially from
        that single stream.

        Args:
            scene: The scene to render (any Hittable)
            camera: The camera to render from
            rng: Optional random source overriding the seeded streams

        Returns:
            The rendered image
        """
        self.settings.validate()
        width = self.settings.image_width
        height = self.settings.image_height

        logger.info(
            "Rendering %dx%d, %d samples per pixel, max depth %d, %d thread(s)",
            width, height, self.settings.samples_per_pixel,
            self.settings.max_depth, self.settings.num_threads
        )
        start_time = time.perf_counter()

        if rng is not None:
            rows = (self.render_row(scene, camera, y, rng) for y in range(height))
            image = self._collect(rows, width, height)
        else:
            seed_sequence = np.random.SeedSequence(self.settings.seed)
            logger.info("Seed entropy: %d", seed_sequence.entropy)
            row_rngs = [np.random.default_rng(child) for child in seed_sequence.spawn(height)]

            def render_one(y: int) -> list[FRGBA]:
                return self.render_row(scene, camera, y, row_rngs[y])

            if self.settings.num_threads > 1:
                with ThreadPoolExecutor(max_workers=self.settings.num_threads) as executor:
                    image = self._collect(executor.map(render_one, range(height)), width, height)
            else:
                image = self._collect(map(render_one, range(height)), width, height)

        elapsed = time.perf_counter() - start_time
        rays = width * height * self.settings.samples_per_pixel
        logger.info(
            "Render completed in %.2f seconds (%.0f camera rays per second)",
            elapsed, rays / elapsed if elapsed > 0 else float('inf')
        )
        return image

    def _collect(self, rows, width: int, height: int) -> Image:
        """Write finished rows into an image, in row order."""
        image = Image(width, height)
        for y, row in enumerate(rows):
            for x, color in enumerate(row):
                image.set(x, y, color)

            logger.debug("Finished row %d/%d", y + 1, height)
            if self._progress_callback:
                self._progress_callback((y + 1) / height)
        return image

    def render_row(self, scene: Hittable, camera: Camera, y: int, rng) -> list[FRGBA]:
        """Render one image row (0 = top) into finished pixel colors."""
        return [
            self.sample_pixel(scene, camera, x, y, rng)
            for x in range(self.settings.image_width)
        ]

    def sample_pixel(self, scene: Hittable, camera: Camera, x: int, y: int, rng) -> FRGBA:
        """Average jittered samples for pixel (x, y) and gamma correct them.

        Args:
            scene: The scene to trace against
            camera: The camera generating primary rays
            x: Column, 0 is the left edge
            y: Row, 0 is the top edge
            rng: Random source with a ``random()`` method returning [0, 1)

        Returns:
            The final pixel color
        """
        width = self.settings.image_width
        height = self.settings.image_height
        # Image rows grow downwards, viewport v grows upwards
        j = height - 1 - y

        accumulator = SampledColor()
        for _ in range(self.settings.samples_per_pixel):
            u = (x + rng.random()) / (width - 1)
            v = (j + rng.random()) / (height - 1)
            ray = camera.get_ray(u, v)
            accumulator.add(ray_color(ray, scene, self.settings.max_depth, rng))

        return accumulator.result()


def trace(
    settings: RenderSettings = None,
    scene: Hittable = None,
    camera: Camera = None,
    progress_callback: Optional[Callable[[float], None]] = None
) -> Image:
    """Render a scene in one call.

    Args:
        settings: Render configuration (uses defaults if None)
        scene: The scene to render (the built-in demo scene if None)
        camera: The camera (a default camera matching the aspect ratio if None)
        progress_callback: Optional progress hook, see Renderer.set_progress_callback

    Returns:
        The rendered image
    """
    settings = settings if settings else RenderSettings()
    if scene is None:
        scene = default_scene()
    if camera is None:
        camera = Camera(aspect_ratio=settings.aspect_ratio)

    renderer = Renderer(settings)
    if progress_callback:
        renderer.set_progress_callback(progress_callback)
    return renderer.render(scene, camera)
