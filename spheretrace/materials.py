"""
Materials describing how light scatters off a surface.

Implements:
- Diffuse (Lambertian-like matte)
- Metal (specular reflection with fuzz)
- Glass (dielectric, chooses between reflection and refraction)
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, TYPE_CHECKING
import math

from .vec3 import Vec3
from .ray import Ray
from .color import FRGBA, WHITE

if TYPE_CHECKING:
    from .shapes import HitRecord


@dataclass
class ScatterResult:
    """Result of a material scatter operation."""
    scattered_ray: Ray
    attenuation: FRGBA


class Material(ABC):
    """Abstract base class for materials."""

    @abstractmethod
    def scatter(self, ray_in: Ray, hit: HitRecord, rng) -> Optional[ScatterResult]:
        """Compute the scattered ray and attenuation.

        Args:
            ray_in: The incoming ray
            hit: The intersection being shaded
            rng: Random source with a ``random()`` method returning [0, 1)

        Returns:
            ScatterResult if ray scatters, None if absorbed
        """


class Diffuse(Material):
    """Matte material with Lambertian-like scattering."""

    def __init__(self, albedo: FRGBA):
        """Create a diffuse material.

        Args:
            albedo: The base color (each channel 0-1)
        """
        self.albedo = albedo

    def scatter(self, ray_in: Ray, hit: HitRecord, rng) -> Optional[ScatterResult]:
        scatter_direction = hit.normal + Vec3.random_unit_vector(rng)

        # Catch degenerate scatter direction
        if scatter_direction.near_zero():
            scatter_direction = hit.normal

        return ScatterResult(
            scattered_ray=Ray(hit.point, scatter_direction),
            attenuation=self.albedo
        )

    def __repr__(self) -> str:
        return f"Diffuse(albedo={self.albedo})"


class Metal(Material):
    """Metallic material with specular reflection."""

    def __init__(self, albedo: FRGBA, fuzz: float = 0.0):
        """Create a metal material.

        Args:
            albedo: The reflection color
            fuzz: Reflection blur (0 = mirror, 1 = very rough)
        """
        if not 0.0 <= fuzz <= 1.0:
            raise ValueError(f"Metal fuzz must be in [0, 1], got {fuzz}")
        self.albedo = albedo
        self.fuzz = fuzz

    def scatter(self, ray_in: Ray, hit: HitRecord, rng) -> Optional[ScatterResult]:
        reflected = ray_in.direction.reflect(hit.normal)
        direction = reflected + Vec3.random_unit_vector(rng) * self.fuzz

        # Fuzz may push the reflection below the surface; the ray is absorbed
        if direction.dot(hit.normal) <= 0:
            return None

        return ScatterResult(
            scattered_ray=Ray(hit.point, direction),
            attenuation=self.albedo
        )

    def __repr__(self) -> str:
        return f"Metal(albedo={self.albedo}, fuzz={self.fuzz})"


class Glass(Material):
    """Dielectric (glass-like) material with refraction."""

    def __init__(self, refractive_index: float = 1.5):
        """Create a glass material.

        Args:
            refractive_index: 1.0 = air, 1.5 = glass, 2.4 = diamond
        """
        if refractive_index <= 0:
            raise ValueError(f"Refractive index must be positive, got {refractive_index}")
        self.refractive_index = refractive_index

    def scatter(self, ray_in: Ray, hit: HitRecord, rng) -> Optional[ScatterResult]:
        # Entering the sphere goes from air into glass, leaving goes back
        refraction_ratio = 1.0 / self.refractive_index if hit.front_face else self.refractive_index

        unit_direction = ray_in.direction.normalize()
        cos_theta = min(-unit_direction.dot(hit.normal), 1.0)
        sin_theta = math.sqrt(1.0 - cos_theta * cos_theta)

        cannot_refract = refraction_ratio * sin_theta > 1.0

        if cannot_refract or rng.random() < self.reflectance(cos_theta):
            direction = unit_direction.reflect(hit.normal)
        else:
            direction = unit_direction.refract(hit.normal, refraction_ratio)

        return ScatterResult(
            scattered_ray=Ray(hit.point, direction),
            attenuation=WHITE
        )

    def reflectance(self, cosine: float) -> float:
        """Schlick's approximation for reflectance."""
        r0 = (1 - self.refractive_index) / (1 + self.refractive_index)
        r0 = r0 * r0
        return r0 + (1 - r0) * pow(1 - cosine, 5)

    def __repr__(self) -> str:
        return f"Glass(refractive_index={self.refractive_index})"
