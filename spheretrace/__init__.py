"""
SphereTrace - A Python Path Tracer for Spheres

A small Monte Carlo path tracer with support for:
- Diffuse, metal and glass materials
- Stochastic antialiasing with gamma correction
- Reproducible, optionally multi-threaded rendering
- PPM and PNG image output
- YAML/JSON scene descriptions
"""

__version__ = "0.1.0"

from .vec3 import Vec3, Point3
from .ray import Ray
from .color import FRGBA, RGBA, SampledColor, frgb
from .image import Image
from .shapes import Sphere, HittableList, HitRecord, Hittable
from .materials import Material, Diffuse, Metal, Glass, ScatterResult
from .camera import Camera
from .renderer import Renderer, RenderSettings, ray_color, trace
from .scenes import default_scene
from .scene_parser import SceneParser, SceneParseError, load_scene, parse_scene
