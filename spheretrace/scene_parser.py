"""
Scene description parser.

Supports a YAML (or JSON) scene description format with:
- Render settings
- Materials library
- Objects (spheres with materials)

Example scene file:
```yaml
render:
  width: 400
  aspect_ratio: "16:9"
  samples: 50
  max_depth: 50
  seed: 7

materials:
  ground:
    type: diffuse
    albedo: [0.8, 0.8, 0.0]

  glass:
    type: glass
    refractive_index: 1.5

objects:
  - type: sphere
    center: [0, -100.5, -1]
    radius: 100
    material: ground

  - type: sphere
    center: [0, 0, -1]
    radius: 0.5
    material: glass

  - type: sphere
    center: [1, 0, -1]
    radius: 0.5
    material:
      type: metal
      albedo: [0.8, 0.6, 0.2]
      fuzz: 0.3
```
"""

from __future__ import annotations
from pathlib import Path
from typing import Dict, Any, Optional, Tuple, Union
import json
import logging

import yaml

from .vec3 import Vec3
from .color import FRGBA, frgb
from .shapes import Sphere, HittableList
from .materials import Material, Diffuse, Metal, Glass
from .renderer import RenderSettings

logger = logging.getLogger(__name__)


class SceneParseError(ValueError):
    """Error during scene parsing."""
    pass


class SceneParser:
    """Parser for scene description files."""

    def __init__(self):
        self.materials: Dict[str, Material] = {}
        self.objects: HittableList = HittableList()
        self.settings: Optional[RenderSettings] = None

    def parse_file(self, filepath: Union[str, Path]) -> Tuple[HittableList, RenderSettings]:
        """Parse a scene file.

        Args:
            filepath: Path to the scene file (YAML or JSON)

        Returns:
            Tuple of (scene, settings)
        """
        path = Path(filepath)
        if not path.exists():
            raise SceneParseError(f"Scene file not found: {filepath}")

        content = path.read_text()

        try:
            if path.suffix == '.json':
                data = json.loads(content)
            else:
                # YAML is a superset of JSON, so this also covers other suffixes
                data = yaml.safe_load(content)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise SceneParseError(f"Cannot read scene file {filepath}: {e}") from e

        if not isinstance(data, dict):
            raise SceneParseError(f"Scene file must contain a mapping: {filepath}")

        logger.info("Loading scene from %s", path)
        return self.parse_dict(data)

    def parse_dict(self, data: Dict[str, Any]) -> Tuple[HittableList, RenderSettings]:
        """Parse a scene from a dictionary.

        Args:
            data: Scene description dictionary

        Returns:
            Tuple of (scene, settings)
        """
        self.materials = {}
        self.objects = HittableList()
        self.settings = None

        # Parse materials first (objects reference them)
        if 'materials' in data:
            self._parse_materials(data['materials'])

        if 'objects' in data:
            self._parse_objects(data['objects'])

        if 'render' in data:
            self._parse_settings(data['render'])
        else:
            self.settings = RenderSettings()

        logger.info("Scene has %d object(s), %d named material(s)", len(self.objects), len(self.materials))
        return self.objects, self.settings

    def _parse_vec3(self, data: Any) -> Vec3:
        """Parse a Vec3 from a list or an x/y/z mapping."""
        try:
            if isinstance(data, (list, tuple)):
                if len(data) != 3:
                    raise SceneParseError(f"Vec3 must have 3 components, got {len(data)}")
                return Vec3(float(data[0]), float(data[1]), float(data[2]))
            elif isinstance(data, dict):
                return Vec3(
                    float(data.get('x', 0)),
                    float(data.get('y', 0)),
                    float(data.get('z', 0))
                )
        except (TypeError, ValueError) as e:
            if isinstance(e, SceneParseError):
                raise
            raise SceneParseError(f"Cannot parse Vec3 from: {data}") from e
        raise SceneParseError(f"Cannot parse Vec3 from: {data}")

    def _parse_color(self, data: Any) -> FRGBA:
        """Parse an opaque color from various formats."""
        if isinstance(data, (list, tuple)):
            if len(data) != 3:
                raise SceneParseError(f"Color must have 3 components, got {len(data)}")
            return frgb(float(data[0]), float(data[1]), float(data[2]))
        elif isinstance(data, dict):
            return frgb(
                float(data.get('r', 0)),
                float(data.get('g', 0)),
                float(data.get('b', 0))
            )
        elif isinstance(data, str):
            # Handle hex colors
            if data.startswith('#'):
                hex_color = data[1:]
                if len(hex_color) == 6:
                    r = int(hex_color[0:2], 16) / 255.0
                    g = int(hex_color[2:4], 16) / 255.0
                    b = int(hex_color[4:6], 16) / 255.0
                    return frgb(r, g, b)
            raise SceneParseError(f"Cannot parse color from string: {data}")
        else:
            raise SceneParseError(f"Cannot parse color from: {data}")

    def _build_material(self, mat_data: Dict[str, Any]) -> Material:
        if not isinstance(mat_data, dict):
            raise SceneParseError(f"Material must be a mapping, got: {mat_data!r}")
        mat_type = str(mat_data.get('type', 'diffuse')).lower()

        try:
            if mat_type == 'diffuse':
                albedo = self._parse_color(mat_data.get('albedo', [0.5, 0.5, 0.5]))
                return Diffuse(albedo)

            elif mat_type == 'metal':
                albedo = self._parse_color(mat_data.get('albedo', [0.8, 0.8, 0.8]))
                fuzz = float(mat_data.get('fuzz', 0.0))
                return Metal(albedo, fuzz)

            elif mat_type == 'glass':
                refractive_index = float(mat_data.get('refractive_index', 1.5))
                return Glass(refractive_index)

        except SceneParseError:
            raise
        except (TypeError, ValueError) as e:
            raise SceneParseError(f"Invalid {mat_type} material: {e}") from e

        raise SceneParseError(f"Unknown material type: {mat_type}")

    def _parse_materials(self, materials_data: Dict[str, Any]) -> None:
        """Parse materials section."""
        if not isinstance(materials_data, dict):
            raise SceneParseError("'materials' must be a mapping of name to material")
        for name, mat_data in materials_data.items():
            self.materials[name] = self._build_material(mat_data)

    def _get_material(self, mat_ref: Any) -> Material:
        """Get a material by name or inline definition."""
        if mat_ref is None:
            raise SceneParseError("Every object needs a material")
        if isinstance(mat_ref, str):
            if mat_ref not in self.materials:
                raise SceneParseError(f"Unknown material: {mat_ref}")
            return self.materials[mat_ref]
        elif isinstance(mat_ref, dict):
            return self._build_material(mat_ref)
        else:
            raise SceneParseError(f"Invalid material reference: {mat_ref}")

    def _parse_objects(self, objects_data: list) -> None:
        """Parse objects section."""
        if not isinstance(objects_data, list):
            raise SceneParseError("'objects' must be a list")
        for obj_data in objects_data:
            if not isinstance(obj_data, dict):
                raise SceneParseError(f"Object must be a mapping, got: {obj_data!r}")
            obj_type = str(obj_data.get('type', 'sphere')).lower()
            if obj_type != 'sphere':
                raise SceneParseError(f"Unknown object type: {obj_type}")

            material = self._get_material(obj_data.get('material'))
            center = self._parse_vec3(obj_data.get('center', [0, 0, 0]))
            try:
                radius = float(obj_data.get('radius', 1.0))
                sphere = Sphere(center, radius, material)
            except (TypeError, ValueError) as e:
                raise SceneParseError(f"Invalid sphere: {e}") from e

            logger.debug("Parsed %r", sphere)
            self.objects.add(sphere)

    def _parse_settings(self, settings_data: Dict[str, Any]) -> None:
        """Parse render settings section."""
        if not isinstance(settings_data, dict):
            raise SceneParseError("'render' must be a mapping of settings")
        aspect_ratio = parse_aspect_ratio(settings_data.get('aspect_ratio', 16 / 9))
        seed = settings_data.get('seed')
        try:
            self.settings = RenderSettings(
                image_width=int(settings_data.get('width', 400)),
                aspect_ratio=aspect_ratio,
                samples_per_pixel=int(settings_data.get('samples', 50)),
                max_depth=int(settings_data.get('max_depth', 50)),
                num_threads=int(settings_data.get('threads', 1)),
                seed=int(seed) if seed is not None else None
            )
        except (TypeError, ValueError) as e:
            raise SceneParseError(f"Invalid render settings: {e}") from e


def parse_aspect_ratio(value: Any) -> float:
    """Parse an aspect ratio given as a number or as a "W:H" string."""
    if isinstance(value, str) and ':' in value:
        width, _, height = value.partition(':')
        try:
            ratio = float(width) / float(height)
        except (ValueError, ZeroDivisionError) as e:
            raise SceneParseError(f"Invalid aspect ratio: {value}") from e
    else:
        try:
            ratio = float(value)
        except (TypeError, ValueError) as e:
            raise SceneParseError(f"Invalid aspect ratio: {value}") from e

    if ratio <= 0:
        raise SceneParseError(f"Aspect ratio must be positive: {value}")
    return ratio


def load_scene(filepath: Union[str, Path]) -> Tuple[HittableList, RenderSettings]:
    """Convenience function to load a scene file.

    Args:
        filepath: Path to the scene file

    Returns:
        Tuple of (scene, settings)
    """
    parser = SceneParser()
    return parser.parse_file(filepath)


def parse_scene(data: Dict[str, Any]) -> Tuple[HittableList, RenderSettings]:
    """Convenience function to parse a scene from a dictionary.

    Args:
        data: Scene description dictionary

    Returns:
        Tuple of (scene, settings)
    """
    parser = SceneParser()
    return parser.parse_dict(data)
