"""Tests for geometric shapes."""

import pytest
import math
from spheretrace.vec3 import Vec3, Point3
from spheretrace.ray import Ray
from spheretrace.color import frgb
from spheretrace.shapes import Sphere, HittableList, HitRecord
from spheretrace.materials import Diffuse, Metal, ScatterResult


MATTE = Diffuse(frgb(0.5, 0.5, 0.5))


class TestSphere:
    """Test Sphere class."""

    def test_creation(self):
        center = Point3(0, 0, 0)
        sphere = Sphere(center, 1.0, MATTE)
        assert sphere.center == center
        assert sphere.radius == 1.0
        assert sphere.material is MATTE

    @pytest.mark.parametrize("radius", [0.0, -1.0])
    def test_rejects_non_positive_radius(self, radius):
        with pytest.raises(ValueError):
            Sphere(Point3(0, 0, 0), radius, MATTE)

    @pytest.mark.parametrize("radius", [0.5, 1.0, 3.0])
    def test_hit_from_outside(self, radius):
        sphere = Sphere(Point3(0, 0, 0), radius, MATTE)
        ray = Ray(Point3(0, 0, 2 * radius), Vec3(0, 0, -1))
        hit = sphere.hit(ray, 0.001, math.inf)

        assert hit is not None
        assert hit.t == pytest.approx(radius)
        assert hit.point == Point3(0, 0, radius)
        assert hit.normal == Vec3(0, 0, 1)
        assert hit.front_face is True

    def test_hit_from_inside(self):
        sphere = Sphere(Point3(0, 0, 0), 1.0, MATTE)
        ray = Ray(Point3(0, 0, 0), Vec3(0, 0, 1))
        hit = sphere.hit(ray, 0.001, math.inf)

        assert hit is not None
        assert hit.front_face is False
        assert hit.t == pytest.approx(1.0)
        # Outward normal is +z, stored normal faces the ray
        assert hit.normal == Vec3(0, 0, -1)

    def test_normal_is_unit(self):
        sphere = Sphere(Point3(1, 2, -5), 2.0, MATTE)
        ray = Ray(Point3(0, 0, 0), Vec3(1, 2, -5))
        hit = sphere.hit(ray, 0.001, math.inf)
        assert abs(hit.normal.length() - 1.0) < 1e-9

    def test_miss(self):
        sphere = Sphere(Point3(0, 0, 0), 1.0, MATTE)
        ray = Ray(Point3(0, 5, -5), Vec3(0, 0, 1))  # Ray passes above sphere
        assert sphere.hit(ray, 0.001, math.inf) is None

    def test_behind_ray(self):
        sphere = Sphere(Point3(0, 0, -5), 1.0, MATTE)
        ray = Ray(Point3(0, 0, 0), Vec3(0, 0, 1))  # Ray points away from sphere
        assert sphere.hit(ray, 0.001, math.inf) is None

    def test_prefers_nearer_root(self):
        sphere = Sphere(Point3(0, 0, 0), 1.0, MATTE)
        ray = Ray(Point3(0, 0, -5), Vec3(0, 0, 1))
        hit = sphere.hit(ray, 0.001, math.inf)
        assert hit.t == 4.0

    def test_falls_back_to_far_root(self):
        sphere = Sphere(Point3(0, 0, 0), 1.0, MATTE)
        ray = Ray(Point3(0, 0, -5), Vec3(0, 0, 1))
        hit = sphere.hit(ray, 4.5, math.inf)
        assert hit.t == 6.0
        assert hit.front_face is False

    def test_t_min_is_inclusive(self):
        sphere = Sphere(Point3(0, 0, 0), 1.0, MATTE)
        ray = Ray(Point3(0, 0, -5), Vec3(0, 0, 1))
        assert sphere.hit(ray, 4.0, math.inf).t == 4.0

    def test_t_max_is_exclusive(self):
        sphere = Sphere(Point3(0, 0, 0), 1.0, MATTE)
        ray = Ray(Point3(0, 0, -5), Vec3(0, 0, 1))
        assert sphere.hit(ray, 0.001, 4.0) is None

    def test_non_unit_direction(self):
        sphere = Sphere(Point3(0, 0, -4), 1.0, MATTE)
        ray = Ray(Point3(0, 0, 0), Vec3(0, 0, -2))
        hit = sphere.hit(ray, 0.001, math.inf)
        assert hit.t == pytest.approx(1.5)
        assert hit.point == Point3(0, 0, -3)


class TestHitRecord:
    """Test HitRecord helpers."""

    def test_set_face_normal_outside(self):
        rec = HitRecord(Point3(0, 0, 0), Vec3(0, 0, 0), 1.0, False, MATTE)
        rec.set_face_normal(Ray(Point3(0, 0, 1), Vec3(0, 0, -1)), Vec3(0, 0, 1))
        assert rec.front_face is True
        assert rec.normal == Vec3(0, 0, 1)

    def test_set_face_normal_inside(self):
        rec = HitRecord(Point3(0, 0, 0), Vec3(0, 0, 0), 1.0, True, MATTE)
        rec.set_face_normal(Ray(Point3(0, 0, -1), Vec3(0, 0, 1)), Vec3(0, 0, 1))
        assert rec.front_face is False
        assert rec.normal == Vec3(0, 0, -1)

    def test_scatter_delegates_to_material(self):
        calls = []

        class Recording(Diffuse):
            def scatter(self, ray_in, hit, rng):
                calls.append((ray_in, hit, rng))
                return None

        material = Recording(frgb(1, 1, 1))
        rec = HitRecord(Point3(0, 0, 0), Vec3(0, 1, 0), 1.0, True, material)
        ray = Ray(Point3(0, 1, 0), Vec3(0, -1, 0))
        rng = object()

        assert rec.scatter(ray, rng) is None
        assert calls == [(ray, rec, rng)]


class TestHittableList:
    """Test HittableList class."""

    def test_empty(self):
        world = HittableList()
        assert len(world) == 0
        assert world.hit(Ray(Point3(0, 0, 0), Vec3(1, 0, 0)), 0.001, math.inf) is None

    def test_add_and_iterate(self):
        s1 = Sphere(Point3(0, 0, -1), 0.5, MATTE)
        s2 = Sphere(Point3(1, 0, -1), 0.5, MATTE)
        world = HittableList([s1])
        world.add(s2)
        assert len(world) == 2
        assert list(world) == [s1, s2]

    def test_clear(self):
        world = HittableList([Sphere(Point3(0, 0, -1), 0.5, MATTE)])
        world.clear()
        assert len(world) == 0

    @pytest.mark.parametrize("swap", [False, True])
    def test_nearest_hit_regardless_of_order(self, swap):
        near_material = Diffuse(frgb(1, 0, 0))
        far_material = Metal(frgb(0, 0, 1))
        near = Sphere(Point3(0, 0, -3), 1.0, near_material)
        # Overlaps the near sphere but its surface is further along the ray
        far = Sphere(Point3(0, 0, -3.5), 1.0, far_material)

        objects = [far, near] if swap else [near, far]
        world = HittableList(objects)
        hit = world.hit(Ray(Point3(0, 0, 0), Vec3(0, 0, -1)), 0.001, math.inf)

        assert hit.t == pytest.approx(2.0)
        assert hit.material is near_material

    def test_respects_t_max(self):
        world = HittableList([Sphere(Point3(0, 0, -3), 1.0, MATTE)])
        ray = Ray(Point3(0, 0, 0), Vec3(0, 0, -1))
        assert world.hit(ray, 0.001, 1.5) is None

    def test_miss_returns_none(self):
        world = HittableList([Sphere(Point3(0, 0, -3), 1.0, MATTE)])
        assert world.hit(Ray(Point3(0, 0, 0), Vec3(0, 1, 0)), 0.001, math.inf) is None
