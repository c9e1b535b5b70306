"""Tests for Ray class."""

import pytest
from spheretrace.vec3 import Vec3, Point3
from spheretrace.ray import Ray


class TestRayCreation:
    """Test Ray construction."""

    def test_stores_origin(self):
        origin = Point3(1, 2, 3)
        direction = Vec3(1, 0, 0)
        ray = Ray(origin, direction)
        assert ray.origin == origin

    def test_stores_direction(self):
        origin = Point3(0, 0, 0)
        direction = Vec3(1, 2, 3)
        ray = Ray(origin, direction)
        assert ray.direction == direction

    def test_direction_not_normalized(self):
        ray = Ray(Point3(0, 0, 0), Vec3(0, 0, -4))
        assert ray.direction.length() == 4.0


class TestRayAt:
    """Test Ray.at() method."""

    def test_at_zero(self):
        origin = Point3(1, 2, 3)
        ray = Ray(origin, Vec3(1, 0, 0))
        assert ray.at(0) == origin

    def test_at_positive(self):
        ray = Ray(Point3(0, 0, 0), Vec3(1, 0, 0))
        point = ray.at(5)
        assert point.x == 5
        assert point.y == 0
        assert point.z == 0

    def test_at_negative(self):
        ray = Ray(Point3(0, 0, 0), Vec3(1, 0, 0))
        assert ray.at(-5).x == -5

    def test_at_scales_with_direction_length(self):
        ray = Ray(Point3(1, 1, 1), Vec3(0, 2, 0))
        assert ray.at(1.5) == Point3(1, 4, 1)


class TestRayRepr:
    """Test Ray string representation."""

    def test_repr(self):
        ray = Ray(Point3(1, 2, 3), Vec3(0, 1, 0))
        s = repr(ray)
        assert "Ray" in s
        assert "origin" in s
        assert "direction" in s
