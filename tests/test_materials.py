"""Unit tests for the Lambertian, Metal and Dielectric scatter models.

Scatter decisions that depend on random draws are forced with the scripted
generator from conftest; distribution checks use the seeded generator.
"""

import math

import pytest

from pathtracer.core.ray import Ray
from pathtracer.core.vector import Color, Point3, Vector3
from pathtracer.geometry.hittable import HitRecord
from pathtracer.materials.dielectric import Dielectric, schlick
from pathtracer.materials.lambertian import Lambertian
from pathtracer.materials.material import Material
from pathtracer.materials.metal import Metal
from pathtracer.materials.presets import DielectricPresets, DiffusePresets, MetalPresets

UP = Vector3(0.0, 1.0, 0.0)


def record(material, normal=UP, front_face=True, p=Point3(0.0, 0.0, 0.0)):
    return HitRecord(p=p, normal=normal, t=1.0, front_face=front_face, material=material)


class TestMaterialBase:
    def test_scatter_is_abstract(self, rng):
        with pytest.raises(NotImplementedError):
            Material().scatter(Ray(Point3(0, 0, 0), UP), record(None), rng)


class TestLambertian:
    """Tests for diffuse scattering."""

    def test_scatters_into_normal_hemisphere(self, rng):
        albedo = Color(0.8, 0.3, 0.3)
        material = Lambertian(albedo)
        ray_in = Ray(Point3(0.0, 1.0, 0.0), Vector3(0.0, -1.0, 0.0))
        for _ in range(200):
            scattered, attenuation = material.scatter(ray_in, record(material), rng)
            assert scattered.origin == Point3(0.0, 0.0, 0.0)
            assert scattered.direction.dot(UP) > 0
            assert attenuation is albedo

    def test_degenerate_direction_collapses_to_normal(self, scripted):
        material = Lambertian(Color(0.5, 0.5, 0.5))
        # Offset almost exactly opposite the normal
        draws = scripted([0.0, -0.9999999999, 0.0])
        scattered, _ = material.scatter(Ray(Point3(0, 1, 0), -UP), record(material), draws)
        assert scattered.direction == UP

    def test_never_absorbs(self, rng):
        material = Lambertian(Color(0.5, 0.5, 0.5))
        ray_in = Ray(Point3(1.0, 1.0, 0.0), Vector3(-1.0, -1.0, 0.0))
        assert all(material.scatter(ray_in, record(material), rng) is not None
                   for _ in range(100))


class TestMetal:
    """Tests for specular scattering with fuzz."""

    def test_mirror_reflection_at_normal_incidence(self, rng):
        albedo = Color(0.8, 0.6, 0.2)
        material = Metal(albedo, 0.0)
        normal = Vector3(0.0, 0.0, 1.0)
        ray_in = Ray(Point3(0.0, 0.0, 1.0), Vector3(0.0, 0.0, -1.0))
        scattered, attenuation = material.scatter(ray_in, record(material, normal), rng)
        assert scattered.direction == Vector3(0.0, 0.0, 1.0)
        assert scattered.origin == Point3(0.0, 0.0, 0.0)
        assert attenuation is albedo

    def test_mirror_reflection_at_an_angle(self, rng):
        material = Metal(Color(1.0, 1.0, 1.0), 0.0)
        ray_in = Ray(Point3(-1.0, 1.0, 0.0), Vector3(1.0, -1.0, 0.0))
        scattered, _ = material.scatter(ray_in, record(material), rng)
        s = math.sqrt(0.5)
        assert scattered.direction.x == pytest.approx(s)
        assert scattered.direction.y == pytest.approx(s)
        assert scattered.direction.z == pytest.approx(0.0)

    def test_fuzz_below_surface_is_absorbed(self, scripted):
        material = Metal(Color(0.9, 0.9, 0.9), 1.0)
        grazing = Ray(Point3(-1.0, 0.01, 0.0), Vector3(1.0, -0.01, 0.0))
        # Fuzz offset pointing straight into the surface
        draws = scripted([0.0, -0.9, 0.0])
        assert material.scatter(grazing, record(material), draws) is None

    def test_fuzz_is_clamped(self):
        assert Metal(Color(1, 1, 1), 5.0).fuzz == 1.0
        assert Metal(Color(1, 1, 1), -1.0).fuzz == 0.0
        assert Metal(Color(1, 1, 1), 0.3).fuzz == 0.3

    def test_scattered_rays_stay_above_surface(self, rng):
        material = Metal(Color(0.7, 0.7, 0.7), 0.8)
        ray_in = Ray(Point3(-1.0, 1.0, 0.0), Vector3(1.0, -1.0, 0.0))
        results = [material.scatter(ray_in, record(material), rng) for _ in range(300)]
        for result in results:
            if result is not None:
                assert result[0].direction.dot(UP) > 0


class TestDielectric:
    """Tests for refraction, reflection and Schlick's approximation."""

    @pytest.mark.parametrize("ref_idx", [0.0, -1.0, -1.5])
    def test_non_positive_index_rejected(self, ref_idx):
        with pytest.raises(ValueError, match="index of refraction"):
            Dielectric(ref_idx)

    def test_schlick_limits(self):
        r0 = ((1.0 - 1.5) / (1.0 + 1.5)) ** 2
        assert schlick(1.0, 1.5) == pytest.approx(r0)
        assert schlick(0.0, 1.5) == pytest.approx(1.0)

    def test_normal_incidence_refracts_when_draw_exceeds_reflectance(self, scripted):
        material = Dielectric(1.5)
        normal = Vector3(0.0, 0.0, 1.0)
        ray_in = Ray(Point3(0.0, 0.0, 1.0), Vector3(0.0, 0.0, -1.0))
        scattered, attenuation = material.scatter(ray_in, record(material, normal), scripted([0.5]))
        assert attenuation == Color(1.0, 1.0, 1.0)
        assert scattered.direction.x == pytest.approx(0.0)
        assert scattered.direction.y == pytest.approx(0.0)
        assert scattered.direction.z == pytest.approx(-1.0)

    def test_normal_incidence_reflects_when_draw_below_reflectance(self, scripted):
        material = Dielectric(1.5)
        normal = Vector3(0.0, 0.0, 1.0)
        ray_in = Ray(Point3(0.0, 0.0, 1.0), Vector3(0.0, 0.0, -1.0))
        scattered, _ = material.scatter(ray_in, record(material, normal), scripted([0.0]))
        assert scattered.direction.z == pytest.approx(1.0)

    def test_total_internal_reflection(self, scripted):
        material = Dielectric(1.5)
        # Leaving the glass at sin(theta) = 0.8: 1.5 * 0.8 > 1
        ray_in = Ray(Point3(-0.8, 0.6, 0.0), Vector3(0.8, -0.6, 0.0))
        draws = scripted([0.999])
        scattered, attenuation = material.scatter(
            ray_in, record(material, front_face=False), draws)
        assert scattered.direction.x == pytest.approx(0.8)
        assert scattered.direction.y == pytest.approx(0.6)
        assert attenuation == Color(1.0, 1.0, 1.0)
        assert draws.calls == 0

    def test_exit_below_critical_angle_refracts(self, scripted):
        material = Dielectric(1.5)
        ray_in = Ray(Point3(-0.3, 1.0, 0.0), Vector3(0.3, -math.sqrt(1 - 0.09), 0.0))
        scattered, _ = material.scatter(ray_in, record(material, front_face=False),
                                        scripted([0.999]))
        assert scattered.direction.x == pytest.approx(1.5 * 0.3)
        assert scattered.direction.y < 0

    def test_reflection_frequency_matches_schlick(self, rng):
        material = Dielectric(1.5)
        normal = Vector3(0.0, 0.0, 1.0)
        ray_in = Ray(Point3(0.0, 0.0, 1.0), Vector3(0.0, 0.0, -1.0))
        n = 5000
        reflected = sum(
            material.scatter(ray_in, record(material, normal), rng)[0].direction.z > 0
            for _ in range(n))
        assert reflected / n == pytest.approx(schlick(1.0, 1.0 / 1.5), abs=0.02)


class TestPresets:
    def test_preset_types(self):
        assert isinstance(MetalPresets.gold(), Metal)
        assert MetalPresets.bronze().fuzz == 0.0
        assert DielectricPresets.glass().ref_idx == 1.5
        assert DielectricPresets.diamond().ref_idx == 2.42
        assert isinstance(DiffusePresets.ground(), Lambertian)
