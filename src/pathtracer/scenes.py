# scenes.py
"""
Built-in worlds, each paired with the camera it is meant to be viewed from.
"""
import random
from typing import Tuple

from pathtracer.camera.camera import Camera
from pathtracer.core.vector import Color, Point3, Vector3
from pathtracer.geometry.world import HittableList
from pathtracer.materials.dielectric import Dielectric
from pathtracer.materials.lambertian import Lambertian
from pathtracer.materials.metal import Metal
from pathtracer.materials.presets import DielectricPresets, DiffusePresets, MetalPresets


def three_spheres() -> HittableList:
    """Diffuse, glass and metal spheres resting on a large yellow ground sphere."""
    return HittableList.from_pairs([
        ((Point3(0.0, -100.5, -1.0), 100.0), DiffusePresets.ground()),
        ((Point3(0.0, 0.0, -1.0), 0.5), DiffusePresets.navy()),
        ((Point3(-1.0, 0.0, -1.0), 0.5), DielectricPresets.glass()),
        ((Point3(1.0, 0.0, -1.0), 0.5), MetalPresets.bronze()),
    ])


def three_spheres_camera(aspect_ratio: float) -> Camera:
    return Camera(
        look_from=Point3(0, 0, 0),
        look_at=Point3(0, 0, -1),
        vup=Vector3(0, 1, 0),
        vfov=90.0,
        aspect_ratio=aspect_ratio,
    )


def random_scene(rng: random.Random) -> HittableList:
    """
    Ground plane covered by a grid of small random spheres, plus one large
    glass, one large diffuse and one large metal sphere.
    """
    pairs = [((Point3(0, -1000, 0), 1000.0), DiffusePresets.grey())]

    clearance = Point3(4, 0.2, 0)
    for a in range(-11, 11):
        for b in range(-11, 11):
            choose_mat = rng.random()
            center = Point3(a + 0.9 * rng.random(), 0.2, b + 0.9 * rng.random())
            if (center - clearance).length() <= 0.9:
                continue

            if choose_mat < 0.8:
                material = Lambertian(Vector3.random(rng) * Vector3.random(rng))
            elif choose_mat < 0.95:
                material = Metal(Vector3.random(rng, 0.5, 1.0), rng.uniform(0.0, 0.5))
            else:
                material = DielectricPresets.glass()
            pairs.append(((center, 0.2), material))

    pairs.append(((Point3(0, 1, 0), 1.0), Dielectric(1.5)))
    pairs.append(((Point3(-4, 1, 0), 1.0), DiffusePresets.brown()))
    pairs.append(((Point3(4, 1, 0), 1.0), Metal(Color(0.7, 0.6, 0.5), 0.0)))
    return HittableList.from_pairs(pairs)


def random_scene_camera(aspect_ratio: float) -> Camera:
    return Camera(
        look_from=Point3(13, 2, 3),
        look_at=Point3(0, 0, 0),
        vup=Vector3(0, 1, 0),
        vfov=20.0,
        aspect_ratio=aspect_ratio,
        aperture=0.1,
        focus_dist=10.0,
    )


SCENES = {
    "three_spheres": (lambda rng: three_spheres(), three_spheres_camera),
    "random": (random_scene, random_scene_camera),
}


def build_scene(name: str, aspect_ratio: float,
                rng: random.Random) -> Tuple[HittableList, Camera]:
    """Look up a built-in scene by name and return (world, camera)."""
    try:
        make_world, make_camera = SCENES[name]
    except KeyError:
        raise ValueError(f"unknown scene {name!r}; choose from {', '.join(sorted(SCENES))}") from None
    return make_world(rng), make_camera(aspect_ratio)
