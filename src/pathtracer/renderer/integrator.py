# renderer/integrator.py
from pathtracer.core.ray import Ray
from pathtracer.core.vector import Color
from pathtracer.geometry.hittable import Hittable

# Smallest ray parameter accepted as a hit; suppresses self-intersection
# ("shadow acne") from round-off at the scattered ray's origin.
T_MIN = 0.001
INFINITY = float("inf")

WHITE = Color(1.0, 1.0, 1.0)
SKY_BLUE = Color(0.5, 0.7, 1.0)
BLACK = Color(0.0, 0.0, 0.0)


def background(ray: Ray) -> Color:
    """
    Sky gradient: white at the horizon blending to blue at the zenith,
    driven by the vertical component of the normalized ray direction.
    """
    unit_direction = ray.direction.normalize()
    t = 0.5 * (unit_direction.y + 1.0)
    return WHITE * (1.0 - t) + SKY_BLUE * t


def ray_color(ray: Ray, world: Hittable, depth: int, rng) -> Color:
    """
    Radiance carried back along `ray`, following at most `depth` bounces.

    Evaluated as a loop over bounces with a running attenuation product.
    Returns black once the bounce budget is spent or the ray is absorbed,
    and the attenuated sky color when the ray escapes the scene.

    The function only reads `world`, so it can run concurrently against a
    shared scene as long as each caller owns its `rng`.
    """
    throughput = WHITE
    while depth > 0:
        rec = world.hit(ray, T_MIN, INFINITY)
        if rec is None:
            return throughput * background(ray)

        scattered = rec.material.scatter(ray, rec, rng)
        if scattered is None:
            return BLACK

        ray, attenuation = scattered
        throughput = throughput * attenuation
        depth -= 1

    # If we've exceeded the ray bounce limit, no more light is gathered.
    return BLACK
