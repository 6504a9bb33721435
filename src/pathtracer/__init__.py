"""Multi-threaded Monte Carlo path tracer for sphere scenes."""
from pathtracer.camera.camera import Camera
from pathtracer.core.ray import Ray
from pathtracer.core.vector import Color, Point3, Vector3
from pathtracer.geometry.hittable import HitRecord, Hittable
from pathtracer.geometry.sphere import Sphere
from pathtracer.geometry.world import HittableList
from pathtracer.materials.dielectric import Dielectric
from pathtracer.materials.lambertian import Lambertian
from pathtracer.materials.material import Material
from pathtracer.materials.metal import Metal
from pathtracer.renderer.integrator import ray_color
from pathtracer.renderer.raytracer import RenderConfigError, RenderError, Renderer, render

__version__ = "0.1.0"
