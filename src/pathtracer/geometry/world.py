# geometry/world.py
from typing import Iterable, List, Optional, Tuple
from pathtracer.core.ray import Ray
from pathtracer.core.vector import Vector3
from pathtracer.geometry.hittable import Hittable, HitRecord
from pathtracer.geometry.sphere import Sphere

class HittableList(Hittable):
    """
    A list of Hittable objects, traversed linearly.

    The list is built once before rendering and only read afterwards, so a
    single instance is shared by every render worker without locking.
    """
    def __init__(self, objects: Optional[Iterable[Hittable]] = None):
        self.objects: List[Hittable] = list(objects) if objects else []

    @classmethod
    def from_pairs(cls, pairs: Iterable[Tuple[Tuple[Vector3, float], object]]) -> "HittableList":
        """
        Builds a world from ((center, radius), material) pairs.
        """
        world = cls()
        for (center, radius), material in pairs:
            world.add(Sphere(center, radius, material))
        return world

    def add(self, obj: Hittable):
        self.objects.append(obj)

    def clear(self):
        self.objects.clear()

    def __len__(self) -> int:
        return len(self.objects)

    def __iter__(self):
        return iter(self.objects)

    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        hit_record = None
        closest_so_far = t_max
        for obj in self.objects:
            rec = obj.hit(ray, t_min, closest_so_far)
            if rec is not None:
                closest_so_far = rec.t
                hit_record = rec
        return hit_record
