# geometry/sphere.py
import math
from typing import Optional
from core.vector import Vector3
from core.ray import Ray
from core.interval import Interval
from geometry.hittable import Hittable, HitRecord

class Sphere(Hittable):
    """
    Represents a sphere defined by its center, radius, and material.

    A negative radius flips the outward normal, which turns the sphere
    inside out. Nesting one inside a glass sphere gives a hollow shell.
    """
    def __init__(self, center: Vector3, radius: float, material):
        self.center = center
        self.radius = radius
        self.material = material

    def hit(self, ray: Ray, ray_t: Interval) -> Optional[HitRecord]:
        oc = self.center - ray.origin
        a = ray.direction.dot(ray.direction)
        h = ray.direction.dot(oc)
        c = oc.dot(oc) - self.radius * self.radius
        discriminant = h * h - a * c

        if discriminant < 0:
            return None

        sqrt_disc = math.sqrt(discriminant)
        # Find the nearest root that lies in the acceptable range
        root = (h - sqrt_disc) / a
        if not ray_t.surrounds(root):
            root = (h + sqrt_disc) / a
            if not ray_t.surrounds(root):
                return None

        rec = HitRecord()
        rec.t = root
        rec.p = ray.at(rec.t)
        outward_normal = (rec.p - self.center) / self.radius
        rec.set_face_normal(ray, outward_normal)
        rec.material = self.material
        return rec

    def __repr__(self) -> str:
        return f"Sphere({self.center!r}, {self.radius}, {self.material!r})"
