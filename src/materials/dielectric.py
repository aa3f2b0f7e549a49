# src/materials/dielectric.py
import math
from typing import Optional, Tuple
from core.ray import Ray
from core.vector import Vector3
from core.utils import reflect, refract
from geometry.hittable import HitRecord
from materials.material import Material

class Dielectric(Material):
    """
    Clear refractive material such as glass or water.

    refraction_index is relative to the enclosing medium, so a sphere of
    air inside glass uses 1 / 1.5.
    """
    def __init__(self, refraction_index: float):
        self.refraction_index = refraction_index

    def scatter(self, ray_in: Ray, rec: HitRecord, rng) -> Optional[Tuple[Ray, Vector3]]:
        attenuation = Vector3(1.0, 1.0, 1.0)  # Glass doesn't absorb light

        # Determine if we're entering or exiting the material
        ri = 1.0 / self.refraction_index if rec.front_face else self.refraction_index

        unit_direction = ray_in.direction.normalize()

        cos_theta = min(-unit_direction.dot(rec.normal), 1.0)
        sin_theta = math.sqrt(1.0 - cos_theta * cos_theta)

        # Total internal reflection
        if ri * sin_theta > 1.0:
            return Ray(rec.p, reflect(unit_direction, rec.normal)), attenuation

        if schlick(cos_theta, ri) > rng.random():
            direction = reflect(unit_direction, rec.normal)
        else:
            direction = refract(unit_direction, rec.normal, ri)

        return Ray(rec.p, direction), attenuation

    def __repr__(self) -> str:
        return f"Dielectric({self.refraction_index})"

def schlick(cos_theta: float, ref_idx: float) -> float:
    """Schlick's approximation of Fresnel reflectance."""
    r0 = (1.0 - ref_idx) / (1.0 + ref_idx)
    r0 = r0 * r0
    return r0 + (1.0 - r0) * math.pow((1.0 - cos_theta), 5)
