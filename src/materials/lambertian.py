# materials/lambertian.py
from typing import Tuple
from core.ray import Ray
from core.vector import Vector3
from core.utils import random_unit_vector
from geometry.hittable import HitRecord
from materials.material import Material

class Lambertian(Material):
    """
    Lambertian diffuse material.
    """

    def __init__(self, albedo: Vector3):
        self.albedo = albedo

    def scatter(self, ray_in: Ray, rec: HitRecord, rng) -> Tuple[Ray, Vector3]:
        """
        Scatter a ray according to a Lambertian reflection model.
        Returns (scattered_ray, attenuation).
        """
        # Offsetting the normal by a unit vector gives a cosine-weighted lobe.
        scatter_direction = rec.normal + random_unit_vector(rng)

        # Catch degenerate scatter direction
        if scatter_direction.near_zero():
            scatter_direction = rec.normal

        return Ray(rec.p, scatter_direction), self.albedo

    def __repr__(self) -> str:
        return f"Lambertian({self.albedo!r})"
