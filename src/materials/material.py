# materials/material.py
from typing import Optional, Tuple
from core.ray import Ray
from core.vector import Vector3
from geometry.hittable import HitRecord

class Material:
    """
    Abstract material class. Subclasses must implement scatter().

    Materials are immutable once built and may be shared by any number of
    spheres and render threads.
    """
    def scatter(self, ray_in: Ray, rec: HitRecord, rng) -> Optional[Tuple[Ray, Vector3]]:
        """
        Computes the scattered ray and attenuation.
        Returns a tuple (scattered_ray, attenuation) or None if the ray is absorbed.
        rng is a random.Random compatible generator owned by the calling thread.
        """
        raise NotImplementedError("scatter() must be implemented by subclasses.")
