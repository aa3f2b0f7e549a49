# renderer/integrator.py
import math
from core.vector import Vector3
from core.ray import Ray
from core.interval import Interval
from geometry.hittable import Hittable

# Hits closer than this are treated as self-intersections (shadow acne).
T_MIN = 0.001

BLACK = Vector3(0.0, 0.0, 0.0)
WHITE = Vector3(1.0, 1.0, 1.0)
SKY_BLUE = Vector3(0.5, 0.7, 1.0)

def background(ray: Ray) -> Vector3:
    """Vertical white to sky-blue gradient used for rays that escape."""
    unit_direction = ray.direction.normalize()
    a = 0.5 * (unit_direction.y + 1.0)
    return WHITE * (1.0 - a) + SKY_BLUE * a

def ray_color(ray: Ray, depth: int, world: Hittable, rng) -> Vector3:
    """
    Radiance carried back along ray, following at most depth bounces.
    """
    # No more light is gathered once the bounce limit is exceeded
    if depth <= 0:
        return BLACK

    rec = world.hit(ray, Interval(T_MIN, math.inf))
    if rec is None:
        return background(ray)

    result = rec.material.scatter(ray, rec, rng)
    if result is None:
        return BLACK

    scattered, attenuation = result
    return attenuation * ray_color(scattered, depth - 1, world, rng)
