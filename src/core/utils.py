# core/utils.py
import math
from core.vector import Vector3

def degrees_to_radians(degrees: float) -> float:
    return degrees * math.pi / 180.0

def random_in_unit_sphere(rng) -> Vector3:
    """
    Returns a random point inside a unit sphere.
    """
    while True:
        p = Vector3(rng.uniform(-1, 1),
                    rng.uniform(-1, 1),
                    rng.uniform(-1, 1))
        if p.dot(p) < 1.0:
            return p

def random_unit_vector(rng) -> Vector3:
    """
    Returns a random unit vector (uniformly distributed over the sphere).
    """
    while True:
        p = random_in_unit_sphere(rng)
        # Tiny vectors would blow up to infinity when normalized.
        lensq = p.dot(p)
        if lensq > 1e-160:
            return p / math.sqrt(lensq)

def random_in_unit_disk(rng) -> Vector3:
    """Random point in the unit disk on the z=0 plane, for depth of field."""
    while True:
        p = Vector3(rng.uniform(-1, 1), rng.uniform(-1, 1), 0)
        if p.dot(p) < 1:
            return p

def reflect(v: Vector3, n: Vector3) -> Vector3:
    """
    Reflects vector v about the normal n.
    """
    return v - n * 2 * v.dot(n)

def refract(uv: Vector3, n: Vector3, etai_over_etat: float) -> Vector3:
    """
    Snell's law for a unit incoming direction uv and a unit normal n facing it.
    """
    cos_theta = min(-uv.dot(n), 1.0)
    r_out_perp = (uv + n * cos_theta) * etai_over_etat
    r_out_parallel = n * -math.sqrt(abs(1.0 - r_out_perp.dot(r_out_perp)))
    return r_out_perp + r_out_parallel
