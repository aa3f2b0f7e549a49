# materials/presets.py
from core.vector import Vector3
from materials.metal import Metal
from materials.lambertian import Lambertian
from materials.dielectric import Dielectric

class MetalPresets:
    """Predefined metals."""

    @staticmethod
    def mirror() -> Metal:
        return Metal(Vector3(0.7, 0.6, 0.5), fuzz=0.0)

    @staticmethod
    def brushed_gold() -> Metal:
        return Metal(Vector3(0.8, 0.6, 0.2), fuzz=1.0)

class DielectricPresets:
    """Predefined dielectrics with realistic refractive indices."""

    @staticmethod
    def glass() -> Dielectric:
        return Dielectric(1.5)

class LambertianPresets:
    """Matte colors used by the bundled scenes."""

    @staticmethod
    def ground() -> Lambertian:
        return Lambertian(Vector3(0.5, 0.5, 0.5))

    @staticmethod
    def grass() -> Lambertian:
        return Lambertian(Vector3(0.8, 0.8, 0.0))

    @staticmethod
    def blue() -> Lambertian:
        return Lambertian(Vector3(0.1, 0.2, 0.5))

    @staticmethod
    def brown() -> Lambertian:
        return Lambertian(Vector3(0.4, 0.2, 0.1))
