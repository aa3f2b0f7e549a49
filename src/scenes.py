# scenes.py
import logging
import random
from typing import Callable, Dict, Optional, Tuple
from core.vector import Vector3
from geometry.world import HittableList
from geometry.sphere import Sphere
from materials.lambertian import Lambertian
from materials.metal import Metal
from materials.presets import MetalPresets, DielectricPresets, LambertianPresets

logger = logging.getLogger(__name__)

def _add(world: HittableList, sphere: Sphere):
    world.add(sphere)
    logger.debug("Added %r", sphere)

def ground_scene(rng: random.Random) -> Tuple[HittableList, Dict]:
    """A single diffuse sphere resting on a huge ground sphere."""
    world = HittableList()
    _add(world, Sphere(Vector3(0, -100.5, -1), 100, LambertianPresets.grass()))
    _add(world, Sphere(Vector3(0, 0, -1), 0.5, LambertianPresets.blue()))
    camera = {"vfov": 90, "lookfrom": Vector3(0, 0, 0), "lookat": Vector3(0, 0, -1)}
    return world, camera

def materials_scene(rng: random.Random) -> Tuple[HittableList, Dict]:
    """Diffuse, hollow glass and fuzzy metal spheres side by side."""
    world = HittableList()
    _add(world, Sphere(Vector3(0, -100.5, -1), 100, LambertianPresets.grass()))
    _add(world, Sphere(Vector3(0, 0, -1.2), 0.5, LambertianPresets.blue()))
    # Hollow glass: the inverted inner sphere shares the shell's material
    glass = DielectricPresets.glass()
    _add(world, Sphere(Vector3(-1, 0, -1), 0.5, glass))
    _add(world, Sphere(Vector3(-1, 0, -1), -0.4, glass))
    _add(world, Sphere(Vector3(1, 0, -1), 0.5, MetalPresets.brushed_gold()))
    camera = {
        "vfov": 20,
        "lookfrom": Vector3(-2, 2, 1),
        "lookat": Vector3(0, 0, -1),
        "vup": Vector3(0, 1, 0),
        "defocus_angle": 10.0,
        "focus_dist": 3.4,
    }
    return world, camera

def final_scene(rng: random.Random) -> Tuple[HittableList, Dict]:
    """Random field of small spheres around three large ones."""
    world = HittableList()
    _add(world, Sphere(Vector3(0, -1000, 0), 1000, LambertianPresets.ground()))

    # One glass material shared by every glass sphere
    glass = DielectricPresets.glass()

    for a in range(-11, 11):
        for b in range(-11, 11):
            choose_mat = rng.random()
            center = Vector3(a + 0.9 * rng.random(), 0.2, b + 0.9 * rng.random())

            if (center - Vector3(4, 0.2, 0)).length() <= 0.9:
                continue

            if choose_mat < 0.8:
                albedo = Vector3(rng.random(), rng.random(), rng.random()) * \
                    Vector3(rng.random(), rng.random(), rng.random())
                material = Lambertian(albedo)
            elif choose_mat < 0.95:
                albedo = Vector3(rng.uniform(0.5, 1), rng.uniform(0.5, 1), rng.uniform(0.5, 1))
                material = Metal(albedo, rng.uniform(0, 0.5))
            else:
                material = glass
            _add(world, Sphere(center, 0.2, material))

    _add(world, Sphere(Vector3(0, 1, 0), 1.0, glass))
    _add(world, Sphere(Vector3(-4, 1, 0), 1.0, LambertianPresets.brown()))
    _add(world, Sphere(Vector3(4, 1, 0), 1.0, MetalPresets.mirror()))

    camera = {
        "vfov": 20,
        "lookfrom": Vector3(13, 2, 3),
        "lookat": Vector3(0, 0, 0),
        "vup": Vector3(0, 1, 0),
        "defocus_angle": 0.6,
        "focus_dist": 10.0,
    }
    return world, camera

SCENES: Dict[str, Callable[[random.Random], Tuple[HittableList, Dict]]] = {
    "ground": ground_scene,
    "materials": materials_scene,
    "final": final_scene,
}

def build_scene(name: str, seed: Optional[int] = None) -> Tuple[HittableList, Dict]:
    """
    Build a named scene. Returns the world and the keyword arguments for
    positioning the Camera.
    """
    if name not in SCENES:
        raise ValueError(f"unknown scene {name!r}, expected one of {sorted(SCENES)}")
    world, camera = SCENES[name](random.Random(seed))
    logger.info("Built scene %r with %d objects", name, len(world))
    return world, camera
