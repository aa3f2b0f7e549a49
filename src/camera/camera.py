# camera/camera.py
import math
from typing import Callable, Optional
import numpy as np
from core.vector import Vector3
from core.ray import Ray
from core.utils import degrees_to_radians, random_in_unit_disk
from geometry.hittable import Hittable
from renderer.integrator import ray_color

class Camera:
    """
    Positionable camera with anti-aliasing and thin-lens depth of field.

    All derived viewport state is computed once in the constructor; the
    camera is read-only afterwards and can be shared between workers.
    """
    def __init__(self, aspect_ratio: float = 1.0, image_width: int = 100,
                 samples_per_pixel: int = 10, max_depth: int = 10,
                 vfov: float = 90.0,
                 lookfrom: Vector3 = None, lookat: Vector3 = None, vup: Vector3 = None,
                 defocus_angle: float = 0.0, focus_dist: float = 10.0):
        self.aspect_ratio = aspect_ratio
        self.image_width = image_width
        self.samples_per_pixel = samples_per_pixel
        self.max_depth = max_depth
        self.vfov = vfov  # Vertical field of view in degrees
        self.lookfrom = lookfrom if lookfrom is not None else Vector3(0, 0, 0)
        self.lookat = lookat if lookat is not None else Vector3(0, 0, -1)
        self.vup = vup if vup is not None else Vector3(0, 1, 0)
        self.defocus_angle = defocus_angle  # Cone angle of rays through each pixel, degrees
        self.focus_dist = focus_dist  # Distance to the plane of perfect focus
        self.update_camera()

    def update_camera(self):
        """Computes the camera's basis vectors and viewport."""
        self.image_height = max(1, int(self.image_width / self.aspect_ratio))
        self.pixel_samples_scale = 1.0 / self.samples_per_pixel
        self.center = self.lookfrom

        theta = degrees_to_radians(self.vfov)
        h = math.tan(theta / 2)
        viewport_height = 2.0 * h * self.focus_dist
        viewport_width = viewport_height * (self.image_width / self.image_height)

        # Orthonormal basis: w points backwards, u right, v up
        self.w = (self.lookfrom - self.lookat).normalize()
        self.u = self.vup.cross(self.w).normalize()
        self.v = self.w.cross(self.u)

        # Viewport edges; v runs down the image
        viewport_u = self.u * viewport_width
        viewport_v = -self.v * viewport_height

        self.pixel_delta_u = viewport_u / self.image_width
        self.pixel_delta_v = viewport_v / self.image_height

        viewport_upper_left = (self.center -
                               self.w * self.focus_dist -
                               viewport_u / 2 -
                               viewport_v / 2)
        self.pixel00_loc = viewport_upper_left + (self.pixel_delta_u + self.pixel_delta_v) * 0.5

        defocus_radius = self.focus_dist * math.tan(degrees_to_radians(self.defocus_angle / 2))
        self.defocus_disk_u = self.u * defocus_radius
        self.defocus_disk_v = self.v * defocus_radius

    def get_ray(self, i: int, j: int, rng) -> Ray:
        """
        Ray from the lens towards a random point inside pixel (i, j).
        """
        offset_x = rng.random() - 0.5
        offset_y = rng.random() - 0.5
        pixel_sample = (self.pixel00_loc +
                        self.pixel_delta_u * (i + offset_x) +
                        self.pixel_delta_v * (j + offset_y))

        if self.defocus_angle <= 0:
            ray_origin = self.center
        else:
            ray_origin = self.defocus_disk_sample(rng)

        return Ray(ray_origin, pixel_sample - ray_origin)

    def defocus_disk_sample(self, rng) -> Vector3:
        p = random_in_unit_disk(rng)
        return self.center + self.defocus_disk_u * p.x + self.defocus_disk_v * p.y

    def render_pixel(self, i: int, j: int, world: Hittable, rng) -> Vector3:
        """Monte Carlo estimate of the radiance reaching pixel (i, j)."""
        pixel_color = Vector3(0.0, 0.0, 0.0)
        for _ in range(self.samples_per_pixel):
            pixel_color = pixel_color + ray_color(self.get_ray(i, j, rng), self.max_depth, world, rng)
        return pixel_color * self.pixel_samples_scale

    def render_rows(self, world: Hittable, start: int, end: int,
                    rng_for_row: Callable[[int], object],
                    on_row: Optional[Callable[[int], None]] = None,
                    out: Optional[np.ndarray] = None) -> np.ndarray:
        """
        Render scanlines [start, end) into an (end - start, width, 3) slab.

        rng_for_row(j) supplies the generator for scanline j. When out is
        given the slab is written there in place.
        """
        if out is None:
            out = np.zeros((end - start, self.image_width, 3), dtype=np.float64)
        for j in range(start, end):
            rng = rng_for_row(j)
            row = out[j - start]
            for i in range(self.image_width):
                c = self.render_pixel(i, j, world, rng)
                row[i, 0] = c.x
                row[i, 1] = c.y
                row[i, 2] = c.z
            if on_row is not None:
                on_row(j)
        return out

    def __repr__(self) -> str:
        return (f"Camera({self.image_width}x{self.image_height}, spp={self.samples_per_pixel}, "
                f"depth={self.max_depth}, vfov={self.vfov})")
