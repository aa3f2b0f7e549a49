# renderer/settings.py
from dataclasses import dataclass, fields, replace
from typing import Optional
from renderer.raytracer import BACKENDS

# Samples per pixel, bounce limit and image width multiplier per preset.
QUALITY_LEVELS = {
    "preview": {"samples": 4, "bounces": 8, "scale": 0.5},
    "balanced": {"samples": 32, "bounces": 20, "scale": 1.0},
    "final": {"samples": 500, "bounces": 50, "scale": 1.0},
}

@dataclass
class RenderSettings:
    image_width: int = 400
    aspect_ratio: float = 16.0 / 9.0
    samples_per_pixel: int = 10
    max_depth: int = 10
    workers: Optional[int] = None
    backend: str = "thread"
    seed: Optional[int] = None

    @classmethod
    def from_quality(cls, name: str, **overrides) -> "RenderSettings":
        """Settings for a QUALITY_LEVELS preset; None overrides are ignored."""
        if name not in QUALITY_LEVELS:
            raise KeyError(f"unknown quality level {name!r}, expected one of {sorted(QUALITY_LEVELS)}")
        quality = QUALITY_LEVELS[name]
        settings = cls(
            image_width=max(1, int(cls.image_width * quality["scale"])),
            samples_per_pixel=quality["samples"],
            max_depth=quality["bounces"],
        )
        known = {f.name for f in fields(cls)}
        unknown = set(overrides) - known
        if unknown:
            raise TypeError(f"unknown settings: {sorted(unknown)}")
        return replace(settings, **{k: v for k, v in overrides.items() if v is not None})

    def validate(self) -> "RenderSettings":
        if self.image_width < 1:
            raise ValueError(f"image_width must be positive, got {self.image_width}")
        if self.aspect_ratio <= 0:
            raise ValueError(f"aspect_ratio must be positive, got {self.aspect_ratio}")
        if self.samples_per_pixel < 1:
            raise ValueError(f"samples_per_pixel must be positive, got {self.samples_per_pixel}")
        if self.max_depth < 1:
            raise ValueError(f"max_depth must be positive, got {self.max_depth}")
        if self.workers is not None and self.workers < 1:
            raise ValueError(f"workers must be positive, got {self.workers}")
        if self.backend not in BACKENDS:
            raise ValueError(f"backend must be one of {BACKENDS}, got {self.backend!r}")
        if self.seed is not None and self.seed < 0:
            raise ValueError(f"seed must be non-negative, got {self.seed}")
        return self
