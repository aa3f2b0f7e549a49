# main.py
import argparse
import logging
import sys
from camera.camera import Camera
from core.log import setup_logging
from renderer.output import save_image
from renderer.raytracer import BACKENDS, Renderer
from renderer.settings import QUALITY_LEVELS, RenderSettings
from renderer.tone_mapping import gamma_tone_mapping
from scenes import SCENES, build_scene

logger = logging.getLogger(__name__)

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Monte Carlo path tracer for sphere scenes")
    parser.add_argument("--scene", choices=sorted(SCENES), default="final",
                        help="Scene to render")
    parser.add_argument("--quality", choices=list(QUALITY_LEVELS), default="balanced",
                        help="Preset for samples, bounces and resolution")
    parser.add_argument("--width", type=int, help="Image width in pixels")
    parser.add_argument("--aspect-ratio", type=float, help="Width / height ratio")
    parser.add_argument("--samples", type=int, help="Samples per pixel")
    parser.add_argument("--depth", type=int, help="Maximum number of ray bounces")
    parser.add_argument("--workers", type=int, help="Worker count (default: CPU count)")
    parser.add_argument("--backend", choices=BACKENDS, help="Run workers as threads or processes")
    parser.add_argument("--seed", type=int, help="Seed for a reproducible render")
    parser.add_argument("--output", "-o", default="-",
                        help="Output file (.ppm as text, others via Pillow); '-' for stdout")
    parser.add_argument("--preview", action="store_true",
                        help="Show the finished image in a window")
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"])
    return parser

def settings_from_args(parser: argparse.ArgumentParser, args: argparse.Namespace) -> RenderSettings:
    try:
        return RenderSettings.from_quality(
            args.quality,
            image_width=args.width,
            aspect_ratio=args.aspect_ratio,
            samples_per_pixel=args.samples,
            max_depth=args.depth,
            workers=args.workers,
            backend=args.backend,
            seed=args.seed,
        ).validate()
    except ValueError as e:
        parser.error(str(e))

def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)
    settings = settings_from_args(parser, args)

    world, camera_kwargs = build_scene(args.scene, settings.seed)
    camera = Camera(
        aspect_ratio=settings.aspect_ratio,
        image_width=settings.image_width,
        samples_per_pixel=settings.samples_per_pixel,
        max_depth=settings.max_depth,
        **camera_kwargs,
    )
    progress = sys.stderr if logging.getLogger().isEnabledFor(logging.INFO) else None
    renderer = Renderer(camera, workers=settings.workers, backend=settings.backend,
                        seed=settings.seed, progress_stream=progress)

    try:
        pixels = renderer.render(world)
    except KeyboardInterrupt:
        logger.error("Render interrupted")
        return 130
    except Exception:
        logger.exception("Render failed")
        return 1

    rgb = gamma_tone_mapping(pixels)
    save_image(args.output, rgb)

    if args.preview:
        from renderer.preview import show_image
        show_image(rgb, title=f"{args.scene} ({renderer.elapsed:.1f}s)")
    return 0

if __name__ == "__main__":
    sys.exit(main())
