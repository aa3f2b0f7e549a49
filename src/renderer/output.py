# renderer/output.py
import logging
import sys
from pathlib import Path
from typing import TextIO, Union
import numpy as np
from PIL import Image

logger = logging.getLogger(__name__)

def write_ppm(stream: TextIO, rgb: np.ndarray):
    """
    Write an (height, width, 3) uint8 image as plain-text PPM (P3).
    """
    height, width = rgb.shape[:2]
    stream.write(f"P3\n{width} {height}\n255\n")
    for r, g, b in rgb.reshape(-1, 3):
        stream.write(f"{r} {g} {b}\n")

def save_image(path: Union[str, Path], rgb: np.ndarray):
    """
    Save the encoded image. "-" writes P3 text to stdout, ".ppm" writes P3
    text to a file and every other extension goes through Pillow.
    """
    if str(path) == "-":
        write_ppm(sys.stdout, rgb)
        sys.stdout.flush()
        return

    path = Path(path)
    if path.suffix.lower() == ".ppm":
        with open(path, "w", encoding="ascii") as f:
            write_ppm(f, rgb)
    else:
        Image.fromarray(rgb).save(path)
    logger.info("Wrote %dx%d image to %s", rgb.shape[1], rgb.shape[0], path)
