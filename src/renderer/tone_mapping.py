# renderer/tone_mapping.py
import numpy as np
from core.interval import Interval

# Upper bound keeps a full-intensity channel at 255 rather than 256
INTENSITY = Interval(0.000, 0.999)

def linear_to_gamma(linear: np.ndarray) -> np.ndarray:
    """
    Gamma 2 transfer: square root of positive components, zero otherwise.
    """
    linear = np.asarray(linear, dtype=np.float64)
    return np.sqrt(np.where(linear > 0, linear, 0.0))

def gamma_tone_mapping(accumulated: np.ndarray) -> np.ndarray:
    """
    Convert a linear radiance image to 8-bit display values.
    """
    mapped = np.clip(linear_to_gamma(accumulated), INTENSITY.min, INTENSITY.max)
    return (256 * mapped).astype(np.uint8)
