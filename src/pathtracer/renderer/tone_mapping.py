# renderer/tone_mapping.py
import math
import numpy as np
from numba import njit


@njit
def gamma_quantize(accumulated, samples_per_pixel):
    """
    Convert summed linear radiance into an 8-bit RGB image.

    Each channel is divided by the sample count, gamma-corrected with a
    square root, clamped to [0, 0.999] and mapped to floor(256 * value).

    Parameters:
        accumulated: float64 array of shape (height, width, 3) holding the
            per-pixel sum of all samples.
        samples_per_pixel: number of samples summed into each pixel.

    Returns:
        uint8 array of shape (height, width, 3).
    """
    height, width, channels = accumulated.shape
    output = np.empty((height, width, channels), dtype=np.uint8)
    scale = 1.0 / samples_per_pixel
    for j in range(height):
        for i in range(width):
            for c in range(channels):
                value = accumulated[j, i, c] * scale
                if value > 0.0:
                    value = math.sqrt(value)
                else:
                    value = 0.0
                if value > 0.999:
                    value = 0.999
                output[j, i, c] = int(math.floor(256.0 * value))
    return output
