# renderer/image_io.py
import os
from typing import TextIO

import numpy as np
from PIL import Image


def write_ppm(image: np.ndarray, stream: TextIO):
    """
    Write an RGB8 image as plain-text PPM (P3): a three line header, then
    one "R G B" line per pixel, top row first, left to right.
    """
    height, width, _ = image.shape
    stream.write(f"P3\n{width} {height}\n255\n")
    for row in image:
        for r, g, b in row:
            stream.write(f"{r} {g} {b}\n")


def save_image(image: np.ndarray, path: str):
    """
    Save an RGB8 image. `.ppm` files are written as P3 text; every other
    extension is encoded by Pillow (PNG, BMP, JPEG, ...).

    Errors from the filesystem or the encoder propagate to the caller.
    """
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    if path.lower().endswith(".ppm"):
        with open(path, "w") as stream:
            write_ppm(image, stream)
        return
    Image.fromarray(np.ascontiguousarray(image, dtype=np.uint8)).save(path)
