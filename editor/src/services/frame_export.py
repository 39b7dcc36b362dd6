"""Frame export - RGBA framebuffers to Pillow images and PNG files."""

import logging
import os

import numpy as np
from PIL import Image

from constants import BYTES_PER_PIXEL

logger = logging.getLogger(__name__)


def frame_to_image(buffer, width, height):
    """Wrap an RGBA framebuffer as a Pillow image (copies the pixels).

    Args:
        buffer: bytes-like RGBA frame of width * height * 4 bytes
        width, height: Frame size in pixels

    Returns:
        PIL.Image.Image in RGBA mode
    """
    pixels = np.frombuffer(buffer, dtype=np.uint8)
    if pixels.size != width * height * BYTES_PER_PIXEL:
        raise ValueError(f"Frame holds {pixels.size} bytes, expected {width * height * BYTES_PER_PIXEL}")
    return Image.fromarray(pixels.reshape(height, width, BYTES_PER_PIXEL).copy())


def save_frame(buffer, width, height, path):
    """Write an RGBA framebuffer to a PNG file, creating parent directories.

    Returns:
        The path written
    """
    directory = os.path.dirname(os.path.abspath(path))
    os.makedirs(directory, exist_ok=True)
    frame_to_image(buffer, width, height).save(path, format='PNG')
    logger.debug("Saved frame %dx%d to %s", width, height, path)
    return path
