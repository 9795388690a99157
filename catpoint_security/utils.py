"""Utility functions for the Catpoint security system."""

import io
import os

from PIL import Image, UnidentifiedImageError

from .models.sensor import Sensor


def ensure_directory_exists(path: str) -> None:
    """Ensure a directory exists, create if it doesn't."""
    if not os.path.exists(path):
        os.makedirs(path, exist_ok=True)


def load_image_bytes(image_path: str, quality: int = 85) -> bytes:
    """Read an image file and re-encode it as JPEG bytes.

    Raises:
        ValueError: if the file is missing or is not a readable image
    """
    try:
        with Image.open(image_path) as image:
            rgb_image = image.convert('RGB')
    except (OSError, UnidentifiedImageError) as e:
        raise ValueError(f"Could not read image file {image_path}: {e}") from e

    buffer = io.BytesIO()
    rgb_image.save(buffer, 'JPEG', quality=max(1, min(100, quality)))
    return buffer.getvalue()


def format_sensor(sensor: Sensor) -> str:
    """Format a sensor as a one-line display string."""
    state = "Active" if sensor.active else "Inactive"
    return f"{sensor.name}({sensor.sensor_type.name}): {state}"
