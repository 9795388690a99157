"""Configuration data models."""

from dataclasses import dataclass
from typing import Optional


@dataclass
class SecurityConfig:
    """System configuration settings."""
    # Storage settings
    storage_dir: str = "data"
    database_file: str = "data/catpoint.db"

    # Image classification settings
    image_service: str = "fake"  # fake, opencv
    cascade_path: Optional[str] = None  # None uses the cascades bundled with OpenCV
    confidence_threshold: float = 50.0  # Percent
    image_quality: int = 85

    # Front end settings
    max_sensors: int = 4

    # Logging settings
    log_level: str = "INFO"
    log_dir: str = "logs"
