"""Default configuration values and constants."""

from typing import Dict, Any

# Default system configuration
DEFAULT_CONFIG: Dict[str, Any] = {
    # Storage settings
    "storage_dir": "data",
    "database_file": "data/catpoint.db",

    # Image classification settings
    "image_service": "fake",
    "cascade_path": None,
    "confidence_threshold": 50.0,
    "image_quality": 85,

    # Front end settings
    "max_sensors": 4,

    # Logging settings
    "log_level": "INFO",
    "log_dir": "logs"
}

# System constants
SYSTEM_CONSTANTS = {
    "CAT_CONFIDENCE_THRESHOLD_PERCENT": 50.0,
    "LOG_ROTATION_SIZE_MB": 10,
    "LOG_BACKUP_COUNT": 5
}

# Preference store keys
PREFERENCE_KEYS = {
    "sensors": "SENSORS",
    "alarm_status": "ALARM_STATUS",
    "arming_status": "ARMING_STATUS"
}

# File paths and directories
DEFAULT_PATHS = {
    "config_file": "config.json",
    "storage_dir": "data",
    "logs_dir": "logs",
    "database_file": "data/catpoint.db"
}

# Haar cascade settings for the OpenCV image service
CASCADE_SETTINGS = {
    "builtin_cascades": [
        "haarcascade_frontalcatface.xml",
        "haarcascade_frontalcatface_extended.xml"
    ],
    "scale_factor": 1.1,
    "min_neighbors": 3,
    "min_size": (30, 30),
    "max_size": (300, 300)
}
