"""
Catpoint Security System

Alarm engine for a simulated home-security installation: arming modes,
door/window/motion sensors and camera-based cat detection resolve into a
single alarm status that observers are notified about.
"""

__version__ = "1.0.0"
__author__ = "Catpoint Security System"

# Import core components
from .config_manager import ConfigManager
from .models import (
    Sensor,
    SensorType,
    AlarmStatus,
    ArmingStatus,
    SecurityConfig
)
from .services import (
    SecurityRepositoryInterface,
    ImageServiceInterface,
    StatusListener
)
from .services.security_service import SecurityService

__all__ = [
    # Core management
    'ConfigManager',
    'SecurityService',

    # Data models
    'Sensor',
    'SensorType',
    'AlarmStatus',
    'ArmingStatus',
    'SecurityConfig',

    # Service interfaces
    'SecurityRepositoryInterface',
    'ImageServiceInterface',
    'StatusListener'
]
