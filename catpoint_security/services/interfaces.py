"""Service interfaces and abstract base classes."""

from abc import ABC, abstractmethod
from typing import Optional, Set

from ..models.sensor import Sensor
from ..models.status import AlarmStatus, ArmingStatus


class SecurityRepositoryInterface(ABC):
    """Interface for durable storage of sensors and system status."""

    @abstractmethod
    def add_sensor(self, sensor: Sensor) -> None:
        """Add a sensor to the tracked set."""
        pass

    @abstractmethod
    def remove_sensor(self, sensor: Sensor) -> None:
        """Remove a sensor from the tracked set."""
        pass

    @abstractmethod
    def update_sensor(self, sensor: Sensor) -> None:
        """Replace the stored sensor with the same identity."""
        pass

    @abstractmethod
    def get_sensors(self) -> Optional[Set[Sensor]]:
        """Get a snapshot of the tracked sensors."""
        pass

    @abstractmethod
    def get_alarm_status(self) -> Optional[AlarmStatus]:
        """Get the persisted alarm status."""
        pass

    @abstractmethod
    def set_alarm_status(self, alarm_status: AlarmStatus) -> None:
        """Persist the alarm status."""
        pass

    @abstractmethod
    def get_arming_status(self) -> Optional[ArmingStatus]:
        """Get the persisted arming status."""
        pass

    @abstractmethod
    def set_arming_status(self, arming_status: ArmingStatus) -> None:
        """Persist the arming status."""
        pass


class ImageServiceInterface(ABC):
    """Interface for image classification."""

    @abstractmethod
    def classify(self, image: bytes, confidence_threshold: float) -> bool:
        """Return True if the image contains a cat.

        ``confidence_threshold`` is a percentage in [0, 100].
        """
        pass


class StatusListener(ABC):
    """Interface for consumers of security status changes."""

    @abstractmethod
    def on_alarm_status_changed(self, status: AlarmStatus) -> None:
        """Called once per real alarm status change."""
        pass

    @abstractmethod
    def on_cat_detected(self, cat_detected: bool) -> None:
        """Called after every image evaluation."""
        pass

    @abstractmethod
    def on_sensor_status_changed(self) -> None:
        """Called when a sensor is added, removed or toggled."""
        pass
