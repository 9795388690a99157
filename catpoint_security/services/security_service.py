"""Alarm engine arbitrating arming mode, sensors and cat detection."""

import logging
import threading
from typing import List, Optional, Set

from ..config.defaults import SYSTEM_CONSTANTS
from ..logging_config import get_logger, log_with_context
from ..models.sensor import Sensor
from ..models.status import AlarmStatus, ArmingStatus
from .error_handler import ErrorSeverity, global_error_handler
from .interfaces import ImageServiceInterface, SecurityRepositoryInterface, StatusListener

logger = get_logger("security_service")

CAT_CONFIDENCE_THRESHOLD = SYSTEM_CONSTANTS["CAT_CONFIDENCE_THRESHOLD_PERCENT"]

_ALARM_LEVELS = (AlarmStatus.PENDING_ALARM, AlarmStatus.ALARM)


class SecurityService:
    """Derives the alarm status from arming mode, sensors and camera images.

    All state lives in the repository except the transient cat-detected
    flag. Every public operation holds one re-entrant lock for its whole
    duration, listener callbacks included, so listeners run synchronously on
    the caller's thread. The only work done outside the lock is the image
    classification itself.
    """

    def __init__(self, security_repository: SecurityRepositoryInterface,
                 image_service: ImageServiceInterface,
                 confidence_threshold: float = CAT_CONFIDENCE_THRESHOLD):
        if security_repository is None:
            raise ValueError("security_repository cannot be None")
        if image_service is None:
            raise ValueError("image_service cannot be None")

        self.security_repository = security_repository
        self.image_service = image_service
        self.confidence_threshold = confidence_threshold

        self._lock = threading.RLock()
        self._status_listeners: List[StatusListener] = []
        self._cat_detected = False

        global_error_handler.register_component("security_service")

    # Arming

    def set_arming_status(self, arming_status: Optional[ArmingStatus]) -> None:
        """Change the arming mode.

        Disarming clears any alarm. Arming first deactivates every active
        sensor, while the previous arming status is still in effect, then
        persists the new mode. Arming at home while a cat is on camera
        raises the alarm immediately.
        """
        if arming_status is None:
            logger.warning("Attempted to set None arming status, ignoring")
            return

        with self._lock:
            if arming_status == ArmingStatus.DISARMED:
                self.set_alarm_status(AlarmStatus.NO_ALARM)
                self.security_repository.set_arming_status(arming_status)
                logger.info("System status set to DISARMED")
                return

            logger.info(f"Arming system to {arming_status.name}, resetting sensors")
            for sensor in self.get_sensors():
                if sensor is not None and sensor.active:
                    self.change_sensor_activation(sensor, False)
                    logger.debug(f"Deactivated sensor '{sensor.name}' during arming")

            self.security_repository.set_arming_status(arming_status)
            logger.info(f"System status set to {arming_status.name}")

            if arming_status == ArmingStatus.ARMED_HOME and self._cat_detected:
                logger.info("Cat detected while arming home, setting alarm")
                self.set_alarm_status(AlarmStatus.ALARM)

    # Alarm gate

    def set_alarm_status(self, alarm_status: Optional[AlarmStatus]) -> None:
        """Single gate for every alarm status change.

        PENDING_ALARM and ALARM are refused while disarmed or while the
        arming status is unknown. Listeners hear about a change exactly once
        and never about a repeat of the current status.
        """
        if alarm_status is None:
            logger.warning("Attempted to set None alarm status, ignoring")
            return

        with self._lock:
            arming_status = self.security_repository.get_arming_status()
            if arming_status is None:
                logger.error("Arming status is unavailable, cannot reliably set alarm status")
                if alarm_status in _ALARM_LEVELS:
                    logger.warning(f"Refusing {alarm_status.name} while arming status is unknown")
                    return
            elif arming_status == ArmingStatus.DISARMED and alarm_status in _ALARM_LEVELS:
                logger.debug(f"Ignoring {alarm_status.name} while system is DISARMED")
                return

            current_status = self.security_repository.get_alarm_status()
            if current_status == alarm_status:
                logger.debug(f"Alarm status already {alarm_status.name}")
                return

            log_with_context(logger, logging.INFO, "Alarm status changed", {
                "from": current_status.name if current_status else None,
                "to": alarm_status.name,
                "arming": arming_status.name if arming_status else None
            })
            self.security_repository.set_alarm_status(alarm_status)
            for listener in list(self._status_listeners):
                listener.on_alarm_status_changed(alarm_status)

    # Sensors

    def change_sensor_activation(self, sensor: Optional[Sensor], active: bool) -> None:
        """Activate or deactivate a sensor and reassess the alarm.

        Requesting the state the sensor is already in does nothing at all.
        """
        if sensor is None:
            logger.warning("Attempted to change activation of a None sensor, ignoring")
            return

        with self._lock:
            if bool(sensor.active) == active:
                logger.debug(f"Sensor '{sensor.name}' already {'active' if active else 'inactive'}")
                return

            logger.info(f"Changing sensor '{sensor.name}' ({sensor.sensor_id}) "
                        f"from {sensor.active} to {active}")
            sensor.active = active
            self.security_repository.update_sensor(sensor)

            if active:
                self._handle_sensor_activated()
            else:
                self._handle_sensor_deactivated()

            for listener in list(self._status_listeners):
                listener.on_sensor_status_changed()

    def add_sensor(self, sensor: Optional[Sensor]) -> None:
        if sensor is None:
            logger.warning("Attempted to add None sensor")
            return

        with self._lock:
            logger.info(f"Adding sensor: {sensor.name} ({sensor.sensor_id})")
            self.security_repository.add_sensor(sensor)
            for listener in list(self._status_listeners):
                listener.on_sensor_status_changed()

    def remove_sensor(self, sensor: Optional[Sensor]) -> None:
        """Remove a sensor; a removed sensor counts as deactivated."""
        if sensor is None:
            logger.warning("Attempted to remove None sensor")
            return

        with self._lock:
            logger.info(f"Removing sensor: {sensor.name} ({sensor.sensor_id})")
            self.security_repository.remove_sensor(sensor)
            self._handle_sensor_deactivated()
            for listener in list(self._status_listeners):
                listener.on_sensor_status_changed()

    def _handle_sensor_activated(self) -> None:
        if self.security_repository.get_arming_status() == ArmingStatus.DISARMED:
            logger.debug("Sensor activated while DISARMED, no status change")
            return

        alarm_status = self.security_repository.get_alarm_status()
        if alarm_status is None:
            logger.error("Cannot handle sensor activation: alarm status is unavailable")
            return

        if alarm_status == AlarmStatus.NO_ALARM:
            self.set_alarm_status(AlarmStatus.PENDING_ALARM)
        elif alarm_status == AlarmStatus.PENDING_ALARM:
            self.set_alarm_status(AlarmStatus.ALARM)
        else:
            logger.debug("Sensor activated while ALARM, no status change")

    def _handle_sensor_deactivated(self) -> None:
        alarm_status = self.security_repository.get_alarm_status()
        if alarm_status is None:
            logger.error("Cannot handle sensor deactivation: alarm status is unavailable")
            return

        if alarm_status != AlarmStatus.PENDING_ALARM:
            return

        if self._all_sensors_inactive():
            logger.info("Last active sensor cleared while PENDING_ALARM, setting NO_ALARM")
            self.set_alarm_status(AlarmStatus.NO_ALARM)
        else:
            logger.debug("Sensor deactivated while PENDING_ALARM, other sensors still active")

    def _all_sensors_inactive(self) -> bool:
        sensors = self.security_repository.get_sensors()
        if sensors is None:
            # Missing sensor set counts as all inactive, so a pending alarm can clear.
            logger.warning("Sensor set is unavailable, assuming all sensors inactive")
            return True
        return not any(sensor is not None and sensor.active for sensor in sensors)

    # Camera

    def process_image(self, image: Optional[bytes]) -> None:
        """Classify a camera image and apply the cat detection result.

        Failures of any kind, in the classifier, the store or a listener,
        count as "no cat" and never reach the caller.
        """
        try:
            cat_detected = False
            if image is None:
                logger.debug("process_image called with no image, assuming no cat")
            else:
                cat_detected = bool(self.image_service.classify(image, self.confidence_threshold))
                logger.debug(f"Image processed, cat detected: {cat_detected}")

            self._handle_cat_detection(cat_detected)
        except Exception as e:
            logger.error(f"Error processing image, assuming no cat: {e}", exc_info=True)
            global_error_handler.handle_error("security_service", e, ErrorSeverity.MEDIUM)
            try:
                self._handle_cat_detection(False)
            except Exception as fallback_error:
                logger.error(f"Could not apply no-cat result: {fallback_error}", exc_info=True)
                global_error_handler.handle_error("security_service", fallback_error, ErrorSeverity.HIGH)

    def _handle_cat_detection(self, cat_detected: bool) -> None:
        with self._lock:
            self._cat_detected = cat_detected

            if cat_detected and self.security_repository.get_arming_status() == ArmingStatus.ARMED_HOME:
                logger.info("Cat detected while ARMED_HOME, setting alarm")
                self.set_alarm_status(AlarmStatus.ALARM)
            elif not cat_detected:
                if self._all_sensors_inactive():
                    self.set_alarm_status(AlarmStatus.NO_ALARM)
                else:
                    logger.debug("No cat detected but sensors are active, alarm status unchanged")

            for listener in list(self._status_listeners):
                listener.on_cat_detected(cat_detected)

    # Listeners

    def add_status_listener(self, listener: Optional[StatusListener]) -> None:
        if listener is None:
            return
        with self._lock:
            if any(registered is listener for registered in self._status_listeners):
                return
            self._status_listeners.append(listener)
            logger.debug(f"Added status listener: {type(listener).__name__}")

    def remove_status_listener(self, listener: Optional[StatusListener]) -> None:
        if listener is None:
            return
        with self._lock:
            for index, registered in enumerate(self._status_listeners):
                if registered is listener:
                    del self._status_listeners[index]
                    logger.debug(f"Removed status listener: {type(listener).__name__}")
                    return

    # Accessors

    def is_cat_detected(self) -> bool:
        with self._lock:
            return self._cat_detected

    def get_alarm_status(self) -> Optional[AlarmStatus]:
        with self._lock:
            return self.security_repository.get_alarm_status()

    def get_arming_status(self) -> Optional[ArmingStatus]:
        with self._lock:
            return self.security_repository.get_arming_status()

    def get_sensors(self) -> Set[Sensor]:
        """Snapshot of the tracked sensors; empty if the store has none."""
        with self._lock:
            sensors = self.security_repository.get_sensors()
            return set(sensors) if sensors is not None else set()
