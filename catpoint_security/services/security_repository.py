"""Security repository persisting sensors and status in the preference store."""

import json
import sqlite3
import threading
import uuid
from typing import Dict, Set

from ..config.defaults import PREFERENCE_KEYS
from ..logging_config import get_logger
from ..models.sensor import Sensor
from ..models.status import AlarmStatus, ArmingStatus
from .error_handler import ErrorSeverity, global_error_handler
from .interfaces import SecurityRepositoryInterface
from .preference_store import PreferenceStore

logger = get_logger("security_repository")

COMPONENT_NAME = "security_repository"


class PreferencesSecurityRepository(SecurityRepositoryInterface):
    """Repository keeping sensors, alarm status and arming status durable.

    State is read from the store once, at construction. Corrupt or missing
    data yields an empty sensor set, NO_ALARM and DISARMED. A failed write
    is logged and recorded; the in-memory value stays current so callers
    keep working from the last-known state.
    """

    def __init__(self, store: PreferenceStore):
        self.store = store
        self._lock = threading.RLock()
        self._sensors: Dict[uuid.UUID, Sensor] = {}
        self._alarm_status = AlarmStatus.NO_ALARM
        self._arming_status = ArmingStatus.DISARMED

        global_error_handler.register_component(COMPONENT_NAME)
        self._load_state()

    def add_sensor(self, sensor: Sensor) -> None:
        if sensor is None:
            return
        with self._lock:
            if sensor.sensor_id in self._sensors:
                return
            self._sensors[sensor.sensor_id] = sensor
            self._save_sensors()

    def remove_sensor(self, sensor: Sensor) -> None:
        if sensor is None:
            return
        with self._lock:
            if self._sensors.pop(sensor.sensor_id, None) is not None:
                self._save_sensors()

    def update_sensor(self, sensor: Sensor) -> None:
        if sensor is None:
            return
        with self._lock:
            if sensor.sensor_id not in self._sensors:
                logger.warning(f"Attempted to update sensor not found in the set: {sensor.name}")
                return
            self._sensors[sensor.sensor_id] = sensor
            self._save_sensors()

    def get_sensors(self) -> Set[Sensor]:
        with self._lock:
            return set(self._sensors.values())

    def get_alarm_status(self) -> AlarmStatus:
        with self._lock:
            return self._alarm_status

    def set_alarm_status(self, alarm_status: AlarmStatus) -> None:
        with self._lock:
            if alarm_status is None or alarm_status == self._alarm_status:
                return
            self._alarm_status = alarm_status
            self._save(PREFERENCE_KEYS["alarm_status"], alarm_status.name)

    def get_arming_status(self) -> ArmingStatus:
        with self._lock:
            return self._arming_status

    def set_arming_status(self, arming_status: ArmingStatus) -> None:
        with self._lock:
            if arming_status is None or arming_status == self._arming_status:
                return
            self._arming_status = arming_status
            self._save(PREFERENCE_KEYS["arming_status"], arming_status.name)

    def _load_state(self) -> None:
        """Load persisted state, falling back to defaults on any decode error."""
        try:
            alarm_name = self.store.get(PREFERENCE_KEYS["alarm_status"], AlarmStatus.NO_ALARM.name)
            arming_name = self.store.get(PREFERENCE_KEYS["arming_status"], ArmingStatus.DISARMED.name)
            sensors_json = self.store.get(PREFERENCE_KEYS["sensors"])

            alarm_status = AlarmStatus[alarm_name]
            arming_status = ArmingStatus[arming_name]
            sensors = self._deserialize_sensors(sensors_json)

        except (KeyError, ValueError, TypeError, AttributeError, sqlite3.Error) as e:
            logger.error(f"Failed to load state from preferences, using defaults: {e}")
            global_error_handler.handle_error(COMPONENT_NAME, e, ErrorSeverity.HIGH)
            alarm_status = AlarmStatus.NO_ALARM
            arming_status = ArmingStatus.DISARMED
            sensors = {}

        self._alarm_status = alarm_status
        self._arming_status = arming_status
        self._sensors = sensors
        logger.info(f"Loaded {len(sensors)} sensors, alarm={alarm_status.name}, arming={arming_status.name}")

    def _deserialize_sensors(self, sensors_json) -> Dict[uuid.UUID, Sensor]:
        """Deserialize the sensor list stored under the SENSORS key."""
        if sensors_json is None or not sensors_json.strip():
            return {}

        sensors_data = json.loads(sensors_json)
        if not isinstance(sensors_data, list):
            raise ValueError(f"Expected a list of sensors, got {type(sensors_data).__name__}")

        sensors = {}
        for sensor_data in sensors_data:
            sensor = Sensor.from_dict(sensor_data)
            sensors[sensor.sensor_id] = sensor
        return sensors

    def _save_sensors(self) -> None:
        sensors_data = [sensor.to_dict() for sensor in sorted(self._sensors.values())]
        self._save(PREFERENCE_KEYS["sensors"], json.dumps(sensors_data))

    def _save(self, key: str, value: str) -> None:
        try:
            self.store.put(key, value)
        except sqlite3.Error as e:
            logger.error(f"Failed to save preference {key}: {e}")
            global_error_handler.handle_error(COMPONENT_NAME, e, ErrorSeverity.HIGH)
