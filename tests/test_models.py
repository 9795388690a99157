"""Unit tests for data models."""

import unittest
import uuid
import sys
import os

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from catpoint_security.models.sensor import Sensor, SensorType
from catpoint_security.models.status import AlarmStatus, ArmingStatus


class TestSensor(unittest.TestCase):
    """Test cases for Sensor."""

    def test_defaults(self):
        sensor = Sensor("Front Door", SensorType.DOOR)

        self.assertFalse(sensor.active)
        self.assertIsInstance(sensor.sensor_id, uuid.UUID)

    def test_identity_defines_equality(self):
        sensor = Sensor("Front Door", SensorType.DOOR)
        same_id = Sensor("Renamed", SensorType.DOOR, active=True, sensor_id=sensor.sensor_id)
        other = Sensor("Front Door", SensorType.DOOR)

        self.assertEqual(sensor, same_id)
        self.assertEqual(hash(sensor), hash(same_id))
        self.assertNotEqual(sensor, other)
        self.assertEqual(len({sensor, same_id, other}), 2)

    def test_toggling_active_keeps_set_membership(self):
        sensor = Sensor("Front Door", SensorType.DOOR)
        sensors = {sensor}

        sensor.active = True

        self.assertIn(sensor, sensors)

    def test_ordering_by_name_then_id(self):
        first_id = uuid.UUID("00000000-0000-0000-0000-000000000001")
        second_id = uuid.UUID("00000000-0000-0000-0000-000000000002")
        b = Sensor("b", SensorType.WINDOW)
        a2 = Sensor("a", SensorType.MOTION, sensor_id=second_id)
        a1 = Sensor("a", SensorType.DOOR, sensor_id=first_id)
        upper = Sensor("Z", SensorType.DOOR)

        self.assertEqual(sorted([b, a2, a1, upper]), [upper, a1, a2, b])

    def test_dict_round_trip(self):
        sensor = Sensor("Hall", SensorType.MOTION, active=True)

        data = sensor.to_dict()
        restored = Sensor.from_dict(data)

        self.assertEqual(data['sensor_type'], "MOTION")
        self.assertEqual(restored, sensor)
        self.assertEqual(restored.name, "Hall")
        self.assertEqual(restored.sensor_type, SensorType.MOTION)
        self.assertTrue(restored.active)

    def test_from_dict_rejects_unknown_type(self):
        data = Sensor("Hall", SensorType.MOTION).to_dict()
        data['sensor_type'] = "LASER"

        with self.assertRaises(KeyError):
            Sensor.from_dict(data)


class TestStatus(unittest.TestCase):
    """Test cases for status enumerations."""

    def test_alarm_status_ordering(self):
        self.assertLess(AlarmStatus.NO_ALARM, AlarmStatus.PENDING_ALARM)
        self.assertLess(AlarmStatus.PENDING_ALARM, AlarmStatus.ALARM)
        self.assertEqual(max(AlarmStatus), AlarmStatus.ALARM)

    def test_display_attributes(self):
        self.assertEqual(ArmingStatus.ARMED_HOME.description, "Armed - At Home")
        self.assertEqual(AlarmStatus.ALARM.description, "Awooga!")
        for status in list(ArmingStatus) + list(AlarmStatus):
            self.assertEqual(len(status.color), 3)

    def test_lookup_by_name(self):
        for status in ArmingStatus:
            self.assertIs(ArmingStatus[status.name], status)
        for status in AlarmStatus:
            self.assertIs(AlarmStatus[status.name], status)


if __name__ == '__main__':
    unittest.main()
