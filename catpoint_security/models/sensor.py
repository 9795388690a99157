"""Sensor data model."""

import functools
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict


class SensorType(Enum):
    """Kind of physical detector a sensor represents."""
    DOOR = "DOOR"
    WINDOW = "WINDOW"
    MOTION = "MOTION"


@functools.total_ordering
@dataclass(eq=False)
class Sensor:
    """A named, typed binary input.

    Identity is the generated ``sensor_id``: two sensors are equal when their
    identifiers match, whatever their name or activation state. Sensors sort
    by name first and identifier second.
    """
    name: str
    sensor_type: SensorType
    active: bool = False
    sensor_id: uuid.UUID = field(default_factory=uuid.uuid4)

    def __eq__(self, other):
        if not isinstance(other, Sensor):
            return NotImplemented
        return self.sensor_id == other.sensor_id

    def __hash__(self):
        return hash(self.sensor_id)

    def __lt__(self, other):
        if not isinstance(other, Sensor):
            return NotImplemented
        return (self.name, str(self.sensor_id)) < (other.name, str(other.sensor_id))

    def to_dict(self) -> Dict[str, Any]:
        """Serialize sensor to a JSON-compatible dict."""
        return {
            'sensor_id': str(self.sensor_id),
            'name': self.name,
            'sensor_type': self.sensor_type.name,
            'active': self.active
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Sensor":
        """Rebuild a sensor from :meth:`to_dict` output.

        Raises KeyError or ValueError on malformed data.
        """
        return cls(
            name=str(data['name']),
            sensor_type=SensorType[data['sensor_type']],
            active=bool(data.get('active', False)),
            sensor_id=uuid.UUID(data['sensor_id'])
        )
