"""Arming and alarm status enumerations."""

import functools
from enum import Enum
from typing import Tuple


class ArmingStatus(Enum):
    """Operator-selected arming mode."""
    DISARMED = "DISARMED"
    ARMED_HOME = "ARMED_HOME"
    ARMED_AWAY = "ARMED_AWAY"

    @property
    def description(self) -> str:
        return _ARMING_DISPLAY[self][0]

    @property
    def color(self) -> Tuple[int, int, int]:
        return _ARMING_DISPLAY[self][1]


@functools.total_ordering
class AlarmStatus(Enum):
    """Alarm escalation level, ordered NO_ALARM < PENDING_ALARM < ALARM."""
    NO_ALARM = "NO_ALARM"
    PENDING_ALARM = "PENDING_ALARM"
    ALARM = "ALARM"

    @property
    def description(self) -> str:
        return _ALARM_DISPLAY[self][0]

    @property
    def color(self) -> Tuple[int, int, int]:
        return _ALARM_DISPLAY[self][1]

    @property
    def level(self) -> int:
        return _ALARM_LEVELS.index(self)

    def __lt__(self, other):
        if not isinstance(other, AlarmStatus):
            return NotImplemented
        return self.level < other.level


_ARMING_DISPLAY = {
    ArmingStatus.DISARMED: ("Disarmed", (120, 200, 30)),
    ArmingStatus.ARMED_HOME: ("Armed - At Home", (190, 180, 50)),
    ArmingStatus.ARMED_AWAY: ("Armed - Away", (170, 30, 150)),
}

_ALARM_DISPLAY = {
    AlarmStatus.NO_ALARM: ("Cool and Good", (120, 200, 30)),
    AlarmStatus.PENDING_ALARM: ("I'm in Danger...", (200, 150, 20)),
    AlarmStatus.ALARM: ("Awooga!", (250, 80, 50)),
}

_ALARM_LEVELS = [AlarmStatus.NO_ALARM, AlarmStatus.PENDING_ALARM, AlarmStatus.ALARM]
