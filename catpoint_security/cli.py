"""Console front end for the Catpoint security system."""

import argparse
import sys
from typing import List, Optional, TextIO

from .config.defaults import DEFAULT_PATHS
from .config_manager import ConfigManager
from .logging_config import get_logger, setup_logging
from .models.config import SecurityConfig
from .models.sensor import Sensor, SensorType
from .models.status import AlarmStatus, ArmingStatus
from .services.image_service import create_image_service
from .services.interfaces import StatusListener
from .services.preference_store import PreferenceStore
from .services.security_repository import PreferencesSecurityRepository
from .services.security_service import SecurityService
from .utils import format_sensor, load_image_bytes

logger = get_logger("cli")

ARMING_CHOICES = {
    "disarmed": ArmingStatus.DISARMED,
    "home": ArmingStatus.ARMED_HOME,
    "away": ArmingStatus.ARMED_AWAY,
}

SENSOR_LIMIT_MESSAGE = "To add more than {limit} sensors, please subscribe to our Premium Membership!"


class ConsoleStatusListener(StatusListener):
    """Prints status changes as they happen."""

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream or sys.stdout

    def on_alarm_status_changed(self, status: AlarmStatus) -> None:
        print(f"System Status: {status.description}", file=self.stream)

    def on_cat_detected(self, cat_detected: bool) -> None:
        if cat_detected:
            print("DANGER - CAT DETECTED", file=self.stream)
        else:
            print("Camera Feed - No Cats Detected", file=self.stream)

    def on_sensor_status_changed(self) -> None:
        print("Sensors updated", file=self.stream)


class SecurityConsole:
    """Runs console commands against a security service."""

    def __init__(self, service: SecurityService, config: SecurityConfig,
                 stream: Optional[TextIO] = None):
        self.service = service
        self.config = config
        self.stream = stream or sys.stdout

    def show_status(self) -> int:
        print(f"Arming Status: {self.service.get_arming_status().description}", file=self.stream)
        print(f"System Status: {self.service.get_alarm_status().description}", file=self.stream)
        sensors = sorted(self.service.get_sensors())
        if not sensors:
            print("No sensors", file=self.stream)
        for sensor in sensors:
            print(f"  {format_sensor(sensor)}", file=self.stream)
        return 0

    def arm(self, mode: str) -> int:
        self.service.set_arming_status(ARMING_CHOICES[mode])
        return 0

    def add_sensor(self, name: str, sensor_type: str) -> int:
        name = name.strip()
        if not name:
            print("Please enter a valid sensor name.", file=self.stream)
            return 1

        if len(self.service.get_sensors()) >= self.config.max_sensors:
            print(SENSOR_LIMIT_MESSAGE.format(limit=self.config.max_sensors), file=self.stream)
            return 1

        self.service.add_sensor(Sensor(name, SensorType[sensor_type.upper()]))
        return 0

    def remove_sensor(self, name: str) -> int:
        sensor = self._find_sensor(name)
        if sensor is None:
            return 1
        self.service.remove_sensor(sensor)
        return 0

    def set_sensor_active(self, name: str, active: bool) -> int:
        sensor = self._find_sensor(name)
        if sensor is None:
            return 1
        self.service.change_sensor_activation(sensor, active)
        return 0

    def scan(self, image_path: str) -> int:
        try:
            image = load_image_bytes(image_path, self.config.image_quality)
        except ValueError as e:
            print(str(e), file=self.stream)
            return 1
        self.service.process_image(image)
        return 0

    def _find_sensor(self, name: str) -> Optional[Sensor]:
        """Find a sensor by exact name, or by identifier prefix."""
        sensors = sorted(self.service.get_sensors())
        matches = [s for s in sensors if s.name == name]
        if not matches:
            matches = [s for s in sensors if str(s.sensor_id).startswith(name)]

        if len(matches) == 1:
            return matches[0]
        if not matches:
            print(f"No sensor named '{name}'", file=self.stream)
        else:
            print(f"'{name}' matches {len(matches)} sensors, use the sensor id", file=self.stream)
        return None


def build_service(config: SecurityConfig) -> SecurityService:
    """Wire the preference store, repository and image service together."""
    store = PreferenceStore(config.database_file)
    repository = PreferencesSecurityRepository(store)
    return SecurityService(repository, create_image_service(config), config.confidence_threshold)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="catpoint", description="Catpoint home security console")
    parser.add_argument("--config", default=DEFAULT_PATHS["config_file"], help="Path to config file")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("status", help="Show arming, alarm and sensor status")

    arm_parser = subparsers.add_parser("arm", help="Change the arming status")
    arm_parser.add_argument("mode", choices=sorted(ARMING_CHOICES))

    sensor_parser = subparsers.add_parser("sensor", help="Manage sensors")
    sensor_subparsers = sensor_parser.add_subparsers(dest="action", required=True)
    add_parser = sensor_subparsers.add_parser("add", help="Add a sensor")
    add_parser.add_argument("name")
    add_parser.add_argument("type", choices=[t.name.lower() for t in SensorType])
    for action in ("remove", "activate", "deactivate"):
        action_parser = sensor_subparsers.add_parser(action, help=f"{action.capitalize()} a sensor")
        action_parser.add_argument("name", help="Sensor name or id prefix")

    scan_parser = subparsers.add_parser("scan", help="Scan a camera picture for cats")
    scan_parser.add_argument("image", help="Path to an image file")

    return parser


def run_command(args: argparse.Namespace, console: SecurityConsole) -> int:
    if args.command == "status":
        return console.show_status()
    if args.command == "arm":
        return console.arm(args.mode)
    if args.command == "scan":
        return console.scan(args.image)
    if args.action == "add":
        return console.add_sensor(args.name, args.type)
    if args.action == "remove":
        return console.remove_sensor(args.name)
    return console.set_sensor_active(args.name, args.action == "activate")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the console front end."""
    args = build_parser().parse_args(argv)

    config_manager = ConfigManager(args.config)
    config = config_manager.get_config()
    if not config_manager.validate_config():
        print(f"Error: invalid configuration in {args.config}", file=sys.stderr)
        return 1

    setup_logging(config.log_level, config.log_dir)

    try:
        service = build_service(config)
        console = SecurityConsole(service, config)
        service.add_status_listener(ConsoleStatusListener(console.stream))
        return run_command(args, console)
    except Exception as e:
        logger.error(f"Command failed: {e}", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
