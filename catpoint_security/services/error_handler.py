"""Central error recording for collaborators that must never fail the caller."""

import functools
import threading
import traceback
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from typing import Any, Dict, List, Optional

from ..logging_config import get_logger

logger = get_logger("error_handler")


class ErrorSeverity(Enum):
    """Error severity levels."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ComponentStatus(Enum):
    """Component status levels."""
    HEALTHY = "healthy"
    DEGRADED = "degraded"
    FAILED = "failed"
    UNKNOWN = "unknown"


@dataclass
class ErrorRecord:
    """Record of an error occurrence."""
    component_name: str
    error: Exception
    severity: ErrorSeverity
    timestamp: datetime = field(default_factory=datetime.now)
    traceback_str: str = ""

    @property
    def error_type(self) -> str:
        return type(self.error).__name__


class ErrorHandler:
    """Records errors per component and tracks component health.

    Failures of the image classifier and of the preference store are resolved
    to safe defaults by their callers; this handler keeps the evidence so it
    can be inspected afterwards.
    """

    def __init__(self, max_error_history: int = 500):
        self.max_error_history = max_error_history
        self.error_records: List[ErrorRecord] = []
        self.component_error_counts: Dict[str, int] = {}
        self.component_status: Dict[str, ComponentStatus] = {}
        self._lock = threading.Lock()

    def register_component(self, component_name: str) -> None:
        """Register a component for error tracking."""
        with self._lock:
            self.component_error_counts.setdefault(component_name, 0)
            self.component_status.setdefault(component_name, ComponentStatus.HEALTHY)
        logger.debug(f"Component registered: {component_name}")

    def handle_error(self, component_name: str, error: Exception,
                     severity: ErrorSeverity = ErrorSeverity.MEDIUM) -> ErrorRecord:
        """Record an error from a component and update its status."""
        error_record = ErrorRecord(
            component_name=component_name,
            error=error,
            severity=severity,
            traceback_str=traceback.format_exc()
        )

        with self._lock:
            self.error_records.append(error_record)
            if len(self.error_records) > self.max_error_history:
                self.error_records = self.error_records[-self.max_error_history:]

            self.component_error_counts[component_name] = \
                self.component_error_counts.get(component_name, 0) + 1

            if severity == ErrorSeverity.CRITICAL:
                self.component_status[component_name] = ComponentStatus.FAILED
            elif severity in (ErrorSeverity.HIGH, ErrorSeverity.MEDIUM):
                self.component_status[component_name] = ComponentStatus.DEGRADED
            else:
                self.component_status.setdefault(component_name, ComponentStatus.HEALTHY)

        logger.error(f"Error in {component_name}: {error} (Severity: {severity.value})")
        return error_record

    def get_component_health(self, component_name: str) -> ComponentStatus:
        """Get the health of one component."""
        with self._lock:
            return self.component_status.get(component_name, ComponentStatus.UNKNOWN)

    def get_error_stats(self) -> Dict[str, Any]:
        """Get error statistics."""
        with self._lock:
            return {
                "total_errors": len(self.error_records),
                "component_error_counts": dict(self.component_error_counts),
                "component_status": {name: status.value for name, status in self.component_status.items()}
            }

    def reset_error_counts(self, component_name: Optional[str] = None) -> None:
        """Reset error counts for a component or all components."""
        with self._lock:
            names = [component_name] if component_name else list(self.component_error_counts)
            for name in names:
                if name in self.component_error_counts:
                    self.component_error_counts[name] = 0
                    self.component_status[name] = ComponentStatus.HEALTHY

    def get_error_summary(self, hours: int = 24) -> Dict[str, Any]:
        """Get summary of errors in the last N hours."""
        cutoff_time = datetime.now() - timedelta(hours=hours)

        with self._lock:
            recent_errors = [e for e in self.error_records if e.timestamp >= cutoff_time]

        component_counts: Dict[str, int] = {}
        severity_counts = {severity.value: 0 for severity in ErrorSeverity}

        for error in recent_errors:
            component_counts[error.component_name] = component_counts.get(error.component_name, 0) + 1
            severity_counts[error.severity.value] += 1

        return {
            "total_errors": len(recent_errors),
            "component_counts": component_counts,
            "severity_counts": severity_counts,
            "time_period_hours": hours
        }


# Create global error handler instance
global_error_handler = ErrorHandler()


def safe_operation(default_return: Any = None, component_name: Optional[str] = None,
                   severity: ErrorSeverity = ErrorSeverity.MEDIUM,
                   error_handler: Optional[ErrorHandler] = None):
    """Decorator that turns any exception into ``default_return``.

    Args:
        default_return: Value to return if an exception occurs
        component_name: Component the error is recorded against
            (defaults to the function's qualified name)
        severity: Severity used when recording the error
        error_handler: Optional custom error handler

    Returns:
        Decorated function that never raises exceptions
    """
    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except Exception as e:
                handler = error_handler or global_error_handler
                handler.handle_error(component_name or func.__qualname__, e, severity)
                return default_return
        return wrapper
    return decorator
