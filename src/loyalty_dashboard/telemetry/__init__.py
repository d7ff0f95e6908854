from .events import TELEMETRY_CATEGORIES, TelemetryCategory, TelemetryEvent, build_event
from .logger import TelemetryLogger

__all__ = ["TELEMETRY_CATEGORIES", "TelemetryCategory", "TelemetryEvent", "TelemetryLogger", "build_event"]
