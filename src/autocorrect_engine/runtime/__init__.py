"""Runtime services (telemetry) shared by the engine and its hosts."""

from . import telemetry

__all__ = ["telemetry"]
