"""
loraradar package
=================

Telemetry pipeline and display for the LoRa sonar sweep.
"""

__all__ = [
    "errors",
    "decoder",
    "framing",
    "messages",
    "telemetry",
    "history",
    "tracking",
    "sweep",
    "transport",
    "serial_reader",
    "mqtt_client",
    "pipeline",
    "constants",
    "config",
    "sound",
    "gui",
]

__version__ = "1.0"
