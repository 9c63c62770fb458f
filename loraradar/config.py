"""
loraradar.config
================

Tiny helper that loads / saves *radar_config.json* and injects sensible
defaults for any missing keys.
"""

from __future__ import annotations
import json
import logging
from pathlib import Path

from loraradar.constants import CFG_PATH

log = logging.getLogger(__name__)

_DEFAULT = {
    # input selection
    "input_mode": "serial",           # "serial"  or  "mqtt"
    "serial_port": "auto",            # or a device path, e.g. "/dev/ttyUSB0"
    "serial_baud": 115200,

    # MQTT (only used when input_mode == "mqtt")
    "broker": "127.0.0.1",
    "port": 1883,
    "topic": "loraradar/raw",
    "command_topic": "loraradar/cmd",

    # display
    "max_distance": 2000,             # cm at the outer ring
    "trail_on": True,
    "sound": True,

    "log_level": "INFO",
}


def defaults() -> dict:
    return dict(_DEFAULT)


def load(path: Path = CFG_PATH) -> dict:
    try:
        with open(path) as fh:
            return {**_DEFAULT, **json.load(fh)}
    except FileNotFoundError:
        save(_DEFAULT, path)
        return dict(_DEFAULT)
    except json.JSONDecodeError as e:
        log.warning("%s is not valid JSON (%s); using defaults", path, e)
        return dict(_DEFAULT)


def save(cfg: dict, path: Path = CFG_PATH) -> None:
    Path(path).write_text(json.dumps(cfg, indent=2))
