"""Exception types raised across the package boundary."""


class RadarError(Exception):
    """Base class for every error raised by loraradar."""


class TransportError(RadarError):
    """The serial / MQTT transport could not be opened or a command failed."""
