"""
loraradar.serial_reader
=======================

Non-blocking reader for the ESP32 LoRa bridge on a local serial port.

The bridge prints one JSON object per line at 115200 baud.  This class does
no framing at all: whatever bytes `pyserial` hands back are delivered as-is
to the subscribers, and `RadarPipeline` stitches lines together.

Usage
-----
    reader = RadarSerial("/dev/ttyUSB0", 115200)
    sub = reader.subscribe(pipeline.feed)
    reader.start()     # opens the port, spawns a background thread
    reader.send("STATUS")
    reader.stop()      # clean shutdown, idempotent
"""
from __future__ import annotations

import logging
import threading

import serial
import serial.tools.list_ports

from loraradar.errors import TransportError
from loraradar.transport import ChunkTransport

log = logging.getLogger(__name__)


AUTO_PORT = "auto"


def find_ports() -> list[str]:
    """Device names of every serial port currently attached, sorted."""
    return sorted(p.device for p in serial.tools.list_ports.comports())


class RadarSerial(ChunkTransport):
    """
    Pass ``port="auto"`` to open the first attached serial device, the
    way a phone picks the only USB-OTG adapter plugged into it.
    """
    READ_TIMEOUT = 0.05

    def __init__(self, port: str, baud: int = 115200):
        super().__init__()
        self.port, self.baud = port, baud
        self._ser: serial.Serial | None = None
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def is_open(self) -> bool:
        return self._ser is not None and self._ser.is_open

    # ───────────────────────── public API
    def start(self) -> None:
        if self._thread is not None and self._thread.is_alive():
            return
        if self.port == AUTO_PORT:
            self.port = self._pick_port()
        try:
            self._ser = serial.Serial(self.port, self.baud,
                                      timeout=self.READ_TIMEOUT)
        except serial.SerialException as e:
            raise TransportError(f"cannot open {self.port}: {e}") from e
        log.info("opened %s @ %d baud", self.port, self.baud)

        self._stop.clear()
        self._thread = threading.Thread(target=self._loop, daemon=True,
                                        name=f"serial-{self.port}")
        self._thread.start()

    def stop(self) -> None:
        self._stop.set()
        if self._thread is not None and self._thread.is_alive():
            self._thread.join(timeout=1)
        self._thread = None
        if self._ser is not None:
            try:
                self._ser.close()
            except serial.SerialException:
                log.warning("error closing %s", self.port, exc_info=True)
            self._ser = None
            log.info("closed %s", self.port)

    # ───────────────────────── helpers
    @staticmethod
    def _pick_port() -> str:
        ports = find_ports()
        if not ports:
            raise TransportError("no serial devices found")
        log.info("found %d serial device(s): %s", len(ports), ", ".join(ports))
        return ports[0]

    def _write(self, line: str) -> None:
        if not self.is_open:
            raise TransportError("serial port is not open")
        try:
            self._ser.write(line.encode("ascii"))
        except (serial.SerialException, UnicodeEncodeError) as e:
            raise TransportError(f"send failed: {e}") from e
        log.debug("sent %r", line)

    # ───────────────────────── background reader thread
    def _loop(self) -> None:
        ser = self._ser
        try:
            while not self._stop.is_set():
                data = ser.read(ser.in_waiting or 1)
                if data:
                    self._deliver(data)
        except serial.SerialException as e:
            # unplugged cable etc.; the GUI watchdog shows the data loss
            log.error("serial read failed on %s: %s", self.port, e)
