import logging
import time
import uuid
import threading
from queue import Queue, Empty

import paho.mqtt.client as mqtt

from loraradar.decoder import is_hex_text
from loraradar.errors import TransportError
from loraradar.transport import ChunkTransport

log = logging.getLogger(__name__)


class RadarMQTT(ChunkTransport):
    """
    Connects to the broker the LoRa gateway publishes to and hands every
    payload to the subscribers using a background worker thread.

    Payloads are passed on as text: either the gateway's hex dump of the
    serial bytes ("7B22616E...") or the JSON line itself.  Decoding is left
    to the pipeline.

    Commands are published to `command_topic`; the gateway forwards them to
    the bridge's serial port.
    """

    def __init__(self, host, port, topic, command_topic=None):
        super().__init__()
        self.host, self.port, self.topic = host, port, topic
        self.command_topic = command_topic
        self.last_pkt = time.monotonic()

        random_id = f"loraradar-{uuid.uuid4().hex[:8]}"
        self.cli = mqtt.Client(mqtt.CallbackAPIVersion.VERSION2, client_id=random_id)
        self.cli.on_connect = self._on_connect
        self.cli.on_message = self._on_msg

        self.q = Queue()
        self._running = threading.Event()
        self.worker = None

    def start(self):
        if self._running.is_set():
            return
        try:
            self.cli.connect(self.host, self.port, 60)
        except OSError as e:
            raise TransportError(f"cannot reach broker {self.host}:{self.port}: {e}") from e
        self._running.set()
        self.worker = threading.Thread(target=self._worker_loop, daemon=True,
                                       name="mqtt-worker")
        self.worker.start()
        self.cli.loop_start()
        log.info("connected to %s:%s, topic %s", self.host, self.port, self.topic)

    def stop(self):
        if not self._running.is_set():
            return
        self._running.clear()
        self.cli.loop_stop()
        self.cli.disconnect()
        if self.worker is not None:
            self.worker.join(timeout=1.5)
            self.worker = None
        log.info("disconnected from %s:%s", self.host, self.port)

    def _write(self, line):
        if not self.command_topic:
            raise TransportError("no command topic configured")
        if not self._running.is_set():
            raise TransportError("MQTT client is not connected")
        info = self.cli.publish(self.command_topic, line.encode("ascii"))
        if info.rc != mqtt.MQTT_ERR_SUCCESS:
            raise TransportError(f"publish failed: {mqtt.error_string(info.rc)}")
        log.debug("published %r to %s", line, self.command_topic)

    def _on_connect(self, client, *_):
        client.subscribe(self.topic)

    def _on_msg(self, _cli, _userdata, msg):
        try:
            text = msg.payload.decode("latin-1").strip()
        except AttributeError:
            log.warning("ignoring payload of type %s", type(msg.payload).__name__)
            return
        if not text:
            return
        self.q.put_nowait(self._terminate(text))
        self.last_pkt = time.monotonic()

    @staticmethod
    def _terminate(text):
        """
        The gateway publishes one frame per message, stripped of the line
        ending the bridge printed.  Put it back so framing stays uniform.
        """
        if is_hex_text(text):
            return text if text.upper().endswith("0A") else text + "0A"
        return text + "\n"

    def _worker_loop(self):
        while self._running.is_set():
            try:
                chunk = self.q.get(timeout=1)
            except Empty:
                continue
            self._deliver(chunk)
