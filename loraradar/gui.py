"""
loraradar.gui
=============

LoRa Radar display – serial / MQTT input, fading trail, fish markers

Key features
------------
• Polar grid (500 cm rings, 30° spokes) with a smoothed sweep line
• Trail of the last 360 samples fading over 5 s
• Red target markers fading over their 30 s lifetime
• USB / LoRa status dots, angle & distance readout ("---" while LoRa is down)
• Flashing "DATA STREAM LOST" banner when no chunk arrives for ≥2 s
• Hot-keys:  C connect/disconnect · S send STATUS · X clear targets
             R clear history · M sound · T trail · Q/Esc quit
"""

from __future__ import annotations
import logging, math, time, pygame
from typing import Union

from loraradar import constants as C
from loraradar.errors import TransportError
from loraradar.history import SampleHistory
from loraradar.mqtt_client import RadarMQTT
from loraradar.pipeline import RadarPipeline
from loraradar.serial_reader import RadarSerial
from loraradar.sound import beep
from loraradar.sweep import SweepSmoother
from loraradar.tracking import DetectedTarget, TargetDetector

log = logging.getLogger(__name__)


def target_opacity(target: DetectedTarget, now: float) -> float:
    """Fade over the target's lifetime, never below 0.3 so it stays visible."""
    return max(0.3, 1 - (now - target.timestamp) / TargetDetector.TARGET_TTL)


class RadarGUI:
    DATA_TIMEOUT_SEC = 2.0              # gap that triggers DATA-LOSS banner
    NOTICE_SEC       = 4.0

    # ────────────────────────────────────────────────── INIT
    def __init__(self, cfg: dict) -> None:
        self.cfg = cfg

        # ―― Pygame window
        self.screen = pygame.display.set_mode(C.WINDOW, pygame.RESIZABLE)
        pygame.display.set_caption("LoRa Radar")
        self.clock = pygame.time.Clock()

        # ―― Toggles
        self.sound_on    = bool(cfg.get("sound", True))
        self.trail_on    = bool(cfg.get("trail_on", True))
        self.max_distance = float(cfg.get("max_distance", 2000))

        # ―― Pipeline & reader
        self.pipeline = RadarPipeline(on_target=self._on_target)
        self.reader: Union[RadarSerial, RadarMQTT, None] = None
        self.sweep = SweepSmoother()
        self._pending_beep = False

        # ―― Timers & notices
        self.flash = True; self.t_flash = time.monotonic()
        self.notice = ""; self.t_notice = 0.0

    # ───────────────────────────────────────── helper – open data source
    def _make_reader(self) -> Union[RadarSerial, RadarMQTT]:
        if self.cfg.get("input_mode", "serial").lower() == "mqtt":
            return RadarMQTT(self.cfg["broker"], int(self.cfg["port"]),
                             self.cfg["topic"], self.cfg.get("command_topic"))
        return RadarSerial(self.cfg["serial_port"], int(self.cfg["serial_baud"]))

    def _connect(self):
        reader = self._make_reader()
        try:
            self.pipeline.attach(reader)
        except TransportError as e:
            log.error("connect failed: %s", e)
            self._notify(f"Connection error: {e}")
            return
        self.reader = reader
        self._notify("Connected")

    def _disconnect(self):
        self.pipeline.detach()
        self.reader = None
        self._notify("Disconnected")

    def _send(self, command: str):
        try:
            self.pipeline.send_command(command)
        except TransportError as e:
            log.warning("send %r failed: %s", command, e)
            self._notify(f"Send error: {e}")
        else:
            self._notify(f"Sent {command}")

    def _notify(self, text: str):
        self.notice, self.t_notice = text, time.monotonic()

    # ───────────────────────────────────────── target callback (reader thread)
    def _on_target(self, _target: DetectedTarget):
        self._pending_beep = True

    # ───────────────────────────────────────── geometry helpers
    def _face(self):
        """Centre and usable radius of the radar face."""
        w, h = self.screen.get_size()
        avail = h - C.HEADER_H - C.READOUT_H - C.TARGETS_H
        size = max(60, min(w - 32, avail))
        cx, cy = w // 2, C.HEADER_H + avail // 2
        return cx, cy, size // 2 - C.RIM_PAD

    def polar_to_px(self, angle, distance):
        """0° points up, angles grow clockwise."""
        cx, cy, r = self._face()
        rad = distance / self.max_distance * r
        th = math.radians(angle - 90)
        return int(cx + rad * math.cos(th)), int(cy + rad * math.sin(th))

    def _in_range(self, distance):
        return 0 < distance < self.max_distance

    def _dot(self, pos, col, radius, alpha, width=0):
        if alpha <= 0:
            return
        d = radius * 2 + 2
        s = pygame.Surface((d, d), pygame.SRCALPHA)
        pygame.draw.circle(s, col + (int(255 * alpha),), (d // 2, d // 2), radius, width)
        self.screen.blit(s, (pos[0] - d // 2, pos[1] - d // 2))

    # ───────────────────────────────────────── drawing
    def _draw_header(self, tel):
        w = self.screen.get_width()
        pygame.draw.rect(self.screen, C.PANEL, (0, 0, w, C.HEADER_H))
        pygame.draw.line(self.screen, C.GREEN, (0, C.HEADER_H - 1), (w, C.HEADER_H - 1))
        title = C.FONT.render("LoRa Radar", True, C.GREEN)
        self.screen.blit(title, title.get_rect(midtop=(w // 2, 6)))
        for i, (lbl, on) in enumerate((("USB", tel.transport_connected),
                                       ("LoRa", tel.link_connected))):
            x = w // 4 + i * w // 2
            pygame.draw.circle(self.screen, C.OK_DOT if on else C.BAD_DOT, (x - 60, 42), 5)
            txt = C.SMALL_FONT.render(f"{lbl}: {'Connected' if on else 'Disconnected'}",
                                      True, C.WHITE)
            self.screen.blit(txt, (x - 50, 34))

    def _draw_grid(self):
        cx, cy, r = self._face()
        pygame.draw.circle(self.screen, C.BLACK, (cx, cy), r + C.RIM_PAD - 10)
        pygame.draw.circle(self.screen, C.GREEN, (cx, cy), r + C.RIM_PAD - 10, 2)
        for ring in C.GRID_RINGS_CM:
            rr = int(ring / self.max_distance * r)
            if rr <= 0 or rr > r:
                continue
            pygame.draw.circle(self.screen, C.DIM, (cx, cy), rr, 1)
            lbl = C.TINY_FONT.render(f"{ring} cm", True, C.GREEN)
            self.screen.blit(lbl, lbl.get_rect(midbottom=(cx, cy - rr - 2)))
        for deg in range(0, 360, C.SPOKE_DEG):
            pygame.draw.line(self.screen, C.DIM, (cx, cy),
                             self.polar_to_px(deg, self.max_distance))
        for deg in (0, 90, 180, 270):
            x, y = self.polar_to_px(deg, self.max_distance * 1.06)
            lbl = C.TINY_FONT.render(f"{deg}°", True, C.GREEN)
            self.screen.blit(lbl, lbl.get_rect(center=(x, y)))
        pygame.draw.circle(self.screen, C.GREEN, (cx, cy), 4)

    def _draw_trail(self, now):
        for s in self.pipeline.history():
            if self._in_range(s.distance):
                alpha = max(0.1, SampleHistory.fade(s, now))
                self._dot(self.polar_to_px(s.angle, s.distance), C.GREEN, 2, alpha)

    def _draw_targets(self, targets, now):
        for t in targets:
            if not self._in_range(t.distance):
                continue
            pos = self.polar_to_px(t.angle, t.distance)
            a = target_opacity(t, now)
            self._dot(pos, C.RED, 6, a, 2)
            self._dot(pos, C.RED, 3, a)
            self._dot(pos, C.RED, 10, a * 0.5, 1)

    def _draw_sweep(self, tel):
        cx, cy, _ = self._face()
        end = self.polar_to_px(self.sweep.angle, self.max_distance)
        pygame.draw.line(self.screen, C.GREEN, (cx, cy), end, 2)
        pygame.draw.circle(self.screen, C.GREEN, end, 3)
        if self._in_range(tel.distance):
            pos = self.polar_to_px(tel.angle, tel.distance)
            self._dot(pos, C.YELLOW, 4, 0.8)
            self._dot(pos, C.YELLOW, 8, 0.6, 2)

    def _draw_readout(self, tel):
        w, h = self.screen.get_size()
        top = h - C.TARGETS_H - C.READOUT_H
        pygame.draw.rect(self.screen, C.PANEL, (0, top, w, C.READOUT_H))
        pygame.draw.line(self.screen, C.GREEN, (0, top), (w, top))
        vals = (("ANGLE", f"{tel.angle:.0f}°"), ("DISTANCE", f"{tel.distance:.0f} cm"))
        for i, (lbl, val) in enumerate(vals):
            x = w // 4 + i * w // 2
            if not tel.link_connected:
                val = "---"
            l = C.TINY_FONT.render(lbl, True, C.GREEN)
            v = C.BIG_FONT.render(val, True, C.WHITE)
            self.screen.blit(l, l.get_rect(midtop=(x, top + 6)))
            self.screen.blit(v, v.get_rect(midtop=(x, top + 22)))

    def _draw_target_list(self, targets):
        w, h = self.screen.get_size()
        top = h - C.TARGETS_H
        pygame.draw.rect(self.screen, C.PANEL, (0, top, w, C.TARGETS_H))
        hdr = C.FONT.render(f"Detected Fish ({len(targets)})", True, C.GREEN)
        self.screen.blit(hdr, (16, top + 8))
        hint = C.TINY_FONT.render("X clear · R reset", True, C.GREY)
        self.screen.blit(hint, hint.get_rect(topright=(w - 16, top + 12)))
        if not targets:
            txt = C.SMALL_FONT.render("No fish detected", True, C.GREY)
            self.screen.blit(txt, txt.get_rect(midtop=(w // 2, top + 50)))
            return
        rows = (C.TARGETS_H - 40) // 18
        for i, t in enumerate(targets[:rows]):
            txt = C.SMALL_FONT.render(
                f"#{i + 1}: {t.angle:.0f}° at {t.distance:.0f} cm", True, C.WHITE)
            self.screen.blit(txt, (16, top + 36 + i * 18))

    def _draw_overlays(self, tel, now):
        w, h = self.screen.get_size()
        if self.notice and now - self.t_notice < self.NOTICE_SEC:
            n = C.SMALL_FONT.render(self.notice, True, C.GREEN)
            self.screen.blit(n, n.get_rect(midtop=(w // 2, C.HEADER_H + 4)))
        lost = (tel.transport_connected
                and now - self.pipeline.last_chunk > self.DATA_TIMEOUT_SEC)
        if lost and self.flash:
            alert = C.FONT.render("DATA STREAM LOST", True, C.RED)
            self.screen.blit(alert, alert.get_rect(center=(w // 2, h // 2)))

    # ───────────────────────────────────────── MAIN LOOP
    def run(self):
        self.sweep.start()
        running = True
        while running:
            self.clock.tick(C.FPS)
            now = time.monotonic()
            if now - self.t_flash > 0.5:
                self.flash = not self.flash; self.t_flash = now

            # ――― EVENTS ―――――――――――――――――――――――――――――――――――――――――――
            for e in pygame.event.get():
                if e.type == pygame.QUIT:
                    running = False
                elif e.type == pygame.VIDEORESIZE:
                    self.screen = pygame.display.set_mode(e.size, pygame.RESIZABLE)
                elif e.type == pygame.KEYDOWN:
                    if e.key in (pygame.K_q, pygame.K_ESCAPE):
                        running = False
                    elif e.key == pygame.K_c:
                        if self.pipeline.attached:
                            self._disconnect()
                        else:
                            self._connect()
                    elif e.key == pygame.K_s:
                        self._send("STATUS")
                    elif e.key == pygame.K_x:
                        self.pipeline.clear_targets()
                    elif e.key == pygame.K_r:
                        self.pipeline.clear_history()
                    elif e.key == pygame.K_m:
                        self.sound_on = not self.sound_on; self.cfg["sound"] = self.sound_on
                    elif e.key == pygame.K_t:
                        self.trail_on = not self.trail_on; self.cfg["trail_on"] = self.trail_on

            # ――― STATE ――――――――――――――――――――――――――――――――――――
            tel = self.pipeline.telemetry()
            targets = self.pipeline.targets()
            self.sweep.tick(tel.angle)

            # ――― DRAWING ――――――――――――――――――――――――――――――
            self.screen.fill(C.BLACK)
            self._draw_header(tel)
            self._draw_grid()
            if tel.transport_connected:
                if self.trail_on:
                    self._draw_trail(now)
                self._draw_sweep(tel)
            self._draw_targets(targets, now)
            self._draw_readout(tel)
            self._draw_target_list(targets)
            self._draw_overlays(tel, now)
            pygame.display.flip()

            # beep
            if self._pending_beep:
                self._pending_beep = False
                if self.sound_on:
                    try:
                        beep(1200).play()
                    except pygame.error as e:
                        log.warning("sound disabled: %s", e)
                        self.sound_on = False

        # graceful shutdown
        self.sweep.stop()
        self.pipeline.detach()
        pygame.quit()
