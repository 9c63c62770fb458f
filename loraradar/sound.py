"""Tiny sine-wave beep cache so we don't rebuild the sample every target."""
import math
from array import array
import pygame

_cache = {}


def beep(freq, dur=0.08, vol=0.5, sr=44100):
    if not pygame.mixer.get_init():
        pygame.mixer.init(sr, -16, 1, 512)
    key = (freq, dur)
    if key not in _cache:
        buf = array(
            "h",
            (int(vol * 32767 * math.sin(2 * math.pi * freq * i / sr))
             for i in range(int(dur * sr))),
        )
        s = pygame.mixer.Sound(buffer=buf.tobytes())
        s.set_volume(vol)
        _cache[key] = s
    return _cache[key]
