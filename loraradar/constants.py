"""
Hard-coded colours, geometry & fonts so every module can import them
without circular dependencies.
"""
from pathlib import Path
import pygame

# -------- colours --------
GREEN, DIM, BLACK, RED = (0, 255, 0), (0, 90, 0), (0, 0, 0), (255, 0, 0)
YELLOW, WHITE, GREY    = (255, 255, 0), (255, 255, 255), (102, 102, 102)
PANEL                  = (42, 42, 42)
OK_DOT, BAD_DOT        = (76, 175, 80), (244, 67, 54)

# -------- radar face --------
GRID_RINGS_CM = (500, 1000, 1500, 2000)
SPOKE_DEG     = 30
RIM_PAD       = 20                       # px between outer ring and face edge

# -------- layout --------
WINDOW     = (480, 820)
HEADER_H   = 70
READOUT_H  = 70
TARGETS_H  = 150
FPS        = 30

pygame.font.init()
FONT       = pygame.font.SysFont("monospace", 18)
SMALL_FONT = pygame.font.SysFont("monospace", 14)
TINY_FONT  = pygame.font.SysFont("monospace", 11)
BIG_FONT   = pygame.font.SysFont("monospace", 32)

# -------- dirs --------
ROOT      = Path(__file__).resolve().parent.parent
CFG_PATH  = ROOT / "radar_config.json"
