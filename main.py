"""
Entry-point.  Keeps top-level script tiny.
"""
import logging
import pygame
from loraradar import config, gui

def main():
    cfg = config.load()
    logging.basicConfig(
        level=getattr(logging, str(cfg["log_level"]).upper(), logging.INFO),
        format="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
    )
    pygame.init()
    app = gui.RadarGUI(cfg)
    app.run()
    config.save(cfg)

if __name__ == "__main__":
    main()
