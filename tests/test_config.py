from __future__ import annotations

import json

from loraradar import config


def test_first_run_writes_defaults(tmp_path) -> None:
    path = tmp_path / "radar_config.json"
    cfg = config.load(path)

    assert cfg == config.defaults()
    assert json.loads(path.read_text()) == config.defaults()


def test_missing_keys_are_filled(tmp_path) -> None:
    path = tmp_path / "radar_config.json"
    path.write_text(json.dumps({"input_mode": "mqtt", "port": 8883}))
    cfg = config.load(path)

    assert cfg["input_mode"] == "mqtt"
    assert cfg["port"] == 8883
    assert cfg["serial_baud"] == 115200


def test_corrupt_file_falls_back(tmp_path) -> None:
    path = tmp_path / "radar_config.json"
    path.write_text("{nope")
    assert config.load(path) == config.defaults()


def test_save_roundtrip(tmp_path) -> None:
    path = tmp_path / "radar_config.json"
    cfg = {**config.defaults(), "sound": False}
    config.save(cfg, path)
    assert config.load(path)["sound"] is False
