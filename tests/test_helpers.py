import json
import os
from queue import Queue

import pytest

from helpers import DEFAULT_CONFIG_PATH, ConfigWatcher, FpsMeter, load_config, merge_config, offer_latest


def write(path, data):
    path.write_text(json.dumps(data), encoding="utf-8")


def test_merge_config_is_deep_and_copies():
    base = {"stabilizer": {"buffer_size": 4, "threshold": 3}, "output": {"min_confidence": 0.65}}
    merged = merge_config(base, {"stabilizer": {"threshold": 2}, "server": {"port": 6000}})
    assert merged == {
        "stabilizer": {"buffer_size": 4, "threshold": 2},
        "output": {"min_confidence": 0.65},
        "server": {"port": 6000},
    }
    assert base["stabilizer"]["threshold"] == 3
    merged["output"]["min_confidence"] = 0.1
    assert base["output"]["min_confidence"] == 0.65


def test_merge_config_handles_empty_sides():
    assert merge_config(None, {"a": 1}) == {"a": 1}
    assert merge_config({"a": {"b": 1}}, None) == {"a": {"b": 1}}
    assert merge_config({"a": {"b": 1}}, {"a": 2}) == {"a": 2}


def test_load_config(tmp_path):
    path = tmp_path / "config.json"
    write(path, {"output": {"min_confidence": 0.7}})
    assert load_config(str(path)) == {"output": {"min_confidence": 0.7}}


def test_load_config_missing_file(tmp_path):
    assert load_config(str(tmp_path / "nope.json")) == {}


def test_load_config_bad_json(tmp_path, caplog):
    path = tmp_path / "config.json"
    path.write_text("{not json", encoding="utf-8")
    assert load_config(str(path)) == {}
    assert "Failed to load config" in caplog.text


def test_load_config_rejects_non_object(tmp_path):
    path = tmp_path / "config.json"
    write(path, [1, 2, 3])
    assert load_config(str(path)) == {}


def test_watcher_reloads_changed_file(tmp_path):
    path = tmp_path / "config.json"
    write(path, {"stabilizer": {"threshold": 3}})
    watcher = ConfigWatcher(str(path), min_check_interval=0)
    assert watcher.get_config() == {"stabilizer": {"threshold": 3}}
    assert watcher.check_reload() == {"stabilizer": {"threshold": 3}}

    write(path, {"stabilizer": {"threshold": 2}})
    mtime = os.path.getmtime(path) + 10
    os.utime(path, (mtime, mtime))
    assert watcher.check_reload() == {"stabilizer": {"threshold": 2}}


def test_watcher_throttles_checks(tmp_path):
    path = tmp_path / "config.json"
    write(path, {"a": 1})
    watcher = ConfigWatcher(str(path), min_check_interval=3600)
    watcher.check_reload()

    write(path, {"a": 2})
    mtime = os.path.getmtime(path) + 10
    os.utime(path, (mtime, mtime))
    assert watcher.check_reload() == {"a": 1}


def test_watcher_keeps_config_when_file_removed(tmp_path):
    path = tmp_path / "config.json"
    write(path, {"a": 1})
    watcher = ConfigWatcher(str(path), min_check_interval=0)
    path.unlink()
    assert watcher.check_reload() == {"a": 1}


def test_watcher_keeps_last_good_config_on_broken_reload(tmp_path):
    path = tmp_path / "config.json"
    write(path, {"a": 1})
    watcher = ConfigWatcher(str(path), min_check_interval=0)

    path.write_text('{"a": ', encoding="utf-8")
    mtime = os.path.getmtime(path) + 10
    os.utime(path, (mtime, mtime))
    assert watcher.check_reload() == {"a": 1}


def test_watcher_retries_broken_file_without_new_mtime(tmp_path):
    path = tmp_path / "config.json"
    write(path, {"a": 1})
    watcher = ConfigWatcher(str(path), min_check_interval=0)

    path.write_text('{"a": ', encoding="utf-8")
    mtime = os.path.getmtime(path) + 10
    os.utime(path, (mtime, mtime))
    assert watcher.check_reload() == {"a": 1}

    # writer finishes within the same mtime tick
    write(path, {"a": 2})
    os.utime(path, (mtime, mtime))
    assert watcher.check_reload() == {"a": 2}


def test_default_config_is_found_from_any_directory(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert os.path.isabs(DEFAULT_CONFIG_PATH)
    cfg = load_config()
    assert cfg["stabilizer"] == {"buffer_size": 4, "threshold": 3}
    assert cfg["output"]["min_confidence"] == 0.65
    assert ConfigWatcher().get_config() == cfg


def test_fps_meter():
    meter = FpsMeter(window=3)
    assert meter.tick(10.0) == 0.0
    assert meter.tick(10.5) == pytest.approx(2.0)
    assert meter.tick(11.0) == pytest.approx(2.0)
    # oldest timestamp falls out of the window
    assert meter.tick(11.25) == pytest.approx(2 / 0.75)
    assert FpsMeter(window=5).tick(1.0) == 0.0


def test_fps_meter_ignores_repeated_timestamp():
    meter = FpsMeter()
    meter.tick(3.0)
    assert meter.tick(3.0) == 0.0


def test_offer_latest_keeps_newest():
    q = Queue(maxsize=1)
    offer_latest(q, "first")
    offer_latest(q, "second")
    assert q.get_nowait() == "second"
    assert q.empty()
