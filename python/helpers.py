import copy
import json
import logging
import os
import time
from collections import deque
from queue import Empty, Full

logger = logging.getLogger(__name__)

# resolved beside this module, not against the working directory
DEFAULT_CONFIG_PATH = os.path.join(os.path.dirname(os.path.abspath(__file__)), "config.json")


def merge_config(base, override):
    """Deep-merge override into a copy of base; nested dicts merge, other values replace."""
    merged = copy.deepcopy(base) if base else {}
    for k, v in (override or {}).items():
        if isinstance(v, dict) and isinstance(merged.get(k), dict):
            merged[k] = merge_config(merged[k], v)
        else:
            merged[k] = copy.deepcopy(v)
    return merged


def load_config(path=DEFAULT_CONFIG_PATH):
    if not os.path.exists(path):
        logger.info("config '%s' not found, using defaults.", path)
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            cfg = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning("Failed to load config '%s': %s", path, e)
        return {}
    if not isinstance(cfg, dict):
        logger.warning("config '%s' is not a JSON object, ignoring.", path)
        return {}
    return cfg


class ConfigWatcher:
    """
    Polls a JSON config file's mtime and reloads it on change.

        watcher = ConfigWatcher("config.json")
        cfg = watcher.get_config()
        ...
        cfg = watcher.check_reload()  # same dict unless the file changed

    A reload that yields nothing (file caught mid-write, broken JSON) keeps
    the last good config.
    """

    def __init__(self, path=DEFAULT_CONFIG_PATH, min_check_interval=0.5):
        self.path = path
        self._cfg = {}
        self._mtime = 0.0
        self._rejected_mtime = None
        self._last_checked = 0.0
        self._min_check_interval = min_check_interval
        self._load()

    def _load(self):
        if not os.path.exists(self.path):
            self._cfg = {}
            self._mtime = 0.0
            return
        try:
            mtime = os.path.getmtime(self.path)
        except OSError as e:
            logger.warning("[ConfigWatcher] cannot stat %s: %s", self.path, e)
            return
        cfg = load_config(self.path)
        if not cfg and self._cfg:
            # _mtime stays behind so the next check retries the file
            if mtime != self._rejected_mtime:
                logger.warning("[ConfigWatcher] %s unusable, keeping previous config", self.path)
                self._rejected_mtime = mtime
            return
        self._cfg = cfg
        self._mtime = mtime
        self._rejected_mtime = None

    def get_config(self):
        return self._cfg

    def check_reload(self):
        """Stat the file at most every min_check_interval seconds; return the current config."""
        now = time.monotonic()
        if now - self._last_checked < self._min_check_interval:
            return self._cfg
        self._last_checked = now

        if not os.path.exists(self.path):
            return self._cfg
        try:
            mtime = os.path.getmtime(self.path)
        except OSError as e:
            logger.warning("[ConfigWatcher] check_reload error: %s", e)
            return self._cfg
        if mtime != self._mtime:
            if mtime != self._rejected_mtime:
                logger.info("[ConfigWatcher] %s changed, reloading", self.path)
            self._load()
        return self._cfg


class FpsMeter:
    """Frames per second over the last `window` timestamps."""

    def __init__(self, window=20):
        self._times = deque(maxlen=max(2, int(window)))

    def tick(self, now):
        self._times.append(now)
        if len(self._times) < 2:
            return 0.0
        span = self._times[-1] - self._times[0]
        return 0.0 if span <= 0 else (len(self._times) - 1) / span


def offer_latest(frame_queue, item):
    """Replace whatever is waiting in a single-slot queue; consumers only want the newest."""
    try:
        frame_queue.get_nowait()
    except Empty:
        pass
    try:
        frame_queue.put_nowait(item)
    except Full:
        logger.debug("queue refilled by another producer, dropping item")
