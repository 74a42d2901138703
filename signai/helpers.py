import copy
import json
import logging
import os
import time

LOGGER = logging.getLogger("signai.config")

DEFAULT_CONFIG = {
    "stabilizer": {"cooldown_ms": 900},
    "classifier": {
        "pinch_distance_threshold": 0.05,
        "spread_threshold": 0.04,
        "finger_open_ratio": 1.2,
        "thumb_open_ratio": 1.1,
    },
    "tracker": {
        "model_complexity": 1,
        "max_num_hands": 1,
        "min_detection_confidence": 0.6,
        "min_tracking_confidence": 0.6,
    },
    "camera": {"index": 0, "frame_width": 640, "frame_height": 480, "mirror": True},
    "network": {"publish": "tcp://*:5555"},
    "speech": {"enabled": True, "rate": 160},
    "translation": {"target": "es", "timeout_s": 5.0},
    "presets": [
        "Hello, nice to meet you.",
        "I need help.",
        "Thank you!",
        "Please wait a moment.",
        "Goodbye!",
    ],
    "debug": {"draw_landmarks": True, "show_fps": True},
}


def merge_config(base, override):
    """Deep-merge override onto a copy of base."""
    merged = copy.deepcopy(base)
    for k, v in (override or {}).items():
        if isinstance(v, dict) and isinstance(merged.get(k), dict):
            merged[k] = merge_config(merged[k], v)
        else:
            merged[k] = v
    return merged


def effective_config(file_cfg, overrides=None):
    """Defaults <- config file <- command line overrides."""
    return merge_config(merge_config(DEFAULT_CONFIG, file_cfg), overrides)


class ConfigWatcher:
    """
    Hot reload for config.json. The file's mtime is polled at most once per
    min_check_interval seconds; a broken edit leaves an empty dict so the
    defaults take over until the file is fixed.
    """

    def __init__(self, path="config.json", min_check_interval=0.5, clock=time.time):
        self.path = path
        self.min_check_interval = min_check_interval
        self._clock = clock
        self._cfg = {}
        self._mtime = None
        self._last_checked = 0.0
        self._read()

    def _stat_mtime(self):
        try:
            return os.stat(self.path).st_mtime
        except FileNotFoundError:
            return None

    def _read(self):
        mtime = self._stat_mtime()
        if mtime is None:
            LOGGER.warning("config '%s' not found, using defaults.", self.path)
            self._cfg, self._mtime = {}, None
            return
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                self._cfg = json.load(f)
        except (OSError, ValueError) as e:
            LOGGER.error("failed to load %s: %s", self.path, e)
            self._cfg = {}
        self._mtime = mtime

    def get_config(self):
        return self._cfg

    def check_reload(self):
        """Current file config; re-read when the mtime moved. A deleted file keeps the last one."""
        now = self._clock()
        if now - self._last_checked < self.min_check_interval:
            return self._cfg
        self._last_checked = now

        try:
            mtime = self._stat_mtime()
        except OSError as e:
            LOGGER.error("cannot stat %s: %s", self.path, e)
            return self._cfg
        if mtime is not None and mtime != self._mtime:
            LOGGER.info("%s changed, reloading", self.path)
            self._read()
        return self._cfg


def setup_logging(level="INFO"):
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="[%(name)s] %(levelname)s %(message)s",
    )
