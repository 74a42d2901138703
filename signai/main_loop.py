import logging
import threading
import time
from collections import deque
from queue import Empty, Queue

import cv2

from signai.Controls import ESC_KEY, drain_translations, handle_key
from signai.ConversationLog import ConversationLog
from signai.FrameSlot import LatestFrameSlot
from signai.HandTracker import HandTracker, draw_hand_debug, draw_status
from signai.Network import EventPublisher
from signai.SignPipeline import SignPipeline
from signai.Speech import Speaker
from signai.Translator import Translator
from signai.exceptions import CameraNotFoundError, SignAIError
from signai.helpers import ConfigWatcher, effective_config

LOGGER = logging.getLogger("signai.loop")

WINDOW_NAME = "SignAI"


# --------------------------------------------------------
# CAPTURE THREAD
# --------------------------------------------------------
def open_camera(camera_cfg):
    cap = cv2.VideoCapture(camera_cfg.get("index", 0))
    if not cap.isOpened():
        raise CameraNotFoundError(
            f"Could not open camera {camera_cfg.get('index', 0)}. "
            "Make sure camera is connected and not in use by another application."
        )
    cap.set(cv2.CAP_PROP_FRAME_WIDTH, camera_cfg.get("frame_width", 640))
    cap.set(cv2.CAP_PROP_FRAME_HEIGHT, camera_cfg.get("frame_height", 480))
    return cap


def capture_thread(slot, stop_event, cfg):
    camera_cfg = cfg.get("camera", {})
    try:
        cap = open_camera(camera_cfg)
    except CameraNotFoundError as e:
        LOGGER.error("%s", e)
        stop_event.set()
        return

    tracker = HandTracker(cfg)
    mirror = camera_cfg.get("mirror", True)

    # FPS calculation
    fps_times = deque(maxlen=cfg.get("debug", {}).get("fps_window", 20))
    current_fps = 0.0

    LOGGER.info("Capture thread started.")

    while not stop_event.is_set():
        ok, frame = cap.read()
        if not ok:
            time.sleep(0.01)
            continue

        now = time.time()
        fps_times.append(now)
        if len(fps_times) > 1:
            current_fps = (len(fps_times) - 1) / (fps_times[-1] - fps_times[0])

        # selfie view: handedness labels assume a mirrored image
        if mirror:
            frame = cv2.flip(frame, 1)
        rgb = cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)
        hands = tracker.process_frame(rgb, now)

        slot.put((frame, hands, now, current_fps))

    tracker.close()
    cap.release()
    LOGGER.info("Capture thread exiting. %d stale frames dropped.", slot.dropped)


# --------------------------------------------------------
# PROCESSING THREAD
# --------------------------------------------------------
def processing_loop(slot, stop_event, pipeline, watcher, overrides, start_cfg, headless=False):
    translations = Queue()
    status = ""
    current_cfg = start_cfg

    if not headless:
        cv2.namedWindow(WINDOW_NAME, cv2.WINDOW_NORMAL)

    LOGGER.info("Processing loop started.")

    while not stop_event.is_set():
        try:
            frame, hands, timestamp, fps = slot.get(timeout=0.1)
        except Empty:
            continue

        if watcher is not None:
            new_cfg = effective_config(watcher.check_reload(), overrides)
            if new_cfg != current_cfg:
                current_cfg = new_cfg
                pipeline.apply_config(current_cfg)

        result = pipeline.process(hands)
        if result.event is not None:
            status = f"Committed: {result.event.label}"

        status = drain_translations(translations, pipeline) or status

        if headless:
            continue

        if current_cfg.get("debug", {}).get("draw_landmarks", True):
            for h in hands:
                draw_hand_debug(frame, h)
        show_fps = current_cfg.get("debug", {}).get("show_fps", True)
        draw_status(frame, result, pipeline, status, fps if show_fps else None)

        cv2.imshow(WINDOW_NAME, frame)
        key = cv2.waitKey(1) & 0xFF
        if key == ESC_KEY:
            stop_event.set()
            break
        try:
            status = handle_key(key, pipeline, current_cfg, translations) or status
        except SignAIError as e:
            status = str(e)

    if not headless:
        cv2.destroyAllWindows()
    LOGGER.info("Processing loop exiting.")


def build_pipeline(cfg):
    publisher = EventPublisher(cfg.get("network", {}).get("publish"))
    speaker = Speaker(cfg) if cfg.get("speech", {}).get("enabled", True) else None
    pipeline = SignPipeline(
        cfg,
        log=ConversationLog(),
        publisher=publisher,
        speaker=speaker,
        translator=Translator(cfg),
    )
    return pipeline


# --------------------------------------------------------
# MAIN ENTRY
# --------------------------------------------------------
def main(cfg=None, config_path="config.json", headless=False):
    watcher = ConfigWatcher(config_path)
    overrides = cfg or {}
    start_cfg = effective_config(watcher.get_config(), overrides)

    pipeline = build_pipeline(start_cfg)
    slot = LatestFrameSlot()
    stop_event = threading.Event()

    cap_thread = threading.Thread(
        target=capture_thread, args=(slot, stop_event, start_cfg), daemon=True
    )
    cap_thread.start()

    # HighGUI wants the main thread, so processing runs here
    try:
        processing_loop(slot, stop_event, pipeline, watcher, overrides, start_cfg, headless=headless)
    except KeyboardInterrupt:
        stop_event.set()
    finally:
        stop_event.set()
        cap_thread.join(timeout=1.0)
        if pipeline.speaker is not None:
            pipeline.speaker.stop()
        if pipeline.publisher is not None:
            pipeline.publisher.close()

    LOGGER.info("Shutdown complete. %d gestures committed.", len(pipeline.session.history))
    return pipeline
