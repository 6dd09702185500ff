import logging
import threading
import time
from queue import Empty, Queue
from typing import List, NamedTuple

import cv2

from HandData import HandData
from HandTracker import HandTracker
from LetterServer import LetterServer
from Overlay import draw_fps, draw_hand_debug, draw_reference
from SpellingProcessor import SpellingProcessor
from helpers import DEFAULT_CONFIG_PATH, ConfigWatcher, FpsMeter, load_config, offer_latest

DEBUG_WINDOW = "Fingerspelling Debug"


class FrameSample(NamedTuple):
    frame: object
    hands: List[HandData]
    timestamp: float
    fps: float


def open_camera(camera_cfg):
    cap = cv2.VideoCapture(camera_cfg.get("index", 0))
    if cap.isOpened():
        cap.set(cv2.CAP_PROP_FRAME_WIDTH, camera_cfg.get("frame_width", 1280))
        cap.set(cv2.CAP_PROP_FRAME_HEIGHT, camera_cfg.get("frame_height", 720))
    return cap


def capture_thread(frame_queue, stop_event, cfg):
    cap = open_camera(cfg.get("camera", {}))
    if not cap.isOpened():
        print("[PY] ERROR: Cannot open camera")
        stop_event.set()
        return

    tracker = HandTracker(cfg)
    meter = FpsMeter(cfg.get("debug", {}).get("fps_window", 20))
    previous = None
    print("[PY] Capture thread started.")

    try:
        while not stop_event.is_set():
            ok, frame = cap.read()
            if not ok:
                time.sleep(0.01)
                continue

            now = time.time()
            fps = meter.tick(now)
            hands = tracker.process_frame(cv2.cvtColor(frame, cv2.COLOR_BGR2RGB), now)
            if previous is not None:
                for h in hands:
                    h.dt = now - previous
            previous = now

            offer_latest(frame_queue, FrameSample(frame, hands, now, fps))
    finally:
        tracker.close()
        cap.release()
        print("[PY] Capture thread exiting.")


def draw_debug(frame, hands, fps, debug_cfg):
    if debug_cfg.get("draw_landmarks", True):
        for i, h in enumerate(hands):
            draw_hand_debug(frame, h, offset_y=i * 120)
    if debug_cfg.get("show_reference", True) and hands:
        draw_reference(frame, hands[0].display_letter)
    if debug_cfg.get("show_fps", True):
        draw_fps(frame, fps)


def classifier_thread(frame_queue, stop_event, cfg, config_path=DEFAULT_CONFIG_PATH):
    watcher = ConfigWatcher(config_path)
    current_cfg = watcher.get_config() or cfg or {}

    processor = SpellingProcessor(current_cfg)
    server_cfg = current_cfg.get("server", {})
    server = LetterServer(server_cfg.get("host", "127.0.0.1"), server_cfg.get("port", 5555))
    server.start()

    camera_cfg = current_cfg.get("camera", {})
    cv2.namedWindow(DEBUG_WINDOW, cv2.WINDOW_NORMAL)
    cv2.resizeWindow(
        DEBUG_WINDOW,
        camera_cfg.get("frame_width", 1280),
        camera_cfg.get("frame_height", 720),
    )
    print("[PY] Classifier thread started.")

    try:
        while not stop_event.is_set():
            try:
                sample = frame_queue.get(timeout=0.1)
            except Empty:
                continue

            new_cfg = watcher.check_reload()
            if new_cfg and new_cfg != current_cfg:
                current_cfg = new_cfg
                processor.update_config(current_cfg)

            # an empty hand list resets every window
            processor.process_hands(sample.hands)

            draw_debug(sample.frame, sample.hands, sample.fps, current_cfg.get("debug", {}))
            cv2.imshow(DEBUG_WINDOW, sample.frame)
            if cv2.waitKey(1) & 0xFF == 27:
                stop_event.set()
                break

            server.poll()
            server.send_hands(sample.hands, fps=sample.fps)
    finally:
        server.close()
        cv2.destroyAllWindows()
        print("[PY] Classifier thread exiting.")


def main(config_path=DEFAULT_CONFIG_PATH):
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    cfg = load_config(config_path)
    if not cfg:
        print(f"[PY] WARNING: no usable config at {config_path}, running on defaults.")

    frame_queue = Queue(maxsize=1)
    stop_event = threading.Event()
    workers = [
        threading.Thread(target=capture_thread, args=(frame_queue, stop_event, cfg), daemon=True),
        threading.Thread(
            target=classifier_thread, args=(frame_queue, stop_event, cfg, config_path), daemon=True
        ),
    ]
    for t in workers:
        t.start()

    try:
        while not stop_event.is_set():
            time.sleep(0.1)
    except KeyboardInterrupt:
        stop_event.set()

    for t in workers:
        t.join(timeout=1.0)
    print("[PY] Shutdown complete.")


if __name__ == "__main__":
    main()
