"""
Launcher for the fingerspelling backends.

    python fingerspell_server.py                 # threaded pipeline, JSON snapshots over TCP
    python fingerspell_server.py --mode simple   # one loop, stable letters over ZeroMQ PUB
    python fingerspell_server.py --config my.json
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path

PY_DIR = Path(__file__).resolve().parent / "python"
if str(PY_DIR) not in sys.path:
    sys.path.insert(0, str(PY_DIR))

from helpers import DEFAULT_CONFIG_PATH, load_config  # noqa: E402


def publish_letters(config_path: str, endpoint: str) -> None:
    """Single-hand loop; every newly displayed letter goes out as one PUB string."""
    import cv2
    import zmq

    from HandTracker import HandTracker
    from SpellingProcessor import SpellingProcessor

    cfg = load_config(config_path)
    tracker = HandTracker(cfg)
    processor = SpellingProcessor(cfg)

    context = zmq.Context()
    publisher = context.socket(zmq.PUB)
    publisher.bind(endpoint)
    cap = cv2.VideoCapture(cfg.get("camera", {}).get("index", 0))
    last_sent = None
    print(f"[PY] Publishing stable letters on {endpoint}. Press ESC to stop.")

    try:
        while True:
            ok, frame = cap.read()
            if not ok:
                time.sleep(0.01)
                continue

            rgb = cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)
            hands = processor.process_hands(tracker.process_frame(rgb, time.time()))
            letter = hands[0].display_letter if hands else None
            if letter is not None and letter != last_sent:
                publisher.send_string(letter.value)
            last_sent = letter

            cv2.imshow("Fingerspelling", frame)
            if cv2.waitKey(1) & 0xFF == 27:
                break
    finally:
        tracker.close()
        cap.release()
        publisher.close()
        context.term()
        cv2.destroyAllWindows()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Static ASL fingerspelling server")
    parser.add_argument("--mode", choices=("full", "simple"), default="full")
    parser.add_argument("--config", default=DEFAULT_CONFIG_PATH, help="JSON config file.")
    parser.add_argument(
        "--endpoint",
        default="tcp://*:5556",
        help="ZeroMQ PUB endpoint (simple mode only).",
    )
    return parser


def main(argv=None) -> None:
    args = build_parser().parse_args(argv)
    if args.mode == "simple":
        logging.basicConfig(level=logging.INFO)
        publish_letters(args.config, args.endpoint)
        return

    from main_loop import main as run_pipeline

    run_pipeline(args.config)


if __name__ == "__main__":
    main()
