import logging

import mediapipe as mp

from HandData import HandData, HandFrame, InvalidHandFrame

logger = logging.getLogger(__name__)


class HandTracker:
    def __init__(
        self,
        cfg,
    ):
        self.cfg = cfg
        tcfg = cfg.get("tracker", {})

        self.mp_hands = mp.solutions.hands.Hands(
            static_image_mode=False,
            model_complexity=tcfg.get("model_complexity", 1),
            min_detection_confidence=tcfg.get("min_detection_confidence", 0.5),
            min_tracking_confidence=tcfg.get("min_tracking_confidence", 0.5),
            max_num_hands=tcfg.get("max_num_hands", 1),
        )

    def process_frame(self, frame_rgb, timestamp):
        """
        Process an RGB frame (BGR->RGB conversion is the caller's job).
        Returns list of HandData instances with raw landmarks, handedness and a
        validated HandFrame. An empty list means no hand is present.
        timestamp: absolute time (seconds) for this frame.
        """
        result = self.mp_hands.process(frame_rgb)
        hands = []

        if not result.multi_hand_landmarks:
            return hands

        for lm, handed in zip(result.multi_hand_landmarks, result.multi_handedness):
            h = HandData()
            h.raw_landmarks = lm
            h.handedness = handed.classification[0].label
            h.visible = True
            h.timestamp = timestamp
            try:
                h.frame = HandFrame.from_landmarks(lm.landmark)
            except InvalidHandFrame as e:
                # keep the hand so the processor can count a no-pose frame
                logger.debug("tracker produced unusable landmarks: %s", e)
            hands.append(h)

        return hands

    def close(self):
        self.mp_hands.close()
