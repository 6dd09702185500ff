# SpellingProcessor.py
import logging
from typing import Dict, List

from DetectionStabilizer import DetectionStabilizer
from HandData import HandData, HandFrame, InvalidHandFrame
from HandFeatures import HandFeatureExtractor
from LetterClassifier import LetterClassifier
from helpers import merge_config

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = {
    "features": {"extend_margin": 0.02, "thumb_margin": 0.02},
    "stabilizer": {"buffer_size": 4, "threshold": 3},
    "output": {"min_confidence": 0.65},
}


class SpellingProcessor:
    """
    Runs features -> classifier -> stabilizer for every tracked hand.
    Each hand key owns its own DetectionStabilizer; a hand that disappears
    from the frame has its history dropped.
    """

    def __init__(self, cfg=None):
        self.cfg = merge_config(DEFAULT_CONFIG, None)
        self.extractor = HandFeatureExtractor()
        self.classifier = LetterClassifier(extractor=self.extractor)
        self.stabilizers: Dict[str, DetectionStabilizer] = {}
        self._apply_config()
        if cfg:
            self.update_config(cfg)

    def update_config(self, cfg):
        if not cfg:
            return
        old_window = (self.buffer_size, self.threshold)
        self.cfg = merge_config(self.cfg, cfg)
        self._apply_config()
        if (self.buffer_size, self.threshold) != old_window:
            logger.info(
                "stabilizer window changed to %d/%d, dropping history",
                self.buffer_size,
                self.threshold,
            )
            self.stabilizers.clear()

    def _apply_config(self):
        f = self.cfg.get("features", {})
        s = self.cfg.get("stabilizer", {})
        o = self.cfg.get("output", {})

        self.extractor.configure(
            extend_margin=f.get("extend_margin", 0.02),
            thumb_margin=f.get("thumb_margin", 0.02),
        )
        self.buffer_size = max(1, int(s.get("buffer_size", 4)))
        self.threshold = max(1, int(s.get("threshold", 3)))
        self.min_confidence = float(o.get("min_confidence", 0.65))

    def _get_stabilizer(self, key: str) -> DetectionStabilizer:
        stab = self.stabilizers.get(key)
        if stab is None:
            stab = DetectionStabilizer(self.buffer_size, self.threshold)
            self.stabilizers[key] = stab
        return stab

    @staticmethod
    def hand_key(hand: HandData, index: int = 0) -> str:
        return f"{hand.handedness or 'Unknown'}_{index}"

    def process_hand(self, hand: HandData, key: str = None) -> HandData:
        key = key or self.hand_key(hand)

        if hand.frame is None and hand.raw_landmarks is not None:
            try:
                hand.frame = HandFrame.from_landmarks(hand.raw_landmarks)
            except InvalidHandFrame as e:
                logger.debug("hand %s: %s", key, e)

        features = self.extractor.extract(hand.frame)
        result = self.classifier.classify_features(features)

        hand.features = features
        hand.letter = result.letter
        hand.confidence = result.confidence

        stable = self._get_stabilizer(key).add_detection(result.letter)
        hand.stable_letter = stable
        if stable is not None and result.confidence > self.min_confidence:
            hand.display_letter = stable
        else:
            hand.display_letter = None
        return hand

    def process_hands(self, hands: List[HandData]) -> List[HandData]:
        seen = set()
        for idx, hand in enumerate(hands):
            key = self.hand_key(hand, idx)
            seen.add(key)
            self.process_hand(hand, key)

        # no hand present -> stale history must not leak into the next gesture
        for key in list(self.stabilizers):
            if key not in seen:
                self.stabilizers[key].reset()
        return hands

    def reset(self, key: str = None):
        if key is None:
            for stab in self.stabilizers.values():
                stab.reset()
            return
        stab = self.stabilizers.get(key)
        if stab is not None:
            stab.reset()
