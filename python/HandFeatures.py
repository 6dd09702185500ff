import logging
from typing import NamedTuple, Optional

from Geometry import distance, normalized
from HandData import (
    HandFrame,
    InvalidHandFrame,
    WRIST,
    THUMB_IP,
    THUMB_TIP,
    INDEX_MCP,
    INDEX_PIP,
    INDEX_TIP,
    MIDDLE_MCP,
    MIDDLE_PIP,
    MIDDLE_TIP,
    RING_PIP,
    RING_TIP,
    PINKY_PIP,
    PINKY_TIP,
)

logger = logging.getLogger(__name__)

# (tip, pip) per non-thumb finger
FINGER_TIPS = {
    "index": (INDEX_TIP, INDEX_PIP),
    "middle": (MIDDLE_TIP, MIDDLE_PIP),
    "ring": (RING_TIP, RING_PIP),
    "pinky": (PINKY_TIP, PINKY_PIP),
}


class FingerState(NamedTuple):
    thumb: bool
    index: bool
    middle: bool
    ring: bool
    pinky: bool

    @property
    def extended_count(self) -> int:
        return sum(1 for v in self if v)

    @property
    def four_curled(self) -> bool:
        """Index, middle, ring and pinky all folded (thumb ignored)."""
        return not (self.index or self.middle or self.ring or self.pinky)

    def only(self, *names: str) -> bool:
        """Exactly the named non-thumb fingers are extended; the thumb is ignored."""
        return all(getattr(self, f) == (f in names) for f in FINGER_TIPS)


class HandFeatures(NamedTuple):
    frame: HandFrame
    fingers: FingerState
    thumb_index_dist: float
    thumb_middle_dist: float
    index_middle_dist: float
    palm_size: float
    pointing_sideways: bool
    pointing_down: bool

    @property
    def extended_count(self) -> int:
        return self.fingers.extended_count

    @property
    def thumb_index_norm(self) -> float:
        return normalized(self.thumb_index_dist, self.palm_size)

    @property
    def thumb_middle_norm(self) -> float:
        return normalized(self.thumb_middle_dist, self.palm_size)

    @property
    def index_middle_norm(self) -> float:
        return normalized(self.index_middle_dist, self.palm_size)


class HandFeatureExtractor:
    """
    Derives finger flags and palm-normalized measurements from one HandFrame.
    Stateless: the same frame always produces the same features.
    """

    def __init__(self, extend_margin: float = 0.02, thumb_margin: float = 0.02):
        self.extend_margin = extend_margin
        self.thumb_margin = thumb_margin

    def configure(self, extend_margin: float = None, thumb_margin: float = None) -> None:
        if extend_margin is not None:
            self.extend_margin = float(extend_margin)
        if thumb_margin is not None:
            self.thumb_margin = float(thumb_margin)

    def finger_state(self, frame: HandFrame) -> FingerState:
        # image y grows downward: an extended fingertip sits above (smaller y) its PIP joint
        flags = {
            name: frame[tip].y < frame[pip].y - self.extend_margin
            for name, (tip, pip) in FINGER_TIPS.items()
        }
        # thumb extension is lateral: tip pushed past the IP joint or splayed off the palm
        thumb = frame[THUMB_TIP].x < frame[THUMB_IP].x - self.thumb_margin or distance(
            frame[THUMB_TIP], frame[INDEX_MCP]
        ) > distance(frame[THUMB_IP], frame[INDEX_MCP])
        return FingerState(thumb=thumb, **flags)

    def extract(self, landmarks) -> Optional[HandFeatures]:
        """
        Returns HandFeatures, or None when the input is not a usable 21-point hand
        (missing, truncated or collapsed to a zero-size palm).
        """
        try:
            frame = HandFrame.from_landmarks(landmarks)
        except InvalidHandFrame as e:
            logger.debug("rejected hand frame: %s", e)
            return None

        palm = distance(frame[WRIST], frame[MIDDLE_MCP])
        if palm <= 1e-6:
            logger.debug("rejected hand frame: degenerate palm size %.2e", palm)
            return None

        wrist = frame[WRIST]
        index_tip = frame[INDEX_TIP]
        return HandFeatures(
            frame=frame,
            fingers=self.finger_state(frame),
            thumb_index_dist=distance(frame[THUMB_TIP], index_tip),
            thumb_middle_dist=distance(frame[THUMB_TIP], frame[MIDDLE_TIP]),
            index_middle_dist=distance(index_tip, frame[MIDDLE_TIP]),
            palm_size=palm,
            pointing_sideways=abs(index_tip.x - wrist.x) > abs(index_tip.y - wrist.y),
            pointing_down=index_tip.y > frame[INDEX_MCP].y,
        )
