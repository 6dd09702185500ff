# LetterClassifier.py
from typing import Callable, NamedTuple, Optional, Sequence

from Geometry import distance, normalized
from HandData import (
    THUMB_TIP,
    INDEX_MCP,
    INDEX_PIP,
    INDEX_DIP,
    INDEX_TIP,
    MIDDLE_MCP,
    MIDDLE_TIP,
    RING_MCP,
    PINKY_TIP,
)
from HandFeatures import HandFeatureExtractor, HandFeatures
from Letters import Letter


class ClassificationResult(NamedTuple):
    letter: Letter
    confidence: float

    @property
    def detected(self) -> bool:
        return self.letter is not Letter.NONE


NO_DETECTION = ClassificationResult(Letter.NONE, 0.0)


class Rule(NamedTuple):
    name: str
    letter: Letter
    confidence: float
    predicate: Callable[[HandFeatures], bool]


# ---------- geometry helpers ----------
def touching(f: HandFeatures, a: int, b: int, threshold: float = 0.06) -> bool:
    """Raw image-plane distance check, tuned against typical palm sizes."""
    return distance(f.frame[a], f.frame[b]) < threshold


def index_hooked(f: HandFeatures) -> bool:
    tip, dip, pip = f.frame[INDEX_TIP], f.frame[INDEX_DIP], f.frame[INDEX_PIP]
    return tip.y > dip.y and dip.y < pip.y  # DIP is the highest point


# ---------- predicates, one per table row ----------
def _open_palm(f):
    return f.extended_count == 5


def _fist_thumb_beside(f):
    lm = f.frame
    return f.fingers.four_curled and f.fingers.thumb and lm[THUMB_TIP].x < lm[INDEX_MCP].x


def _fist_thumb_over(f):
    lm = f.frame
    return f.fingers.four_curled and (
        not f.fingers.thumb or lm[THUMB_TIP].y < lm[INDEX_PIP].y
    )


def _fist_thumb_across(f):
    return f.fingers.four_curled and touching(f, THUMB_TIP, INDEX_PIP, 0.08)


def _flat_hand(f):
    return f.fingers.only("index", "middle", "ring", "pinky") and not f.fingers.thumb


def _curved_hand(f):
    if f.extended_count < 3:
        return False
    curve = normalized(distance(f.frame[THUMB_TIP], f.frame[PINKY_TIP]), f.palm_size)
    return 0.3 < curve < 0.8


def _index_thumb_on_middle(f):
    return f.fingers.only("index") and touching(f, THUMB_TIP, MIDDLE_TIP, 0.07)


def _thumb_index_ring(f):
    return f.fingers.only("middle", "ring", "pinky") and touching(f, THUMB_TIP, INDEX_TIP, 0.06)


def _index_sideways(f):
    return (
        f.pointing_sideways
        and f.fingers.only("index")
        and f.fingers.thumb
        and not f.pointing_down
    )


def _two_sideways(f):
    return f.pointing_sideways and f.fingers.only("index", "middle") and not f.pointing_down


def _pinky_only(f):
    return f.fingers.only("pinky") and not f.fingers.thumb


def _thumb_between_v(f):
    if not (f.fingers.only("index", "middle") and f.fingers.thumb):
        return False
    lm = f.frame
    thumb = lm[THUMB_TIP]
    between = (
        thumb.y < lm[INDEX_TIP].y
        and thumb.x > lm[INDEX_TIP].x - 0.05
        and thumb.x < lm[MIDDLE_TIP].x + 0.05
    )
    return between and not f.pointing_down


def _l_shape(f):
    return f.fingers.thumb and f.fingers.only("index") and not f.pointing_sideways


def _thumb_under_three(f):
    if not (f.fingers.four_curled and not f.fingers.thumb):
        return False
    return f.frame[THUMB_TIP].y > f.frame[INDEX_PIP].y and touching(f, THUMB_TIP, RING_MCP, 0.1)


def _thumb_under_two(f):
    if not (f.fingers.four_curled and not f.fingers.thumb):
        return False
    under = f.frame[THUMB_TIP].y > f.frame[INDEX_PIP].y and touching(f, THUMB_TIP, MIDDLE_MCP, 0.1)
    return under and not touching(f, THUMB_TIP, RING_MCP, 0.08)


def _circle(f):
    if not (f.thumb_index_norm < 0.4 and f.thumb_middle_norm < 0.5):
        return False
    return touching(f, THUMB_TIP, INDEX_TIP, 0.08) or touching(f, THUMB_TIP, MIDDLE_TIP, 0.08)


def _two_down(f):
    return f.pointing_down and f.fingers.only("index", "middle")


def _index_down(f):
    return f.pointing_down and f.fingers.only("index") and f.fingers.thumb


def _crossed(f):
    if not f.fingers.only("index", "middle"):
        return False
    return abs(f.frame[INDEX_TIP].x - f.frame[MIDDLE_TIP].x) < 0.03


def _thumb_between_knuckles(f):
    if not f.fingers.four_curled:
        return False
    lm = f.frame
    thumb = lm[THUMB_TIP]
    return (
        thumb.x > lm[INDEX_MCP].x - 0.02
        and thumb.x < lm[MIDDLE_MCP].x + 0.02
        and thumb.y > lm[INDEX_PIP].y
    )


def _two_together(f):
    return (
        f.fingers.only("index", "middle")
        and not f.fingers.thumb
        and f.index_middle_norm < 0.25
        and not f.pointing_sideways
    )


def _two_spread(f):
    return (
        f.fingers.only("index", "middle")
        and f.index_middle_norm > 0.25
        and not f.pointing_sideways
        and not f.pointing_down
    )


def _three_fingers(f):
    return f.fingers.only("index", "middle", "ring") and not f.fingers.thumb


def _hooked_index(f):
    fingers = f.fingers
    if fingers.middle or fingers.ring or fingers.pinky:
        return False
    return index_hooked(f)


def _thumb_pinky(f):
    return f.fingers.thumb and f.fingers.only("pinky")


# Priority order matters: the first matching row wins.
RULES = (
    Rule("open_palm", Letter.FIVE, 0.92, _open_palm),
    Rule("fist_thumb_beside", Letter.A, 0.88, _fist_thumb_beside),
    Rule("fist_thumb_over", Letter.S, 0.82, _fist_thumb_over),
    Rule("fist_thumb_across", Letter.E, 0.80, _fist_thumb_across),
    Rule("flat_hand", Letter.B, 0.88, _flat_hand),
    Rule("curved_hand", Letter.C, 0.78, _curved_hand),
    Rule("index_thumb_on_middle", Letter.D, 0.85, _index_thumb_on_middle),
    Rule("thumb_index_ring", Letter.F, 0.85, _thumb_index_ring),
    Rule("index_sideways", Letter.G, 0.80, _index_sideways),
    Rule("two_sideways", Letter.H, 0.82, _two_sideways),
    Rule("pinky_only", Letter.I, 0.88, _pinky_only),
    Rule("thumb_between_v", Letter.K, 0.78, _thumb_between_v),
    Rule("l_shape", Letter.L, 0.88, _l_shape),
    Rule("thumb_under_three", Letter.M, 0.72, _thumb_under_three),
    Rule("thumb_under_two", Letter.N, 0.70, _thumb_under_two),
    Rule("circle", Letter.O, 0.80, _circle),
    Rule("two_down", Letter.P, 0.75, _two_down),
    Rule("index_down", Letter.Q, 0.75, _index_down),
    Rule("crossed", Letter.R, 0.78, _crossed),
    Rule("thumb_between_knuckles", Letter.T, 0.72, _thumb_between_knuckles),
    Rule("two_together", Letter.U, 0.85, _two_together),
    Rule("two_spread", Letter.V, 0.88, _two_spread),
    Rule("three_fingers", Letter.W, 0.85, _three_fingers),
    Rule("hooked_index", Letter.X, 0.80, _hooked_index),
    Rule("thumb_pinky", Letter.Y, 0.90, _thumb_pinky),
)


class LetterClassifier:
    """
    Ordered decision list over HandFeatures.
    Rules are evaluated top to bottom; the first match decides the letter and
    its fixed confidence. Nothing is accumulated between calls.
    """

    def __init__(self, rules: Sequence[Rule] = RULES, extractor: HandFeatureExtractor = None):
        self.rules = tuple(rules)
        self.extractor = extractor or HandFeatureExtractor()

    def match(self, features: Optional[HandFeatures]) -> Optional[Rule]:
        if features is None:
            return None
        for rule in self.rules:
            if rule.predicate(features):
                return rule
        return None

    def classify_features(self, features: Optional[HandFeatures]) -> ClassificationResult:
        rule = self.match(features)
        if rule is None:
            return NO_DETECTION
        return ClassificationResult(rule.letter, rule.confidence)

    def classify(self, landmarks) -> ClassificationResult:
        """
        landmarks: HandFrame, MediaPipe landmark list or 21 (x, y, z) entries.
        Missing or malformed input yields NO_DETECTION rather than an exception.
        """
        return self.classify_features(self.extractor.extract(landmarks))
