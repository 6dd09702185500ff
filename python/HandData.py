from typing import Iterator, NamedTuple, Optional, Sequence, Tuple

# MediaPipe hand landmark indices
WRIST = 0
THUMB_CMC, THUMB_MCP, THUMB_IP, THUMB_TIP = 1, 2, 3, 4
INDEX_MCP, INDEX_PIP, INDEX_DIP, INDEX_TIP = 5, 6, 7, 8
MIDDLE_MCP, MIDDLE_PIP, MIDDLE_DIP, MIDDLE_TIP = 9, 10, 11, 12
RING_MCP, RING_PIP, RING_DIP, RING_TIP = 13, 14, 15, 16
PINKY_MCP, PINKY_PIP, PINKY_DIP, PINKY_TIP = 17, 18, 19, 20

NUM_LANDMARKS = 21


class InvalidHandFrame(ValueError):
    """Raised when landmarks cannot form a complete 21-point hand."""


class LandmarkPoint(NamedTuple):
    x: float
    y: float
    z: float = 0.0


def _coordinates(entry):
    if hasattr(entry, "x") and hasattr(entry, "y"):
        return entry.x, entry.y, getattr(entry, "z", 0.0)
    if isinstance(entry, dict):
        try:
            return entry["x"], entry["y"], entry.get("z", 0.0)
        except KeyError as e:
            raise InvalidHandFrame(f"landmark mapping missing key {e}") from None
    if isinstance(entry, (list, tuple)) and len(entry) in (2, 3):
        return tuple(entry)
    raise InvalidHandFrame(
        "Unsupported landmark format; expected object with x,y,z, a mapping or a sequence of 2-3 values."
    )


def _extract_point(entry) -> LandmarkPoint:
    values = _coordinates(entry)
    try:
        return LandmarkPoint(*(float(v) for v in values))
    except (TypeError, ValueError):
        raise InvalidHandFrame(f"non-numeric landmark coordinate in {entry!r}") from None


class HandFrame:
    """
    Immutable 21-point hand skeleton for one video frame.
    Indexed with the anatomical constants above (WRIST, THUMB_TIP, ...).
    """

    __slots__ = ("_points",)

    def __init__(self, points: Sequence[LandmarkPoint]):
        points = tuple(points)
        if len(points) != NUM_LANDMARKS:
            raise InvalidHandFrame(
                f"expected {NUM_LANDMARKS} landmarks, got {len(points)}"
            )
        self._points: Tuple[LandmarkPoint, ...] = points

    @classmethod
    def from_landmarks(cls, landmarks) -> "HandFrame":
        """Build a frame from MediaPipe landmarks, dicts or (x, y, z) sequences."""
        if landmarks is None:
            raise InvalidHandFrame("no landmarks")
        if isinstance(landmarks, HandFrame):
            return landmarks
        # MediaPipe NormalizedLandmarkList wraps the points in .landmark
        landmarks = getattr(landmarks, "landmark", landmarks)
        try:
            entries = list(landmarks)
        except TypeError:
            raise InvalidHandFrame("landmarks are not iterable") from None
        if len(entries) != NUM_LANDMARKS:
            raise InvalidHandFrame(
                f"expected {NUM_LANDMARKS} landmarks, got {len(entries)}"
            )
        return cls(_extract_point(e) for e in entries)

    def __getitem__(self, idx: int) -> LandmarkPoint:
        return self._points[idx]

    def __len__(self) -> int:
        return NUM_LANDMARKS

    def __iter__(self) -> Iterator[LandmarkPoint]:
        return iter(self._points)

    def __eq__(self, other):
        if not isinstance(other, HandFrame):
            return NotImplemented
        return self._points == other._points

    def __hash__(self):
        return hash(self._points)

    def __repr__(self):
        w = self._points[WRIST]
        return f"HandFrame(wrist=({w.x:.3f}, {w.y:.3f}, {w.z:.3f}))"

    def to_list(self):
        return [list(p) for p in self._points]


class HandData:
    """
    Simple container for per-hand data that flows between modules.
    """

    def __init__(self):
        # raw mediapipe landmark object (for drawing)
        self.raw_landmarks = None

        # validated skeleton, None when the tracker output was unusable
        self.frame: Optional[HandFrame] = None

        # "Left" / "Right"
        self.handedness = "Unknown"

        # boolean flag
        self.visible = False

        # timing
        self.timestamp = 0.0  # absolute time (seconds)
        self.dt = 0.0  # time since previous classified frame (seconds)

        # features computed per frame (HandFeatures or None)
        self.features = None

        # classification result
        self.letter = ""
        self.confidence = 0.0
        self.stable_letter = None
        self.display_letter = None

    def to_dict(self):
        """Serialize to JSON-friendly dict."""
        fingers = None
        palm = 0.0
        if self.features is not None:
            fingers = self.features.fingers._asdict()
            palm = self.features.palm_size
        return {
            "handedness": self.handedness,
            "visible": self.visible,
            "letter": _letter_str(self.letter) or "",
            "confidence": self.confidence,
            "stable_letter": _letter_str(self.stable_letter),
            "display_letter": _letter_str(self.display_letter),
            "fingers": fingers,
            "palm_size": palm,
            "wrist": _wrist_dict(self.frame),
            "timestamp": self.timestamp,
            "dt": self.dt,
        }


def _letter_str(letter):
    if letter is None:
        return None
    return str(getattr(letter, "value", letter))


def _wrist_dict(frame):
    if frame is None:
        return {"x": 0.0, "y": 0.0, "z": 0.0}
    w = frame[WRIST]
    return {"x": w.x, "y": w.y, "z": w.z}
