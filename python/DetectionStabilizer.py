import logging
from collections import Counter, deque
from typing import Iterator, Optional

from Letters import Letter

logger = logging.getLogger(__name__)


# ==========================================
# PERSISTENT STATE (per tracked hand)
# ==========================================
class DetectionWindow:
    """
    Fixed-capacity FIFO of raw per-frame letters, oldest first.
    Letter.NONE occupies a slot like any other value but is never counted.
    """

    def __init__(self, capacity: int = 4):
        self.capacity = max(1, int(capacity))
        self._items = deque(maxlen=self.capacity)

    def push(self, letter: Letter) -> None:
        self._items.append(letter)

    def counts(self) -> Counter:
        return Counter(l for l in self._items if l is not Letter.NONE)

    def last_seen(self, letter: Letter) -> int:
        """Index of the newest occurrence of letter, -1 if absent."""
        for idx in range(len(self._items) - 1, -1, -1):
            if self._items[idx] is letter:
                return idx
        return -1

    def clear(self) -> None:
        self._items.clear()

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Letter]:
        return iter(self._items)


class DetectionStabilizer:
    """
    Debounces the classifier's raw letter stream.
    A letter is reported once it occupies at least `threshold` slots of the
    last `buffer_size` frames. Ties go to the higher count, then to the letter
    seen most recently.
    """

    def __init__(self, buffer_size: int = 4, threshold: int = 3):
        self.buffer_size = max(1, int(buffer_size))
        self.threshold = max(1, int(threshold))
        if self.threshold > self.buffer_size:
            logger.warning(
                "stabilizer threshold %d exceeds window %d; nothing will ever stabilize",
                self.threshold,
                self.buffer_size,
            )
        self.window = DetectionWindow(self.buffer_size)
        self.stable: Optional[Letter] = None

    def add_detection(self, raw_letter) -> Optional[Letter]:
        letter = Letter.parse(raw_letter)
        if letter is Letter.NONE and raw_letter and not isinstance(raw_letter, Letter):
            logger.debug("unknown letter %r counted as no-pose", raw_letter)
        self.window.push(letter)

        best = None
        best_key = None
        for candidate, count in self.window.counts().items():
            if count < self.threshold:
                continue
            key = (count, self.window.last_seen(candidate))
            if best_key is None or key > best_key:
                best, best_key = candidate, key

        self.stable = best
        return best

    def reset(self) -> None:
        self.window.clear()
        self.stable = None
