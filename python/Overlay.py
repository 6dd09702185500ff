import cv2
import mediapipe as mp

from Letters import Letter, reference_for

mp_drawing = mp.solutions.drawing_utils
mp_styles = mp.solutions.drawing_styles

LETTER_COLOR = (0, 165, 255)
TEXT_COLOR = (0, 255, 0)


def _label(letter):
    if letter is None or letter is Letter.NONE:
        return "-"
    return letter.value if isinstance(letter, Letter) else str(letter)


# ---------- debug drawing ----------
def draw_hand_debug(frame, hand_data, offset_y=0):
    """
    Draw landmarks + text overlay for a single hand.
    offset_y shifts text block vertically (useful for multiple hands).
    """
    if hand_data.raw_landmarks is not None:
        mp_drawing.draw_landmarks(
            frame,
            hand_data.raw_landmarks,
            mp.solutions.hands.HAND_CONNECTIONS,
            mp_styles.get_default_hand_landmarks_style(),
            mp_styles.get_default_hand_connections_style(),
        )

    x0, y0 = 10, 30 + offset_y
    dy = 22
    info = [
        f"hand: {hand_data.handedness}",
        f"raw: {_label(hand_data.letter)} ({hand_data.confidence:.2f})",
        f"stable: {_label(hand_data.stable_letter)}",
    ]
    if hand_data.features is not None:
        fingers = hand_data.features.fingers
        info.append(
            "fingers: " + "".join("1" if v else "0" for v in fingers)
        )
    for i, line in enumerate(info):
        cv2.putText(
            frame,
            line,
            (x0, y0 + i * dy),
            cv2.FONT_HERSHEY_SIMPLEX,
            0.55,
            TEXT_COLOR,
            1,
            cv2.LINE_AA,
        )

    if hand_data.display_letter is not None:
        h, w, _ = frame.shape
        cv2.putText(
            frame,
            _label(hand_data.display_letter),
            (w - 90, 80 + offset_y),
            cv2.FONT_HERSHEY_DUPLEX,
            2.5,
            LETTER_COLOR,
            4,
            cv2.LINE_AA,
        )


def draw_reference(frame, letter):
    """Bottom banner with the reference instruction for the shown letter."""
    ref = reference_for(letter)
    if ref is None:
        return
    h, w, _ = frame.shape
    cv2.rectangle(frame, (0, h - 40), (w, h), (0, 0, 0), -1)
    cv2.putText(
        frame,
        f"{ref.letter}: {ref.instruction}",
        (10, h - 14),
        cv2.FONT_HERSHEY_SIMPLEX,
        0.5,
        (255, 255, 255),
        1,
        cv2.LINE_AA,
    )


def draw_fps(frame, fps):
    cv2.putText(
        frame,
        f"FPS: {fps:.1f}" if fps is not None else "FPS: n/a",
        (10, frame.shape[0] - 50),
        cv2.FONT_HERSHEY_SIMPLEX,
        0.6,
        (255, 255, 0),
        2,
    )
