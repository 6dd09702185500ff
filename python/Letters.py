from enum import Enum
from typing import NamedTuple, Optional


class Letter(str, Enum):
    """Static fingerspelling symbols the rule table can emit."""

    NONE = ""
    FIVE = "5"
    A = "A"
    B = "B"
    C = "C"
    D = "D"
    E = "E"
    F = "F"
    G = "G"
    H = "H"
    I = "I"
    K = "K"
    L = "L"
    M = "M"
    N = "N"
    O = "O"
    P = "P"
    Q = "Q"
    R = "R"
    S = "S"
    T = "T"
    U = "U"
    V = "V"
    W = "W"
    X = "X"
    Y = "Y"

    @classmethod
    def parse(cls, value) -> "Letter":
        """Map None, "" or an unknown symbol to NONE instead of raising."""
        if isinstance(value, Letter):
            return value
        if not value:
            return cls.NONE
        try:
            return cls(str(value).upper())
        except ValueError:
            return cls.NONE


class SignReference(NamedTuple):
    letter: str
    description: str
    instruction: str
    image_url: str
    static: bool = True


_GIF_BASE = "https://www.lifeprint.com/asl101/fingerspelling/abc-gifs"

# A-Z reference panel. J and Z need a traced motion and are never classified.
ASL_ALPHABET = (
    SignReference("A", "Fist with thumb beside index finger", "Make a fist with thumb resting on the side of your index finger", f"{_GIF_BASE}/a.gif"),
    SignReference("B", "Flat hand, fingers together, thumb tucked", "Hold hand flat with fingers together pointing up, thumb tucked in palm", f"{_GIF_BASE}/b.gif"),
    SignReference("C", "Curved hand forming C shape", "Curve fingers and thumb to form the letter C shape", f"{_GIF_BASE}/c.gif"),
    SignReference("D", "Index up, others touch thumb", "Point index finger up, other fingers curl to touch thumb tip", f"{_GIF_BASE}/d.gif"),
    SignReference("E", "All fingers curled, thumb across", "Curl all fingers into palm, thumb tucked across fingertips", f"{_GIF_BASE}/e.gif"),
    SignReference("F", "Index and thumb touch, others up", "Touch index and thumb tips together, other fingers extended", f"{_GIF_BASE}/f.gif"),
    SignReference("G", "Index and thumb parallel, pointing", "Point index finger sideways, thumb parallel underneath", f"{_GIF_BASE}/g.gif"),
    SignReference("H", "Index and middle out, pointing side", "Extend index and middle fingers pointing sideways together", f"{_GIF_BASE}/h.gif"),
    SignReference("I", "Pinky up, others closed", "Make a fist with only pinky finger extended upward", f"{_GIF_BASE}/i.gif"),
    SignReference("J", "Pinky up, trace J shape", "Start with I sign, then trace a J motion with pinky", f"{_GIF_BASE}/j.gif", static=False),
    SignReference("K", "Index up, middle out, thumb between", "Index and middle fingers up in V, thumb between them", f"{_GIF_BASE}/k.gif"),
    SignReference("L", "L shape with thumb and index", "Extend thumb and index finger to form an L shape", f"{_GIF_BASE}/l.gif"),
    SignReference("M", "Thumb under three fingers", "Tuck thumb under index, middle, and ring fingers", f"{_GIF_BASE}/m.gif"),
    SignReference("N", "Thumb under two fingers", "Tuck thumb under index and middle fingers only", f"{_GIF_BASE}/n.gif"),
    SignReference("O", "Fingers curved to meet thumb", "Curve all fingers to meet thumb, forming an O", f"{_GIF_BASE}/o.gif"),
    SignReference("P", "Like K but pointing down", "Make K sign but point fingers downward", f"{_GIF_BASE}/p.gif"),
    SignReference("Q", "Like G but pointing down", "Make G sign but point fingers downward", f"{_GIF_BASE}/q.gif"),
    SignReference("R", "Cross index over middle", "Cross index finger over middle finger, others closed", f"{_GIF_BASE}/r.gif"),
    SignReference("S", "Fist with thumb over fingers", "Make a fist with thumb wrapped over fingers", f"{_GIF_BASE}/s.gif"),
    SignReference("T", "Thumb between index and middle", "Tuck thumb between index and middle fingers in fist", f"{_GIF_BASE}/t.gif"),
    SignReference("U", "Index and middle up together", "Extend index and middle fingers together pointing up", f"{_GIF_BASE}/u.gif"),
    SignReference("V", "Index and middle in V shape", "Make peace sign with index and middle fingers spread", f"{_GIF_BASE}/v.gif"),
    SignReference("W", "Three fingers up spread", "Extend index, middle, ring fingers spread apart", f"{_GIF_BASE}/w.gif"),
    SignReference("X", "Index finger hooked", "Make fist with index finger bent/hooked", f"{_GIF_BASE}/x.gif"),
    SignReference("Y", "Thumb and pinky out", "Extend thumb and pinky, other fingers closed", f"{_GIF_BASE}/y.gif"),
    SignReference("Z", "Index traces Z in air", "Point index finger and trace Z shape in air", f"{_GIF_BASE}/z.gif", static=False),
)

_BY_LETTER = {ref.letter: ref for ref in ASL_ALPHABET}


def reference_for(letter) -> Optional[SignReference]:
    if letter is None:
        return None
    key = letter.value if isinstance(letter, Letter) else str(letter).upper()
    return _BY_LETTER.get(key)
