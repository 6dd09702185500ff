import math


# ==========================================
# MATH & GEOMETRY (Pure Functions)
# ==========================================
def distance(a, b):
    """Euclidean distance in the image plane (x, y) between two landmarks."""
    dx = a.x - b.x
    dy = a.y - b.y
    return math.sqrt(dx * dx + dy * dy)


def distance_3d(a, b):
    dx = a.x - b.x
    dy = a.y - b.y
    dz = a.z - b.z
    return math.sqrt(dx * dx + dy * dy + dz * dz)


def normalized(value, scale):
    """value / scale, 0.0 when the scale is degenerate."""
    if scale <= 1e-6:
        return 0.0
    return value / scale
