import math
from collections import namedtuple

# ==========================================
# 1. MATH & GEOMETRY (Pure Functions)
# ==========================================
WRIST = 0
THUMB_IP, THUMB_TIP = 3, 4
INDEX_PIP, INDEX_TIP = 6, 8
MIDDLE_PIP, MIDDLE_TIP = 10, 12
RING_PIP, RING_TIP = 14, 16
PINKY_PIP, PINKY_TIP = 18, 20

FingerStates = namedtuple("FingerStates", ["thumb", "index", "middle", "ring", "pinky"])


def point_xy(entry):
    """Planar (x, y) of a landmark; any depth coordinate is dropped."""
    if hasattr(entry, "x") and hasattr(entry, "y"):
        return (float(entry.x), float(entry.y))
    if isinstance(entry, dict):
        return (float(entry.get("x", 0.0)), float(entry.get("y", 0.0)))
    if isinstance(entry, (list, tuple)) and len(entry) >= 2:
        return (float(entry[0]), float(entry[1]))
    raise ValueError("Unsupported landmark format; expected object with x,y or sequence of 2 values.")


def vec_dist(a, b):
    ax, ay = point_xy(a)
    bx, by = point_xy(b)
    return math.hypot(ax - bx, ay - by)


def landmark_dist(lm, i, j):
    return vec_dist(lm[i], lm[j])


def is_finger_open(lm, tip, pip, ratio=1.2):
    """A digit is open when its tip is further from the wrist than ratio x its joint."""
    return landmark_dist(lm, tip, WRIST) > landmark_dist(lm, pip, WRIST) * ratio


def finger_states(lm, finger_ratio=1.2, thumb_ratio=1.1):
    return FingerStates(
        thumb=is_finger_open(lm, THUMB_TIP, THUMB_IP, thumb_ratio),
        index=is_finger_open(lm, INDEX_TIP, INDEX_PIP, finger_ratio),
        middle=is_finger_open(lm, MIDDLE_TIP, MIDDLE_PIP, finger_ratio),
        ring=is_finger_open(lm, RING_TIP, RING_PIP, finger_ratio),
        pinky=is_finger_open(lm, PINKY_TIP, PINKY_PIP, finger_ratio),
    )


def average_tip_spread(lm):
    """Mean horizontal gap between adjacent fingertips, thumb to pinky."""
    tips = [THUMB_TIP, INDEX_TIP, MIDDLE_TIP, RING_TIP, PINKY_TIP]
    xs = [point_xy(lm[t])[0] for t in tips]
    gaps = [abs(a - b) for a, b in zip(xs, xs[1:])]
    return sum(gaps) / len(gaps)


def wrist_position(lm):
    """Return wrist dict for JSON."""
    x, y = point_xy(lm[WRIST])
    return {"x": x, "y": y}
