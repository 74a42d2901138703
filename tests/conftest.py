import math
from types import SimpleNamespace

import pytest


WRIST_XY = (0.5, 0.6)
PIP_RADIUS = 0.2
OPEN_TIP_RADIUS = 0.3
FOLDED_TIP_RADIUS = 0.15

# first landmark index and angle from vertical (degrees) of each digit
DIGITS = {
    "thumb": (1, -50.0),
    "index": (5, -15.0),
    "middle": (9, 0.0),
    "ring": (13, 15.0),
    "pinky": (17, 30.0),
}
ALL_DIGITS = tuple(DIGITS)


def build_hand(open_digits=(), thumb_down=False, angles=None):
    """
    21 (x, y) points for a hand whose digits radiate from the wrist.

    Open digits reach 0.3 from the wrist, folded ones 0.15, while every
    proximal joint sits at 0.2, which puts each digit clearly on one side
    of the open/folded thresholds.
    """
    points = [None] * 21
    points[0] = WRIST_XY
    for name, (base, angle) in DIGITS.items():
        if angles and name in angles:
            angle = angles[name]
        tip_r = OPEN_TIP_RADIUS if name in open_digits else FOLDED_TIP_RADIUS
        if name == "thumb":
            radii = (0.08, 0.14, PIP_RADIUS, tip_r)
        else:
            radii = (0.12, PIP_RADIUS, (PIP_RADIUS + tip_r) / 2, tip_r)
        dx = math.sin(math.radians(angle))
        dy = -math.cos(math.radians(angle))
        if name == "thumb" and thumb_down:
            dy = -dy
        for offset, r in enumerate(radii):
            points[base + offset] = (WRIST_XY[0] + dx * r, WRIST_XY[1] + dy * r)
    return points


def pinch(points, gap=0.01):
    """Move the thumb tip next to the index tip."""
    points = list(points)
    ix, iy = points[8]
    points[4] = (ix + gap, iy)
    return points


def as_mediapipe(points, z=0.0):
    return [SimpleNamespace(x=x, y=y, z=z) for x, y in points]


@pytest.fixture
def hand_factory():
    return build_hand


class FakeClock:
    def __init__(self, start=0.0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, ms):
        self.now += ms


@pytest.fixture
def clock():
    return FakeClock()
