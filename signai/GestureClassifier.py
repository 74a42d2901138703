# GestureClassifier.py
from collections import namedtuple

from signai.FeatureExtractor import (
    THUMB_IP,
    THUMB_TIP,
    INDEX_TIP,
    average_tip_spread,
    finger_states,
    landmark_dist,
    point_xy,
)

NONE_LABEL = "none"

ClassificationResult = namedtuple("ClassificationResult", ["label", "confidence"])
NO_MATCH = ClassificationResult(NONE_LABEL, 0)

# Everything a rule needs to know about one frame's hand.
HandPose = namedtuple(
    "HandPose", ["fingers", "pinch_distance", "tip_spread", "thumb_tip_y", "thumb_ip_y", "handedness"]
)

GestureRule = namedtuple("GestureRule", ["label", "confidence", "predicate"])


def _only_thumb(f):
    return f.thumb and not (f.index or f.middle or f.ring or f.pinky)


def _is_ok(pose, clf):
    f = pose.fingers
    return pose.pinch_distance < clf.pinch_thresh and f.middle and f.ring and f.pinky


def _is_hello(pose, clf):
    return all(pose.fingers) and pose.tip_spread > clf.spread_thresh


def _is_help(pose, clf):
    f = pose.fingers
    # left hand only; the mirrored right-hand pose is not recognized
    return (not f.thumb) and f.index and f.middle and f.ring and f.pinky and pose.handedness == "Left"


def _is_good(pose, clf):
    f = pose.fingers
    return f.index and f.middle and not (f.ring or f.pinky or f.thumb)


def _is_you(pose, clf):
    f = pose.fingers
    return f.index and not (f.middle or f.ring or f.pinky)


def _is_thank_you(pose, clf):
    f = pose.fingers
    return f.thumb and f.pinky and not (f.index or f.middle or f.ring)


def _is_yes(pose, clf):
    return _only_thumb(pose.fingers) and pose.thumb_tip_y < pose.thumb_ip_y


def _is_no(pose, clf):
    return _only_thumb(pose.fingers) and pose.thumb_tip_y > pose.thumb_ip_y


def _is_stop(pose, clf):
    return not any(pose.fingers)


# Evaluated top to bottom, first match wins. Some predicates overlap
# (a pinch with an open hand is also "Hello"), so the order is part of the contract.
RULES = (
    GestureRule("OK", 95, _is_ok),
    GestureRule("Hello", 95, _is_hello),
    GestureRule("Help", 90, _is_help),
    GestureRule("Good", 92, _is_good),
    GestureRule("You", 90, _is_you),
    GestureRule("Thank you", 88, _is_thank_you),
    GestureRule("Yes", 95, _is_yes),
    GestureRule("No", 95, _is_no),
    GestureRule("Stop", 90, _is_stop),
)

VOCABULARY = tuple(rule.label for rule in RULES)


class GestureClassifier:
    """
    Rule-based classifier for static hand poses.
    Stateless between frames: the same landmarks always give the same result.
    """

    def __init__(self, cfg=None, rules=RULES):
        # default config
        self.cfg = {
            "classifier": {
                "pinch_distance_threshold": 0.05,
                "spread_threshold": 0.04,
                "finger_open_ratio": 1.2,
                "thumb_open_ratio": 1.1,
            },
        }
        self.rules = tuple(rules)
        self.update_config(cfg)

    def update_config(self, cfg):
        # deep-merge new cfg into self.cfg
        if cfg:
            for k, v in cfg.items():
                if isinstance(v, dict):
                    self.cfg.setdefault(k, {}).update(v)
                else:
                    self.cfg[k] = v

        c = self.cfg.get("classifier", {})
        self.pinch_thresh = c.get("pinch_distance_threshold", 0.05)
        self.spread_thresh = c.get("spread_threshold", 0.04)
        self.finger_ratio = c.get("finger_open_ratio", 1.2)
        self.thumb_ratio = c.get("thumb_open_ratio", 1.1)

    def hand_pose(self, landmarks, handedness="Unknown"):
        return HandPose(
            fingers=finger_states(landmarks, self.finger_ratio, self.thumb_ratio),
            pinch_distance=landmark_dist(landmarks, THUMB_TIP, INDEX_TIP),
            tip_spread=average_tip_spread(landmarks),
            thumb_tip_y=point_xy(landmarks[THUMB_TIP])[1],
            thumb_ip_y=point_xy(landmarks[THUMB_IP])[1],
            handedness=handedness or "Unknown",
        )

    def classify(self, landmarks, handedness="Unknown"):
        """
        landmarks: 21 normalized points of one hand
        handedness: "Left", "Right" or "Unknown"
        returns: ClassificationResult(label, confidence 0..100)
        """
        pose = self.hand_pose(landmarks, handedness)
        for rule in self.rules:
            if rule.predicate(pose, self):
                return ClassificationResult(rule.label, rule.confidence)
        return NO_MATCH

    def classify_hand(self, hand):
        if hand.landmarks is None:
            hand.gesture = NONE_LABEL
            hand.confidence = 0
            return hand

        result = self.classify(hand.landmarks, hand.handedness)
        hand.gesture = result.label
        hand.confidence = result.confidence
        return hand
