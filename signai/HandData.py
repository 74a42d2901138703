from signai.GestureClassifier import NONE_LABEL


class HandData:
    """
    Simple container for per-hand data that flows between modules.
    """

    def __init__(self, landmarks=None, handedness="Unknown", timestamp=0.0):
        # raw mediapipe landmark object (for drawing)
        self.raw_landmarks = None

        # 21 normalized landmarks (mediapipe landmarks, dicts or (x, y) tuples)
        self.landmarks = landmarks

        # "Left" / "Right" / "Unknown"
        self.handedness = handedness or "Unknown"

        # boolean flag
        self.visible = landmarks is not None

        # absolute time (seconds)
        self.timestamp = timestamp

        # wrist position normalized 0..1
        self.wrist = {"x": 0.0, "y": 0.0}

        # classification result
        self.gesture = NONE_LABEL
        self.confidence = 0

    def to_dict(self):
        """Serialize to JSON-friendly dict."""
        return {
            "handedness": self.handedness,
            "visible": self.visible,
            "gesture": self.gesture,
            "confidence": self.confidence,
            "wrist": self.wrist,
            "timestamp": self.timestamp,
        }
