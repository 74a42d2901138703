import logging

import cv2
import mediapipe as mp

from signai.FeatureExtractor import wrist_position
from signai.HandData import HandData

LOGGER = logging.getLogger("signai.tracker")

mp_drawing = mp.solutions.drawing_utils
mp_styles = mp.solutions.drawing_styles


class HandTracker:
    def __init__(self, cfg):
        self.cfg = cfg
        tcfg = cfg.get("tracker", {})

        self.mp_hands = mp.solutions.hands.Hands(
            static_image_mode=False,
            model_complexity=tcfg.get("model_complexity", 1),
            min_detection_confidence=tcfg.get("min_detection_confidence", 0.6),
            min_tracking_confidence=tcfg.get("min_tracking_confidence", 0.6),
            max_num_hands=tcfg.get("max_num_hands", 1),
        )
        LOGGER.info(
            "MediaPipe Hands ready (max %d hands, detection >= %.2f)",
            tcfg.get("max_num_hands", 1),
            tcfg.get("min_detection_confidence", 0.6),
        )

    def process_frame(self, frame_rgb, timestamp):
        """
        Process an RGB frame (BGR->RGB and mirroring already done by caller).
        Returns list of HandData instances with landmarks + handedness set.
        timestamp: absolute time (seconds) for this frame.
        """
        result = self.mp_hands.process(frame_rgb)
        hands = []

        if not result.multi_hand_landmarks:
            return hands

        for lm, handed in zip(result.multi_hand_landmarks, result.multi_handedness):
            h = HandData(lm.landmark, handed.classification[0].label, timestamp)
            h.raw_landmarks = lm
            h.wrist = wrist_position(h.landmarks)
            hands.append(h)

        return hands

    def close(self):
        self.mp_hands.close()
        LOGGER.debug("MediaPipe Hands closed")


# ---------- debug drawing ----------
def confidence_color(confidence):
    """BGR: green >= 80, amber >= 50, red below."""
    if confidence >= 80:
        return (136, 255, 0)
    if confidence >= 50:
        return (0, 170, 255)
    return (68, 68, 255)


def draw_hand_debug(frame, hand_data):
    if hand_data.raw_landmarks is None:
        return
    mp_drawing.draw_landmarks(
        frame,
        hand_data.raw_landmarks,
        mp.solutions.hands.HAND_CONNECTIONS,
        mp_styles.get_default_hand_landmarks_style(),
        mp_styles.get_default_hand_connections_style(),
    )


def draw_status(frame, result, pipeline, status, fps=None):
    """Text overlay: gesture, confidence, sentence, cooldown mode."""
    shown = result.label if result.label != "none" else "-"
    hand = f"Hand: {result.handedness} | Detected" if result.handedness else "No hand detected"
    lines = [
        (hand, (255, 255, 255)),
        (f"Gesture: {shown}  {round(result.confidence)}%", confidence_color(result.confidence)),
        (f"Sentence: {pipeline.sentence or 'Waiting for gesture...'}", (255, 255, 0)),
        (f"{pipeline.session.speed_mode} ({pipeline.session.cooldown_ms} ms)", (200, 200, 200)),
    ]
    if status:
        lines.append((status, (0, 200, 255)))
    if fps is not None:
        lines.append((f"FPS: {fps:.1f}", (255, 255, 0)))

    for i, (text, color) in enumerate(lines):
        cv2.putText(
            frame,
            text,
            (10, 30 + i * 25),
            cv2.FONT_HERSHEY_SIMPLEX,
            0.6,
            color,
            2,
            cv2.LINE_AA,
        )
