import json
import logging

import zmq

LOGGER = logging.getLogger("signai.net")

GESTURE_TOPIC = b"gesture"
FRAME_TOPIC = b"frame"


# ==========================================
# 3. NETWORK ENGINE
# ==========================================
class EventPublisher:
    """
    ZeroMQ PUB socket for downstream consumers (history, audio cues, UIs).
    Messages are multipart: [topic, JSON document].
    With no bind address every publish is a no-op.
    """

    def __init__(self, address="tcp://*:5555", context=None):
        self.address = address
        self.context = None
        self.sock = None
        self.sent = 0
        if address:
            self._setup(context)

    def _setup(self, context):
        self.context = context or zmq.Context.instance()
        self.sock = self.context.socket(zmq.PUB)
        self.sock.bind(self.address)
        LOGGER.info("Publishing on %s", self.address)

    @property
    def enabled(self):
        return self.sock is not None

    def _send(self, topic, payload):
        if not self.enabled:
            return False
        msg = json.dumps(payload).encode("utf-8")
        try:
            self.sock.send_multipart([topic, msg], flags=zmq.NOBLOCK)
        except zmq.Again:
            LOGGER.debug("Dropped %s message, send queue full", topic.decode())
            return False
        self.sent += 1
        return True

    def publish_event(self, event):
        """event: GestureEvent"""
        return self._send(GESTURE_TOPIC, event._asdict())

    def publish_frame(self, frame_result):
        """frame_result: FrameResult (event not included)"""
        payload = frame_result._asdict()
        payload.pop("event", None)
        return self._send(FRAME_TOPIC, payload)

    def close(self):
        if self.sock is not None:
            self.sock.close(linger=0)
            self.sock = None
