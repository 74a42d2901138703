from __future__ import annotations

import json

import zmq

from signai.GestureState import GestureEvent
from signai.Network import FRAME_TOPIC, GESTURE_TOPIC, EventPublisher
from signai.SignPipeline import FrameResult


class FakeSocket:
    def __init__(self, full=False) -> None:
        self.sent = []
        self.full = full
        self.closed = False

    def send_multipart(self, parts, flags=0) -> None:
        if self.full:
            raise zmq.Again()
        self.sent.append(parts)

    def close(self, linger=None) -> None:
        self.closed = True


def publisher_with(sock) -> EventPublisher:
    publisher = EventPublisher(None)
    publisher.sock = sock
    return publisher


def test_disabled_publisher_is_a_no_op() -> None:
    publisher = EventPublisher(None)

    assert not publisher.enabled
    assert publisher.publish_event(GestureEvent("Yes", 95, 0.0, "Yes")) is False
    publisher.close()


def test_gesture_event_message() -> None:
    sock = FakeSocket()
    publisher = publisher_with(sock)

    assert publisher.publish_event(GestureEvent("You", 90, 1500.0, "Hello, how are you?"))

    topic, body = sock.sent[0]
    assert topic == GESTURE_TOPIC
    assert json.loads(body) == {
        "label": "You",
        "confidence": 90,
        "timestamp": 1500.0,
        "sentence": "Hello, how are you?",
    }


def test_frame_message_omits_event() -> None:
    sock = FakeSocket()
    publisher = publisher_with(sock)
    event = GestureEvent("Stop", 90, 0.0, "Stop")

    publisher.publish_frame(FrameResult("Stop", 90, "Left", event))

    topic, body = sock.sent[0]
    assert topic == FRAME_TOPIC
    assert json.loads(body) == {"label": "Stop", "confidence": 90, "handedness": "Left"}


def test_full_send_queue_drops_the_message() -> None:
    publisher = publisher_with(FakeSocket(full=True))

    assert publisher.publish_event(GestureEvent("Yes", 95, 0.0, "Yes")) is False
    assert publisher.sent == 0


def test_close_releases_socket() -> None:
    sock = FakeSocket()
    publisher = publisher_with(sock)
    publisher.close()

    assert sock.closed
    assert not publisher.enabled


def test_binds_a_real_pub_socket() -> None:
    context = zmq.Context()
    try:
        publisher = EventPublisher("inproc://signai-test", context=context)
        assert publisher.enabled
        publisher.close()
    finally:
        context.term()
