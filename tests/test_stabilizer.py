"""Majority-vote smoothing, commit gating and sentence assembly of a session."""

from __future__ import annotations

import pytest

from signai.GestureClassifier import NONE_LABEL
from signai.GestureState import (
    DEFAULT_COOLDOWN_MS,
    WINDOW_SIZE,
    StabilizerSession,
    speed_mode_for,
)


def feed(session: StabilizerSession, label: str, frames: int, now: float, confidence: int = 90):
    """Push the same raw label for several frames; returns the committed events."""
    events = []
    for _ in range(frames):
        update = session.update(label, confidence, now=now)
        if update.event is not None:
            events.append(update.event)
    return events


def test_window_is_bounded() -> None:
    session = StabilizerSession()
    feed(session, "Yes", 40, now=0)

    assert len(session.window) == WINDOW_SIZE


def test_same_label_twelve_times_is_displayed() -> None:
    session = StabilizerSession()
    feed(session, "Stop", 12, now=0)

    assert session.majority() == ("Stop", 12)
    assert session.displayed == "Stop"


def test_eight_of_twelve_is_enough_but_seven_is_not() -> None:
    session = StabilizerSession()
    feed(session, "Good", 7, now=0)
    assert session.displayed == NONE_LABEL

    feed(session, "Good", 1, now=0)
    assert session.displayed == "Good"


@pytest.mark.parametrize(
    "sequence",
    [
        ["A"] * 6 + ["B"] * 6,
        ["A", "B"] * 6,
        ["B"] * 3 + ["A"] * 6 + ["B"] * 3,
    ],
)
def test_even_split_keeps_previous_display(sequence) -> None:
    session = StabilizerSession()
    feed(session, "Stop", 12, now=0)

    for label in sequence:
        update = session.update(label, 90, now=100)

    assert update.displayed == "Stop"


def test_even_split_on_fresh_session_stays_none() -> None:
    session = StabilizerSession()
    for label in ["A"] * 6 + ["B"] * 6:
        update = session.update(label, 90, now=0)

    assert update.displayed == NONE_LABEL
    assert update.event is None


def test_no_reversion_to_none_without_majority() -> None:
    session = StabilizerSession()
    feed(session, "You", 12, now=0)
    feed(session, NONE_LABEL, 6, now=10)

    assert session.displayed == "You"


def test_majority_ties_go_to_first_seen() -> None:
    session = StabilizerSession()
    session.update("B", now=0)
    session.update("A", now=0)

    assert session.majority() == ("B", 1)


def test_none_is_never_committed() -> None:
    session = StabilizerSession()
    events = feed(session, NONE_LABEL, 30, now=0)

    assert events == []
    assert session.history == []


def test_first_commit_is_not_cooldown_gated() -> None:
    session = StabilizerSession()
    events = feed(session, "Yes", 8, now=0, confidence=95)

    assert len(events) == 1
    assert events[0].label == "Yes"
    assert events[0].confidence == 95
    assert events[0].timestamp == 0
    assert events[0].sentence == "Yes"


def test_repeated_label_commits_once() -> None:
    session = StabilizerSession()
    events = feed(session, "Yes", 12, now=0)
    events += feed(session, "Yes", 12, now=5000)

    assert [e.label for e in events] == ["Yes"]


def _yes_commits(gap_ms: float) -> int:
    """Yes, then No, then Yes again, each transition gap_ms apart."""
    session = StabilizerSession()
    events = feed(session, "Yes", 12, now=0)
    events += feed(session, "No", 12, now=gap_ms)
    events += feed(session, "Yes", 12, now=2 * gap_ms)
    return sum(1 for e in events if e.label == "Yes")


def test_transitions_inside_cooldown_commit_once() -> None:
    assert _yes_commits(DEFAULT_COOLDOWN_MS - 400) == 1


@pytest.mark.parametrize("gap", [DEFAULT_COOLDOWN_MS, DEFAULT_COOLDOWN_MS + 500])
def test_transitions_at_or_beyond_cooldown_commit_twice(gap) -> None:
    assert _yes_commits(gap) == 2


def test_cooldown_boundary_is_inclusive() -> None:
    session = StabilizerSession()
    feed(session, "Yes", 12, now=0)

    assert feed(session, "No", 12, now=899) == []
    assert [e.label for e in feed(session, "No", 1, now=900)] == ["No"]


def test_commit_uses_session_clock(clock) -> None:
    session = StabilizerSession(clock=clock)
    clock.advance(1234)
    events = feed(session, "Stop", 8, now=None)

    assert events[0].timestamp == 1234


def test_template_sentence_for_ordered_pair() -> None:
    session = StabilizerSession()
    feed(session, "Hello", 12, now=0)
    events = feed(session, "You", 12, now=1000)

    assert session.history == ["Hello", "You"]
    assert events[-1].sentence == "Hello, how are you?"
    assert session.sentence == "Hello, how are you?"


def test_reversed_pair_falls_back_to_last_label() -> None:
    session = StabilizerSession()
    feed(session, "You", 12, now=0)
    feed(session, "Hello", 12, now=1000)

    assert session.sentence == "Hello"


def test_single_commit_sentence_is_the_label() -> None:
    session = StabilizerSession()
    feed(session, "Stop", 12, now=0)

    assert session.sentence == "Stop"


def test_clear_sentence_allows_same_gesture_again() -> None:
    session = StabilizerSession()
    feed(session, "Yes", 12, now=0)
    session.clear_sentence()

    assert session.sentence == ""
    assert feed(session, "Yes", 1, now=100) == []
    assert [e.label for e in feed(session, "Yes", 1, now=900)] == ["Yes"]
    assert session.history == ["Yes", "Yes"]


def test_preset_replaces_sentence() -> None:
    session = StabilizerSession()
    feed(session, "Stop", 12, now=0)

    assert session.use_preset("I need help.") == "I need help."
    assert session.sentence == "I need help."
    assert session.history == ["Stop"]


def test_reset_starts_a_fresh_session() -> None:
    session = StabilizerSession()
    feed(session, "Stop", 12, now=0)
    session.reset()

    assert len(session.window) == 0
    assert session.displayed == NONE_LABEL
    assert session.history == []
    assert feed(session, "Stop", 8, now=1)[0].label == "Stop"


def test_cooldown_is_configurable() -> None:
    session = StabilizerSession({"stabilizer": {"cooldown_ms": 300}})
    assert session.cooldown_ms == 300

    session.update_config({"stabilizer": {"cooldown_ms": 1200}})
    assert session.cooldown_ms == 1200
    assert session.speed_mode == "Learning Mode"

    with pytest.raises(ValueError):
        session.set_cooldown(-1)


@pytest.mark.parametrize(
    "cooldown, mode",
    [(300, "Fast Mode"), (500, "Fast Mode"), (900, "Normal Mode"), (901, "Learning Mode")],
)
def test_speed_mode_labels(cooldown, mode) -> None:
    assert speed_mode_for(cooldown) == mode
