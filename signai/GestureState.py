import time
from collections import Counter, deque, namedtuple

from signai.GestureClassifier import NONE_LABEL
from signai.SentenceBuilder import SentenceBuilder

WINDOW_SIZE = 12
MAJORITY_FRACTION = 0.6
DEFAULT_COOLDOWN_MS = 900
PLACEHOLDER_SENTENCE = "Waiting for gesture..."

GestureEvent = namedtuple("GestureEvent", ["label", "confidence", "timestamp", "sentence"])
StabilizerUpdate = namedtuple("StabilizerUpdate", ["displayed", "confidence", "event"])


def monotonic_ms():
    return time.monotonic() * 1000.0


def speed_mode_for(cooldown_ms):
    if cooldown_ms <= 500:
        return "Fast Mode"
    if cooldown_ms <= 900:
        return "Normal Mode"
    return "Learning Mode"


# ==========================================
# 2. PERSISTENT STATE (one per camera session)
# ==========================================
class StabilizerSession:
    """
    Majority-vote smoothing of raw per-frame labels plus the commit gate.

    Owns everything that survives between frames: the label window, the
    displayed label, the last committed label and its time, the cooldown
    and the committed gesture history. Not thread-safe; keep it on the
    thread that processes frames.
    """

    def __init__(self, cfg=None, clock=monotonic_ms, sentence_builder=None):
        self.clock = clock
        self.sentence_builder = sentence_builder or SentenceBuilder()
        self.cfg = {
            "stabilizer": {
                "cooldown_ms": DEFAULT_COOLDOWN_MS,
            },
        }
        self.window_size = WINDOW_SIZE
        self.majority_fraction = MAJORITY_FRACTION
        self.cooldown_ms = DEFAULT_COOLDOWN_MS
        self.reset()
        self.update_config(cfg)

    def update_config(self, cfg):
        if not cfg:
            return
        s = cfg.get("stabilizer", {})
        self.cfg["stabilizer"].update(s)
        if "cooldown_ms" in s:
            self.set_cooldown(s["cooldown_ms"])

    def reset(self):
        self.window = deque(maxlen=self.window_size)
        self.displayed = NONE_LABEL
        self.last_committed = NONE_LABEL
        self.last_commit_time = None
        self.history = []
        self.sentence = ""

    def set_cooldown(self, cooldown_ms):
        cooldown_ms = int(cooldown_ms)
        if cooldown_ms < 0:
            raise ValueError("cooldown_ms must be >= 0")
        self.cooldown_ms = cooldown_ms

    @property
    def speed_mode(self):
        return speed_mode_for(self.cooldown_ms)

    def majority(self):
        """(label, votes) of the most frequent label; ties go to the first seen."""
        if not self.window:
            return NONE_LABEL, 0
        return Counter(self.window).most_common(1)[0]

    def _stabilize(self, raw_label):
        self.window.append(raw_label)
        label, votes = self.majority()
        if votes > self.window_size * self.majority_fraction:
            self.displayed = label
        return self.displayed

    def _cooldown_elapsed(self, now):
        if self.last_commit_time is None:
            return True
        return now - self.last_commit_time >= self.cooldown_ms

    def update(self, raw_label, confidence=0, now=None):
        """
        Feed one frame's raw label.
        returns: StabilizerUpdate(displayed, confidence, event or None)
        """
        now = self.clock() if now is None else now
        displayed = self._stabilize(raw_label)

        event = None
        if (
            displayed != NONE_LABEL
            and displayed != self.last_committed
            and self._cooldown_elapsed(now)
        ):
            event = self._commit(displayed, confidence, now)
        return StabilizerUpdate(displayed, confidence, event)

    def _commit(self, label, confidence, now):
        self.history.append(label)
        self.sentence = self.sentence_builder.assemble(self.history)
        self.last_committed = label
        self.last_commit_time = now
        return GestureEvent(label, confidence, now, self.sentence)

    def clear_sentence(self):
        # the same gesture may commit again once the cooldown is over
        self.sentence = ""
        self.last_committed = NONE_LABEL

    def use_preset(self, phrase):
        self.sentence = phrase
        return phrase
