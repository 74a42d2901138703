import logging
from collections import namedtuple

from signai.ConversationLog import ConversationLog
from signai.GestureClassifier import NONE_LABEL, GestureClassifier
from signai.GestureState import StabilizerSession
from signai.SentenceBuilder import SentenceBuilder
from signai.exceptions import SignAIError

LOGGER = logging.getLogger("signai.pipeline")

FrameResult = namedtuple("FrameResult", ["label", "confidence", "handedness", "event"])


# ==========================================
# 4. PROCESSING CORE
# ==========================================
class SignPipeline:
    """
    Classifier -> stabilizer -> sentence, plus the sinks a commit feeds.
    One instance per camera session; call process() from a single thread.
    """

    def __init__(self, cfg=None, classifier=None, session=None, log=None,
                 publisher=None, speaker=None, translator=None):
        cfg = cfg or {}
        self.classifier = classifier or GestureClassifier(cfg)
        if session is None:
            templates = cfg.get("templates")
            builder = SentenceBuilder.from_pairs(templates) if templates else None
            session = StabilizerSession(cfg, sentence_builder=builder)
        self.session = session
        self.log = log if log is not None else ConversationLog()
        self.publisher = publisher
        self.speaker = speaker
        self.translator = translator
        self.presets = list(cfg.get("presets", []))
        self._commit_listeners = []

    def add_commit_listener(self, callback):
        """callback(event) runs after every committed gesture."""
        self._commit_listeners.append(callback)

    def apply_config(self, cfg):
        self.classifier.update_config(cfg)
        self.session.update_config(cfg)
        if "presets" in cfg:
            self.presets = list(cfg["presets"])

    def process(self, hands, now=None):
        """
        hands: list of HandData for this frame (only the first is used)
        returns: FrameResult
        """
        if not hands:
            result = FrameResult(NONE_LABEL, 0, None, None)
        else:
            hand = self.classifier.classify_hand(hands[0])
            update = self.session.update(hand.gesture, hand.confidence, now)
            result = FrameResult(update.displayed, update.confidence, hand.handedness, update.event)
            if update.event is not None:
                self._on_commit(update.event)

        if self.publisher is not None:
            self.publisher.publish_frame(result)
        return result

    def _on_commit(self, event):
        LOGGER.debug("Committed %s (%s%%)", event.label, event.confidence)
        self.log.add(event.sentence, "gesture")
        if self.publisher is not None:
            self.publisher.publish_event(event)
        for callback in self._commit_listeners:
            callback(event)

    # ---------- operator actions ----------
    @property
    def sentence(self):
        return self.session.sentence

    def set_cooldown(self, cooldown_ms):
        self.session.set_cooldown(cooldown_ms)
        LOGGER.info("Cooldown %d ms (%s)", self.session.cooldown_ms, self.session.speed_mode)
        return self.session.cooldown_ms

    def adjust_cooldown(self, delta_ms):
        return self.set_cooldown(max(0, self.session.cooldown_ms + delta_ms))

    def clear_sentence(self):
        self.session.clear_sentence()

    def use_preset(self, index):
        phrase = self.session.use_preset(self.presets[index])
        self.log.add(phrase, "preset")
        return phrase

    def speak(self):
        if self.speaker is None:
            raise SignAIError("Speech is disabled.")
        self.speaker.speak(self.sentence)

    def translate(self, target=None):
        if self.translator is None:
            raise SignAIError("Translation is disabled.")
        return self.record_translation(self.translator.translate(self.sentence, target))

    def record_translation(self, result):
        self.log.add(f"[{result.target.upper()}] {result.text}", "translation")
        return result

    def export_history(self, directory="."):
        return self.log.export(directory)

    def clear_history(self):
        self.log.clear()
