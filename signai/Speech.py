import logging
import threading
from queue import Queue

import pyttsx3

from signai.GestureState import PLACEHOLDER_SENTENCE
from signai.exceptions import EmptySentenceError, SignAIError

LOGGER = logging.getLogger("signai.speech")

_STOP = object()


class Speaker:
    """
    Text-to-speech on a background thread so the frame loop never waits
    for the engine.
    """

    def __init__(self, cfg=None, engine_factory=pyttsx3.init):
        s = (cfg or {}).get("speech", {})
        self.rate = s.get("rate", 160)
        self._engine_factory = engine_factory
        self._queue = Queue()
        self._thread = None
        self.is_speaking = False
        self.available = True

    def start(self):
        if self._thread is not None:
            return
        self._thread = threading.Thread(target=self._worker, daemon=True)
        self._thread.start()

    def _worker(self):
        try:
            engine = self._engine_factory()
            engine.setProperty("rate", self.rate)
        except Exception as e:
            LOGGER.error("TTS unavailable: %s", e)
            self.available = False
            # nothing will ever read what was queued
            while not self._queue.empty():
                self._queue.get_nowait()
            return

        while True:
            text = self._queue.get()
            if text is _STOP:
                break
            try:
                self.is_speaking = True
                engine.say(text)
                engine.runAndWait()
            except Exception as e:
                LOGGER.error("TTS error: %s", e)
            finally:
                self.is_speaking = False

    def speak(self, sentence):
        """Queue a sentence for speech synthesis without blocking."""
        if not sentence or sentence == PLACEHOLDER_SENTENCE:
            raise EmptySentenceError("No sentence to speak!")
        if not self.available:
            raise SignAIError("Speech is unavailable.")
        self._queue.put(sentence)
        self.start()

    def stop(self, timeout=1.0):
        if self._thread is None:
            return
        self._queue.put(_STOP)
        self._thread.join(timeout=timeout)
        self._thread = None
