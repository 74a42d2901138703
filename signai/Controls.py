"""
Keyboard actions for the preview window.

Kept free of OpenCV so the bindings can be driven without a camera:
the window loop only passes in the key code from cv2.waitKey.
"""

import logging
import threading
from queue import Empty

from signai.exceptions import SignAIError

LOGGER = logging.getLogger("signai.controls")

COOLDOWN_STEP_MS = 100
ESC_KEY = 27


def spawn_daemon(target, args):
    threading.Thread(target=target, args=args, daemon=True).start()


def translation_worker(translator, sentence, target, results):
    """Runs off the window thread; the outcome (result or error) goes to results."""
    try:
        results.put(translator.translate(sentence, target))
    except SignAIError as e:
        results.put(e)


def handle_key(key, pipeline, cfg, translations, spawn=spawn_daemon):
    """Apply one keypress. Returns a status line for the overlay, or None."""
    if key == ord("s"):
        pipeline.speak()
        return "Speaking..."
    if key == ord("t"):
        if pipeline.translator is None:
            raise SignAIError("Translation is disabled.")
        target = cfg.get("translation", {}).get("target", "es")
        spawn(translation_worker, (pipeline.translator, pipeline.sentence, target, translations))
        return "Translating..."
    if key == ord("c"):
        pipeline.clear_sentence()
        return "Sentence cleared"
    if key == ord("h"):
        pipeline.clear_history()
        return "History cleared"
    if key == ord("e"):
        path = pipeline.export_history(cfg.get("export_dir", "."))
        return f"Exported {path.name}"
    if key in (ord("+"), ord("=")):
        pipeline.adjust_cooldown(COOLDOWN_STEP_MS)
        return pipeline.session.speed_mode
    if key in (ord("-"), ord("_")):
        pipeline.adjust_cooldown(-COOLDOWN_STEP_MS)
        return pipeline.session.speed_mode
    if ord("1") <= key <= ord("9"):
        index = key - ord("1")
        if index < len(pipeline.presets):
            return f"Preset: {pipeline.use_preset(index)}"
    return None


def drain_translations(translations, pipeline):
    """
    Log finished translations on the caller's thread.
    Returns the status line of the last outcome, or None if nothing finished.
    """
    status = None
    while True:
        try:
            outcome = translations.get_nowait()
        except Empty:
            return status
        if isinstance(outcome, SignAIError):
            LOGGER.warning("Translation failed: %s", outcome)
            status = str(outcome)
        else:
            pipeline.record_translation(outcome)
            status = f"[{outcome.target.upper()}] {outcome.text}"
