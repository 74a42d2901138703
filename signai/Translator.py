import logging
from collections import namedtuple

import requests

from signai.GestureState import PLACEHOLDER_SENTENCE
from signai.exceptions import (
    EmptySentenceError,
    PoorTranslationError,
    TranslationConnectionError,
    TranslationServiceError,
)

LOGGER = logging.getLogger("signai.translate")

MYMEMORY_URL = "https://api.mymemory.translated.net/get"

# MyMemory falls back to unrelated memory entries for short phrases;
# these show up in the output when that happens.
GARBAGE_KEYWORDS = ("delhi metro", "swagat", "welcome to", "station")

TranslationResult = namedtuple("TranslationResult", ["source", "target", "text"])


class Translator:
    """English -> target language through the MyMemory HTTP API."""

    def __init__(self, cfg=None):
        t = (cfg or {}).get("translation", {})
        self.url = t.get("url", MYMEMORY_URL)
        self.timeout = t.get("timeout_s", 5.0)
        self.source_lang = t.get("source", "en")
        self.default_target = t.get("target", "es")

    def translate(self, text, target=None):
        text = (text or "").strip()
        target = target or self.default_target
        if not text or text == PLACEHOLDER_SENTENCE:
            raise EmptySentenceError("No sentence to translate!")

        try:
            resp = requests.get(
                self.url,
                params={"q": text, "langpair": f"{self.source_lang}|{target}"},
                timeout=self.timeout,
            )
            data = resp.json()
        except (requests.exceptions.RequestException, ValueError) as e:
            LOGGER.error("Translation error: %s", e)
            raise TranslationConnectionError(
                "Translation failed. Check your internet connection."
            ) from e

        translated = None
        status = data.get("responseStatus") if isinstance(data, dict) else None
        if status == 200:
            response_data = data.get("responseData")
            if isinstance(response_data, dict):
                translated = response_data.get("translatedText")
        if not translated or not isinstance(translated, str):
            LOGGER.warning("Translation service answered %s", status)
            raise TranslationServiceError("Translation service error. Please try again.")

        lowered = translated.lower()
        if any(k in lowered for k in GARBAGE_KEYWORDS) or lowered == text.lower():
            raise PoorTranslationError(
                "Translation quality poor. Try Google Translate for better results."
            )

        return TranslationResult(text, target, translated)
