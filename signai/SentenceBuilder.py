"""
Two-gesture sentence templates.

Only the last two committed gestures matter. The pair is matched in order,
so ("Hello", "You") and ("You", "Hello") are different keys.
"""

from typing import Dict, Iterable, Sequence, Tuple

TEMPLATES: Dict[Tuple[str, str], str] = {
    ("Hello", "You"): "Hello, how are you?",
    ("Help", "You"): "Do you need help?",
    ("Yes", "Help"): "Yes, I need help.",
    ("No", "Help"): "I don't need help.",
    ("Thank you", "You"): "Thank you very much!",
    ("Good", "You"): "You are good.",
    ("Stop", "You"): "Please stop!",
}


class SentenceBuilder:
    def __init__(self, templates: Dict[Tuple[str, str], str] = None):
        self.templates = dict(TEMPLATES if templates is None else templates)

    @classmethod
    def from_pairs(cls, entries: Iterable[dict]) -> "SentenceBuilder":
        """Build from config entries shaped like {"pattern": [a, b], "sentence": "..."}."""
        templates = {}
        for entry in entries:
            first, second = entry["pattern"]
            templates[(first, second)] = entry["sentence"]
        return cls(templates)

    def assemble(self, history: Sequence[str]) -> str:
        if not history:
            return ""
        if len(history) >= 2:
            pair = (history[-2], history[-1])
            if pair in self.templates:
                return self.templates[pair]
        return history[-1]
