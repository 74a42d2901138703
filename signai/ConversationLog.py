import logging
import time
from collections import namedtuple
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from signai.exceptions import ExportFailedError, NothingToExportError

LOGGER = logging.getLogger("signai.history")

EXPORT_HEADER = "=== SignAI Conversation Export ===\n\n"

ConversationEntry = namedtuple("ConversationEntry", ["text", "timestamp", "kind"])


def local_time_label(now: Optional[datetime] = None) -> str:
    return (now or datetime.now()).strftime("%H:%M:%S")


class ConversationLog:
    """
    Ordered record of everything said in a session: committed sentences,
    preset phrases and translations.
    """

    KINDS = ("gesture", "preset", "translation")

    def __init__(self, time_label=local_time_label):
        self._time_label = time_label
        self.entries: List[ConversationEntry] = []

    def __len__(self):
        return len(self.entries)

    def add(self, text: str, kind: str = "gesture") -> ConversationEntry:
        if kind not in self.KINDS:
            raise ValueError(f"unknown entry kind: {kind!r}")
        entry = ConversationEntry(text, self._time_label(), kind)
        self.entries.append(entry)
        LOGGER.info("[%s] %s", entry.timestamp, text)
        return entry

    def clear(self) -> None:
        self.entries = []

    def export_text(self) -> str:
        if not self.entries:
            raise NothingToExportError("No conversation to export!")
        lines = [f"[{e.timestamp}] {e.text}\n" for e in self.entries]
        return EXPORT_HEADER + "".join(lines)

    def export(self, directory=".") -> Path:
        """Write the log to signai-conversation-<epoch ms>.txt and return the path."""
        text = self.export_text()
        path = Path(directory) / f"signai-conversation-{int(time.time() * 1000)}.txt"
        try:
            path.write_text(text, encoding="utf-8")
        except OSError as e:
            LOGGER.error("Export to %s failed: %s", path, e)
            raise ExportFailedError(f"Could not export conversation to {directory}.") from e
        LOGGER.info("Conversation exported to %s", path)
        return path
