"""
Infrastructure adapter: append-only text file → IFeedbackSink.
"""

from pathlib import Path
from typing import Union

from stockbot.domain.entities.feedback import FeedbackEntry
from stockbot.domain.ports.feedback_sink_port import IFeedbackSink


class TextFileFeedbackSink(IFeedbackSink):
    def __init__(self, path: Union[str, Path]) -> None:
        self._path = Path(path)

    def append(self, entry: FeedbackEntry) -> None:
        # One submission per line, whatever the user typed.
        text = " ".join(entry.text.split())
        self._path.parent.mkdir(parents=True, exist_ok=True)
        with self._path.open("a", encoding="utf-8") as fh:
            fh.write(f"Feedback from {entry.user_id}: {text}\n")
