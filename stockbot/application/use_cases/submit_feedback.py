"""
Use-case: record a free-text feedback submission from a user.
"""

from datetime import datetime, timezone

from stockbot.domain.entities.feedback import FeedbackEntry
from stockbot.domain.ports.feedback_sink_port import IFeedbackSink


class SubmitFeedbackUseCase:
    def __init__(self, sink: IFeedbackSink) -> None:
        self._sink = sink

    def execute(self, user_id: int, text: str) -> FeedbackEntry:
        """Append *text* to the feedback sink.

        Raises:
            ValueError: if *text* is blank.
        """
        if not text or not text.strip():
            raise ValueError("feedback text must be a non-empty string")
        entry = FeedbackEntry(
            user_id=user_id,
            text=text.strip(),
            timestamp=datetime.now(timezone.utc),
        )
        self._sink.append(entry)
        return entry
