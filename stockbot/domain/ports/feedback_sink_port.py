"""
Port (interface) for the append-only feedback sink.
"""

from abc import ABC, abstractmethod

from stockbot.domain.entities.feedback import FeedbackEntry


class IFeedbackSink(ABC):
    @abstractmethod
    def append(self, entry: FeedbackEntry) -> None: ...
