"""
Domain entity for a user feedback submission.
"""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class FeedbackEntry:
    user_id: int
    text: str
    timestamp: datetime
