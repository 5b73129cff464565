"""
Application service: in-memory log of each user's recently quoted tickers.
Not persisted; a restart starts every user with an empty history.
"""

import threading
from collections import deque


class RecentSearches:
    def __init__(self, size: int = 10) -> None:
        if size < 1:
            raise ValueError("size must be at least 1")
        self._size = size
        self._by_user: dict[int, deque] = {}
        self._lock = threading.Lock()

    def add(self, user_id: int, symbol: str) -> None:
        with self._lock:
            history = self._by_user.setdefault(user_id, deque(maxlen=self._size))
            if symbol in history:
                history.remove(symbol)
            history.appendleft(symbol)

    def symbols(self, user_id: int) -> list[str]:
        """Newest first."""
        with self._lock:
            return list(self._by_user.get(user_id, ()))

    def clear(self, user_id: int) -> None:
        with self._lock:
            self._by_user.pop(user_id, None)
