"""
Infrastructure adapter: Java-properties style text file → IUsageStore.

Format: one `<user_id>=<count>` line per user, decimal strings on both sides.
Lines starting with '#' or '!' are comments. The file is rewritten in full on
every save via a temporary sibling and os.replace, so a crash mid-write
leaves the previous table intact.
"""

import os
import tempfile
from datetime import datetime, timezone
from pathlib import Path
from typing import Union

from stockbot.domain.ports.usage_store_port import IUsageStore
from stockbot.infrastructure.observability.logging import get_logger

logger = get_logger(__name__)


class PropertiesFileUsageStore(IUsageStore):
    def __init__(self, path: Union[str, Path]) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> dict[int, int]:
        """Read the table, creating an empty file when none exists yet.

        Raises:
            ValueError: if a non-comment line is not `<int>=<int>`.
        """
        if not self._path.exists():
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.touch()
            return {}

        counts: dict[int, int] = {}
        with self._path.open(encoding="utf-8") as fh:
            for line_no, raw in enumerate(fh, start=1):
                line = raw.strip()
                if not line or line[0] in "#!":
                    continue
                key, sep, value = line.partition("=")
                if not sep:
                    key, sep, value = line.partition(":")
                try:
                    counts[int(key.strip())] = int(value.strip())
                except ValueError as exc:
                    raise ValueError(f"{self._path}:{line_no}: invalid usage entry {line!r}") from exc
        return counts

    def save(self, counts: dict[int, int]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        lines = [f"#{datetime.now(timezone.utc).isoformat()}\n"]
        lines += [f"{user_id}={count}\n" for user_id, count in sorted(counts.items())]

        fd, tmp_name = tempfile.mkstemp(dir=self._path.parent, prefix=f".{self._path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.writelines(lines)
            os.replace(tmp_name, self._path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        logger.debug("usage_store_flushed", path=str(self._path), users=len(counts))
