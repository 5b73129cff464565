"""
Infrastructure adapter: static CSV dataset → ISymbolIndex.

The file is read once, at construction; a missing file raises
FileNotFoundError so the process fails before accepting requests.
"""

import csv
from pathlib import Path
from typing import Optional, Union

from stockbot.domain.entities.symbol_record import SymbolRecord
from stockbot.domain.ports.symbol_index_port import ISymbolIndex
from stockbot.infrastructure.observability.logging import get_logger

logger = get_logger(__name__)


class CsvSymbolIndex(ISymbolIndex):
    """Linear, first-match-wins scan over (symbol, company name) rows in file order."""

    def __init__(self, path: Union[str, Path]) -> None:
        self._path = Path(path)
        if not self._path.is_file():
            raise FileNotFoundError(f"Symbol dataset not found: {self._path}")
        self._records = tuple(self._read(self._path))
        logger.info("symbol_index_loaded", path=str(self._path), records=len(self._records))

    def lookup(self, company_fragment: str) -> Optional[str]:
        needle = company_fragment.strip().casefold() if company_fragment else ""
        if not needle:
            return None
        for record in self._records:
            if needle in record.company_name.casefold():
                return record.symbol
        return None

    @staticmethod
    def _read(path: Path) -> list[SymbolRecord]:
        records: list[SymbolRecord] = []
        with path.open(newline="", encoding="utf-8-sig") as fh:
            for line_no, row in enumerate(csv.reader(fh)):
                if len(row) < 2:
                    continue
                symbol, company_name = row[0].strip().upper(), row[1].strip()
                if line_no == 0 and symbol == "SYMBOL":
                    continue
                if not symbol or not company_name:
                    continue
                records.append(SymbolRecord(symbol=symbol, company_name=company_name))
        return records
