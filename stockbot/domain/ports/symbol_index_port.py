"""
Port (interface) for the local company-name to symbol table.
Infrastructure adapters (e.g. CsvSymbolIndex) must implement this interface.
"""

from abc import ABC, abstractmethod
from typing import Optional


class ISymbolIndex(ABC):
    @abstractmethod
    def lookup(self, company_fragment: str) -> Optional[str]:
        """Return the symbol of the first record whose company name contains
        *company_fragment* (case-insensitive), or None when nothing matches."""
        ...
