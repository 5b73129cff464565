"""
Domain entity for one row of the local symbol dataset.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class SymbolRecord:
    symbol: str
    company_name: str
