# =============================================================================
# File:        easyqb/db/base_driver.py
# Purpose:     Jedinstven interfejs za DB drajvere (prepare/execute/fetch)
# Author:      Aleksandar Popović
# Created:     2025-08-07
# Updated:     2025-09-02
# =============================================================================
from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from types import SimpleNamespace
from typing import Any, Dict, List, Optional

from easyqb.db.query import FetchShape


@dataclass
class PreparedStatement:
    """Pripremljen SQL + stanje poslednjeg izvršavanja (baferovani redovi)."""
    sql: str
    handle: Any = None
    columns: List[str] = field(default_factory=list)
    rows: List[Any] = field(default_factory=list)
    rowcount: int = -1


def shape_row(row: Any, columns: List[str], shape: FetchShape):
    """
    Pretvori sirov red u traženi oblik:
      ASSOC -> dict, OBJ -> SimpleNamespace, NUM -> tuple, BOTH -> red kakav jeste
      (drajver je dužan da vrati red koji podržava i indeks i ime kolone).
    """
    if row is None:
        return None
    if shape is FetchShape.BOTH:
        return row
    values = tuple(row)
    if shape is FetchShape.NUM:
        return values
    mapping = dict(zip(columns, values))
    if shape is FetchShape.OBJ:
        return SimpleNamespace(**mapping)
    return mapping


class BaseDBDriver(ABC):
    """Svi drajveri moraju implementirati isti API."""

    name: str = "base"

    # --- Lifecycle / konekcija ---
    def close(self) -> None:
        """Opcionalno: uredno zatvaranje konekcije."""
        return None

    # --- Statement ciklus ---
    @abstractmethod
    def prepare(self, sql: str) -> PreparedStatement:
        """Pripremi SQL; greška u sintaksi može izaći ovde ili tek u execute()."""

    @abstractmethod
    def execute(self, statement: PreparedStatement, parameters: Optional[Dict[str, Any]] = None) -> int:
        """Izvrši pripremljen statement sa imenovanim parametrima; vraća broj pogođenih redova."""

    @abstractmethod
    def fetch_one(self, statement: PreparedStatement, shape: FetchShape = FetchShape.ASSOC):
        """Sledeći red rezultata ili None."""

    @abstractmethod
    def fetch_all(self, statement: PreparedStatement, shape: FetchShape = FetchShape.ASSOC) -> List[Any]:
        """Svi preostali redovi rezultata."""

    @abstractmethod
    def row_count(self, statement: PreparedStatement) -> int:
        """Broj redova koje je statement proizveo ili promenio."""
