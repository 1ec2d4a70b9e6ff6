# =============================================================================
# File:        easyqb/db/query.py
# Purpose:     Exceptions + enumeracije (operacija, fetch shape) + WhereClause
# Author:      Aleksandar Popović
# Created:     2025-08-12
# Updated:     2025-09-02
# =============================================================================

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any, FrozenSet, Optional, Union


# ---------- Exceptions ----------
class DBError(Exception):
    """Bazna greška DB sloja."""
    pass


class DBConnectionError(DBError):
    """Konekcija ka bazi nije uspostavljena (ili driver nije poznat)."""
    pass


class QueryExecutionError(DBError):
    """Prepare/execute/fetch nije uspeo na strani drajvera."""
    pass


class UnsupportedOperatorError(DBError, ValueError):
    """Operator u where() nije među podržanima."""
    pass


class QueryStateError(DBError):
    """Metoda pozvana u pogrešnom trenutku lanca (npr. set() pre insert/update)."""
    pass


# ---------- Operatori ----------
SUPPORTED_OPERATORS: FrozenSet[str] = frozenset({"=", "<", ">", "<=", ">="})


# ---------- Enumeracije ----------
class Operation(Enum):
    NONE = None
    SELECT = "select"
    INSERT = "insert"
    UPDATE = "update"
    DELETE = "delete"


class FetchShape(Enum):
    """Oblik vraćenog reda."""
    ASSOC = "assoc"  # dict: kolona -> vrednost (default)
    OBJ = "obj"      # objekat sa atributima
    BOTH = "both"    # i po indeksu i po imenu kolone
    NUM = "num"      # tuple po poziciji

    @classmethod
    def resolve(cls, shape: Union["FetchShape", str, None]) -> "FetchShape":
        if shape is None:
            return cls.ASSOC
        if isinstance(shape, cls):
            return shape
        try:
            return cls(str(shape).strip().lower())
        except ValueError:
            raise ValueError(f"Nepoznat fetch shape: {shape!r}") from None


# ---------- WhereClause ----------
@dataclass(frozen=True)
class WhereClause:
    column: str
    operator: str
    value: Any
    placeholder: Optional[str] = None  # ime parametra; podrazumevano = column

    @property
    def param(self) -> str:
        return self.placeholder or self.column

    def to_sql(self) -> str:
        # bez razmaka pred ':'
        return f"WHERE {self.column} {self.operator}:{self.param}"
