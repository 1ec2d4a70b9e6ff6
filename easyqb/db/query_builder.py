# =============================================================================
# File:        easyqb/db/query_builder.py
# Purpose:     Fluent QueryBuilder (SELECT/INSERT/UPDATE/DELETE) iznad drajvera
# Author:      Aleksandar Popović
# Created:     2025-08-12
# Updated:     2025-09-02
# =============================================================================

from __future__ import annotations
from typing import Any, Dict, Iterable, List, Optional, Union

from easyqb.config.env import EnvLoader
from easyqb.db.base_driver import BaseDBDriver
from easyqb.db.connection import connect
from easyqb.db.helpers import _log, describe_params
from easyqb.db.query import (
    FetchShape,
    Operation,
    QueryExecutionError,
    QueryStateError,
    SUPPORTED_OPERATORS,
    UnsupportedOperatorError,
    WhereClause,
)
from easyqb.managers.error_manager import ErrorManager

ShapeArg = Union[FetchShape, str, None]


class QueryBuilder:
    """
    Jedna instanca po konekciji, ponovo se koristi za svaki upit.
    Svaki glagol (select/insert/update/delete) počinje od reset()-a.

    Primeri:
        qb.select("id", "name").from_("users").where("id", ">=", 2).get_results()
        qb.insert("users").set({"id": 10, "name": "Ana"})          # izvršava odmah
        qb.update("users").set({"name": "Boris"}).where("id", "=", 10)  # izvršava odmah
        qb.delete("users").where("id", "=", 10)                      # izvršava odmah

    Instanca nije thread-safe: koristi jednu po niti ili serijalizuj pristup spolja.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None, driver: Optional[BaseDBDriver] = None):
        config = dict(config if config is not None else ({} if driver is not None else EnvLoader.db_config()))
        self._prefix: str = config.get("prefix") or ""
        self._driver: BaseDBDriver = driver if driver is not None else connect(config)

        self._operation: Operation = Operation.NONE
        self._sql: str = ""
        self._where: Optional[WhereClause] = None
        self._data: Optional[Dict[str, Any]] = None
        self._from_done = False
        self._error: Optional[str] = None
        self._count: Optional[int] = None

    @classmethod
    def from_env(cls) -> "QueryBuilder":
        return cls(EnvLoader.db_config())

    # ------------------------------------------------------------------ #
    # Stanje
    # ------------------------------------------------------------------ #

    @property
    def prefix(self) -> str:
        return self._prefix

    @property
    def driver(self) -> BaseDBDriver:
        return self._driver

    @property
    def operation(self) -> Operation:
        return self._operation

    @property
    def sql(self) -> str:
        if self._where is None:
            return self._sql
        return self._sql + self._where.to_sql()

    @property
    def where_clause(self) -> Optional[WhereClause]:
        return self._where

    @property
    def parameters(self) -> Dict[str, Any]:
        """set() vrednosti + vrednost iz where() (pod imenom njegovog placeholder-a)."""
        params: Dict[str, Any] = dict(self._data or {})
        if self._where is not None:
            params[self._where.param] = self._where.value
        return params

    @property
    def last_row_count(self) -> Optional[int]:
        return self._count

    @property
    def last_error(self) -> Optional[str]:
        return self._error

    def get_error(self) -> Optional[str]:
        return self._error

    def reset(self) -> "QueryBuilder":
        self._where = None
        self._sql = ""
        self._operation = Operation.NONE
        self._data = None
        self._from_done = False
        self._error = None
        self._count = None
        return self

    def _require(self, *allowed: Operation, action: str) -> None:
        if self._operation not in allowed:
            names = "/".join(op.value for op in allowed)
            current = self._operation.value or "none"
            raise QueryStateError(f"{action} je dozvoljen samo uz {names} (aktivno: {current})")

    # ------------------------------------------------------------------ #
    # Glagoli
    # ------------------------------------------------------------------ #

    def select(self, *columns: Union[str, Iterable[str]]) -> "QueryBuilder":
        """
        select()                    -> SELECT *
        select("title", "author")   -> SELECT title, author
        select(["id", "title"])     -> SELECT id, title
        select(c for c in cols)     -> bilo koji iterable kao jedini argument
        """
        self.reset()
        self._operation = Operation.SELECT

        if len(columns) == 1 and columns[0] is not None and not isinstance(columns[0], str):
            cols: List[str] = list(columns[0])
        else:
            cols = [c for c in columns if c is not None]

        self._sql = "SELECT "
        self._sql += (", ".join(cols) + " ") if cols else "* "
        return self

    def from_(self, table: str) -> "QueryBuilder":
        self._require(Operation.SELECT, action="from_()")
        if self._from_done or self._where is not None:
            raise QueryStateError("from_() se poziva tačno jednom, pre where()")
        self._sql += f"FROM {self._prefix}{table} "
        self._from_done = True
        return self

    def insert(self, table: str) -> "QueryBuilder":
        self.reset()
        self._operation = Operation.INSERT
        self._sql = f"INSERT INTO {self._prefix}{table} "
        return self

    def update(self, table: str) -> "QueryBuilder":
        self.reset()
        self._operation = Operation.UPDATE
        self._sql = f"UPDATE {self._prefix}{table} "
        return self

    def delete(self, table: str) -> "QueryBuilder":
        self.reset()
        self._operation = Operation.DELETE
        self._sql = f"DELETE FROM {self._prefix}{table} "
        return self

    # ------------------------------------------------------------------ #
    # where / set
    # ------------------------------------------------------------------ #

    def where(self, column: str, operator: str, value: Any):
        """
        Jedan uslov: WHERE <column> <operator>:<column>
        Operatori: '=', '<', '>', '<=', '>='

        SELECT  -> vraća builder (nastavak: get_result/get_results/exists)
        UPDATE, DELETE -> odmah izvršava i vraća rezultat izvršavanja

        Ponovljen where() zamenjuje prethodni uslov (i njegov parametar).
        Ako je kolona već u set() podacima, placeholder postaje :where_<column>.
        """
        if operator not in SUPPORTED_OPERATORS:
            _log("warning", f"where(): odbijen operator {operator!r} za kolonu {column}")
            raise UnsupportedOperatorError(f"Operator {operator!r} nije podržan")

        self._require(Operation.SELECT, Operation.UPDATE, Operation.DELETE, action="where()")
        if self._operation is Operation.SELECT and not self._from_done:
            raise QueryStateError("where() uz SELECT traži from_() pre uslova")
        if self._operation is Operation.UPDATE and self._data is None:
            raise QueryStateError("where() uz UPDATE traži set() pre uslova")

        placeholder = f"where_{column}" if self._data and column in self._data else None
        if placeholder is not None and placeholder in self._data:
            raise QueryStateError(
                f"where({column!r}): placeholder :{placeholder} je već zauzet kolonom iz set()"
            )
        self._where = WhereClause(column=column, operator=operator, value=value, placeholder=placeholder)

        if self._operation in (Operation.UPDATE, Operation.DELETE):
            return self.execute()
        return self

    def set(self, data: Dict[str, Any]):
        """
        INSERT -> (k1,k2) VALUES (:k1, :k2) i odmah izvršava
        UPDATE -> SET k1=:k1,k2=:k2 i vraća builder (sledi where())
        Redosled kolona prati redosled ključeva u data.
        """
        self._require(Operation.INSERT, Operation.UPDATE, action="set()")
        if self._data is not None:
            raise QueryStateError("set() je već pozvan za ovaj upit")
        if not data:
            raise QueryStateError("set() traži bar jednu kolonu")

        self._data = dict(data)
        keys = list(self._data.keys())

        if self._operation is Operation.INSERT:
            tags = ":" + ", :".join(keys)
            self._sql += f"({','.join(keys)}) VALUES ({tags}) "
            return self.execute()

        assignments = ",".join(f"{k}=:{k}" for k in keys)
        self._sql += f"SET {assignments} "
        return self

    # ------------------------------------------------------------------ #
    # Izvršavanje
    # ------------------------------------------------------------------ #

    def execute(self, fetch: Optional[str] = None, shape: ShapeArg = None):
        """
        Prepare + bind + execute.
        SELECT: fetch == "one" -> jedan red (ili None), inače lista redova;
                upisuje last_row_count.
        Ostalo: broj pogođenih redova.
        Greška drajvera -> last_error + ErrorManager + QueryExecutionError.
        """
        if self._operation is Operation.NONE:
            raise QueryStateError("execute() bez aktivnog upita (select/insert/update/delete)")
        fetch_shape = FetchShape.resolve(shape)

        sql = self.sql
        params = self.parameters
        _log("debug", f"execute {self._operation.value}: {sql.strip()} params={describe_params(params)}")

        try:
            statement = self._driver.prepare(sql)
            result = self._driver.execute(statement, params)

            if self._operation is Operation.SELECT:
                if fetch == "one":
                    result = self._driver.fetch_one(statement, fetch_shape)
                else:
                    result = self._driver.fetch_all(statement, fetch_shape)
                self._count = self._driver.row_count(statement)
        except Exception as e:
            self._error = str(e)
            ErrorManager.create(e)
            raise QueryExecutionError(self._error) from e

        return result

    def get_result(self, shape: ShapeArg = None):
        self._require(Operation.SELECT, action="get_result()")
        return self.execute("one", shape)

    def get_results(self, shape: ShapeArg = None) -> List[Any]:
        self._require(Operation.SELECT, action="get_results()")
        return self.execute(None, shape)

    def exists(self) -> int:
        """Broj redova koje SELECT vraća (0 = ne postoji)."""
        self._require(Operation.SELECT, action="exists()")
        self.execute()
        return self._count or 0

    # ------------------------------------------------------------------ #
    # Lifecycle
    # ------------------------------------------------------------------ #

    def close(self) -> None:
        self._driver.close()

    def __enter__(self) -> "QueryBuilder":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
