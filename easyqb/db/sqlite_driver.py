# =============================================================================
# File:        easyqb/db/sqlite_driver.py
# Purpose:     SQLite driver za QueryBuilder:
#              - PRAGMA tuning (journal, synchronous, busy_timeout, encoding)
#              - prepare/execute sa imenovanim parametrima (:name)
#              - baferovan rezultat (row_count radi i za SELECT)
# Author:      Aleksandar Popović
# Updated:     2025-09-02
# =============================================================================
from __future__ import annotations

import os
import sqlite3
import threading
from typing import Any, Dict, List, Optional

from easyqb.config.env import EnvLoader
from easyqb.db.base_driver import BaseDBDriver, PreparedStatement, shape_row
from easyqb.db.helpers import _log
from easyqb.db.query import FetchShape

_CHARSETS = {
    "utf8": "UTF-8",
    "utf8mb4": "UTF-8",
    "utf-8": "UTF-8",
    "utf16": "UTF-16",
    "utf-16": "UTF-16",
    "utf16le": "UTF-16le",
    "utf16be": "UTF-16be",
}

_JOURNAL_MODES = ("wal", "delete", "truncate", "persist", "off", "memory")
_SYNC_MODES = ("OFF", "NORMAL", "FULL", "EXTRA")


class SQLiteDriver(BaseDBDriver):
    """
    Parametri (**params):
      - path      putanja do .db fajla ili ":memory:"
      - charset   utf8/utf8mb4/utf16... -> PRAGMA encoding (važi samo za novu bazu)
      - options   dict: timeout, journal_mode, synchronous, busy_timeout, foreign_keys
    Ostale vrednosti (host, user, password) SQLite ne koristi.
    """
    name = "sqlite"
    _LOCK = threading.RLock()

    def __init__(self, **params):
        db_path = params.get("path") or os.path.join("storage", "db", "app.db")
        options: Dict[str, Any] = dict(params.get("options") or {})

        if db_path == ":memory:":
            self.db_file = db_path
        else:
            self.db_file = os.path.abspath(db_path)
            if os.path.isdir(self.db_file):
                raise RuntimeError(
                    f"SQLite path '{self.db_file}' je direktorijum, očekivan je put do .db fajla."
                )
            dirpath = os.path.dirname(self.db_file) or "."
            os.makedirs(dirpath, exist_ok=True)

        encoding = None
        charset = params.get("charset")
        if charset:
            encoding = _CHARSETS.get(str(charset).strip().lower())
            if encoding is None:
                raise ValueError(f"Nepodržan charset za SQLite: {charset}")

        timeout = float(options.get("timeout", 5.0))
        # isolation_level=None -> autocommit, svaki upis je odmah trajan
        self.conn = sqlite3.connect(self.db_file, isolation_level=None, timeout=timeout, check_same_thread=False)
        self.conn.row_factory = sqlite3.Row

        try:
            self._apply_pragmas(options, encoding)
        except Exception:
            self.conn.close()
            raise

    # --- PRAGMA podešavanja (options > .env > default) ---
    def _apply_pragmas(self, options: Dict[str, Any], encoding: Optional[str]) -> None:
        cur = self.conn.cursor()
        try:
            if encoding:
                cur.execute(f'PRAGMA encoding = "{encoding}";')

            fk = options.get("foreign_keys", True)
            cur.execute(f"PRAGMA foreign_keys = {'ON' if fk else 'OFF'};")

            jm = options.get("journal_mode") or EnvLoader.get("SQLITE_JOURNAL_MODE", None)
            if jm:
                jm = str(jm).strip().lower()
                if jm not in _JOURNAL_MODES:
                    raise ValueError(f"Nepoznat journal_mode: {jm}")
                cur.execute(f"PRAGMA journal_mode = {jm};")

            sync = str(options.get("synchronous") or EnvLoader.get("SQLITE_SYNCHRONOUS", "NORMAL") or "NORMAL").upper()
            if sync not in _SYNC_MODES:
                sync = "NORMAL"
            cur.execute(f"PRAGMA synchronous = {sync};")

            bt = options.get("busy_timeout")
            if bt is None:
                bt = EnvLoader.get_int("SQLITE_BUSY_TIMEOUT_MS", 4000)
            cur.execute(f"PRAGMA busy_timeout = {int(bt)};")
        finally:
            cur.close()

    # --- lifecycle ---
    def close(self) -> None:
        conn = getattr(self, "conn", None)
        if conn is not None:
            conn.close()
            self.conn = None
            _log("info", f"closed {self.db_file}", component="SQLiteDriver")

    # --- statement ciklus ---
    def prepare(self, sql: str) -> PreparedStatement:
        if self.conn is None:
            raise sqlite3.ProgrammingError("Cannot operate on a closed database.")
        if not sqlite3.complete_statement(sql.rstrip().rstrip(";") + ";"):
            raise sqlite3.ProgrammingError(f"Incomplete SQL statement: {sql!r}")
        return PreparedStatement(sql=sql, handle=self.conn.cursor())

    def execute(self, statement: PreparedStatement, parameters: Optional[Dict[str, Any]] = None) -> int:
        cur = statement.handle
        with self._LOCK:
            try:
                cur.execute(statement.sql, dict(parameters or {}))
                if cur.description is not None:
                    statement.columns = [d[0] for d in cur.description]
                    statement.rows = cur.fetchall()
                    statement.rowcount = len(statement.rows)
                else:
                    statement.columns = []
                    statement.rows = []
                    statement.rowcount = max(cur.rowcount, 0)
            finally:
                cur.close()
        return statement.rowcount

    def fetch_one(self, statement: PreparedStatement, shape: FetchShape = FetchShape.ASSOC):
        if not statement.rows:
            return None
        return shape_row(statement.rows.pop(0), statement.columns, shape)

    def fetch_all(self, statement: PreparedStatement, shape: FetchShape = FetchShape.ASSOC) -> List[Any]:
        rows, statement.rows = statement.rows, []
        return [shape_row(r, statement.columns, shape) for r in rows]

    def row_count(self, statement: PreparedStatement) -> int:
        return statement.rowcount
