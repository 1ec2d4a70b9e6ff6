# =============================================================================
# File:        easyqb/db/connection.py
# Purpose:     connect(config): pravi drajver iz konfiguracione strukture
# Author:      Aleksandar Popović
# Created:     2025-09-02
# =============================================================================
from __future__ import annotations

import sqlite3
from typing import Any, Dict

from easyqb.db.base_driver import BaseDBDriver
from easyqb.db.helpers import _log
from easyqb.db.query import DBConnectionError
from easyqb.db.sqlite_driver import SQLiteDriver
from easyqb.helpers.core_helper import masked_config
from easyqb.managers.error_manager import ErrorManager

DRIVERS = {
    "sqlite": SQLiteDriver,
}

CONFIG_KEYS = ("host", "db_user", "db_password", "db_name", "charset", "prefix", "options", "driver")


def _driver_params(driver_key: str, config: Dict[str, Any]) -> Dict[str, Any]:
    """Uniformna mapa config -> **params za konkretan drajver."""
    if driver_key == "sqlite":
        return {
            "path": config.get("db_name"),
            "charset": config.get("charset"),
            "options": dict(config.get("options") or {}),
        }
    return dict(config)


def connect(config: Dict[str, Any]) -> BaseDBDriver:
    """
    Otvori konekciju na osnovu konfiguracije:
      {host, db_user, db_password, db_name, charset, prefix, options, driver}
    Svaki neuspeh (nepoznat driver, loša putanja, charset...) -> DBConnectionError.
    """
    config = dict(config or {})
    unknown = set(config) - set(CONFIG_KEYS)
    if unknown:
        _log("warning", f"connect: ignorisani nepoznati ključevi {sorted(unknown)}", component="connect")

    driver_key = (config.get("driver") or "sqlite").strip().lower()
    try:
        driver_cls = DRIVERS.get(driver_key)
        if driver_cls is None:
            raise ValueError(f"Nepoznat driver: {driver_key}")
        driver = driver_cls(**_driver_params(driver_key, config))
    except (sqlite3.Error, OSError, RuntimeError, ValueError, TypeError) as e:
        ErrorManager.create(e)
        raise DBConnectionError(str(e)) from e

    _log("info", f"connect -> driver={driver.name} config={masked_config(config)}", component="connect")
    return driver
