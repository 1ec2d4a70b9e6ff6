# ========================================================================
# File:       easyqb/helpers/core_helper.py
# Purpose:    Bezbedni pozivi + maskiranje osetljivih vrednosti za log
# Author:     Aleksandar Popovic
# Created:    2025-08-07
# Updated:    2025-09-02
# ========================================================================

from __future__ import annotations
from typing import Any, Callable, Dict, Iterable

SECRET_KEYS = ("password", "db_password", "secret", "token")


def safe_call(func: Callable, *args, **kwargs):
    """Poziva funkciju i prepušta izuzetke višem sloju; zadržavamo postojeći ugovor."""
    return func(*args, **kwargs)


def mask_secret(value: Any) -> str:
    if value is None or value == "":
        return ""
    return "***"


def masked_config(config: Dict[str, Any], secret_keys: Iterable[str] = SECRET_KEYS) -> Dict[str, Any]:
    """Kopija konfiguracije pogodna za log (lozinke zamenjene sa ***)."""
    keys = set(secret_keys)
    return {k: (mask_secret(v) if k in keys else v) for k, v in (config or {}).items()}
