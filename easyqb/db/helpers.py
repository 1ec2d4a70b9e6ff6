# =============================================================================
# File:        easyqb/db/helpers.py
# Purpose:     Zajednički helper-i za DB sloj (log sa prefiksom komponente)
# Author:      Aleksandar Popović
# Updated:     2025-09-02
# =============================================================================
from __future__ import annotations

from typing import Any, Dict

from easyqb.managers.log_manager import LogManager


def _log(level: str, msg: str, component: str = "QueryBuilder") -> None:
    method = getattr(LogManager, level, None)
    if callable(method):
        method(f"[{component}] {msg}")
    else:
        LogManager.create(level, f"[{component}] {msg}")


def describe_params(params: Dict[str, Any]) -> str:
    """Kratak opis bind parametara za debug log (samo imena i tipovi)."""
    if not params:
        return "{}"
    return "{" + ", ".join(f"{k}: {type(v).__name__}" for k, v in params.items()) + "}"
