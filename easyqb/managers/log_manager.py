# ============================================================================
# File:       easyqb/managers/log_manager.py
# Purpose:    LogManager — klasni API sloj iznad LogHandler-a
# Author:     Aleksandar Popovic
# Created:    2025-08-07
# Updated:    2025-09-02
# ============================================================================

from easyqb.handlers.log_handler import LogHandler
from easyqb.helpers.core_helper import safe_call

class LogManager:
    _log_entries = []
    _max_entries = 1000

    @classmethod
    def initialize(cls, max_entries: int = 1000):
        cls._log_entries = []
        cls._max_entries = max_entries

    @classmethod
    def create(cls, level: str, message: str):
        """
        Centralni ulaz za log: pamti u memoriji (ograničeno) i delegira LogHandler-u.
        Nepoznat nivo ide direktno kroz _write.
        """
        level_upper = (level or "INFO").upper()

        cls._log_entries.append((level_upper, message))
        if len(cls._log_entries) > cls._max_entries:
            del cls._log_entries[0]

        method = getattr(LogHandler, level_upper.lower(), None)
        if callable(method):
            safe_call(method, message)
            return
        safe_call(LogHandler._write, level_upper, message)

    @classmethod
    def read(cls, last_only: bool = False, level: str = None):
        entries = cls._log_entries
        if level:
            entries = [e for e in entries if e[0] == level.upper()]
        if last_only:
            return entries[-1] if entries else None
        return list(entries)

    @classmethod
    def delete(cls, index: int = None):
        if index is None:
            cls._log_entries.clear()
        elif 0 <= index < len(cls._log_entries):
            cls._log_entries.pop(index)

    # === Shortcut metode ===

    @classmethod
    def debug(cls, message: str):
        cls.create("DEBUG", message)

    @classmethod
    def info(cls, message: str):
        cls.create("INFO", message)

    @classmethod
    def warning(cls, message: str):
        cls.create("WARNING", message)

    @classmethod
    def success(cls, message: str):
        cls.create("SUCCESS", message)

    @classmethod
    def error(cls, message: str):
        cls.create("ERROR", message)

    @classmethod
    def critical(cls, message: str):
        cls.create("CRITICAL", message)
