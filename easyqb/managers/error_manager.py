# ========================================================================
# File:       easyqb/managers/error_manager.py
# Purpose:    Evidencija i logovanje grešaka DB sloja
# Author:     Aleksandar Popovic
# Created:    2025-08-07
# Updated:    2025-09-09 (ograničena evidencija)
# ========================================================================

from easyqb.config.env import EnvLoader
from easyqb.handlers.error_handler import ErrorHandler
from easyqb.managers.log_manager import LogManager
from easyqb.helpers.core_helper import safe_call

class ErrorManager:
    _errors = []
    _max_entries = 100
    _dev_mode = None

    @classmethod
    def initialize(cls, dev_mode: bool = None, max_entries: int = 100):
        cls._dev_mode = dev_mode
        cls._max_entries = max_entries
        cls._errors = []

    @classmethod
    def dev_mode(cls) -> bool:
        if cls._dev_mode is None:
            return EnvLoader.get_bool("APP_DEBUG", False)
        return cls._dev_mode

    @classmethod
    def create(cls, error: Exception):
        """Zapamti grešku, ispiši je u dev režimu i upiši u log. Ne podiže izuzetak."""
        formatted = ErrorHandler.format_error(error)
        trace = ErrorHandler.get_traceback(error)

        # pamti se samo poslednjih _max_entries (svaka greška drži i svoj traceback)
        cls._errors.append(error)
        if len(cls._errors) > cls._max_entries:
            del cls._errors[0]

        if cls.dev_mode():
            print(f"[ERROR]: {formatted}\n{trace}")

        safe_call(LogManager.create, "error", f"{formatted}\n{trace}".rstrip())

    @classmethod
    def read(cls, last_only: bool = True):
        if last_only:
            return cls._errors[-1] if cls._errors else None
        return list(cls._errors)

    @classmethod
    def delete(cls, index: int = None):
        if index is None:
            cls._errors.clear()
        elif 0 <= index < len(cls._errors):
            cls._errors.pop(index)
