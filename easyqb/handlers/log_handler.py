# ============================================================================
# File:       easyqb/handlers/log_handler.py
# Purpose:    Upis log linija u fajl na osnovu nivoa (DEBUG, INFO, ERROR, ...)
# Author:     Aleksandar Popovic
# Created:    2025-08-07
# Updated:    2025-09-02
# ============================================================================

import os
from datetime import datetime
from easyqb.config.env import EnvLoader


class LogHandler:
    log_file_path = EnvLoader.get("LOG_FILE_PATH", "storage/logs/easyqb.log")

    @classmethod
    def set_path(cls, path: str) -> None:
        cls.log_file_path = path

    @staticmethod
    def _ensure_log_dir():
        folder = os.path.dirname(LogHandler.log_file_path)
        if folder:
            os.makedirs(folder, exist_ok=True)

    @staticmethod
    def _write(level, message):
        try:
            LogHandler._ensure_log_dir()
            timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
            with open(LogHandler.log_file_path, "a", encoding="utf-8") as f:
                f.write(f"[{level.upper()}] {timestamp} - {message}\n")
        except OSError as e:
            # log ne sme da obori upit
            print(f"❌ Neuspelo logovanje: {e}")

    @staticmethod
    def debug(message):
        if EnvLoader.get_bool("LOG_DEBUG", False):
            LogHandler._write("DEBUG", message)

    @staticmethod
    def info(message):
        LogHandler._write("INFO", message)

    @staticmethod
    def warning(message):
        LogHandler._write("WARNING", message)

    @staticmethod
    def success(message):
        LogHandler._write("SUCCESS", message)

    @staticmethod
    def error(message):
        LogHandler._write("ERROR", message)

    @staticmethod
    def critical(message):
        LogHandler._write("CRITICAL", message)
