# ========================================================================
# File:       easyqb/handlers/error_handler.py
# Purpose:    Formatira greške (uklj. lanac uzroka) za ErrorManager
# Author:     Aleksandar Popovic
# Created:    2025-08-07
# Updated:    2025-09-02
# ========================================================================

import traceback

class ErrorHandler:
    @staticmethod
    def format_error(error: Exception) -> str:
        text = f"{type(error).__name__}: {error}"
        cause = error.__cause__
        if cause is not None:
            text += f" (uzrok: {type(cause).__name__}: {cause})"
        return text

    @staticmethod
    def get_traceback(error: Exception) -> str:
        return "".join(traceback.format_exception(type(error), error, error.__traceback__))
