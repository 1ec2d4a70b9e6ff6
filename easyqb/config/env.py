# ========================================================================
# File:       easyqb/config/env.py
# Purpose:    Učitavanje .env fajla, pristup varijablama i DB konfiguracija
# Author:     Aleksandar Popovic
# Created:    2025-08-07
# Updated:    2025-09-02 (db_config, get_int)
# ========================================================================

import os
from pathlib import Path
from dotenv import load_dotenv


class EnvLoader:
    """
    Loader koji:
    - pronađe .env u root-u projekta (ili pored ovog fajla kao fallback),
    - učita ga samo jednom (idempotentno),
    - ne pregazi već postavljene os.environ vrednosti (testovi, CI).
    """
    _loaded = False
    _loaded_path: Path | None = None

    @staticmethod
    def _find_env_path() -> Path | None:
        here = Path(__file__).resolve()
        candidates = [
            Path.cwd() / ".env",
            here.parents[2] / ".env" if len(here.parents) >= 3 else None,  # <repo>/.env
            here.parent / ".env",
        ]
        for p in candidates:
            if p and p.exists():
                return p
        return None

    @classmethod
    def load(cls, force: bool = False) -> None:
        if cls._loaded and not force:
            return
        env_path = cls._find_env_path()
        if env_path:
            load_dotenv(dotenv_path=env_path, override=False)
        cls._loaded_path = env_path
        cls._loaded = True

    @classmethod
    def get(cls, key: str, default=None):
        if not cls._loaded:
            cls.load()
        return os.getenv(key, default)

    @classmethod
    def get_bool(cls, key: str, default: bool = False) -> bool:
        val = cls.get(key, None)
        if val is None:
            return default
        return str(val).strip().lower() in ("1", "true", "yes", "y", "on")

    @classmethod
    def get_int(cls, key: str, default: int | None = None) -> int | None:
        val = cls.get(key, None)
        if val is None or str(val).strip() == "":
            return default
        try:
            return int(str(val).strip())
        except ValueError:
            return default

    @classmethod
    def db_config(cls) -> dict:
        """
        Konfiguraciona struktura za QueryBuilder/connect():
          host, db_user, db_password, db_name, charset, prefix, options, driver
        """
        return {
            "driver": (cls.get("DB_DRIVER", "sqlite") or "sqlite").strip().lower(),
            "host": cls.get("DB_HOST", "localhost"),
            "db_user": cls.get("DB_USER", ""),
            "db_password": cls.get("DB_PASSWORD", ""),
            "db_name": cls.get("DB_NAME", "storage/db/app.db"),
            "charset": cls.get("DB_CHARSET", "utf8"),
            "prefix": cls.get("DB_PREFIX", "") or "",
            "options": {},
        }

    @classmethod
    def debug_info(cls) -> dict:
        return {
            "loaded": cls._loaded,
            "env_path": str(cls._loaded_path) if cls._loaded_path else None,
        }
