from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

DEFAULT_LOCALE = "en-US"
DEFAULT_APP_ID = "omdb"


def load_env(*, override: bool = False) -> Path | None:
    repo_root = Path(__file__).resolve().parents[2]
    candidates = [
        repo_root / ".env",
        Path.cwd() / ".env",
    ]
    for path in candidates:
        if path.is_file():
            load_dotenv(dotenv_path=path, override=override)
            return path
    return None


def get_default_locale() -> str:
    return (os.getenv("CMS_DEFAULT_LOCALE") or "").strip() or DEFAULT_LOCALE


def get_app_id() -> str:
    return (os.getenv("OMDB_APP_ID") or "").strip() or DEFAULT_APP_ID
