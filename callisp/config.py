from __future__ import annotations
import logging
import os
from pathlib import Path
from typing import Iterable, List, Optional


def paths_from_env(var: str, defaults: Iterable[Path]) -> List[Path]:
    raw = os.environ.get(var)
    if not raw:
        return [Path(p) for p in defaults]
    return [Path(p.strip()) for p in raw.split(os.pathsep) if p.strip()]


def get_use_path() -> List[Path]:
    """Directories searched by `use` after the current directory."""
    return paths_from_env('CALLISP_PATH', [])


def get_prelude_file() -> Optional[Path]:
    raw = os.environ.get('CALLISP_PRELUDE')
    return Path(raw) if raw else None


def get_log_level() -> int:
    name = os.environ.get('CALLISP_LOG_LEVEL', 'WARNING').upper()
    level = logging.getLevelName(name)
    # getLevelName returns a "Level X" string for unknown names
    return level if isinstance(level, int) else logging.WARNING


def get_recursion_limit() -> Optional[int]:
    raw = os.environ.get('CALLISP_RECURSION_LIMIT')
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        return None
