"""Load dotenv files before settings are read."""

from __future__ import annotations

import os
from pathlib import Path
from typing import List, Optional, Tuple

from dotenv import load_dotenv

ENV_FILE_VARIABLE = "BOOKTRACKER_ENV_FILE"
ENV_NAME_VARIABLE = "BOOKTRACKER_ENV"

_loaded: Optional[Tuple[Path, ...]] = None


def candidate_files(base_dir: Optional[Path] = None) -> List[Path]:
    """Dotenv paths in precedence order, without duplicates.

    Explicit ``BOOKTRACKER_ENV_FILE`` entries (``os.pathsep`` separated) come
    first, then ``.env``, ``.env.<BOOKTRACKER_ENV>`` and ``.env.local`` in
    ``base_dir`` (the current directory by default). Earlier files win
    because nothing already set is overridden.
    """

    base_dir = base_dir or Path.cwd()
    paths = [
        Path(entry).expanduser()
        for entry in os.environ.get(ENV_FILE_VARIABLE, "").split(os.pathsep)
        if entry.strip()
    ]
    names = [".env"]
    env_name = os.environ.get(ENV_NAME_VARIABLE, "").strip()
    if env_name:
        names.append(f".env.{env_name}")
    names.append(".env.local")
    paths.extend(base_dir / name for name in names)
    return list(dict.fromkeys(path.resolve() for path in paths))


def load_environment(*, force: bool = False, base_dir: Optional[Path] = None) -> Tuple[Path, ...]:
    """Apply every existing candidate file once per process; returns the files read."""

    global _loaded
    if _loaded is not None and not force:
        return _loaded

    _loaded = tuple(
        path for path in candidate_files(base_dir) if path.is_file() and load_dotenv(path, override=False)
    )
    return _loaded


__all__ = ["candidate_files", "load_environment"]
