# src/sfobjects/env_loader.py
from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Optional

_logger = logging.getLogger(__name__)


def load_env_files(
    candidates: Optional[Iterable[Path]] = None,
    *,
    quiet: bool = False,
) -> None:
    """Load SF_* settings from a dotenv file, if one is present.

    - By default looks for .env / .dotenv in the current working directory.
    - First existing file wins; variables already set in the environment
      are left alone.
    """
    from dotenv import load_dotenv

    if candidates is None:
        cwd = Path.cwd()
        candidates = (cwd / ".env", cwd / ".dotenv")

    for path in candidates:
        if path.exists():
            load_dotenv(path)
            if not quiet:
                _logger.debug("Loaded environment variables from %s", path)
            return

    if not quiet:
        _logger.debug("No .env/.dotenv file found in %s", Path.cwd())
