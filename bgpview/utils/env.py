from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


def _candidates() -> list[Path]:
    explicit = os.getenv("BGPVIEW_ENV_FILE")
    if explicit:
        return [Path(explicit).expanduser()]
    return [Path.cwd() / ".env", Path(__file__).resolve().parents[2] / ".env"]


def load_env() -> Optional[Path]:
    """Load the first .env found into os.environ and return its path.

    ``BGPVIEW_ENV_FILE`` names the file explicitly; otherwise the working
    directory is tried before the project root. Variables already set in the
    environment are never overridden.
    """
    for path in _candidates():
        if path.is_file():
            load_dotenv(path, override=False)
            return path
    return None
