"""Environment helpers (env loading and settings lookup)"""
import os
import logging
from pathlib import Path
from typing import Iterable, List, Optional, Union

logger = logging.getLogger(__name__)


def load_env_file(filepath: Union[str, Path] = ".env", allowed: Optional[Iterable[str]] = None) -> List[str]:
    """Load KEY=VALUE pairs into os.environ without overriding existing variables.

    When ``allowed`` is given, any other name in the file is ignored.
    Returns the names that were set.
    """
    allowed = set(allowed) if allowed is not None else None
    path = Path(filepath)
    if not path.is_file():
        logger.debug(".env file not found: %s", path)
        return []
    try:
        lines = path.read_text(encoding="utf-8").splitlines()
    except (OSError, UnicodeDecodeError) as e:
        logger.debug("Ignoring .env load error: %s", e)
        return []

    loaded = []
    for line in lines:
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        if line.startswith("export "):
            line = line[len("export "):]
        key, sep, val = line.partition("=")
        if not sep:
            continue
        key = key.strip()
        val = val.strip()
        if len(val) >= 2 and val[0] == val[-1] and val[0] in ("'", '"'):
            val = val[1:-1]
        if allowed is not None and key not in allowed:
            logger.warning("Ignoring %s from %s: only %s may be set there", key, path, ", ".join(sorted(allowed)))
            continue
        if key and key not in os.environ:
            os.environ[key] = val
            loaded.append(key)
    logger.debug("Loaded %d variable(s) from %s", len(loaded), path)
    return loaded


def get_setting(*names: str, default: Optional[str] = None) -> Optional[str]:
    """Return the first non-empty environment variable among ``names``."""
    for name in names:
        value = os.environ.get(name, "").strip()
        if value:
            return value
    return default
