"""
utils.py

Small helpers shared by the runner and the command line: atomic JSON
output and a minimal logger setup.
"""

from typing import Any
from pathlib import Path
import json
import logging
import os
import tempfile


def write_json_atomic(path: str, data: Any, indent: int = 2) -> None:
    """
    Write JSON to a temp file and atomically move into place.
    """
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp = tempfile.mkstemp(prefix=p.name, dir=str(p.parent))
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            json.dump(data, fh, indent=indent, ensure_ascii=False)
            fh.write("\n")
            fh.flush()
            os.fsync(fh.fileno())
        os.replace(tmp, str(p))
    except BaseException:
        if os.path.exists(tmp):
            os.remove(tmp)
        raise


def setup_basic_logger(name: str = "plonkdsl", level: int = logging.INFO) -> logging.Logger:
    """
    Return a logger configured with a StreamHandler and a compact formatter.

    Calling it again only updates the level.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)
    if logger.handlers:
        return logger
    ch = logging.StreamHandler()
    fmt = logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s", datefmt="%Y-%m-%d %H:%M:%S")
    ch.setFormatter(fmt)
    logger.addHandler(ch)
    return logger
