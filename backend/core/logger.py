# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""
Centralised logging configuration.

Levels, handlers and formats live in etc/logging.conf.  The file handler
target is a placeholder (%(log_file)s) that is resolved here, so the same
config works from any working directory.  Set STOREFRONT_LOG_DIR to move the
log directory (containers mount a volume there).

Import the ready-made logger anywhere:
    from core.logger import logger
"""

import configparser
import logging
import logging.config
import os
from pathlib import Path

# project root: backend/core/logger.py  →  ../../  →  storefront/
_PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
_LOGGING_CONF = _PROJECT_ROOT / "etc" / "logging.conf"


def _log_file() -> Path:
    log_dir = Path(os.environ.get("STOREFRONT_LOG_DIR", _PROJECT_ROOT / "log"))
    log_dir.mkdir(parents=True, exist_ok=True)
    return log_dir / "app.log"


def _configure() -> None:
    raw = _LOGGING_CONF.read_text(encoding="utf-8")
    raw = raw.replace("%(log_file)s", str(_log_file()))

    # RawConfigParser: the format strings contain %(asctime)s etc. which the
    # interpolating parser would choke on.
    parser = configparser.RawConfigParser()
    parser.read_string(raw)
    logging.config.fileConfig(parser, disable_existing_loggers=False)


_configure()

logger = logging.getLogger("storefront")
