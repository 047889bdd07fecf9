"""Process-wide configuration and logging setup.

Environment variables (a .env file in the working directory is loaded
automatically):
    CONNECTED_PAPERS_MODE: 'dev' enables debug logging (default: prod)
    CONNECTED_PAPERS_LOG_DIR: Directory for log files (default: logs)
    CONNECTED_PAPERS_LOG_LEVEL: Root log level (default: INFO, DEBUG in dev)

Client settings (API key, base URL, timeouts) live in
core.connected_papers.config.
"""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

from core.logging import ModuleDispatchHandler, ThirdPartyHandler, start_run

load_dotenv()

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def is_dev_mode() -> bool:
    """Check if running in development mode.

    Returns:
        True if CONNECTED_PAPERS_MODE is set to 'dev', False otherwise.
    """
    return os.getenv("CONNECTED_PAPERS_MODE", "prod").lower() == "dev"


def get_log_dir() -> Path:
    """Directory where log files are written."""
    return Path(os.getenv("CONNECTED_PAPERS_LOG_DIR", "logs"))


def configure_logging(run_name: str | None = None) -> None:
    """Install file logging on the root logger.

    Idempotent: handlers installed by a previous call are replaced, so
    calling this again (e.g. with a new log directory) is safe.

    Args:
        run_name: If given, starts a logging run so each log file rotates
            on its first write.
    """
    log_dir = get_log_dir()
    log_dir.mkdir(parents=True, exist_ok=True)

    default_level = "DEBUG" if is_dev_mode() else "INFO"
    level = os.getenv("CONNECTED_PAPERS_LOG_LEVEL", default_level).upper()

    root = logging.getLogger()
    for handler in list(root.handlers):
        if isinstance(handler, (ModuleDispatchHandler, ThirdPartyHandler)):
            root.removeHandler(handler)
            handler.close()

    formatter = logging.Formatter(LOG_FORMAT)
    for handler in (ModuleDispatchHandler(log_dir), ThirdPartyHandler(log_dir)):
        handler.setFormatter(formatter)
        root.addHandler(handler)
    root.setLevel(level)

    if run_name:
        start_run(run_name)
